"""
Numerical helpers for the precision metric.

The scoring loop is compiled with numba. It visits classes and attributes in
the same order as a plain nested loop would, so the floating point sums are
reproducible regardless of how the input was gathered.
"""

from collections.abc import Iterable

import numba
import numpy as np

from generalization_precision.equivalence_classes import EquivalenceClass


def gather_equivalence_classes(
    classes: Iterable[EquivalenceClass], attribute_count: int
) -> tuple[np.ndarray, np.ndarray]:
    """
    Copy applied levels and suppression flags into numpy arrays.

    Parameters
    ----------
    classes : Iterable[EquivalenceClass]
        The classes to score, already filtered to visible ones. Consumed once.
    attribute_count : int
        Expected length of every applied levels vector.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        An int64 array of shape (n_classes, attribute_count) holding the applied
        levels and a bool array of shape (n_classes,) holding the suppression flags.
    """
    levels_rows = []
    suppressed = []
    for equivalence_class in classes:
        assert len(equivalence_class.applied_levels) == attribute_count, (
            f"class has {len(equivalence_class.applied_levels)} applied levels, "
            f"expected {attribute_count}"
        )
        levels_rows.append(equivalence_class.applied_levels)
        suppressed.append(equivalence_class.is_suppressed)
    levels = np.array(levels_rows, dtype=np.int64).reshape(len(levels_rows), attribute_count)
    return levels, np.array(suppressed, dtype=np.bool_)


@numba.jit(nopython=True)
def precision_sums(
    levels: np.ndarray, heights: np.ndarray, suppressed: np.ndarray
) -> tuple[float, float]:
    """
    Sum per-attribute generalization fractions over all classes.

    For every class and attribute the fraction is ``level / height``, or 0 when
    the height is not positive. The lower bound always adds the fraction; the
    total adds it for unsuppressed classes and adds 1 for suppressed ones.
    Contributions are not weighted by record count.

    Parameters
    ----------
    levels : np.ndarray
        int64 array of shape (n_classes, n_attributes).
    heights : np.ndarray
        int64 array of shape (n_attributes,).
    suppressed : np.ndarray
        bool array of shape (n_classes,).

    Returns
    -------
    Tuple[float, float]
        The unnormalized total and the lower bound.

    Examples
    --------
    >>> precision_sums(np.array([[1, 1]]), np.array([2, 2]), np.array([False]))
    (1.0, 1.0)
    >>> precision_sums(np.array([[1, 1]]), np.array([2, 2]), np.array([True]))
    (2.0, 1.0)
    """
    total = 0.0
    lower_bound = 0.0
    for row in range(levels.shape[0]):
        for i in range(heights.shape[0]):
            # heights of -1 come from hierarchies without levels
            partial = 0.0 if heights[i] <= 0 else levels[row, i] / heights[i]
            total += 1.0 if suppressed[row] else partial
            lower_bound += partial
    return total, lower_bound
