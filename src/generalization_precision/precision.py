"""
Non-monotonic precision information loss metric.

This module implements the weighted precision metric of [Sweeney2002]_ in its
non-monotonic form, as used to rank candidate generalization schemes during a
search over the generalization lattice. For every non-empty equivalence class
and every attribute, the metric charges the fraction of the attribute's
hierarchy that was climbed, ``level / height``. Suppressed classes are charged
the full penalty of 1 per attribute instead. The sum is normalized by the
number of cells (records x attributes) of the input dataset.

The metric has two lifecycle phases:

1. Initialization derives an immutable PrecisionState from the hierarchies
   and the dataset shape: the maximum height of every attribute and the
   total cell count.
2. Evaluation scores a partition against that state. It only reads the state
   and the classes passed in, so it is safe to call from many threads once
   initialization has completed.

Notes
-----
The lower bound returned alongside the loss is the same sum computed as if no
class were suppressed, and it is *not* divided by the cell count. The loss is
therefore in [0, 1] while the lower bound is on the unnormalized scale. This
asymmetry is kept as is: callers compare lower bounds against each other for
pruning, not against loss values. Compare a lower bound with
``loss.value * state.total_cells`` if the two must be put on the same scale.

References
----------
.. [Sweeney2002] Sweeney, L. (2002). Achieving k-anonymity privacy protection using
       generalization and suppression. International Journal of Uncertainty,
       Fuzziness and Knowledge-Based Systems, 10(5), 571-588.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

import numpy as np

from generalization_precision.constants import METRIC_NAME
from generalization_precision.equivalence_classes import (
    DatasetShape,
    EquivalenceClasses,
    iterate_visible,
)
from generalization_precision.hierarchies import Hierarchy, compute_heights
from generalization_precision.information_loss import InformationLoss
from generalization_precision.utils import gather_equivalence_classes, precision_sums


class MetricNotInitializedError(RuntimeError):
    """Raised when a metric is evaluated before it was initialized."""


@dataclass(frozen=True)
class PrecisionState:
    """
    Immutable state derived once per anonymization run.

    Attributes
    ----------
    heights : Tuple[int, ...]
        Maximum generalization level of every attribute. -1 marks an attribute
        whose hierarchy has no levels; like 0, it never contributes any loss.
    total_cells : float
        Number of records times number of attributes of the input dataset.
    """

    heights: tuple[int, ...]
    total_cells: float

    @property
    def attribute_count(self) -> int:
        return len(self.heights)


def initialize_state(
    hierarchies: Sequence[Hierarchy],
    record_count: int,
    attribute_count: Optional[int] = None,
) -> PrecisionState:
    """
    Derive the heights and cell count used by every later evaluation.

    Parameters
    ----------
    hierarchies : Sequence[Hierarchy]
        One generalization hierarchy per attribute, in attribute order.
    record_count : int
        Number of records of the input dataset.
    attribute_count : int, optional
        Number of attributes of the input dataset; defaults to len(hierarchies).

    Returns
    -------
    PrecisionState

    Raises
    ------
    ValueError
        If a count is negative or attribute_count doesn't match the number of
        hierarchies.
    """
    if attribute_count is None:
        attribute_count = len(hierarchies)
    if attribute_count != len(hierarchies):
        raise ValueError(
            f"attribute_count ({attribute_count}) != number of hierarchies ({len(hierarchies)})"
        )
    shape = DatasetShape(record_count, attribute_count)
    return PrecisionState(heights=compute_heights(hierarchies), total_cells=shape.total_cells)


class NonMonotonicPrecisionMetric:
    """
    Precision metric that charges suppressed classes the maximum loss.

    The metric is neither monotonic (generalizing further can lower the loss
    when it un-suppresses classes) nor independent (the loss of a scheme cannot
    be derived from the losses of its parts), which tells a search which
    pruning strategies are sound.

    Parameters
    ----------
    logger : logging.Logger
        Logger for recording initialization and evaluation details.

    Examples
    --------
    >>> import logging
    >>> from generalization_precision.equivalence_classes import EquivalenceClass
    >>> from generalization_precision.gtrees import make_flat_default_gtree
    >>> metric = NonMonotonicPrecisionMetric(logging.getLogger(__name__))
    >>> state = metric.initialize([make_flat_default_gtree({"a", "b"})], record_count=2)
    >>> metric.evaluate([EquivalenceClass((1,), 2)])
    InformationLoss(value=0.5, lower_bound=1.0)
    """

    is_monotonic: bool = False
    is_independent: bool = False

    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger
        self._state: Optional[PrecisionState] = None

    def debug_logging_enabled(self) -> bool:
        return self.logger.isEnabledFor(logging.DEBUG)

    @property
    def name(self) -> str:
        return METRIC_NAME

    @property
    def state(self) -> Optional[PrecisionState]:
        """The state derived by the last initialization, or None."""
        return self._state

    def initialize(
        self,
        hierarchies: Sequence[Hierarchy],
        record_count: int,
        attribute_count: Optional[int] = None,
    ) -> PrecisionState:
        """
        Initialize the metric for one anonymization run.

        Must complete before any evaluation and must not run concurrently with
        evaluations. Calling it again replaces the state; evaluations already
        running keep the state they started with.

        Parameters
        ----------
        hierarchies : Sequence[Hierarchy]
            One generalization hierarchy per attribute, in attribute order.
        record_count : int
            Number of records of the input dataset.
        attribute_count : int, optional
            Number of attributes of the input dataset; defaults to len(hierarchies).

        Returns
        -------
        PrecisionState
            The new state.
        """
        state = initialize_state(hierarchies, record_count, attribute_count)
        for idx, height in enumerate(state.heights):
            if height < 0:
                self.logger.warning(
                    "hierarchy %d has no generalization levels, its attribute will never be lossy",
                    idx,
                )
        if state.total_cells == 0:
            self.logger.warning(
                "dataset has no cells, only partitions without non-empty classes can be evaluated"
            )
        self.logger.debug("heights = %s, total_cells = %s", state.heights, state.total_cells)
        self._state = state
        return state

    def initialize_from_shape(
        self, hierarchies: Sequence[Hierarchy], shape: DatasetShape
    ) -> PrecisionState:
        return self.initialize(hierarchies, shape.record_count, shape.attribute_count)

    def max_information_loss(self) -> InformationLoss:
        """Loss when every cell is fully generalized or suppressed."""
        return InformationLoss(1.0)

    def min_information_loss(self) -> InformationLoss:
        """Loss when nothing is generalized."""
        return InformationLoss(0.0)

    def evaluate(self, equivalence_classes: EquivalenceClasses) -> InformationLoss:
        """
        Score a candidate partition.

        Parameters
        ----------
        equivalence_classes : EquivalenceClass, Iterable[EquivalenceClass] or None
            The partition: either the head of a linked chain of classes or any
            iterable of classes. Classes with a record count of 0 are ignored.
            The input is read once and no reference to it is kept.

        Returns
        -------
        InformationLoss
            ``value`` is the sum of per-class, per-attribute losses divided by the
            number of cells; ``lower_bound`` is the same sum without suppression
            penalties and without normalization.

        Raises
        ------
        MetricNotInitializedError
            If initialize() has not been called.
        ValueError
            If the dataset has no cells but the partition has a non-empty class.
        """
        state = self._state
        if state is None:
            raise MetricNotInitializedError(
                f"{self.name} metric must be initialized before evaluate"
            )
        levels, suppressed = gather_equivalence_classes(
            iterate_visible(equivalence_classes), state.attribute_count
        )
        total, lower_bound = precision_sums(
            levels, np.array(state.heights, dtype=np.int64), suppressed
        )
        if self.debug_logging_enabled():
            self.logger.debug(
                "evaluated %d classes (%d suppressed): total = %s, lower_bound = %s",
                len(suppressed),
                int(suppressed.sum()),
                total,
                lower_bound,
            )
        if state.total_cells == 0:
            if len(suppressed) > 0 and state.attribute_count > 0:
                raise ValueError(
                    f"cannot normalize the loss of {len(suppressed)} non-empty classes: "
                    "dataset has no cells"
                )
            return InformationLoss(0.0, float(lower_bound))
        total /= state.total_cells
        return InformationLoss(float(total), float(lower_bound))

    def __str__(self) -> str:
        return self.name
