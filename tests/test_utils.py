"""
Tests for utils
"""

import numpy as np
import pytest

from generalization_precision.constants import EPSILON
from generalization_precision.equivalence_classes import EquivalenceClass
from generalization_precision.utils import gather_equivalence_classes, precision_sums


class TestGatherEquivalenceClasses:
    """
    Tests for gather_equivalence_classes.
    """

    def test_gather(self):
        levels, suppressed = gather_equivalence_classes(
            [EquivalenceClass((0, 2), 1), EquivalenceClass((1, 1), 4, is_suppressed=True)], 2
        )
        np.testing.assert_array_equal(levels, np.array([[0, 2], [1, 1]]))
        np.testing.assert_array_equal(suppressed, np.array([False, True]))
        assert levels.dtype == np.int64
        assert suppressed.dtype == np.bool_

    def test_gather_empty(self):
        levels, suppressed = gather_equivalence_classes([], 3)
        assert levels.shape == (0, 3)
        assert suppressed.shape == (0,)

    def test_gather_wrong_length(self):
        with pytest.raises(AssertionError):
            gather_equivalence_classes([EquivalenceClass((0, 2, 1), 1)], 2)


class TestPrecisionSums:
    """
    Tests for precision_sums.
    """

    def test_unsuppressed(self):
        total, lower_bound = precision_sums(
            np.array([[1, 1]], dtype=np.int64),
            np.array([2, 2], dtype=np.int64),
            np.array([False]),
        )
        np.testing.assert_allclose((total, lower_bound), (1.0, 1.0), atol=EPSILON)

    def test_suppressed(self):
        total, lower_bound = precision_sums(
            np.array([[1, 1]], dtype=np.int64),
            np.array([2, 2], dtype=np.int64),
            np.array([True]),
        )
        np.testing.assert_allclose((total, lower_bound), (2.0, 1.0), atol=EPSILON)

    def test_non_positive_heights(self):
        """Attributes with height 0 or -1 contribute nothing unless suppressed."""
        total, lower_bound = precision_sums(
            np.array([[3, 5, 1], [7, 9, 1]], dtype=np.int64),
            np.array([0, -1, 4], dtype=np.int64),
            np.array([False, False]),
        )
        np.testing.assert_allclose((total, lower_bound), (0.5, 0.5), atol=EPSILON)

    def test_suppressed_charges_every_attribute(self):
        """Suppressed classes add 1 per attribute, even where the height is 0."""
        total, lower_bound = precision_sums(
            np.array([[0, 0]], dtype=np.int64),
            np.array([0, 3], dtype=np.int64),
            np.array([True]),
        )
        np.testing.assert_allclose((total, lower_bound), (2.0, 0.0), atol=EPSILON)

    def test_empty(self):
        total, lower_bound = precision_sums(
            np.zeros((0, 2), dtype=np.int64),
            np.array([2, 2], dtype=np.int64),
            np.zeros(0, dtype=np.bool_),
        )
        assert (total, lower_bound) == (0.0, 0.0)
