"""
Tests for InformationLoss
"""

import numpy as np

from generalization_precision.constants import EPSILON
from generalization_precision.information_loss import InformationLoss


class TestInformationLoss:
    """
    Tests for the InformationLoss value object.
    """

    def test_ordering_uses_value_only(self):
        low = InformationLoss(0.1, lower_bound=5.0)
        high = InformationLoss(0.2, lower_bound=1.0)
        assert low < high
        assert low <= high
        assert high > low
        assert high >= low
        assert min([high, low]) is low
        assert sorted([high, low]) == [low, high]

    def test_compare_to(self):
        assert InformationLoss(0.1).compare_to(InformationLoss(0.2)) == -1
        assert InformationLoss(0.2).compare_to(InformationLoss(0.1)) == 1
        assert InformationLoss(0.2, 1.0).compare_to(InformationLoss(0.2, 3.0)) == 0

    def test_equality_uses_both_fields(self):
        assert InformationLoss(0.2, 1.0) == InformationLoss(0.2, 1.0)
        assert InformationLoss(0.2, 1.0) != InformationLoss(0.2, 3.0)
        # ties on value are neither less nor greater
        assert not InformationLoss(0.2, 1.0) < InformationLoss(0.2, 3.0)
        assert InformationLoss(0.2, 1.0) <= InformationLoss(0.2, 3.0)

    def test_hashable(self):
        assert len({InformationLoss(0.2, 1.0), InformationLoss(0.2, 1.0)}) == 1

    def test_max_min(self):
        a = InformationLoss(0.1, 4.0)
        b = InformationLoss(0.3, 2.0)
        assert a.max(b) == InformationLoss(0.3, 4.0)
        assert a.min(b) == InformationLoss(0.1, 2.0)

    def test_relative_to(self):
        actual = InformationLoss(0.25).relative_to(InformationLoss(0.0), InformationLoss(1.0))
        np.testing.assert_allclose(actual, 0.25, atol=EPSILON)
        actual = InformationLoss(0.5).relative_to(InformationLoss(0.25), InformationLoss(0.75))
        np.testing.assert_allclose(actual, 0.5, atol=EPSILON)

    def test_relative_to_empty_range(self):
        actual = InformationLoss(0.5).relative_to(InformationLoss(1.0), InformationLoss(1.0))
        assert actual == 0.0

    def test_str(self):
        assert str(InformationLoss(0.5, 2.0)) == "0.5"
