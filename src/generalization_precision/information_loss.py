"""
Information loss value object returned by the precision metric.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class InformationLoss:
    """
    Scored information loss of a candidate generalization scheme.

    Ordering (``<``, ``<=``, ``>``, ``>=`` and compare_to) considers ``value``
    only; how ties are broken is left to the caller. Equality compares both
    fields.

    Attributes
    ----------
    value : float
        The information loss of the candidate.
    lower_bound : float
        Loss the candidate would have if no suppression penalty applied. Note
        that the precision metric does not normalize this by the number of
        cells, so it is on a different scale than ``value``.
    """

    value: float
    lower_bound: float = 0.0

    def compare_to(self, other: "InformationLoss") -> int:
        """Return -1, 0 or 1 as this loss is lower than, equal to or higher than ``other``."""
        if self.value < other.value:
            return -1
        if self.value > other.value:
            return 1
        return 0

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, InformationLoss):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, InformationLoss):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, InformationLoss):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, InformationLoss):
            return NotImplemented
        return self.value >= other.value

    def max(self, other: "InformationLoss") -> "InformationLoss":
        """Element-wise maximum of value and lower bound."""
        return InformationLoss(
            max(self.value, other.value), max(self.lower_bound, other.lower_bound)
        )

    def min(self, other: "InformationLoss") -> "InformationLoss":
        """Element-wise minimum of value and lower bound."""
        return InformationLoss(
            min(self.value, other.value), min(self.lower_bound, other.lower_bound)
        )

    def relative_to(self, min_loss: "InformationLoss", max_loss: "InformationLoss") -> float:
        """
        Rescale ``value`` into [0, 1] relative to the given bounds.

        Parameters
        ----------
        min_loss : InformationLoss
            Loss mapped to 0.0, typically the metric's min_information_loss().
        max_loss : InformationLoss
            Loss mapped to 1.0, typically the metric's max_information_loss().

        Returns
        -------
        float
            The relative loss, or 0.0 when both bounds have the same value.
        """
        span = max_loss.value - min_loss.value
        if span == 0:
            return 0.0
        return (self.value - min_loss.value) / span

    def __str__(self) -> str:
        return str(self.value)
