"""
Equivalence classes and dataset shape as seen by the precision metric.

An equivalence class is a group of records sharing the same generalized
values under the candidate generalization scheme being scored. The grouping
structure that builds them hands them over either as a singly-linked chain
(each class pointing at the next one in traversal order) or as any iterable.
The metric consumes both through iterate_visible, a lazy single-pass view that
skips empty classes.
"""

import dataclasses
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Optional, Union

import pandas as pd


@dataclass(frozen=True)
class EquivalenceClass:
    """
    One equivalence class of a candidate partition.

    Attributes
    ----------
    applied_levels : Tuple[int, ...]
        Generalization level applied to each attribute, in attribute order;
        0 means no generalization.
    record_count : int
        Number of original records folded into this class. Classes with a
        count of 0 are phantom groups and are ignored by the metric.
    is_suppressed : bool
        Whether the class is suppressed (an outlier) under the candidate scheme.
    next_ordered : EquivalenceClass, optional
        Next class in traversal order, or None for the last class.
    """

    applied_levels: tuple[int, ...]
    record_count: int
    is_suppressed: bool = False
    next_ordered: Optional["EquivalenceClass"] = field(default=None, repr=False, compare=False)


EquivalenceClasses = Union[EquivalenceClass, Iterable[EquivalenceClass], None]


def link_equivalence_classes(classes: Iterable[EquivalenceClass]) -> Optional[EquivalenceClass]:
    """
    Chain classes together through ``next_ordered``, preserving their order.

    The input classes are not modified; linked copies are created from the
    tail forwards.

    Parameters
    ----------
    classes : Iterable[EquivalenceClass]
        Classes in the desired traversal order.

    Returns
    -------
    EquivalenceClass or None
        Head of the chain, or None if there are no classes.
    """
    head: Optional[EquivalenceClass] = None
    for equivalence_class in reversed(list(classes)):
        head = dataclasses.replace(equivalence_class, next_ordered=head)
    return head


def iterate_ordered(head: Optional[EquivalenceClass]) -> Iterator[EquivalenceClass]:
    """Walk a linked chain of classes from its head."""
    node = head
    while node is not None:
        yield node
        node = node.next_ordered


def iterate_visible(classes: EquivalenceClasses) -> Iterator[EquivalenceClass]:
    """
    Yield the classes that hold at least one record, in traversal order.

    Parameters
    ----------
    classes : EquivalenceClass, Iterable[EquivalenceClass] or None
        Either the head of a linked chain or an iterable of classes. An
        iterable is consumed once; its elements' ``next_ordered`` links are
        not followed.
    """
    if classes is None:
        return
    ordered = iterate_ordered(classes) if isinstance(classes, EquivalenceClass) else classes
    for equivalence_class in ordered:
        if equivalence_class.record_count > 0:
            yield equivalence_class


@dataclass(frozen=True)
class DatasetShape:
    """
    Record and attribute counts of the input dataset.

    Attributes
    ----------
    record_count : int
        Number of records (rows) of the input dataset.
    attribute_count : int
        Number of attributes (quasi-identifier columns) being generalized.
    """

    record_count: int
    attribute_count: int

    def __post_init__(self) -> None:
        if self.record_count < 0:
            raise ValueError(f"record_count must be non-negative, got {self.record_count}")
        if self.attribute_count < 0:
            raise ValueError(f"attribute_count must be non-negative, got {self.attribute_count}")

    @property
    def total_cells(self) -> float:
        """Number of cells, records x attributes, as a float."""
        return float(self.record_count) * float(self.attribute_count)

    @classmethod
    def from_dataframe(
        cls, input_df: pd.DataFrame, qids: Optional[list[str]] = None
    ) -> "DatasetShape":
        """
        Take the shape of an input dataframe.

        Parameters
        ----------
        input_df : pd.DataFrame
            The dataset being anonymized.
        qids : List[str], optional
            Quasi-identifier columns being generalized; if None, all columns count.

        Returns
        -------
        DatasetShape
        """
        if qids is None:
            return cls(len(input_df), len(input_df.columns))
        missing = [qid for qid in qids if qid not in input_df.columns]
        if missing:
            raise ValueError(f"qids not present in input_df: {missing}")
        return cls(len(input_df), len(qids))
