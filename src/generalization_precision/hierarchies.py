"""
Generalization hierarchy providers.

The precision metric only needs one fact from each attribute's hierarchy: how
many distinct generalization levels it offers. Anything exposing
``num_levels()`` qualifies, including GTree from this package and
LevelTableHierarchy below, which holds a hierarchy in its tabular form (one
row per leaf value, one column per level).
"""

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

import pandas as pd
from first import first  # type: ignore[import-untyped]


@runtime_checkable
class Hierarchy(Protocol):
    """Anything that can report the number of generalization levels of an attribute."""

    def num_levels(self) -> int: ...


class LevelTableHierarchy:
    """
    Generalization hierarchy stored as a table of levels.

    Each row lists one leaf value followed by its generalizations, ending with
    the most general value: ``[leaf, level 1, ..., top]``. All rows are
    expected to have the same length.

    Parameters
    ----------
    rows : Sequence[Sequence[Any]]
        The hierarchy table; an empty table describes an attribute without
        any generalization levels.
    """

    def __init__(self, rows: Sequence[Sequence[Any]]) -> None:
        self.rows: tuple[tuple[Any, ...], ...] = tuple(tuple(row) for row in rows)
        widths = {len(row) for row in self.rows}
        if len(widths) > 1:
            raise ValueError(f"All hierarchy rows must have the same length, got {sorted(widths)}")
        self._leaf_to_row: dict[Any, tuple[Any, ...]] = {row[0]: row for row in self.rows if row}

    @classmethod
    def from_dataframe(cls, hierarchy_df: pd.DataFrame) -> "LevelTableHierarchy":
        """
        Build a hierarchy from a DataFrame whose columns are the levels in order.

        Parameters
        ----------
        hierarchy_df : pd.DataFrame
            Column 0 holds the leaf values, the last column the most general ones.

        Returns
        -------
        LevelTableHierarchy
        """
        return cls(list(hierarchy_df.itertuples(index=False, name=None)))

    def num_levels(self) -> int:
        return len(first(self.rows, default=()))

    def generalize(self, value: Any, level: int) -> Any:
        """
        Return the value at ``level`` for the row whose leaf is ``value``.

        Raises
        ------
        KeyError
            If value is not a leaf of the hierarchy
        IndexError
            If level is outside [0, num_levels() - 1]
        """
        if level < 0:
            raise IndexError(f"level must be non-negative, got {level}")
        return self._leaf_to_row[value][level]

    def __len__(self) -> int:
        return len(self.rows)

    def __repr__(self) -> str:
        return f"LevelTableHierarchy(leaves={len(self.rows)}, levels={self.num_levels()})"


def compute_heights(hierarchies: Sequence[Hierarchy]) -> tuple[int, ...]:
    """
    Derive the maximum generalization height of every attribute.

    The height is the index of the top level, i.e. ``num_levels() - 1``. A
    hierarchy reporting zero levels therefore yields ``-1``; the metric treats
    any height ``<= 0`` as an attribute that cannot be lossy.

    Parameters
    ----------
    hierarchies : Sequence[Hierarchy]
        One hierarchy per attribute, in attribute order.

    Returns
    -------
    Tuple[int, ...]
        The heights, in attribute order.
    """
    return tuple(int(hierarchy.num_levels()) - 1 for hierarchy in hierarchies)
