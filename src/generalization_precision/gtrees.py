"""
Generalization trees used as hierarchy providers.

A generalization tree stores the most specific values of an attribute as
leaves and increasingly general values closer to the root. For the precision
metric the only property that matters is how many generalization levels the
tree offers, but the tree can also map a leaf value to its generalized value
at a given level, which is how callers derive the levels they tag their
equivalence classes with.
"""

from typing import Any, Optional

from treelib import (
    Node,  # type: ignore[reportPrivateImportUsage]  # Node is publicly exported from treelib
    Tree,  # type: ignore[reportPrivateImportUsage]  # Tree is publicly exported from treelib
)

from generalization_precision.constants import GTREE_ROOT_TAG


class GTree(Tree):
    """
    Generalization tree for hierarchical data representation.

    This class extends treelib.Tree so that node tags hold attribute values.
    Level 0 is the leaf level and the root is the highest level, so a tree of
    depth d offers d + 1 generalization levels.

    Attributes
    ----------
    value_to_leaf_node_nid : dict
        Maps leaf values to leaf node IDs, built lazily on first lookup
    """

    def __init__(
        self,
        tree: Optional["GTree"] = None,
        identifier: Optional[str] = None,
        deep: bool = True,
    ) -> None:
        """
        Initialize a generalization tree.

        Parameters
        ----------
        tree : GTree, optional
            An existing GTree to copy, by default None
        identifier : str, optional
            A string identifier for the tree, by default None
        deep : bool, optional
            Whether to perform a deep copy when copying from an existing tree, by default True
        """
        super().__init__(tree=tree, deep=deep, identifier=identifier)
        self.value_to_leaf_node_nid: dict[Any, str] = {}
        if tree is not None:
            self.value_to_leaf_node_nid = dict(tree.value_to_leaf_node_nid)

    def pprint(self) -> str:
        """
        Return a pretty (multi-line) string representation of the generalization tree.

        Returns
        -------
        str
            String representation of the tree structure
        """
        result = self.show(stdout=False)
        return str(result) if result is not None else ""

    def create_node(  # type: ignore[override]
        self,
        value: Any,
        parent: Optional[Node] = None,
        identifier: Optional[str] = None,
    ) -> Node:  # pylint: disable=arguments-differ,arguments-renamed
        """
        Create a new node in the generalization tree.

        Parameters
        ----------
        value : Any
            Value of the node. Must be hashable since it's used as a dictionary key.
        parent : Node, optional
            Parent node to which this node will be attached, by default None
        identifier : str, optional
            Unique identifier for the node, by default None

        Returns
        -------
        Node
            The newly created Node object
        """
        self.value_to_leaf_node_nid = {}
        return super().create_node(tag=value, identifier=identifier, parent=parent)

    def remove_node(self, identifier: str) -> None:  # type: ignore[override]
        self.value_to_leaf_node_nid = {}
        super().remove_node(identifier)

    def update_leaf_nodes_if(self) -> bool:
        """
        Build the leaf value lookup if it doesn't already exist.

        Returns
        -------
        bool
            True if the mapping was updated, False if it was already populated
            or the tree has no leaves
        """
        if not self.value_to_leaf_node_nid:
            for leaf in self.leaves():
                self.value_to_leaf_node_nid[self.get_value(leaf)] = leaf.identifier
            return bool(self.value_to_leaf_node_nid)
        return False

    def get_value(self, node: Node) -> Any:
        return node.tag

    def num_levels(self) -> int:
        """
        Number of generalization levels offered by this tree.

        Returns
        -------
        int
            depth + 1 for a non-empty tree, 0 for an empty tree
        """
        if self.root is None:
            return 0
        return self.depth() + 1

    def generalize(self, value: Any, level: int) -> Any:
        """
        Map a leaf value to its generalized value at the given level.

        Parameters
        ----------
        value : Any
            A leaf value of the tree
        level : int
            Number of steps to walk towards the root; walking stops at the root

        Returns
        -------
        Any
            The value of the ancestor reached

        Raises
        ------
        KeyError
            If value is not a leaf of the tree
        ValueError
            If level is negative
        """
        if level < 0:
            raise ValueError(f"level must be non-negative, got {level}")
        self.update_leaf_nodes_if()
        node = self.get_node(self.value_to_leaf_node_nid[value])
        assert node is not None
        for _ in range(level):
            parent = self.parent(node.identifier)
            if parent is None:
                break
            node = parent
        return self.get_value(node)

    def __eq__(self, other: Any) -> bool:
        """
        Two gtrees are equal if they have the same node values in the same hierarchy.
        """
        if not isinstance(other, GTree):
            return NotImplemented
        if self.root is None and other.root is None:
            return True
        if (self.root is None) != (other.root is None):
            return False
        self_root_node = self.get_node(self.root)
        other_root_node = other.get_node(other.root)
        assert self_root_node is not None and other_root_node is not None
        return self.__eq__recursive(other, self_root_node, other_root_node)

    def __eq__recursive(self, other: "GTree", self_node: Node, other_node: Node) -> bool:
        if self.get_value(self_node) != other.get_value(other_node):
            return False
        self_children = list(self.children(self_node.identifier))
        other_children = list(other.children(other_node.identifier))
        if len(self_children) != len(other_children):
            return False
        while self_children:
            self_child = self_children.pop()
            match = None
            for other_child in other_children:
                if self.__eq__recursive(other, self_child, other_child):
                    match = other_child
                    break
            if match is None:
                return False
            other_children.remove(match)
        return True


class ReadOnlyGTree(GTree):
    """
    A read-only version of the generalization tree.

    The tree is unlocked while copying from the source tree, then locked.
    The leaf lookup is built before locking so lookups never write.
    """

    def __init__(self, tree: Optional["GTree"] = None) -> None:
        self.locked = False
        super().__init__(tree=tree)
        self.update_leaf_nodes_if()
        self.locked = True

    def create_node(  # type: ignore[override]
        self,
        value: Any,
        parent: Optional[Node] = None,
        identifier: Optional[str] = None,
    ) -> Node:  # pylint: disable=arguments-differ
        assert not self.locked, "GTree is read-only"
        return super().create_node(value, parent=parent, identifier=identifier)

    def remove_node(self, identifier: str) -> None:  # type: ignore[override]
        assert not self.locked, "GTree is read-only"
        super().remove_node(identifier)

    def update_leaf_nodes_if(self) -> bool:
        updated = super().update_leaf_nodes_if()
        assert not updated or not self.locked, "GTree is read-only"
        return updated


def make_flat_default_gtree(uniq_values: set[Any]) -> GTree:
    """
    Create a two-level generalization tree.

    The root is GTREE_ROOT_TAG and every value is a direct child of it, so the
    resulting tree offers exactly two levels: the values themselves and full
    generalization.

    Parameters
    ----------
    uniq_values : Set[Any]
        Set of unique values to include as leaves in the tree

    Returns
    -------
    GTree
        A new generalization tree with a flat structure
    """
    gtree = GTree()
    root = gtree.create_node(GTREE_ROOT_TAG)
    for value in uniq_values:
        gtree.create_node(value, parent=root)
    gtree.update_leaf_nodes_if()
    return gtree
