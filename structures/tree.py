"""
tree.py — Binary Search Tree
=============================
Plain recursive BST of integer values.

Invariant: for every node, everything in `left` is smaller and everything
in `right` is larger.  Inserting a value that is already present is a
silent no-op.

Layout is NOT stored on the nodes.  `layout()` is a pure function of the
tree's shape, recomputed whenever the renderer asks for it.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple


@dataclass
class TreeNode:
    value: int
    left:  Optional["TreeNode"] = None
    right: Optional["TreeNode"] = None

    def to_dict(self) -> dict:
        return {
            "value": self.value,
            "left":  self.left.to_dict() if self.left else None,
            "right": self.right.to_dict() if self.right else None,
        }


class BinarySearchTree:
    """
    Attributes:
        root : Top node, or None for an empty tree.
    """

    def __init__(self):
        self.root: Optional[TreeNode] = None
        self._size: int = 0

    @classmethod
    def from_values(cls, values: Iterable[int]) -> "BinarySearchTree":
        tree = cls()
        for v in values:
            tree.insert(v)
        return tree

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def insert(self, value: int) -> bool:
        """Insert `value`.  Returns False (and changes nothing) on a duplicate."""
        if self.root is None:
            self.root = TreeNode(value)
            self._size = 1
            return True

        node = self.root
        while True:
            if value == node.value:
                return False
            if value < node.value:
                if node.left is None:
                    node.left = TreeNode(value)
                    break
                node = node.left
            else:
                if node.right is None:
                    node.right = TreeNode(value)
                    break
                node = node.right

        self._size += 1
        return True

    def clear(self) -> None:
        self.root = None
        self._size = 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def contains(self, value: int) -> bool:
        node = self.root
        while node is not None:
            if value == node.value:
                return True
            node = node.left if value < node.value else node.right
        return False

    def height(self) -> int:
        def _h(node: Optional[TreeNode]) -> int:
            if node is None:
                return 0
            return 1 + max(_h(node.left), _h(node.right))
        return _h(self.root)

    def values(self) -> List[int]:
        """All values in sorted (inorder) order."""
        return list(_inorder(self.root))

    @property
    def is_empty(self) -> bool:
        return self.root is None

    def to_dict(self) -> Optional[dict]:
        return self.root.to_dict() if self.root else None

    def __len__(self) -> int:
        return self._size

    def __contains__(self, value: int) -> bool:
        return self.contains(value)


def _inorder(node: Optional[TreeNode]) -> Iterator[int]:
    if node is None:
        return
    yield from _inorder(node.left)
    yield node.value
    yield from _inorder(node.right)


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
def layout(
    root: Optional[TreeNode],
    x: float = 400,
    y: float = 50,
    offset: float = 100,
    level_gap: float = 80,
) -> Dict[int, Tuple[float, float]]:
    """
    Canvas position for every node, keyed by value (values are unique in
    a BST).  Each level down moves `level_gap` lower and halves the
    horizontal offset between a parent and its children.
    """
    positions: Dict[int, Tuple[float, float]] = {}

    def _place(node: Optional[TreeNode], px: float, py: float, dx: float) -> None:
        if node is None:
            return
        positions[node.value] = (px, py)
        _place(node.left,  px - dx, py + level_gap, dx / 2)
        _place(node.right, px + dx, py + level_gap, dx / 2)

    _place(root, x, y, offset)
    return positions
