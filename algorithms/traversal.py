"""
traversal.py — Binary Tree Traversal
=====================================
Recursive preorder / inorder / postorder walk.  One node is highlighted
at a time; each visit logs and pauses.  The tree is never modified.
"""

from typing import Generator, Iterator, List, Optional

from structures.errors import InvalidInput
from structures.tree import BinarySearchTree, TreeNode
from algorithms.step import Pause, Step, StepBuilder


MODES = ("preorder", "inorder", "postorder")

PSEUDOCODE: List[str] = [
    "def traverse(node):",                  # 0
    "    if node is None: return",          # 1
    "    visit(node)        # preorder",    # 2
    "    traverse(node.left)",              # 3
    "    visit(node)        # inorder",     # 4
    "    traverse(node.right)",             # 5
    "    visit(node)        # postorder",   # 6
]

_VISIT_LINE = {"preorder": 2, "inorder": 4, "postorder": 6}


def traverse(tree: BinarySearchTree, mode: str = "inorder") -> Generator[Step, None, None]:
    if not isinstance(tree, BinarySearchTree):
        raise InvalidInput(f"Expected a BinarySearchTree, got {type(tree).__name__}")
    if mode not in MODES:
        raise InvalidInput(f"Unknown traversal mode '{mode}'")
    if tree.is_empty:
        raise InvalidInput("Tree is empty")
    return _traverse(tree.root, mode)


def _traverse(root: TreeNode, mode: str) -> Generator[Step, None, None]:
    sb = StepBuilder()
    yield sb.build(log=f"Starting {mode.upper()} traversal...")

    yield from _walk(root, mode, sb)

    sb.clear_highlight()
    sb.pseudocode_line = 0
    yield sb.build(log="Traversal complete", is_final=True)


def _walk(node: Optional[TreeNode], mode: str, sb: StepBuilder) -> Iterator[Step]:
    if node is None:
        return
    if mode == "preorder":
        yield _visit(node, mode, sb)
    yield from _walk(node.left, mode, sb)
    if mode == "inorder":
        yield _visit(node, mode, sb)
    yield from _walk(node.right, mode, sb)
    if mode == "postorder":
        yield _visit(node, mode, sb)


def _visit(node: TreeNode, mode: str, sb: StepBuilder) -> Step:
    sb.highlight(node.value)
    sb.pseudocode_line = _VISIT_LINE[mode]
    return sb.build(log=f"VISIT: Node {node.value}", pause=Pause.PRIMARY)
