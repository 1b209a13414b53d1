# viewextract/locator.py
"""
ViewLocator - finds the native view that sits behind a declarative node.

The search is a pre-order, depth-first walk of a native tree:

- a node is visited before any of its children, so an ancestor that
  qualifies wins over a descendant that also qualifies;
- children are visited in their natural order, so the earlier sibling
  subtree wins;
- the walk stops at the first node that has the requested type *and* whose
  window-space frame intersects the target region.

The walk only reads the tree. It keeps nothing once it returns, and a miss
is just ``None``.
"""
import logging
from typing import Any, Callable, Iterator, Optional

from .geometry import Rect
from .native import NativeTree, TypeSpec, ViewTree

logger = logging.getLogger(__name__)


class ViewLocator:
    """
    Runs type-and-geometry searches over a native tree.

    :param tree: Adapter used to read children, types and frames. Defaults
        to ``ViewTree`` for the in-memory ``NativeView`` hierarchy.
    """

    def __init__(self, tree: Optional[NativeTree] = None):
        self.tree: NativeTree = tree if tree is not None else ViewTree()

    def _preorder(self, root: Any) -> Iterator[Any]:
        # Explicit stack; children are pushed reversed so the first child pops first.
        stack = [root]
        while stack:
            node = stack.pop()
            yield node
            children = list(self.tree.children(node))
            stack.extend(reversed(children))

    def first_match(self, root: Any, target_type: TypeSpec,
                    predicate: Callable[[Any], bool]) -> Optional[Any]:
        """
        Returns the first node in pre-order that is a ``target_type`` and
        satisfies ``predicate``. The predicate only sees typed nodes.
        """
        for node in self._preorder(root):
            if self.tree.is_instance(node, target_type) and predicate(node):
                return node
        return None

    def iter_matches(self, root: Any, target_type: TypeSpec, target_region: Rect) -> Iterator[Any]:
        """Yields every qualifying node, in the same order ``locate`` considers them."""
        for node in self._preorder(root):
            if self.tree.is_instance(node, target_type) and self.tree.window_frame(node).intersects(target_region):
                yield node

    def locate(self, root: Any, target_type: TypeSpec, target_region: Rect) -> Optional[Any]:
        """
        Finds the first ``target_type`` node under ``root`` whose window-space
        frame intersects ``target_region``.

        :param root: An attached native node, usually the window.
        :param target_type: Native class, or a registered type tag.
        :param target_region: Rectangle in window coordinates.
        :return: The matching node, or None.
        """
        match = self.first_match(
            root, target_type,
            lambda node: self.tree.window_frame(node).intersects(target_region),
        )
        if match is None:
            logger.debug("No %s intersecting %s", getattr(target_type, '__name__', target_type), target_region)
        else:
            logger.debug("Located %r for region %s", match, target_region)
        return match


_default_locator = ViewLocator()


def locate(root: Any, target_type: TypeSpec, target_region: Rect,
           tree: Optional[NativeTree] = None) -> Optional[Any]:
    """Module-level shortcut for ``ViewLocator(tree).locate(...)``."""
    locator = _default_locator if tree is None else ViewLocator(tree)
    return locator.locate(root, target_type, target_region)
