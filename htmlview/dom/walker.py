"""
Tree traversal for the DOM facade.

Walks are iterative pre-order, depth first, over ``child_nodes`` (every node
kind). A visitor may return ``WalkAction.STOP`` to end the walk early; any
other return value continues.

The tree must not change while a walk is in progress.
"""

from enum import Enum
from typing import Callable, Iterator, List, Optional

from .tree_source import ELEMENT


class WalkAction(Enum):
    """Values a visitor can return to steer a walk."""
    CONTINUE = "continue"
    STOP = "stop"


class TreeWalker:
    """
    Pre-order depth-first traversal over facade nodes.
    """

    def iter_nodes(self, root: 'Node') -> Iterator['Node']:
        """
        Yield the root and then every descendant in document order.

        Args:
            root: The node to start from

        Yields:
            Nodes in pre-order
        """
        stack = [root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.child_nodes))

    def walk(self, root: 'Node', visitor: Callable[['Node'], Optional[WalkAction]]) -> bool:
        """
        Visit the root and its descendants in pre-order.

        Args:
            root: The node to start from
            visitor: Called once per node

        Returns:
            True if the visitor stopped the walk, False if it ran to completion
        """
        for node in self.iter_nodes(root):
            if visitor(node) is WalkAction.STOP:
                return True
        return False

    def collect(self, root: 'Node', predicate: Callable[['Node'], bool],
                first_only: bool = False) -> List['Node']:
        """
        Collect nodes matching a predicate in document order.

        Args:
            root: The node to start from
            predicate: Selects the nodes to keep
            first_only: Stop after the first match

        Returns:
            List of matching nodes
        """
        result = []

        def visit(node):
            if predicate(node):
                result.append(node)
                if first_only:
                    return WalkAction.STOP
            return WalkAction.CONTINUE

        self.walk(root, visit)
        return result

    def find_parent(self, root: 'Node', target: 'Node') -> Optional['Node']:
        """
        Find the element under root whose children include target.

        Only element nodes are considered as parents, so a child of the
        document node has no parent here.
        """
        found = []

        def visit(node):
            if node.node_type == ELEMENT and target in node.children:
                found.append(node)
                return WalkAction.STOP
            return WalkAction.CONTINUE

        self.walk(root, visit)
        return found[0] if found else None
