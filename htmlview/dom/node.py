"""
Node facade for the DOM.

A Node wraps one handle of a TreeSource and exposes DOM-like read access,
navigation, searching, selector queries and HTML serialization. Facades are
created fresh on every access but compare equal when they wrap the same
handle of the same tree.
"""

from enum import IntEnum
from typing import Any, Dict, List, Optional

from .attr import AttributeList
from .tree_source import TreeSource
from .walker import TreeWalker
from . import serializer


class NodeType(IntEnum):
    """Node kinds, aligned with the DOM node type constants."""
    ELEMENT_NODE = 1
    TEXT_NODE = 3
    COMMENT_NODE = 8
    DOCUMENT_NODE = 9
    DOCUMENT_TYPE_NODE = 10


class InvalidNodeError(ValueError):
    """Raised when a facade is requested for a missing or unknown handle."""


_walker = TreeWalker()


class Node:
    """
    Read-only facade over one node of a TreeSource.
    """

    def __init__(self, tree: TreeSource, handle: int, engine: Optional['SelectorEngine'] = None):
        """
        Initialize a new facade.

        Args:
            tree: The tree source owning the node
            handle: The node handle
            engine: Selector engine used for queries (shared default when None)

        Raises:
            InvalidNodeError: If the handle is missing or not part of the tree
        """
        if tree is None or handle is None or not tree.is_valid(handle):
            raise InvalidNodeError(f"Invalid node handle: {handle!r}")
        self._tree = tree
        self._handle = handle
        self._engine = engine

    @property
    def handle(self) -> int:
        """Arena index of the wrapped node; ascending handles follow document order."""
        return self._handle

    @property
    def engine(self) -> 'SelectorEngine':
        if self._engine is None:
            from .selector_engine import default_engine
            self._engine = default_engine()
        return self._engine

    def _wrap(self, handle: Optional[int]) -> Optional['Node']:
        return None if handle is None else Node(self._tree, handle, self._engine)

    def _wrap_all(self, handles: List[int]) -> List['Node']:
        return [Node(self._tree, h, self._engine) for h in handles]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self._tree is other._tree and self._handle == other._handle

    def __hash__(self) -> int:
        return hash((id(self._tree), self._handle))

    # Node properties

    @property
    def node_type(self) -> int:
        return self._tree.node_type(self._handle)

    @property
    def node_name(self) -> str:
        return self._tree.node_name(self._handle)

    @property
    def tag_name(self) -> Optional[str]:
        """Upper-cased node name for elements, None for every other kind."""
        if self.node_type != NodeType.ELEMENT_NODE:
            return None
        return self.node_name.upper()

    @property
    def text_content(self) -> str:
        return self._tree.node_text_content(self._handle) or ""

    @property
    def children(self) -> List['Node']:
        """Child elements only."""
        return self._wrap_all(self._tree.node_children(self._handle, False))

    @property
    def child_nodes(self) -> List['Node']:
        """Child nodes of every kind."""
        return self._wrap_all(self._tree.node_children(self._handle, True))

    @property
    def parent_node(self) -> Optional['Node']:
        return self._wrap(self._tree.node_parent(self._handle))

    @property
    def attributes(self) -> AttributeList:
        return AttributeList(self._tree.node_attributes(self._handle), self)

    @property
    def class_name(self) -> str:
        return self.get_attribute('class') or ""

    @property
    def id(self) -> str:
        return self.get_attribute('id') or ""

    def get_attribute(self, name: str) -> Optional[str]:
        """
        Get an attribute value.

        Args:
            name: The attribute name

        Returns:
            The value, or None if the attribute is absent
        """
        attr = self.attributes.get_named_item(name)
        return attr.value if attr is not None else None

    def has_attribute(self, name: str) -> bool:
        return self.attributes.get_named_item(name) is not None

    # Searching

    def get_element_by_id(self, element_id: str) -> Optional['Node']:
        return self._wrap(self._tree.find_by_id(self._handle, element_id))

    def get_elements_by_tag_name(self, tag_name: str) -> List['Node']:
        return self._wrap_all(self._tree.find_by_tag_name(self._handle, tag_name.lower()))

    def get_elements_by_class_name(self, class_name: str) -> List['Node']:
        return self._wrap_all(self._tree.find_by_class_name(self._handle, class_name))

    def get_elements_by_attribute(self, name: str, value: Optional[str] = None) -> List['Node']:
        """
        Find elements carrying an attribute, optionally with an exact value.

        The walk includes this node itself.

        Args:
            name: The attribute name
            value: Required value, or None to accept any value

        Returns:
            Matching elements in document order
        """
        def predicate(node):
            if node.node_type != NodeType.ELEMENT_NODE:
                return False
            actual = node.get_attribute(name)
            return actual is not None if value is None else actual == value

        return _walker.collect(self, predicate)

    def get_all_elements(self) -> List['Node']:
        """All elements of this subtree in pre-order, this node included."""
        return _walker.collect(self, lambda node: node.node_type == NodeType.ELEMENT_NODE)

    # Selectors

    def query_selector(self, selector: str) -> Optional['Node']:
        return self.engine.select_one(selector, self)

    def query_selector_all(self, selector: str) -> List['Node']:
        return self.engine.select(selector, self)

    def matches(self, selector: str) -> bool:
        return self.engine.matches(self, selector)

    # Serialization

    def inner_html(self) -> str:
        return serializer.inner_html(self)

    def outer_html(self) -> str:
        return serializer.outer_html(self)

    # Diagnostics

    def __str__(self) -> str:
        node_type = self.node_type
        if node_type == NodeType.ELEMENT_NODE:
            attrs = ""
            if self.id:
                attrs += f' id="{self.id}"'
            if self.class_name:
                attrs += f' class="{self.class_name}"'
            return f"<{self.tag_name.lower()}{attrs}>"
        if node_type == NodeType.TEXT_NODE:
            text = self.text_content.strip()
            return text[:47] + "..." if len(text) > 50 else text
        if node_type == NodeType.COMMENT_NODE:
            return "<!-- comment -->"
        if node_type == NodeType.DOCUMENT_NODE:
            return "[document]"
        return f"[node:{node_type}]"

    def __repr__(self) -> str:
        return f"<Node {self._handle}: {self}>"

    def debug(self) -> Dict[str, Any]:
        """Summary of this node for debugging output."""
        return {
            'node_type': self.node_type,
            'node_name': self.node_name,
            'tag_name': self.tag_name,
            'id': self.id,
            'class_name': self.class_name,
            'text_content': self.text_content[:100],
            'children_count': len(self.children),
            'attributes_count': len(self.attributes),
        }

    # DOM-style aliases
    nodeType = node_type
    nodeName = node_name
    tagName = tag_name
    textContent = text_content
    childNodes = child_nodes
    parentNode = parent_node
    className = class_name
    getAttribute = get_attribute
    hasAttribute = has_attribute
    getElementById = get_element_by_id
    getElementsByTagName = get_elements_by_tag_name
    getElementsByClassName = get_elements_by_class_name
    getElementsByAttribute = get_elements_by_attribute
    getAllElements = get_all_elements
    querySelector = query_selector
    querySelectorAll = query_selector_all
    innerHTML = inner_html
    outerHTML = outer_html
