"""
Tree source for the DOM facade.

This module turns an html5lib parse into a flat arena of nodes addressed by
integer handles. The facade layer only ever talks to the primitives defined
here, and never mutates the arena once it is built.
"""

import logging
from typing import Iterator, List, Optional, Tuple, Union

import html5lib

logger = logging.getLogger(__name__)

# Kind codes reported by minidom, aligned with the DOM node type constants
ELEMENT = 1
TEXT = 3
COMMENT = 8
DOCUMENT = 9


class TreeSource:
    """
    Read-only arena over a parsed HTML tree.

    Every node gets a stable integer handle (its position in pre-order).
    Handle 0 is the node the arena was built from, normally the document.
    """

    def __init__(self):
        """Initialize an empty arena."""
        self._types: List[int] = []
        self._names: List[str] = []
        self._data: List[Optional[str]] = []
        self._attributes: List[List[Tuple[str, str]]] = []
        self._children: List[List[int]] = []
        self._parents: List[Optional[int]] = []
        self.errors: List[Tuple] = []

    @classmethod
    def parse(cls, html: Union[str, bytes]) -> 'TreeSource':
        """
        Parse HTML text with html5lib and build an arena from the result.

        Args:
            html: The HTML content (bytes are decoded by html5lib)

        Returns:
            The populated tree source
        """
        parser = html5lib.HTMLParser(
            tree=html5lib.treebuilders.getTreeBuilder("dom"),
            namespaceHTMLElements=False
        )
        document = parser.parse(html)
        source = cls.from_dom(document)
        source.errors = list(parser.errors)
        if source.errors:
            logger.debug(f"html5lib reported {len(source.errors)} parse errors")
        return source

    @classmethod
    def from_dom(cls, dom_root) -> 'TreeSource':
        """
        Build an arena from an existing minidom tree.

        Args:
            dom_root: A minidom Document (or any minidom node)

        Returns:
            The populated tree source
        """
        source = cls()
        stack = [(dom_root, None)]
        while stack:
            dom_node, parent = stack.pop()
            handle = source._add(dom_node, parent)
            for child in reversed(dom_node.childNodes):
                stack.append((child, handle))
        logger.debug(f"Tree source built with {len(source)} nodes")
        return source

    def _add(self, dom_node, parent: Optional[int]) -> int:
        node_type = dom_node.nodeType

        # Adjacent text nodes are merged into one
        if node_type == TEXT and parent is not None:
            siblings = self._children[parent]
            if siblings and self._types[siblings[-1]] == TEXT:
                self._data[siblings[-1]] += dom_node.data
                return siblings[-1]

        handle = len(self._types)
        self._types.append(node_type)
        self._names.append(dom_node.nodeName)
        self._data.append(dom_node.data if node_type in (TEXT, COMMENT) else None)

        pairs = []
        if node_type == ELEMENT:
            attrs = dom_node.attributes
            for i in range(attrs.length):
                attr = attrs.item(i)
                pairs.append((attr.name, attr.value))
        self._attributes.append(pairs)

        self._children.append([])
        self._parents.append(parent)
        if parent is not None:
            self._children[parent].append(handle)
        return handle

    def __len__(self) -> int:
        return len(self._types)

    def is_valid(self, handle) -> bool:
        """Check whether a handle addresses a node of this arena."""
        return isinstance(handle, int) and 0 <= handle < len(self._types)

    @property
    def document(self) -> Optional[int]:
        """Handle of the node the arena was built from."""
        return 0 if self._types else None

    @property
    def root(self) -> Optional[int]:
        """Handle of the document element, or None when there is none."""
        if not self._types:
            return None
        if self._types[0] == ELEMENT:
            return 0
        for child in self._children[0]:
            if self._types[child] == ELEMENT:
                return child
        return None

    # Node primitives

    def node_type(self, handle: int) -> int:
        return self._types[handle]

    def node_name(self, handle: int) -> str:
        return self._names[handle]

    def node_text_content(self, handle: int) -> Optional[str]:
        """
        Get the text content of a node.

        Text and comment nodes report their own data, elements and documents
        the concatenation of all descendant text. Other kinds have none.
        """
        node_type = self._types[handle]
        if node_type in (TEXT, COMMENT):
            return self._data[handle]
        if node_type in (ELEMENT, DOCUMENT):
            return "".join(self._data[h] for h in self.descendants(handle)
                           if self._types[h] == TEXT)
        return None

    def node_children(self, handle: int, include_all: bool) -> List[int]:
        children = self._children[handle]
        if include_all:
            return list(children)
        return [h for h in children if self._types[h] == ELEMENT]

    def node_attributes(self, handle: int) -> List[Tuple[str, str]]:
        return list(self._attributes[handle])

    def node_parent(self, handle: int) -> Optional[int]:
        return self._parents[handle]

    def descendants(self, handle: int) -> Iterator[int]:
        """Yield the descendants of a node in document order."""
        stack = list(reversed(self._children[handle]))
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(self._children[current]))

    # Search primitives, scoped to the descendants of a handle

    def _attribute_value(self, handle: int, name: str) -> Optional[str]:
        for attr_name, value in self._attributes[handle]:
            if attr_name == name:
                return value
        return None

    def find_by_id(self, handle: int, element_id: str) -> Optional[int]:
        for h in self.descendants(handle):
            if self._types[h] == ELEMENT and self._attribute_value(h, 'id') == element_id:
                return h
        return None

    def find_by_tag_name(self, handle: int, tag_name: str) -> List[int]:
        tag_name = tag_name.lower()
        return [h for h in self.descendants(handle)
                if self._types[h] == ELEMENT and self._names[h].lower() == tag_name]

    def find_by_class_name(self, handle: int, class_name: str) -> List[int]:
        wanted = class_name.split()
        if not wanted:
            return []
        result = []
        for h in self.descendants(handle):
            if self._types[h] != ELEMENT:
                continue
            classes = (self._attribute_value(h, 'class') or "").split()
            if all(cls in classes for cls in wanted):
                result.append(h)
        return result
