"""
Attribute implementation for the DOM facade.
This module implements the Attr entry and the ordered attribute list of an element.
"""

from typing import Iterator, List, Optional, Sequence, Tuple


class Attr:
    """
    A single name/value pair belonging to one element.
    """

    def __init__(self, name: str, value: str, owner_element: Optional['Node'] = None):
        """
        Initialize a new attribute.

        Args:
            name: The attribute name, as reported by the tree source
            value: The attribute value
            owner_element: The element that owns this attribute
        """
        self.name = name
        self.value = value
        self.owner_element = owner_element

        # Namespaced attributes (xlink:href, xml:lang) keep their full name
        self.prefix: Optional[str] = None
        self.local_name = name
        if ':' in name:
            self.prefix, self.local_name = name.split(':', 1)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Attr):
            return NotImplemented
        return self.name == other.name and self.value == other.value

    def __repr__(self) -> str:
        return f"Attr({self.name!r}, {self.value!r})"


class AttributeList:
    """
    Ordered attributes of one element with lookup by name.

    Entries keep the order reported by the tree source, which is source order.
    """

    def __init__(self, pairs: Sequence[Tuple[str, str]], owner_element: Optional['Node'] = None):
        self._items: List[Attr] = [Attr(name, value, owner_element) for name, value in pairs]

    @property
    def length(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Attr:
        return self._items[index]

    def __iter__(self) -> Iterator[Attr]:
        return iter(self._items)

    def item(self, index: int) -> Optional[Attr]:
        """Positional access that returns None when out of range."""
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def get_named_item(self, name: str) -> Optional[Attr]:
        """
        Find an attribute by exact name.

        Args:
            name: The attribute name

        Returns:
            The first attribute with that name in stored order, or None
        """
        for attr in self._items:
            if attr.name == name:
                return attr
        return None

    def to_dict(self) -> dict:
        return {attr.name: attr.value for attr in self._items}

    getNamedItem = get_named_item

    def __repr__(self) -> str:
        return f"AttributeList({[(a.name, a.value) for a in self._items]!r})"
