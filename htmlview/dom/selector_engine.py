"""
Selector engine for the DOM facade.

Supports simple selectors (``#id``, ``.class``, ``tag``, ``tag[attr]`` and
``tag[attr="value"]``) and comma separated unions of them. Combinators,
pseudo-classes and compound selectors are not supported.

`#` and `.` selectors take the rest of the text verbatim as the id or class
name. Other forms are tokenized with cssselect and converted into a small AST
which a single matcher evaluates.
"""

import logging
import re
from typing import Dict, List, NamedTuple, Optional, Tuple, Union

import cssselect
from cssselect import parser as css_parser

from .tree_source import ELEMENT
from .walker import TreeWalker

logger = logging.getLogger(__name__)

DEDUP_IDENTITY = "identity"
DEDUP_LEGACY = "legacy"

# tag[attr] or tag[attr="value"], double quotes only
_ATTRIBUTE_FORM = re.compile(r'^[A-Za-z][\w-]*\[[\w-]+(?:="[^"]*")?\]$')


class SelectorError(ValueError):
    """Raised for selector syntax outside the supported subset."""


class IdSelector(NamedTuple):
    id: str


class ClassSelector(NamedTuple):
    class_name: str


class TagSelector(NamedTuple):
    tag: str


class TagAttributeSelector(NamedTuple):
    tag: str
    attr: str
    value: Optional[str] = None


class UnionSelector(NamedTuple):
    parts: Tuple


SimpleSelector = Union[IdSelector, ClassSelector, TagSelector, TagAttributeSelector]
Selector = Union[SimpleSelector, UnionSelector]


def _is_tag(tree) -> bool:
    return (isinstance(tree, css_parser.Element) and tree.element is not None
            and tree.namespace in (None, '*'))


def _convert(parsed) -> SimpleSelector:
    """
    Convert one cssselect Selector into a simple selector.

    Raises:
        SelectorError: If the selector uses unsupported syntax
    """
    if parsed.pseudo_element is not None:
        raise SelectorError(f"pseudo-elements are not supported: {parsed.pseudo_element}")

    tree = parsed.parsed_tree
    if _is_tag(tree):
        return TagSelector(tree.element.lower())
    if isinstance(tree, css_parser.Attrib):
        if not _is_tag(tree.selector):
            raise SelectorError("attribute selectors need a tag name")
        if tree.namespace is not None:
            raise SelectorError("namespaced attributes are not supported")
        if tree.operator == 'exists':
            return TagAttributeSelector(tree.selector.element.lower(), tree.attrib)
        if tree.operator == '=':
            value = getattr(tree.value, 'value', tree.value)
            return TagAttributeSelector(tree.selector.element.lower(), tree.attrib, value)
        raise SelectorError(f"attribute operator {tree.operator!r} is not supported")
    raise SelectorError(f"unsupported selector form: {tree!r}")


class SelectorEngine:
    """
    Parses and evaluates selectors against facade subtrees.
    """

    def __init__(self, strict: bool = False, union_dedup: str = DEDUP_IDENTITY):
        """
        Initialize the selector engine.

        Args:
            strict: Raise SelectorError for unsupported syntax instead of
                treating it as "no match"
            union_dedup: "identity" to drop exact duplicates from unions, or
                "legacy" to key elements by tag name and sibling position
        """
        if union_dedup not in (DEDUP_IDENTITY, DEDUP_LEGACY):
            raise ValueError(f"Unknown union dedup mode: {union_dedup!r}")
        self.strict = strict
        self.union_dedup = union_dedup
        self._walker = TreeWalker()
        self._selector_cache: Dict[Tuple[str, bool], Selector] = {}

        logger.debug(f"SelectorEngine initialized (strict={strict}, union_dedup={union_dedup})")

    @classmethod
    def from_config(cls, config) -> 'SelectorEngine':
        """Create an engine from the `selector.*` configuration keys."""
        return cls(strict=bool(config.get('selector.strict', False)),
                   union_dedup=config.get('selector.union_dedup', DEDUP_IDENTITY))

    # Parsing

    def parse(self, selector: str) -> Selector:
        """
        Parse selector text into a selector AST.

        Comma separated input is split naively on commas and each trimmed
        part is parsed on its own. A single selector is not trimmed. In non-strict mode unsupported parts of a
        union are dropped with a warning.

        Args:
            selector: The selector text

        Returns:
            A simple selector, or a UnionSelector for comma separated input

        Raises:
            SelectorError: If the selector (or, in strict mode, any part of a
                union) is unsupported
        """
        key = (selector, self.strict)
        if key in self._selector_cache:
            return self._selector_cache[key]

        if ',' in selector:
            parts = []
            for text in selector.split(','):
                try:
                    parts.append(self._parse_simple(text.strip()))
                except SelectorError as e:
                    if self.strict:
                        raise
                    logger.warning(f"Skipping unsupported selector part {text.strip()!r}: {e}")
            if not parts:
                raise SelectorError(f"no supported selector in {selector!r}")
            result = UnionSelector(tuple(parts))
        else:
            result = self._parse_simple(selector)

        self._selector_cache[key] = result
        return result

    def _parse_simple(self, text: str) -> SimpleSelector:
        if not text:
            raise SelectorError("empty selector")

        if text[0] in "#.":
            name = text[1:]
            if not name or any(c.isspace() for c in name):
                raise SelectorError(f"invalid id or class selector {text!r}")
            return IdSelector(name) if text[0] == "#" else ClassSelector(name)

        if text != text.strip():
            raise SelectorError(f"surrounding whitespace in {text!r}")
        if "[" in text and not _ATTRIBUTE_FORM.match(text):
            raise SelectorError(f"attribute selectors must be tag[attr] or tag[attr=\"value\"]: {text!r}")
        try:
            parsed = cssselect.parse(text)
        except cssselect.SelectorError as e:
            raise SelectorError(f"invalid selector {text!r}: {e}") from e
        if len(parsed) != 1:
            raise SelectorError(f"expected one selector in {text!r}")
        return _convert(parsed[0])

    def _parse_or_none(self, selector: str) -> Optional[Selector]:
        try:
            return self.parse(selector)
        except SelectorError as e:
            if self.strict:
                raise
            logger.warning(f"Unsupported selector {selector!r} treated as no match: {e}")
            return None

    # Evaluation

    def select(self, selector: str, root: 'Node') -> List['Node']:
        """
        Find all elements under root matching a selector.

        Args:
            selector: The selector text
            root: The node to search from

        Returns:
            Matching elements; simple selectors yield document order, unions
            the first-seen order across their parts
        """
        parsed = self._parse_or_none(selector)
        if parsed is None:
            return []
        return self.evaluate(parsed, root)

    def select_one(self, selector: str, root: 'Node') -> Optional['Node']:
        """Find the first element under root in document order matching a selector, or None."""
        parsed = self._parse_or_none(selector)
        if parsed is None:
            return None
        result = self.evaluate(parsed, root, first_only=True)
        return result[0] if result else None

    def evaluate(self, parsed: Selector, root: 'Node', first_only: bool = False) -> List['Node']:
        """
        Evaluate a parsed selector against the subtree below root.

        Args:
            parsed: The selector AST
            root: The node to search from
            first_only: Stop looking once a match is found

        Returns:
            List of matching elements
        """
        if isinstance(parsed, UnionSelector):
            result = self._evaluate_union(parsed, root)
            if first_only and result:
                return [min(result, key=lambda node: node.handle)]
            return result

        if isinstance(parsed, IdSelector):
            element = root.get_element_by_id(parsed.id)
            return [element] if element is not None else []

        if isinstance(parsed, ClassSelector):
            result = root.get_elements_by_class_name(parsed.class_name)
        elif isinstance(parsed, TagSelector):
            result = root.get_elements_by_tag_name(parsed.tag)
        elif isinstance(parsed, TagAttributeSelector):
            result = []
            for element in root.get_elements_by_tag_name(parsed.tag):
                if self._matches_simple(element, parsed):
                    result.append(element)
                    if first_only:
                        break
        else:
            raise TypeError(f"Not a selector: {parsed!r}")

        return result[:1] if first_only else result

    def _evaluate_union(self, parsed: UnionSelector, root: 'Node') -> List['Node']:
        results = []
        seen = set()
        for part in parsed.parts:
            for element in self.evaluate(part, root):
                key = element if self.union_dedup == DEDUP_IDENTITY else self._legacy_key(root, element)
                if key not in seen:
                    seen.add(key)
                    results.append(element)
        return results

    def _legacy_key(self, root: 'Node', element: 'Node') -> str:
        """
        Key an element by tag name and its position among its parent's children.

        The parent is searched for from root; elements whose parent is not an
        element below root get position 0. Distinct elements with the same tag
        and sibling position collapse to one key.
        """
        parent = self._walker.find_parent(root, element)
        index = 0
        if parent is not None:
            index = parent.children.index(element)
        return f"{element.tag_name}_{index}"

    # Matching

    def matches(self, element: 'Node', selector: str) -> bool:
        """
        Check if an element matches a selector.

        Args:
            element: The element to check
            selector: The selector text

        Returns:
            True if the element matches, False otherwise
        """
        parsed = self._parse_or_none(selector)
        if parsed is None or element.node_type != ELEMENT:
            return False
        if isinstance(parsed, UnionSelector):
            return any(self._matches_simple(element, part) for part in parsed.parts)
        return self._matches_simple(element, parsed)

    def _matches_simple(self, element: 'Node', parsed: SimpleSelector) -> bool:
        if isinstance(parsed, IdSelector):
            return element.id == parsed.id
        if isinstance(parsed, ClassSelector):
            return parsed.class_name in element.class_name.split()
        if element.node_name.lower() != parsed.tag:
            return False
        if isinstance(parsed, TagSelector):
            return True
        actual = element.get_attribute(parsed.attr)
        if parsed.value is None:
            return actual is not None
        return actual == parsed.value


_default_engine: Optional[SelectorEngine] = None


def default_engine() -> SelectorEngine:
    """Shared engine with default settings for facades created without one."""
    global _default_engine
    if _default_engine is None:
        _default_engine = SelectorEngine()
    return _default_engine
