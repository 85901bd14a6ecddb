"""
DOM facade for parsed HTML.
This package provides read-only DOM-like access, simple selector queries and
HTML serialization over a tree parsed by html5lib.
"""

import logging
from typing import NamedTuple, Optional, Union

from .node import Node, NodeType, InvalidNodeError
from .attr import Attr, AttributeList
from .tree_source import TreeSource
from .walker import TreeWalker, WalkAction
from .selector_engine import SelectorEngine, SelectorError

logger = logging.getLogger(__name__)


class ParseResult(NamedTuple):
    document: Optional[Node]
    root: Optional[Node]


class Parser:
    """HTML parser producing facades over an html5lib tree."""

    def __init__(self, config=None):
        """
        Initialize the parser.

        Args:
            config: Optional Config; its `selector.*` keys configure the
                selector engine shared by every facade this parser returns
        """
        self.engine = SelectorEngine.from_config(config) if config is not None else SelectorEngine()

    def parse(self, html: Union[str, bytes, None]) -> ParseResult:
        """
        Parse HTML content.

        Args:
            html: The HTML content

        Returns:
            ParseResult with the document and the document element; both are
            None when the content is empty
        """
        if not html:
            logger.debug("Empty HTML content, nothing to parse")
            return ParseResult(None, None)

        tree = TreeSource.parse(html)
        document = tree.document
        root = tree.root
        return ParseResult(
            Node(tree, document, self.engine) if document is not None else None,
            Node(tree, root, self.engine) if root is not None else None,
        )


def parse(html: Union[str, bytes, None], config=None) -> ParseResult:
    """Parse HTML content with a one-off Parser."""
    return Parser(config).parse(html)


__all__ = [
    'Node', 'NodeType', 'InvalidNodeError', 'Attr', 'AttributeList', 'TreeSource',
    'TreeWalker', 'WalkAction', 'SelectorEngine', 'SelectorError', 'Parser',
    'ParseResult', 'parse'
]
