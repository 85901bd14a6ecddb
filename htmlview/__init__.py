"""
htmlview - read-only DOM facade, simple selectors and HTML serialization
over html5lib parse trees.
"""

__version__ = "1.0.0"
__author__ = "htmlview developers"
__description__ = "Read-only DOM facade with simple CSS selectors over html5lib"

from htmlview.dom import (
    Node, NodeType, InvalidNodeError, Parser, ParseResult, SelectorEngine,
    SelectorError, parse
)
from htmlview.extract import extract_links, debug_elements, log_element

__all__ = [
    'Node', 'NodeType', 'InvalidNodeError', 'Parser', 'ParseResult', 'SelectorEngine',
    'SelectorError', 'parse', 'extract_links', 'debug_elements', 'log_element'
]
