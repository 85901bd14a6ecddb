"""
Convenience helpers built on the public Node API: link extraction and
debugging summaries of elements.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from .dom.node import NodeType

logger = logging.getLogger(__name__)


def _truncate(text: str, limit: int) -> str:
    return text[:limit - 3] + "..." if len(text) > limit else text


def extract_links(root: 'Node') -> List[Dict[str, str]]:
    """
    Collect every link below a node.

    Args:
        root: The node to search from

    Returns:
        One dict per `a` element with its trimmed text, href and title
        (empty strings when absent)
    """
    links = []
    for link in root.get_elements_by_tag_name('a'):
        links.append({
            'text': link.text_content.strip(),
            'href': link.get_attribute('href') or "",
            'title': link.get_attribute('title') or "",
        })
    return links


def debug_elements(elements: Sequence['Node'], max_elements: int = 10,
                   show_content: bool = True,
                   show_attributes: bool = True) -> List[Union[Dict[str, Any], str]]:
    """
    Summarize a list of elements for debugging.

    Args:
        elements: The elements to describe
        max_elements: How many elements to describe at most
        show_content: Include the trimmed text content
        show_attributes: Include an attribute dict for elements that have any

    Returns:
        One dict per described element, followed by a note string when
        elements were left out
    """
    result: List[Union[Dict[str, Any], str]] = []
    for index, element in enumerate(elements[:max_elements]):
        info: Dict[str, Any] = {
            'index': index,
            'tag': element.tag_name,
            'id': element.id or None,
            'class_name': element.class_name or None,
        }
        if show_content:
            info['text_content'] = _truncate(element.text_content.strip(), 100)

        attributes = element.attributes
        if show_attributes and len(attributes) > 0:
            info['attributes'] = attributes.to_dict()

        result.append(info)

    if len(elements) > max_elements:
        result.append(f"... and {len(elements) - max_elements} more elements")
    return result


def log_element(element: Optional['Node'], prefix: str = "",
                emit: Optional[Callable[[str], None]] = None) -> str:
    """
    Describe an element on a single line and log it.

    Args:
        element: The element, or None
        prefix: Text put in front of the description
        emit: Where to send the line (logs at INFO by default)

    Returns:
        The line that was emitted
    """
    if element is None:
        line = prefix + "null"
    else:
        line = prefix + str(element)
        if element.node_type == NodeType.ELEMENT_NODE:
            text = element.text_content.strip()
            if text:
                line += f' -> "{_truncate(text, 50)}"'

    (emit or logger.info)(line)
    return line
