"""
HTML serialization for facade nodes.

Output is a best-effort reconstruction: attribute values and text are written
verbatim with no escaping, so text containing ``<``, ``>`` or ``&`` does not
survive a re-parse unchanged.
"""

from .tree_source import ELEMENT, TEXT

VOID_ELEMENTS = frozenset({
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'param', 'source', 'track', 'wbr'
})


def format_attributes(node: 'Node') -> str:
    """Render attributes in stored order as ` name="value"` pairs."""
    return "".join(f' {attr.name}="{attr.value}"' for attr in node.attributes)


def inner_html(node: 'Node') -> str:
    """
    Serialize the children of a node.

    Elements contribute their outer HTML and text nodes their raw text.
    Comments and every other kind are left out.
    """
    parts = []
    for child in node.child_nodes:
        node_type = child.node_type
        if node_type == ELEMENT:
            parts.append(outer_html(child))
        elif node_type == TEXT:
            parts.append(child.text_content)
    return "".join(parts)


def outer_html(node: 'Node') -> str:
    """
    Serialize a node including its own tag.

    Non-element nodes yield their text content. Void elements are always
    written self-closing and any children they carry are dropped.
    """
    if node.node_type != ELEMENT:
        return node.text_content

    tag = node.tag_name.lower()
    attrs = format_attributes(node)
    if tag in VOID_ELEMENTS:
        return f"<{tag}{attrs} />"
    return f"<{tag}{attrs}>{inner_html(node)}</{tag}>"
