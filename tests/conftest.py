import logging
from xml.dom import minidom

import pytest

from htmlview.dom import Node, TreeSource, parse

SAMPLE_HTML = '<div id="a"><p class="x">Hi</p><p class="y">Bye</p></div>'


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    package_logger = logging.getLogger("htmlview")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def sample():
    return parse(SAMPLE_HTML)


@pytest.fixture
def build_dom():
    """Build a facade over a hand made minidom tree.

    The builder receives the minidom document and its <html> element and
    returns nothing; the fixture returns the document facade.
    """
    def _build(populate):
        document = minidom.getDOMImplementation().createDocument(None, "html", None)
        populate(document, document.documentElement)
        tree = TreeSource.from_dom(document)
        return Node(tree, tree.document)
    return _build
