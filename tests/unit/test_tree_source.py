from xml.dom import minidom

from htmlview.dom.tree_source import COMMENT, DOCUMENT, ELEMENT, TEXT, TreeSource


def names(tree, handles):
    return [tree.node_name(h) for h in handles]


class TestArena:
    def test_document_is_handle_zero(self):
        tree = TreeSource.parse("<p>x</p>")
        assert tree.document == 0
        assert tree.node_type(0) == DOCUMENT
        assert tree.node_name(0) == "#document"

    def test_root_is_html_element(self):
        tree = TreeSource.parse("<p>x</p>")
        assert tree.node_type(tree.root) == ELEMENT
        assert tree.node_name(tree.root) == "html"

    def test_handles_follow_document_order(self):
        tree = TreeSource.parse("<div><p>a</p><span>b</span></div>")
        order = [tree.node_name(h) for h in range(len(tree))]
        assert order == ["#document", "html", "head", "body", "div", "p", "#text", "span", "#text"]

    def test_parent_links(self):
        tree = TreeSource.parse("<div><p>a</p></div>")
        p = tree.find_by_tag_name(0, "p")[0]
        assert tree.node_name(tree.node_parent(p)) == "div"
        assert tree.node_parent(0) is None

    def test_doctype_is_kept(self):
        tree = TreeSource.parse("<!DOCTYPE html><p>x</p>")
        kinds = [tree.node_type(h) for h in tree.node_children(0, True)]
        assert kinds == [10, ELEMENT]

    def test_is_valid(self):
        tree = TreeSource.parse("<p>x</p>")
        assert tree.is_valid(0)
        assert tree.is_valid(len(tree) - 1)
        assert not tree.is_valid(len(tree))
        assert not tree.is_valid(-1)
        assert not tree.is_valid(None)
        assert not tree.is_valid("0")

    def test_empty_arena_has_no_root(self):
        tree = TreeSource()
        assert tree.document is None
        assert tree.root is None

    def test_parse_errors_are_recorded(self):
        tree = TreeSource.parse("<p>unclosed")
        assert isinstance(tree.errors, list)


class TestPrimitives:
    def setup_method(self):
        self.tree = TreeSource.parse('<p id="p">a<b>b</b><!--c--></p>')
        self.p = self.tree.find_by_id(0, "p")

    def test_children_elements_only(self):
        assert names(self.tree, self.tree.node_children(self.p, False)) == ["b"]

    def test_children_all_kinds(self):
        kinds = [self.tree.node_type(h) for h in self.tree.node_children(self.p, True)]
        assert kinds == [TEXT, ELEMENT, COMMENT]

    def test_text_content_skips_comments(self):
        assert self.tree.node_text_content(self.p) == "ab"

    def test_comment_text_content_is_its_data(self):
        comment = self.tree.node_children(self.p, True)[2]
        assert self.tree.node_text_content(comment) == "c"

    def test_doctype_has_no_text_content(self):
        tree = TreeSource.parse("<!DOCTYPE html><p>x</p>")
        doctype = tree.node_children(0, True)[0]
        assert tree.node_text_content(doctype) is None

    def test_attributes_keep_source_order(self):
        tree = TreeSource.parse('<a href="x" title="t" id="i">l</a>')
        a = tree.find_by_tag_name(0, "a")[0]
        assert tree.node_attributes(a) == [("href", "x"), ("title", "t"), ("id", "i")]

    def test_text_nodes_have_no_attributes(self):
        text = self.tree.node_children(self.p, True)[0]
        assert self.tree.node_attributes(text) == []


class TestSearch:
    def setup_method(self):
        self.tree = TreeSource.parse(
            '<div id="d" class="box wide"><span class="box">1</span>'
            '<span id="d2" class="wide box extra">2</span></div><section id="d">3</section>')

    def test_find_by_tag_name_is_case_insensitive(self):
        assert len(self.tree.find_by_tag_name(0, "SPAN")) == 2

    def test_find_by_tag_name_excludes_self(self):
        div = self.tree.find_by_tag_name(0, "div")[0]
        assert self.tree.find_by_tag_name(div, "div") == []
        assert len(self.tree.find_by_tag_name(div, "span")) == 2

    def test_find_by_id_returns_first_in_document_order(self):
        found = self.tree.find_by_id(0, "d")
        assert self.tree.node_name(found) == "div"

    def test_find_by_id_missing(self):
        assert self.tree.find_by_id(0, "nope") is None

    def test_find_by_class_name_single_token(self):
        assert names(self.tree, self.tree.find_by_class_name(0, "box")) == ["div", "span", "span"]

    def test_find_by_class_name_needs_every_token(self):
        found = self.tree.find_by_class_name(0, "box extra")
        assert [self.tree.node_attributes(h)[0] for h in found] == [("id", "d2")]

    def test_find_by_class_name_is_not_substring_match(self):
        assert self.tree.find_by_class_name(0, "bo") == []

    def test_find_by_class_name_empty(self):
        assert self.tree.find_by_class_name(0, "  ") == []


class TestFromDom:
    def test_builds_from_minidom_document(self):
        document = minidom.getDOMImplementation().createDocument(None, "html", None)
        body = document.createElement("body")
        body.appendChild(document.createTextNode("hello"))
        document.documentElement.appendChild(body)

        tree = TreeSource.from_dom(document)

        assert tree.node_name(tree.root) == "html"
        assert tree.node_text_content(0) == "hello"
        assert names(tree, tree.node_children(tree.root, False)) == ["body"]

    def test_root_of_element_arena_is_handle_zero(self):
        document = minidom.getDOMImplementation().createDocument(None, "html", None)
        tree = TreeSource.from_dom(document.documentElement)
        assert tree.root == 0


class TestTextMerging:
    def test_character_references_give_one_text_node(self):
        tree = TreeSource.parse("<p>1 &lt; 2 &amp; 3</p>")
        p = tree.find_by_tag_name(0, "p")[0]
        children = tree.node_children(p, True)
        assert len(children) == 1
        assert tree.node_text_content(children[0]) == "1 < 2 & 3"

    def test_adjacent_minidom_text_nodes_are_merged(self):
        document = minidom.getDOMImplementation().createDocument(None, "html", None)
        html = document.documentElement
        html.appendChild(document.createTextNode("a"))
        html.appendChild(document.createTextNode("b"))
        html.appendChild(document.createComment("c"))
        html.appendChild(document.createTextNode("d"))

        tree = TreeSource.from_dom(document)

        texts = [tree.node_text_content(h) for h in tree.node_children(tree.root, True)]
        assert texts == ["ab", "c", "d"]
