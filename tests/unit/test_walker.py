from htmlview.dom import NodeType, TreeWalker, WalkAction, parse

HTML = '<div id="d"><p>a<b>b</b></p><!--c--><span>s</span></div>'


def label(node):
    return node.tag_name or node.node_name


class TestTreeWalker:
    def setup_method(self):
        self.walker = TreeWalker()
        self.div = parse(HTML).root.get_element_by_id("d")

    def test_pre_order(self):
        order = [label(n) for n in self.walker.iter_nodes(self.div)]
        assert order == ["DIV", "P", "#text", "B", "#text", "#comment", "SPAN", "#text"]

    def test_walk_visits_everything(self):
        visited = []
        stopped = self.walker.walk(self.div, visited.append)
        assert stopped is False
        assert len(visited) == 8

    def test_visitor_can_stop(self):
        visited = []

        def visit(node):
            visited.append(label(node))
            if node.tag_name == "B":
                return WalkAction.STOP
            return WalkAction.CONTINUE

        assert self.walker.walk(self.div, visit) is True
        assert visited == ["DIV", "P", "#text", "B"]

    def test_collect(self):
        elements = self.walker.collect(self.div, lambda n: n.node_type == NodeType.ELEMENT_NODE)
        assert [label(n) for n in elements] == ["DIV", "P", "B", "SPAN"]

    def test_collect_first_only(self):
        found = self.walker.collect(self.div, lambda n: n.node_type == NodeType.TEXT_NODE,
                                    first_only=True)
        assert [n.text_content for n in found] == ["a"]

    def test_find_parent(self):
        span = self.div.get_elements_by_tag_name("span")[0]
        assert self.walker.find_parent(self.div, span) == self.div

    def test_find_parent_ignores_document(self):
        result = parse("<p>x</p>")
        assert self.walker.find_parent(result.document, result.root) is None

    def test_find_parent_outside_root(self):
        b = self.div.get_elements_by_tag_name("b")[0]
        span = self.div.get_elements_by_tag_name("span")[0]
        assert self.walker.find_parent(span, b) is None

    def test_deep_tree_does_not_recurse(self, build_dom):
        def populate(document, html):
            parent = html
            for _ in range(5000):
                child = document.createElement("div")
                parent.appendChild(child)
                parent = child

        document = build_dom(populate)
        assert len(document.get_all_elements()) == 5001
