import io
import sys

import responses

from workbook.htmltree import (
    Node,
    NodeType,
    findlinks_main,
    for_each_node,
    indented_outline,
    outline,
    outline_main,
    parse_html,
    visit,
)

DOC = (
    "<!DOCTYPE html><html><head><title>T</title></head><body><!--note-->"
    '<a href="one">1</a><div><a href="two" id="x">2</a>'
    '<a name="anchor">3</a></div></body></html>'
)


def _nodes(doc):
    nodes = []
    for_each_node(doc, nodes.append)
    return nodes


def test_parse_builds_document_root_with_doctype():
    doc = parse_html(DOC)
    assert doc.type is NodeType.DOCUMENT
    assert doc.first_child.type is NodeType.DOCTYPE
    assert doc.first_child.data == "html"
    assert doc.children[1].type is NodeType.ELEMENT
    assert doc.children[1].data == "html"


def test_parse_accepts_str_bytes_and_files():
    expected = outline(parse_html(DOC))
    assert outline(parse_html(DOC.encode("utf-8"))) == expected
    assert outline(parse_html(io.StringIO(DOC))) == expected
    assert outline(parse_html(io.BytesIO(DOC.encode("utf-8")))) == expected


def test_text_comment_and_attributes():
    nodes = _nodes(parse_html(DOC))
    comments = [n.data for n in nodes if n.type is NodeType.COMMENT]
    texts = [n.data for n in nodes if n.type is NodeType.TEXT]
    assert comments == ["note"]
    assert texts == ["T", "1", "2", "3"]
    anchors = [n for n in nodes if n.type is NodeType.ELEMENT and n.data == "a"]
    assert dict(anchors[1].attr) == {"href": "two", "id": "x"}
    assert dict(anchors[2].attr) == {"name": "anchor"}


def test_first_child_of_leaf_is_none():
    leaf = Node(NodeType.TEXT, "leaf")
    assert leaf.first_child is None


def test_visit_collects_hrefs_in_order():
    assert visit(parse_html(DOC)) == ["one", "two"]


def test_visit_without_links():
    assert visit(parse_html("<p>no links</p>")) == []


def test_outline_stacks():
    stacks = outline(parse_html(DOC))
    assert stacks[0] == ["html"]
    assert ["html", "head", "title"] in stacks
    assert ["html", "body", "div", "a"] in stacks
    assert all(stack[0] == "html" for stack in stacks)


def test_indented_outline_is_balanced():
    doc = parse_html(DOC)
    lines = indented_outline(doc)
    closes = [line for line in lines if line.lstrip().startswith("</")]
    opens = [line for line in lines if not line.lstrip().startswith("</")]
    assert len(opens) == len(closes) == len(outline(doc))
    assert lines[0] == "<html>"
    assert lines[-1] == "</html>"
    for line, stack in zip(opens, outline(doc)):
        assert line.strip() == f"<{stack[-1]}>"
        assert len(line) - len(line.lstrip(" ")) == 2 * (len(stack) - 1)


def test_for_each_node_visits_pre_and_post_order():
    doc = parse_html(DOC)
    pre, post = [], []
    for_each_node(doc, pre.append, post.append)
    assert pre[0] is doc
    assert post[-1] is doc
    assert len(pre) == len(post)
    assert {id(n) for n in pre} == {id(n) for n in post}
    element_names = [n.data for n in pre if n.type is NodeType.ELEMENT]
    assert element_names == [stack[-1] for stack in outline(doc)]


def test_for_each_node_callbacks_are_optional():
    doc = parse_html(DOC)
    post = []
    for_each_node(doc, None, post.append)
    for_each_node(doc)
    assert len(post) == len(_nodes(doc))


def test_findlinks_main_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(DOC))
    assert findlinks_main([]) == 0
    assert capsys.readouterr().out.splitlines() == ["one", "two"]


def test_outline_main_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(DOC))
    assert outline_main([]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "[html]"
    assert len(lines) == len(outline(parse_html(DOC)))


def test_outline_main_fetches_urls(capsys):
    url = "http://example.com/page"
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, url, body=DOC, content_type="text/html")
        assert outline_main([url]) == 0
    assert capsys.readouterr().out.splitlines() == indented_outline(parse_html(DOC))


def test_outline_main_reports_fetch_errors(capsys):
    with responses.RequestsMock():
        assert outline_main(["http://example.com/missing"]) == 0
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("outline: ")