import io
import sys
import xml.sax

import pytest

from workbook.xmlselect import contains_all, main, select

DOC = (
    "<html><body><div><h2>Title</h2><p>text</p></div>"
    "<h2>Other</h2></body></html>"
)


@pytest.mark.parametrize(
    "x, y, want",
    [
        (["a", "b", "c"], ["a", "c"], True),
        (["a", "b"], ["b", "a"], False),
        (["a"], [], True),
        ([], ["a"], False),
        (["a", "b"], ["a", "b", "c"], False),
        (["a", "a"], ["a", "a"], True),
    ],
)
def test_contains_all(x, y, want):
    assert contains_all(x, y) is want


def test_select_in_order():
    found = list(select(io.StringIO(DOC), ["div", "h2"]))
    assert found == [(["html", "body", "div", "h2"], "Title")]


def test_select_all_text():
    found = list(select(io.BytesIO(DOC.encode()), []))
    assert [text for _, text in found] == ["Title", "text", "Other"]


def test_select_merges_entities():
    found = list(select(io.StringIO("<a>x &amp; y</a>"), ["a"]))
    assert found == [(["a"], "x & y")]


def test_select_uses_local_names():
    doc = '<r xmlns:n="urn:example"><n:item>v</n:item></r>'
    assert list(select(io.StringIO(doc), ["item"])) == [(["r", "item"], "v")]


def test_select_malformed():
    with pytest.raises(xml.sax.SAXParseException):
        list(select(io.StringIO("<a><b></a>"), []))


def test_main_prints_matches(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(DOC))
    assert main(["p"]) == 0
    assert capsys.readouterr().out == "html body div p: text\n"


def test_main_reports_errors(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("<a>"))
    assert main([]) == 1
    assert capsys.readouterr().err.startswith("xmlselect: ")