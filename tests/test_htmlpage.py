import pytest

from sfex.htmlpage import Page, parse_html
from sfex.value import SfxValueError

DOC = """<!DOCTYPE html>
<html><body>
<ul><li>one</li><li>two</li></ul>
<a href="/first">First</a>
<a>No link</a>
<a href="/second" class="x y">Second</a>
<p>Hello <b>World</b></p>
</body></html>"""


@pytest.fixture
def page():
    return parse_html(DOC)


def test_parse_keeps_source(page):
    assert page.html == DOC


def test_select_text_in_document_order(page):
    assert page.select_text("li") == ["one", "two"]


def test_select_text_joins_text_nodes_with_space(page):
    assert page.select_text("p") == ["Hello  World"]


def test_select_text_no_match(page):
    assert page.select_text("table") == []


def test_select_attr_skips_elements_without_attribute(page):
    assert page.select_attr("a", "href") == ["/first", "/second"]


def test_select_attr_keeps_raw_class_value(page):
    assert page.select_attr("a.x", "class") == ["x y"]


def test_select_attr_count_not_more_than_matches(page):
    assert len(page.select_attr("a", "href")) <= len(page.select_text("a"))


def test_invalid_selector_text(page):
    with pytest.raises(SfxValueError, match="Invalid CSS selector"):
        page.select_text("[[")


def test_invalid_selector_attr(page):
    with pytest.raises(SfxValueError, match="Invalid CSS selector"):
        page.select_attr("[[", "href")


def test_page_from_fragment():
    fragment = Page("<div><span>inside</span></div>")
    assert fragment.select_text("div span") == ["inside"]