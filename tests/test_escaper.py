import pytest
from hypothesis import given
from hypothesis import strategies as st

from md_renderer.core.escaper import escape_html


@pytest.mark.unit
@pytest.mark.parametrize("raw, expected", [
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
    ("AT&T", "AT&amp;T"),
    ("<a href='x'>", "&lt;a href=&#39;x&#39;&gt;"),
    ("plain text", "plain text"),
])
def test_escape_single_characters(raw, expected):
    assert escape_html(raw) == expected


@pytest.mark.unit
def test_escape_empty():
    assert escape_html("") == ""


@pytest.mark.unit
def test_escape_does_not_double_escape():
    assert escape_html("&amp;") == "&amp;"
    assert escape_html(escape_html("<b>")) == "&lt;b&gt;"


@pytest.mark.unit
def test_escape_keeps_numeric_references():
    assert escape_html("&#39; &#x27;") == "&#39; &#x27;"


@pytest.mark.unit
def test_escape_ampersand_without_reference():
    assert escape_html("&amp") == "&amp;amp"
    assert escape_html("a & b") == "a &amp; b"


@pytest.mark.unit
@given(st.text())
def test_escape_is_idempotent(text):
    once = escape_html(text)
    assert escape_html(once) == once


@pytest.mark.unit
@given(st.text())
def test_escape_output_has_no_raw_specials(text):
    escaped = escape_html(text)
    for char in "<>\"'":
        assert char not in escaped
