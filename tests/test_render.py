"""Tests for the Rich and HTML renderers."""

from __future__ import annotations

from listening.markup import resolve
from listening.render import to_html, to_rich


def _spans(markup: str) -> list[tuple[int, int, str]]:
    text = to_rich(resolve(markup))
    return [(span.start, span.end, str(span.style)) for span in text.spans]


def test_rich_styles_each_kind() -> None:
    text = to_rich(resolve("a **b** *c* ~~d~~ __e__"))
    assert text.plain == "a b c d e"
    assert _spans("a **b** *c* ~~d~~ __e__") == [
        (2, 3, "bold"),
        (4, 5, "italic"),
        (6, 7, "strike"),
        (8, 9, "underline"),
    ]


def test_rich_size_markers_map_to_emphasis_and_dim() -> None:
    assert _spans("++up++ --down--") == [(0, 2, "bold bright_white"), (3, 7, "dim")]


def test_rich_nested_styles_stack() -> None:
    """Inner style is applied first, outer style covers the same characters."""
    assert _spans("~~**x**~~") == [(0, 1, "bold"), (0, 1, "strike")]


def test_rich_empty_container_adds_no_span() -> None:
    text = to_rich(resolve("a****b"))
    assert text.plain == "ab"
    assert text.spans == []


def test_html_semantic_tags() -> None:
    assert to_html(resolve("**b** *i* ~~d~~ __u__")) == (
        "<strong>b</strong> <em>i</em> <del>d</del> <u>u</u>"
    )


def test_html_size_spans() -> None:
    assert to_html(resolve("++up++--down--")) == (
        '<span style="font-size: 1.2em;">up</span><span style="font-size: 0.8em;">down</span>'
    )


def test_html_nesting() -> None:
    assert to_html(resolve("**bold *and italic*__too__**")) == (
        "<strong>bold <em>and italic</em><u>too</u></strong>"
    )


def test_html_escapes_text() -> None:
    assert to_html(resolve("**a** & <b> \"q\"")) == '<strong>a</strong> &amp; &lt;b&gt; "q"'


def test_html_unmatched_markers_stay_literal() -> None:
    assert to_html(resolve("**oops")) == "**oops"
