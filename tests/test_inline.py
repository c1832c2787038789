from __future__ import annotations

import pytest

from policy_markdown.escaping import SENTINEL
from policy_markdown.inline import highlight, stash_links
from policy_markdown.stash import Stash


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("*em*", "<em>em</em>"),
        ("_em_", "<em>em</em>"),
        ("**strong**", "<strong>strong</strong>"),
        ("__strong__", "<strong>strong</strong>"),
        ("~sub~", "<sub>sub</sub>"),
        ("~~gone~~", "<s>gone</s>"),
        ("^up^", "<sup>up</sup>"),
        ("--tiny--", "<small>tiny</small>"),
        ("++huge++", "<big>huge</big>"),
        ("`code`", "<code>code</code>"),
    ],
)
def test_highlight_marks(text: str, expected: str) -> None:
    assert highlight(text) == expected


def test_highlight_keeps_leading_character() -> None:
    assert highlight("say *hi*!") == "say <em>hi</em>!"


def test_highlight_matches_adjacent_runs_separately() -> None:
    assert highlight("*a* and *b*") == "<em>a</em> and <em>b</em>"


def test_highlight_recurses_into_content() -> None:
    assert highlight("*a ~~b~~ c*") == "<em>a <s>b</s> c</em>"


def test_highlight_leaves_code_content_untouched() -> None:
    assert highlight("`a *b* c`") == "<code>a *b* c</code>"


@pytest.mark.parametrize("text", ["snake_case_name", "2*3*4", r"\*a*", "x^2^"])
def test_highlight_ignores_mid_word_and_escaped_delimiters(text: str) -> None:
    assert highlight(text) == text


def test_highlight_does_not_cross_tags() -> None:
    assert highlight("*a <b>c*") == "*a <b>c*"


def test_stash_links_parks_each_rendered_link() -> None:
    stash = Stash()
    buffer = stash_links("go [home](/) or [*away*](/away)", stash)

    assert buffer == f"go -1{SENTINEL} or -2{SENTINEL}"
    assert stash.resolve_all(buffer) == 'go <a href="/">home</a> or <a href="/away"><em>away</em></a>'


def test_stash_links_renders_images_and_escapes() -> None:
    stash = Stash()
    buffer = stash_links(r'![alt](/i.png "Image") \! \.', stash)

    assert stash.resolve_all(buffer) == '<img src="/i.png" alt="alt"/> ! .'


def test_highlight_passes_rendered_code_spans_through() -> None:
    assert highlight("<code>*x*</code> and *y*") == "<code>*x*</code> and <em>y</em>"
