from __future__ import annotations

from policy_markdown.blocks import (
    render_blockquotes,
    render_headings,
    render_lists,
    render_paragraphs,
    render_rules,
    render_tables,
    stash_code_blocks,
)
from policy_markdown.escaping import SENTINEL
from policy_markdown.stash import Stash


def test_render_rules() -> None:
    assert render_rules("\ntext\n---\n") == "\ntext\n<hr/>\n"


def test_render_blockquotes_strips_one_marker_per_level() -> None:
    buffer = "\n&gt; a\n&gt; &gt; b\n"
    assert render_blockquotes(buffer) == "\n<blockquote>a\n<blockquote>b</blockquote></blockquote>\n"


def test_render_lists_splits_items_by_indentation() -> None:
    buffer = "\n1. one\n   - inner\n2. two\n"
    assert render_lists(buffer) == '\n<ol start="1"><li>one\n<ul><li>inner</li></ul></li><li>two</li></ol>\n'


def test_render_lists_merges_same_kind_lists() -> None:
    buffer = "\na) x\n\nb) y\n"
    assert render_lists(buffer) == '\n<ol style="list-style-type:lower-alpha"><li>x</li><li>y</li></ol>\n'


def test_stash_code_blocks_parks_verbatim_content() -> None:
    stash = Stash()
    buffer = stash_code_blocks("\n```\n# not a heading\n```\n", stash)

    assert buffer == f"\n\n-1{SENTINEL}\n\n\n"
    assert stash.resolve_all(buffer).strip() == "<pre><code># not a heading</code></pre>"
    assert stash.is_block(f"-1{SENTINEL}")


def test_stash_code_blocks_needs_two_indented_lines() -> None:
    stash = Stash()
    buffer = "\n    single\n"

    assert stash_code_blocks(buffer, stash) == buffer
    assert len(stash) == 0


def test_render_tables_drops_separator_row() -> None:
    buffer = "\n| a | b |\n|:--|--:|\n| 1 | 2 |\n"
    assert render_tables(buffer) == (
        "\n<table><tr><th>a</th><th>b</th></tr><tr><td>1</td><td>2</td></tr></table>\n"
    )


def test_render_headings_keeps_preceding_markup() -> None:
    assert render_headings("\n# *One*\n") == "\n<h1><em>One</em></h1>\n"
    assert render_headings("<blockquote>### Three</blockquote>") == "<blockquote><h3>Three</h3></blockquote>"


def test_render_paragraphs_skips_existing_markup() -> None:
    stash = Stash()
    assert render_paragraphs("\n<h1>T</h1>\n\nbody _text_\n", stash) == "\n<h1>T</h1><p>body <em>text</em></p>"


def test_render_paragraphs_leaves_block_tokens_bare() -> None:
    stash = Stash()
    token = stash.park("<pre><code>x</code></pre>", block=True)

    assert render_paragraphs(f"\n\n{token}\n\n", stash) == f"\n{token}\n"


def test_render_paragraphs_ignores_whitespace_between_tags() -> None:
    stash = Stash()
    buffer = "\n<hr/>\n\n\n<hr/>\n"

    assert render_paragraphs(buffer, stash) == buffer
