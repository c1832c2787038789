from __future__ import annotations

import re

from policy_markdown.blocks import (
    render_blockquotes,
    render_headings,
    render_lists,
    render_paragraphs,
    render_rules,
    render_tables,
    stash_code_blocks,
)
from policy_markdown.escaping import escape_source
from policy_markdown.inline import stash_links
from policy_markdown.stash import Stash

_LINE_ENDING_RE = re.compile(r"\r\n?")


def compile_markdown(markdown_text: str) -> str:
    """Compile the policy Markdown dialect into an HTML fragment.

    Supported:
    - Blockquotes (`>`, nestable), horizontal rules (`***`, `---`, `===`, `___`)
    - Lists: `-`/`*`/`+` bullets, `1.`/`1)` numbers, `a.`/`A)` letters, nested by indentation
    - Code blocks: ``` or ~~~ fences, 4-space indented runs
    - Links `[text](url)`, images `![alt](url)`, backslash escapes
    - Tables with an optional `| --- |` header separator
    - Headings `#` .. `######`, paragraphs
    - Inline marks: `*em*`, `**strong**`, `~sub~`, `~~strike~~`, `^sup^`,
      `--small--`, `++big++`, `` `code` ``

    The output is not sanitized: only raw `<`/`>` in text are escaped, URLs are
    emitted verbatim.
    """
    text = _LINE_ENDING_RE.sub("\n", markdown_text)
    if not text.strip():
        return ""

    stash = Stash()
    buffer = escape_source(f"\n{text}\n")
    buffer = render_blockquotes(buffer)
    buffer = render_rules(buffer)
    buffer = render_lists(buffer)
    buffer = stash_code_blocks(buffer, stash)
    buffer = stash_links(buffer, stash)
    buffer = render_tables(buffer)
    buffer = render_headings(buffer)
    buffer = render_paragraphs(buffer, stash)
    return stash.resolve_all(buffer).strip()
