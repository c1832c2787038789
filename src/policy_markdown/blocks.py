from __future__ import annotations

import re

from policy_markdown.escaping import unescape
from policy_markdown.inline import element, highlight
from policy_markdown.stash import Stash

# Block patterns run over the whole working buffer. The buffer always starts and
# ends with a newline, so "\n" doubles as the start-of-line anchor and "\Z" as
# the end of the document.
_BLOCKQUOTE_RE = re.compile(r"\n *&gt; *(?P<content>[\s\S]*?)(?=(?:\n|\Z){2})")
_QUOTE_MARK_RE = re.compile(r"^ *&gt; *", re.MULTILINE)
_RULE_RE = re.compile(r"^(?:[*\-=_] *){3,}$", re.MULTILINE)
_LIST_RE = re.compile(
    r"\n(?P<indent> *)"
    r"(?:[*\-+]|(?P<ordered>(?P<number>\d+)|(?P<lower>[a-z])|[A-Z])[.)]) +"
    r"(?P<content>[\s\S]*?)(?=(?:\n|\Z){2})",
)
_NESTED_ITEM_RE = re.compile(r"\n *(?:[*\-+]|(?:\d+|[a-zA-Z])[.)]) +")
_LIST_JOIN_RE = re.compile(r"</(?P<closing>ol|ul)>\n\n<(?P<opening>ol|ul)(?P<attrs>[^>]*)>")
_LIST_STYLE_RE = re.compile(r'style="([^"]*)"')
_CODE_RE = re.compile(
    r"\n(?:(?P<fence>```|~~~).*\n?(?P<fenced>[\s\S]*?)\n?(?P=fence)"
    r"|(?P<indented>(?: {4}.*\n){2,}))",
)
_CODE_INDENT_RE = re.compile(r"^ {4}", re.MULTILINE)
_TABLE_RE = re.compile(r"\n(?P<table>(?: *\|.*\| *\n){2,})")
_TABLE_SEPARATOR_RE = re.compile(r" *\|(?: *[:\-]+ *\|)+ *")
_CELL_SPLIT_RE = re.compile(r"(?<!\\)\|")
_HEADING_RE = re.compile(
    r"(?=^|>|\n)(?P<lead>[>\s]*?)(?P<level>#{1,6}) (?P<content>.*?)(?: #*)? *(?=\n|</blockquote>|\Z)",
)
_PARAGRAPH_RE = re.compile(r"(?=^|>|\n)\s*\n+(?P<content>[^<]*?[^<\s][^<]*?)\n+\s*(?=\n|<|\Z)")


def render_blockquotes(buffer: str) -> str:
    def replace(match: re.Match[str]) -> str:
        # Inner quotes are built unhighlighted; the outermost quote is highlighted once.
        return "\n" + element("blockquote", highlight(_nest_blockquotes(match)))

    return _BLOCKQUOTE_RE.sub(replace, buffer)


def _nest_blockquotes(match: re.Match[str]) -> str:
    content = _QUOTE_MARK_RE.sub("", match.group("content"))
    # Re-anchor the first line so a quote opening with "> >" nests too.
    nested = _BLOCKQUOTE_RE.sub(
        lambda inner: "\n" + element("blockquote", _nest_blockquotes(inner)),
        f"\n{content}",
    )
    return nested.removeprefix("\n")


def render_rules(buffer: str) -> str:
    return _RULE_RE.sub("<hr/>", buffer)


def render_lists(buffer: str) -> str:
    """Render bulleted and ordered lists, then merge lists split only by a blank line."""
    return _LIST_JOIN_RE.sub(_join_lists, _expand_lists(buffer))


def _expand_lists(text: str) -> str:
    return _LIST_RE.sub(_render_list, text)


def _render_list(match: re.Match[str]) -> str:
    indent = match.group("indent")
    marker = re.compile(rf"\n ?{indent}(?:(?:\d+|[a-zA-Z])[.)]|[*\-+]) +")
    items = [_render_list_item(chunk) for chunk in marker.split(match.group("content"))]
    entry = element("li", "</li><li>".join(items))

    ordered = match.group("ordered")
    if ordered is None:
        return "\n" + element("ul", entry)
    if match.group("number") is not None:
        return f'\n<ol start="{int(ordered)}">{entry}</ol>'

    case = "lower" if match.group("lower") is not None else "upper"
    attrs = f' style="list-style-type:{case}-alpha"'
    start = int(ordered, 36) - 9
    if start != 1:
        attrs += f' start="{start}"'
    return f"\n<ol{attrs}>{entry}</ol>"


def _render_list_item(chunk: str) -> str:
    nested = _NESTED_ITEM_RE.search(chunk)
    if nested is None:
        return highlight(chunk)
    return highlight(chunk[: nested.start()]) + _expand_lists(chunk[nested.start() :])


def _join_lists(match: re.Match[str]) -> str:
    tag = match.group("closing")
    if match.group("opening") != tag:
        return match.group(0)
    closed_end = match.start() + len(f"</{tag}>")
    previous = _opening_tag_of_closed_list(match.string[:closed_end], tag)
    if _list_style(previous) != _list_style(match.group("attrs")):
        return match.group(0)
    return ""


def _opening_tag_of_closed_list(text: str, tag: str) -> str:
    opened: list[str] = []
    last = ""
    for found in re.finditer(rf"<{tag}\b[^>]*>|</{tag}>", text):
        if found.group(0).startswith("</"):
            if opened:
                last = opened.pop()
        else:
            opened.append(found.group(0))
    return last


def _list_style(tag_text: str) -> str | None:
    found = _LIST_STYLE_RE.search(tag_text)
    return found.group(1) if found else None


def stash_code_blocks(buffer: str, stash: Stash) -> str:
    """Replace fenced and indented code blocks with block tokens; content stays verbatim."""

    def replace(match: re.Match[str]) -> str:
        code = match.group("fenced")
        if code is None:
            code = _CODE_INDENT_RE.sub("", match.group("indented")).removesuffix("\n")
        token = stash.park(element("pre", element("code", code)), block=True)
        return f"\n\n{token}\n\n"

    return _CODE_RE.sub(replace, buffer)


def render_tables(buffer: str) -> str:
    return _TABLE_RE.sub(_render_table, buffer)


def _render_table(match: re.Match[str]) -> str:
    rows = match.group("table").splitlines()
    has_header = _TABLE_SEPARATOR_RE.fullmatch(rows[1]) is not None
    if has_header:
        del rows[1]

    rendered: list[str] = []
    for index, row in enumerate(rows):
        tag = "th" if has_header and index == 0 else "td"
        cells = "".join(element(tag, _render_inline_text(cell.strip())) for cell in _split_cells(row))
        rendered.append(element("tr", cells))
    return "\n" + element("table", "".join(rendered)) + "\n"


def _split_cells(row: str) -> list[str]:
    inner = row.strip().removeprefix("|")
    if inner.endswith("|") and not inner.endswith("\\|"):
        inner = inner[:-1]
    return _CELL_SPLIT_RE.split(inner)


def render_headings(buffer: str) -> str:
    def replace(match: re.Match[str]) -> str:
        level = len(match.group("level"))
        return match.group("lead") + element(f"h{level}", _render_inline_text(match.group("content")))

    return _HEADING_RE.sub(replace, buffer)


def render_paragraphs(buffer: str, stash: Stash) -> str:
    def replace(match: re.Match[str]) -> str:
        content = match.group("content")
        if stash.is_block(content):
            return f"\n{content.strip()}\n"
        return element("p", _render_inline_text(content))

    return _PARAGRAPH_RE.sub(replace, buffer)


def _render_inline_text(text: str) -> str:
    return unescape(highlight(text))
