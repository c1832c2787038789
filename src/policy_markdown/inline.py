from __future__ import annotations

import re

from policy_markdown.escaping import unescape
from policy_markdown.stash import Stash

_HIGHLIGHT_RE = re.compile(
    r"(?P<lead>^|[^A-Za-z0-9\\])"
    r"(?P<delim>(?P<emphasis>[*_])|(?P<sub>~)|(?P<sup>\^)|(?P<small>--)|(?P<big>\+\+)|`)"
    r"(?P<double>(?P=delim)?)"
    r"(?P<content>[^<]*?)"
    r"(?P=delim)(?P=double)(?!(?P=delim))"
    r"(?=[^A-Za-z0-9]|\Z)",
)

_CODE_SPAN_RE = re.compile(r"(<code>[\s\S]*?</code>)")

_LINK_RE = re.compile(
    r"(?P<link>(?P<bang>!?)\[(?P<text>.*?)\]\((?P<url>.*?)(?P<title> \".*\")?\))"
    r"|\\(?P<escaped>[\\`*_{}\[\]()#+\-.!~])",
)


def element(tag: str, content: str) -> str:
    return f"<{tag}>{content}</{tag}>"


def highlight(text: str) -> str:
    """Render delimiter-bounded inline marks, recursing into their content.

    Supported marks:
    - `*em*` / `_em_`, `**strong**` / `__strong__`
    - `~sub~`, `~~strike~~`
    - `^sup^`
    - `--small--`, `++big++`
    - `` `code` `` (content left untouched)

    Code spans rendered by an earlier call are passed through unchanged.
    """
    parts = _CODE_SPAN_RE.split(text)
    return "".join(
        part if index % 2 else _HIGHLIGHT_RE.sub(_render_highlight, part) for index, part in enumerate(parts)
    )


def _render_highlight(match: re.Match[str]) -> str:
    content = match.group("content")
    tag = _highlight_tag(match)
    if tag != "code":
        content = highlight(content)
    return match.group("lead") + element(tag, content)


def _highlight_tag(match: re.Match[str]) -> str:
    doubled = bool(match.group("double"))
    if match.group("emphasis"):
        return "strong" if doubled else "em"
    if match.group("sub"):
        return "s" if doubled else "sub"
    if match.group("sup"):
        return "sup"
    if match.group("small"):
        return "small"
    if match.group("big"):
        return "big"
    return "code"


def stash_links(buffer: str, stash: Stash) -> str:
    """Render links, images and backslash escapes, parking each result in the stash."""

    def replace(match: re.Match[str]) -> str:
        return stash.park(_render_link(match))

    return _LINK_RE.sub(replace, buffer)


def _render_link(match: re.Match[str]) -> str:
    escaped = match.group("escaped")
    if escaped is not None:
        return escaped

    text = match.group("text")
    url = match.group("url")
    if match.group("bang"):
        if not url:
            return match.group("link")
        return f'<img src="{url}" alt="{text}"/>'
    return f'<a href="{url}">{unescape(highlight(text))}</a>'
