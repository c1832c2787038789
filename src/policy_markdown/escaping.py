from __future__ import annotations

import re

# Private use code point marking stash placeholders; stripped from raw input.
SENTINEL = "\uf8ff"

_LT_RE = re.compile(r"<")
_GT_RE = re.compile(r">")
_SPACE_RE = re.compile(rf"\t|\r|{SENTINEL}")
_ESCAPE_RE = re.compile(r"\\([\\|`*_{}\[\]()#+\-~])")


def escape_source(text: str) -> str:
    """Neutralize raw angle brackets, control whitespace and the stash sentinel."""
    text = _LT_RE.sub("&lt;", text)
    text = _GT_RE.sub("&gt;", text)
    return _SPACE_RE.sub("  ", text)


def unescape(text: str) -> str:
    return _ESCAPE_RE.sub(r"\1", text)
