from __future__ import annotations

import re

from policy_markdown.escaping import SENTINEL

TOKEN_RE = re.compile(rf"-(\d+){SENTINEL}")


class Stash:
    """Parks rendered fragments behind placeholder tokens for the duration of one compile.

    Tokens are ``-1``, ``-2``, ... followed by the sentinel, allocated in decreasing
    order and never reused. Later passes only ever see the token text, so nothing
    they match can reach into a parked fragment.
    """

    def __init__(self) -> None:
        self._fragments: list[str] = []
        self._blocks: set[int] = set()

    def __len__(self) -> int:
        return len(self._fragments)

    def park(self, fragment: str, *, block: bool = False) -> str:
        self._fragments.append(fragment)
        index = len(self._fragments)
        if block:
            self._blocks.add(index)
        return f"-{index}{SENTINEL}"

    def is_block(self, text: str) -> bool:
        match = TOKEN_RE.fullmatch(text.strip())
        if match is None:
            return False
        return int(match.group(1)) in self._blocks

    def resolve_all(self, buffer: str) -> str:
        return TOKEN_RE.sub(self._resolve_token, buffer)

    def _resolve_token(self, match: re.Match[str]) -> str:
        index = int(match.group(1))
        if not 1 <= index <= len(self._fragments):
            return match.group(0)
        return self._fragments[index - 1]
