from __future__ import annotations

import re
from typing import List, Optional, Pattern, Tuple

# Applied in order. Links and tags go first so their inner text survives; whitespace
# collapse runs last in _reduce_once.
_MARKDOWN_RULES: List[Tuple[Pattern[str], str]] = [
    (re.compile(r"\[([^\]]+)\]\(([^)]+)\)"), r"\1"),  # [text](url)
    (re.compile(r"<[^>]*>"), ""),  # inline HTML
    (re.compile(r"`([^`]+)`"), r"\1"),
    (re.compile(r"\*\*([^*]+)\*\*"), r"\1"),
    (re.compile(r"__([^_]+)__"), r"\1"),
    (re.compile(r"\*([^*]+)\*"), r"\1"),
    (re.compile(r"_([^_]+)_"), r"\1"),
    (re.compile(r"~~([^~]+)~~"), r"\1"),
    (re.compile(r"^\s{0,3}(#{1,6}\s+)", re.MULTILINE), ""),  # headings
    (re.compile(r"^\s{0,3}>\s?", re.MULTILINE), ""),  # blockquotes
    (re.compile(r"^\s{0,3}([-*+]\s+)", re.MULTILINE), ""),  # bullets
    (re.compile(r"^\s{0,3}(\d+\.\s+)", re.MULTILINE), ""),  # ordered lists
]

_WHITESPACE_RE = re.compile(r"\s+")


def _reduce_once(text: str) -> str:
    out = text
    for pattern, repl in _MARKDOWN_RULES:
        out = pattern.sub(repl, out)
    return _WHITESPACE_RE.sub(" ", out).strip()


def plain_text_from_markdown(text: Optional[str]) -> str:
    """
    Reduce short Markdown (product slogans, descriptions) to a single line of text
    for cards and lists. Not a Markdown parser: unbalanced markup is left as-is.

    Rules are reapplied until the text stops changing, so nested markers
    (`- - x`, `> > quote`, `[[a](b)](c)`) are fully unwrapped and the result is a
    fixed point: reducing it again returns it unchanged.
    """
    raw = "" if text is None else str(text)
    if not raw:
        return ""

    out = raw.replace("\r\n", "\n")
    # After the first pass every change removes characters, so this terminates.
    for _ in range(len(out) + 2):
        reduced = _reduce_once(out)
        if reduced == out:
            break
        out = reduced
    return out
