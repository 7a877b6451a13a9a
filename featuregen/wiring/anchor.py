"""Anchor-based splicing of fragments into unstructured source text.

:func:`patch` locates a textual landmark and inserts a fragment next to it
with a single splice. Nothing around the insertion point is reformatted, so
line endings and indentation outside the fragment are preserved byte for
byte. A missing anchor is an ordinary return value, not an exception.
"""

from __future__ import annotations

import re
from typing import Union

from .models import AnchorNotFound, InsertPosition

Anchor = Union[str, re.Pattern]


def literal(text: str) -> str:
    """Return a pattern that matches *text* verbatim."""
    return re.escape(text)


def compile_anchor(anchor: Anchor) -> re.Pattern[str]:
    """Compile *anchor* in multiline mode (``^``/``$`` match at line bounds)."""
    if isinstance(anchor, re.Pattern):
        return anchor
    return re.compile(anchor, re.MULTILINE)


def find_offset(
    text: str,
    anchor: Anchor,
    position: InsertPosition,
    bracket: str = "[",
) -> int | None:
    """Compute the insertion offset for *position*, or ``None`` if absent."""
    pattern = compile_anchor(anchor)

    if position is InsertPosition.AFTER_MATCH:
        match = pattern.search(text)
        return match.end() if match else None

    if position is InsertPosition.AFTER_OPEN_BRACKET:
        match = pattern.search(text)
        if match is None:
            return None
        # The bracket may be part of the match itself or follow it.
        if match.group().endswith(bracket):
            return match.end()
        opening = text.find(bracket, match.end())
        return opening + len(bracket) if opening != -1 else None

    matches = list(pattern.finditer(text))
    if not matches:
        return None
    last = matches[-1]

    if position is InsertPosition.BEFORE_LAST_MATCH:
        return last.start()

    # AFTER_LAST_MATCH_LINE
    newline = text.find("\n", last.end())
    return len(text) if newline == -1 else newline + 1


def patch(
    text: str,
    anchor: Anchor,
    fragment: str,
    position: InsertPosition = InsertPosition.AFTER_MATCH,
    *,
    bracket: str = "[",
) -> str | AnchorNotFound:
    """Splice *fragment* into *text* at the point selected by *position*.

    Args:
        text: The complete file content.
        anchor: Regular expression (or compiled pattern) searched left to
            right.
        fragment: Text inserted verbatim.
        position: Which side of which match the fragment goes.
        bracket: Opening bracket looked for by ``AFTER_OPEN_BRACKET``.

    Returns:
        The patched text, or :class:`AnchorNotFound` when the anchor (or the
        bracket following it) does not occur. The fragment is never checked
        for prior presence here.
    """
    offset = find_offset(text, anchor, position, bracket)
    if offset is None:
        pattern = compile_anchor(anchor)
        return AnchorNotFound(anchor=pattern.pattern)

    if position is InsertPosition.AFTER_LAST_MATCH_LINE and offset == len(text):
        if text and not text.endswith("\n"):
            fragment = "\n" + fragment

    return text[:offset] + fragment + text[offset:]


def prepend(text: str, fragment: str) -> str:
    """Insert *fragment* at the very top of *text*."""
    return fragment + text
