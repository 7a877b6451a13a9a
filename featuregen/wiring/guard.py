"""Containment pre-check that makes patching idempotent."""

from __future__ import annotations

from collections.abc import Callable

from .models import AnchorNotFound, PatchOutcome

PatchFn = Callable[[str], "str | AnchorNotFound"]


def apply_once(text: str, marker: str, patch_fn: PatchFn) -> tuple[str, PatchOutcome]:
    """Apply *patch_fn* to *text* unless *marker* is already present.

    Args:
        text: Current file content.
        marker: Literal substring left behind by a prior successful insertion
            for the same module.
        patch_fn: Callable wrapping one or more anchor patches.

    Returns:
        ``(text, SKIPPED_DUPLICATE)`` without calling *patch_fn* when the
        marker is found, ``(text, SKIPPED_ANCHOR_MISSING)`` when *patch_fn*
        reports a missing anchor, otherwise ``(patched, INSERTED)``.
    """
    if marker in text:
        return text, PatchOutcome.SKIPPED_DUPLICATE

    result = patch_fn(text)
    if isinstance(result, AnchorNotFound):
        return text, PatchOutcome.SKIPPED_ANCHOR_MISSING
    return result, PatchOutcome.INSERTED
