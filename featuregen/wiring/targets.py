"""Apply :class:`InjectionTarget` objects to files on disk.

Each target is handled as read → guard → patch in memory → one write.
Filesystem errors are reported as ``failed`` and never propagate, so a
denied write on one file does not stop the remaining targets.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from featuregen.utils import read_text, write_text

from .anchor import patch, prepend
from .guard import apply_once
from .models import AnchorNotFound, InjectionTarget, PatchOutcome, Splice

if TYPE_CHECKING:
    from featuregen.reporting import Reporter


def apply_splices(text: str, splices: Sequence[Splice]) -> str | AnchorNotFound:
    """Apply *splices* in order to an in-memory copy of *text*.

    The first required splice whose anchor is missing aborts the whole
    sequence; the caller then still holds the original, unmodified text.
    """
    current = text
    for splice in splices:
        if splice.skip_if_present and splice.fragment.strip() in current:
            continue
        result = patch(current, splice.anchor, splice.fragment, splice.position)
        if isinstance(result, AnchorNotFound):
            if not splice.prepend_if_missing:
                return result
            result = prepend(current, splice.fragment.lstrip("\n"))
        current = result
    return current


def apply_target(target: InjectionTarget, reporter: Reporter) -> PatchOutcome:
    """Wire one module into ``target.path`` and report the outcome.

    When the file does not exist and ``target.fallback_content`` is set, the
    fallback is written first (reported as ``created-new-file``) and then
    patched like any existing file.

    Returns:
        The outcome of the patch attempt itself.
    """
    path = target.path

    try:
        missing = not path.exists()
        if missing and target.fallback_content is not None:
            write_text(path, target.fallback_content)
    except OSError as exc:
        reporter.emit(PatchOutcome.FAILED, path, f"could not create: {exc}")
        return PatchOutcome.FAILED

    if missing:
        if target.fallback_content is None:
            reporter.emit(PatchOutcome.FAILED, path, "file not found")
            return PatchOutcome.FAILED
        reporter.emit(PatchOutcome.CREATED, path)

    try:
        text = read_text(path)
    except OSError as exc:
        reporter.emit(PatchOutcome.FAILED, path, f"could not read: {exc}")
        return PatchOutcome.FAILED

    patched, outcome = apply_once(
        text, target.marker, lambda current: apply_splices(current, target.splices)
    )

    if outcome is PatchOutcome.INSERTED:
        try:
            write_text(path, patched)
        except OSError as exc:
            reporter.emit(PatchOutcome.FAILED, path, f"could not write: {exc}")
            return PatchOutcome.FAILED

    reporter.emit(outcome, path, _describe(outcome, target))
    return outcome


def _describe(outcome: PatchOutcome, target: InjectionTarget) -> str:
    if outcome is PatchOutcome.SKIPPED_DUPLICATE:
        return f"already contains {target.marker}"
    if outcome is PatchOutcome.SKIPPED_ANCHOR_MISSING:
        return "insertion point not found, file left untouched"
    return ""
