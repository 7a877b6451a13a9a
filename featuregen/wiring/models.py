"""Pydantic v2 models for the text-patching engine.

Every value here is run-scoped: targets are built fresh from the module
identifier on each invocation and never persisted. The file system is the
only state that survives a run.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class PatchOutcome(str, Enum):
    """Result of one attempt to create or patch a file."""
    CREATED = "created-new-file"
    INSERTED = "inserted"
    SKIPPED_DUPLICATE = "skipped-duplicate"
    SKIPPED_ANCHOR_MISSING = "skipped-anchor-missing"
    FAILED = "failed"


class InsertPosition(str, Enum):
    """Where a fragment is spliced relative to its anchor."""
    AFTER_MATCH = "after_match"
    AFTER_OPEN_BRACKET = "after_open_bracket"
    BEFORE_LAST_MATCH = "before_last_match"
    AFTER_LAST_MATCH_LINE = "after_last_match_line"


# ---------------------------------------------------------------------------
# Patch values
# ---------------------------------------------------------------------------

class AnchorNotFound(BaseModel):
    """Returned instead of patched text when the anchor does not occur."""

    model_config = ConfigDict(frozen=True)

    anchor: str = Field(..., description="Pattern that could not be located")


class Splice(BaseModel):
    """A single fragment insertion into a target file."""

    model_config = ConfigDict(frozen=True)

    anchor: str = Field(..., description="Regular expression (multiline mode) to locate")
    fragment: str = Field(..., description="Text inserted verbatim")
    position: InsertPosition = Field(default=InsertPosition.AFTER_MATCH)
    skip_if_present: bool = Field(
        default=False,
        description="Drop this splice when the stripped fragment is already in the text",
    )
    prepend_if_missing: bool = Field(
        default=False,
        description="Insert at the top of the text instead of aborting when the anchor is absent",
    )


class InjectionTarget(BaseModel):
    """Everything needed to wire one module into one existing file."""

    model_config = ConfigDict(frozen=True)

    path: Path
    marker: str = Field(..., description="Substring unique to a prior successful insertion")
    splices: list[Splice] = Field(default_factory=list)
    fallback_content: Optional[str] = Field(
        default=None,
        description="Content written first when the file does not exist yet",
    )


class PatchRecord(BaseModel):
    """One outcome as seen by the reporter."""

    outcome: PatchOutcome
    path: Path
    detail: str = ""
