"""Tests for the idempotency guard (featuregen.wiring.guard)."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from featuregen.wiring.anchor import patch
from featuregen.wiring.guard import apply_once
from featuregen.wiring.models import AnchorNotFound, InsertPosition, PatchOutcome

pytestmark = pytest.mark.unit


class TestApplyOnce:
    def test_marker_present_short_circuits(self):
        patch_fn = MagicMock(return_value="changed")
        text = "path: '/home'"
        result, outcome = apply_once(text, "path: '/home'", patch_fn)
        assert result == text
        assert outcome is PatchOutcome.SKIPPED_DUPLICATE
        patch_fn.assert_not_called()

    def test_inserted(self):
        patch_fn = MagicMock(return_value="patched")
        result, outcome = apply_once("original", "marker", patch_fn)
        assert result == "patched"
        assert outcome is PatchOutcome.INSERTED
        patch_fn.assert_called_once_with("original")

    def test_anchor_missing_keeps_text(self):
        patch_fn = MagicMock(return_value=AnchorNotFound(anchor="x"))
        result, outcome = apply_once("original", "marker", patch_fn)
        assert result == "original"
        assert outcome is PatchOutcome.SKIPPED_ANCHOR_MISSING

    def test_second_application_is_noop(self):
        def patch_fn(text: str):
            return patch(text, r"list:\s*\[", "'item', ", InsertPosition.AFTER_OPEN_BRACKET)

        once, first = apply_once("list: []", "'item'", patch_fn)
        twice, second = apply_once(once, "'item'", patch_fn)
        assert first is PatchOutcome.INSERTED
        assert second is PatchOutcome.SKIPPED_DUPLICATE
        assert once == twice == "list: ['item', ]"
