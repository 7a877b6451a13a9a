"""Human-readable progress reporting.

The reporter is a side channel: it prints one Rich line per patch outcome
and keeps a record of them, but nothing in the pipeline branches on what it
has seen.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from featuregen.utils import console as default_console
from featuregen.wiring.models import PatchOutcome, PatchRecord

_STYLES: dict[PatchOutcome, tuple[str, str]] = {
    PatchOutcome.CREATED: ("green", "created"),
    PatchOutcome.INSERTED: ("green", "updated"),
    PatchOutcome.SKIPPED_DUPLICATE: ("yellow", "exists"),
    PatchOutcome.SKIPPED_ANCHOR_MISSING: ("yellow", "no anchor"),
    PatchOutcome.FAILED: ("red", "failed"),
}


class Reporter:
    """Collects and prints :class:`PatchOutcome` events."""

    def __init__(self, console: Console | None = None, root: Path | None = None) -> None:
        self.console = console if console is not None else default_console
        self.root = root
        self.records: list[PatchRecord] = []

    def emit(self, outcome: PatchOutcome, path: Path, detail: str = "") -> PatchRecord:
        """Record and print a single outcome for *path*."""
        record = PatchRecord(outcome=outcome, path=path, detail=detail)
        self.records.append(record)

        color, label = _STYLES[outcome]
        line = f"[{color}]{label:>10}[/{color}]  {escape(self._display(path))}"
        if detail:
            line += f"  [dim]{escape(detail)}[/dim]"
        self.console.print(line)
        return record

    def outcomes_for(self, path: Path) -> list[PatchOutcome]:
        """Every outcome recorded for *path*, in emission order."""
        return [r.outcome for r in self.records if r.path == path]

    def counts(self) -> dict[str, int]:
        """Number of records per outcome value."""
        tally = Counter(r.outcome.value for r in self.records)
        return {outcome.value: tally.get(outcome.value, 0) for outcome in PatchOutcome}

    @property
    def failed(self) -> bool:
        return any(r.outcome is PatchOutcome.FAILED for r in self.records)

    def _display(self, path: Path) -> str:
        if self.root is not None:
            try:
                return path.relative_to(self.root).as_posix()
            except ValueError:
                pass
        return str(path)
