"""Recursive discovery and parsing of entry files."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from plainpress.errors import IOFailureError, NotFoundError, PlainpressError
from plainpress.ingestion.entry_loader import parse_one
from plainpress.models import Document, ScanOutcome
from plainpress.utils.files import iter_entry_paths

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ScanReport:
    outcomes: list[ScanOutcome] = field(default_factory=list)

    def record(self, outcome: ScanOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def kept(self) -> list[ScanOutcome]:
        return [outcome for outcome in self.outcomes if outcome.kept]

    @property
    def dropped(self) -> list[ScanOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.kept]

    @property
    def documents(self) -> list[Document]:
        return [outcome.document for outcome in self.outcomes if outcome.document is not None]


def _check_root(root: Path) -> None:
    try:
        is_dir = root.is_dir()
        exists = is_dir or root.exists()
    except OSError as exc:
        raise IOFailureError(f"Unable to access {root}: {exc}") from exc
    if not exists:
        raise NotFoundError(f"Directory not found: {root}")
    if not is_dir:
        raise NotFoundError(f"Not a directory: {root}")
    if not os.access(root, os.R_OK | os.X_OK):
        raise IOFailureError(f"Permission denied: {root}")


class Scanner:
    """Walks a directory tree and parses every entry file found."""

    def __init__(self, parser: Callable[[Path], Document] = parse_one) -> None:
        self.parser = parser

    def scan(self, root: Path | str) -> ScanReport:
        """Parse all entries under root.

        Failures on individual files are recorded as dropped outcomes; a
        missing or unreadable root raises.
        """
        root = Path(os.path.abspath(root))
        _check_root(root)

        report = ScanReport()
        for path in iter_entry_paths(root):
            try:
                document = self.parser(path)
            except (PlainpressError, OSError) as exc:
                LOGGER.warning("Skipping %s: %s", path, exc)
                report.record(ScanOutcome(path=path, reason=str(exc)))
                continue
            report.record(ScanOutcome(path=path, document=document))

        LOGGER.debug(
            "Scanned %s: %d kept, %d dropped", root, len(report.kept), len(report.dropped)
        )
        return report


def scan_tree(root: Path | str) -> list[Document]:
    """Return the documents successfully parsed under root."""
    return Scanner().scan(root).documents
