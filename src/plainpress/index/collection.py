"""Collection assembly: scan, summarize and identify."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from plainpress.errors import SummaryParseError
from plainpress.index.scanner import Scanner
from plainpress.models import Collection
from plainpress.utils.files import derive_identifier
from plainpress.utils.text import summarize as summarize_document

LOGGER = logging.getLogger(__name__)


def parse_tree(
    root: Path | str, summarize: bool = False, *, scanner: Scanner | None = None
) -> Optional[Collection]:
    """Build the collection of entries under root.

    Returns None when no entry could be parsed. Summaries are best effort: a
    body with rejected markup is kept as is.
    """
    root = Path(os.path.abspath(root))
    report = (scanner or Scanner()).scan(root)

    documents = report.documents
    if not documents:
        LOGGER.info("No entries found under %s", root)
        return None

    for document in documents:
        try:
            summarize_document(document, summarize)
        except SummaryParseError as exc:
            LOGGER.debug("Keeping full body for %s: %s", document.source_path, exc)
        document.identifier = derive_identifier(root, document.source_path)

    return Collection(root=root, documents=documents)
