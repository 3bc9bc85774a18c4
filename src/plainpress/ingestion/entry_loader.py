"""Plain-text entry loading.

An entry file is a title line, an optional block of ``meta-<name>: <value>``
header lines terminated by a blank line, and a free-form body.
"""

from __future__ import annotations

import logging
import os
import re
from datetime import datetime, timezone
from pathlib import Path

from plainpress.errors import InvalidDocumentError, IOFailureError, NotFoundError
from plainpress.models import Document

LOGGER = logging.getLogger(__name__)

HEADER_PATTERN = re.compile(r"^meta-([A-Za-z]+):[ \t]*(.*)$")


def _split_lines(text: str) -> list[str]:
    lines = text.split("\n")
    # A final newline terminates the last line, it does not start a new one.
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _apply_header(document: Document, name: str, value: str) -> None:
    if name == "tags":
        document.tags = [tag.strip() for tag in value.split(",")]
    elif name == "author":
        document.author = value
    else:
        LOGGER.debug("Ignoring unknown header meta-%s in %s", name, document.source_path)


def split_entry(text: str, *, path: Path, created_at: datetime) -> Document:
    """Split raw entry text into a Document.

    Raises InvalidDocumentError when the text holds no line at all.
    """
    lines = _split_lines(text)
    if not lines:
        raise InvalidDocumentError(f"Invalid entry file: {path}")

    document = Document(source_path=path, title=lines[0].strip(), created_at=created_at)
    body: list[str] = []
    in_body = False

    for line in lines[1:]:
        line = line.rstrip("\r")
        if in_body:
            body.append(line + "\n")
            continue
        if not line.strip():
            in_body = True
            continue
        match = HEADER_PATTERN.match(line.strip())
        if match:
            _apply_header(document, match.group(1), match.group(2))
        else:
            body.append(line + "\n")

    document.body = "".join(body)
    return document


def parse_one(path: Path | str) -> Document:
    """Read and parse a single entry file."""
    path = Path(os.path.abspath(path))
    try:
        stat = path.stat()
    except FileNotFoundError as exc:
        raise NotFoundError(f"File not found: {path}") from exc
    except OSError as exc:
        raise IOFailureError(f"Unable to stat {path}: {exc}") from exc

    try:
        with path.open("rb") as handle:
            raw = handle.read()
    except FileNotFoundError as exc:
        raise NotFoundError(f"File not found: {path}") from exc
    except OSError as exc:
        raise IOFailureError(f"Unable to read {path}: {exc}") from exc

    created_at = datetime.fromtimestamp(int(stat.st_ctime), tz=timezone.utc)
    return split_entry(raw.decode("utf-8", errors="replace"), path=path, created_at=created_at)
