"""Utility helpers for working with entry files."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Iterator

LOGGER = logging.getLogger(__name__)

ENTRY_SUFFIX = ".txt"
PAGE_SUFFIX = ".html"


def is_entry_file(path: Path) -> bool:
    return path.name.lower().endswith(ENTRY_SUFFIX)


def iter_entry_paths(root: Path) -> Iterator[Path]:
    """Yield entry files under root, descending into directories in name order."""
    try:
        children = sorted(root.iterdir(), key=lambda child: child.name)
    except OSError as exc:
        LOGGER.warning("Unable to list %s: %s", root, exc)
        return

    for child in children:
        if child.is_dir():
            if child.is_symlink():
                LOGGER.debug("Not following symlinked directory %s", child)
                continue
            yield from iter_entry_paths(child)
        elif child.is_file() and is_entry_file(child):
            yield child


def derive_identifier(root: Path, source_path: Path) -> str:
    """Return the page identifier for an entry, relative to its collection root."""
    relative = Path(source_path).relative_to(root).as_posix()
    return relative[: -len(ENTRY_SUFFIX)] + PAGE_SUFFIX


def identifier_to_path(root: Path, identifier: str) -> Path:
    """Map a page identifier back to the entry file it was derived from."""
    if not identifier.endswith(PAGE_SUFFIX):
        raise ValueError(f"Not a page identifier: {identifier}")
    source = PurePosixPath(identifier[: -len(PAGE_SUFFIX)] + ENTRY_SUFFIX)
    return Path(root).joinpath(*source.parts)
