"""Core plainpress data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional


@dataclass(slots=True)
class Document:
    """One parsed text file: title, header metadata and body."""

    source_path: Path
    title: str
    created_at: datetime
    body: str = ""
    author: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    identifier: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Data shape consumed by the rendering layer."""
        return {
            "id": self.identifier,
            "filename": str(self.source_path),
            "title": self.title,
            "body": self.body,
            "created": self.created_at.isoformat(),
            "author": self.author,
            "tags": [{"name": name} for name in self.tags],
        }


@dataclass(slots=True)
class ScanOutcome:
    """Result of scanning a single candidate file.

    Exactly one of ``document`` (kept) or ``reason`` (dropped) is set.
    """

    path: Path
    document: Optional[Document] = None
    reason: Optional[str] = None

    @property
    def kept(self) -> bool:
        return self.document is not None


@dataclass(slots=True)
class Collection:
    """Documents found under one directory root."""

    root: Path
    documents: List[Document] = field(default_factory=list)

    def __iter__(self) -> Iterator[Document]:
        return iter(self.documents)

    def __len__(self) -> int:
        return len(self.documents)

    def get(self, identifier: str) -> Optional[Document]:
        for document in self.documents:
            if document.identifier == identifier:
                return document
        return None

    def to_list(self) -> List[Dict[str, Any]]:
        return [document.to_dict() for document in self.documents]
