"""FastAPI application exposing entries and listings."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import FileResponse
from pydantic import BaseModel

from plainpress.config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from plainpress.errors import NotFoundError, PlainpressError
from plainpress.index.collection import parse_tree
from plainpress.ingestion.entry_loader import parse_one
from plainpress.models import Document
from plainpress.utils.files import PAGE_SUFFIX, identifier_to_path

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="plainpress", version="0.1.0")
app.state.config_path = DEFAULT_CONFIG_PATH


class TagView(BaseModel):
    name: str


class EntryView(BaseModel):
    id: Optional[str] = None
    filename: str
    title: str
    body: str
    created: str
    author: Optional[str] = None
    tags: List[TagView] = []

    @classmethod
    def from_document(cls, document: Document) -> "EntryView":
        return cls(**document.to_dict())


class EntryPage(BaseModel):
    config: dict[str, Any]
    entry: EntryView


class ListingPage(BaseModel):
    config: dict[str, Any]
    entries: List[EntryView]


def get_config(request: Request) -> AppConfig:
    """Reload the configuration for every request."""
    try:
        return load_config(request.app.state.config_path)
    except PlainpressError as exc:
        LOGGER.error("Configuration error: %s", exc)
        raise HTTPException(status_code=500, detail="Server Error") from exc


def _contained(root: Path, relative: str) -> Optional[Path]:
    base = Path(os.path.realpath(root))
    target = Path(os.path.realpath(base / relative))
    if target != base and not str(target).startswith(str(base) + os.sep):
        return None
    return target


def _resolve_under(root: Path, relative: str) -> Path:
    """Join relative onto root, refusing anything that escapes it."""
    target = _contained(root, relative)
    if target is None:
        raise HTTPException(status_code=404, detail="File Not Found")
    return target


def _static_file(config: AppConfig, path: str) -> Optional[Path]:
    """Return the file under the static directory matching path, if any."""
    static_dir = config.resolve_static_dir(Path.cwd())
    if static_dir is None or not path:
        return None
    target = _contained(static_dir, path)
    if target is None or not target.is_file():
        return None
    return target


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


def _listing(config: AppConfig, path: str) -> ListingPage:
    directory = _resolve_under(config.resolve_content_root(Path.cwd()), path)
    if not directory.is_dir():
        raise HTTPException(status_code=404, detail="File Not Found")

    try:
        collection = parse_tree(directory, config.use_summary)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail="File Not Found") from exc
    except PlainpressError as exc:
        LOGGER.error("Unable to list %s: %s", directory, exc)
        raise HTTPException(status_code=500, detail="Server Error") from exc

    if collection is None:
        raise HTTPException(status_code=404, detail="No entries")
    return ListingPage(
        config=config.to_dict(),
        entries=[EntryView.from_document(document) for document in collection],
    )


def _entry(config: AppConfig, path: str) -> EntryPage:
    root = config.resolve_content_root(Path.cwd())
    source = _resolve_under(root, str(identifier_to_path(Path("."), path)))
    if not source.exists():
        raise HTTPException(status_code=404, detail="File Not Found")

    try:
        document = parse_one(source)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail="File Not Found") from exc
    except PlainpressError as exc:
        LOGGER.error("Unable to render %s: %s", source, exc)
        raise HTTPException(status_code=500, detail="Server Error") from exc

    document.identifier = path
    return EntryPage(config=config.to_dict(), entry=EntryView.from_document(document))


@app.get("/{path:path}")
async def render(path: str, config: AppConfig = Depends(get_config)) -> Any:
    static = _static_file(config, path)
    if static is not None:
        return FileResponse(static)
    if path == "" or path.endswith("/"):
        return _listing(config, path)
    if len(path) > len(PAGE_SUFFIX) and path.endswith(PAGE_SUFFIX):
        return _entry(config, path)
    raise HTTPException(status_code=404, detail="File Not Found")
