"""Exception hierarchy shared by the ingestion pipeline."""

from __future__ import annotations


class PlainpressError(Exception):
    """Base class for every error raised by plainpress."""


class NotFoundError(PlainpressError):
    """The requested source file or directory does not exist."""


class IOFailureError(PlainpressError):
    """A read or stat failed for a reason other than absence."""


class InvalidDocumentError(PlainpressError):
    """The file exists but no title line could be established."""


class SummaryParseError(PlainpressError):
    """An HTML body contained a node kind the summarizer rejects."""


class ConfigError(PlainpressError):
    """The configuration side file could not be decoded."""
