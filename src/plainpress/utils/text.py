"""Text helpers for turning HTML bodies into listing summaries."""

from __future__ import annotations

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import Comment, Declaration, Doctype, NavigableString, PreformattedString, Tag

from plainpress.errors import SummaryParseError
from plainpress.models import Document

SUMMARY_LIMIT = 500
ELLIPSIS = "..."


def _check_string(node: NavigableString) -> None:
    if isinstance(node, Comment):
        raise SummaryParseError("Unexpected comment node")
    if isinstance(node, (Doctype, Declaration)):
        raise SummaryParseError("Unexpected document node")
    if isinstance(node, PreformattedString):
        raise SummaryParseError(f"Unexpected {type(node).__name__} node")


def html_to_text(markup: str) -> str:
    """Concatenate the text nodes of an HTML fragment, depth first.

    Whitespace is kept exactly as parsed. Comments, doctypes and other
    non-text strings make the whole fragment invalid.
    """
    try:
        soup = BeautifulSoup(markup, "html.parser")
    except ParserRejectedMarkup as exc:
        raise SummaryParseError(f"Rejected markup: {exc}") from exc
    parts: list[str] = []
    for node in soup.descendants:
        if isinstance(node, Tag):
            continue
        if isinstance(node, NavigableString):
            _check_string(node)
            parts.append(str(node))
            continue
        raise SummaryParseError(f"Unknown node type {type(node).__name__}")
    return "".join(parts)


def truncate_summary(text: str, *, limit: int = SUMMARY_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


def summarize(document: Document, enabled: bool) -> Document:
    """Replace the document body with its plain-text summary when enabled.

    Raises SummaryParseError and leaves the body untouched on rejected markup.
    """
    if enabled:
        document.body = truncate_summary(html_to_text(document.body))
    return document
