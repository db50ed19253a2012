"""
Normalisation of arXiv Atom feeds into Paper records.

Parsing happens in two passes:
  1. XML  -> FeedEntry   (raw strings, validated by pydantic, nothing cleaned yet)
  2. FeedEntry -> Paper  (whitespace cleanup, sentinels, PDF URL resolution)

A feed that cannot be parsed yields no papers; callers treat it exactly like
an empty result set.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from typing import Optional

from pydantic import ValidationError

from arxiv_explorer.models import FeedAuthor, FeedCategory, FeedEntry, FeedLink, Paper

LOGGER = logging.getLogger(__name__)

NO_ABSTRACT = "No abstract available"
UNKNOWN_AUTHOR = "Unknown"
UNKNOWN_CATEGORY = "Unknown"
UNKNOWN_ID = "unknown"
UNKNOWN_DATE = "Unknown date"

_WHITESPACE_RUN = re.compile(r"\s+")
_LINE_EDGE_BLANKS = re.compile(r"[ \t]*\n[ \t]*")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")
_SPACE_RUN = re.compile(r"[ \t]{2,}")
_INLINE_MATH = re.compile(r"\$([^$]+)\$")
_VERSION_SUFFIX = re.compile(r"v\d+$")


# ---------------------------------------------------------------------------
# XML -> FeedEntry
# ---------------------------------------------------------------------------

def _local(tag: str) -> str:
    """Strip an ElementTree '{namespace}' prefix from a tag name."""
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local(child.tag) == name]


def _child_text(element: ET.Element, name: str) -> Optional[str]:
    for child in _children(element, name):
        return "".join(child.itertext())
    return None


def _read_entry(element: ET.Element) -> FeedEntry:
    authors = [
        FeedAuthor(name=_child_text(author, "name"))
        for author in _children(element, "author")
    ]
    categories = [
        FeedCategory(term=category.get("term"))
        for category in _children(element, "category")
    ]
    links = [
        FeedLink(href=link.get("href"), title=link.get("title"), rel=link.get("rel"))
        for link in _children(element, "link")
    ]
    return FeedEntry(
        id=_child_text(element, "id"),
        title=_child_text(element, "title"),
        summary=_child_text(element, "summary"),
        published=_child_text(element, "published"),
        updated=_child_text(element, "updated"),
        authors=authors,
        categories=categories,
        links=links,
    )


def parse_entries(raw_xml: str) -> list[FeedEntry]:
    """Read every <entry> of an Atom feed. Raises ET.ParseError on bad XML."""
    root = ET.fromstring(raw_xml)
    if _local(root.tag) == "entry":
        return [_read_entry(root)]
    return [_read_entry(entry) for entry in _children(root, "entry")]


# ---------------------------------------------------------------------------
# FeedEntry -> Paper
# ---------------------------------------------------------------------------

def clean_title(raw: Optional[str]) -> str:
    return _WHITESPACE_RUN.sub(" ", raw or "").strip()


def clean_abstract(raw: Optional[str]) -> str:
    if not raw or not raw.strip():
        return NO_ABSTRACT
    text = raw.replace("\r\n", "\n").replace("\r", "\n")
    text = _LINE_EDGE_BLANKS.sub("\n", text)
    text = _EXCESS_NEWLINES.sub("\n\n", text)
    text = _SPACE_RUN.sub(" ", text)
    text = _INLINE_MATH.sub(r"\1", text)
    return text.strip()


def resolve_pdf_url(entry: FeedEntry) -> str:
    for link in entry.links:
        if link.title == "pdf" and link.href:
            return link.href if link.href.endswith(".pdf") else link.href + ".pdf"

    if not entry.id:
        return ""
    # http://arxiv.org/abs/2304.01628v2 -> http://arxiv.org/pdf/2304.01628.pdf
    base = entry.id.strip().replace("/abs/", "/pdf/", 1)
    return _VERSION_SUFFIX.sub("", base) + ".pdf"


def extract_arxiv_id(entry: FeedEntry) -> str:
    if not entry.id or not entry.id.strip():
        return UNKNOWN_ID
    return entry.id.strip().split("/")[-1] or UNKNOWN_ID


def to_paper(entry: FeedEntry) -> Paper:
    authors = [(author.name or "").strip() or UNKNOWN_AUTHOR for author in entry.authors]
    categories = [category.term for category in entry.categories if category.term]

    return Paper(
        title=clean_title(entry.title),
        abstract=clean_abstract(entry.summary),
        authors=authors,
        author_text=", ".join(authors),
        published=(entry.published or "").strip() or UNKNOWN_DATE,
        updated=(entry.updated or "").strip(),
        pdf_url=resolve_pdf_url(entry),
        arxiv_id=extract_arxiv_id(entry),
        categories=categories,
        primary_category=categories[0] if categories else UNKNOWN_CATEGORY,
    )


def normalize(raw_xml: str) -> list[Paper]:
    """
    Turn a raw arXiv Atom feed into papers, preserving feed order.

    Malformed XML is logged and treated as an empty feed.
    """
    try:
        entries = parse_entries(raw_xml)
    except (ET.ParseError, ValidationError) as exc:
        LOGGER.warning("Feed parse failed, treating as empty: %s", exc)
        return []

    return [to_paper(entry) for entry in entries]
