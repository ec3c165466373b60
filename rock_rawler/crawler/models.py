"""
Data models for the RockRawler crawler.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(slots=True, frozen=True)
class CrawlTarget:
    """Pending work item: absolute URL and its link-hop distance from the seed."""

    url: str
    depth: int


@dataclass(slots=True)
class PageData:
    """Holds the final response URL and decoded HTML of a fetched page."""

    url: str
    content: str


class LinkKind(str, Enum):
    ANCHOR = "a"
    SCRIPT = "script"
    FORM = "form"


@dataclass(slots=True, frozen=True)
class ExtractedLink:
    """One element found on a page; ``url`` is absolute or empty when it did not resolve."""

    kind: LinkKind
    url: str
