"""rock_rawler.crawler: scope, headers, dedup and the asynchronous crawl engine."""

from .crawler import AsyncCrawler
from .headers import parse_headers
from .scope import ExactHostScope, SubdomainScope, extract_hostname, resolve_scope
from .visited import VisitedSet

__all__ = [
    "AsyncCrawler",
    "ExactHostScope",
    "SubdomainScope",
    "VisitedSet",
    "extract_hostname",
    "parse_headers",
    "resolve_scope",
]
