"""
Crawl scope: which hostnames may be fetched during one crawl.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional, Union
from urllib.parse import urlsplit

from rock_rawler.exceptions import InvalidURL

__all__ = ("ExactHostScope", "SubdomainScope", "ScopePolicy", "extract_hostname", "resolve_scope")


def _hostname(url: str) -> Optional[str]:
    try:
        return urlsplit(url).hostname or None
    except ValueError:
        return None


def extract_hostname(url: str) -> str:
    """Return the lower-cased hostname of *url* or raise :class:`InvalidURL`."""
    try:
        host = urlsplit(url).hostname
    except ValueError as exc:
        raise InvalidURL(url, str(exc)) from exc
    if not host:
        raise InvalidURL(url)
    return host


@dataclass(frozen=True)
class ExactHostScope:
    """Allow only URLs whose hostname equals the seed hostname."""

    hostname: str

    def allows(self, url: str) -> bool:
        return _hostname(url) == self.hostname


@dataclass(frozen=True)
class SubdomainScope:
    """Allow the seed hostname and any dot-delimited subdomain of it."""

    hostname: str
    _pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # anchored on both sides: "notexample.com" must not match "example.com"
        pattern = re.compile(r"(?:^|\.)" + re.escape(self.hostname) + r"$")
        object.__setattr__(self, "_pattern", pattern)

    def allows(self, url: str) -> bool:
        host = _hostname(url)
        return host is not None and self._pattern.search(host) is not None


ScopePolicy = Union[ExactHostScope, SubdomainScope]


def resolve_scope(seed_url: str, include_subdomains: bool = False) -> ScopePolicy:
    """Derive the scope policy of a crawl from its seed URL."""
    host = extract_hostname(seed_url)
    if include_subdomains:
        return SubdomainScope(host)
    return ExactHostScope(host)
