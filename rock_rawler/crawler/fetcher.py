"""
Fetcher module: one HTTP GET per crawl target, returning HTML pages only.
"""
from __future__ import annotations

import asyncio
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urljoin

from aiohttp import ClientError, ClientSession, ClientTimeout, TCPConnector
from aiohttp.abc import AbstractResolver
from rock_rawler.config import CrawlRequest
from rock_rawler.crawler.models import PageData
from rock_rawler.crawler.scope import ScopePolicy
from rock_rawler.logger import get_logger

__all__ = ("USER_AGENT", "MAX_REDIRECTS", "Fetcher", "connector_options", "open_session")

#: sent on every request unless the custom headers override it
USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64; rv:78.0) Gecko/20100101 Firefox/78.0"

#: same hop limit as aiohttp's own redirect handling
MAX_REDIRECTS = 10

_REDIRECT_STATUS = (301, 302, 303, 307, 308)

log = get_logger("fetcher")


def connector_options(request: CrawlRequest, resolver: Optional[AbstractResolver] = None) -> Dict[str, Any]:
    """Keyword arguments for :class:`aiohttp.TCPConnector` of one crawl."""
    options: Dict[str, Any] = {"ssl": not request.skip_tls_verify}
    if resolver is not None:
        options["resolver"] = resolver
    return options


def open_session(request: CrawlRequest, resolver: Optional[AbstractResolver] = None) -> ClientSession:
    """Create the client session shared by all workers of one crawl."""
    return ClientSession(
        connector=TCPConnector(**connector_options(request, resolver)),
        timeout=ClientTimeout(total=request.timeout),
        headers={"User-Agent": USER_AGENT},
        raise_for_status=False,
    )


class Fetcher:
    """Fetches a URL with the crawl's custom headers; failures yield ``None``.

    Redirects are followed by hand so every hop is checked against the crawl
    scope before any request (and any custom header) reaches its host.
    """

    def __init__(self, session: ClientSession, headers: Mapping[str, str], scope: ScopePolicy) -> None:
        self.session = session
        self.headers = dict(headers)
        self.scope = scope

    async def fetch(self, url: str) -> Optional[PageData]:
        """
        GET *url* and return its HTML.

        Returns PageData (with the final in-scope URL) on a 2xx HTML response,
        or None on any failure, on a redirect leaving the scope, or after
        ``MAX_REDIRECTS`` hops.
        """
        current = url
        try:
            for _ in range(MAX_REDIRECTS + 1):
                async with self.session.get(current, headers=self.headers, allow_redirects=False) as resp:
                    if resp.status in _REDIRECT_STATUS:
                        location = resp.headers.get("Location")
                        if not location:
                            log.debug("Skip %s: HTTP %s without Location", current, resp.status)
                            return None
                        target = urljoin(str(resp.url), location)
                        if not self.scope.allows(target):
                            log.debug("Not following redirect %s -> %s: out of scope", current, target)
                            return None
                        current = target
                        continue
                    if not 200 <= resp.status < 300:
                        log.debug("Skip %s: HTTP %s", current, resp.status)
                        return None
                    ctype = resp.headers.get("Content-Type", "").lower()
                    if "html" not in ctype:
                        log.debug("Skip %s: content type %r", current, ctype)
                        return None
                    text = await resp.text(errors="replace")
                    return PageData(str(resp.url), text)
        except (ClientError, asyncio.TimeoutError, LookupError, ValueError) as exc:
            log.debug("Failed %s: %s", current, exc)
            return None
        log.debug("Skip %s: more than %d redirects", url, MAX_REDIRECTS)
        return None
