"""
Link extraction and URL resolution utilities for RockRawler.
"""
from __future__ import annotations

from typing import List, Tuple
from urllib.parse import urldefrag, urljoin, urlsplit

from bs4 import BeautifulSoup
from bs4.element import Tag
from rock_rawler.crawler.models import ExtractedLink, LinkKind, PageData

__all__ = ("absolute_url", "document_base", "extract_links")

# (tag, attribute, kind) in the order elements are reported for one page
_SELECTORS: Tuple[Tuple[str, str, LinkKind], ...] = (
    ("a", "href", LinkKind.ANCHOR),
    ("script", "src", LinkKind.SCRIPT),
    ("form", "action", LinkKind.FORM),
)


def absolute_url(base: str, link: str) -> str:
    """
    Resolve *link* against *base* and drop the fragment.

    Returns ``""`` for fragment-only references and for anything that does not
    resolve to a URL with a scheme.
    """
    link = link.strip()
    if link.startswith("#"):
        return ""
    try:
        resolved, _ = urldefrag(urljoin(base, link))
        parts = urlsplit(resolved)
        parts.port  # raises ValueError on a malformed port
    except ValueError:
        return ""
    if not parts.scheme:
        return ""
    return resolved


def document_base(soup: BeautifulSoup, page_url: str) -> str:
    """Return the URL relative links resolve against: ``<base href>`` or the page URL."""
    base_tag = soup.find("base", href=True)
    if isinstance(base_tag, Tag):
        href = base_tag.get("href")
        if isinstance(href, str):
            resolved = absolute_url(page_url, href)
            if resolved:
                return resolved
    return page_url


def extract_links(page: PageData) -> List[ExtractedLink]:
    """
    Collect anchors, script sources and form actions from an HTML page.

    All ``a[href]`` come first, then ``script[src]``, then ``form[action]``,
    each group in document order. Unresolvable values carry an empty URL.
    """
    soup = BeautifulSoup(page.content, "html.parser")
    base = document_base(soup, page.url)
    links: List[ExtractedLink] = []
    for name, attr, kind in _SELECTORS:
        for tag in soup.find_all(name, attrs={attr: True}):
            if not isinstance(tag, Tag):
                continue
            value = tag.get(attr)
            if not isinstance(value, str):
                continue
            links.append(ExtractedLink(kind, absolute_url(base, value)))
    return links
