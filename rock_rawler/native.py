"""
ctypes boundary adapter: crawl results as a NULL-terminated ``char **`` array.

The array object owns the memory of every string in it; native callers may
read it for as long as the Python side keeps the returned object alive.
"""
from __future__ import annotations

import ctypes
from typing import List, Sequence

from rock_rawler.config import CrawlRequest
from rock_rawler.engine import crawl

__all__ = ["CStringArray", "to_c_string_array", "from_c_string_array", "c_start_crawler"]

CStringArray = ctypes.Array  # of ctypes.c_char_p, last element NULL


def to_c_string_array(results: Sequence[str]) -> CStringArray:
    """Marshal *results* into ``c_char_p[len + 1]`` with a trailing NULL."""
    array = (ctypes.c_char_p * (len(results) + 1))()
    for idx, link in enumerate(results):
        array[idx] = link.encode("utf-8")
    array[len(results)] = None
    return array


def from_c_string_array(array: CStringArray) -> List[str]:
    """Read strings back until the NULL terminator."""
    out: List[str] = []
    for item in array:
        if item is None:
            break
        out.append(item.decode("utf-8"))
    return out


def c_start_crawler(
    url: str,
    threads: int,
    depth: int,
    subs_in_scope: bool,
    insecure: bool,
    raw_headers: str,
) -> CStringArray:
    """Same parameters and results as the CLI crawl, marshalled for a native caller."""
    request = CrawlRequest(
        seed_url=url,
        threads=threads,
        max_depth=depth,
        include_subdomains=subs_in_scope,
        skip_tls_verify=insecure,
        raw_headers=raw_headers,
    )
    return to_c_string_array(crawl(request))
