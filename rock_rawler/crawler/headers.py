"""
Parsing of the raw ``-h`` header string into request headers.
"""
from __future__ import annotations

from typing import Dict

from rock_rawler.exceptions import MalformedHeaders

__all__ = ("HEADER_DELIMITER", "parse_headers")

#: two semicolons, so header values may contain single ``;`` and ``:``
HEADER_DELIMITER = ";;"


def parse_headers(raw: str) -> Dict[str, str]:
    """
    Convert ``"Cookie: a=b;;Referer: http://x/"`` into a header mapping.

    Declarations without any colon are skipped; a string with no colon at all
    raises :class:`MalformedHeaders`. Later duplicates overwrite earlier ones.
    """
    headers: Dict[str, str] = {}
    if not raw:
        return headers
    if ":" not in raw:
        raise MalformedHeaders(
            "headers not formatted properly (no colon to separate header and value)"
        )

    for declaration in raw.split(HEADER_DELIMITER):
        if ": " in declaration:
            name, value = declaration.split(": ", 1)
        elif ":" in declaration:
            name, value = declaration.split(":", 1)
        else:
            continue
        headers[name.strip()] = value.strip()
    return headers
