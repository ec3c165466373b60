"""rock_rawler.exceptions: ошибки, которые ядро краулера возвращает вызывающему коду."""

from __future__ import annotations

__all__ = ["RockRawlerError", "InvalidURL", "MalformedHeaders"]


class RockRawlerError(Exception):
    """Base class for all RockRawler errors."""


class InvalidURL(RockRawlerError, ValueError):
    """Seed URL could not be parsed into a hostname."""

    def __init__(self, url: str, reason: str = "no hostname") -> None:
        super().__init__(f"invalid URL {url!r}: {reason}")
        self.url = url
        self.reason = reason


class MalformedHeaders(RockRawlerError, ValueError):
    """Raw header string is not in ``Name: value;;Name: value`` form."""
