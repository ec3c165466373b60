"""
RockRawler package initializer.
Defines package version and exposes the crawl API.
"""
__version__ = "0.1.0"

from rock_rawler.config import CrawlRequest, CrawlerSettings, load_settings
from rock_rawler.engine import crawl, start_crawl
from rock_rawler.exceptions import InvalidURL, MalformedHeaders, RockRawlerError

__all__ = [
    "__version__",
    "CrawlRequest",
    "CrawlerSettings",
    "InvalidURL",
    "MalformedHeaders",
    "RockRawlerError",
    "crawl",
    "load_settings",
    "start_crawl",
]
