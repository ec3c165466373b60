# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from rock_rawler.config import CrawlerSettings, CrawlRequest, load_settings, with_default_scheme


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"settings{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "url,expected",
    [
        ("example.com", "http://example.com"),
        ("  example.com/path \n", "http://example.com/path"),
        ("httpbin.org", "http://httpbin.org"),
        ("https://example.com", "https://example.com"),
        ("ftp://example.com", "ftp://example.com"),
        ("", ""),
    ],
)
def test_with_default_scheme(url, expected):
    assert with_default_scheme(url) == expected


def test_crawl_request_defaults():
    req = CrawlRequest(seed_url="example.com")
    assert req.seed_url == "http://example.com"
    assert (req.threads, req.max_depth) == (5, 2)
    assert req.include_subdomains is False
    assert req.skip_tls_verify is False
    assert req.raw_headers == ""


def test_crawl_request_is_frozen():
    req = CrawlRequest(seed_url="http://example.com")
    with pytest.raises(ValidationError):
        req.threads = 10


@pytest.mark.parametrize("field,value", [("threads", 0), ("max_depth", -1), ("timeout", 0)])
def test_crawl_request_bounds(field, value):
    with pytest.raises(ValidationError):
        CrawlRequest(seed_url="http://example.com", **{field: value})


def test_crawl_request_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        CrawlRequest(seed_url="http://example.com", retries=3)


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("threads: 10\nmax_depth: 1", ".yaml", None),
        (json.dumps({"threads": 10, "max_depth": 1}), ".json", None),
        ("threads: 0", ".yml", ValidationError),
        ("unknown: 1", ".yaml", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- a\n- b", ".yaml", TypeError),
        ("{broken", ".json", ValueError),
        ("[1, 2]", ".json", TypeError),
        ("threads = 1", ".toml", ValueError),
    ],
)
def test_load_settings_variants(tmp_path, content, suffix, expect_exc):
    path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_settings(path)
    else:
        settings = load_settings(path)
        assert isinstance(settings, CrawlerSettings)
        assert (settings.threads, settings.max_depth) == (10, 1)


def test_load_settings_none_gives_defaults():
    assert load_settings(None) == CrawlerSettings()


def test_load_settings_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "nope.yaml")


def test_empty_yaml_gives_defaults(tmp_path):
    assert load_settings(write_file(tmp_path, "", ".yaml")) == CrawlerSettings()


def test_request_for_applies_overrides():
    settings = CrawlerSettings(threads=8, max_depth=4, raw_headers="X-A: 1", timeout=30.0)
    req = settings.request_for("example.com", threads=None, max_depth=1, include_subdomains=True)
    assert req.seed_url == "http://example.com"
    assert req.threads == 8
    assert req.max_depth == 1
    assert req.include_subdomains is True
    assert req.raw_headers == "X-A: 1"
    assert req.timeout == 30.0
