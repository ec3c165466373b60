"""
Модуль конфигурации RockRawler.
Используется Pydantic для описания параметров обхода и проверки данных,
PyYAML/JSON для необязательного файла настроек CLI.
"""
from __future__ import annotations

import errno
import json
import os
import re
from pathlib import Path
from typing import Any, Literal, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ["CrawlRequest", "CrawlerSettings", "load_settings", "with_default_scheme"]

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def with_default_scheme(url: str) -> str:
    """Prepend ``http://`` when *url* has no ``scheme://`` prefix."""
    url = url.strip()
    if url and not _SCHEME_RE.match(url):
        return "http://" + url
    return url


class CrawlRequest(BaseModel):
    """Параметры одного обхода (один seed URL)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    seed_url: str = Field(..., description="Стартовый URL обхода.")
    threads: int = Field(5, ge=1, description="Число одновременных запросов.")
    max_depth: int = Field(2, ge=0, description="Максимальная глубина (seed = 0).")
    include_subdomains: bool = Field(False, description="Считать поддомены частью scope.")
    skip_tls_verify: bool = Field(False, description="Отключить проверку TLS-сертификатов.")
    raw_headers: str = Field("", description="Заголовки вида 'Name: value;;Name: value'.")
    timeout: float = Field(300.0, gt=0, description="Общий таймаут одного запроса (секунд).")

    @field_validator("seed_url", mode="before")
    def add_default_scheme(cls, v: Any) -> Any:
        if isinstance(v, str):
            return with_default_scheme(v)
        return v


class CrawlerSettings(BaseModel):
    """Значения по умолчанию для CLI, загружаемые из YAML/JSON."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    threads: int = Field(5, ge=1)
    max_depth: int = Field(2, ge=0)
    include_subdomains: bool = False
    skip_tls_verify: bool = False
    raw_headers: str = ""
    timeout: float = Field(300.0, gt=0)
    log_level: LogLevel = "WARNING"

    def request_for(self, seed_url: str, **overrides: Any) -> CrawlRequest:
        """Build a :class:`CrawlRequest` for *seed_url*; ``None`` overrides are ignored."""
        values: dict[str, Any] = {
            "threads": self.threads,
            "max_depth": self.max_depth,
            "include_subdomains": self.include_subdomains,
            "skip_tls_verify": self.skip_tls_verify,
            "raw_headers": self.raw_headers,
            "timeout": self.timeout,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return CrawlRequest(seed_url=seed_url, **values)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_settings(path: Union[str, Path, None]) -> CrawlerSettings:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerSettings.
    Без пути возвращает настройки по умолчанию; отсутствующий файл даёт FileNotFoundError.
    """
    if path is None:
        return CrawlerSettings()

    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return CrawlerSettings(**data)
