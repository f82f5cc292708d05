# === FILE: site_index/config.py ===
"""
Модуль для загрузки и валидации конфигурации краулера SiteIndex.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from site_index.crawler.models import CrawlTarget

__all__ = ["CrawlConfig", "load_config", "DEFAULT_CONFIG_PATH"]


class CrawlConfig(BaseModel):
    """Конфигурация одного запуска обхода домена."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    domain: str = Field(..., min_length=1, description="Домен для обхода, например example.com.")
    exclusions: List[str] = Field(
        default_factory=list, description="Префиксы путей, которые никогда не обходятся."
    )
    is_single: bool = Field(False, description="Загрузить только корневую страницу.")
    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field("SiteIndexBot/1.0", min_length=1, description="Заголовок User-Agent.")
    retry_times: int = Field(0, ge=0, description="Число повторных попыток при 5xx/429 и сетевых ошибках.")
    concurrency: int = Field(1, ge=1, description="Число одновременных загрузок.")
    state_file: Optional[Path] = Field(
        None, description="SQLite-файл состояния обхода (для продолжения после остановки)."
    )
    crawl_timeout: Optional[float] = Field(
        None, gt=0, description="Таймаут всего обхода (секунд)."
    )

    @field_validator("domain", mode="before")
    def _clean_domain(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().rstrip("/")
            if "://" in v or "/" in v:
                raise ValueError("domain must be a bare host name, without scheme or path")
        return v

    @field_validator("exclusions")
    def _check_exclusions(cls, v: List[str]) -> List[str]:
        bad = [p for p in v if not p.startswith("/")]
        if bad:
            raise ValueError(f"exclusion prefixes must start with '/': {bad}")
        return v

    @property
    def target(self) -> CrawlTarget:
        return CrawlTarget(domain=self.domain, exclusions=tuple(self.exclusions))


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


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


def _read_file(path_obj: Path) -> dict[str, Any]:
    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> CrawlConfig:
    """
    Читает YAML или JSON, накладывает overrides (значения None пропускаются)
    и возвращает проверенный объект CrawlConfig.

    Без явного пути используется configs/default.yaml, если он существует.
    Для явно указанного, но отсутствующего файла бросает FileNotFoundError.
    """
    data: dict[str, Any] = {}
    if path is None:
        if DEFAULT_CONFIG_PATH.is_file():
            data = _read_file(DEFAULT_CONFIG_PATH)
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))
        data = _read_file(path_obj)

    data.update({k: v for k, v in overrides.items() if v is not None})
    return CrawlConfig(**data)
