"""Configuration loading utilities for cardmask."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from .errors import ConfigError
from .models import WindowBounds
from .paths import project_config_path, runtime_config_dir


class WindowConfig(BaseModel):
    min_length: int = Field(default=14, ge=1, description="Shortest run suffix checked")
    max_length: int = Field(default=16, ge=1, description="Longest run suffix checked")

    @model_validator(mode="after")
    def _check_order(self) -> "WindowConfig":
        if self.max_length < self.min_length:
            raise ValueError("max_length must not be below min_length")
        return self

    def bounds(self) -> WindowBounds:
        return WindowBounds(self.min_length, self.max_length)


class StreamConfig(BaseModel):
    read_size: int = Field(default=8192, ge=1, description="Bytes requested per read")
    flush_size: int = Field(default=64 * 1024, ge=1, description="Output bytes buffered before a write")


class LoggingConfig(BaseModel):
    level: str = Field(default="WARNING", description="Logging verbosity level")

    def normalized_level(self) -> str:
        return self.level.upper()


class AppConfig(BaseModel):
    window: WindowConfig = Field(default_factory=WindowConfig)
    stream: StreamConfig = Field(default_factory=StreamConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


DEFAULT_CONFIG = AppConfig()


def config_search_paths(explicit: Optional[Path] = None) -> Iterable[Path]:
    if explicit:
        yield explicit
    yield project_config_path()
    yield runtime_config_dir() / "config.yaml"


def load_config(path: Optional[Path] = None) -> AppConfig:
    if path is not None and not path.is_file():
        raise ConfigError(f"Configuration file not found: {path}")
    for candidate in config_search_paths(path):
        if candidate.is_file():
            try:
                with candidate.open("r", encoding="utf-8") as handle:
                    data = yaml.safe_load(handle) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"Malformed YAML in {candidate}: {exc}") from exc
            try:
                return AppConfig.model_validate(data)
            except ValidationError as exc:
                raise ConfigError(f"Invalid configuration in {candidate}: {exc}") from exc
    return DEFAULT_CONFIG.model_copy(deep=True)


def dump_default_config(target: Path) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(DEFAULT_CONFIG.model_dump(mode="json"), handle, sort_keys=False)
