"""Configuration: Pydantic Settings + YAML loading."""

from __future__ import annotations

import codecs
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "default.yaml"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class StreamSettings(BaseSettings):
    """Stream settings: merges defaults, YAML config, and env vars."""

    model_config = SettingsConfigDict(env_prefix="FILESTREAM_")

    encoding: str = Field(default="utf-8", min_length=1)
    flush_each_write: bool = True
    log_level: str = "INFO"

    @field_validator("encoding")
    @classmethod
    def _known_codec(cls, v: str) -> str:
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"unknown encoding: {v}") from None
        return v

    @classmethod
    def load(cls, config_path: Path | str | None = None) -> StreamSettings:
        """Load settings from YAML file, falling back to defaults."""
        data: dict[str, Any] = {}

        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        path = Path(config_path)
        if path.exists():
            with open(path, encoding="utf-8") as f:
                raw = yaml.safe_load(f)
                if isinstance(raw, dict):
                    data = raw

        return cls(**data)


def setup_logging(
    level: str | None = None,
    *,
    verbose: bool = False,
    settings: StreamSettings | None = None,
) -> None:
    if level is None and settings is not None:
        level = settings.log_level
    if verbose:
        resolved = logging.DEBUG
    elif level:
        resolved = getattr(logging, level.upper(), logging.INFO)
    else:
        resolved = logging.INFO
    logging.basicConfig(
        level=resolved,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )
