"""Centralised configuration for the TodoAI API, loaded once at startup."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values

from todoai.llm_util.gemini_llm import DEFAULT_GEMINI_MODEL

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///./todoai.db"
DEFAULT_PORT = 3000


def _load_environment(dotenv_path: Optional[Path] = None) -> dict[str, str]:
    """
    Environment variables take priority over the .env file, so deployments
    can run without a physical .env.
    """
    path = dotenv_path or Path(os.getenv("TODOAI_DOTENV_PATH", ".env"))
    merged: dict[str, str] = {}
    if path.is_file():
        merged.update({key: value for key, value in dotenv_values(path).items() if value is not None})
        logger.debug("Loaded %d values from %s", len(merged), path)
    merged.update(os.environ)
    return merged


def _str_setting(env: Mapping[str, str], name: str, default: Optional[str]) -> Optional[str]:
    value = env.get(name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def _int_setting(env: Mapping[str, str], name: str, default: int) -> int:
    value = _str_setting(env, name, None)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be an integer, got {value!r}") from exc


def _float_setting(env: Mapping[str, str], name: str, default: float) -> float:
    value = _str_setting(env, name, None)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be a number, got {value!r}") from exc


@dataclass(frozen=True)
class DatabaseSettings:
    """Where the todos table lives. The password is the store access key."""

    url: str = DEFAULT_DATABASE_URL
    password: Optional[str] = field(default=None, repr=False)


@dataclass(frozen=True)
class GeminiSettings:
    api_key: Optional[str] = field(default=None, repr=False)
    model: str = DEFAULT_GEMINI_MODEL
    timeout_seconds: float = 30.0


@dataclass(frozen=True)
class TodoAIConfig:
    database: DatabaseSettings = field(default_factory=DatabaseSettings)
    gemini: GeminiSettings = field(default_factory=GeminiSettings)
    cors_allow_origins: tuple[str, ...] = ("*",)
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @classmethod
    def load(cls, dotenv_path: Optional[Path] = None) -> "TodoAIConfig":
        return cls.from_mapping(_load_environment(dotenv_path))

    @classmethod
    def from_mapping(cls, env: Mapping[str, str]) -> "TodoAIConfig":
        origins = _str_setting(env, "CORS_ALLOW_ORIGINS", "*")
        return cls(
            database=DatabaseSettings(
                url=_str_setting(env, "DATABASE_URL", DEFAULT_DATABASE_URL),
                password=_str_setting(env, "DATABASE_PASSWORD", None),
            ),
            gemini=GeminiSettings(
                api_key=_str_setting(env, "GEMINI_API_KEY", None),
                model=_str_setting(env, "GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
                timeout_seconds=_float_setting(env, "GEMINI_TIMEOUT_SECONDS", 30.0),
            ),
            cors_allow_origins=tuple(origin.strip() for origin in origins.split(",") if origin.strip()),
            port=_int_setting(env, "PORT", DEFAULT_PORT),
            log_level=_str_setting(env, "LOG_LEVEL", "INFO").upper(),
        )
