"""Viewer configuration with environment overrides."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

ENV_ENCODING = "P2000_ENCODING"
ENV_PAGE_SIZE = "P2000_PAGE_SIZE"
ENV_GLOSSARY = "P2000_GLOSSARY"
ENV_GAZETTEER = "P2000_GAZETTEER"
ENV_LOG_LEVEL = "P2000_LOG_LEVEL"
ENV_LOG_FILE = "P2000_LOG_FILE"


@dataclass(frozen=True, slots=True)
class ViewerConfig:
    encoding: str = "utf-8"
    decode_errors: str = "replace"
    page_size: int = 10
    glossary_path: Path | None = None
    gazetteer_path: Path | None = None
    log_level: str = "WARNING"
    log_file: Path | None = None


def _parse_page_size(value: str) -> int:
    try:
        size = int(value)
    except ValueError as exc:
        raise ValueError(f"{ENV_PAGE_SIZE} must be an integer") from exc
    if size < 1:
        raise ValueError(f"{ENV_PAGE_SIZE} must be >= 1")
    return size


def _parse_log_level(value: str) -> str:
    name = value.strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        raise ValueError(f"{ENV_LOG_LEVEL} must be a logging level name, got {value!r}")
    return name


def resolve_config(
    cfg: ViewerConfig | None = None,
    env: Mapping[str, str] | None = None,
) -> ViewerConfig:
    """Return config with environment overrides applied."""
    if cfg is None:
        cfg = ViewerConfig()
    if env is None:
        env = os.environ

    changes: dict[str, object] = {}
    if env.get(ENV_ENCODING):
        changes["encoding"] = env[ENV_ENCODING]
    if env.get(ENV_PAGE_SIZE):
        changes["page_size"] = _parse_page_size(env[ENV_PAGE_SIZE])
    if env.get(ENV_GLOSSARY):
        changes["glossary_path"] = Path(env[ENV_GLOSSARY])
    if env.get(ENV_GAZETTEER):
        changes["gazetteer_path"] = Path(env[ENV_GAZETTEER])
    if env.get(ENV_LOG_LEVEL):
        changes["log_level"] = _parse_log_level(env[ENV_LOG_LEVEL])
    if env.get(ENV_LOG_FILE):
        changes["log_file"] = Path(env[ENV_LOG_FILE])

    if not changes:
        return cfg
    return replace(cfg, **changes)
