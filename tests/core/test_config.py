from __future__ import annotations

from pathlib import Path

import pytest

from p2000_viewer.core.config import ViewerConfig, resolve_config


def test_resolve_config_defaults() -> None:
    cfg = resolve_config(env={})
    assert cfg == ViewerConfig()
    assert cfg.page_size == 10
    assert cfg.log_level == "WARNING"


def test_resolve_config_env_overrides() -> None:
    cfg = resolve_config(
        env={
            "P2000_PAGE_SIZE": "25",
            "P2000_LOG_LEVEL": "debug",
            "P2000_GLOSSARY": "/tmp/abbr.txt",
            "P2000_ENCODING": "latin-1",
        }
    )
    assert cfg.page_size == 25
    assert cfg.log_level == "DEBUG"
    assert cfg.glossary_path == Path("/tmp/abbr.txt")
    assert cfg.encoding == "latin-1"
    assert cfg.gazetteer_path is None


def test_resolve_config_keeps_explicit_base() -> None:
    base = ViewerConfig(page_size=3)
    assert resolve_config(base, env={}) is base


@pytest.mark.parametrize("value", ["abc", "0", "-1"])
def test_invalid_page_size_raises(value: str) -> None:
    with pytest.raises(ValueError, match="P2000_PAGE_SIZE"):
        resolve_config(env={"P2000_PAGE_SIZE": value})


def test_invalid_log_level_raises() -> None:
    with pytest.raises(ValueError, match="P2000_LOG_LEVEL"):
        resolve_config(env={"P2000_LOG_LEVEL": "LOUD"})
