"""Scrape configuration loading."""

from __future__ import annotations

import json
from pathlib import Path

import yaml
from pydantic import ValidationError

from career_scraper.extraction.errors import ConfigError
from career_scraper.extraction.models import ScrapeConfig


def load_scrape_config(path: Path | str) -> ScrapeConfig:
    """Load and validate a scrape config from JSON or YAML.

    Any problem is fatal: the run must not start on a partially parsed
    config.

    Raises:
        ConfigError: If the file is missing, malformed, or has the wrong shape.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config not found: {config_path}")

    suffix = config_path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        data = _load_yaml(config_path)
    elif suffix == ".json":
        data = _load_json(config_path)
    else:
        data = _load_unknown(config_path)

    try:
        return ScrapeConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e


def _load_json(path: Path) -> dict:
    try:
        data = json.loads(_read(path))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON config: {path}: {e}") from e
    return _as_mapping(data, path)


def _load_yaml(path: Path) -> dict:
    try:
        data = yaml.safe_load(_read(path))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML config: {path}") from e
    return _as_mapping(data, path)


def _load_unknown(path: Path) -> dict:
    """Auto-detect the format when the file extension is unknown."""
    raw = _read(path)

    # Try JSON first if it looks like JSON, otherwise fall back to YAML.
    if raw.lstrip().startswith(("{", "[")):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            pass
        else:
            return _as_mapping(data, path)

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid config format: {path}") from e
    return _as_mapping(data, path)


def _as_mapping(data: object, path: Path) -> dict:
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a mapping/dict: {path}")
    return data
