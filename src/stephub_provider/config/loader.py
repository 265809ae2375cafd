from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from stephub_provider.config.models import AppConfig
from stephub_provider.errors import ConfigError

MODULES_ENV = "STEPHUB_PROVIDER_MODULES"


def load_yaml_config(path: Path) -> dict[str, object]:
    # Raw YAML mapping; validation happens in parse_config.
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {path}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")
    return raw


def parse_config(raw: Mapping[str, object], *, environ: Mapping[str, str] | None = None) -> AppConfig:
    try:
        config = AppConfig.model_validate(dict(raw))
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
    env = os.environ if environ is None else environ
    override = env.get(MODULES_ENV, "")
    modules = [item.strip() for item in override.split(",") if item.strip()]
    if modules:
        config = config.model_copy(
            update={"provider": config.provider.model_copy(update={"modules": modules})}
        )
    return config


def load_config(path: Path, *, environ: Mapping[str, str] | None = None) -> AppConfig:
    return parse_config(load_yaml_config(path), environ=environ)
