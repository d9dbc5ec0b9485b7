"""Config loading and defaults."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import ConfigError, UnsupportedPlatform
from .passwd import PASSWD_PATH
from .paths import config_path, ensure_dir
from .platforms import Platform
from .schema import validate_config_schema
from .util import deep_merge, resolve_env_values


def default_config() -> dict[str, Any]:
    return {
        "platform": None,
        "passwd_path": PASSWD_PATH,
        "output": {"format": "text"},
        "logging": {"path": None},
        "env": {},
    }


def load_config(path: Path | None = None, environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    cfg_path = path or config_path(environ)
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config not found at {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as handle:
        try:
            config = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"cannot parse {cfg_path}: {exc}") from exc
    if not isinstance(config, dict):
        raise ConfigError(f"{cfg_path} must contain a mapping, got {type(config).__name__}")
    return resolve_env_values(deep_merge(default_config(), config), environ)


def load_config_or_default(path: Path | None = None, environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    try:
        return load_config(path, environ)
    except FileNotFoundError:
        return default_config()


def save_default_config(path: Path | None = None, overwrite: bool = False) -> Path:
    cfg_path = path or config_path()
    ensure_dir(cfg_path.parent)
    if cfg_path.exists() and not overwrite:
        return cfg_path
    with cfg_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(default_config(), handle, sort_keys=False)
    return cfg_path


def resolve_config_path(path_str: str | None) -> Path:
    if path_str:
        return Path(path_str).expanduser()
    return config_path()


def validate_config(config: dict[str, Any]) -> tuple[list[str], list[str]]:
    errors = validate_config_schema(config)
    warnings: list[str] = []

    platform = config.get("platform")
    if isinstance(platform, str) and platform:
        try:
            Platform.from_name(platform)
        except UnsupportedPlatform as exc:
            errors.append(f"platform: {exc}")

    passwd_path = config.get("passwd_path")
    if isinstance(passwd_path, str) and passwd_path and not Path(passwd_path).is_absolute():
        warnings.append(f"passwd_path is relative: {passwd_path}")

    env = config.get("env") or {}
    if isinstance(env, dict):
        for name, value in env.items():
            if value == "":
                warnings.append(f"env.{name} is empty and will be treated as unset")

    logging_cfg = config.get("logging") or {}
    log_path = logging_cfg.get("path") if isinstance(logging_cfg, dict) else None
    if isinstance(log_path, str) and not log_path.strip():
        warnings.append("logging.path is blank; logging disabled")

    return errors, warnings
