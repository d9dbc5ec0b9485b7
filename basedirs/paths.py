"""Filesystem paths for the basedirs tool's own config."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from .errors import BaseDirsError
from .resolver import resolve

APP_NAME = "basedirs"


def _base_dir(field: str, environ: Mapping[str, str] | None = None) -> Path:
    # locating the tool config must not fail on host resolution errors
    try:
        base = getattr(resolve(environ), field)
    except BaseDirsError:
        base = ""
    if base:
        return Path(base).expanduser()
    return Path.home()


def config_dir(environ: Mapping[str, str] | None = None) -> Path:
    return _base_dir("config", environ) / APP_NAME


def config_path(environ: Mapping[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ
    override = env.get("BASEDIRS_CONFIG")
    if override:
        return Path(override).expanduser()
    return config_dir(environ) / "config.yaml"


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path
