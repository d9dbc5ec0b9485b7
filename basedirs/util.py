"""Output and parsing helpers."""

from __future__ import annotations

import json
import os
import re
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

import yaml

from .paths import ensure_dir


def write_json(obj: Any) -> None:
    json.dump(obj, sys.stdout, indent=2, ensure_ascii=True, sort_keys=False)
    sys.stdout.write("\n")


def write_yaml(obj: Any) -> None:
    yaml.safe_dump(obj, sys.stdout, sort_keys=False, default_flow_style=False)


def render_listing(dirs: Mapping[str, str], key: str = "basedirs") -> str:
    lines = [f"{key}:"]
    for name, value in dirs.items():
        lines.append(f"  {name}: {value}")
    return "\n".join(lines) + "\n"


def parse_kv_pairs(pairs: list[str] | None) -> dict[str, str]:
    result: dict[str, str] = {}
    if not pairs:
        return result
    for pair in pairs:
        if "=" not in pair:
            continue
        key, value = pair.split("=", 1)
        key = key.strip()
        if key:
            result[key] = value
    return result


def deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


_ENV_PATTERN = re.compile(r"\$\{ENV:([A-Za-z0-9_]+)\}")


def resolve_env_values(value: Any, environ: Mapping[str, str] | None = None) -> Any:
    env = os.environ if environ is None else environ
    if isinstance(value, dict):
        if set(value.keys()) == {"_env"}:
            name = str(value.get("_env", ""))
            return env.get(name, "")
        return {k: resolve_env_values(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [resolve_env_values(v, env) for v in value]
    if isinstance(value, str):
        def _replace(match: re.Match[str]) -> str:
            return env.get(match.group(1), "")

        return _ENV_PATTERN.sub(_replace, value)
    return value


def append_log(path: str | None, entry: dict[str, Any]) -> None:
    if not path:
        return
    record = {"timestamp": datetime.now(timezone.utc).isoformat(), **entry}
    try:
        log_path = ensure_dir(Path(path).expanduser().parent) / Path(path).name
        with log_path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=True) + "\n")
    except OSError:
        return
