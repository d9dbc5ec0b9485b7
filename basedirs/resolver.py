"""Per-user base directory resolution.

Every field is decided independently from an explicit environment mapping and
a platform discriminant. An explicit variable always wins verbatim; otherwise
the platform default applies. A field that has neither resolves to ``""``.

    POSIX (XDG)     macOS                      Windows
    XDG_DATA_HOME   ~/Library                  APPDATA
    XDG_CONFIG_HOME ~/Library/Preferences      APPDATA
    XDG_CACHE_HOME  ~/Library/Caches           TEMP
    XDG_STATE_HOME  ~/Library/Preferences      LOCALAPPDATA
    XDG_RUNTIME_DIR TMPDIR                     TEMP
    XDG_BIN_DIR     XDG_BIN_DIR                BIN
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Mapping

from .errors import EnvironmentUnavailable, PasswdEntryNotFound
from .identity import UserIdentity, UserLookup, lookup_identity
from .passwd import PASSWD_PATH, lookup_home_by_uid
from .platforms import Magnitude, Platform, detect_platform, require_user_magnitude

HAIKU_HOME = "/boot/home"
WINDOWS_DEFAULT_DRIVE = "C:"


@dataclass(frozen=True)
class ResolvedDirectories:
    home: str
    data: str
    config: str
    cache: str
    state: str
    runtime: str
    bin: str

    def as_dict(self) -> dict[str, str]:
        return asdict(self)

    def missing(self) -> list[str]:
        return [name for name, value in self.as_dict().items() if not value]


FIELDS: tuple[str, ...] = tuple(f.name for f in fields(ResolvedDirectories))

# field -> (variable, path below home); None means no home-relative default
_XDG_TABLE: dict[str, tuple[str, tuple[str, ...] | None]] = {
    "data": ("XDG_DATA_HOME", (".local", "share")),
    "config": ("XDG_CONFIG_HOME", (".config",)),
    "cache": ("XDG_CACHE_HOME", (".cache",)),
    "state": ("XDG_STATE_HOME", (".local", "state")),
    "runtime": ("XDG_RUNTIME_DIR", None),
    "bin": ("XDG_BIN_DIR", (".local", "bin")),
}

_MACOS_TABLE: dict[str, tuple[str | None, tuple[str, ...]]] = {
    "data": (None, ("Library",)),
    "config": (None, ("Library", "Preferences")),
    "cache": (None, ("Library", "Caches")),
    "state": (None, ("Library", "Preferences")),
    "runtime": ("TMPDIR", ("Library", "Caches", "TemporaryItems")),
    "bin": ("XDG_BIN_DIR", ("Library", "bin")),
}

_WINDOWS_TABLE: dict[str, str] = {
    "data": "APPDATA",
    "config": "APPDATA",
    "cache": "TEMP",
    "state": "LOCALAPPDATA",
    "runtime": "TEMP",
    "bin": "BIN",
}


def read_environment() -> dict[str, str]:
    """Snapshot the process environment."""
    try:
        return dict(os.environ)
    except (OSError, UnicodeError) as exc:
        raise EnvironmentUnavailable(f"cannot read process environment: {exc}") from exc


def _join(platform: Platform, base: str, parts: tuple[str, ...]) -> str:
    if not base:
        return ""
    sep = platform.separator
    return sep.join([base.rstrip(sep), *parts])


def _env(environ: Mapping[str, str], name: str) -> str | None:
    value = environ.get(name)
    if value is None or value == "":
        return None
    return value


class _Decision:
    """Collects each field's value together with where it came from."""

    def __init__(self) -> None:
        self.values: dict[str, str] = {}
        self.sources: dict[str, str] = {}

    def set(self, name: str, value: str, source: str) -> None:
        self.values[name] = value
        self.sources[name] = source if value else "unset"

    def from_env_or(self, environ: Mapping[str, str], name: str, var: str | None, default: str) -> None:
        if var is not None:
            value = _env(environ, var)
            if value is not None:
                self.set(name, value, f"env:{var}")
                return
        self.set(name, default, "default")


def _resolve_home(
    environ: Mapping[str, str],
    platform: Platform,
    identity: UserIdentity,
    passwd_path: str | Path,
) -> tuple[str, str]:
    if platform is Platform.WINDOWS:
        for var in ("USERPROFILE", "HOMEPATH"):
            value = _env(environ, var)
            if value is not None:
                return value, f"env:{var}"
        return "", "unset"
    if platform is Platform.HAIKU:
        return HAIKU_HOME, "fixed"
    if platform is Platform.PLAN9:
        value = _env(environ, "home")
        return (value, "env:home") if value is not None else ("", "unset")
    value = _env(environ, "HOME")
    if value is not None:
        return value, "env:HOME"
    try:
        return lookup_home_by_uid(identity.uid, passwd_path), "passwd"
    except PasswdEntryNotFound:
        return "", "unset"


def _decide(
    environ: Mapping[str, str] | None,
    platform: Platform | str | None,
    magnitude: Magnitude | str,
    passwd_path: str | Path,
    lookup: UserLookup | None,
) -> _Decision:
    require_user_magnitude(magnitude)
    target = detect_platform() if platform is None else Platform.from_name(platform)
    env = read_environment() if environ is None else environ

    identity = lookup_identity(env, target, lookup)
    home, home_source = _resolve_home(env, target, identity, passwd_path)

    decision = _Decision()
    decision.set("home", home, home_source)

    if target is Platform.WINDOWS:
        for name, var in _WINDOWS_TABLE.items():
            if name == "bin":
                drive = _env(env, "HOMEDRIVE") or WINDOWS_DEFAULT_DRIVE
                decision.from_env_or(env, name, var, _join(target, drive, ("Windows", "system32")))
            else:
                decision.from_env_or(env, name, var, "")
    elif target is Platform.MACOS:
        for name, (var, parts) in _MACOS_TABLE.items():
            decision.from_env_or(env, name, var, _join(target, home, parts))
    else:
        for name, (var, parts) in _XDG_TABLE.items():
            if parts is None:
                default = f"/run/user/{identity.uid}"
            else:
                default = _join(target, home, parts)
            decision.from_env_or(env, name, var, default)
    return decision


def resolve(
    environ: Mapping[str, str] | None = None,
    platform: Platform | str | None = None,
    *,
    magnitude: Magnitude | str = Magnitude.USER,
    passwd_path: str | Path = PASSWD_PATH,
    lookup: UserLookup | None = None,
) -> ResolvedDirectories:
    """Resolve the seven base directories.

    ``environ`` defaults to a snapshot of the process environment and
    ``platform`` to the host platform. ``lookup`` maps a login name to a uid
    and is only consulted on non-Windows platforms.

    A variable set to the empty string counts as unset, so ``HOME=""`` falls
    back to the passwd database like a missing ``HOME``.
    """
    decision = _decide(environ, platform, magnitude, passwd_path, lookup)
    return ResolvedDirectories(**{name: decision.values[name] for name in FIELDS})


def explain(
    environ: Mapping[str, str] | None = None,
    platform: Platform | str | None = None,
    *,
    magnitude: Magnitude | str = Magnitude.USER,
    passwd_path: str | Path = PASSWD_PATH,
    lookup: UserLookup | None = None,
) -> dict[str, str]:
    """Return where each field's value comes from (``env:NAME``, ``default``, ...)."""
    decision = _decide(environ, platform, magnitude, passwd_path, lookup)
    return {name: decision.sources[name] for name in FIELDS}


def directories_payload(dirs: ResolvedDirectories, platform: Platform | str) -> dict[str, Any]:
    return {
        "platform": Platform.from_name(platform).value,
        "basedirs": dirs.as_dict(),
        "missing": dirs.missing(),
    }


def resolve_with_sources(
    environ: Mapping[str, str] | None = None,
    platform: Platform | str | None = None,
    *,
    magnitude: Magnitude | str = Magnitude.USER,
    passwd_path: str | Path = PASSWD_PATH,
    lookup: UserLookup | None = None,
) -> tuple[ResolvedDirectories, dict[str, str]]:
    """Resolve once and return the directories together with their sources."""
    decision = _decide(environ, platform, magnitude, passwd_path, lookup)
    dirs = ResolvedDirectories(**{name: decision.values[name] for name in FIELDS})
    return dirs, {name: decision.sources[name] for name in FIELDS}
