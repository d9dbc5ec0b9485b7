"""Platform discriminants."""

from __future__ import annotations

import sys
from enum import Enum

from .errors import UnsupportedMagnitude, UnsupportedPlatform


class Platform(str, Enum):
    POSIX = "posix"
    MACOS = "macos"
    WINDOWS = "windows"
    PLAN9 = "plan9"
    HAIKU = "haiku"

    @classmethod
    def from_name(cls, name: "str | Platform") -> "Platform":
        if isinstance(name, Platform):
            return name
        key = str(name).strip().lower()
        platform = _ALIASES.get(key)
        if platform is None:
            raise UnsupportedPlatform(
                f"unsupported platform: {name!r}",
                hint="known platforms: " + ", ".join(sorted(_ALIASES)),
            )
        return platform

    @property
    def separator(self) -> str:
        return "\\" if self is Platform.WINDOWS else "/"


_ALIASES: dict[str, Platform] = {
    "posix": Platform.POSIX,
    "xdg": Platform.POSIX,
    "linux": Platform.POSIX,
    "unix": Platform.POSIX,
    "macos": Platform.MACOS,
    "darwin": Platform.MACOS,
    "osx": Platform.MACOS,
    "windows": Platform.WINDOWS,
    "win32": Platform.WINDOWS,
    "plan9": Platform.PLAN9,
    "haiku": Platform.HAIKU,
}

# sys.platform prefixes that follow the XDG layout
_POSIX_PREFIXES = (
    "linux",
    "freebsd",
    "openbsd",
    "netbsd",
    "dragonfly",
    "sunos",
    "aix",
    "cygwin",
    "msys",
    "gnu",
)


def detect_platform(sys_platform: str | None = None) -> Platform:
    name = (sys_platform if sys_platform is not None else sys.platform).lower()
    if name == "darwin":
        return Platform.MACOS
    if name == "win32":
        return Platform.WINDOWS
    if name.startswith("haiku"):
        return Platform.HAIKU
    if name.startswith("plan9"):
        return Platform.PLAN9
    if name.startswith(_POSIX_PREFIXES):
        return Platform.POSIX
    raise UnsupportedPlatform(
        f"no base directory mapping for host platform {name!r}",
        hint="pass an explicit platform (see `basedirs platforms`)",
    )


def platform_names() -> list[str]:
    return [member.value for member in Platform]


class Magnitude(str, Enum):
    """Scope of the lookup. Only per-user resolution is implemented."""

    USER = "user"
    SYSTEM = "system"

    @classmethod
    def from_name(cls, name: "str | Magnitude") -> "Magnitude":
        if isinstance(name, Magnitude):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            raise UnsupportedMagnitude(f"unknown magnitude: {name!r}") from None


def require_user_magnitude(magnitude: "str | Magnitude") -> Magnitude:
    value = Magnitude.from_name(magnitude)
    if value is not Magnitude.USER:
        raise UnsupportedMagnitude(
            f"{value.value} base directories are not supported",
            hint="only per-user resolution is available",
        )
    return value
