"""Per-user XDG base directories and their Windows and macOS equivalents."""

from .errors import (
    BaseDirsError,
    EnvironmentUnavailable,
    PasswdEntryNotFound,
    PasswdUnreadable,
    UnsupportedMagnitude,
    UnsupportedPlatform,
    UserLookupFailed,
)
from .identity import FALLBACK_UID, UserIdentity, lookup_identity
from .passwd import PASSWD_PATH, find_home, lookup_home_by_uid
from .platforms import Magnitude, Platform, detect_platform
from .resolver import FIELDS, ResolvedDirectories, explain, resolve, resolve_with_sources

__all__ = [
    "BaseDirsError",
    "EnvironmentUnavailable",
    "FALLBACK_UID",
    "FIELDS",
    "Magnitude",
    "PASSWD_PATH",
    "PasswdEntryNotFound",
    "PasswdUnreadable",
    "Platform",
    "ResolvedDirectories",
    "UnsupportedMagnitude",
    "UnsupportedPlatform",
    "UserIdentity",
    "UserLookupFailed",
    "detect_platform",
    "explain",
    "find_home",
    "lookup_home_by_uid",
    "lookup_identity",
    "resolve",
    "resolve_with_sources",
]
