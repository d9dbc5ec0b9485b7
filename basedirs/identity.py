"""Login name and numeric uid of the current user."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping

from .errors import UserLookupFailed
from .platforms import Platform

FALLBACK_UID = 1000

UserLookup = Callable[[str], "int | None"]


@dataclass(frozen=True)
class UserIdentity:
    login: str
    uid: int


def system_user_lookup(login: str) -> int:
    """Return the uid for ``login`` from the host user database.

    Raises UserLookupFailed when the host has no user database or the login
    is unknown.
    """
    try:
        import pwd
    except ImportError:
        raise UserLookupFailed("no user database on this platform") from None
    try:
        return pwd.getpwnam(login).pw_uid
    except (KeyError, TypeError, ValueError) as exc:
        raise UserLookupFailed(f"unknown user {login!r}") from exc


def lookup_identity(
    environ: Mapping[str, str],
    platform: Platform,
    lookup: UserLookup | None = None,
) -> UserIdentity:
    login = environ.get("LOGNAME") or ""
    if platform is Platform.WINDOWS:
        return UserIdentity(login=login, uid=FALLBACK_UID)
    lookup = lookup or system_user_lookup
    # any lookup failure falls back to the fixed uid
    try:
        uid = lookup(login)
        uid = FALLBACK_UID if uid is None else int(uid)
    except Exception:
        uid = FALLBACK_UID
    return UserIdentity(login=login, uid=uid)
