"""Home directory lookup from the POSIX passwd database.

Used only when ``HOME`` is missing. The file is colon-delimited::

    name:password:uid:gid:comment:home:shell

Only the uid (field 2) and home (field 5) columns are read.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from .errors import PasswdEntryNotFound, PasswdUnreadable

PASSWD_PATH = "/etc/passwd"

_UID_FIELD = 2
_HOME_FIELD = 5


def _parse_uid(token: str) -> int | None:
    token = token.strip()
    if not (token.isascii() and token.isdecimal()):
        return None
    return int(token)


def find_home(lines: Iterable[str], uid: int, *, source: str | None = None) -> str:
    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line or line.startswith("#"):
            continue
        fields = line.split(":")
        if len(fields) <= _UID_FIELD:
            continue
        # skip the rest of the line as soon as the uid does not match
        if _parse_uid(fields[_UID_FIELD]) != uid:
            continue
        if len(fields) <= _HOME_FIELD:
            continue
        return fields[_HOME_FIELD]
    raise PasswdEntryNotFound(uid, source)


def lookup_home_by_uid(uid: int, path: str | Path = PASSWD_PATH) -> str:
    passwd = Path(path)
    try:
        with passwd.open("r", encoding="utf-8", errors="replace") as handle:
            return find_home(handle, uid, source=str(passwd))
    except OSError as exc:
        raise PasswdUnreadable(
            f"cannot read user database {passwd}: {exc.strerror or exc}",
            hint="set HOME to skip the passwd lookup",
        ) from exc
