"""Error types raised while resolving base directories."""

from __future__ import annotations


class BaseDirsError(RuntimeError):
    code = "BASEDIRS_ERROR"

    def __init__(self, message: str, *, code: str | None = None, hint: str | None = None) -> None:
        super().__init__(message)
        if code:
            self.code = code
        self.hint = hint or ""


class EnvironmentUnavailable(BaseDirsError):
    code = "ENV_UNAVAILABLE"


class UserLookupFailed(BaseDirsError):
    code = "USER_LOOKUP_FAILED"


class PasswdUnreadable(BaseDirsError):
    code = "PASSWD_UNREADABLE"


class PasswdEntryNotFound(BaseDirsError, LookupError):
    code = "PASSWD_ENTRY_NOT_FOUND"

    def __init__(self, uid: int, path: str | None = None) -> None:
        where = f" in {path}" if path else ""
        super().__init__(f"no passwd entry for uid {uid}{where}")
        self.uid = uid
        self.path = path


class UnsupportedPlatform(BaseDirsError):
    code = "UNSUPPORTED_PLATFORM"


class UnsupportedMagnitude(BaseDirsError):
    code = "UNSUPPORTED_MAGNITUDE"


class ConfigError(BaseDirsError):
    code = "CONFIG_INVALID"
