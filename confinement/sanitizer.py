"""Single-segment filename gate applied before any path is composed."""

from __future__ import annotations

from .errors import InvalidName

__all__ = ["DEFAULT_MAX_NAME_BYTES", "SanitizedName", "sanitize"]

DEFAULT_MAX_NAME_BYTES = 256

_SEPARATORS = ("/", "\\")


def _reject_reason(raw: str, max_len: int) -> str | None:
    if not raw:
        return "name is empty"
    if raw.startswith("/"):
        return "absolute paths are not allowed"
    if ".." in raw:
        return "parent references are not allowed"
    if any(sep in raw for sep in _SEPARATORS):
        return "path separators are not allowed"
    if "\x00" in raw:
        return "NUL characters are not allowed"
    try:
        size = len(raw.encode("utf-8"))
    except UnicodeEncodeError:
        return "name is not valid UTF-8"
    if size >= max_len:
        return f"name must be shorter than {max_len} bytes"
    return None


class SanitizedName(str):
    """A filename that is safe to join onto an allowed directory.

    Construction is the validation: the value is the raw input verbatim, and
    an instance only exists if the input is non-empty, holds no separator, no
    ``..`` and no NUL, and is shorter than ``max_len`` bytes.
    """

    __slots__ = ()

    def __new__(cls, raw: str, max_len: int = DEFAULT_MAX_NAME_BYTES) -> "SanitizedName":
        if not isinstance(raw, str):
            raise InvalidName(f"Invalid name: expected text, got {type(raw).__name__}")
        reason = _reject_reason(raw, max_len)
        if reason is not None:
            raise InvalidName(f"Invalid name {raw!r}: {reason}")
        return super().__new__(cls, raw)


def sanitize(raw: str, max_len: int = DEFAULT_MAX_NAME_BYTES) -> SanitizedName:
    """Return ``raw`` unchanged as a :class:`SanitizedName` or raise ``InvalidName``."""
    return SanitizedName(raw, max_len)
