"""Text helpers for driver names coming from the simulator."""

from __future__ import annotations

import codecs

_WHITESPACE = " \t\r\n"
_KEPT_PUNCTUATION = frozenset(" -_.()[]")
_SPACED = frozenset("\t\r\n")
_PASSTHROUGH_HANDLER = "racerep-cp1252-passthrough"


def _passthrough(exc: UnicodeError) -> tuple[str, int]:
    # Bytes without a cp1252 mapping become the code point of the same value.
    if not isinstance(exc, UnicodeDecodeError):
        raise exc
    raw = exc.object[exc.start:exc.end]
    return "".join(chr(b) for b in raw), exc.end


codecs.register_error(_PASSTHROUGH_HANDLER, _passthrough)


def trim_copy(s: str) -> str:
    """Strip spaces, tabs, carriage returns and newlines from both ends."""
    return s.strip(_WHITESPACE)


def basic_normalize(s: str) -> str:
    """Keep ASCII letters, digits and a few separators; turn tabs and newlines into spaces.

    Stops at the first NUL character and trims the result.
    """
    kept = []
    for c in s.split("\0", 1)[0]:
        if (c.isascii() and c.isalnum()) or c in _KEPT_PUNCTUATION:
            kept.append(c)
        elif c in _SPACED:
            kept.append(" ")
    return trim_copy("".join(kept))


def cp1252_to_utf8(data: bytes | str) -> str:
    """Decode Windows-1252 bytes into text, stopping at the first NUL byte.

    Text that is already decoded is returned unchanged.
    """
    if isinstance(data, str):
        return data
    raw = bytes(data).split(b"\0", 1)[0]
    return raw.decode("cp1252", errors=_PASSTHROUGH_HANDLER)