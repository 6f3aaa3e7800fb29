"""Heuristic repair of UTF-8 text that was decoded as Latin-1/cp1252.

Backend rows for agents, destinations and brand/model names regularly
arrive double-encoded: the UTF-8 bytes of an Arabic string were decoded
as Latin-1 (or Windows-1252) somewhere in the pipeline, so ``"مثال"``
shows up as ``"Ù…Ø«Ø§Ù„"``.

:func:`recover` reinterprets the current code points as raw bytes in a
few different ways, decodes each result as UTF-8 and keeps whichever
variant contains the most Arabic letters. Text without any of the
:data:`~pyvtrack._constants.MOJIBAKE_MARKERS` is returned untouched, so
clean Arabic or Latin text is never decoded a second time.
"""

from __future__ import annotations

import logging
import unicodedata
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from pyvtrack._constants import ARABIC_FIRST, ARABIC_LAST, MOJIBAKE_MARKERS, REPLACEMENT_CHAR

_logger = logging.getLogger(__name__)

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def _build_cp1252_bytes() -> dict[str, int]:
    """Map the printable cp1252 characters of the 0x80-0x9F block to their byte."""
    table: dict[str, int] = {}
    for byte in range(0x80, 0xA0):
        try:
            char = bytes([byte]).decode("cp1252")
        except UnicodeDecodeError:
            # 0x81, 0x8D, 0x8F, 0x90, 0x9D are undefined in cp1252.
            continue
        table[char] = byte
    return table


_CP1252_BYTES: dict[str, int] = _build_cp1252_bytes()


@dataclass(frozen=True, slots=True)
class DecodingCandidate:
    """One alternative reading of a corrupted string."""

    label: str
    text: str
    score: int


# ------------------------------------------------------------------
# Character class tests
# ------------------------------------------------------------------


def _is_arabic(char: str) -> bool:
    return ARABIC_FIRST <= ord(char) <= ARABIC_LAST


def arabic_score(text: str) -> int:
    """Number of Arabic-script code points (U+0600..U+06FF) in *text*."""
    return sum(1 for char in text if _is_arabic(char))


def has_markers(text: str) -> bool:
    """Return ``True`` when *text* contains a mojibake marker character."""
    return any(char in MOJIBAKE_MARKERS for char in text)


def _coerce(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    try:
        return str(value)
    except Exception:
        _logger.debug("Could not convert %s to text", type(value).__name__, exc_info=True)
        return ""


def is_right_to_left(text: Any) -> bool:
    """Return ``True`` if *text* contains any Arabic-script character.

    Only used for presentation (alignment and writing direction).
    """
    return any(_is_arabic(char) for char in _coerce(text))


def looks_corrupted(text: Any) -> bool:
    """Return ``True`` if *text* still carries markers and no Arabic letters.

    Applied to the output of :func:`recover`, this means recovery was
    attempted but did not produce readable text, and callers should fall
    back to another source (see :class:`pyvtrack.agents.AgentDirectory`).
    """
    value = _coerce(text)
    return has_markers(value) and not any(_is_arabic(char) for char in value)


# ------------------------------------------------------------------
# Candidate generation
# ------------------------------------------------------------------


def _decode_utf8(data: bytes) -> str | None:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


def _percent_decode_utf8(escaped: str) -> str | None:
    """Strictly percent-decode *escaped* and read the bytes as UTF-8.

    Returns ``None`` for a malformed escape or invalid UTF-8.
    """
    out = bytearray()
    i = 0
    length = len(escaped)
    while i < length:
        char = escaped[i]
        if char != "%":
            out.extend(char.encode("utf-8"))
            i += 1
            continue
        pair = escaped[i + 1 : i + 3]
        if len(pair) != 2 or not all(digit in _HEX_DIGITS for digit in pair):
            return None
        out.append(int(pair, 16))
        i += 3
    return _decode_utf8(bytes(out))


def _reinterpret_bytes(text: str) -> str | None:
    """Read every character as the single byte it was decoded from.

    Latin-1 covers code points below 256; the cp1252 table covers the
    punctuation Windows substitutes for 0x80-0x9F (``…`` for 0x85 and so on).
    """
    out = bytearray()
    for char in text:
        code = ord(char)
        if code < 256:
            out.append(code)
            continue
        byte = _CP1252_BYTES.get(char)
        if byte is None:
            return None
        out.append(byte)
    return _decode_utf8(bytes(out))


def _code_units(text: str) -> list[int]:
    """Return the UTF-16 code units of *text*.

    Characters outside the BMP become a surrogate pair, so an emoji yields
    two units rather than one code point above 0xFFFF.
    """
    data = text.encode("utf-16-le", "surrogatepass")
    return [int.from_bytes(data[i : i + 2], "little") for i in range(0, len(data), 2)]


def _percent_low_byte(text: str) -> str | None:
    return _percent_decode_utf8("".join(f"%{unit % 256:02X}" for unit in _code_units(text)))


def _percent_full_code(text: str) -> str | None:
    # Units >= 256 expand to more than two hex digits; the decoder takes
    # the first two as a byte and the rest as literal characters.
    return _percent_decode_utf8("".join(f"%{unit:02X}" for unit in _code_units(text)))


_GENERATORS: Sequence[tuple[str, Callable[[str], str | None]]] = (
    ("bytes", _reinterpret_bytes),
    ("percent_low_byte", _percent_low_byte),
    ("percent_full_code", _percent_full_code),
)


def build_candidate(label: str, decoded: str | None) -> DecodingCandidate | None:
    """Wrap a decoded string in a scored candidate, ``None`` when unavailable."""
    if decoded is None:
        return None
    return DecodingCandidate(label=label, text=decoded, score=arabic_score(decoded))


def generate_candidates(text: str) -> Iterator[DecodingCandidate]:
    """Yield the available decodings of *text* in preference order."""
    for label, generator in _GENERATORS:
        candidate = build_candidate(label, generator(text))
        if candidate is None:
            _logger.debug("Candidate %s unavailable for %r", label, text)
            continue
        yield candidate


# ------------------------------------------------------------------
# Public entry points
# ------------------------------------------------------------------


def recover(value: Any) -> str:
    """Return the best-guess correctly encoded form of *value*.

    ``None`` becomes ``""`` and surrounding whitespace is stripped. Text
    without marker characters is returned as is. Otherwise the original
    and every decoding candidate are scored by Arabic letter count; a
    candidate has to score strictly higher to replace the original, and
    candidates containing U+FFFD are never picked. The winner is
    NFC-normalized. Never raises.
    """
    text = _coerce(value).strip()
    if not text:
        return ""
    if not has_markers(text):
        return text

    best = text
    best_score = arabic_score(text)
    chosen = "original"
    for candidate in generate_candidates(text):
        if REPLACEMENT_CHAR in candidate.text:
            continue
        if candidate.score > best_score:
            best = candidate.text
            best_score = candidate.score
            chosen = candidate.label

    _logger.debug("Recovery picked %s (score=%d) for %r", chosen, best_score, text)
    return unicodedata.normalize("NFC", best)


def recover_fields(record: Mapping[str, Any], keys: Sequence[str]) -> dict[str, str]:
    """Recover the display strings for *keys* of *record*.

    Missing keys map to ``""``.
    """
    return {key: recover(record.get(key)) for key in keys}
