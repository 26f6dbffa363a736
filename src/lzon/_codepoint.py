"""Unicode escape decoding through the UTF-8 multi-byte encoding rules."""

from __future__ import annotations

from typing import Final

MAX_CODEPOINT: Final = 0x10FFFF

_HIGH_SURROGATE_BASE: Final = 0xD800
_LOW_SURROGATE_BASE: Final = 0xDC00
_SUPPLEMENTARY_BASE: Final = 0x10000


def codepoint_to_utf8(codepoint: int) -> bytes:
    """Encode a code point as its UTF-8 byte sequence.

    Surrogate code points are encoded like any other 3-byte value, so a lone
    surrogate from a ``\\uD83D`` escape still produces bytes.

    Args:
        codepoint: Unicode scalar value or surrogate, 0 to 0x10FFFF

    Returns:
        One to four UTF-8 bytes

    Raises:
        ValueError: If the code point is above 0x10FFFF or negative
    """
    if codepoint < 0:
        raise ValueError(f"invalid unicode codepoint '{codepoint:x}'")
    if codepoint <= 0x7F:
        return bytes((codepoint,))
    if codepoint <= 0x7FF:
        return bytes((0xC0 | (codepoint >> 6), 0x80 | (codepoint & 0x3F)))
    if codepoint <= 0xFFFF:
        return bytes(
            (
                0xE0 | (codepoint >> 12),
                0x80 | ((codepoint >> 6) & 0x3F),
                0x80 | (codepoint & 0x3F),
            )
        )
    if codepoint <= MAX_CODEPOINT:
        return bytes(
            (
                0xF0 | (codepoint >> 18),
                0x80 | ((codepoint >> 12) & 0x3F),
                0x80 | ((codepoint >> 6) & 0x3F),
                0x80 | (codepoint & 0x3F),
            )
        )
    raise ValueError(f"invalid unicode codepoint '{codepoint:x}'")


def escape_to_codepoint(hex_digits: str) -> int:
    """Convert the digits of a ``\\u`` escape to a code point.

    Args:
        hex_digits: Either ``XXXX`` or a surrogate pair written ``XXXX\\uXXXX``

    Returns:
        The code point, combining a surrogate pair into one value
    """
    high = int(hex_digits[:4], 16)
    if len(hex_digits) < 10:
        return high

    low = int(hex_digits[6:10], 16)
    return (
        (high - _HIGH_SURROGATE_BASE) * 0x400
        + (low - _LOW_SURROGATE_BASE)
        + _SUPPLEMENTARY_BASE
    )


def decode_unicode_escape(hex_digits: str) -> str:
    """Decode the digits of a ``\\u`` escape to text."""
    encoded = codepoint_to_utf8(escape_to_codepoint(hex_digits))
    # surrogatepass keeps lone surrogates instead of failing on them
    return encoded.decode("utf-8", "surrogatepass")
