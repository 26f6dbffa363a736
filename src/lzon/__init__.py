"""
Small recursive-descent JSON decoder.

Turns a text buffer into Python values (dict, list, str, int, float, bool,
None) and reports the first syntax error with its line and column.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import IO
from typing import Any
from typing import TypeAlias

from lzon._codepoint import decode_unicode_escape

__version__ = "0.1.0"

# Type aliases for domain concepts - recursive definition
JsonValue = (
    str | int | float | bool | None | dict[str, "JsonValue"] | list["JsonValue"]
)
Position: TypeAlias = int

# Hooks can return custom types
JsonValueOrTransformed = JsonValue | Any

ObjectHook = Callable[[dict[str, JsonValue]], Any] | None
ObjectPairsHook = (
    Callable[[list[tuple[str, JsonValueOrTransformed]]], Any] | None
)
ParseFloatHook = Callable[[str], Any] | None
ParseIntHook = Callable[[str], Any] | None

DEFAULT_MAX_DEPTH = 256

SPACE_CHARS = frozenset(" \t\r\n")
DELIM_CHARS = SPACE_CHARS | frozenset("]},")
ESCAPE_CHARS = frozenset('\\/"bfnrtu')
LITERALS = frozenset({"true", "false", "null"})

LITERAL_MAP: dict[str, bool | None] = {
    "true": True,
    "false": False,
    "null": None,
}

ESCAPE_CHAR_MAP = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_SURROGATE_PAIR_ESCAPE = re.compile(
    r"[dD][89abAB][0-9a-fA-F]{2}\\u[dD][c-fC-F][0-9a-fA-F]{2}"
)
_UNICODE_ESCAPE = re.compile(r"[0-9a-fA-F]{4}")
_NUMBER = re.compile(r"-?(?:0|[1-9][0-9]*)(\.[0-9]+)?([eE][+-]?[0-9]+)?")


class JSONDecodeError(ValueError):
    """
    Raised for the first syntax error found in a JSON document.

    Carries the message, the document, the offending offset and the 1-based
    line and column derived from it.
    """

    def __init__(self, msg: str, doc: str = "", pos: Position = 0) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos
        self.lineno = doc.count("\n", 0, pos) + 1
        self.colno = pos - doc.rfind("\n", 0, pos)

        super().__init__(f"{msg} at line {self.lineno} col {self.colno}")

    def __reduce__(self) -> tuple[type["JSONDecodeError"], tuple[str, str, int]]:
        return self.__class__, (self.msg, self.doc, self.pos)


@dataclass(frozen=True)
class DecodeConfig:
    """
    Immutable decoding options.

    Hooks follow the standard library json module: they receive the raw
    numeric token or the decoded object members.
    """

    parse_float: ParseFloatHook = None
    parse_int: ParseIntHook = None
    object_pairs_hook: ObjectPairsHook = None
    object_hook: ObjectHook = None
    max_depth: int | None = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        for name in ("parse_float", "parse_int", "object_pairs_hook", "object_hook"):
            hook = getattr(self, name)
            if hook is not None and not callable(hook):
                raise TypeError(f"{name} must be callable")
        if self.max_depth is not None and (
            isinstance(self.max_depth, bool)
            or not isinstance(self.max_depth, int)
            or self.max_depth < 1
        ):
            raise TypeError("max_depth must be a positive integer or None")


def next_char(
    text: str, idx: Position, chars: frozenset[str], negate: bool = False
) -> Position:
    """
    Returns the first index at or after ``idx`` whose character is in
    ``chars`` (or, with ``negate``, is not). Returns ``len(text)`` when there
    is no such position.
    """
    for i in range(idx, len(text)):
        if (text[i] in chars) != negate:
            return i
    return len(text)


class Decoder:
    """
    Recursive-descent parser over one document.

    Each ``parse_*`` method takes the offset of the first character of its
    production and returns ``(value, offset just past it)``.
    """

    def __init__(self, text: str, config: DecodeConfig):
        self.text = text
        self.config = config
        self.depth = 0
        self._handlers: dict[str, Callable[[Position], tuple[Any, Position]]] = {
            '"': self.parse_string,
            "-": self.parse_number,
            "t": self.parse_literal,
            "f": self.parse_literal,
            "n": self.parse_literal,
            "[": self.parse_array,
            "{": self.parse_object,
        }
        for digit in "0123456789":
            self._handlers[digit] = self.parse_number

    def error(self, msg: str, pos: Position) -> JSONDecodeError:
        return JSONDecodeError(msg, self.text, pos)

    def skip_whitespace(self, idx: Position) -> Position:
        return next_char(self.text, idx, SPACE_CHARS, negate=True)

    def decode(self) -> JsonValueOrTransformed:
        """Parses exactly one value surrounded by optional whitespace."""
        value, idx = self.parse_value(self.skip_whitespace(0))
        idx = self.skip_whitespace(idx)
        if idx < len(self.text):
            raise self.error("trailing garbage", idx)
        return value

    def parse_value(self, idx: Position) -> tuple[Any, Position]:
        if idx >= len(self.text):
            raise self.error("unexpected end of input", idx)

        char = self.text[idx]
        handler = self._handlers.get(char)
        if handler is None:
            raise self.error(f"unexpected character '{char}'", idx)
        return handler(idx)

    def parse_string(self, idx: Position) -> tuple[str, Position]:
        """Parses a quoted string starting at its opening quote."""
        text = self.text
        length = len(text)
        parts: list[str] = []
        j = idx + 1
        span_start = j

        while j < length:
            char = text[j]

            if char == '"':
                parts.append(text[span_start:j])
                return "".join(parts), j + 1

            if char == "\\":
                parts.append(text[span_start:j])
                escape_pos = j
                j += 1
                if j >= length:
                    break
                escape = text[j]
                if escape == "u":
                    hex_digits = self._match_unicode_escape(j + 1)
                    if hex_digits is None:
                        raise self.error(
                            "invalid unicode escape in string", escape_pos
                        )
                    try:
                        parts.append(decode_unicode_escape(hex_digits))
                    except ValueError as e:
                        raise self.error(str(e), escape_pos) from e
                    j += len(hex_digits)
                elif escape in ESCAPE_CHARS:
                    parts.append(ESCAPE_CHAR_MAP[escape])
                else:
                    raise self.error(
                        f"invalid escape char '{escape}' in string",
                        escape_pos,
                    )
                span_start = j + 1

            elif ord(char) < 32:
                raise self.error("control character in string", j)

            j += 1

        raise self.error("expected closing quote for string", idx)

    def _match_unicode_escape(self, idx: Position) -> str | None:
        """Returns the hex digits of a ``\\u`` escape (a surrogate pair is
        returned as ``XXXX\\uXXXX``), or None when malformed."""
        match = _SURROGATE_PAIR_ESCAPE.match(
            self.text, idx
        ) or _UNICODE_ESCAPE.match(self.text, idx)
        return match.group() if match else None

    def parse_number(self, idx: Position) -> tuple[Any, Position]:
        end = next_char(self.text, idx, DELIM_CHARS)
        token = self.text[idx:end]
        match = _NUMBER.fullmatch(token)
        if match is None:
            raise self.error(f"invalid number '{token}'", idx)

        if match.group(1) is not None or match.group(2) is not None:
            if self.config.parse_float:
                return self.config.parse_float(token), end
            return float(token), end

        if self.config.parse_int:
            return self.config.parse_int(token), end
        try:
            return int(token), end
        except ValueError as e:
            # int() refuses digit strings over sys.get_int_max_str_digits()
            raise self.error("number too large", idx) from e

    def parse_literal(self, idx: Position) -> tuple[bool | None, Position]:
        end = next_char(self.text, idx, DELIM_CHARS)
        word = self.text[idx:end]
        if word not in LITERALS:
            raise self.error(f"invalid literal '{word}'", idx)
        return LITERAL_MAP[word], end

    def _enter(self, idx: Position) -> None:
        self.depth += 1
        if self.config.max_depth is not None and self.depth > self.config.max_depth:
            raise self.error("maximum nesting depth exceeded", idx)

    def parse_array(self, idx: Position) -> tuple[list[Any], Position]:
        self._enter(idx)
        values: list[Any] = []
        idx = self.skip_whitespace(idx + 1)

        # Empty array
        if self.text.startswith("]", idx):
            self.depth -= 1
            return values, idx + 1

        while True:
            value, idx = self.parse_value(idx)
            values.append(value)

            idx = self.skip_whitespace(idx)
            char = self.text[idx : idx + 1]
            if char == "]":
                self.depth -= 1
                return values, idx + 1
            if char != ",":
                raise self.error("expected ']' or ','", idx)
            idx = self.skip_whitespace(idx + 1)

    def parse_object(self, idx: Position) -> tuple[Any, Position]:
        self._enter(idx)
        pairs: list[tuple[str, Any]] = []
        idx = self.skip_whitespace(idx + 1)

        # Empty object
        if self.text.startswith("}", idx):
            self.depth -= 1
            return self._build_object(pairs), idx + 1

        while True:
            if not self.text.startswith('"', idx):
                raise self.error("expected string for key", idx)
            key, idx = self.parse_string(idx)

            idx = self.skip_whitespace(idx)
            if not self.text.startswith(":", idx):
                raise self.error("expected ':' after key", idx)
            idx = self.skip_whitespace(idx + 1)

            value, idx = self.parse_value(idx)
            pairs.append((key, value))

            idx = self.skip_whitespace(idx)
            char = self.text[idx : idx + 1]
            if char == "}":
                self.depth -= 1
                return self._build_object(pairs), idx + 1
            if char != ",":
                raise self.error("expected '}' or ','", idx)
            idx = self.skip_whitespace(idx + 1)

    def _build_object(self, pairs: list[tuple[str, Any]]) -> Any:
        """Applies object hooks; without hooks later duplicates win."""
        if self.config.object_pairs_hook:
            return self.config.object_pairs_hook(pairs)
        obj = dict(pairs)
        if self.config.object_hook:
            return self.config.object_hook(obj)
        return obj


def decode(text: str, **kwargs: Any) -> JsonValueOrTransformed:
    """
    Decodes a complete JSON document.

    Raises TypeError for non-str input and JSONDecodeError for the first
    syntax error. Keyword arguments build a DecodeConfig.
    """
    if not isinstance(text, str):
        raise TypeError(
            f"the JSON object must be str, not {type(text).__name__}"
        )

    config = DecodeConfig(**kwargs)
    return Decoder(text, config).decode()


loads = decode


def load(fp: IO[str], **kwargs: Any) -> JsonValueOrTransformed:
    """
    Decodes JSON read in full from a file-like object.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return decode(fp.read(), **kwargs)


__all__ = [
    "DELIM_CHARS",
    "ESCAPE_CHARS",
    "LITERALS",
    "SPACE_CHARS",
    "DecodeConfig",
    "Decoder",
    "JSONDecodeError",
    "decode",
    "load",
    "loads",
    "next_char",
]
