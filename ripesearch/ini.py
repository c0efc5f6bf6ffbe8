"""Parsing of INI configuration files into case-insensitive lookups."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from os import PathLike

MAX_LINE = 200
MAX_SECTION = 50
MAX_NAME = 50
START_COMMENT_PREFIXES = ";#"
INLINE_COMMENT_PREFIXES = ";"

_WHITESPACE = " \t\n\v\f\r"
_BOM = "\ufeff"
_LONG_MAX = 2**63 - 1
_LONG_MIN = -(2**63)
_ULONG_MAX = 2**64 - 1
_TRUE_WORDS = frozenset({"true", "yes", "on", "1"})
_FALSE_WORDS = frozenset({"false", "no", "off", "0"})
_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)

_INT_RE = re.compile(
    r"[ \t\n\v\f\r]*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)"
)
_FLOAT_RE = re.compile(
    r"[ \t\n\v\f\r]*([+-]?(?:"
    r"0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?[0-9]+)?"
    r"|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?"
    r"|inf(?:inity)?"
    r"|nan))",
    re.IGNORECASE,
)


def _find_chars_or_comment(text: str, chars: str | None) -> int:
    """Index of the first of ``chars`` or of an inline comment, else len(text)."""
    was_space = False
    for index, char in enumerate(text):
        if chars and char in chars:
            return index
        if was_space and char in INLINE_COMMENT_PREFIXES:
            return index
        was_space = char in _WHITESPACE
    return len(text)


def _strip_inline_comment(text: str) -> str:
    return text[: _find_chars_or_comment(text, None)]


def _physical_lines(lines: Iterable[str]) -> Iterator[str]:
    """Split over-long lines into the pieces a fixed line buffer would read."""
    width = MAX_LINE - 1
    for raw in lines:
        if len(raw) <= width:
            yield raw
        else:
            yield from (raw[pos : pos + width] for pos in range(0, len(raw), width))


def _split_lines(text: str) -> list[str]:
    return re.findall(r"[^\n]*\n|[^\n]+", text)


def parse_ini(lines: Iterable[str]) -> tuple[list[tuple[str, str, str]], int]:
    """Parse INI lines.

    Returns the (section, name, value) entries in file order and the number of
    the first line holding an error, or 0 when every line parsed.
    """
    entries: list[tuple[str, str, str]] = []
    error = 0
    section = ""
    prev_name = ""

    for lineno, line in enumerate(_physical_lines(lines), 1):
        indented = False
        if lineno == 1 and line.startswith(_BOM):
            line = line[1:]
            indented = True
        stripped = line.rstrip(_WHITESPACE)
        start = stripped.lstrip(_WHITESPACE)
        indented = indented or len(start) < len(stripped)

        if not start or start[0] in START_COMMENT_PREFIXES:
            continue

        if prev_name and indented:
            value = _strip_inline_comment(start).rstrip(_WHITESPACE)
            entries.append((section, prev_name, value))
        elif start[0] == "[":
            body = start[1:]
            end = _find_chars_or_comment(body, "]")
            if end < len(body) and body[end] == "]":
                section = body[:end][: MAX_SECTION - 1]
                prev_name = ""
            elif not error:
                error = lineno
        else:
            end = _find_chars_or_comment(start, "=:")
            if end < len(start) and start[end] in "=:":
                name = start[:end].rstrip(_WHITESPACE)
                value = _strip_inline_comment(start[end + 1 :]).strip(_WHITESPACE)
                prev_name = name[: MAX_NAME - 1]
                entries.append((section, name, value))
            elif not error:
                error = lineno

    return entries, error


def _make_key(section: str, name: str) -> str:
    return f"{section}={name}".translate(_ASCII_LOWER)


def _parse_c_integer(text: str) -> int | None:
    """Leading integer of ``text`` with automatic base, or None if there is none."""
    match = _INT_RE.match(text)
    if not match:
        return None
    sign, digits = match.groups()
    if digits[:2].lower() == "0x":
        magnitude = int(digits[2:], 16)
    elif digits.startswith("0"):
        magnitude = int(digits, 8)
    else:
        magnitude = int(digits, 10)
    return -magnitude if sign == "-" else magnitude


def _parse_c_real(text: str) -> float | None:
    """Leading floating point number of ``text``, or None if there is none."""
    match = _FLOAT_RE.match(text)
    if not match:
        return None
    token = match.group(1)
    if token.lstrip("+-")[:2].lower() == "0x":
        try:
            return float.fromhex(token)
        except OverflowError:
            return float("-inf") if token.startswith("-") else float("inf")
    return float(token)


class INIReader:
    """Name/value pairs of an INI file with case-insensitive lookup."""

    def __init__(
        self, values: Iterable[tuple[str, str, str]] = (), parse_error: int = 0
    ) -> None:
        self._values: dict[str, str] = {}
        for section, name, value in values:
            key = _make_key(section, name)
            current = self._values.get(key, "")
            self._values[key] = f"{current}\n{value}" if current else value
        self.parse_error = parse_error

    @classmethod
    def from_file(cls, path: str | PathLike[str]) -> INIReader:
        """Read a file; an unreadable file gives parse_error -1 and no values."""
        try:
            with open(path, encoding="utf-8", errors="replace", newline="") as handle:
                text = handle.read()
        except OSError:
            return cls((), -1)
        entries, error = parse_ini(_split_lines(text))
        return cls(entries, error)

    @classmethod
    def from_string(cls, text: str) -> INIReader:
        """Parse INI text held in memory; text after a NUL is ignored."""
        text = text.split("\0", 1)[0]
        entries, error = parse_ini(_split_lines(text))
        return cls(entries, error)

    def get(self, section: str, name: str, default: str = "") -> str:
        return self._values.get(_make_key(section, name), default)

    def get_string(self, section: str, name: str, default: str = "") -> str:
        """Like get, but an empty value also yields the default."""
        return self.get(section, name, "") or default

    def get_integer(self, section: str, name: str, default: int = 0) -> int:
        """Decimal, octal (0...) or hex (0x...) integer, clamped to a signed long."""
        number = _parse_c_integer(self.get(section, name, ""))
        if number is None:
            return default
        return max(_LONG_MIN, min(_LONG_MAX, number))

    def get_unsigned(self, section: str, name: str, default: int = 0) -> int:
        """Integer read as an unsigned long; negative values wrap around."""
        number = _parse_c_integer(self.get(section, name, ""))
        if number is None:
            return default
        magnitude = abs(number)
        if magnitude > _ULONG_MAX:
            return _ULONG_MAX
        return (-magnitude) % (_ULONG_MAX + 1) if number < 0 else magnitude

    def get_real(self, section: str, name: str, default: float = 0.0) -> float:
        number = _parse_c_real(self.get(section, name, ""))
        return default if number is None else number

    def get_boolean(self, section: str, name: str, default: bool = False) -> bool:
        """true/yes/on/1 and false/no/off/0, case-insensitively."""
        word = self.get(section, name, "").translate(_ASCII_LOWER)
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        return default

    def has_section(self, section: str) -> bool:
        prefix = _make_key(section, "")
        return any(key.startswith(prefix) for key in self._values)

    def has_value(self, section: str, name: str) -> bool:
        return _make_key(section, name) in self._values