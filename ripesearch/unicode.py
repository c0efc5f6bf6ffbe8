"""Decoding UTF-8 text into runes with byte and character offsets."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class Word:
    """A piece of text with its byte offset and character position."""

    word: str
    offset: int
    unicode_offset: int = 0
    unicode_length: int = 0

    def __str__(self) -> str:
        return f'{{"word": "{self.word}", "offset": {self.offset}}}'


@dataclass(frozen=True)
class RuneStr:
    """One decoded character and where it sits in the encoded text."""

    rune: int = 0
    offset: int = 0
    length: int = 0
    unicode_offset: int = 0
    unicode_length: int = 0


@dataclass(frozen=True)
class WordRange:
    """Inclusive range [left, right] of indexes into a rune list."""

    left: int
    right: int

    def length(self) -> int:
        return self.right - self.left + 1

    def is_all_ascii(self, runes: Sequence[RuneStr]) -> bool:
        return all(rune.rune < 0x80 for rune in runes[self.left : self.right + 1])


def _as_bytes(data: str | bytes) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


def _decode_at(raw: bytes, pos: int) -> tuple[int, int]:
    remaining = len(raw) - pos
    if remaining <= 0:
        return 0, 0
    lead = raw[pos]
    if not lead & 0x80:
        return lead & 0x7F, 1
    if lead <= 0xDF and remaining > 1:
        return ((lead & 0x1F) << 6) | (raw[pos + 1] & 0x3F), 2
    if lead <= 0xEF and remaining > 2:
        rune = (lead & 0x0F) << 12
        rune |= (raw[pos + 1] & 0x3F) << 6
        rune |= raw[pos + 2] & 0x3F
        return rune, 3
    if lead <= 0xF7 and remaining > 3:
        rune = (lead & 0x07) << 18
        rune |= (raw[pos + 1] & 0x3F) << 12
        rune |= (raw[pos + 2] & 0x3F) << 6
        rune |= raw[pos + 3] & 0x3F
        return rune, 4
    return 0, 0


def decode_rune(data: str | bytes) -> tuple[int, int]:
    """Decode the first character: (rune, byte length), or (0, 0) if impossible."""
    return _decode_at(_as_bytes(data), 0)


def decode_runes(data: str | bytes) -> list[RuneStr]:
    """Decode every character; raises ValueError on an undecodable sequence."""
    raw = _as_bytes(data)
    runes: list[RuneStr] = []
    offset = 0
    while offset < len(raw):
        rune, size = _decode_at(raw, offset)
        if size == 0:
            raise ValueError(f"invalid UTF-8 sequence at byte {offset}")
        runes.append(RuneStr(rune, offset, size, len(runes), 1))
        offset += size
    return runes


def decode_unicode(data: str | bytes) -> list[int]:
    """Code points of the text; raises ValueError on an undecodable sequence."""
    return [rune.rune for rune in decode_runes(data)]


def is_single_word(data: str | bytes) -> bool:
    """True if the text is exactly one character."""
    raw = _as_bytes(data)
    return decode_rune(raw)[1] == len(raw)


def word_from_runes(
    data: str | bytes, runes: Sequence[RuneStr], left: int, right: int
) -> Word:
    """The word spanning runes[left] to runes[right], inclusive."""
    raw = _as_bytes(data)
    first, last = runes[left], runes[right]
    if last.offset < first.offset:
        raise ValueError("word range ends before it starts")
    length = last.offset - first.offset + last.length
    unicode_length = last.unicode_offset - first.unicode_offset + last.unicode_length
    text = raw[first.offset : first.offset + length].decode("utf-8", errors="replace")
    return Word(text, first.offset, first.unicode_offset, unicode_length)


def words_from_ranges(
    data: str | bytes, runes: Sequence[RuneStr], ranges: Sequence[WordRange]
) -> list[Word]:
    """Words for each range, in order."""
    raw = _as_bytes(data)
    return [word_from_runes(raw, runes, rng.left, rng.right) for rng in ranges]