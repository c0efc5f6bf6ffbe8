"""Edit distance between UTF-8 strings, counted in characters."""

from __future__ import annotations


def _as_bytes(data: str | bytes) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


def utf8_sequence_length(lead: int) -> int:
    """Number of bytes a character starting with byte ``lead`` occupies."""
    if not lead & 0x80:
        return 1
    count = 1
    for bit in range(6, 0, -1):
        if not lead & (1 << bit):
            break
        count += 1
    return count


def _characters(data: str | bytes) -> list[bytes]:
    raw = _as_bytes(data)
    characters = []
    pos = 0
    while pos < len(raw):
        size = utf8_sequence_length(raw[pos])
        characters.append(raw[pos : pos + size])
        pos += size
    return characters


def char_length(data: str | bytes) -> int:
    """Number of characters in UTF-8 text."""
    return len(_characters(data))


def edit_distance(lhs: str | bytes, rhs: str | bytes) -> int:
    """Levenshtein distance between two texts, one step per character."""
    left = _characters(lhs)
    right = _characters(rhs)
    previous = list(range(len(right) + 1))
    for row, left_char in enumerate(left, 1):
        current = [row]
        for column, right_char in enumerate(right, 1):
            if left_char == right_char:
                current.append(previous[column - 1])
            else:
                current.append(
                    min(current[column - 1], previous[column], previous[column - 1]) + 1
                )
        previous = current
    return previous[-1]