"""Looking up stored pages through the offset library."""

from __future__ import annotations

from dataclasses import dataclass
from os import PathLike

DEFAULT_OFFSETS_PATH = "data/offsetLib.dat"
DEFAULT_PAGES_PATH = "data/ripepage.dat"


@dataclass(frozen=True)
class OffsetInfo:
    """Byte position and length of one page in the page library."""

    start: int
    length: int


def load_offsets(path: str | PathLike[str] = DEFAULT_OFFSETS_PATH) -> dict[int, OffsetInfo]:
    """Read "id start length" triples; reading stops at the first bad one."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            tokens = handle.read().split()
    except OSError:
        return {}
    offsets: dict[int, OffsetInfo] = {}
    for pos in range(0, len(tokens) - 2, 3):
        try:
            doc_id, start, length = (int(token) for token in tokens[pos : pos + 3])
        except ValueError:
            break
        offsets[doc_id] = OffsetInfo(start, length)
    return offsets


def _between(data: bytes, start: int, end: int) -> bytes:
    return data[start:end] if end >= start else data[start:]


def get_title_content(
    page_path: str | PathLike[str], offset: OffsetInfo
) -> tuple[str, str]:
    """Title and content of the page at ``offset``, or ("no", "no")."""
    try:
        with open(page_path, "rb") as handle:
            handle.seek(offset.start)
            data = handle.read(offset.length)
    except OSError:
        return "no", "no"

    title_start = data.find(b"<title>")
    title_end = data.find(b"</title>")
    if title_start < 0 or title_end < 0:
        return "no", "no"
    title = _between(data, title_start + len(b"<title>"), title_end)

    content_start = data.find(b"<content>")
    if content_start < 0:
        content = b""
    else:
        content = _between(data, content_start + len(b"<content>"), data.find(b"</content>"))
    return title.decode("utf-8", errors="replace"), content.decode("utf-8", errors="replace")