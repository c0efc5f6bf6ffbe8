"""Reading RSS feeds into a page library and building its TF-IDF index."""

from __future__ import annotations

import math
import re
import sys
import xml.etree.ElementTree as ET
from collections import Counter
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from ripesearch.dedup import ArticleManager
from ripesearch.index import DEFAULT_IDF_PATH, DEFAULT_INDEX_PATH, InvertedIndex

TAG_OVERHEAD = 75
_TAG_RE = re.compile(r"<[^>]+>")


@dataclass(frozen=True)
class RSSItem:
    """One feed entry: its title, link and tag-free description."""

    title: str
    link: str
    description: str


def strip_tags(text: str) -> str:
    """Remove everything that looks like a markup tag."""
    return _TAG_RE.sub("", text)


def _text(element: ET.Element | None) -> str:
    if element is None:
        return ""
    return element.text or ""


def read_rss(path: str | PathLike[str]) -> list[RSSItem]:
    """Items of an RSS 2.0 file; raises ValueError if it is not one."""
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as exc:
        raise ValueError(f"cannot parse {path}: {exc}") from exc
    if root.tag != "rss":
        raise ValueError(f"{path} has no rss element")
    channel = root.find("channel")
    if channel is None:
        raise ValueError(f"{path} has no channel element")

    items = []
    for node in channel.findall("item"):
        title = _text(node.find("title"))
        link = _text(node.find("link"))
        description = node.find("description")
        content = node.find("content")
        if description is not None:
            body = _text(description)
        elif content is not None:
            body = _text(content)
        else:
            body = title
        items.append(RSSItem(title, link, strip_tags(body)))
    return items


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8").split(b"\0", 1)[0])


def _divide(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return math.nan if numerator == 0 else math.copysign(math.inf, numerator)
    return numerator / denominator


class CorpusBuilder:
    """Collects feed items, writes the page library and computes weights."""

    def __init__(
        self, tokenizer: Callable[[str], Iterable[str]], manager: ArticleManager
    ) -> None:
        self.tokenizer = tokenizer
        self.manager = manager
        self.items: list[RSSItem] = []
        self.next_id = 1
        self.offset = 0
        self.tf: dict[int, Counter[str]] = {}
        self.df: Counter[str] = Counter()
        self.idf: dict[str, float] = {}
        self.weights: dict[int, dict[str, float]] = {}
        self.normalized: dict[int, dict[str, float]] = {}

    def read(self, path: str | PathLike[str]) -> int:
        """Queue the items of one feed file; returns how many were read."""
        items = read_rss(path)
        self.items.extend(items)
        return len(items)

    def store(
        self,
        page_path: str | PathLike[str],
        offset_path: str | PathLike[str],
        contents_path: str | PathLike[str],
    ) -> int:
        """Append queued, non-duplicate items to the libraries; returns the count."""
        stored = 0
        with open(page_path, "a", encoding="utf-8", newline="") as pages, open(
            offset_path, "a", encoding="utf-8", newline=""
        ) as offsets, open(contents_path, "a", encoding="utf-8", newline="") as contents:
            for item in self.items:
                doc_id = self.next_id
                if not self.manager.add_article(doc_id, item.description):
                    continue
                pages.write(
                    f"<doc>\n\t<id>{doc_id}</id>\n\t<url>{item.link}</url>\n\t"
                    f"<title>{item.title}</title>\n\t"
                    f"<content>{item.description}</content>\n</doc>\n"
                )
                contents.write(f"{item.description} ")

                words = list(self.tokenizer(item.description))
                self.tf.setdefault(doc_id, Counter()).update(words)
                self.df.update(set(words))

                size = (
                    _byte_len(str(doc_id))
                    + _byte_len(item.link)
                    + _byte_len(item.title)
                    + _byte_len(item.description)
                    + TAG_OVERHEAD
                )
                offsets.write(f"{doc_id} {self.offset} {size}\n")
                self.offset += size
                self.next_id += 1
                stored += 1
        self.items.clear()
        return stored

    def compute_idf(self) -> dict[str, float]:
        """log2(N / (DF + 1)) for every word seen, N being the next free id."""
        for word, count in self.df.items():
            self.idf.setdefault(word, math.log2(self.next_id / (count + 1)))
        return self.idf

    def compute_weights(self) -> dict[int, dict[str, float]]:
        """TF-IDF weights of every document, normalised to unit length."""
        for doc_id, terms in self.tf.items():
            row = {
                word: freq * self.idf[word]
                for word, freq in terms.items()
                if word in self.idf
            }
            if row:
                self.weights.setdefault(doc_id, {}).update(row)
        for doc_id, row in self.weights.items():
            norm = math.sqrt(sum(value * value for value in row.values()))
            self.normalized.setdefault(doc_id, {}).update(
                {word: _divide(value, norm) for word, value in row.items()}
            )
        return self.normalized

    def build_index(
        self, index_path: str | PathLike[str] = DEFAULT_INDEX_PATH
    ) -> dict[int, dict[str, float]]:
        """Compute the weights and write them as an inverted index."""
        self.compute_idf()
        self.compute_weights()
        InvertedIndex().store(self.normalized, index_path)
        return self.normalized

    def store_idf(self, path: str | PathLike[str] = DEFAULT_IDF_PATH) -> None:
        """Write "word idf" lines."""
        with open(path, "w", encoding="utf-8") as handle:
            for word, value in self.idf.items():
                handle.write(f"{word} {value:g}\n")


def process_directory(
    directory: str | PathLike[str],
    builder: CorpusBuilder,
    page_path: str | PathLike[str],
    offset_path: str | PathLike[str],
    contents_path: str | PathLike[str],
    index_path: str | PathLike[str] = DEFAULT_INDEX_PATH,
) -> dict[int, dict[str, float]]:
    """Store every .xml feed of a directory, then build the index."""
    for entry in sorted(Path(directory).iterdir()):
        if not (entry.is_file() and entry.suffix == ".xml"):
            continue
        print(f"Reading file: {entry}")
        try:
            builder.read(entry)
        except (ValueError, OSError) as exc:
            print("loadFile fail", file=sys.stderr)
            print(exc, file=sys.stderr)
        builder.store(page_path, offset_path, contents_path)
    return builder.build_index(index_path)