"""Prefix tree over code points used to look up dictionary words."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from ripesearch.unicode import RuneStr

MAX_WORD_LENGTH = 512


@dataclass
class DictUnit:
    """A dictionary word with its weight and part-of-speech tag."""

    word: tuple[int, ...]
    weight: float = 0.0
    tag: str = ""


@dataclass
class Dag:
    """Possible word ends starting at one position of a sentence."""

    runestr: RuneStr = field(default_factory=RuneStr)
    nexts: list[tuple[int, DictUnit | None]] = field(default_factory=list)
    p_info: DictUnit | None = None
    weight: float = 0.0
    next_pos: int = 0


class _Node:
    __slots__ = ("children", "value")

    def __init__(self) -> None:
        self.children: dict[int, _Node] | None = None
        self.value: DictUnit | None = None


def _code(rune: int | RuneStr) -> int:
    return rune.rune if isinstance(rune, RuneStr) else rune


class Trie:
    """Maps sequences of code points to dictionary units."""

    def __init__(
        self,
        keys: Iterable[Sequence[int]] = (),
        values: Iterable[DictUnit] = (),
    ) -> None:
        self._root = _Node()
        keys = list(keys)
        values = list(values)
        if not keys or not values:
            return
        if len(keys) != len(values):
            raise ValueError("keys and values differ in length")
        for key, value in zip(keys, values):
            self.insert(key, value)

    def find(self, runes: Sequence[int | RuneStr]) -> DictUnit | None:
        """The unit stored for exactly these runes, or None."""
        if not runes:
            return None
        node = self._root
        for rune in runes:
            if node.children is None:
                return None
            child = node.children.get(_code(rune))
            if child is None:
                return None
            node = child
        return node.value

    def build_dags(
        self, runes: Sequence[RuneStr], max_word_len: int = MAX_WORD_LENGTH
    ) -> list[Dag]:
        """For each position, every dictionary word that starts there."""
        dags: list[Dag] = []
        count = len(runes)
        for start, runestr in enumerate(runes):
            dag = Dag(runestr=runestr)
            children = self._root.children
            node = children.get(_code(runestr)) if children is not None else None
            dag.nexts.append((start, node.value if node is not None else None))
            end = start + 1
            while end < count and end - start + 1 <= max_word_len:
                if node is None or node.children is None:
                    break
                node = node.children.get(_code(runes[end]))
                if node is None:
                    break
                if node.value is not None:
                    dag.nexts.append((end, node.value))
                end += 1
            dags.append(dag)
        return dags

    def insert(self, key: Sequence[int], value: DictUnit) -> None:
        """Store ``value`` under ``key``; an empty key is ignored."""
        if not key:
            return
        node = self._root
        for rune in key:
            if node.children is None:
                node.children = {}
            node = node.children.setdefault(_code(rune), _Node())
        node.value = value

    def delete(self, key: Sequence[int]) -> None:
        """Drop the whole branch that starts with the first rune of ``key``."""
        if not key or self._root.children is None:
            return
        self._root.children.pop(_code(key[0]), None)