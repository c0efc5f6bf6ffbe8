"""Maximum-probability word segmentation and part-of-speech lookup."""

from __future__ import annotations

from collections.abc import Sequence

from ripesearch.trie import MAX_WORD_LENGTH, Trie
from ripesearch.unicode import RuneStr, WordRange, decode_runes, words_from_ranges

MIN_DOUBLE = -3.14e100
POS_M = "m"
POS_ENG = "eng"
POS_X = "x"


def _code(rune: int | RuneStr) -> int:
    return rune.rune if isinstance(rune, RuneStr) else rune


def special_rule(runes: Sequence[int | RuneStr]) -> str:
    """Tag for a word missing from the dictionary, judged by its ASCII chars."""
    half = len(runes) // 2
    digits = 0
    ascii_count = 0
    for rune in runes:
        if ascii_count >= half:
            break
        code = _code(rune)
        if code < 0x80:
            ascii_count += 1
            if ord("0") <= code <= ord("9"):
                digits += 1
    if ascii_count == 0:
        return POS_X
    if digits == ascii_count:
        return POS_M
    return POS_ENG


class MPSegment:
    """Splits text into the most probable sequence of dictionary words."""

    def __init__(self, trie: Trie, min_weight: float) -> None:
        self.trie = trie
        self.min_weight = min_weight

    def cut_runes(
        self, runes: Sequence[RuneStr], max_word_len: int = MAX_WORD_LENGTH
    ) -> list[WordRange]:
        """Word ranges covering ``runes``, chosen by dynamic programming."""
        dags = self.trie.build_dags(runes, max_word_len)
        for dag in reversed(dags):
            dag.p_info = None
            dag.weight = MIN_DOUBLE
            for next_pos, unit in dag.nexts:
                value = 0.0
                if next_pos + 1 < len(dags):
                    value += dags[next_pos + 1].weight
                value += unit.weight if unit is not None else self.min_weight
                if value > dag.weight:
                    dag.p_info = unit
                    dag.weight = value

        ranges: list[WordRange] = []
        pos = 0
        while pos < len(dags):
            unit = dags[pos].p_info
            size = len(unit.word) if unit is not None else 1
            ranges.append(WordRange(pos, pos + size - 1))
            pos += size
        return ranges

    def cut(self, sentence: str, max_word_len: int = MAX_WORD_LENGTH) -> list[str]:
        """Split ``sentence`` into words."""
        raw = sentence.encode("utf-8")
        runes = decode_runes(raw)
        ranges = self.cut_runes(runes, max_word_len)
        return [word.word for word in words_from_ranges(raw, runes, ranges)]

    def lookup_tag(self, word: str) -> str:
        """Dictionary tag of ``word``, or a guess from its characters."""
        try:
            runes = decode_runes(word)
        except ValueError:
            return POS_X
        unit = self.trie.find(runes)
        if unit is None or not unit.tag:
            return special_rule(runes)
        return unit.tag

    def tag(self, sentence: str) -> list[tuple[str, str]]:
        """Each word of ``sentence`` paired with its tag."""
        return [(word, self.lookup_tag(word)) for word in self.cut(sentence)]