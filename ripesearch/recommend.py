"""Word suggestions and document search over Redis sorted sets."""

from __future__ import annotations

import argparse
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import redis

from ripesearch.editdistance import edit_distance
from ripesearch.index import RESULT_LIMIT, rank_by_cosine
from ripesearch.ini import INIReader

DEFAULT_CONFIG = "conf/myconf.conf"
NOT_FOUND = "没找到"


@dataclass(frozen=True)
class WordInfo:
    """A suggested word with its frequency and distance from the query."""

    word: str
    freq: float
    distance: int


def _text(member: Any) -> str:
    if isinstance(member, bytes):
        return member.decode("utf-8", errors="replace")
    return str(member)


def _fetch_ranked(client: Any, key: str) -> list[tuple[str, float]]:
    results = client.zrevrangebyscore(key, "+inf", "-inf", withscores=True)
    return [(_text(member), float(score)) for member, score in results]


def search_words(
    client: Any,
    terms: Sequence[str],
    normalized_w: Mapping[int, Mapping[str, float]],
    idf: Mapping[str, float],
) -> list[tuple[int, float]]:
    """Documents present in every term's sorted set, ranked by cosine similarity."""
    terms = list(terms)
    dest_key = "temp:search"
    temp_keys = [f"temp:{term}" for term in terms]
    print("客户端搜索：" + "".join(f"{term} " for term in terms))
    for term, temp_key in zip(terms, temp_keys):
        client.zunionstore(temp_key, [term])

    results: list[tuple[str, float]] = []
    if temp_keys:
        client.zinterstore(dest_key, temp_keys)
        results = _fetch_ranked(client, dest_key)
    for key in temp_keys:
        client.delete(key)
    client.delete(dest_key)

    if not results:
        print(NOT_FOUND)
        return []

    def weight_of(term: str, doc_id: int) -> float:
        return normalized_w.get(doc_id, {}).get(term, 0.0)

    candidates = [int(member) for member, _ in results]
    return rank_by_cosine(terms, candidates, weight_of, idf, RESULT_LIMIT)


def recommend_words(client: Any, word: str, limit: int = 10) -> list[str]:
    """Words sharing a character with ``word``, closest and most frequent first."""
    dest_key = f"temp:result:{word}"
    temp_keys: list[str] = []
    for char in word:
        temp_key = f"temp:{char}"
        temp_keys.append(temp_key)
        client.zunionstore(temp_key, [char])

    results: list[tuple[str, float]] = []
    if temp_keys:
        client.zunionstore(dest_key, temp_keys)
        results = _fetch_ranked(client, dest_key)
    for key in temp_keys:
        client.delete(key)
    client.delete(dest_key)

    if not results:
        print(NOT_FOUND)
        return []

    candidates = [
        WordInfo(member, freq, edit_distance(word, member)) for member, freq in results
    ]
    candidates.sort(key=lambda info: (info.distance, -info.freq))

    chosen = candidates[:limit]
    for info in chosen:
        print(f"单词：{info.word} ，词频：{info.freq:g} ，编辑距离：{info.distance}")
    return [info.word for info in chosen]


def main(argv: Sequence[str] | None = None) -> int:
    """Ask for a word and print suggestions for it."""
    parser = argparse.ArgumentParser(description="Suggest words for a query word.")
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="INI configuration")
    parser.add_argument("word", nargs="?", help="word to complete")
    args = parser.parse_args(argv)

    reader = INIReader.from_file(args.config)
    if reader.parse_error < 0:
        print(f"Can't load '{args.config}'")
        return 1

    word = args.word
    if word is None:
        try:
            tokens = input("输入：").split()
        except EOFError:
            tokens = []
        if not tokens:
            return 0
        word = tokens[0]

    client = redis.Redis.from_url(reader.get("user", "redisServer", "UNKNOWN"))
    recommend_words(client, word)
    return 0