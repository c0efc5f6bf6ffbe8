"""Inverted index storage and cosine-similarity ranking of query results."""

from __future__ import annotations

import logging
import math
from collections import Counter
from collections.abc import Callable, Iterable, Mapping, Sequence
from os import PathLike

logger = logging.getLogger(__name__)

DEFAULT_IDF_PATH = "data/IDF.txt"
DEFAULT_INDEX_PATH = "data/invertIndex.dat"
RESULT_LIMIT = 10


def _divide(numerator: float, denominator: float) -> float:
    """Floating point division that yields nan or inf instead of raising."""
    if denominator == 0:
        return math.nan if numerator == 0 else math.copysign(math.inf, numerator)
    return numerator / denominator


def load_idf(path: str | PathLike[str] = DEFAULT_IDF_PATH) -> dict[str, float]:
    """Read "word idf" lines; lines that do not hold both are skipped."""
    idf: dict[str, float] = {}
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            for line in handle:
                parts = line.split()
                if len(parts) < 2:
                    continue
                try:
                    idf[parts[0]] = float(parts[1])
                except ValueError:
                    continue
    except OSError:
        return {}
    return idf


def build_base(words: Iterable[str], idf: Mapping[str, float]) -> list[float]:
    """Normalised TF-IDF vector of the distinct known words, in first-seen order."""
    weighted = [
        idf[word] * count for word, count in Counter(words).items() if word in idf
    ]
    norm = math.sqrt(sum(value * value for value in weighted))
    return [_divide(value, norm) for value in weighted]


def _score_key(item: tuple[int, float]) -> tuple[bool, float]:
    score = item[1]
    return (math.isnan(score), 0.0 if math.isnan(score) else -score)


def rank_by_cosine(
    terms: Sequence[str],
    candidates: Iterable[int],
    weight_of: Callable[[str, int], float],
    idf: Mapping[str, float],
    limit: int = RESULT_LIMIT,
) -> list[tuple[int, float]]:
    """Candidates ordered by cosine similarity to the query, best first."""
    terms = list(terms)
    query = build_base(terms, idf)
    query += [0.0] * (len(terms) - len(query))
    query_norm = math.sqrt(sum(value * value for value in query))

    scores: list[tuple[int, float]] = []
    for doc_id in candidates:
        document = [weight_of(term, doc_id) for term in terms]
        numerator = sum(q * d for q, d in zip(query, document))
        doc_norm = math.sqrt(sum(value * value for value in document))
        scores.append((doc_id, _divide(numerator, query_norm * doc_norm)))

    logger.debug("scored %d documents", len(scores))
    scores.sort(key=_score_key)
    return scores[:limit]


class InvertedIndex:
    """Word to document weights, kept both as sorted lists and as lookups."""

    def __init__(self) -> None:
        self.hash_index: dict[str, dict[int, float]] = {}

    def load(
        self, path: str | PathLike[str] = DEFAULT_INDEX_PATH
    ) -> dict[str, list[tuple[int, float]]]:
        """Read "word doc weight" triples; reading stops at the first bad one."""
        try:
            with open(path, encoding="utf-8", errors="replace") as handle:
                tokens = handle.read().split()
        except OSError:
            return {}

        index: dict[str, list[tuple[int, float]]] = {}
        for pos in range(0, len(tokens) - 2, 3):
            word, doc_token, weight_token = tokens[pos : pos + 3]
            try:
                doc_id = int(doc_token)
                weight = float(weight_token)
            except ValueError:
                break
            if doc_id < 0:
                break
            self.hash_index.setdefault(word, {})[doc_id] = weight
            index.setdefault(word, []).append((doc_id, weight))

        for postings in index.values():
            postings.sort()
        return index

    def store(
        self,
        weights: Mapping[int, Mapping[str, float]],
        path: str | PathLike[str] = DEFAULT_INDEX_PATH,
    ) -> None:
        """Write document weights as "word doc weight" lines."""
        with open(path, "w", encoding="utf-8") as handle:
            for doc_id, terms in weights.items():
                for word, weight in terms.items():
                    handle.write(f"{word} {doc_id} {weight:g}\n")


def _intersect(
    lists: Sequence[Sequence[tuple[int, float]]],
) -> list[tuple[float, int]]:
    """(total weight, doc id) for each document found in every list."""
    positions = [0] * len(lists)
    matches: list[tuple[float, int]] = []
    while True:
        heads = [
            postings[pos][0]
            for postings, pos in zip(lists, positions)
            if pos < len(postings)
        ]
        if not heads:
            break
        current = min(heads)
        if all(
            pos < len(postings) and postings[pos][0] == current
            for postings, pos in zip(lists, positions)
        ):
            total = sum(postings[pos][1] for postings, pos in zip(lists, positions))
            matches.append((total, current))
        positions = [
            pos + 1 if pos < len(postings) and postings[pos][0] == current else pos
            for postings, pos in zip(lists, positions)
        ]
    return matches


def process_query(
    terms: Sequence[str],
    index: Mapping[str, Sequence[tuple[int, float]]],
    normalized_w: Mapping[str, Mapping[int, float]],
    idf: Mapping[str, float],
    top_k: int = RESULT_LIMIT,
) -> list[tuple[int, float]]:
    """Documents holding every known query term, ranked by cosine similarity.

    Of the matching documents, the ``top_k`` with the smallest summed
    weights are kept before ranking.
    """
    terms = list(terms)
    if not terms:
        return []
    lists = [index[term] for term in terms if term in index]
    if not lists:
        return []

    kept = sorted(_intersect(lists))[:top_k]

    def weight_of(term: str, doc_id: int) -> float:
        return normalized_w.get(term, {}).get(doc_id, 0.0)

    return rank_by_cosine(
        terms, [doc_id for _, doc_id in kept], weight_of, idf, RESULT_LIMIT
    )