"""Near-duplicate detection of articles through fingerprint distance."""

from __future__ import annotations

from collections.abc import Callable


def hamming_within(first: int, second: int, threshold: int = 3) -> bool:
    """True if the fingerprints differ in at most ``threshold`` bits."""
    return bin(first ^ second).count("1") <= threshold


class ArticleManager:
    """Remembers fingerprints of accepted articles and rejects near copies."""

    def __init__(self, fingerprint: Callable[[str], int], threshold: int = 3) -> None:
        self.fingerprint = fingerprint
        self.threshold = threshold
        self._hashes: dict[int, int] = {}

    def _find_match(self, value: int) -> int | None:
        for article_id, known in self._hashes.items():
            if hamming_within(value, known, self.threshold):
                return article_id
        return None

    def check_duplicate(self, content: str) -> int | None:
        """Id of a stored article close to ``content``, or None."""
        return self._find_match(self.fingerprint(content))

    def add_article(self, article_id: int, content: str) -> bool:
        """Store the article unless it duplicates one already stored."""
        value = self.fingerprint(content)
        if self._find_match(value) is not None:
            return False
        self._hashes[article_id] = value
        return True

    def remove_article(self, article_id: int) -> None:
        self._hashes.pop(article_id, None)

    def __len__(self) -> int:
        return len(self._hashes)