"""Search over RSS corpora: TF-IDF indexing and cosine ranking, near-duplicate filtering, word suggestions, an LRU article cache and an HTTP front end."""

__version__ = "0.1.0"