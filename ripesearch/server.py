"""HTTP front end answering word suggestions and document searches."""

from __future__ import annotations

import json
import logging
import re
import sys
from collections.abc import Callable, Iterable, Mapping
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from os import PathLike
from typing import Any
from urllib.parse import urlsplit

from ripesearch.index import InvertedIndex, process_query
from ripesearch.lru import LRUCache
from ripesearch.pages import (
    DEFAULT_OFFSETS_PATH,
    DEFAULT_PAGES_PATH,
    get_title_content,
    load_offsets,
)
from ripesearch.recommend import recommend_words

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8899
CORS_HEADERS = (
    ("Access-Control-Allow-Origin", "*"),
    ("Access-Control-Allow-Methods", "GET, POST, OPTIONS"),
    ("Access-Control-Allow-Headers", "Content-Type"),
)
_HEX_RE = re.compile(rb"[ \t\n\v\f\r]*([+-]?)([0-9a-fA-F]+)")


def _hex_value(chunk: bytes) -> int:
    match = _HEX_RE.match(chunk)
    if not match:
        return 0
    value = int(match.group(2), 16)
    if match.group(1) == b"-":
        value = -value
    return value & 0xFF


def decode_uri_component(encoded: str) -> str:
    """Replace %XX escapes by their bytes; a '%' too close to the end is dropped."""
    raw = encoded.encode("utf-8")
    decoded = bytearray()
    pos = 0
    while pos < len(raw):
        byte = raw[pos]
        if byte == 0x25:
            if pos + 2 < len(raw):
                decoded.append(_hex_value(raw[pos + 1 : pos + 3]))
                pos += 2
        else:
            decoded.append(byte)
        pos += 1
    return decoded.decode("utf-8", errors="replace")


class SearchService:
    """Answers suggestion and search queries from the index and page library."""

    def __init__(
        self,
        redis_client: Any,
        cache: LRUCache,
        tokenizer: Callable[[str], Iterable[str]],
        index: InvertedIndex,
        idf: Mapping[str, float],
        offsets_path: str | PathLike[str] = DEFAULT_OFFSETS_PATH,
        pages_path: str | PathLike[str] = DEFAULT_PAGES_PATH,
    ) -> None:
        self.redis_client = redis_client
        self.cache = cache
        self.tokenizer = tokenizer
        self.index = index
        self.idf = idf
        self.offsets_path = offsets_path
        self.pages_path = pages_path
        self._postings = {
            word: sorted(docs.items()) for word, docs in index.hash_index.items()
        }

    def recommend(self, query: str) -> str:
        """Suggested words, each followed by a space."""
        word = decode_uri_component(query)
        return "".join(f"{item} " for item in recommend_words(self.redis_client, word))

    def search(self, query: str) -> str:
        """JSON list of the best matching articles' titles and contents."""
        text = decode_uri_component(query)
        terms = list(self.tokenizer(text))
        doc_ids = process_query(terms, self._postings, self.index.hash_index, self.idf)
        print(f"获取到的文章数量：{len(doc_ids)}")

        articles = []
        for doc_id, _ in doc_ids:
            cached = self.cache.get(doc_id)
            if cached is not None:
                print("缓存命中")
                articles.append(cached)
                continue
            offsets = load_offsets(self.offsets_path)
            if doc_id in offsets:
                title, content = get_title_content(self.pages_path, offsets[doc_id])
                article = {"title": title, "content": content}
                self.cache.put(doc_id, article)
                articles.append(article)
        return json.dumps(articles, ensure_ascii=False)


def _query_param(target: str, name: str) -> str:
    for part in urlsplit(target).query.split("&"):
        key, _, value = part.partition("=")
        if key == name:
            return value
    return ""


def make_handler(service: SearchService) -> type[BaseHTTPRequestHandler]:
    """Request handler class: GET /s suggests words, POST /s searches."""

    class Handler(BaseHTTPRequestHandler):
        def _respond(self, body: str) -> None:
            data = body.encode("utf-8")
            self.send_response(200)
            for header, value in CORS_HEADERS:
                self.send_header(header, value)
            self.send_header("Content-Type", "text/plain; charset=utf-8")
            self.send_header("Content-Length", str(len(data)))
            self.end_headers()
            self.wfile.write(data)

        def _dispatch(self, action: Callable[[str], str]) -> None:
            if urlsplit(self.path).path != "/s":
                self.send_error(404)
                return
            self._respond(action(_query_param(self.path, "wd")))

        def do_GET(self) -> None:
            self._dispatch(service.recommend)

        def do_POST(self) -> None:
            length = int(self.headers.get("Content-Length") or 0)
            if length:
                self.rfile.read(length)
            self._dispatch(service.search)

        def log_message(self, format: str, *args: Any) -> None:
            logger.info("%s - %s", self.address_string(), format % args)

    return Handler


def serve(service: SearchService, port: int = DEFAULT_PORT) -> None:
    """Run the HTTP server until interrupted, then flush the cache."""
    print("服务器开启中。。。")
    try:
        server = ThreadingHTTPServer(("", port), make_handler(service))
    except OSError:
        print("Cloudisk Server Start Failed!", file=sys.stderr)
        raise
    try:
        with server:
            server.serve_forever()
    finally:
        service.cache.clear()