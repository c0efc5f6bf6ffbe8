# ripesearch

ripesearch is a compact search engine for collections of RSS articles.
It does the following:

- turns RSS feeds into a page library with an offset index;
- builds a normalised TF-IDF inverted index;
- ranks query results by cosine similarity;
- suggests words from Redis sorted sets, ordered by edit distance and then by frequency.

## Installation

```
pip install ripesearch
```

To run the test suite, install the `test` extra:

```
pip install "ripesearch[test]"
pytest
```

## Configuration

`ripesearch.ini.INIReader` reads settings from an INI file:

```python
from ripesearch.ini import INIReader

reader = INIReader.from_file("conf/myconf.conf")
if reader.parse_error < 0:
    raise SystemExit("cannot read configuration")

redis_url = reader.get("user", "redisServer", "UNKNOWN")
port = reader.get_integer("user", "port", 8899)
```

- `parse_error` is `-1` if the file could not be opened. It is otherwise the number of the first malformed line, or `0` if there was none.
- Section and key lookups ignore case.
- An indented line that follows a key continues that key's value. The parts are joined with newlines.
- A `;` that follows whitespace starts an inline comment.
- `get_integer` and `get_unsigned` accept decimal, octal (`0...`) and hex (`0x...`).
- `get_boolean` accepts `true/yes/on/1` and `false/no/off/0`.
- `INIReader.from_string` parses text that is already in memory.

## Word suggestions from the command line

The `ripesearch-recommend` command reads an INI file, `conf/myconf.conf` by default. It connects to the Redis URL given as `redisServer` in the file's `[user]` section. It then prints up to ten suggestions, and each one shows its frequency and its edit distance to the query.

```
ripesearch-recommend
ripesearch-recommend --config other.conf 搜索
```

If you give no word on the command line, the command prompts for one.

Suggestions come from Redis sorted sets:

- There is one sorted set for each character.
- Its members are the words that contain that character.
- Each member's score is the frequency of that word.

For every character of the query, the command takes the union of these sets. The result is sorted by edit distance first and then by frequency, highest first.

You can call the same lookup as a function:

```python
import redis
from ripesearch.recommend import recommend_words

client = redis.Redis.from_url("redis://localhost:6379/0")
for word in recommend_words(client, "搜索", 10):
    print(word)
```

`ripesearch.editdistance.edit_distance` counts in UTF-8 characters, not in bytes.

## Building a corpus

`ripesearch.rss.read_rss` reads the `<item>`s of an RSS 2.0 file and strips markup tags from the description. If there is no description it uses `<content>`, and if that is missing too it uses the title.

`ripesearch.rss.CorpusBuilder` uses two helpers:

- a tokenizer, which is any callable that turns a string into words;
- an `ripesearch.dedup.ArticleManager`.

The manager takes a fingerprint callable, which maps text to an integer. It rejects an article whose fingerprint is within `threshold` bits of one it already stores (see `hamming_within`).

For each article that is kept, the builder appends to three files:

- the page library, as `<doc>` records;
- the offset library, as `id start length` lines;
- the contents file.

It also collects term and document frequencies.

`process_directory` feeds every `.xml` file in a directory through the builder. It then computes IDF (`log2(N / (DF + 1))`) and unit-length TF-IDF weights, and writes the inverted index.

```python
from ripesearch.dedup import ArticleManager
from ripesearch.rss import CorpusBuilder, process_directory

manager = ArticleManager(fingerprint, threshold=3)
builder = CorpusBuilder(tokenizer, manager)
process_directory(
    "data/xmls",
    builder,
    "data/ripepage.dat",
    "data/offsetLib.dat",
    "data/web_page_contents.dat",
    "data/invertIndex.dat",
)
builder.store_idf("data/IDF.txt")
```

### Segmentation

`ripesearch.mpsegment.MPSegment` is a maximum-probability segmenter built on `ripesearch.trie.Trie`, and it can serve as the tokenizer. You fill the trie yourself with `DictUnit`s, each of which holds:

- a tuple of code points;
- a weight, usually a log probability;
- a tag.

`min_weight` is the score given to a single character that is not in the dictionary.

```python
from ripesearch.mpsegment import MPSegment
from ripesearch.trie import DictUnit, Trie
from ripesearch.unicode import decode_unicode

units = [DictUnit(tuple(decode_unicode(w)), weight, tag) for w, weight, tag in entries]
segmenter = MPSegment(Trie([u.word for u in units], units), min_weight=-20.0)
words = segmenter.cut("搜索引擎")
tagged = segmenter.tag("搜索引擎")
```

## Querying

```python
from ripesearch.index import InvertedIndex, load_idf, process_query

index = InvertedIndex()
postings = index.load("data/invertIndex.dat")
idf = load_idf("data/IDF.txt")

results = process_query(["搜索", "引擎"], postings, index.hash_index, idf, 10)
for doc_id, similarity in results:
    print(doc_id, similarity)
```

`process_query` works in three steps:

1. Only documents that appear in the postings of every query term found in the index are candidates.
2. It keeps the `top_k` candidates with the smallest summed posting weights.
3. It ranks those by cosine similarity against the query's TF-IDF vector and returns at most ten.

`ripesearch.recommend.search_words` does the same ranking, but takes its candidates from a Redis intersection of per-term sorted sets.

To turn document ids into titles and bodies, use `ripesearch.pages.load_offsets` and `get_title_content`.

`ripesearch.lru.LRUCache` keeps recently fetched articles in memory and mirrors every stored entry to Redis. On a local miss, `get` falls back to Redis. `clear` flushes the whole Redis database the cache's client points at.

## HTTP service

`ripesearch.server.SearchService` brings together suggestions, search and the article cache. `serve(service, port)` publishes it over HTTP on `/s` and answers two requests:

- `GET /s?wd=...` returns the suggested words, each followed by a space.
- `POST /s?wd=...` returns the matching articles as a JSON list of `{"title": ..., "content": ...}` objects.

The `wd` value is percent-decoded with `decode_uri_component`. Every response carries permissive CORS headers. When the server stops, the cache's Redis database is flushed.

```python
import redis
from ripesearch.index import InvertedIndex, load_idf
from ripesearch.lru import LRUCache
from ripesearch.server import SearchService, serve

index = InvertedIndex()
index.load("data/invertIndex.dat")
service = SearchService(
    redis.Redis.from_url("redis://localhost:6379/0"),
    LRUCache(20, redis.Redis.from_url("redis://localhost:6379/5")),
    tokenizer,
    index,
    load_idf("data/IDF.txt"),
)
serve(service, 8899)
```

## What the package does not do

- It ships no dictionaries and no text fingerprinting. You must supply the tokenizer, the trie contents and the fingerprint function for `ArticleManager`.
- It has no command that starts the HTTP server or builds a corpus from configuration. Both are library calls, as shown above.
- It does not fill the Redis sorted sets that word suggestions and `search_words` read from.