import hashlib
import math

import pytest

from ripesearch.dedup import ArticleManager
from ripesearch.index import InvertedIndex, load_idf
from ripesearch.pages import get_title_content, load_offsets
from ripesearch.rss import (
    CorpusBuilder,
    RSSItem,
    process_directory,
    read_rss,
    strip_tags,
)

FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"><channel><title>Feed</title>
<item><title>First</title><link>http://example.com/1</link>
<description>&lt;p&gt;hello &lt;b&gt;world&lt;/b&gt;&lt;/p&gt;</description></item>
<item><title>Second</title><link>http://example.com/2</link><content>plain body</content></item>
<item><title>Third</title><link>http://example.com/3</link></item>
</channel></rss>
"""


def _fingerprint(text):
    return int.from_bytes(hashlib.sha256(text.encode("utf-8")).digest()[:8], "big")


def _builder():
    return CorpusBuilder(str.split, ArticleManager(_fingerprint, 3))


def _paths(tmp_path):
    return (
        tmp_path / "ripepage.dat",
        tmp_path / "offsetLib.dat",
        tmp_path / "contents.dat",
    )


def test_strip_tags():
    assert strip_tags("<p>hi <b>there</b></p>") == "hi there"
    assert strip_tags("no tags") == "no tags"


def test_read_rss_fallbacks(tmp_path):
    path = tmp_path / "feed.xml"
    path.write_text(FEED, encoding="utf-8")
    items = read_rss(path)
    assert items == [
        RSSItem("First", "http://example.com/1", "hello world"),
        RSSItem("Second", "http://example.com/2", "plain body"),
        RSSItem("Third", "http://example.com/3", "Third"),
    ]


def test_read_rss_rejects_bad_documents(tmp_path):
    broken = tmp_path / "broken.xml"
    broken.write_text("<rss><channel>", encoding="utf-8")
    with pytest.raises(ValueError):
        read_rss(broken)
    other = tmp_path / "other.xml"
    other.write_text("<feed><channel/></feed>", encoding="utf-8")
    with pytest.raises(ValueError):
        read_rss(other)


def test_store_round_trips_through_offsets(tmp_path):
    feed = tmp_path / "feed.xml"
    feed.write_text(FEED, encoding="utf-8")
    pages, offsets, contents = _paths(tmp_path)
    builder = _builder()
    assert builder.read(feed) == 3
    assert builder.store(pages, offsets, contents) == 3
    assert builder.items == []

    table = load_offsets(offsets)
    assert sorted(table) == [1, 2, 3]
    assert get_title_content(pages, table[1]) == ("First", "hello world")
    assert get_title_content(pages, table[2]) == ("Second", "plain body")
    assert get_title_content(pages, table[3]) == ("Third", "Third")
    assert contents.read_text(encoding="utf-8") == "hello world plain body Third "


def test_store_skips_duplicates(tmp_path):
    pages, offsets, contents = _paths(tmp_path)
    builder = _builder()
    builder.items.extend(
        [
            RSSItem("A", "http://example.com/a", "same text"),
            RSSItem("B", "http://example.com/b", "same text"),
        ]
    )
    assert builder.store(pages, offsets, contents) == 1
    assert len(builder.manager) == 1
    assert builder.next_id == 2


def test_build_index_weights(tmp_path):
    pages, offsets, contents = _paths(tmp_path)
    builder = _builder()
    builder.items.extend(
        [
            RSSItem("A", "http://example.com/a", "apple banana"),
            RSSItem("B", "http://example.com/b", "apple cherry"),
        ]
    )
    builder.store(pages, offsets, contents)
    index_path = tmp_path / "invertIndex.dat"
    normalized = builder.build_index(index_path)

    assert builder.idf["apple"] == 0.0
    assert builder.idf["banana"] > 0
    assert builder.idf["banana"] == builder.idf["cherry"]
    for row in normalized.values():
        assert sum(value * value for value in row.values()) == pytest.approx(1.0)

    index = InvertedIndex()
    loaded = index.load(index_path)
    assert set(loaded) == {"apple", "banana", "cherry"}
    assert index.hash_index["banana"][1] == pytest.approx(1.0)
    assert index.hash_index["cherry"][2] == pytest.approx(1.0)


def test_store_idf_round_trip(tmp_path):
    pages, offsets, contents = _paths(tmp_path)
    builder = _builder()
    builder.items.extend(
        [
            RSSItem("A", "http://example.com/a", "apple banana"),
            RSSItem("B", "http://example.com/b", "apple cherry"),
        ]
    )
    builder.store(pages, offsets, contents)
    builder.compute_idf()
    idf_path = tmp_path / "IDF.txt"
    builder.store_idf(idf_path)
    loaded = load_idf(idf_path)
    assert set(loaded) == set(builder.idf)
    for word, value in builder.idf.items():
        assert math.isclose(loaded[word], value, rel_tol=1e-5)


def test_process_directory(tmp_path, capsys):
    feeds = tmp_path / "feeds"
    feeds.mkdir()
    (feeds / "a.xml").write_text(FEED, encoding="utf-8")
    (feeds / "b.xml").write_text("<rss><channel>", encoding="utf-8")
    (feeds / "notes.txt").write_text("ignored", encoding="utf-8")
    pages, offsets, contents = _paths(tmp_path)
    index_path = tmp_path / "invertIndex.dat"

    normalized = process_directory(
        feeds, _builder(), pages, offsets, contents, index_path
    )
    assert set(normalized) == {1, 2, 3}
    assert "<title>First</title>" in pages.read_text(encoding="utf-8")
    assert index_path.exists()
    assert "loadFile fail" in capsys.readouterr().err