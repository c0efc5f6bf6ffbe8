from ripesearch.pages import OffsetInfo, get_title_content, load_offsets


def _doc(doc_id, url, title, content):
    return (
        f"<doc>\n\t<id>{doc_id}</id>\n\t<url>{url}</url>\n\t"
        f"<title>{title}</title>\n\t<content>{content}</content>\n</doc>\n"
    ).encode("utf-8")


def _write_pages(tmp_path, docs):
    path = tmp_path / "ripepage.dat"
    blobs = [_doc(*doc) for doc in docs]
    path.write_bytes(b"".join(blobs))
    offsets = []
    start = 0
    for blob in blobs:
        offsets.append(OffsetInfo(start, len(blob)))
        start += len(blob)
    return path, offsets


def test_load_offsets(tmp_path):
    path = tmp_path / "offsetLib.dat"
    path.write_text("1 0 120\n2 120 95\n")
    assert load_offsets(path) == {1: OffsetInfo(0, 120), 2: OffsetInfo(120, 95)}


def test_load_offsets_stops_at_bad_entry(tmp_path):
    path = tmp_path / "offsetLib.dat"
    path.write_text("1 0 10\nx 5 5\n3 1 1\n")
    assert load_offsets(path) == {1: OffsetInfo(0, 10)}


def test_load_offsets_missing_file(tmp_path):
    assert load_offsets(tmp_path / "absent.dat") == {}


def test_get_title_content_reads_each_page(tmp_path):
    docs = [
        (1, "http://a.example.com", "第一篇", "内容一"),
        (2, "http://b.example.com", "Second", "body two"),
    ]
    path, offsets = _write_pages(tmp_path, docs)
    for (_, _, title, content), offset in zip(docs, offsets):
        assert get_title_content(path, offset) == (title, content)


def test_get_title_content_without_title(tmp_path):
    path = tmp_path / "ripepage.dat"
    path.write_bytes(b"<doc><content>x</content></doc>")
    assert get_title_content(path, OffsetInfo(0, 40)) == ("no", "no")


def test_get_title_content_missing_file(tmp_path):
    assert get_title_content(tmp_path / "absent.dat", OffsetInfo(0, 10)) == ("no", "no")


def test_round_trip_with_offset_file(tmp_path):
    path, offsets = _write_pages(tmp_path, [(1, "u", "T", "C"), (2, "v", "T2", "C2")])
    offset_path = tmp_path / "offsetLib.dat"
    offset_path.write_text(
        "".join(f"{i} {o.start} {o.length}\n" for i, o in enumerate(offsets, 1))
    )
    loaded = load_offsets(offset_path)
    assert get_title_content(path, loaded[2]) == ("T2", "C2")