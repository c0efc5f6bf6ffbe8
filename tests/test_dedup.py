from ripesearch.dedup import ArticleManager, hamming_within

BIN1 = int("100010110110", 2)
BIN2 = int("110001110011", 2)


def _manager():
    table = {"a": 0b0000, "a-copy": 0b0001, "b": 0b1111_0000, "c": 0b1111_1111_0000_0000}
    return ArticleManager(table.__getitem__, 3)


def test_hamming_default_threshold():
    assert hamming_within(BIN1, BIN2) is False


def test_hamming_wider_threshold():
    assert hamming_within(BIN1, BIN2, 5) is True


def test_hamming_identical_and_symmetric():
    assert hamming_within(BIN1, BIN1, 0) is True
    assert hamming_within(BIN1, BIN2, 4) == hamming_within(BIN2, BIN1, 4)


def test_add_unique_articles():
    manager = _manager()
    assert manager.add_article(1, "a") is True
    assert manager.add_article(2, "b") is True
    assert len(manager) == 2


def test_duplicate_is_rejected():
    manager = _manager()
    manager.add_article(1, "a")
    assert manager.check_duplicate("a-copy") == 1
    assert manager.add_article(2, "a-copy") is False
    assert len(manager) == 1


def test_no_duplicate_gives_none():
    manager = _manager()
    manager.add_article(1, "a")
    assert manager.check_duplicate("c") is None


def test_remove_allows_readding():
    manager = _manager()
    manager.add_article(1, "a")
    manager.remove_article(1)
    manager.remove_article(99)
    assert len(manager) == 0
    assert manager.add_article(2, "a-copy") is True