from unittest import mock

import pytest
import redis

from ripesearch.recommend import main, recommend_words, search_words


class FakeRedis:
    def __init__(self, sets):
        self.sets = {name: dict(members) for name, members in sets.items()}

    def zunionstore(self, dest, keys):
        merged = {}
        for key in keys:
            for member, score in self.sets.get(key, {}).items():
                merged[member] = merged.get(member, 0.0) + score
        self._save(dest, merged)
        return len(merged)

    def zinterstore(self, dest, keys):
        sets = [self.sets.get(key, {}) for key in keys]
        common = set(sets[0]).intersection(*sets[1:]) if sets else set()
        merged = {member: sum(s[member] for s in sets) for member in common}
        self._save(dest, merged)
        return len(merged)

    def zrevrangebyscore(self, name, max, min, withscores=False):
        items = sorted(
            self.sets.get(name, {}).items(),
            key=lambda item: (item[1], item[0]),
            reverse=True,
        )
        return [(member.encode("utf-8"), score) for member, score in items]

    def delete(self, *names):
        for name in names:
            self.sets.pop(name, None)

    def _save(self, dest, merged):
        if merged:
            self.sets[dest] = merged
        else:
            self.sets.pop(dest, None)


@pytest.fixture
def word_sets():
    return {
        "你": {"你好": 5.0, "你们": 3.0},
        "好": {"你好": 5.0, "好人": 2.0},
    }


def test_recommend_words_orders_by_distance_then_frequency(word_sets):
    client = FakeRedis(word_sets)
    assert recommend_words(client, "你好") == ["你好", "你们", "好人"]


def test_recommend_words_removes_temporary_keys(word_sets):
    client = FakeRedis(word_sets)
    recommend_words(client, "你好")
    assert set(client.sets) == {"你", "好"}


def test_recommend_words_respects_limit(word_sets):
    client = FakeRedis(word_sets)
    assert recommend_words(client, "你好", limit=1) == ["你好"]


def test_recommend_words_prints_details(word_sets, capsys):
    recommend_words(FakeRedis(word_sets), "你")
    out = capsys.readouterr().out
    assert "单词：你好" in out
    assert "单词：你们" in out


def test_recommend_words_not_found(capsys):
    assert recommend_words(FakeRedis({}), "猫") == []
    assert "没找到" in capsys.readouterr().out


def test_search_words_ranks_intersection():
    client = FakeRedis({"a": {"1": 0.5, "2": 0.3}, "b": {"1": 0.2, "3": 0.9}})
    normalized = {1: {"a": 0.5, "b": 0.5}}
    result = search_words(client, ["a", "b"], normalized, {"a": 1.0, "b": 1.0})
    assert [doc for doc, _ in result] == [1]
    assert result[0][1] == pytest.approx(1.0)
    assert set(client.sets) == {"a", "b"}


def test_search_words_without_common_document(capsys):
    client = FakeRedis({"a": {"1": 0.5}, "b": {"2": 0.2}})
    assert search_words(client, ["a", "b"], {}, {}) == []
    assert "没找到" in capsys.readouterr().out


def test_main_without_config_fails(tmp_path):
    assert main(["--config", str(tmp_path / "none.conf"), "你"]) == 1


def test_main_prints_suggestions(tmp_path, word_sets, capsys):
    config = tmp_path / "myconf.conf"
    config.write_text("[user]\nredisServer = redis://localhost:6379/0\n", encoding="utf-8")
    fake = FakeRedis(word_sets)
    with mock.patch.object(redis.Redis, "from_url", return_value=fake) as from_url:
        assert main(["--config", str(config), "你好"]) == 0
    from_url.assert_called_once_with("redis://localhost:6379/0")
    assert "单词：好人" in capsys.readouterr().out