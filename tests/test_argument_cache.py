import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from immutables import Map

from pyselectx.argument_cache import ArgumentCache, encode_arguments
from pyselectx.errors import ArgumentsEncodingError
from pyselectx.types import CacheInfo


def test_encoding_is_order_independent():
    assert encode_arguments({"a": 1, "b": "x"}) == encode_arguments({"b": "x", "a": 1})
    assert encode_arguments(Map({"a": 1})) == encode_arguments({"a": 1})


def test_encoding_of_empty_and_missing_arguments():
    assert encode_arguments(None) == encode_arguments({})


def test_encoding_distinguishes_scalar_types():
    assert encode_arguments({"a": 1}) != encode_arguments({"a": True})
    assert encode_arguments({"a": 1}) != encode_arguments({"a": "1"})
    assert encode_arguments({"a": None}) != encode_arguments({})


@pytest.mark.parametrize("args", [
    {"a": [1, 2]},
    {"a": {"b": 1}},
    {"a": lambda: 1},
    {"a": float("nan")},
    {"a": float("inf")},
    {1: "a"},
    ["a", 1],
])
def test_encoding_rejects_non_serializable_arguments(args):
    with pytest.raises(ArgumentsEncodingError):
        encode_arguments(args)


def test_get_or_create_reuses_instances():
    cache = ArgumentCache()
    first = cache.get_or_create({"id": "a"}, object)
    assert cache.get_or_create({"id": "a"}, object) is first
    assert cache.get_or_create({"id": "b"}, object) is not first
    assert cache.info() == CacheInfo(hits=1, misses=2, maxsize=None, currsize=2)
    assert {"id": "a"} in cache


def test_failed_encoding_leaves_cache_untouched():
    cache = ArgumentCache()
    cache.get_or_create({"id": "a"}, object)
    with pytest.raises(ArgumentsEncodingError):
        cache.get_or_create({"id": ["a"]}, object)
    assert len(cache) == 1


def test_unbounded_cache_never_evicts():
    cache = ArgumentCache()
    for i in range(500):
        cache.get_or_create({"i": i}, object)
    assert len(cache) == 500


def test_lru_eviction_with_maxsize():
    cache = ArgumentCache(maxsize=2)
    one = cache.get_or_create({"k": 1}, object)
    cache.get_or_create({"k": 2}, object)
    assert cache.get_or_create({"k": 1}, object) is one  # 1 成為最近使用
    cache.get_or_create({"k": 3}, object)  # 淘汰 2
    assert {"k": 2} not in cache
    assert cache.get_or_create({"k": 1}, object) is one
    assert len(cache) == 2


def test_clear_resets_entries_and_stats():
    cache = ArgumentCache()
    first = cache.get_or_create({}, object)
    cache.clear()
    assert cache.info() == CacheInfo(0, 0, None, 0)
    assert cache.get_or_create({}, object) is not first


def test_concurrent_creation_builds_one_instance():
    cache = ArgumentCache()
    created = []
    lock = threading.Lock()

    def factory():
        with lock:
            created.append(object())
            return created[-1]

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: cache.get_or_create({"id": "x"}, factory), range(64)))

    assert len(created) == 1
    assert all(r is results[0] for r in results)
