import pytest

from sequencer.store import KVStore, PageRequest, PageResponse, PrefixStore, paginate


@pytest.fixture
def filled():
    store = KVStore()
    for i in range(5):
        store.set(str(i).encode(), f"value-{i}".encode())
    return store


def _collect(store, request):
    seen = []
    response = paginate(store, request, lambda k, v: seen.append((k, v)))
    return seen, response


def test_set_get_delete():
    store = KVStore()
    store.set(b"a", b"1")
    assert store.get(b"a") == b"1"
    assert b"a" in store
    store.delete(b"a")
    assert store.get(b"a") is None
    assert len(store) == 0


def test_items_sorted_by_key():
    store = KVStore()
    for key in (b"b", b"c", b"a"):
        store.set(key, key)
    assert [k for k, _ in store.items()] == sorted([b"b", b"c", b"a"])


def test_empty_key_and_none_value_rejected():
    store = KVStore()
    with pytest.raises(ValueError):
        store.set(b"", b"x")
    with pytest.raises(ValueError):
        store.set(b"k", None)


def test_prefix_store_writes_through_parent():
    parent = KVStore()
    view = PrefixStore(parent, b"P/")
    view.set(b"k", b"v")
    assert parent.get(b"P/k") == b"v"
    assert view.get(b"k") == b"v"
    assert view.items() == [(b"k", b"v")]
    view.delete(b"k")
    assert parent.get(b"P/k") is None


def test_prefix_stores_are_isolated():
    parent = KVStore()
    first = PrefixStore(parent, b"A/")
    second = PrefixStore(parent, b"B/")
    first.set(b"k", b"v")
    assert second.get(b"k") is None
    assert second.items() == []


def test_nested_prefix_store():
    parent = KVStore()
    inner = PrefixStore(PrefixStore(parent, b"A/"), b"B/")
    inner.set(b"k", b"v")
    assert parent.get(b"A/B/k") == b"v"


def test_paginate_by_offset_covers_everything(filled):
    seen = []
    for offset in range(0, 5, 2):
        page, response = _collect(filled, PageRequest(offset=offset, limit=2))
        assert len(page) <= 2
        assert response.total == 0
        seen.extend(page)
    assert seen == filled.items()


def test_paginate_by_key_chains_next_keys(filled):
    seen = []
    next_key = None
    for _ in range(3):
        page, response = _collect(filled, PageRequest(key=next_key, limit=2))
        assert len(page) <= 2
        seen.extend(page)
        next_key = response.next_key
    assert seen == filled.items()
    assert next_key is None


def test_paginate_total_with_default_limit(filled):
    page, response = _collect(filled, PageRequest(count_total=True))
    assert response.total == len(filled)
    assert page == filled.items()


def test_paginate_offset_counts_total(filled):
    page, response = _collect(filled, PageRequest(offset=3, limit=1, count_total=True))
    assert page == filled.items()[3:4]
    assert response.total == len(filled)
    assert response.next_key == filled.items()[4][0]


def test_paginate_none_request(filled):
    page, response = _collect(filled, None)
    assert page == filled.items()
    assert response == PageResponse(next_key=None, total=len(filled))


def test_paginate_key_and_offset_rejected(filled):
    with pytest.raises(ValueError):
        paginate(filled, PageRequest(key=b"1", offset=1), lambda k, v: None)


def test_paginate_reverse(filled):
    page, _ = _collect(filled, PageRequest(reverse=True))
    assert page == list(reversed(filled.items()))


def test_paginate_reverse_from_key(filled):
    page, response = _collect(filled, PageRequest(key=b"2", limit=2, reverse=True))
    assert [k for k, _ in page] == [b"2", b"1"]
    assert response.next_key == b"0"


def test_paginate_propagates_callback_error(filled):
    def fail(key, value):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        paginate(filled, PageRequest(limit=2), fail)