import copy
import threading

import pytest

from pagetrail.domain.history import History
from pagetrail.domain.link import Link
from pagetrail.domain.page import Page
from pagetrail.exceptions import InvalidCapacityError


def _page(n, body=None):
    return Page(f"http://x/{n}", body=body or f"body {n}", status_code=200)


def test_empty_history_returns_none():
    history = History()
    assert history.shift() is None
    assert history.pop() is None
    assert not history.is_visited("http://anything")
    assert history.visited_page("http://anything") is None
    assert history.first is None
    assert history.last is None
    assert len(history) == 0
    assert not history


def test_push_keeps_insertion_order():
    history = History()
    pages = [_page(i) for i in range(5)]
    for p in pages:
        history.push(p)
    assert list(history) == pages
    assert history.first is pages[0]
    assert history.last is pages[-1]
    assert history[1] is pages[1]
    assert history[-1] is pages[-1]
    assert history[1:3] == pages[1:3]
    assert list(reversed(history)) == pages[::-1]


def test_push_returns_self_for_chaining():
    history = History()
    a, b = _page(1), _page(2)
    assert history.push(a).push(b) is history
    assert history << _page(3) is history
    assert len(history) == 3


def test_push_indexes_by_page_uri():
    history = History()
    a = _page(1)
    history.push(a)
    assert history.visited_page("http://x/1") is a
    assert history.is_visited("http://x/1")


def test_push_with_explicit_uri_uses_that_key():
    history = History()
    a = _page(1)
    history.push(a, "http://alias/1")
    assert history.visited_page("http://alias/1") is a
    assert history.visited_page("http://x/1") is None


def test_explicit_uri_is_converted_to_string():
    class Uri:
        def __str__(self):
            return "http://obj/1"

    history = History()
    a = _page(1)
    history.push(a, Uri())
    assert history.visited_page("http://obj/1") is a


def test_visited_page_accepts_objects_with_uri():
    history = History()
    a = _page(1)
    history.push(a)
    assert history.visited_page(Link("http://x/1", "one")) is a
    assert history.visited_page(a) is a
    assert history.is_visited(Link("http://x/1"))


def test_last_push_wins_for_same_key():
    history = History()
    old = _page(1, body="old")
    new = _page(1, body="new")
    history.push(old)
    history.push(new)
    assert history.visited_page("http://x/1") is new
    assert len(history) == 2


def test_duplicates_by_value_are_appended():
    history = History()
    history.push(_page(1))
    history.push(_page(1))
    assert len(history) == 2


def test_max_size_evicts_oldest():
    history = History(max_size=2)
    a, b, c = _page(1), _page(2), _page(3)
    history.push(a).push(b).push(c)
    assert list(history) == [b, c]
    assert history.visited_page("http://x/1") is None
    assert history.visited_page("http://x/3") is c


def test_length_never_exceeds_max_size():
    history = History(max_size=3)
    pages = [_page(i) for i in range(10)]
    for p in pages:
        history.push(p)
        assert len(history) <= 3
    assert list(history) == pages[-3:]
    for p in pages[:-3]:
        assert not history.is_visited(p.uri)


def test_max_size_one_keeps_only_latest():
    history = History(max_size=1)
    a, b = _page(1), _page(2)
    history.push(a).push(b)
    assert list(history) == [b]
    assert history.visited_page("http://x/2") is b


def test_shift_purges_every_key_for_page():
    history = History()
    p = _page(1)
    history.push(p, "http://a")
    history.push(p, "http://b")
    assert history.visited_page("http://a") is p
    assert history.visited_page("http://b") is p

    assert history.shift() is p
    assert history.visited_page("http://a") is None
    assert history.visited_page("http://b") is None


def test_pop_purges_every_key_for_page():
    history = History()
    first = _page(0)
    p = _page(1)
    history.push(first)
    history.push(p, "http://a")
    history.push(p, "http://b")

    assert history.pop() is p
    assert not history.is_visited("http://a")
    assert not history.is_visited("http://b")
    assert history.is_visited("http://x/0")
    assert history.last is p


def test_purge_matches_by_value_not_identity():
    history = History()
    p = _page(1)
    twin = _page(1)
    history.push(p)
    history.push(twin, "http://twin")
    history.shift()
    # twin compares equal to the evicted page, so its key goes too
    assert history.visited_page("http://twin") is None
    assert list(history) == [twin]


def test_eviction_can_drop_keys_of_equal_newer_pages():
    history = History(max_size=2)
    p = _page(1)
    history.push(p).push(_page(2)).push(_page(1))
    assert len(history) == 2
    assert history.visited_page("http://x/1") is None


def test_shift_leaves_unrelated_keys():
    history = History()
    a, b = _page(1), _page(2)
    history.push(a).push(b)
    assert history.shift() is a
    assert history.visited_page("http://x/2") is b


def test_clear_empties_sequence_and_index():
    history = History()
    for i in range(3):
        history.push(_page(i), f"http://alias/{i}")
    assert history.clear() is history
    assert len(history) == 0
    for i in range(3):
        assert not history.is_visited(f"http://alias/{i}")
        assert not history.is_visited(f"http://x/{i}")


def test_copy_is_independent():
    original = History(max_size=5)
    a, b = _page(1), _page(2)
    original.push(a).push(b)

    clone = copy.copy(original)
    clone.push(_page(3))
    clone.shift()

    assert list(original) == [a, b]
    assert original.visited_page("http://x/1") is a
    assert not original.is_visited("http://x/3")
    assert clone.is_visited("http://x/3")
    assert clone.max_size == 5
    # pages themselves are shared
    assert clone[0] is b


def test_copy_method_matches_copy_module():
    original = History()
    original.push(_page(1))
    clone = original.copy()
    original.clear()
    assert len(clone) == 1
    assert clone.is_visited("http://x/1")


@pytest.mark.parametrize("bad", [0, -1, 1.5, "3", True])
def test_invalid_max_size_rejected(bad):
    with pytest.raises(InvalidCapacityError) as exc:
        History(max_size=bad)
    assert exc.value.max_size == bad


def test_invalid_capacity_is_value_error():
    with pytest.raises(ValueError):
        History(max_size=0)


def test_setting_max_size_trims_immediately():
    history = History()
    pages = [_page(i) for i in range(5)]
    for p in pages:
        history.push(p)
    history.max_size = 2
    assert list(history) == pages[-2:]
    assert not history.is_visited("http://x/0")
    assert history.is_visited("http://x/4")


def test_setting_invalid_max_size_keeps_previous():
    history = History(max_size=3)
    with pytest.raises(InvalidCapacityError):
        history.max_size = 0
    assert history.max_size == 3


def test_unbounding_max_size():
    history = History(max_size=1)
    history.max_size = None
    for i in range(4):
        history.push(_page(i))
    assert len(history) == 4


def test_membership_and_to_list():
    history = History()
    a = _page(1)
    history.push(a)
    assert _page(1) in history
    assert _page(2) not in history
    snapshot = history.to_list()
    snapshot.append(_page(9))
    assert len(history) == 1


def test_no_item_assignment():
    history = History()
    history.push(_page(1))
    with pytest.raises(TypeError):
        history[0] = _page(2)


def test_concurrent_pushes_respect_bound():
    history = History(max_size=50)

    def worker(offset):
        for i in range(200):
            history.push(_page(offset * 1000 + i))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(history) == 50
    for p in history:
        assert history.visited_page(p.uri) is p


def test_copy_keeps_subclass():
    class TabHistory(History):
        pass

    original = TabHistory(max_size=2)
    original.push(_page(1))
    clone = copy.copy(original)
    assert type(clone) is TabHistory
    assert clone.max_size == 2
    assert clone.is_visited("http://x/1")
