import pytest

from meshcore.better_list import BetterList
from meshcore.vectors import Vector3


def test_add_33_items_like_source_test():
    items = BetterList()
    for i in range(33):
        items.add(i)
    assert len(items) == 33
    assert items.to_list() == list(range(33))
    assert items.capacity() == 64


def test_first_growth_reserves_32():
    items = BetterList()
    assert items.capacity() == 0
    items.add("a")
    assert items.capacity() == 32


def test_growth_doubles_from_given_capacity():
    items = BetterList(40)
    assert items.capacity() == 40
    for i in range(41):
        items.add(i)
    assert items.capacity() == 80


def test_seek_to_end_fills_with_factory():
    items = BetterList(3, True, Vector3)
    assert len(items) == 3
    items[1].x = 5.0
    assert items[0] == Vector3()
    assert items[1] == Vector3(5.0, 0.0, 0.0)


def test_seek_to_end_without_factory_fills_none():
    items = BetterList(2, True)
    assert items.to_list() == [None, None]


def test_seek_to_end_zero_capacity_is_empty():
    items = BetterList(0, True)
    assert len(items) == 0
    assert items.capacity() == 0


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        BetterList(-1)


def test_index_out_of_range():
    items = BetterList(10)
    items.add(1)
    with pytest.raises(IndexError):
        items[1]
    with pytest.raises(IndexError):
        items[-1]
    with pytest.raises(IndexError):
        items[3] = 4
    assert items[0] == 1
    assert items.to_list() == [1]


def test_setitem():
    items = BetterList()
    items.add(1)
    items[0] = 7
    assert items[0] == 7


def test_insert_shifts_and_appends():
    items = BetterList()
    for value in (1, 2, 3):
        items.add(value)
    items.insert(1, 9)
    assert items.to_list() == [1, 9, 2, 3]
    items.insert(100, 4)
    assert items.to_list() == [1, 9, 2, 3, 4]
    items.insert(0, 0)
    assert items[0] == 0


def test_insert_negative_rejected():
    items = BetterList()
    with pytest.raises(IndexError):
        items.insert(-1, 5)


def test_contains():
    items = BetterList()
    items.add("x")
    assert "x" in items
    assert "y" not in items


def test_remove_first_match():
    items = BetterList()
    for value in (1, 2, 1, 3):
        items.add(value)
    items.remove(1)
    assert items.to_list() == [2, 1, 3]
    with pytest.raises(ValueError):
        items.remove(42)


def test_remove_at():
    items = BetterList()
    for value in "abc":
        items.add(value)
    items.remove_at(1)
    assert items.to_list() == ["a", "c"]
    with pytest.raises(IndexError):
        items.remove_at(2)


def test_pop():
    items = BetterList()
    items.add(1)
    items.add(2)
    assert items.pop() == 2
    assert items.pop() == 1
    with pytest.raises(IndexError):
        items.pop()


def test_clear_keeps_capacity_release_drops_it():
    items = BetterList()
    for i in range(5):
        items.add(i)
    items.clear()
    assert len(items) == 0
    assert items.capacity() == 32
    items.add(1)
    items.release()
    assert len(items) == 0
    assert items.capacity() == 0


def test_iteration_and_to_list_copy():
    items = BetterList()
    for i in range(4):
        items.add(i)
    assert list(items) == [0, 1, 2, 3]
    snapshot = items.to_list()
    snapshot.append(99)
    assert len(items) == 4