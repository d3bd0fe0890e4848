# tests/test_record_store.py
from __future__ import annotations

import pytest

from colorpick.models.color import pack_rgba
from colorpick.pick.source import GridPixelSource
from colorpick.store.record_store import MAX_RECORDS, RecordSlotStore

RED = pack_rgba(200, 0, 0)
BLUE = pack_rgba(0, 0, 200)


def keys(store: RecordSlotStore):
    return [r.key for r in store.records]


def test_add_appends_with_one_based_keys() -> None:
    store = RecordSlotStore()
    r1 = store.add(1, 2, "#C80000", RED)
    r2 = store.add(3, 4, "#0000C8", BLUE)

    assert r1 is not None and r1.key == "1"
    assert r2 is not None and r2.key == "2"
    assert keys(store) == ["1", "2"]
    assert store.get("2") == r2


def test_capacity_is_never_exceeded(notices) -> None:
    store = RecordSlotStore(notify=notices)
    results = [store.add(i, i, "#000000", 0) for i in range(MAX_RECORDS + 5)]

    assert len(store) == MAX_RECORDS
    assert store.is_full()
    assert results[-5:] == [None] * 5
    assert notices.codes() == ["CAPACITY_EXCEEDED"] * 5


def test_keyed_add_fills_gaps_with_placeholders() -> None:
    store = RecordSlotStore()
    rec = store.add(10, 20, "#C80000", RED, key="4")

    assert rec is not None
    assert keys(store) == ["1", "2", "3", "4"]
    assert [r.is_placeholder for r in store.records] == [True, True, True, False]
    ph = store.records[0]
    assert (ph.x, ph.y, ph.c, ph.c_native) == (-1, -1, "-1", -1)
    assert (store.records[3].x, store.records[3].y) == (10, 20)


def test_keyed_add_replaces_existing_slot() -> None:
    store = RecordSlotStore()
    for i in range(3):
        store.add(i, i, "#000000", 0)

    store.add(9, 9, "#C80000", RED, key="2")

    assert len(store) == 3
    assert keys(store) == ["1", "2", "3"]
    assert (store.records[1].x, store.records[1].c_native) == (9, RED)


def test_keyed_add_beyond_capacity_is_rejected(notices) -> None:
    store = RecordSlotStore(notify=notices)
    assert store.add(0, 0, "#000000", 0, key=str(MAX_RECORDS + 1)) is None
    assert len(store) == 0
    assert notices.codes() == ["CAPACITY_EXCEEDED"]

    assert store.add(0, 0, "#000000", 0, key=str(MAX_RECORDS)) is not None
    assert len(store) == MAX_RECORDS


@pytest.mark.parametrize("bad", ["0", "-3", "abc"])
def test_invalid_slot_keys_raise(bad: str) -> None:
    store = RecordSlotStore()
    with pytest.raises(ValueError):
        store.add(0, 0, "#000000", 0, key=bad)


def test_remove_renumbers_from_zero() -> None:
    store = RecordSlotStore()
    for i in range(4):
        store.add(i * 10, 0, "#000000", 0)

    store.remove("2")

    assert keys(store) == ["0", "1", "2"]
    assert [r.x for r in store.records] == [0, 20, 30]


def test_remove_then_add_keeps_asymmetric_numbering() -> None:
    store = RecordSlotStore()
    for i in range(3):
        store.add(i, 0, "#000000", 0)
    store.remove("1")
    store.add(7, 7, "#000000", 0)

    # 删除后 0 起编号，新增仍按 len+1
    assert keys(store) == ["0", "1", "3"]


def test_remove_unknown_key_still_renumbers() -> None:
    store = RecordSlotStore()
    store.add(0, 0, "#000000", 0)
    store.add(1, 0, "#000000", 0)
    store.remove("99")
    assert keys(store) == ["0", "1"]


def test_remove_without_key_clears() -> None:
    store = RecordSlotStore()
    store.add(0, 0, "#000000", 0)
    store.remove()
    assert len(store) == 0


def test_refetch_rereads_colors_and_keeps_slots() -> None:
    store = RecordSlotStore()
    store.add(1, 1, "#C80000", RED, key="2")

    n = store.refetch(GridPixelSource.filled(3, 3, BLUE))

    assert n == 1
    ph, rec = store.records
    assert ph.is_placeholder and ph.c_native == -1
    assert (rec.key, rec.x, rec.y) == ("2", 1, 1)
    assert (rec.c, rec.c_native) == ("#0000C8", BLUE)


def test_refetch_skips_points_outside_new_image() -> None:
    store = RecordSlotStore()
    store.add(5, 5, "#C80000", RED)
    assert store.refetch(GridPixelSource.filled(3, 3, BLUE), color_mode="rgb") == 0
    assert store.records[0].c_native == RED


def test_listeners_get_snapshots_and_failures_are_contained() -> None:
    store = RecordSlotStore()
    seen = []

    def boom(_records) -> None:
        raise RuntimeError("listener bug")

    store.subscribe(boom)
    unsub = store.subscribe(lambda recs: seen.append(len(recs)))

    store.add(0, 0, "#000000", 0)
    store.add(1, 0, "#000000", 0)
    unsub()
    store.remove()

    assert seen == [1, 2]
    assert len(store) == 0


def test_snapshot_roundtrip() -> None:
    store = RecordSlotStore()
    store.add(3, 4, "#C80000", RED, key="2")

    other = RecordSlotStore()
    other.load_dict(store.to_dict())

    assert other.records == store.records
