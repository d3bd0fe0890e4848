# tests/test_autopick.py
from __future__ import annotations

import pytest

from colorpick.analysis.autopick import auto_pick, pattern_offsets
from colorpick.models.analysis import AutoPickConfig, AutoPickMode
from colorpick.models.color import pack_rgba
from colorpick.pick.source import GridPixelSource
from colorpick.store.record_store import MAX_RECORDS, RecordSlotStore

GREEN = pack_rgba(0, 180, 0)


def store_with_base(x: int, y: int) -> RecordSlotStore:
    store = RecordSlotStore()
    store.add(x, y, "#00B400", GREEN)
    return store


@pytest.mark.parametrize(
    "mode,count",
    [
        (AutoPickMode.GRID_3X3, 8),
        (AutoPickMode.GRID_4X4, 15),
        (AutoPickMode.CROSS, 8),
        (AutoPickMode.CIRCLE, 8),
        (AutoPickMode.DIAMOND, 8),
    ],
)
def test_pattern_sizes_exclude_base(mode: AutoPickMode, count: int) -> None:
    offsets = pattern_offsets(AutoPickConfig(mode=mode, spacing=4))
    assert len(offsets) == count
    assert (0, 0) not in offsets
    assert len(set(offsets)) == count


def test_grid_3x3_order() -> None:
    assert pattern_offsets(AutoPickConfig(AutoPickMode.GRID_3X3, 2)) == [
        (-2, -2), (-2, 0), (-2, 2),
        (0, -2), (0, 2),
        (2, -2), (2, 0), (2, 2),
    ]


def test_grid_4x4_extends_right_and_down() -> None:
    offsets = pattern_offsets(AutoPickConfig(AutoPickMode.GRID_4X4, 1))
    xs = {dx for dx, _ in offsets}
    ys = {dy for _, dy in offsets}
    assert xs == {-1, 0, 1, 2}
    assert ys == {-1, 0, 1, 2}


def test_cross_offsets() -> None:
    assert pattern_offsets(AutoPickConfig(AutoPickMode.CROSS, 5)) == [
        (-10, 0), (0, -10), (-5, 0), (0, -5), (5, 0), (0, 5), (10, 0), (0, 10),
    ]


def test_circle_offsets_round_to_nearest() -> None:
    assert pattern_offsets(AutoPickConfig(AutoPickMode.CIRCLE, 10)) == [
        (10, 0), (7, 7), (0, 10), (-7, 7), (-10, 0), (-7, -7), (0, -10), (7, -7),
    ]


def test_diamond_offsets_scale_with_spacing() -> None:
    assert pattern_offsets(AutoPickConfig(AutoPickMode.DIAMOND, 3)) == [
        (0, -6), (-3, -3), (3, -3), (-6, 0), (6, 0), (-3, 3), (3, 3), (0, 6),
    ]


def test_zero_spacing_is_rejected() -> None:
    with pytest.raises(ValueError):
        pattern_offsets(AutoPickConfig(AutoPickMode.CROSS, 0))


def test_cross_in_the_middle_records_all_points() -> None:
    src = GridPixelSource.filled(100, 100, GREEN)
    store = store_with_base(50, 50)

    n = auto_pick(store, src, AutoPickConfig(AutoPickMode.CROSS, 5))

    assert n == 8
    assert len(store) == 9
    assert [r.key for r in store.records] == [str(i) for i in range(1, 10)]
    assert (store.records[1].x, store.records[1].y) == (40, 50)
    assert all(r.c == "#00B400" for r in store.records)


def test_circle_near_edge_drops_out_of_bounds_points() -> None:
    src = GridPixelSource.filled(100, 100, GREEN)
    store = store_with_base(2, 2)

    n = auto_pick(store, src, AutoPickConfig(AutoPickMode.CIRCLE, 10))

    assert n < 8
    assert n == 3
    assert [(r.x, r.y) for r in store.records[1:]] == [(12, 2), (9, 9), (2, 12)]


def test_no_base_point_reports_and_does_nothing(notices) -> None:
    store = RecordSlotStore()
    n = auto_pick(store, GridPixelSource.filled(10, 10, GREEN), AutoPickConfig(), notify=notices)

    assert n == 0
    assert len(store) == 0
    assert notices.codes() == ["NO_BASE_POINT"]


def test_auto_pick_stops_at_capacity(notices) -> None:
    src = GridPixelSource.filled(100, 100, GREEN)
    store = RecordSlotStore(notify=notices)
    store.add(50, 50, "#00B400", GREEN)

    first = auto_pick(store, src, AutoPickConfig(AutoPickMode.GRID_4X4, 3))
    second = auto_pick(store, src, AutoPickConfig(AutoPickMode.GRID_4X4, 5))

    assert first == 15
    assert second == MAX_RECORDS - 16
    assert len(store) == MAX_RECORDS
    assert notices.codes() == ["CAPACITY_EXCEEDED"] * (15 - second)


def test_samples_color_at_each_candidate() -> None:
    src = GridPixelSource.filled(20, 20, GREEN)
    src.set_color(12, 10, pack_rgba(1, 2, 3))
    store = store_with_base(10, 10)

    auto_pick(store, src, AutoPickConfig(AutoPickMode.CROSS, 1), color_mode="rgb")

    by_pos = {(r.x, r.y): r.c for r in store.records}
    assert by_pos[(12, 10)] == "rgb(1,2,3)"
    assert by_pos[(11, 10)] == "rgb(0,180,0)"
