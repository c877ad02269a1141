import math
from collections import Counter, defaultdict

import pytest

from spinwheel.core.segments import build_segments, segment_spans, total_weight


REGISTRIES = [
    [("A", 1, 1)],
    [("A", 1, 1), ("B", 3, 1)],
    [("A", 2, 2), ("B", 5, 3), ("C", 0.5, 1)],
    [("A", 7, 4), ("B", 1, 1), ("C", 3.3, 5), ("D", 10, 2)],
]


def _items(make_item, layout):
    return [make_item(name, weight=w, split_count=n) for name, w, n in layout]


def test_sequential_scenario(make_item):
    segments = build_segments([make_item("A", weight=1), make_item("B", weight=3)])

    assert [s.display_name for s in segments] == ["A", "B"]
    assert [s.slice_weight for s in segments] == [1, 3]
    assert total_weight(segments) == 4


def test_split_item_emits_equal_slices(make_item):
    segments = build_segments([make_item("A", weight=2, split_count=2)])

    assert len(segments) == 2
    assert all(s.source_item_id == "A" for s in segments)
    assert all(s.slice_weight == 1 for s in segments)


def test_sequential_keeps_splits_together(make_item):
    items = [make_item("A", split_count=3), make_item("B", split_count=2)]

    order = [s.source_item_id for s in build_segments(items)]

    assert order == ["A", "A", "A", "B", "B"]


def test_interleaved_round_robin(make_item):
    items = [
        make_item("A", split_count=3),
        make_item("B", split_count=1),
        make_item("C", split_count=2),
    ]

    order = [s.source_item_id for s in build_segments(items, interleaved=True)]

    assert order == ["A", "B", "C", "A", "C", "A"]


@pytest.mark.parametrize("layout", REGISTRIES)
@pytest.mark.parametrize("interleaved", [False, True])
def test_weight_is_conserved(make_item, layout, interleaved):
    items = _items(make_item, layout)

    segments = build_segments(items, interleaved=interleaved)

    assert total_weight(segments) == pytest.approx(sum(i.weight for i in items))
    per_item = defaultdict(float)
    for segment in segments:
        per_item[segment.source_item_id] += segment.slice_weight
    for item in items:
        assert per_item[item.id] == pytest.approx(item.weight)


@pytest.mark.parametrize("layout", REGISTRIES)
@pytest.mark.parametrize("interleaved", [False, True])
def test_split_count_segments_per_item(make_item, layout, interleaved):
    items = _items(make_item, layout)

    segments = build_segments(items, interleaved=interleaved)

    counts = Counter(s.source_item_id for s in segments)
    for item in items:
        assert counts[item.id] == item.split_count
        for segment in segments:
            if segment.source_item_id == item.id:
                assert segment.slice_weight == pytest.approx(item.weight / item.split_count)


@pytest.mark.parametrize("layout", REGISTRIES)
def test_interleaved_only_changes_order(make_item, layout):
    items = _items(make_item, layout)

    sequential = build_segments(items)
    interleaved = build_segments(items, interleaved=True)

    assert sorted(sequential, key=lambda s: s.source_item_id) == \
        sorted(interleaved, key=lambda s: s.source_item_id)


def test_segment_carries_item_display_fields(make_item):
    item = make_item("A", name="Tacos", color="#123456")

    segment = build_segments([item])[0]

    assert segment.display_name == "Tacos"
    assert segment.fill_color == "#123456"
    assert segment.text_color == item.text_color
    assert segment.text_size == item.text_size


def test_empty_registry():
    assert build_segments([]) == []
    assert build_segments([], interleaved=True) == []
    assert total_weight([]) == 0
    assert segment_spans([]) == []


def test_spans_cover_full_circle(make_item):
    spans = segment_spans(build_segments([make_item("A", weight=1), make_item("B", weight=3)]))

    assert spans[0].start == 0
    assert spans[0].end == pytest.approx(math.pi / 2)
    assert spans[1].start == pytest.approx(math.pi / 2)
    assert spans[1].end == pytest.approx(2 * math.pi)
    assert spans[0].mid == pytest.approx(math.pi / 4)
