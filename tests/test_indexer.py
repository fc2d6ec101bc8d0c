"""Tests for trace_layers.indexer — first-seen categorical indices."""

import pytest

from trace_layers.indexer import PaintProperty, ValueIndexer

class TestValueIndexer:

    def test_first_position_wins(self):
        indexer = ValueIndexer()
        assert indexer.index(PaintProperty.CIRCLE_COLOR, 'a', 0) == 0
        assert indexer.index(PaintProperty.CIRCLE_COLOR, 'b', 1) == 1
        assert indexer.index(PaintProperty.CIRCLE_COLOR, 'a', 2) == 0

    def test_index_zero_is_not_overwritten(self):
        indexer = ValueIndexer()
        indexer.index(PaintProperty.CIRCLE_SIZE, 10, 0)
        assert indexer.index(PaintProperty.CIRCLE_SIZE, 10, 5) == 0
        assert dict(indexer.mapping(PaintProperty.CIRCLE_SIZE)) == {10: 0}

    def test_indices_are_point_positions(self):
        indexer = ValueIndexer()
        indexer.index(PaintProperty.CIRCLE_COLOR, 'x', 3)
        indexer.index(PaintProperty.CIRCLE_COLOR, 'y', 7)
        assert dict(indexer.mapping(PaintProperty.CIRCLE_COLOR)) == {'x': 3, 'y': 7}

    def test_properties_are_independent(self):
        indexer = ValueIndexer()
        indexer.index(PaintProperty.CIRCLE_COLOR, 1, 0)
        assert indexer.index(PaintProperty.CIRCLE_SIZE, 1, 4) == 4
        assert dict(indexer.mapping(PaintProperty.CIRCLE_COLOR)) == {1: 0}
        assert len(indexer) == 2

    def test_repeated_values_are_idempotent(self):
        indexer = ValueIndexer()
        values = ['r', 'g', 'r', 'b', 'g', 'r']
        first = [indexer.index(PaintProperty.CIRCLE_COLOR, v, i) for i, v in enumerate(values)]
        again = [indexer.index(PaintProperty.CIRCLE_COLOR, v, 99) for v in values]
        assert first == again == [0, 1, 0, 3, 1, 0]

    def test_list_values_are_keyed_as_tuples(self):
        indexer = ValueIndexer()
        assert indexer.index(PaintProperty.CIRCLE_COLOR, [255, 0, 0], 0) == 0
        assert indexer.index(PaintProperty.CIRCLE_COLOR, [255, 0, 0], 1) == 0
        assert dict(indexer.mapping(PaintProperty.CIRCLE_COLOR)) == {(255, 0, 0): 0}

    def test_mapping_is_read_only_snapshot(self):
        indexer = ValueIndexer()
        indexer.index(PaintProperty.CIRCLE_COLOR, 'a', 0)
        mapping = indexer.mapping(PaintProperty.CIRCLE_COLOR)

        with pytest.raises(TypeError):
            mapping['b'] = 1

        indexer.index(PaintProperty.CIRCLE_COLOR, 'b', 1)
        assert 'b' not in mapping

    def test_nan_values_share_one_index(self):
        indexer = ValueIndexer()
        indices = [indexer.index(PaintProperty.CIRCLE_SIZE, float('nan'), i) for i in range(3)]
        assert indices == [0, 0, 0]
        assert len(indexer.entries(PaintProperty.CIRCLE_SIZE)) == 1

    def test_nan_inside_list_values(self):
        indexer = ValueIndexer()
        assert indexer.index(PaintProperty.CIRCLE_COLOR, [1, float('nan')], 0) == 0
        assert indexer.index(PaintProperty.CIRCLE_COLOR, [1, float('nan')], 1) == 0

    def test_unhashable_values(self):
        indexer = ValueIndexer()
        assert indexer.index(PaintProperty.CIRCLE_COLOR, {'r': 1, 'g': 2}, 0) == 0
        assert indexer.index(PaintProperty.CIRCLE_COLOR, {'g': 2, 'r': 1}, 1) == 0
        assert indexer.index(PaintProperty.CIRCLE_COLOR, {'r': 9}, 2) == 2
        assert indexer.index(PaintProperty.CIRCLE_COLOR, {1, 2}, 3) == 3
        assert indexer.index(PaintProperty.CIRCLE_COLOR, {1, 2}, 4) == 3

    def test_entries_keep_first_raw_value(self):
        indexer = ValueIndexer()
        indexer.index(PaintProperty.CIRCLE_COLOR, [255, 0, 0], 0)
        indexer.index(PaintProperty.CIRCLE_COLOR, {'r': 1}, 1)
        assert indexer.entries(PaintProperty.CIRCLE_COLOR) == (([255, 0, 0], 0), ({'r': 1}, 1))
