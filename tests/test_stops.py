"""Tests for trace_layers.stops — stop tables for marker color and radius."""

import pytest

from trace_layers.indexer import PaintProperty, ValueIndexer
from trace_layers.stops import StopSpec, build_stops, calc_marker_color, calc_marker_radius
from trace_layers.trace import MarkerStyle, PerPoint, Scalar

def _indexed(prop, values):
    indexer = ValueIndexer()
    for i, value in enumerate(values):
        indexer.index(prop, value, i)
    return indexer

class TestBuildStops:

    def test_stops_sorted_by_index(self):
        spec = build_stops(PaintProperty.CIRCLE_SIZE, {'b': 4, 'a': 1, 'c': 2}.items(), str.upper)
        assert spec.stops == ((1, 'A'), (2, 'C'), (4, 'B'))

    def test_no_values(self):
        spec = build_stops(PaintProperty.CIRCLE_COLOR, (), str)
        assert spec.to_dict() == {'property': 'circle-color', 'stops': []}

    def test_to_dict(self):
        spec = StopSpec(PaintProperty.CIRCLE_SIZE, ((0, 5.0), (3, 2.0)))
        assert spec.to_dict() == {'property': 'circle-size', 'stops': [[0, 5.0], [3, 2.0]]}

class TestMarkerColor:

    def test_scalar_passes_through(self):
        marker = MarkerStyle(color=Scalar('#123456'))
        assert calc_marker_color(marker, ValueIndexer()) == '#123456'

    def test_categorical_colors_identity(self):
        marker = MarkerStyle(color=PerPoint(('a', 'b', 'a')))
        indexer = _indexed(PaintProperty.CIRCLE_COLOR, marker.color.values)

        spec = calc_marker_color(marker, indexer)
        assert spec.to_dict() == {'property': 'circle-color', 'stops': [[0, 'a'], [1, 'b']]}

    def test_numeric_colors_use_colorscale(self):
        marker = MarkerStyle(
            color=PerPoint((10, 0, 10)),
            colorscale=[[0, '#000000'], [1, '#ffffff']]
        )
        indexer = _indexed(PaintProperty.CIRCLE_COLOR, marker.color.values)

        spec = calc_marker_color(marker, indexer)
        assert spec.stops == ((0, 'rgb(255, 255, 255)'), (1, 'rgb(0, 0, 0)'))

    def test_custom_color_fn(self):
        marker = MarkerStyle(color=PerPoint(('x', 'y')))
        indexer = _indexed(PaintProperty.CIRCLE_COLOR, marker.color.values)

        spec = calc_marker_color(marker, indexer, color_fn=lambda v: v * 2)
        assert spec.stops == ((0, 'xx'), (1, 'yy'))

    def test_stops_sorted_regardless_of_discovery_order(self):
        marker = MarkerStyle(color=PerPoint(('a', 'b', 'c')))
        indexer = ValueIndexer()
        indexer.index(PaintProperty.CIRCLE_COLOR, 'c', 2)
        indexer.index(PaintProperty.CIRCLE_COLOR, 'a', 0)
        indexer.index(PaintProperty.CIRCLE_COLOR, 'b', 1)

        spec = calc_marker_color(marker, indexer)
        assert [index for index, _ in spec.stops] == [0, 1, 2]

class TestMarkerRadius:

    def test_scalar_is_halved(self):
        assert calc_marker_radius(MarkerStyle(size=Scalar(10)), ValueIndexer()) == 5

    def test_non_numeric_scalar(self):
        assert calc_marker_radius(MarkerStyle(size=Scalar('big')), ValueIndexer()) == 0

    def test_array_uses_bubble_size(self):
        marker = MarkerStyle(size=PerPoint((10, 20, 10)))
        indexer = _indexed(PaintProperty.CIRCLE_SIZE, marker.size.values)

        spec = calc_marker_radius(marker, indexer)
        assert spec.property is PaintProperty.CIRCLE_SIZE
        assert spec.stops == ((0, pytest.approx(5)), (1, pytest.approx(10)))

    def test_custom_size_fn_sorted_and_deterministic(self):
        marker = MarkerStyle(size=PerPoint((3, 1, 2)))
        indexer = ValueIndexer()
        indexer.index(PaintProperty.CIRCLE_SIZE, 2, 2)
        indexer.index(PaintProperty.CIRCLE_SIZE, 1, 1)
        indexer.index(PaintProperty.CIRCLE_SIZE, 3, 0)

        first = calc_marker_radius(marker, indexer, size_fn=lambda v: v * 10)
        second = calc_marker_radius(marker, indexer, size_fn=lambda v: v * 10)
        assert first.stops == ((0, 30), (1, 10), (2, 20))
        assert first == second

    def test_no_valid_points_gives_empty_stops(self):
        marker = MarkerStyle(size=PerPoint((4, 5)))
        spec = calc_marker_radius(marker, ValueIndexer())
        assert spec.stops == ()
