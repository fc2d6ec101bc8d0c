"""
Build Mapbox-GL paint values for marker color and radius.

A per-point attribute becomes a stop spec keyed by the categorical index
stored on each feature:

{"property": "circle-color", "stops": [[0, "#f00"], [4, "#0f0"]]}

Stops are always sorted ascending by index. A scalar attribute passes
through as a literal paint value.
"""

from dataclasses import dataclass
from operator import itemgetter
from typing import Any, Callable, Dict, Iterable, Optional, Tuple, Union

from trace_layers.coords import to_number
from trace_layers.indexer import PaintProperty, ValueIndexer
from trace_layers.scales import color_bounds, has_colorscale, make_bubble_size_fn, make_color_scale_fn
from trace_layers.trace import MarkerStyle, PerPoint

@dataclass(frozen=True)
class StopSpec:
    property: PaintProperty
    stops: Tuple[Tuple[int, Any], ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'property': self.property.value,
            'stops': [[index, value] for index, value in self.stops]
        }

PaintValue = Union[StopSpec, Any]

def build_stops(prop: PaintProperty, values: Iterable[Tuple[Any, int]],
                fn: Callable[[Any], Any]) -> StopSpec:
    """
    Map every recorded value through fn and key it by its index.

    Args:
        prop: Feature property the renderer matches stops against
        values: (raw value, categorical index) pairs
        fn: Raw value -> paint value

    Returns:
        StopSpec with stops sorted by index
    """
    stops = sorted(((index, fn(value)) for value, index in values), key=itemgetter(0))
    return StopSpec(prop, tuple(stops))

def _identity(value):
    return value

def calc_marker_color(marker: MarkerStyle, indexer: ValueIndexer,
                      color_fn: Optional[Callable[[Any], Any]] = None) -> PaintValue:
    """Paint value for circle-color."""
    if not isinstance(marker.color, PerPoint):
        return marker.color.value

    if color_fn is None:
        if has_colorscale(marker):
            cmin, cmax = color_bounds(marker.color.values, marker.cmin, marker.cmax)
            color_fn = make_color_scale_fn(marker.colorscale, cmin, cmax)
        else:
            color_fn = _identity

    return build_stops(PaintProperty.CIRCLE_COLOR, indexer.entries(PaintProperty.CIRCLE_COLOR), color_fn)

def calc_marker_radius(marker: MarkerStyle, indexer: ValueIndexer,
                       size_fn: Optional[Callable[[Any], float]] = None) -> PaintValue:
    """Paint value for circle-radius; sizes are diameters."""
    if not isinstance(marker.size, PerPoint):
        size = to_number(marker.size.value)
        return size / 2 if size is not None else 0

    if size_fn is None:
        size_fn = make_bubble_size_fn(marker)

    return build_stops(PaintProperty.CIRCLE_SIZE, indexer.entries(PaintProperty.CIRCLE_SIZE), size_fn)
