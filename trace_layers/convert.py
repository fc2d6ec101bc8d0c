"""
Convert a geographic scatter trace into fill, line and marker layers.

Each layer is a GeoJSON geometry plus Mapbox-GL layout/paint rules:

{
  "geometry": {...},                        // GeoJSON object
  "layout": {"visibility": "visible|none"},
  "paint": {"line-width": 2, "circle-color": {"property": ..., "stops": [...]}, ...}
}

Layers that do not apply (invisible trace, mode without lines/markers,
fill "none") stay hidden with a blank Point geometry.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, NamedTuple, Optional, Union

from trace_layers.coords import assemble_coordinates
from trace_layers.geojson_builder import make_blank_geojson, make_fill_geojson, make_line_geojson, make_marker_geojson
from trace_layers.stops import StopSpec, calc_marker_color, calc_marker_radius
from trace_layers.trace import Trace

_LOGGER = logging.getLogger(__name__)

VISIBLE = 'visible'
HIDDEN = 'none'

@dataclass
class Layer:
    geometry: Dict[str, Any] = field(default_factory=make_blank_geojson)
    layout: Dict[str, str] = field(default_factory=lambda: {'visibility': HIDDEN})
    paint: Dict[str, Any] = field(default_factory=dict)

    @property
    def visible(self) -> bool:
        return self.layout['visibility'] == VISIBLE

    def show(self, geometry: Dict[str, Any], paint: Dict[str, Any]) -> None:
        self.geometry = geometry
        self.layout['visibility'] = VISIBLE
        self.paint.update(paint)

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-serializable form with stop specs expanded."""
        return {
            'geometry': self.geometry,
            'layout': dict(self.layout),
            'paint': {
                key: value.to_dict() if isinstance(value, StopSpec) else value
                for key, value in self.paint.items()
            }
        }

class ConvertedLayers(NamedTuple):
    fill: Layer
    lines: Layer
    markers: Layer

    def to_dict(self) -> Dict[str, Any]:
        return {name: layer.to_dict() for name, layer in self._asdict().items()}

def convert(trace: Union[Trace, Mapping[str, Any]],
            color_fn: Optional[Callable[[Any], Any]] = None,
            size_fn: Optional[Callable[[Any], float]] = None) -> ConvertedLayers:
    """
    Convert a trace into its fill, line and marker layers.

    Args:
        trace: Trace, or a trace dictionary read with Trace.from_dict
        color_fn: Raw marker color -> rendered color; defaults to the
            colorscale when one applies, identity otherwise
        size_fn: Raw marker size -> circle radius; defaults to the bubble
            size function built from the marker settings

    Returns:
        ConvertedLayers(fill, lines, markers), each hidden unless it applies
    """
    if not isinstance(trace, Trace):
        trace = Trace.from_dict(trace)

    is_visible = trace.visible is True

    fill = Layer()
    lines = Layer()
    markers = Layer()

    coords = None
    if is_visible and (trace.has_fill or trace.has_lines):
        coords = assemble_coordinates(trace.lon, trace.lat, trace.connectgaps)
        _LOGGER.debug('Assembled %d coordinate runs from %d points', len(coords), len(trace.lon))

    if is_visible and trace.has_fill:
        fill.show(make_fill_geojson(coords), {
            'fill-color': trace.fillcolor
        })

    if is_visible and trace.has_lines:
        # line.dash is not translated into line-dasharray
        lines.show(make_line_geojson(coords), {
            'line-width': trace.line.width,
            'line-color': trace.line.color,
            'line-opacity': trace.opacity
        })

    if is_visible and trace.has_markers:
        marker = trace.marker
        collection, indexer = make_marker_geojson(trace)
        _LOGGER.debug('Built %d marker features, %d distinct style values',
                      len(collection['features']), len(indexer))

        markers.show(collection, {
            'circle-opacity': trace.opacity * marker.opacity,
            'circle-color': calc_marker_color(marker, indexer, color_fn),
            'circle-radius': calc_marker_radius(marker, indexer, size_fn)
        })

    return ConvertedLayers(fill, lines, markers)
