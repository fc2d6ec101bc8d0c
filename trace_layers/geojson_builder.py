"""
Wrap trace geometry in GeoJSON envelopes (RFC 7946).

Fill layer:    {"type": "Polygon", "coordinates": [run, run, ...]}
Line layer:    {"type": "MultiLineString", "coordinates": [run, run, ...]}
Marker layer:  {"type": "FeatureCollection", "features": [Point Feature, ...]}
Hidden layer:  {"type": "Point", "coordinates": []}

Marker features carry, for every per-point color/size attribute, the
categorical index of the point's value under the paint property name,
e.g. {"circle-color": 0, "circle-size": 3}.
"""

from typing import Any, Dict, List, Tuple

import geojson

from trace_layers.coords import to_lonlat
from trace_layers.indexer import PaintProperty, ValueIndexer
from trace_layers.trace import PerPoint, Trace

# Decimal places kept by the geojson library, past double precision for lon/lat
COORDINATE_PRECISION = 15

def make_blank_geojson() -> geojson.Point:
    """Placeholder geometry for a hidden layer."""
    return geojson.Point([])

def make_fill_geojson(coords: List[List[List[float]]]) -> geojson.Polygon:
    return geojson.Polygon(coords, precision=COORDINATE_PRECISION)

def make_line_geojson(coords: List[List[List[float]]]) -> geojson.MultiLineString:
    return geojson.MultiLineString(coords, precision=COORDINATE_PRECISION)

def make_marker_geojson(trace: Trace) -> Tuple[geojson.FeatureCollection, ValueIndexer]:
    """
    Build one Point feature per valid trace point.

    Args:
        trace: Source trace

    Returns:
        The FeatureCollection and the ValueIndexer holding the categorical
        indices assigned while building it
    """
    marker = trace.marker
    indexer = ValueIndexer()

    per_point: Dict[PaintProperty, Tuple[Any, ...]] = {}
    if isinstance(marker.color, PerPoint):
        per_point[PaintProperty.CIRCLE_COLOR] = marker.color.values
    if isinstance(marker.size, PerPoint):
        per_point[PaintProperty.CIRCLE_SIZE] = marker.size.values

    features = []

    for i, (lon, lat) in enumerate(zip(trace.lon, trace.lat)):
        position = to_lonlat(lon, lat)
        if position is None:
            continue

        properties = {}
        for prop, values in per_point.items():
            # arrays shorter than lon/lat leave the trailing points unstyled
            if i < len(values):
                properties[prop.value] = indexer.index(prop, values[i], i)

        features.append(geojson.Feature(
            geometry=geojson.Point(position, precision=COORDINATE_PRECISION),
            properties=properties
        ))

    return geojson.FeatureCollection(features), indexer
