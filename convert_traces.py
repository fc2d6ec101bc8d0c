#!/usr/bin/env python3
"""
Convert geographic scatter traces into Mapbox-GL layer descriptors.

Reads a JSON file holding a single trace, a list of traces or a figure
({"data": [...]}) and writes one {fill, lines, markers} object per trace:

[
  {
    "fill":    {"geometry": {...}, "layout": {"visibility": "none"}, "paint": {}},
    "lines":   {"geometry": {"type": "MultiLineString", ...}, "layout": {"visibility": "visible"}, "paint": {...}},
    "markers": {"geometry": {"type": "FeatureCollection", ...}, "layout": {...}, "paint": {...}}
  }
]

A summary of every layer is printed to stderr.

Usage: python3 convert_traces.py <input.json> [output.json]
"""

import json
import sys
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List

import geojson

from trace_layers import convert

class TraceLoadError(Exception):
    """Raised when the trace file cannot be read or parsed."""

def load_traces(filepath: str) -> List[Dict[str, Any]]:
    """
    Load trace dictionaries from a JSON file.

    Args:
        filepath: Path to a trace, trace list or figure JSON file

    Returns:
        List of trace dictionaries

    Raises:
        TraceLoadError: If the file is missing, not JSON or holds no traces
    """
    path = Path(filepath)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as exc:
        raise TraceLoadError(f"Unable to read trace file '{path}'") from exc
    except json.JSONDecodeError as exc:
        raise TraceLoadError(f"Trace file '{path}' is not valid JSON") from exc

    if isinstance(data, dict) and 'data' in data:
        data = data['data']
    if isinstance(data, dict):
        data = [data]

    if not isinstance(data, list) or not all(isinstance(trace, dict) for trace in data):
        raise TraceLoadError(f"Trace file '{path}' must hold a trace, a list of traces or a figure")

    return data

def count_geometry_points(coordinates: Any, geometry_type: str) -> int:
    """Count points in a single geometry."""
    if not coordinates:
        return 0

    if geometry_type == 'Point':
        return 1
    elif geometry_type == 'Polygon':
        return sum(len(ring) for ring in coordinates)
    elif geometry_type == 'MultiLineString':
        return sum(len(line) for line in coordinates)

    return 0

def summarize_layer(layer: Dict[str, Any]) -> Dict[str, Any]:
    """Visibility, geometry type, feature count and point count of a converted layer."""
    geometry = layer['geometry']
    geometry_type = geometry.get('type', 'Unknown')

    if geometry_type == 'FeatureCollection':
        features = geometry.get('features', [])
        geom_types = Counter(f.get('geometry', {}).get('type', 'Unknown') for f in features)
        points = sum(
            count_geometry_points(f['geometry'].get('coordinates', []), f['geometry'].get('type', ''))
            for f in features
        )
    else:
        features = []
        geom_types = Counter([geometry_type])
        points = count_geometry_points(geometry.get('coordinates', []), geometry_type)

    return {
        'visibility': layer['layout']['visibility'],
        'geometry_type': geometry_type,
        'feature_count': len(features),
        'geometry_types': dict(geom_types),
        'point_count': points
    }

def convert_traces(traces: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Convert every trace and print a per-layer summary to stderr."""
    converted = []

    for i, trace in enumerate(traces):
        layers = convert(trace).to_dict()
        print(f"Trace {i} ({trace.get('name', trace.get('type', 'unnamed'))})", file=sys.stderr)

        for name, layer in layers.items():
            stats = summarize_layer(layer)
            if stats['visibility'] == 'none':
                print(f"  {name}: hidden", file=sys.stderr)
                continue
            print(f"  {name}: {stats['geometry_type']}, {stats['feature_count']} features, "
                  f"{stats['point_count']} points", file=sys.stderr)

        converted.append(layers)

    return converted

def main() -> None:
    """Read trace JSON and output layer JSON."""
    if len(sys.argv) < 2:
        print("Usage: python convert_traces.py <input.json> [output.json]", file=sys.stderr)
        print("Output: Layer JSON to file or stdout", file=sys.stderr)
        sys.exit(1)

    try:
        traces = load_traces(sys.argv[1])
    except TraceLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    layers = convert_traces(traces)
    output = geojson.dumps(layers, indent=2)

    # Write to file or stdout
    if len(sys.argv) >= 3:
        output_path = Path(sys.argv[2])
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(output)
            f.write("\n")
        print(f"Wrote {len(layers)} traces to {output_path}", file=sys.stderr)
    else:
        print(output)

if __name__ == "__main__":
    main()
