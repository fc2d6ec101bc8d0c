"""Convert geographic scatter traces into Mapbox-GL layer descriptors."""

from trace_layers.convert import ConvertedLayers, Layer, convert
from trace_layers.trace import PerPoint, Scalar, Trace

__all__ = ['ConvertedLayers', 'Layer', 'PerPoint', 'Scalar', 'Trace', 'convert']
