"""
Default color-scale and bubble-size capabilities.

The layer converter treats both as plain callables (raw value -> paint
value), so callers can substitute their own. These defaults follow the
usual scatter-trace conventions:

- numeric colors are clamped to [cmin, cmax] and interpolated in RGB
  between the colorscale stops
- marker sizes are diameters, scaled by ``sizeref`` and optionally by area
"""

import math
import re
from typing import Any, Callable, List, Optional, Sequence, Tuple

from trace_layers.coords import to_number

# Configuration - Edit these values as needed
DEFAULT_LINE_COLOR = '#444'
DEFAULT_COLORSCALE = [
    [0, 'rgb(5,10,172)'],
    [0.35, 'rgb(106,137,247)'],
    [0.5, 'rgb(190,190,190)'],
    [0.6, 'rgb(220,170,132)'],
    [0.7, 'rgb(230,145,90)'],
    [1, 'rgb(178,10,28)']
]

_RGB_MATCHER = re.compile(r'^rgba?\(([^)]*)\)$')

RGBA = Tuple[int, int, int, float]

def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color (#rgb or #rrggbb) to RGB tuple."""
    hex_color = hex_color.lstrip('#')
    if len(hex_color) == 3:
        hex_color = ''.join(c * 2 for c in hex_color)
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))

def parse_color(color: Any) -> Optional[RGBA]:
    """
    Parse a CSS-style color string into an (r, g, b, a) tuple.

    Supports ``#rgb``, ``#rrggbb``, ``rgb(r, g, b)`` and ``rgba(r, g, b, a)``.
    Returns None for anything else.
    """
    if not isinstance(color, str):
        return None

    color = color.strip().lower()

    if color.startswith('#'):
        if len(color) not in (4, 7):
            return None
        try:
            r, g, b = hex_to_rgb(color)
        except ValueError:
            return None
        return (r, g, b, 1.0)

    match = _RGB_MATCHER.match(color)
    if not match:
        return None

    parts = [p.strip() for p in match.group(1).split(',')]
    if len(parts) not in (3, 4):
        return None

    try:
        channels = [float(p) for p in parts]
    except ValueError:
        return None

    r, g, b = (int(round(min(max(c, 0), 255))) for c in channels[:3])
    alpha = min(max(channels[3], 0.0), 1.0) if len(channels) == 4 else 1.0
    return (r, g, b, alpha)

def format_color(rgba: RGBA) -> str:
    """Format an (r, g, b, a) tuple as an rgb()/rgba() string."""
    r, g, b, a = rgba
    if a < 1:
        return f'rgba({r}, {g}, {b}, {a:g})'
    return f'rgb({r}, {g}, {b})'

def add_opacity(color: Any, alpha: float) -> Any:
    """Return the color with its alpha channel replaced, or the input if unparseable."""
    rgba = parse_color(color)
    if rgba is None:
        return color
    r, g, b, _ = rgba
    return f'rgba({r}, {g}, {b}, {alpha:g})'

def has_colorscale(marker) -> bool:
    """Whether the marker color array should be mapped through a colorscale."""
    if marker.colorscale or marker.cmin is not None or marker.cmax is not None:
        return True

    values = getattr(marker.color, 'values', None)
    if values is None:
        return False

    return any(to_number(v) is not None for v in values)

def color_bounds(values: Sequence[Any], cmin: Optional[float] = None,
                 cmax: Optional[float] = None) -> Tuple[float, float]:
    """Fill in missing colorscale bounds from the numeric values present."""
    numbers = [n for n in (to_number(v) for v in values) if n is not None]

    if cmin is None:
        cmin = min(numbers) if numbers else 0
    if cmax is None:
        cmax = max(numbers) if numbers else 1

    return cmin, cmax

def make_color_scale_fn(colorscale: Optional[List[List[Any]]], cmin: float,
                        cmax: float) -> Callable[[Any], Any]:
    """
    Build a function mapping a raw color value to a rendered color.

    Args:
        colorscale: List of [fraction, color] pairs, fractions ascending in [0, 1]
        cmin: Value mapped to the first colorscale stop
        cmax: Value mapped to the last colorscale stop

    Returns:
        Callable returning an rgb()/rgba() string for numbers, the input for
        valid color strings and DEFAULT_LINE_COLOR otherwise
    """
    scale = colorscale or DEFAULT_COLORSCALE

    domain = [cmin + float(fraction) * (cmax - cmin) for fraction, _ in scale]
    colors = [parse_color(color) or parse_color(DEFAULT_LINE_COLOR) for _, color in scale]

    def interpolate(value: float) -> RGBA:
        value = min(max(value, cmin), cmax)

        for i in range(1, len(domain)):
            if value <= domain[i]:
                lo, hi = domain[i - 1], domain[i]
                t = (value - lo) / (hi - lo) if hi != lo else 0.0
                start, end = colors[i - 1], colors[i]
                r, g, b = (int(round(start[k] + (end[k] - start[k]) * t)) for k in range(3))
                a = start[3] + (end[3] - start[3]) * t
                return (r, g, b, a)

        return colors[-1]

    def color_fn(value: Any) -> Any:
        number = to_number(value)
        if number is not None:
            return format_color(interpolate(number))
        if parse_color(value) is not None:
            return value
        return DEFAULT_LINE_COLOR

    return color_fn

def make_bubble_size_fn(marker) -> Callable[[Any], float]:
    """
    Build a function mapping a raw marker size (a diameter) to a circle radius.

    ``sizeref`` scales every size; ``sizemode='area'`` makes the marker area,
    rather than its diameter, proportional to the value; ``sizemin`` is the
    smallest radius any positive value produces.
    """
    size_ref = marker.sizeref or 1
    size_min = marker.sizemin or 0

    if marker.sizemode == 'area':
        def base_fn(v):
            return math.sqrt(v / size_ref) if v >= 0 else math.nan
    else:
        def base_fn(v):
            return v / size_ref

    def size_fn(value: Any) -> float:
        number = to_number(value)
        if number is None:
            return 0

        base_size = base_fn(number / 2)
        if math.isfinite(base_size) and base_size > 0:
            return max(base_size, size_min)
        return 0

    return size_fn
