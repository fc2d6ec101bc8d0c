"""
Read-only model of a geographic scatter trace.

A trace dictionary looks like:

{
  "type": "scattermapbox",
  "visible": true,
  "mode": "lines+markers",        // any '+'-joined mix of lines/markers, or "none"
  "fill": "none|toself",          // anything but "none" draws a fill layer
  "fillcolor": "rgba(...)",
  "connectgaps": false,
  "opacity": 1.0,
  "lon": [...], "lat": [...],
  "line": {"width": 2, "color": "#1f77b4", "dash": "solid"},
  "marker": {
    "color": "#1f77b4" | [...],   // scalar or one value per point
    "size": 6 | [...],            // diameter, scalar or per point
    "opacity": 1.0,
    "colorscale": [[0, "#fff"], [1, "#000"]], "cmin": 0, "cmax": 1,
    "sizeref": 1, "sizemin": 0, "sizemode": "diameter|area"
  }
}

Only light fall-back values are applied here; absent keys never raise.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from trace_layers.scales import add_opacity

# Configuration - Edit these values as needed
DEFAULT_COLOR = '#1f77b4'
DEFAULT_LINE_WIDTH = 2
DEFAULT_MARKER_SIZE = 6
FILL_OPACITY = 0.5

@dataclass(frozen=True)
class Scalar:
    """One style value shared by every point."""

    value: Any

@dataclass(frozen=True)
class PerPoint:
    """One style value per point, aligned with lon/lat."""

    values: Tuple[Any, ...]

StyleValue = Union[Scalar, PerPoint]

def style_value(raw: Any) -> StyleValue:
    """Resolve a raw attribute into a Scalar or PerPoint value."""
    if isinstance(raw, (list, tuple)):
        return PerPoint(tuple(raw))
    return Scalar(raw)

@dataclass(frozen=True)
class LineStyle:
    width: float = DEFAULT_LINE_WIDTH
    color: Any = DEFAULT_COLOR
    # read but not translated into line-dasharray
    dash: str = 'solid'

@dataclass(frozen=True)
class MarkerStyle:
    color: StyleValue = Scalar(DEFAULT_COLOR)
    size: StyleValue = Scalar(DEFAULT_MARKER_SIZE)
    opacity: float = 1
    colorscale: Optional[List[List[Any]]] = None
    cmin: Optional[float] = None
    cmax: Optional[float] = None
    sizeref: float = 1
    sizemin: float = 0
    sizemode: str = 'diameter'

@dataclass(frozen=True)
class Trace:
    lon: Sequence[Any] = ()
    lat: Sequence[Any] = ()
    visible: Any = True
    mode: str = 'markers'
    fill: str = 'none'
    fillcolor: Any = None
    connectgaps: bool = False
    opacity: float = 1
    line: LineStyle = field(default_factory=LineStyle)
    marker: MarkerStyle = field(default_factory=MarkerStyle)

    @property
    def mode_flags(self) -> List[str]:
        return (self.mode or '').split('+')

    @property
    def has_fill(self) -> bool:
        return self.fill != 'none'

    @property
    def has_lines(self) -> bool:
        return 'lines' in self.mode_flags

    @property
    def has_markers(self) -> bool:
        return 'markers' in self.mode_flags

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Trace':
        """
        Build a Trace from a trace dictionary.

        Args:
            data: Trace attributes; nested 'line' and 'marker' are optional

        Returns:
            Trace with fall-back values for every absent attribute

        Raises:
            TypeError: If data is not a mapping
        """
        if not isinstance(data, Mapping):
            raise TypeError(f'Trace must be a mapping, got {type(data).__name__}')

        line_data = _sub_mapping(data, 'line')
        marker_data = _sub_mapping(data, 'marker')

        line = LineStyle(
            width=_get(line_data, 'width', DEFAULT_LINE_WIDTH),
            color=_get(line_data, 'color', DEFAULT_COLOR),
            dash=_get(line_data, 'dash', 'solid')
        )

        marker = MarkerStyle(
            color=style_value(_get(marker_data, 'color', line.color)),
            size=style_value(_get(marker_data, 'size', DEFAULT_MARKER_SIZE)),
            opacity=_get(marker_data, 'opacity', 1),
            colorscale=marker_data.get('colorscale'),
            cmin=marker_data.get('cmin'),
            cmax=marker_data.get('cmax'),
            sizeref=_get(marker_data, 'sizeref', 1),
            sizemin=_get(marker_data, 'sizemin', 0),
            sizemode=_get(marker_data, 'sizemode', 'diameter')
        )

        fillcolor = data.get('fillcolor')
        if fillcolor is None:
            fillcolor = add_opacity(line.color, FILL_OPACITY)

        return cls(
            lon=list(_get(data, 'lon', ())),
            lat=list(_get(data, 'lat', ())),
            visible=_get(data, 'visible', True),
            mode=_get(data, 'mode', 'markers'),
            fill=_get(data, 'fill', 'none'),
            fillcolor=fillcolor,
            connectgaps=bool(_get(data, 'connectgaps', False)),
            opacity=_get(data, 'opacity', 1),
            line=line,
            marker=marker
        )

def _sub_mapping(data: Mapping[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key)
    return dict(value) if isinstance(value, Mapping) else {}

def _get(data: Mapping[str, Any], key: str, default: Any) -> Any:
    # explicit nulls fall back like absent keys
    value = data.get(key)
    return default if value is None else value
