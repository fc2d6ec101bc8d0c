"""Categorical style value deduplication."""

import enum
import json
import math
from types import MappingProxyType
from typing import Any, Dict, Hashable, Mapping, Tuple

class PaintProperty(enum.Enum):
    """Per-feature properties carrying categorical style indices."""

    CIRCLE_COLOR = 'circle-color'
    CIRCLE_SIZE = 'circle-size'

# every NaN is one category, as the JSON text 'NaN' would be
_NAN_KEY = ('nan',)

def _key(value: Any) -> Hashable:
    """Dictionary key standing in for a raw style value."""
    if isinstance(value, float) and math.isnan(value):
        return _NAN_KEY

    # list-valued entries (e.g. [r, g, b]) still need to be dictionary keys
    if isinstance(value, (list, tuple)):
        return tuple(_key(v) for v in value)

    try:
        hash(value)
    except TypeError:
        # dicts, sets and other unhashable values are keyed by their JSON text
        try:
            return ('json', json.dumps(value, sort_keys=True, default=repr))
        except TypeError:
            return ('repr', repr(value))

    return value

class ValueIndexer:
    """
    Assign each distinct raw style value the position of its first point.

    Indices are raw point positions rather than a dense 0..n-1 range, so a
    stop table keyed by them matches the index stored on each feature.
    One value map is kept per paint property.
    """

    def __init__(self):
        self._values: Dict[PaintProperty, Dict[Hashable, Tuple[int, Any]]] = {
            prop: {} for prop in PaintProperty
        }

    def index(self, prop: PaintProperty, value: Any, position: int) -> int:
        """Return the index for value, recording position if it is new."""
        values = self._values[prop]
        key = _key(value)

        if key not in values:
            values[key] = (position, value)

        return values[key][0]

    def mapping(self, prop: PaintProperty) -> Mapping[Hashable, int]:
        """Read-only snapshot of the value key -> index map for prop."""
        return MappingProxyType({key: index for key, (index, _) in self._values[prop].items()})

    def entries(self, prop: PaintProperty) -> Tuple[Tuple[Any, int], ...]:
        """(first raw value, index) for every distinct value of prop."""
        return tuple((value, index) for index, value in self._values[prop].values())

    def __len__(self):
        return sum(len(values) for values in self._values.values())
