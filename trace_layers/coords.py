"""
Assemble [lon, lat] coordinate runs from a trace's point sequence.

Invalid points (missing or non-finite components) are gaps. With
``connectgaps`` off every gap closes the current run; with it on gaps
are skipped and all valid points land in a single run.
"""

import math
import numbers
from typing import Any, List, Optional, Sequence

def to_number(value: Any) -> Optional[float]:
    """Return value as a finite number, or None if it isn't one."""
    if isinstance(value, bool):
        return None

    if isinstance(value, numbers.Real):
        number = value if isinstance(value, (int, float)) else float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None

    return number

def to_lonlat(lon: Any, lat: Any) -> Optional[List[float]]:
    """Return [lon, lat] as numbers if both are valid, else None."""
    lon_value = to_number(lon)
    lat_value = to_number(lat)

    if lon_value is None or lat_value is None:
        return None

    return [lon_value, lat_value]

def assemble_coordinates(lon: Sequence[Any], lat: Sequence[Any],
                         connectgaps: bool = False) -> List[List[List[float]]]:
    """
    Split the point sequence into coordinate runs.

    Args:
        lon: Longitudes, same length as lat
        lat: Latitudes
        connectgaps: Skip invalid points instead of breaking the run

    Returns:
        List of runs, each a list of [lon, lat] pairs. Always holds at
        least one run, which is empty when no point is valid.
    """
    coords = []
    line_string = []

    for lon_value, lat_value in zip(lon, lat):
        position = to_lonlat(lon_value, lat_value)

        if position is not None:
            line_string.append(position)
        elif not connectgaps and line_string:
            coords.append(line_string)
            line_string = []

    coords.append(line_string)

    return coords
