"""Geographic utility functions for route conversion."""

import math
from typing import Iterable, List, Sequence, Tuple
from shapely.geometry import LineString, MultiPoint

from .interfaces import GeoPoint, ProjectedPoint, TrackSummary


def _power(base: float, exponent: int) -> float:
    """base ** exponent, overflowing to a signed infinity instead of raising."""
    try:
        return base ** exponent
    except OverflowError:
        if exponent % 2:
            return math.copysign(math.inf, base)
        return math.inf


def lv03_to_wgs84(easting: float, northing: float) -> Tuple[float, float]:
    """Convert Swiss LV03 grid coordinates to WGS84.

    Uses the swisstopo approximation formulas, accurate to about a metre
    inside Switzerland. Coordinates outside the country are not rejected,
    they simply come out less accurate.

    Args:
        easting: LV03 easting (y) in metres
        northing: LV03 northing (x) in metres

    Returns:
        Tuple of (latitude, longitude) in degrees
    """
    # Auxiliary values relative to the Bern origin, in 1000 km units
    y_aux = (easting - 600000) / 1000000
    x_aux = (northing - 200000) / 1000000

    # Results are in 10000" units, converted to degrees by * 100 / 36
    longitude = (2.6779094
                 + 4.728982 * y_aux
                 + 0.791484 * y_aux * x_aux
                 + 0.1306 * y_aux * _power(x_aux, 2)
                 - 0.0436 * _power(y_aux, 3)) * 100 / 36

    latitude = (16.9023892
                + 3.238272 * x_aux
                - 0.270978 * _power(y_aux, 2)
                - 0.002528 * _power(x_aux, 2)
                - 0.0447 * _power(y_aux, 2) * x_aux
                - 0.014 * _power(x_aux, 3)) * 100 / 36

    return latitude, longitude


def project_point(point: ProjectedPoint) -> GeoPoint:
    latitude, longitude = lv03_to_wgs84(point.easting, point.northing)
    return GeoPoint(latitude=latitude, longitude=longitude)


def project_points(points: Iterable[ProjectedPoint]) -> List[GeoPoint]:
    """Project every point, keeping order and count."""
    return [project_point(point) for point in points]


def summarize_track(projected: Sequence[ProjectedPoint], geo: Sequence[GeoPoint]) -> TrackSummary:
    """Summarize a converted track.

    Args:
        projected: Track in LV03, used for the length since the grid is metric
        geo: The same track in WGS84, used for the bounding box

    Returns:
        TrackSummary with point count, length in metres and WGS84 bounds
    """
    length_m = 0.0
    if len(projected) >= 2:
        length_m = LineString([(p.easting, p.northing) for p in projected]).length

    bounds = None
    if geo:
        min_lon, min_lat, max_lon, max_lat = MultiPoint([(p.longitude, p.latitude) for p in geo]).bounds
        bounds = (min_lat, min_lon, max_lat, max_lon)

    return TrackSummary(point_count=len(geo), length_m=length_m, bounds=bounds)
