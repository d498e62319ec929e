"""Type definitions and interfaces for route download and conversion."""

from typing import Optional, Tuple
from dataclasses import dataclass
from pathlib import Path

from .route_types import RouteIdentifier


@dataclass(frozen=True)
class ProjectedPoint:
    """A point in the Swiss LV03 grid, in metres."""
    easting: float
    northing: float


@dataclass(frozen=True)
class GeoPoint:
    """A WGS84 point in decimal degrees."""
    latitude: float
    longitude: float


@dataclass(frozen=True)
class RouteMetadata:
    """Descriptive data about a route."""
    title: Optional[str] = None


@dataclass
class TrackSummary:
    """Information about a converted track."""
    point_count: int
    length_m: float
    bounds: Optional[Tuple[float, float, float, float]] = None  # min_lat, min_lon, max_lat, max_lon


@dataclass
class ExportResult:
    """Outcome of writing one route to disk."""
    identifier: RouteIdentifier
    route_name: str
    output_path: Path
    summary: TrackSummary
    map_path: Optional[Path] = None
