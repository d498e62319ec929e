"""SwitzerlandMobility route download and GPX conversion package."""

from .errors import (
    SchweizmobilError, ValidationError, TransportError,
    MalformedResponseError, RouteNotFoundError,
)
from .interfaces import ProjectedPoint, GeoPoint, RouteMetadata, TrackSummary, ExportResult
from .route_types import RouteType, RouteIdentifier
from .data_loader import RouteDataClient
from .geo_utils import lv03_to_wgs84, project_points, summarize_track
from .gpx import build_gpx, write_gpx
from .preprocessing import create_slug
from .route_exporter import RouteExporter

__version__ = "1.0.0"
__all__ = [
    'SchweizmobilError', 'ValidationError', 'TransportError',
    'MalformedResponseError', 'RouteNotFoundError',
    'ProjectedPoint', 'GeoPoint', 'RouteMetadata', 'TrackSummary', 'ExportResult',
    'RouteType', 'RouteIdentifier', 'RouteDataClient',
    'lv03_to_wgs84', 'project_points', 'summarize_track',
    'build_gpx', 'write_gpx', 'create_slug', 'RouteExporter',
]
