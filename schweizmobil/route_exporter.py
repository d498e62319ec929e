"""Route export: fetch, convert and write a route as GPX."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union

from .config import MAP_EXTENSION
from .data_loader import RouteDataClient
from .geo_utils import project_points, summarize_track
from .gpx import build_gpx, write_gpx
from .interfaces import ExportResult
from .preprocessing import default_filename, resolve_output_path
from .route_types import RouteIdentifier

logger = logging.getLogger(__name__)


class RouteExporter:
    """Class to turn a route identifier into a GPX file."""

    def __init__(self, client: Optional[RouteDataClient] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        """Initialize the exporter with a data client and an optional clock for GPX timestamps."""
        self.client = client or RouteDataClient()
        self.clock = clock

    def export(self, identifier: RouteIdentifier,
               output: Optional[Union[str, Path]] = None,
               use_title: bool = True,
               with_map: bool = False) -> ExportResult:
        """Download a route and write it as GPX.

        Nothing is written unless fetching and conversion both succeed.

        Args:
            identifier: Route to export
            output: Target file or directory; defaults to a name derived from the route
            use_title: Name the track after the service title when there is one
            with_map: Also write an HTML map preview next to the GPX file

        Returns:
            ExportResult describing what was written
        """
        logger.debug(f"Exporting {identifier.name}")

        metadata, projected = self.client.fetch_route(identifier, with_metadata=use_title)
        route_name = metadata.title or identifier.name

        geo = project_points(projected)
        summary = summarize_track(projected, geo)
        document = build_gpx(geo, route_name, clock=self.clock)

        path = resolve_output_path(output, default_filename(route_name, identifier.name))
        write_gpx(path, document)
        logger.info(f"Exported {summary.point_count} points "
                    f"({summary.length_m / 1000:.2f} km) of {identifier.name} to {path}")

        map_path = None
        if with_map:
            from .visualization import create_track_map
            map_path = path.with_suffix(MAP_EXTENSION)
            if map_path == path:
                # keep the GPX when the user already named it *.html
                map_path = path.with_name(path.name + MAP_EXTENSION)
            map_path = create_track_map(geo, route_name, map_path)

        return ExportResult(
            identifier=identifier,
            route_name=route_name,
            output_path=path,
            summary=summary,
            map_path=map_path,
        )
