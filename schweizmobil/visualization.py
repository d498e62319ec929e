"""Visualization utilities for converted routes."""

import logging
from pathlib import Path
from typing import Sequence, Union

import folium

from .interfaces import GeoPoint

logger = logging.getLogger(__name__)


def create_track_map(points: Sequence[GeoPoint], route_name: str,
                     filename: Union[str, Path] = "route_map.html") -> Path:
    """Create an interactive map preview of a converted track.

    Args:
        points: Track points in WGS84
        route_name: Shown in the marker popups
        filename: Name of the output HTML file

    Returns:
        Path to the generated HTML file
    """
    coordinates = [(p.latitude, p.longitude) for p in points]

    if coordinates:
        m = folium.Map(location=coordinates[0], zoom_start=12)
    else:
        # Bern, roughly the middle of the LV03 grid
        m = folium.Map(location=(46.951, 7.439), zoom_start=8)

    if coordinates:
        folium.PolyLine(
            coordinates,
            weight=3,
            color='red',
            opacity=0.8,
            tooltip=route_name
        ).add_to(m)

        folium.Marker(
            coordinates[0],
            popup=f"{route_name} (start)",
            icon=folium.Icon(color='green', icon='play')
        ).add_to(m)

        folium.Marker(
            coordinates[-1],
            popup=f"{route_name} (end)",
            icon=folium.Icon(color='red', icon='stop')
        ).add_to(m)

        if len(coordinates) > 1:
            m.fit_bounds([
                [min(lat for lat, _ in coordinates), min(lon for _, lon in coordinates)],
                [max(lat for lat, _ in coordinates), max(lon for _, lon in coordinates)],
            ])

    path = Path(filename)
    path.parent.mkdir(parents=True, exist_ok=True)
    m.save(str(path))
    logger.info(f"Map saved to {path}")
    return path
