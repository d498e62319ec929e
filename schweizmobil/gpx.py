"""GPX track document writer."""

import logging
import re
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from .config import GPX_CREATOR, GPX_NAMESPACE, GPX_VERSION
from .interfaces import GeoPoint

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

# Characters outside the XML 1.0 Char production
XML_ILLEGAL_CHARS = re.compile('[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]')


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO 8601 UTC timestamp with milliseconds, e.g. 2024-05-01T08:30:00.000Z."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def build_gpx(points: Sequence[GeoPoint], route_name: str,
              clock: Optional[Callable[[], datetime]] = None) -> str:
    """Render a single-track GPX 1.1 document.

    Args:
        points: Track points in WGS84, written in the given order
        route_name: Used as document and track name. &, < and > are escaped;
            a double quote is valid in text content and stays literal.
            Characters XML 1.0 cannot represent are dropped.
        clock: Returns the creation time; defaults to the current UTC time

    Returns:
        The document as a string, starting with the XML declaration
    """
    created = (clock or _utc_now)()
    name = XML_ILLEGAL_CHARS.sub("", route_name)

    root = ET.Element("gpx")
    root.set("version", GPX_VERSION)
    root.set("xmlns", GPX_NAMESPACE)
    root.set("creator", GPX_CREATOR)

    metadata = ET.SubElement(root, "metadata")
    ET.SubElement(metadata, "name").text = name
    ET.SubElement(metadata, "time").text = format_timestamp(created)

    trk = ET.SubElement(root, "trk")
    ET.SubElement(trk, "name").text = name
    trkseg = ET.SubElement(trk, "trkseg")

    for point in points:
        trkpt = ET.SubElement(trkseg, "trkpt")
        trkpt.set("lat", repr(point.latitude))
        trkpt.set("lon", repr(point.longitude))

    ET.indent(root, space="  ")
    return XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"


def write_gpx(path: Union[str, Path], document: str) -> Path:
    """Write a GPX document as UTF-8, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(document, encoding="utf-8")
    logger.debug(f"Wrote {len(document)} characters to {path}")
    return path
