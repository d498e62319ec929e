"""Data loading functionality for SwitzerlandMobility routes."""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

import pydantic
import requests

from .config import BASE_URL, LANG_CODE, DEFAULT_TIMEOUT, ROUTE_DETAILS_PATH, GEOMETRY_PATH
from .errors import TransportError, MalformedResponseError, RouteNotFoundError
from .interfaces import ProjectedPoint, RouteMetadata
from .responses import RawFeatureCollection, RawRouteDetails
from .route_types import RouteIdentifier, RouteType

logger = logging.getLogger(__name__)

# Returned by _get_json when the service answers 404
NOT_FOUND = object()


class RouteDataClient:
    """Class to query route details and geometry from the service."""

    def __init__(self, base_url: str = BASE_URL, lang: str = LANG_CODE,
                 timeout: Optional[float] = DEFAULT_TIMEOUT):
        """Initialize the client.

        Args:
            base_url: API root, ending with a slash
            lang: Language code for route titles
            timeout: Seconds to wait for the service, None for the transport default
        """
        self.base_url = base_url
        self.lang = lang
        self.timeout = timeout

    def route_details_url(self, route_number: int) -> str:
        return self.base_url + ROUTE_DETAILS_PATH.format(route_number=route_number)

    def geometry_url(self) -> str:
        return self.base_url + GEOMETRY_PATH

    def fetch_metadata(self, route_number: int) -> RouteMetadata:
        """Fetch the descriptive data of a route.

        Args:
            route_number: Route number, without its category

        Returns:
            RouteMetadata whose title is None when the service has none
        """
        url = self.route_details_url(route_number)
        data = self._get_json(url, params={'lang': self.lang})
        if data is NOT_FOUND:
            return RouteMetadata()

        try:
            details = RawRouteDetails.model_validate(data)
        except pydantic.ValidationError as e:
            logger.error(f"Unexpected route details from {url}: {e}")
            raise MalformedResponseError(f"Unexpected route details structure: {e}") from e

        title = details.title.strip() if details.title else None
        logger.debug(f"Route {route_number} title: {title!r}")
        return RouteMetadata(title=title or None)

    def fetch_geometry(self, category: RouteType, route_number: int) -> List[ProjectedPoint]:
        """Fetch the LV03 coordinates of a route.

        Args:
            category: Route category, selects the service layer
            route_number: Route number within the category

        Returns:
            Points of the first ring of the first feature, in service order

        Raises:
            RouteNotFoundError: If the response holds no usable geometry
        """
        data = self._get_json(self.geometry_url(), params={category.layer: route_number})
        if data is NOT_FOUND:
            raise RouteNotFoundError(category, route_number, reason="route")

        try:
            collection = RawFeatureCollection.model_validate(data)
        except pydantic.ValidationError as e:
            logger.error(f"Unexpected geometry for {category.value}-{route_number}: {e}")
            raise MalformedResponseError(f"Unexpected geometry structure: {e}") from e

        if not collection.features:
            raise RouteNotFoundError(category, route_number, reason="route")

        feature = collection.features[0]
        ring = []
        if feature is not None and feature.geometry is not None:
            ring = feature.geometry.first_ring()
        if not ring:
            raise RouteNotFoundError(category, route_number, reason="points")

        points = [ProjectedPoint(easting=coord[0], northing=coord[1]) for coord in ring]
        logger.info(f"Fetched {len(points)} points for {category.value}-{route_number}")
        return points

    def fetch_route(self, identifier: RouteIdentifier,
                    with_metadata: bool = True) -> Tuple[RouteMetadata, List[ProjectedPoint]]:
        """Fetch details and geometry of a route, one after the other."""
        if with_metadata:
            metadata = self.fetch_metadata(identifier.number)
        else:
            metadata = RouteMetadata()
        points = self.fetch_geometry(identifier.category, identifier.number)
        return metadata, points

    def _get_json(self, url: str, params: Dict[str, Any]) -> Any:
        """GET a JSON body; returns NOT_FOUND when the service answers 404."""
        logger.debug(f"GET {url} params={params}")

        try:
            response = requests.get(url, params=params, timeout=self.timeout)
            if response.status_code == 404:
                logger.debug(f"{url} answered 404")
                return NOT_FOUND
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Request to {url} failed: {str(e)}")
            raise TransportError(str(e)) from e

        try:
            data = json.loads(response.content)
        except ValueError as e:
            logger.error(f"Response from {url} is not JSON: {str(e)}")
            raise MalformedResponseError(f"Response is not valid JSON: {e}") from e

        logger.debug(f"Decoded {len(response.content)} bytes from {url}")
        return data
