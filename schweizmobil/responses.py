"""Pydantic models for the JSON bodies returned by the SwitzerlandMobility API.

Responses are validated into these models straight after decoding so that the
rest of the package never touches raw dictionaries.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, field_validator


class RawGeometry(BaseModel):
    # rings of [easting, northing, ...] coordinates
    coordinates: Optional[List[List[List[float]]]] = None

    @field_validator("coordinates")
    @classmethod
    def validate_coords(cls, rings: Optional[List[List[List[float]]]]):
        if rings is None:
            return rings
        for ring in rings:
            for coord in ring:
                if len(coord) < 2:
                    raise ValueError(f"coordinate needs easting and northing: {coord}")
        return rings

    def first_ring(self) -> List[List[float]]:
        if not self.coordinates:
            return []
        return self.coordinates[0]


class RawFeature(BaseModel):
    geometry: Optional[RawGeometry] = None


class RawFeatureCollection(BaseModel):
    features: Optional[List[Optional[RawFeature]]] = None


class RawRouteDetails(BaseModel):
    title: Optional[str] = None
