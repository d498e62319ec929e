"""Route type definitions for SwitzerlandMobility routes."""

import re
from dataclasses import dataclass
from enum import Enum

from .errors import ValidationError

ROUTE_NUMBER_PATTERN = re.compile(r'[0-9]+')


class RouteType(Enum):
    """Route categories and the service layer each one is queried from."""
    NATIONAL = "national"
    REGIONAL = "regional"
    LOCAL = "local"
    SNOWSHOE_LOCAL = "snowshoe-local"

    @property
    def layer(self) -> str:
        """Query parameter name the service uses for this category."""
        return _LAYERS[self]

    @classmethod
    def tokens(cls) -> str:
        return "|".join(member.value for member in cls)

    @classmethod
    def from_token(cls, token: str) -> "RouteType":
        try:
            return cls(token)
        except ValueError:
            raise ValidationError(f"{token} is not <{cls.tokens()}>") from None


_LAYERS = {
    RouteType.NATIONAL: "WanderlandRoutenNational",
    RouteType.REGIONAL: "WanderlandRoutenRegional",
    RouteType.LOCAL: "WanderlandRoutenLokal",
    RouteType.SNOWSHOE_LOCAL: "SnowshoeRoutenLokal",
}


@dataclass(frozen=True)
class RouteIdentifier:
    """A route category together with its route number."""
    category: RouteType
    number: int

    def __post_init__(self):
        if not isinstance(self.category, RouteType):
            raise ValidationError(f"{self.category} is not <{RouteType.tokens()}>")
        if isinstance(self.number, bool) or not isinstance(self.number, int) or self.number < 1:
            raise ValidationError(f"invalid route number: {self.number}")

    @classmethod
    def parse(cls, category_token: str, number_token: str) -> "RouteIdentifier":
        """Build an identifier from raw command line tokens.

        Args:
            category_token: One of national, regional, local, snowshoe-local
            number_token: Route number, digits only

        Returns:
            The validated identifier

        Raises:
            ValidationError: If either token is unacceptable
        """
        category = RouteType.from_token(category_token)
        token = "" if number_token is None else str(number_token)
        if not ROUTE_NUMBER_PATTERN.fullmatch(token):
            raise ValidationError(f"invalid route number: {number_token}")
        return cls(category, int(token))

    @property
    def name(self) -> str:
        """Fallback route name, e.g. ``national-1``."""
        return f"{self.category.value}-{self.number}"
