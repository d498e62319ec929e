"""Exceptions raised while downloading and converting routes."""


class SchweizmobilError(Exception):
    """Base class for all route download errors."""


class ValidationError(SchweizmobilError, ValueError):
    """User input rejected before any network activity."""


class TransportError(SchweizmobilError):
    """The remote service could not be reached or answered with an HTTP error."""


class MalformedResponseError(SchweizmobilError):
    """The response body is not the JSON structure the service normally returns."""


class RouteNotFoundError(SchweizmobilError):
    """The service answered, but without a usable route geometry."""

    def __init__(self, category, number: int, reason: str = "route"):
        self.category = category
        self.number = number
        label = getattr(category, "value", category)
        super().__init__(f"No {reason} found for {label}-{number}")
