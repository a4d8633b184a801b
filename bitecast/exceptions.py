from __future__ import annotations

from typing import Optional


class BiteCastError(Exception):
    """Base error carrying a message that can be shown to the user."""

    default_message = "An unexpected error occurred."

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(BiteCastError):
    default_message = "Please enter a location"


class ProviderError(BiteCastError):
    """Weather lookup failed: network, unknown place or bad response."""

    default_message = "Could not fetch weather data."


class QuotaExceeded(ProviderError):
    """Raised when a provider reports a quota/usage limit issue."""


class MissingObservation(BiteCastError):
    default_message = "Please fetch weather data first"


class GeolocationError(BiteCastError):
    """Base class for failures of the geolocation capability."""

    code: Optional[int] = None
    default_message = "An unknown error occurred."


class PermissionDenied(GeolocationError):
    code = 1
    default_message = "User denied the request for Geolocation."


class PositionUnavailable(GeolocationError):
    code = 2
    default_message = "Location information is unavailable."


class Timeout(GeolocationError):
    code = 3
    default_message = "The request to get user location timed out."


class UnknownLocationError(GeolocationError):
    pass


class GeolocationUnsupported(GeolocationError):
    default_message = "Geolocation is not supported on this system."


__all__ = [
    "BiteCastError",
    "GeolocationError",
    "GeolocationUnsupported",
    "InvalidInput",
    "MissingObservation",
    "PermissionDenied",
    "PositionUnavailable",
    "ProviderError",
    "QuotaExceeded",
    "Timeout",
    "UnknownLocationError",
]
