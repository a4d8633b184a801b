"""Interfaces for the external collaborators of the resolver."""
from __future__ import annotations

from typing import Protocol, Tuple

from .entities import WeatherObservation


class WeatherProvider(Protocol):
    """A data source capable of returning current weather observations."""

    name: str

    def current_by_name(self, name: str) -> WeatherObservation:
        """Fetch the observation for a free-text place name."""
        ...

    def current_by_coordinates(self, latitude: float, longitude: float) -> WeatherObservation:
        """Fetch the observation for the provided coordinates."""
        ...


class Geolocator(Protocol):
    """A platform service returning the current coordinates."""

    name: str

    def locate(self) -> Tuple[float, float]:
        """Return ``(latitude, longitude)`` or raise a geolocation error."""
        ...
