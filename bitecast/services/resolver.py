from __future__ import annotations

import logging
from typing import Optional, Tuple

from ..entities import LocationQuery, WeatherObservation
from ..exceptions import GeolocationUnsupported, InvalidInput, ProviderError
from ..abstractions import Geolocator, WeatherProvider


logger = logging.getLogger(__name__)

BY_NAME_FAILURE = "Could not fetch weather data. Please check the location."
BY_COORDINATES_FAILURE = "Could not fetch weather data for your location."


class EnvironmentResolver:
    """Turn a location query into a weather observation.

    The resolver only returns values; merging an observation into scorer
    input is left to the caller.
    """

    def __init__(
        self,
        *,
        weather_provider: WeatherProvider,
        geolocator: Optional[Geolocator] = None,
    ) -> None:
        self.weather_provider = weather_provider
        self.geolocator = geolocator

    # Public API ---------------------------------------------------------
    def resolve(self, query: LocationQuery) -> WeatherObservation:
        if query.is_coordinates:
            return self.resolve_by_coordinates(query.latitude, query.longitude)
        return self.resolve_by_name(query.name)

    def resolve_by_name(self, name: str) -> WeatherObservation:
        name = (name or "").strip()
        if not name:
            raise InvalidInput()
        try:
            observation = self.weather_provider.current_by_name(name)
        except ProviderError as exc:
            logger.warning("Weather lookup for %r failed: %s", name, exc)
            raise ProviderError(BY_NAME_FAILURE) from exc
        logger.info("Resolved %r to %s", name, observation.name)
        return observation

    def resolve_by_coordinates(self, latitude: float, longitude: float) -> WeatherObservation:
        latitude, longitude = _validate_coordinates(latitude, longitude)
        try:
            observation = self.weather_provider.current_by_coordinates(latitude, longitude)
        except ProviderError as exc:
            logger.warning("Weather lookup for %.4f,%.4f failed: %s", latitude, longitude, exc)
            raise ProviderError(BY_COORDINATES_FAILURE) from exc
        logger.info("Resolved %.4f,%.4f to %s", latitude, longitude, observation.name)
        return observation

    def locate_current_position(self) -> Tuple[float, float]:
        if self.geolocator is None:
            raise GeolocationUnsupported()
        latitude, longitude = self.geolocator.locate()
        logger.info("Located current position via %s", self.geolocator.name)
        return latitude, longitude


def _validate_coordinates(latitude: float, longitude: float) -> Tuple[float, float]:
    try:
        latitude, longitude = float(latitude), float(longitude)
    except (TypeError, ValueError) as exc:
        raise InvalidInput("Latitude and longitude must be numbers") from exc
    if not -90.0 <= latitude <= 90.0:
        raise InvalidInput("Latitude must be between -90 and 90")
    if not -180.0 <= longitude <= 180.0:
        raise InvalidInput("Longitude must be between -180 and 180")
    return latitude, longitude


__all__ = ["BY_COORDINATES_FAILURE", "BY_NAME_FAILURE", "EnvironmentResolver"]
