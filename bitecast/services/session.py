"""Per-caller prediction state.

A :class:`PredictionSession` holds everything a presentation layer needs:
the current observation, the current prediction, a single error message and
the two busy flags. Failures never escape a session operation; they are
turned into ``error`` and the session stays ready for the next request.
"""
from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Any, Dict, Optional

from ..entities import LocationQuery, Prediction, PredictionInput, WeatherObservation
from ..exceptions import BiteCastError, ProviderError
from .resolver import EnvironmentResolver
from .scorer import score_bite


logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class PredictionSession:
    def __init__(
        self,
        resolver: EnvironmentResolver,
        prediction_input: Optional[PredictionInput] = None,
        location: str = "",
    ) -> None:
        self.resolver = resolver
        self.prediction_input = prediction_input or PredictionInput()
        self.location = location
        self.weather: Optional[WeatherObservation] = None
        self.prediction: Optional[Prediction] = None
        self.error: Optional[str] = None
        self.failure: Optional[BiteCastError] = None
        self.is_fetching_weather = False
        self.is_geolocating = False

    # Inputs -------------------------------------------------------------
    def update_input(self, **changes: Any) -> bool:
        try:
            self.prediction_input = replace(self.prediction_input, **changes)
        except BiteCastError as exc:
            self._record(exc)
            return False
        return True

    # Resolution ---------------------------------------------------------
    def fetch(self, query: LocationQuery) -> bool:
        if query.is_coordinates:
            return self.fetch_weather_at(query.latitude, query.longitude)
        return self.fetch_weather(query.name)

    def fetch_weather(self, location: Optional[str] = None) -> bool:
        if location is not None:
            self.location = location
        self.is_fetching_weather = True
        self._clear_error()
        try:
            observation = self.resolver.resolve_by_name(self.location)
        except BiteCastError as exc:
            self._fail(exc)
            return False
        finally:
            self.is_fetching_weather = False
        self._accept(observation)
        return True

    def fetch_weather_at(self, latitude: float, longitude: float) -> bool:
        self.is_fetching_weather = True
        self._clear_error()
        try:
            observation = self.resolver.resolve_by_coordinates(latitude, longitude)
        except BiteCastError as exc:
            self._fail(exc)
            return False
        finally:
            self.is_fetching_weather = False
        self.location = observation.name
        self._accept(observation)
        return True

    def geolocate(self) -> bool:
        self.is_geolocating = True
        self._clear_error()
        try:
            try:
                latitude, longitude = self.resolver.locate_current_position()
            except BiteCastError as exc:
                self._record(exc)
                logger.info("Geolocation failed: %s", exc.message)
                return False
            return self.fetch_weather_at(latitude, longitude)
        finally:
            self.is_geolocating = False

    # Scoring ------------------------------------------------------------
    def predict(self) -> bool:
        try:
            self.prediction = score_bite(self.prediction_input, self.weather)
        except BiteCastError as exc:
            self._record(exc)
            return False
        self._clear_error()
        return True

    def snapshot(self) -> Dict[str, Any]:
        return {
            "location": self.location,
            "input": {
                "water_temperature": self.prediction_input.water_temperature_c,
                "time_of_day": self.prediction_input.time_of_day,
                "moon_phase": self.prediction_input.moon_phase.value,
            },
            "weather": serialize_observation(self.weather) if self.weather else None,
            "prediction": self.prediction.as_dict() if self.prediction else None,
            "error": self.error,
            "fetching_weather": self.is_fetching_weather,
            "geolocating": self.is_geolocating,
        }

    # Helpers ------------------------------------------------------------
    def _accept(self, observation: WeatherObservation) -> None:
        self.weather = observation
        self.prediction_input = replace(
            self.prediction_input,
            water_temperature_c=round_half_up(observation.temperature_c),
        )

    def _record(self, exc: BiteCastError) -> None:
        self.error = exc.message
        self.failure = exc

    def _clear_error(self) -> None:
        self.error = None
        self.failure = None

    def _fail(self, exc: BiteCastError) -> None:
        self._record(exc)
        if isinstance(exc, ProviderError):
            self.weather = None


def serialize_observation(observation: WeatherObservation) -> Dict[str, Any]:
    return {
        "name": observation.name,
        "temperature_c": observation.temperature_c,
        "condition": observation.condition,
        "description": observation.description,
        "wind_speed_ms": observation.wind_speed_ms,
        "latitude": observation.latitude,
        "longitude": observation.longitude,
        "source": observation.source,
        "observed_at": observation.observed_at.isoformat().replace("+00:00", "Z"),
    }


__all__ = ["PredictionSession", "round_half_up", "serialize_observation"]
