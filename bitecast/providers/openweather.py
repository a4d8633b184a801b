from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError

from .base import HttpProvider, ProviderError
from .schemas import CurrentWeatherPayload
from ..abstractions import WeatherProvider
from ..entities import WeatherObservation


class OpenWeatherProvider(HttpProvider, WeatherProvider):
    """Integration with the OpenWeather current weather endpoint."""

    name = "openweather"
    base_url = "https://api.openweathermap.org/data/2.5/weather"

    def __init__(self, api_key: str, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = base_url or self.base_url

    # Public API ---------------------------------------------------------
    def current_by_name(self, name: str) -> WeatherObservation:
        return self._fetch({"q": name})

    def current_by_coordinates(self, latitude: float, longitude: float) -> WeatherObservation:
        return self._fetch({"lat": latitude, "lon": longitude})

    # Helpers ------------------------------------------------------------
    def _fetch(self, query: dict) -> WeatherObservation:
        params = dict(query, appid=self.api_key, units="metric")
        response = self._request("GET", self.base_url, params=params)
        data = self._json(response)
        try:
            payload = CurrentWeatherPayload.model_validate(data)
        except ValidationError as exc:
            self._log.error("Malformed weather payload: %s", exc)
            raise ProviderError("malformed response") from exc
        return self._build_observation(payload)

    def _build_observation(self, payload: CurrentWeatherPayload) -> WeatherObservation:
        coord = payload.coord
        return WeatherObservation(
            name=payload.name,
            temperature_c=payload.main.temp,
            condition=payload.primary.main,
            description=payload.primary.description,
            wind_speed_ms=payload.wind.speed,
            observed_at=self._parse_timestamp(payload.dt),
            source=self.name,
            latitude=coord.lat if coord else None,
            longitude=coord.lon if coord else None,
        )

    def _parse_timestamp(self, value: Optional[int]) -> datetime:
        if value is None:
            return datetime.now(tz=timezone.utc)
        return datetime.fromtimestamp(int(value), tz=timezone.utc)


__all__ = ["OpenWeatherProvider"]
