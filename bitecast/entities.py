from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from .exceptions import InvalidInput


_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


def _parse_time(value: str) -> Tuple[int, int]:
    match = _TIME_RE.match(str(value))
    if not match:
        raise InvalidInput(f"Time of day must be HH:MM, got {value!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise InvalidInput(f"Time of day out of range: {value!r}")
    return hour, minute


class MoonPhase(str, Enum):
    FULL = "full"
    HALF = "half"
    NEW = "new"


class Tier(str, Enum):
    EXCELLENT = "excellent"
    MODERATE = "moderate"
    POOR = "poor"


@dataclass(frozen=True)
class LocationQuery:
    """Either a free-text place name or a (latitude, longitude) pair."""

    name: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def __post_init__(self) -> None:
        has_name = self.name is not None
        has_lat = self.latitude is not None
        has_lon = self.longitude is not None
        if has_lat != has_lon:
            raise InvalidInput("Both latitude and longitude are required")
        if has_name == has_lat:
            raise InvalidInput("Provide either a place name or coordinates")

    @classmethod
    def by_name(cls, name: str) -> "LocationQuery":
        return cls(name=name)

    @classmethod
    def by_coordinates(cls, latitude: float, longitude: float) -> "LocationQuery":
        return cls(latitude=float(latitude), longitude=float(longitude))

    @property
    def is_coordinates(self) -> bool:
        return self.latitude is not None

    @property
    def coordinates(self) -> Optional[Tuple[float, float]]:
        if not self.is_coordinates:
            return None
        return (self.latitude, self.longitude)


@dataclass(frozen=True)
class WeatherObservation:
    """Current weather snapshot for a resolved place.

    Units follow the provider's metric mode:
    - temperature in Celsius
    - wind speed in metres per second (m/s)

    ``condition`` is the provider's free-text primary category ("Clear",
    "Clouds", "Rain", ...); ``description`` is the human readable variant.
    """

    name: str
    temperature_c: float
    condition: str
    description: str
    wind_speed_ms: float
    observed_at: datetime
    source: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None


@dataclass(frozen=True)
class PredictionInput:
    """User adjustable parameters combined with an observation for scoring."""

    water_temperature_c: float = 20.0
    time_of_day: str = "08:00"
    moon_phase: MoonPhase = MoonPhase.FULL

    def __post_init__(self) -> None:
        try:
            water = float(self.water_temperature_c)
        except (TypeError, ValueError) as exc:
            raise InvalidInput("Water temperature must be a number") from exc
        try:
            moon = MoonPhase(self.moon_phase)
        except ValueError as exc:
            raise InvalidInput(f"Unknown moon phase: {self.moon_phase!r}") from exc
        object.__setattr__(self, "water_temperature_c", water)
        object.__setattr__(self, "moon_phase", moon)
        _parse_time(self.time_of_day)

    @property
    def hour(self) -> int:
        return _parse_time(self.time_of_day)[0]


@dataclass(frozen=True)
class Prediction:
    score: int
    tier: Tier
    raw_score: int
    breakdown: Tuple[Tuple[str, int], ...] = field(default_factory=tuple)

    def as_dict(self) -> dict:
        return {
            "score": self.score,
            "tier": self.tier.value,
            "raw_score": self.raw_score,
            "breakdown": dict(self.breakdown),
        }


__all__ = [
    "LocationQuery",
    "MoonPhase",
    "Prediction",
    "PredictionInput",
    "Tier",
    "WeatherObservation",
]
