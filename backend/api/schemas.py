"""Request schemas for the prediction API."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from bitecast.entities import LocationQuery, MoonPhase


class PredictRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    location: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    water_temperature: Optional[float] = None
    time_of_day: str = "08:00"
    moon_phase: MoonPhase = MoonPhase.FULL

    @model_validator(mode="after")
    def _one_location_form(self) -> "PredictRequest":
        if self.location is not None:
            self.location = self.location.strip()
        has_name = bool(self.location)
        has_coordinates = self.latitude is not None and self.longitude is not None
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be provided together")
        if has_name == has_coordinates:
            raise ValueError("provide either a location or latitude/longitude")
        return self

    def to_query(self) -> LocationQuery:
        if self.location:
            return LocationQuery.by_name(self.location)
        return LocationQuery.by_coordinates(self.latitude, self.longitude)


__all__ = ["PredictRequest"]
