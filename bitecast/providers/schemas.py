"""Pydantic schemas for the OpenWeather current weather payload.

Only the fields the scorer depends on are declared; everything else in the
provider response is ignored.
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)


class Coordinates(_Lenient):
    lat: float
    lon: float


class MainBlock(_Lenient):
    temp: float


class ConditionBlock(_Lenient):
    main: str
    description: str = ""


class WindBlock(_Lenient):
    speed: float = Field(ge=0)


class CurrentWeatherPayload(_Lenient):
    name: str
    main: MainBlock
    weather: List[ConditionBlock] = Field(min_length=1)
    wind: WindBlock
    dt: Optional[int] = None
    coord: Optional[Coordinates] = None

    @property
    def primary(self) -> ConditionBlock:
        return self.weather[0]


class IpLocationPayload(_Lenient):
    status: str = "success"
    message: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None


__all__ = ["CurrentWeatherPayload", "IpLocationPayload"]
