"""Geolocation capabilities used to find the caller's current position.

Failures are reported with the same categories a browser geolocation API
uses: permission denied, position unavailable and timeout. Anything else is
an :class:`UnknownLocationError`.
"""
from __future__ import annotations

from typing import Dict, Optional, Tuple, Type

import requests
from pydantic import ValidationError

from .base import HttpProvider
from .schemas import IpLocationPayload
from ..abstractions import Geolocator
from ..exceptions import (
    GeolocationError,
    PermissionDenied,
    PositionUnavailable,
    Timeout,
    UnknownLocationError,
)


PERMISSION_DENIED = PermissionDenied.code
POSITION_UNAVAILABLE = PositionUnavailable.code
TIMEOUT = Timeout.code

_ERRORS_BY_CODE: Dict[int, Type[GeolocationError]] = {
    error.code: error for error in (PermissionDenied, PositionUnavailable, Timeout)
}


def geolocation_error_for(code: Optional[int]) -> GeolocationError:
    """Map a native geolocation error code to its exception."""
    return _ERRORS_BY_CODE.get(code, UnknownLocationError)()


class StaticGeolocator(Geolocator):
    """Always reports the configured position."""

    name = "static"

    def __init__(self, latitude: float, longitude: float) -> None:
        self.latitude = float(latitude)
        self.longitude = float(longitude)

    def locate(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)


class IpGeolocator(HttpProvider, Geolocator):
    """Locate the host through an ip-api compatible JSON endpoint."""

    name = "ip-api"
    base_url = "http://ip-api.com/json/"

    def __init__(self, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.base_url = base_url or self.base_url

    def locate(self) -> Tuple[float, float]:
        try:
            response = self.session.get(
                self.base_url,
                params={"fields": "status,message,lat,lon"},
                timeout=self.request_config.timeout,
            )
        except requests.Timeout as exc:
            self._log.warning("Geolocation request timed out")
            raise geolocation_error_for(TIMEOUT) from exc
        except requests.RequestException as exc:
            self._log.error("Geolocation request failed", exc_info=exc)
            raise UnknownLocationError() from exc

        if response.status_code in (401, 403):
            self._log.warning("Geolocation refused: HTTP %s", response.status_code)
            raise geolocation_error_for(PERMISSION_DENIED)
        if response.status_code >= 400:
            self._log.error("Geolocation returned %s: %s", response.status_code, response.text)
            raise UnknownLocationError()

        try:
            payload = IpLocationPayload.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            self._log.error("Failed to decode geolocation payload", exc_info=exc)
            raise UnknownLocationError() from exc

        if payload.status != "success" or payload.lat is None or payload.lon is None:
            self._log.warning("Position unavailable: %s", payload.message)
            raise geolocation_error_for(POSITION_UNAVAILABLE)
        return (payload.lat, payload.lon)


__all__ = [
    "IpGeolocator",
    "PERMISSION_DENIED",
    "POSITION_UNAVAILABLE",
    "StaticGeolocator",
    "TIMEOUT",
    "geolocation_error_for",
]
