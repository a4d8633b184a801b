"""REST API views for weather lookups and bite predictions."""
from __future__ import annotations

from functools import lru_cache

from django.conf import settings
from pydantic import ValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.api.schemas import PredictRequest
from bitecast.entities import PredictionInput
from bitecast.exceptions import InvalidInput, ProviderError
from bitecast.providers.base import RequestConfig
from bitecast.providers.geolocation import IpGeolocator
from bitecast.providers.openweather import OpenWeatherProvider
from bitecast.services.resolver import EnvironmentResolver
from bitecast.services.session import PredictionSession, serialize_observation


@lru_cache(maxsize=1)
def get_resolver() -> EnvironmentResolver:
    request_config = RequestConfig(timeout=settings.WEATHER_REQUEST_TIMEOUT)
    return EnvironmentResolver(
        weather_provider=OpenWeatherProvider(
            api_key=settings.OPENWEATHER_API_KEY,
            base_url=settings.OPENWEATHER_URL,
            request_config=request_config,
        ),
        geolocator=IpGeolocator(
            base_url=settings.GEOLOCATION_URL,
            request_config=request_config,
        ),
    )


class WeatherView(APIView):
    """Resolve a place name or coordinates to the current weather."""

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return the weather observation for ``q`` or ``lat``/``lon``."""
        params = request.query_params
        resolver = get_resolver()
        try:
            if "q" in params:
                observation = resolver.resolve_by_name(params["q"])
            elif "lat" in params and "lon" in params:
                observation = resolver.resolve_by_coordinates(params["lat"], params["lon"])
            else:
                return Response(
                    {"detail": "q or lat and lon query parameters are required"},
                    status=status.HTTP_400_BAD_REQUEST,
                )
        except InvalidInput as exc:
            return Response({"detail": exc.message}, status=status.HTTP_400_BAD_REQUEST)
        except ProviderError as exc:
            return Response({"detail": exc.message}, status=status.HTTP_502_BAD_GATEWAY)
        return Response(serialize_observation(observation), status=status.HTTP_200_OK)


class PredictView(APIView):
    """Fetch the weather for a location and score it in one request."""

    def post(self, request, *args, **kwargs):  # noqa: D401
        """Return the prediction session state after fetching and scoring."""
        try:
            body = PredictRequest.model_validate(request.data)
        except ValidationError as exc:
            return Response(
                {"detail": exc.errors(include_url=False, include_context=False, include_input=False)},
                status=status.HTTP_400_BAD_REQUEST,
            )
        try:
            prediction_input = PredictionInput(time_of_day=body.time_of_day, moon_phase=body.moon_phase)
        except InvalidInput as exc:
            return Response({"detail": exc.message}, status=status.HTTP_400_BAD_REQUEST)

        session = PredictionSession(get_resolver(), prediction_input=prediction_input)
        if not session.fetch(body.to_query()):
            if isinstance(session.failure, InvalidInput):
                return Response(session.snapshot(), status=status.HTTP_400_BAD_REQUEST)
            return Response(session.snapshot(), status=status.HTTP_502_BAD_GATEWAY)
        if body.water_temperature is not None:
            session.update_input(water_temperature_c=body.water_temperature)
        session.predict()
        return Response(session.snapshot(), status=status.HTTP_200_OK)
