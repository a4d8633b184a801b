"""Management command to score fishing conditions using the same stack as the API."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from backend.api.views import get_resolver
from bitecast.entities import MoonPhase, PredictionInput
from bitecast.exceptions import InvalidInput
from bitecast.services.session import PredictionSession


class Command(BaseCommand):
    help = "Fetch current weather for a location and print the bite prediction"

    def add_arguments(self, parser) -> None:  # noqa: D401
        location = parser.add_mutually_exclusive_group(required=True)
        location.add_argument("--city", type=str, help="Place name")
        location.add_argument("--lat", type=float, help="Latitude (requires --lon)")
        location.add_argument("--geolocate", action="store_true", help="Locate this machine")
        parser.add_argument("--lon", type=float, help="Longitude")
        parser.add_argument("--water-temp", type=float, dest="water_temp", help="Override water temperature (C)")
        parser.add_argument("--time", type=str, default="08:00", help="Time of day, HH:MM")
        parser.add_argument(
            "--moon",
            type=str,
            default=MoonPhase.FULL.value,
            choices=[phase.value for phase in MoonPhase],
            help="Moon phase",
        )

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        try:
            prediction_input = PredictionInput(time_of_day=options["time"], moon_phase=options["moon"])
        except InvalidInput as exc:
            raise CommandError(exc.message) from exc

        if options.get("lon") is not None and options.get("lat") is None:
            raise CommandError("--lon is only valid together with --lat")

        session = PredictionSession(get_resolver(), prediction_input=prediction_input)
        if options.get("geolocate"):
            fetched = session.geolocate()
        elif options.get("city") is not None:
            fetched = session.fetch_weather(options["city"])
        else:
            if options.get("lon") is None:
                raise CommandError("--lon is required together with --lat")
            fetched = session.fetch_weather_at(options["lat"], options["lon"])
        if not fetched:
            raise CommandError(session.error)

        if options.get("water_temp") is not None:
            session.update_input(water_temperature_c=options["water_temp"])
        if not session.predict():
            raise CommandError(session.error)
        self.stdout.write(json.dumps(session.snapshot()))
