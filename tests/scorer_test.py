from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from itertools import product

import pytest

from bitecast.entities import MoonPhase, PredictionInput, Tier, WeatherObservation
from bitecast.exceptions import InvalidInput, MissingObservation
from bitecast.services.scorer import clamp, score_bite, tier_for


def make_observation(condition: str = "Clouds", wind: float = 7.0) -> WeatherObservation:
    return WeatherObservation(
        name="Lake Placid",
        temperature_c=15.0,
        condition=condition,
        description=condition.lower(),
        wind_speed_ms=wind,
        observed_at=datetime(2024, 6, 1, tzinfo=timezone.utc),
        source="test",
    )


# 13:00 and a half moon contribute nothing, clouds +5 and wind 7 m/s 0
NEUTRAL = PredictionInput(water_temperature_c=10, time_of_day="13:00", moon_phase="half")


def breakdown_of(prediction_input, observation) -> dict:
    return dict(score_bite(prediction_input, observation).breakdown)


def test_scenario_a_clamps_to_100():
    prediction = score_bite(
        PredictionInput(water_temperature_c=20, time_of_day="08:00", moon_phase="full"),
        make_observation("Clear", wind=3),
    )

    assert prediction.raw_score == 115
    assert prediction.score == 100
    assert prediction.tier is Tier.EXCELLENT


def test_scenario_b_poor_conditions():
    prediction = score_bite(
        PredictionInput(water_temperature_c=10, time_of_day="13:00", moon_phase="new"),
        make_observation("Rain", wind=12),
    )

    assert prediction.score == 25
    assert prediction.tier is Tier.POOR


def test_missing_observation_is_refused():
    with pytest.raises(MissingObservation) as excinfo:
        score_bite(PredictionInput(), None)

    assert excinfo.value.message == "Please fetch weather data first"


@pytest.mark.parametrize("temperature", [18, 18.0, 20.5, 24, 24.0])
def test_water_temperature_inside_band(temperature):
    prediction_input = replace(NEUTRAL, water_temperature_c=temperature)

    assert breakdown_of(prediction_input, make_observation())["water_temperature"] == 20
    assert score_bite(prediction_input, make_observation()).score == 75


@pytest.mark.parametrize("temperature", [-5, 0, 17.99, 24.01, 30, 40])
def test_water_temperature_outside_band(temperature):
    prediction_input = replace(NEUTRAL, water_temperature_c=temperature)

    assert breakdown_of(prediction_input, make_observation())["water_temperature"] == 0
    assert score_bite(prediction_input, make_observation()).score == 55


def test_time_of_day_windows():
    rewarded = {6, 7, 8, 9, 10, 16, 17, 18, 19}
    for hour in range(24):
        prediction_input = replace(NEUTRAL, time_of_day=f"{hour:02d}:30")
        expected = 15 if hour in rewarded else 0
        assert breakdown_of(prediction_input, make_observation())["time_of_day"] == expected, hour


def test_time_of_day_uses_only_the_hour():
    early = replace(NEUTRAL, time_of_day="10:59")
    late = replace(NEUTRAL, time_of_day="5:59")

    assert breakdown_of(early, make_observation())["time_of_day"] == 15
    assert breakdown_of(late, make_observation())["time_of_day"] == 0


@pytest.mark.parametrize(
    "condition, expected",
    [
        ("Clear", 10),
        ("CLEAR", 10),
        ("Clouds", 5),
        ("scattered clouds", 5),
        ("Rain", -10),
        ("Freezing rain", -10),
        ("clear with clouds and rain", 10),
        ("clouds then rain", 5),
        ("Snow", 0),
        ("Mist", 0),
        ("", 0),
    ],
)
def test_condition_priority(condition, expected):
    assert breakdown_of(NEUTRAL, make_observation(condition))["weather"] == expected


@pytest.mark.parametrize(
    "wind, expected",
    [(0, 10), (4.99, 10), (5, 0), (5.01, 0), (10, 0), (10.01, -10), (25, -10)],
)
def test_wind_bands(wind, expected):
    assert breakdown_of(NEUTRAL, make_observation(wind=wind))["wind"] == expected


@pytest.mark.parametrize(
    "phase, expected",
    [(MoonPhase.FULL, 10), (MoonPhase.HALF, 0), (MoonPhase.NEW, -5), ("full", 10), ("new", -5)],
)
def test_moon_phase(phase, expected):
    prediction_input = replace(NEUTRAL, moon_phase=phase)

    assert breakdown_of(prediction_input, make_observation())["moon_phase"] == expected


@pytest.mark.parametrize(
    "score, tier",
    [(0, Tier.POOR), (40, Tier.POOR), (41, Tier.MODERATE), (70, Tier.MODERATE), (71, Tier.EXCELLENT), (100, Tier.EXCELLENT)],
)
def test_tier_boundaries(score, tier):
    assert tier_for(score) is tier


def test_score_is_always_bounded():
    temperatures = [0, 20]
    times = ["03:00", "08:00", "17:00"]
    phases = list(MoonPhase)
    conditions = ["Clear", "Clouds", "Rain", "Haze"]
    winds = [1, 7, 15]
    for temperature, time_of_day, phase, condition, wind in product(temperatures, times, phases, conditions, winds):
        prediction_input = PredictionInput(water_temperature_c=temperature, time_of_day=time_of_day, moon_phase=phase)
        prediction = score_bite(prediction_input, make_observation(condition, wind))
        assert isinstance(prediction.score, int)
        assert 0 <= prediction.score <= 100
        assert prediction.tier is tier_for(prediction.score)
        assert prediction.raw_score == 50 + sum(delta for _, delta in prediction.breakdown)


@pytest.mark.parametrize("value, expected", [(-15, 0), (0, 0), (55, 55), (100, 100), (115, 100)])
def test_clamp(value, expected):
    assert clamp(value) == expected


def test_lowest_reachable_score():
    prediction = score_bite(
        PredictionInput(water_temperature_c=2, time_of_day="23:00", moon_phase="new"),
        make_observation("Rain", wind=20),
    )

    assert prediction.raw_score == 25
    assert prediction.score == 25


def test_scoring_is_deterministic():
    prediction_input = PredictionInput(water_temperature_c=21, time_of_day="17:15", moon_phase="half")
    observation = make_observation("Clouds", wind=6)

    first = score_bite(prediction_input, observation)
    second = score_bite(prediction_input, observation)

    assert first == second
    assert first.score == 90


def test_prediction_as_dict():
    prediction = score_bite(NEUTRAL, make_observation())

    assert prediction.as_dict() == {
        "score": 55,
        "tier": "moderate",
        "raw_score": 55,
        "breakdown": {
            "water_temperature": 0,
            "time_of_day": 0,
            "weather": 5,
            "wind": 0,
            "moon_phase": 0,
        },
    }


def test_prediction_input_defaults():
    prediction_input = PredictionInput()

    assert prediction_input.water_temperature_c == 20.0
    assert prediction_input.time_of_day == "08:00"
    assert prediction_input.moon_phase is MoonPhase.FULL
    assert prediction_input.hour == 8


@pytest.mark.parametrize("time_of_day", ["", "8", "24:00", "12:60", "noon", "08-00"])
def test_prediction_input_rejects_bad_time(time_of_day):
    with pytest.raises(InvalidInput):
        PredictionInput(time_of_day=time_of_day)


def test_prediction_input_rejects_unknown_moon_phase():
    with pytest.raises(InvalidInput):
        PredictionInput(moon_phase="gibbous")
