"""Bite probability scoring.

Pure functions: a base score of 50 is adjusted by independent additive
rules and clamped to 0..100. Each rule returns its signed adjustment so the
breakdown can be reported next to the score.
"""
from __future__ import annotations

from typing import Optional

from ..entities import MoonPhase, Prediction, PredictionInput, Tier, WeatherObservation
from ..exceptions import MissingObservation


BASE_SCORE = 50
MIN_SCORE = 0
MAX_SCORE = 100

IDEAL_WATER_TEMPERATURE = (18.0, 24.0)
WATER_TEMPERATURE_BONUS = 20

FEEDING_WINDOWS = ((6, 10), (16, 19))
FEEDING_WINDOW_BONUS = 15

# Checked in order, first substring match wins.
CONDITION_ADJUSTMENTS = (
    ("clear", 10),
    ("clouds", 5),
    ("rain", -10),
)

CALM_WIND_MS = 5.0
STRONG_WIND_MS = 10.0
CALM_WIND_BONUS = 10
STRONG_WIND_PENALTY = -10

MOON_ADJUSTMENTS = {
    MoonPhase.FULL: 10,
    MoonPhase.HALF: 0,
    MoonPhase.NEW: -5,
}

EXCELLENT_ABOVE = 70
MODERATE_ABOVE = 40


def water_temperature_adjustment(water_temperature_c: float) -> int:
    low, high = IDEAL_WATER_TEMPERATURE
    if low <= water_temperature_c <= high:
        return WATER_TEMPERATURE_BONUS
    return 0


def time_of_day_adjustment(hour: int) -> int:
    # windows are evaluated independently, not as a single branch
    total = 0
    for start, end in FEEDING_WINDOWS:
        if start <= hour <= end:
            total += FEEDING_WINDOW_BONUS
    return total


def condition_adjustment(condition: str) -> int:
    condition = (condition or "").lower()
    for keyword, delta in CONDITION_ADJUSTMENTS:
        if keyword in condition:
            return delta
    return 0


def wind_adjustment(wind_speed_ms: float) -> int:
    if wind_speed_ms < CALM_WIND_MS:
        return CALM_WIND_BONUS
    if wind_speed_ms > STRONG_WIND_MS:
        return STRONG_WIND_PENALTY
    return 0


def moon_phase_adjustment(moon_phase: MoonPhase) -> int:
    return MOON_ADJUSTMENTS[MoonPhase(moon_phase)]


def tier_for(score: int) -> Tier:
    if score > EXCELLENT_ABOVE:
        return Tier.EXCELLENT
    if score > MODERATE_ABOVE:
        return Tier.MODERATE
    return Tier.POOR


def clamp(value: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, value))


def score_bite(
    prediction_input: PredictionInput,
    observation: Optional[WeatherObservation],
) -> Prediction:
    """Score fishing conditions for ``prediction_input`` under ``observation``.

    Raises :class:`MissingObservation` when no observation is available; a
    prediction is only ever produced from a complete pair of inputs.
    """
    if observation is None:
        raise MissingObservation()

    breakdown = (
        ("water_temperature", water_temperature_adjustment(prediction_input.water_temperature_c)),
        ("time_of_day", time_of_day_adjustment(prediction_input.hour)),
        ("weather", condition_adjustment(observation.condition)),
        ("wind", wind_adjustment(observation.wind_speed_ms)),
        ("moon_phase", moon_phase_adjustment(prediction_input.moon_phase)),
    )
    raw_score = BASE_SCORE + sum(delta for _, delta in breakdown)
    score = clamp(raw_score)
    return Prediction(score=score, tier=tier_for(score), raw_score=raw_score, breakdown=breakdown)


__all__ = ["score_bite", "tier_for"]
