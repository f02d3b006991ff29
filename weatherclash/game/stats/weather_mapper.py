"""
Weather normalization at the engine boundary.

Converts raw weather payloads (OpenWeatherMap responses, matchup files,
wire dictionaries) into WeatherObservation records, and checks that
observations are inside the ranges the stat deriver expects.
"""
import math
from typing import Any

from ...core.data.data_structures import WeatherObservation, round_half_up
from ...core.data.game_enums import WeatherCondition


class WeatherDataError(ValueError):
    """Raised when weather input is malformed or out of range."""


# Substring -> condition, checked in order
_CONDITION_KEYWORDS: list[tuple[tuple[str, ...], WeatherCondition]] = [
    (("clear",), WeatherCondition.CLEAR),
    (("cloud",), WeatherCondition.CLOUDS),
    (("rain",), WeatherCondition.RAIN),
    (("drizzle",), WeatherCondition.DRIZZLE),
    (("thunder", "storm"), WeatherCondition.THUNDERSTORM),
    (("snow",), WeatherCondition.SNOW),
    (("mist",), WeatherCondition.MIST),
    (("fog", "haze"), WeatherCondition.FOG),
]

DEFAULT_CONDITION = WeatherCondition.CLOUDS

_NUMERIC_FIELDS = ("temperature", "humidity", "pressure", "wind_speed", "clouds", "visibility")


def normalize_condition(condition: str) -> WeatherCondition:
    """Map a free-form condition string onto a WeatherCondition.

    Unknown conditions default to Clouds.
    """
    normalized = condition.lower()
    for keywords, weather in _CONDITION_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return weather
    return DEFAULT_CONDITION


def kelvin_to_celsius(kelvin: float) -> float:
    """Convert Kelvin to Celsius, rounded to one decimal.

    NaN and infinities pass through unrounded for validation to reject.
    """
    if not math.isfinite(kelvin):
        return kelvin
    return round_half_up((kelvin - 273.15) * 10) / 10


def validate_observation(observation: WeatherObservation) -> WeatherObservation:
    """Check an observation is inside the declared ranges.

    Returns:
        The observation unchanged, for chaining

    Raises:
        WeatherDataError: If any field is not a finite number or is out of range
    """
    errors = []
    for name in _NUMERIC_FIELDS:
        value = getattr(observation, name)
        if not math.isfinite(value):
            errors.append(f"{name} must be a finite number, got {value}")
    if errors:
        raise WeatherDataError("; ".join(errors))

    if not 0 <= observation.humidity <= 100:
        errors.append(f"humidity must be within 0-100, got {observation.humidity}")
    if not 0 <= observation.clouds <= 100:
        errors.append(f"clouds must be within 0-100, got {observation.clouds}")
    if observation.pressure <= 0:
        errors.append(f"pressure must be positive, got {observation.pressure}")
    if observation.wind_speed < 0:
        errors.append(f"wind speed cannot be negative, got {observation.wind_speed}")
    if observation.visibility < 0:
        errors.append(f"visibility cannot be negative, got {observation.visibility}")

    if errors:
        raise WeatherDataError("; ".join(errors))
    return observation


def observation_from_openweather(payload: dict[str, Any]) -> WeatherObservation:
    """Build an observation from an OpenWeatherMap current weather response.

    Raises:
        WeatherDataError: If required fields are missing or malformed
    """
    try:
        main_weather = payload["weather"][0]
        observation = WeatherObservation(
            temperature=kelvin_to_celsius(float(payload["main"]["temp"])),
            humidity=float(payload["main"]["humidity"]),
            pressure=float(payload["main"]["pressure"]),
            wind_speed=float(payload["wind"]["speed"]),
            clouds=float(payload["clouds"]["all"]),
            condition=normalize_condition(str(main_weather["main"])),
            visibility=float(payload["visibility"]),
            description=str(main_weather.get("description", "")),
        )
    except (KeyError, IndexError) as e:
        raise WeatherDataError(f"Weather payload is missing field: {e}")
    except (TypeError, ValueError) as e:
        raise WeatherDataError(f"Weather payload has an invalid value: {e}")

    return validate_observation(observation)


def observation_from_dict(data: dict[str, Any]) -> WeatherObservation:
    """Build an observation from a plain mapping.

    Accepts both the wire keys (``temp``, ``windSpeed``) and snake_case keys
    (``temperature``, ``wind_speed``). Temperatures are Celsius.

    Raises:
        WeatherDataError: If required fields are missing or malformed
    """
    def pick(*keys: str) -> Any:
        for key in keys:
            if key in data:
                return data[key]
        raise WeatherDataError(f"Weather data is missing field: {keys[0]}")

    try:
        observation = WeatherObservation(
            temperature=float(pick("temperature", "temp")),
            humidity=float(pick("humidity")),
            pressure=float(pick("pressure")),
            wind_speed=float(pick("wind_speed", "windSpeed")),
            clouds=float(pick("clouds")),
            condition=normalize_condition(str(pick("condition"))),
            visibility=float(pick("visibility")),
            description=str(data.get("description", "")),
        )
    except WeatherDataError:
        raise
    except (TypeError, ValueError) as e:
        raise WeatherDataError(f"Weather data has an invalid value: {e}")

    return validate_observation(observation)
