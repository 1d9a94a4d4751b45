# ABOUTME: Service layer for the Open-Meteo forecast API and response normalization.
# ABOUTME: Maps weather codes to coarse conditions and reshapes daily columns into a 5-day forecast.

import math
from datetime import date

import httpx
from pydantic import ValidationError

from src.errors import InputInvalid, ProviderError
from src.geocoding import resolve
from src.models import Condition, DailySeries, ForecastDay, ForecastPayload, WeatherResult

FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
FORECAST_DAYS = 5

CURRENT_PARAMS = "temperature_2m,relative_humidity_2m,wind_speed_10m,weather_code"
DAILY_PARAMS = "weather_code,temperature_2m_max,temperature_2m_min"


async def get_forecast(client: httpx.AsyncClient, latitude: float, longitude: float) -> ForecastPayload:
    """Fetch current conditions and a 5-day daily series from the Open-Meteo forecast API."""
    try:
        resp = await client.get(
            FORECAST_URL,
            params={
                "latitude": latitude,
                "longitude": longitude,
                "current": CURRENT_PARAMS,
                "daily": DAILY_PARAMS,
                "timezone": "auto",
                "forecast_days": FORECAST_DAYS,
            },
        )
        resp.raise_for_status()
        return ForecastPayload.model_validate(resp.json())
    except httpx.HTTPError as e:
        raise ProviderError(f"Forecast request failed for ({latitude}, {longitude}): {e}") from e
    except (ValueError, ValidationError) as e:
        raise ProviderError(f"Forecast response for ({latitude}, {longitude}) is malformed") from e


def map_weather_code(code: int | None) -> Condition:
    """Collapse a WMO weather code into sunny/cloudy/rainy/snowy, with windy as the fallback."""
    if code is None:
        return "windy"
    if code == 0:
        return "sunny"
    if 1 <= code <= 3:
        return "cloudy"
    if 51 <= code <= 67 or 80 <= code <= 82 or 95 <= code <= 99:
        return "rainy"
    if 71 <= code <= 77 or 85 <= code <= 86:
        return "snowy"
    return "windy"


def round_half_up(value: float | None) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2); None -> 0."""
    if value is None:
        return 0
    return math.floor(value + 0.5)


def day_label(index: int, day: date) -> str:
    """Label the first forecast day "Today" and the rest by weekday name."""
    if index == 0:
        return "Today"
    return day.strftime("%A")


def build_forecast_days(daily: DailySeries) -> list[ForecastDay]:
    """Turn column-oriented daily data into at most FORECAST_DAYS rows, in provider order."""
    days = []
    for i, day in enumerate(daily.time[:FORECAST_DAYS]):
        days.append(
            ForecastDay(
                day=day_label(i, day),
                condition=map_weather_code(_get_at(daily.weather_code, i)),
                high_temp=round_half_up(_get_at(daily.temperature_2m_max, i)),
                low_temp=round_half_up(_get_at(daily.temperature_2m_min, i)),
            )
        )
    return days


def normalize_weather(payload: ForecastPayload, label: str) -> WeatherResult:
    """Reshape a forecast payload into the UI-facing WeatherResult."""
    current = payload.current
    return WeatherResult(
        location=label,
        condition=map_weather_code(current.weather_code),
        temperature=round_half_up(current.temperature_2m),
        humidity=round_half_up(current.relative_humidity_2m),
        wind_speed=round_half_up(current.wind_speed_10m),
        forecast=build_forecast_days(payload.daily),
    )


async def get_weather(client: httpx.AsyncClient, latitude: float, longitude: float, label: str) -> WeatherResult:
    """Fetch and normalize weather for a coordinate. ProviderError propagates to the caller."""
    payload = await get_forecast(client, latitude, longitude)
    return normalize_weather(payload, label)


async def get_location_weather(client: httpx.AsyncClient, location_text: str | None) -> WeatherResult:
    """Resolve free-form location text and return its normalized weather.

    Raises:
        InputInvalid: The text is missing or blank; no provider is contacted.
        LocationNotFound: No geocoding attempt matched.
        ProviderError: The forecast request failed.
    """
    if not location_text or not location_text.strip():
        raise InputInvalid("Missing location query parameter")

    location = await resolve(client, location_text)
    return await get_weather(client, location.latitude, location.longitude, location.label)


def _get_at(column: list, index: int):
    """Safely get value at index from a column array, returning None if missing."""
    if index >= len(column):
        return None
    return column[index]
