# ABOUTME: Pydantic BaseModels for geocoding candidates, forecast payloads, and API responses.
# ABOUTME: Defines structured types for Open-Meteo data and the normalized weather shape.

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Condition = Literal["sunny", "cloudy", "rainy", "snowy", "windy"]


class GeoCandidate(BaseModel):
    """One raw match returned by the Open-Meteo geocoding API."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    admin1: str | None = None
    country: str | None = None
    country_code: str | None = None
    latitude: float
    longitude: float
    population: float | None = None


class QueryParts(BaseModel):
    """Pieces of a location query derived once before geocoding."""

    model_config = ConfigDict(frozen=True)

    text: str
    first_segment: str
    region_hint: str | None = None
    normalized: str
    normalized_first: str


class ResolutionAttempt(BaseModel):
    """A single geocoding query paired with an optional country restriction."""

    model_config = ConfigDict(frozen=True)

    query: str
    country: str | None = None


class ResolvedLocation(BaseModel):
    """The single best match chosen for a location query."""

    latitude: float
    longitude: float
    label: str


class CurrentConditions(BaseModel):
    """Current snapshot from the Open-Meteo forecast endpoint."""

    temperature_2m: float | None = None
    relative_humidity_2m: float | None = None
    wind_speed_10m: float | None = None
    weather_code: int | None = None


class DailySeries(BaseModel):
    """Column-oriented daily data from the Open-Meteo forecast endpoint."""

    time: list[date] = []
    weather_code: list[int | None] = []
    temperature_2m_max: list[float | None] = []
    temperature_2m_min: list[float | None] = []


class ForecastPayload(BaseModel):
    """Parsed response from the Open-Meteo forecast endpoint."""

    current: CurrentConditions = CurrentConditions()
    daily: DailySeries = DailySeries()


class ForecastDay(BaseModel):
    """One day in the normalized forecast."""

    day: str
    condition: Condition
    high_temp: int = Field(serialization_alias="highTemp")
    low_temp: int = Field(serialization_alias="lowTemp")


class WeatherResult(BaseModel):
    """Normalized weather for a resolved location, as returned by /api/weather."""

    location: str
    condition: Condition
    temperature: int
    humidity: int
    wind_speed: int = Field(serialization_alias="windSpeed")
    forecast: list[ForecastDay] = []


class Destination(BaseModel):
    """A curated travel destination within an Indian state or union territory."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    state: str
    description: str = ""
    image: str = ""
