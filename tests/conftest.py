# ABOUTME: Shared test fixtures for the weather lookup test suite.
# ABOUTME: Provides Open-Meteo response builders and a mock HTTP client.

from unittest.mock import AsyncMock

import httpx
import pytest


def json_response(json_data: dict, status_code: int = 200) -> httpx.Response:
    """Build an httpx.Response bound to a request so raise_for_status works."""
    return httpx.Response(status_code=status_code, json=json_data, request=httpx.Request("GET", "https://test"))


@pytest.fixture
def make_response():
    return json_response


@pytest.fixture
def mock_client() -> AsyncMock:
    """An AsyncMock httpx client; tests set get.return_value or get.side_effect."""
    return AsyncMock(spec=httpx.AsyncClient)


@pytest.fixture
def forecast_json() -> dict:
    """A 5-day Open-Meteo forecast body starting on a Wednesday."""
    return {
        "latitude": 32.24,
        "longitude": 77.19,
        "timezone": "Asia/Kolkata",
        "current": {
            "temperature_2m": 12.6,
            "relative_humidity_2m": 54.0,
            "wind_speed_10m": 7.4,
            "weather_code": 2,
        },
        "daily": {
            "time": ["2025-01-15", "2025-01-16", "2025-01-17", "2025-01-18", "2025-01-19"],
            "weather_code": [0, 3, 61, 73, 45],
            "temperature_2m_max": [14.5, 13.2, 9.8, 4.1, 8.0],
            "temperature_2m_min": [2.4, 1.5, -0.5, -3.6, -1.0],
        },
    }
