# ABOUTME: Integration tests for the Starlette API routes.
# ABOUTME: Runs the app lifespan with a mocked HTTP client and a temp destinations file.

from unittest.mock import AsyncMock

import httpx
import pytest
from starlette.testclient import TestClient

from src.web import create_app


@pytest.fixture
def api(mock_client, tmp_path):
    """A TestClient over an app whose outbound HTTP client is the shared mock."""
    app = create_app(http_client_factory=lambda: mock_client, destinations_path=tmp_path / "missing.json")
    with TestClient(app) as client:
        yield client


def _manali_geocode(make_response):
    return make_response(
        {
            "results": [
                {
                    "name": "Manali",
                    "admin1": "Himachal Pradesh",
                    "country": "India",
                    "country_code": "IN",
                    "latitude": 32.24,
                    "longitude": 77.19,
                    "population": 8096,
                }
            ]
        }
    )


class TestWeatherRoute:
    def test_returns_normalized_weather(self, api, mock_client, make_response, forecast_json):
        """GET /api/weather returns the camelCase weather shape.

        Implementation: Mocks one geocoding match and a 5-day forecast.
        Passing implies: Resolution, fetching, normalization, and serialization are wired together.
        """
        mock_client.get.side_effect = [_manali_geocode(make_response), make_response(forecast_json)]
        resp = api.get("/api/weather", params={"location": "Manali, Himachal Pradesh"})

        assert resp.status_code == 200
        data = resp.json()
        assert data["location"] == "Manali, Himachal Pradesh, India"
        assert data["condition"] == "cloudy"
        assert data["temperature"] == 13
        assert data["humidity"] == 54
        assert data["windSpeed"] == 7
        assert len(data["forecast"]) == 5
        assert data["forecast"][0] == {"day": "Today", "condition": "sunny", "highTemp": 15, "lowTemp": 2}

    @pytest.mark.parametrize("params", [{}, {"location": ""}, {"location": "   "}])
    def test_missing_location_is_400(self, api, mock_client, params):
        resp = api.get("/api/weather", params=params)

        assert resp.status_code == 400
        assert resp.json() == {"error": "Missing location query parameter"}
        mock_client.get.assert_not_called()

    def test_unknown_location_is_404(self, api, mock_client, make_response):
        mock_client.get.return_value = make_response({"results": []})
        resp = api.get("/api/weather", params={"location": "Xyzabc Nonexistent Place"})

        assert resp.status_code == 404
        assert resp.json() == {"error": "Location not found"}
        assert mock_client.get.call_count == 10

    def test_forecast_failure_is_generic_500(self, api, mock_client, make_response):
        """A forecast provider failure becomes a 500 without internal details.

        Implementation: Geocoding succeeds, the forecast call raises ConnectError.
        Passing implies: Upstream errors are not leaked to API callers.
        """
        mock_client.get.side_effect = [_manali_geocode(make_response), httpx.ConnectError("secret upstream detail")]
        resp = api.get("/api/weather", params={"location": "Manali"})

        assert resp.status_code == 500
        assert resp.json() == {"error": "Internal server error"}
        assert "secret" not in resp.text

    def test_invalid_forecast_date_is_json_500(self, api, mock_client, make_response, forecast_json):
        """A forecast with a non-ISO daily date still yields the JSON error body.

        Implementation: The second daily date is "not-a-date".
        Passing implies: Malformed provider data maps to the generic provider failure response.
        """
        forecast_json["daily"]["time"][1] = "not-a-date"
        mock_client.get.side_effect = [_manali_geocode(make_response), make_response(forecast_json)]
        resp = api.get("/api/weather", params={"location": "Manali"})

        assert resp.status_code == 500
        assert resp.json() == {"error": "Internal server error"}

    def test_unexpected_error_is_json_500(self, tmp_path):
        """Errors outside the lookup taxonomy are still reported as generic JSON.

        Implementation: The HTTP client raises RuntimeError, which no domain handler covers.
        Passing implies: Callers never receive a plain-text error page or internal details.
        """
        client = AsyncMock(spec=httpx.AsyncClient)
        client.get.side_effect = RuntimeError("internal detail")
        app = create_app(http_client_factory=lambda: client, destinations_path=tmp_path / "missing.json")
        with TestClient(app, raise_server_exceptions=False) as api:
            resp = api.get("/api/weather", params={"location": "Manali"})

        assert resp.status_code == 500
        assert resp.json() == {"error": "Internal server error"}
        assert "internal detail" not in resp.text


class TestCors:
    def test_allows_configured_origin(self, mock_client, tmp_path):
        origins = ("https://trips.example.com",)
        app = create_app(
            http_client_factory=lambda: mock_client,
            destinations_path=tmp_path / "missing.json",
            cors_origins=origins,
        )
        with TestClient(app) as api:
            resp = api.get("/api/states", headers={"Origin": "https://trips.example.com"})

        assert resp.headers["access-control-allow-origin"] == "https://trips.example.com"
        assert origins == ("https://trips.example.com",)


class TestStatesRoute:
    def test_lists_all_states(self, api):
        resp = api.get("/api/states")

        assert resp.status_code == 200
        states = resp.json()["states"]
        assert len(states) == 36
        assert states[0] == "Andhra Pradesh"
        assert "Himachal Pradesh" in states


class TestDestinationsRoute:
    def test_filters_fallback_dataset_by_state(self, api):
        """GET /api/destinations filters by state case-insensitively.

        Implementation: The app is started with a missing dataset file, so the fallback list is used.
        Passing implies: The lifespan loaded the dataset and the route reads it from app state.
        """
        resp = api.get("/api/destinations", params={"state": " assam "})

        assert resp.status_code == 200
        data = resp.json()
        assert data["state"] == "assam"
        assert [d["id"] for d in data["destinations"]] == ["majuli"]
        assert data["destinations"][0]["name"] == "Majuli Island"

    def test_missing_state_is_400(self, api):
        resp = api.get("/api/destinations")

        assert resp.status_code == 400
        assert resp.json() == {"error": "Missing state query parameter"}


class TestLifespan:
    def test_http_client_closed_on_shutdown(self, tmp_path):
        client = AsyncMock(spec=httpx.AsyncClient)
        app = create_app(http_client_factory=lambda: client, destinations_path=tmp_path / "missing.json")
        with TestClient(app):
            client.aclose.assert_not_called()
        client.aclose.assert_awaited_once()
