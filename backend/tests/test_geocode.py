"""Tests for the reverse geocoding proxy."""

import httpx
import pytest
from app.main import app
from app.routes.geocode import clamp_zoom, get_http_client, parse_number


@pytest.fixture
def upstream():
    """Route outbound requests to a handler the test controls."""
    state = {"handler": None, "requests": []}

    def dispatch(request: httpx.Request) -> httpx.Response:
        state["requests"].append(request)
        return state["handler"](request)

    async def _client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(dispatch)) as client:
            yield client

    app.dependency_overrides[get_http_client] = _client
    yield state
    app.dependency_overrides.pop(get_http_client, None)


class TestHelpers:
    @pytest.mark.parametrize("value,expected", [("46.05", 46.05), ("-14.5", -14.5), ("0", 0.0)])
    def test_parse_number(self, value, expected):
        assert parse_number(value) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", "inf", "nan"])
    def test_parse_number_rejects(self, value):
        assert parse_number(value) is None

    @pytest.mark.parametrize(
        "zoom,expected", [(None, 18), (10.4, 10), (10.5, 11), (1, 3), (25, 18), (-4, 3)]
    )
    def test_clamp_zoom(self, zoom, expected):
        assert clamp_zoom(zoom) == expected


class TestReverseGeocode:
    def test_proxies_json(self, client, upstream):
        upstream["handler"] = lambda request: httpx.Response(
            200, json={"display_name": "Prešernov trg, Ljubljana"}
        )

        response = client.get("/geocode/reverse", params={"lat": "46.0511", "lon": "14.5060"})

        assert response.status_code == 200
        assert response.json() == {"display_name": "Prešernov trg, Ljubljana"}
        sent = upstream["requests"][0]
        assert sent.url.params["zoom"] == "18"
        assert sent.url.params["format"] == "json"
        assert sent.url.params["addressdetails"] == "1"
        assert sent.headers["user-agent"].startswith("Workly/")

    def test_zoom_is_clamped(self, client, upstream):
        upstream["handler"] = lambda request: httpx.Response(200, json={})

        client.get("/geocode/reverse", params={"lat": "46", "lon": "14", "zoom": "1"})

        assert upstream["requests"][0].url.params["zoom"] == "3"

    @pytest.mark.parametrize(
        "params", [{}, {"lat": "46"}, {"lat": "abc", "lon": "14"}, {"lat": "46", "lon": ""}]
    )
    def test_missing_coordinates(self, client, upstream, params):
        response = client.get("/geocode/reverse", params=params)

        assert response.status_code == 400
        assert response.json() == {"error": "Missing or invalid lat/lon"}
        assert upstream["requests"] == []

    @pytest.mark.parametrize("params", [{"lat": "91", "lon": "0"}, {"lat": "0", "lon": "-181"}])
    def test_out_of_range(self, client, upstream, params):
        response = client.get("/geocode/reverse", params=params)

        assert response.status_code == 400
        assert response.json() == {"error": "lat/lon out of range"}

    def test_upstream_error_with_text_body(self, client, upstream):
        upstream["handler"] = lambda request: httpx.Response(
            503, text="Service unavailable " * 50, headers={"content-type": "text/plain"}
        )

        response = client.get("/geocode/reverse", params={"lat": "46", "lon": "14"})

        assert response.status_code == 502
        data = response.json()
        assert data["error"] == "Reverse geocoding failed"
        assert data["status"] == 503
        assert len(data["details"]) == 500

    def test_upstream_error_with_json_body(self, client, upstream):
        upstream["handler"] = lambda request: httpx.Response(429, json={"error": "slow down"})

        response = client.get("/geocode/reverse", params={"lat": "46", "lon": "14"})

        assert response.status_code == 502
        assert response.json() == {"error": "Reverse geocoding failed", "status": 429}

    def test_transport_failure(self, client, upstream):
        def fail(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        upstream["handler"] = fail

        response = client.get("/geocode/reverse", params={"lat": "46", "lon": "14"})

        assert response.status_code == 502
        assert response.json() == {"error": "Reverse geocoding request failed", "name": "ConnectTimeout"}
