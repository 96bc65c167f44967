"""
Tests for the forecasting service client.

HTTP is stubbed by patching ``requests.Session.request``; no network access.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from renovation_advisor.api.forecasting import ForecastingClient
from renovation_advisor.core.errors import APIConnectionError, APIResponseError, ErrorKind
from renovation_advisor.core.models import ArchetypeInfo

from conftest import hourly_rows


def make_response(payload=None, status=200, json_error=False):
    response = MagicMock(spec=requests.Response)
    response.status_code = status
    response.ok = 200 <= status < 300
    response.text = json.dumps(payload) if payload is not None else ""
    if json_error:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def client():
    return ForecastingClient(base_url="http://gateway/api/forecasting/", auth_token="token-123", timeout=5)


@pytest.fixture
def archetype():
    return ArchetypeInfo("Single Family House", "Italy", "SFH_Italy_1946_1969")


class TestTransport:
    """Tests for request handling and error mapping."""

    def test_auth_header_set(self, client):
        """Test the bearer token is sent on every request."""
        assert client._session.headers["Authorization"] == "Bearer token-123"

    def test_base_url_trailing_slash_stripped(self, client):
        """Test the base URL is normalised."""
        assert client.base_url == "http://gateway/api/forecasting"

    def test_connection_error(self, client):
        """Test transport failures become APIConnectionError."""
        with patch.object(requests.Session, "request", side_effect=requests.ConnectionError("refused")):
            with pytest.raises(APIConnectionError) as exc_info:
                client.list_archetypes()
        assert exc_info.value.kind is ErrorKind.API_CONNECTION

    def test_timeout(self, client):
        """Test timeouts become APIConnectionError mentioning the timeout."""
        with patch.object(requests.Session, "request", side_effect=requests.Timeout()):
            with pytest.raises(APIConnectionError) as exc_info:
                client.list_archetypes()
        assert "5 seconds" in str(exc_info.value)

    def test_error_status(self, client):
        """Test non-2xx responses become APIConnectionError with the status code."""
        with patch.object(requests.Session, "request", return_value=make_response({"detail": "boom"}, 500)):
            with pytest.raises(APIConnectionError) as exc_info:
                client.list_archetypes()
        assert exc_info.value.status_code == 500

    def test_non_json_body(self, client):
        """Test an unparseable body becomes APIResponseError."""
        with patch.object(requests.Session, "request", return_value=make_response(json_error=True)):
            with pytest.raises(APIResponseError):
                client.list_archetypes()


class TestEndpoints:
    """Tests for the individual endpoints."""

    def test_list_archetypes(self, client):
        """Test archetype records are converted to ArchetypeInfo."""
        payload = [
            {"category": "Single Family House", "country": "Italy", "name": "SFH_Italy_1946_1969"},
            {"category": "Multi family House", "country": "Greece", "name": "MFH_Greece", "extra": 1},
        ]
        with patch.object(requests.Session, "request", return_value=make_response(payload)) as request:
            archetypes = client.list_archetypes()

        assert archetypes[0] == ArchetypeInfo("Single Family House", "Italy", "SFH_Italy_1946_1969")
        assert len(archetypes) == 2
        method, url = request.call_args.args
        assert (method, url) == ("GET", "http://gateway/api/forecasting/building/available")

    def test_list_archetypes_wrong_shape(self, client):
        """Test a non-list catalogue is rejected."""
        with patch.object(requests.Session, "request", return_value=make_response({"items": []})):
            with pytest.raises(APIResponseError):
                client.list_archetypes()

    def test_list_archetypes_missing_field(self, client):
        """Test a record without a name fails schema validation."""
        payload = [{"category": "Single Family House", "country": "Italy"}]
        with patch.object(requests.Session, "request", return_value=make_response(payload)):
            with pytest.raises(APIResponseError):
                client.list_archetypes()

    def test_simulate_archetype(self, client, archetype):
        """Test archetype simulation query parameters and parsing."""
        payload = {"source": "archetype", "results": {"hourly_building": hourly_rows(10, 0, hours=4)},
                   "building_area": 140.0}
        with patch.object(requests.Session, "request", return_value=make_response(payload)) as request:
            response = client.simulate_archetype(archetype)

        params = request.call_args.kwargs["params"]
        assert params["archetype"] == "true"
        assert params["name"] == "SFH_Italy_1946_1969"
        assert params["weather_source"] == "pvgis"
        assert response.building_area == 140.0
        assert len(response.results.hourly_building) == 4

    def test_simulate_missing_results(self, client, archetype):
        """Test a response without results is rejected."""
        with patch.object(requests.Session, "request", return_value=make_response({"source": "archetype"})):
            with pytest.raises(APIResponseError):
                client.simulate_archetype(archetype)

    def test_simulate_custom_sends_form_fields(self, client):
        """Test custom simulation posts BUI and system as JSON form fields."""
        payload = {"results": {"hourly_building": hourly_rows(10, 0, hours=2)}}
        with patch.object(requests.Session, "request", return_value=make_response(payload)) as request:
            client.simulate_custom({"building": {"net_floor_area": 90}}, {"generator": "gas"}, weather_source="epw")

        kwargs = request.call_args.kwargs
        assert kwargs["params"] == {"archetype": "false", "weather_source": "epw"}
        assert json.loads(kwargs["data"]["bui_json"]) == {"building": {"net_floor_area": 90}}
        assert json.loads(kwargs["data"]["system_json"]) == {"generator": "gas"}

    def test_apply_ecm_single_scenario_params(self, client, archetype):
        """Test ECM request carries joined elements and per-element U-values."""
        payload = {"scenarios": [{"scenario_id": "wall+window",
                                  "results": {"hourly_building": {"Q_HC": [1.0, -1.0]}}}]}
        with patch.object(requests.Session, "request", return_value=make_response(payload)) as request:
            response = client.apply_ecm(archetype, ["wall", "window"], {"wall": 0.25, "window": 1.4, "roof": 0.2})

        params = request.call_args.kwargs["params"]
        assert params["scenario_elements"] == "wall,window"
        assert params["u_wall"] == 0.25
        assert params["u_window"] == 1.4
        assert "u_roof" not in params
        assert "include_baseline" not in params
        assert response.scenarios[0].results.hourly_building == {"Q_HC": [1.0, -1.0]}

    def test_archetype_details(self, client, archetype, bui_payload):
        """Test archetype details are fetched with archetype=true."""
        payload = {"name": archetype.name, "category": archetype.category, "country": archetype.country,
                   "bui": bui_payload, "system": {}}
        with patch.object(requests.Session, "request", return_value=make_response(payload)) as request:
            details = client.get_archetype_details(archetype)

        assert request.call_args.args[0] == "POST"
        assert request.call_args.kwargs["params"]["archetype"] == "true"
        assert details.bui["building"]["net_floor_area"] == 100.0
