"""Tests for ObservationFetcher."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from helpers import observation_payload
from exceptions import FetchError, FetchParseError, FetchStatusError, FetchTransportError
from observation_fetcher import ObservationFetcher


def _mock_response(status_code: int = 200, payload=None, json_error: bool = False) -> MagicMock:
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    if json_error:
        response.json.side_effect = requests.exceptions.JSONDecodeError("Expecting value", "<html>", 0)
    else:
        response.json.return_value = payload
    return response


def _page(*results) -> dict:
    return {"total_results": len(results), "page": 1, "per_page": 50, "results": list(results)}


class TestObservationFetcher:

    def test_sends_expected_query(self):
        fetcher = ObservationFetcher(timeout=5)

        with patch("observation_fetcher.requests.get") as mock_get:
            mock_get.return_value = _mock_response(payload=_page())
            fetcher.fetch(41944, 34)

        args, kwargs = mock_get.call_args
        assert args[0] == "https://api.inaturalist.org/v2/observations"
        assert kwargs["timeout"] == 5
        params = kwargs["params"]
        assert params["verifiable"] == "true"
        assert params["order_by"] == "created_at"
        assert params["order"] == "desc"
        assert params["page"] == "1"
        assert params["spam"] == "false"
        assert params["taxon_id"] == "41944"
        assert params["place_id"] == "34"
        assert params["locale"] == "en-US"
        assert params["per_page"] == "50"
        assert "preferred_common_name" in params["fields"]

    def test_returns_observations_in_api_order(self):
        fetcher = ObservationFetcher(timeout=5)
        payload = _page(observation_payload("new", 2), observation_payload("old", 1))

        with patch("observation_fetcher.requests.get", return_value=_mock_response(payload=payload)):
            observations = fetcher.fetch(41944, 34)

        assert [o.uuid for o in observations] == ["new", "old"]

    def test_empty_results_is_not_an_error(self):
        fetcher = ObservationFetcher(timeout=5)

        with patch("observation_fetcher.requests.get", return_value=_mock_response(payload=_page())):
            assert fetcher.fetch(41944, 34) == []

    def test_network_error(self):
        fetcher = ObservationFetcher(timeout=5)

        with patch(
            "observation_fetcher.requests.get",
            side_effect=requests.exceptions.ConnectionError("no route"),
        ):
            with pytest.raises(FetchTransportError) as excinfo:
                fetcher.fetch(41944, 34)

        assert excinfo.value.taxon_id == 41944

    def test_timeout_is_a_transport_error(self):
        fetcher = ObservationFetcher(timeout=5)

        with patch("observation_fetcher.requests.get", side_effect=requests.exceptions.Timeout()):
            with pytest.raises(FetchTransportError):
                fetcher.fetch(41944, 34)

    @pytest.mark.parametrize("status_code", [201, 404, 429, 500])
    def test_non_200_status(self, status_code):
        fetcher = ObservationFetcher(timeout=5)

        with patch(
            "observation_fetcher.requests.get",
            return_value=_mock_response(status_code=status_code, payload=_page()),
        ):
            with pytest.raises(FetchStatusError) as excinfo:
                fetcher.fetch(41944, 34)

        assert excinfo.value.status_code == status_code

    def test_body_is_not_json(self):
        fetcher = ObservationFetcher(timeout=5)

        with patch("observation_fetcher.requests.get", return_value=_mock_response(json_error=True)):
            with pytest.raises(FetchParseError):
                fetcher.fetch(41944, 34)

    def test_body_has_wrong_shape(self):
        fetcher = ObservationFetcher(timeout=5)
        payload = _page({"id": "not-a-number"})

        with patch("observation_fetcher.requests.get", return_value=_mock_response(payload=payload)):
            with pytest.raises(FetchParseError):
                fetcher.fetch(41944, 34)

    def test_error_kinds_share_a_base(self):
        assert issubclass(FetchTransportError, FetchError)
        assert issubclass(FetchStatusError, FetchError)
        assert issubclass(FetchParseError, FetchError)

    def test_null_fields_do_not_drop_the_page(self):
        fetcher = ObservationFetcher(timeout=5)
        payload = _page(observation_payload("a", 1), observation_payload("b", 2, taxon=None, mappable=None))

        with patch("observation_fetcher.requests.get", return_value=_mock_response(payload=payload)):
            observations = fetcher.fetch(41944, 34)

        assert [o.uuid for o in observations] == ["a", "b"]

    @pytest.mark.parametrize("timeout", [0, -1])
    def test_rejects_non_positive_timeout(self, timeout):
        with pytest.raises(ValueError):
            ObservationFetcher(timeout=timeout)
