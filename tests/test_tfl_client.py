"""
Test the TfL API client with the HTTP layer mocked out.
"""

from unittest.mock import Mock, patch

import pytest
import requests

from tflgtfs.data.response_cache import ResponseCache
from tflgtfs.data.tfl.tfl_client import TflClient
from tflgtfs.feed.errors import NetworkDecodeError


def make_config(**overrides):
    values = dict(
        app_id="my-app",
        primary_key="primary",
        secondary_key="",
        base_url="https://api.tfl.gov.uk/",
        use_cache=False,
        request_timeout=30,
        max_retries=3,
    )
    values.update(overrides)
    return Mock(**values)


def ok_response(text):
    response = Mock(status_code=200, text=text)
    response.raise_for_status.return_value = None
    return response


def error_response(status_code):
    response = Mock(status_code=status_code, text="{}")
    response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error", response=response)
    return response


@pytest.fixture
def mock_get():
    with patch("tflgtfs.data.tfl.tfl_client.requests.get") as get:
        yield get


@pytest.fixture(autouse=True)
def no_sleep():
    with patch("tflgtfs.data.tfl.tfl_client.time.sleep") as sleep:
        yield sleep


class TestUrls:

    def test_build_url_with_credentials(self):
        client = TflClient(make_config())
        url = client._build_url("Line/Route")

        assert url == "https://api.tfl.gov.uk/Line/Route?app_id=my-app&app_key=primary"

    def test_secondary_key_fallback(self):
        client = TflClient(make_config(primary_key="", secondary_key="secondary"))
        assert client.app_key == "secondary"

    def test_anonymous_client(self):
        client = TflClient(make_config(app_id="", primary_key=""))
        assert client._build_url("Line/Route") == "https://api.tfl.gov.uk/Line/Route"

    def test_params_are_not_shared_between_calls(self):
        client = TflClient(make_config())
        params = {"page": 1}
        client._build_url("StopPoint/Mode/bus", params)

        assert params == {"page": 1}


class TestEndpoints:

    def test_get_lines(self, mock_get):
        mock_get.return_value = ok_response('[{"id": "victoria"}]')
        client = TflClient(make_config())

        assert client.get_lines() == [{"id": "victoria"}]
        assert mock_get.call_args[0][0].startswith("https://api.tfl.gov.uk/Line/Route?")

    def test_get_stops(self, mock_get):
        mock_get.return_value = ok_response("[]")
        TflClient(make_config()).get_stops("victoria")

        assert "/Line/victoria/StopPoints?" in mock_get.call_args[0][0]

    def test_get_timetable(self, mock_get):
        mock_get.return_value = ok_response('{"timetable": {"routes": []}}')
        result = TflClient(make_config()).get_timetable("victoria", "940GZZLUBXN", "940GZZLUWWL")

        assert result == {"timetable": {"routes": []}}
        assert "/Line/victoria/Timetable/940GZZLUBXN/to/940GZZLUWWL?" in mock_get.call_args[0][0]


class TestRetries:

    def test_timeout_is_retried(self, mock_get, no_sleep):
        mock_get.side_effect = [requests.exceptions.Timeout(), ok_response("[]")]

        assert TflClient(make_config()).get_lines() == []
        assert mock_get.call_count == 2
        no_sleep.assert_called_once_with(1)

    def test_server_error_is_retried(self, mock_get):
        mock_get.side_effect = [error_response(503), error_response(504), ok_response("[]")]

        assert TflClient(make_config()).get_lines() == []
        assert mock_get.call_count == 3

    def test_client_error_is_not_retried(self, mock_get):
        mock_get.return_value = error_response(404)

        with pytest.raises(requests.HTTPError):
            TflClient(make_config()).get_stops("nope")
        assert mock_get.call_count == 1

    def test_gives_up_after_max_retries(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(requests.exceptions.ConnectionError):
            TflClient(make_config(max_retries=3)).get_lines()
        assert mock_get.call_count == 3


@pytest.mark.usefixtures("cache_database")
class TestCaching:

    def test_response_is_cached(self, mock_get):
        mock_get.return_value = ok_response('[{"id": "victoria"}]')
        client = TflClient(make_config(use_cache=True), cache=ResponseCache())

        first = client.get_lines()
        second = client.get_lines()

        assert first == second == [{"id": "victoria"}]
        assert mock_get.call_count == 1

    def test_cache_key_excludes_credentials(self, mock_get):
        mock_get.return_value = ok_response("[]")
        cache = ResponseCache()
        TflClient(make_config(use_cache=True), cache=cache).get_stops("victoria")

        assert cache.get("Line/victoria/StopPoints") == "[]"

    def test_cache_ignored_when_disabled(self, mock_get):
        cache = ResponseCache()
        cache.put("Line/Route", '[{"id": "stale"}]')
        mock_get.return_value = ok_response('[{"id": "fresh"}]')

        assert TflClient(make_config(use_cache=False), cache=cache).get_lines() == [{"id": "fresh"}]

    def test_failed_requests_are_not_cached(self, mock_get):
        mock_get.return_value = error_response(404)
        cache = ResponseCache()

        with pytest.raises(requests.HTTPError):
            TflClient(make_config(use_cache=True), cache=cache).get_stops("nope")
        assert cache.get("Line/nope/StopPoints") is None

    def test_unparsable_body_is_not_cached(self, mock_get):
        mock_get.return_value = ok_response("<html>Service unavailable</html>")
        cache = ResponseCache()

        with pytest.raises(NetworkDecodeError):
            TflClient(make_config(use_cache=True), cache=cache).get_stops("victoria")
        assert cache.get("Line/victoria/StopPoints") is None

    def test_unparsable_body_is_refetched_on_next_call(self, mock_get):
        mock_get.side_effect = [ok_response("<html>"), ok_response("[]")]
        client = TflClient(make_config(use_cache=True), cache=ResponseCache())

        with pytest.raises(NetworkDecodeError):
            client.get_stops("victoria")
        assert client.get_stops("victoria") == []
        assert mock_get.call_count == 2
