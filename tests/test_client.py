from __future__ import annotations

from typing import Iterator

import pytest
import requests
import responses
from responses import matchers

from metrohero.data.client import METROHERO_API_BASE, MetroHeroClient
from metrohero.data.errors import (
    AuthenticationError,
    InvalidItineraryError,
    InvalidRequestError,
    InvalidStationError,
    InvalidTrainIdError,
    MetroHeroError,
    ParseError,
    RateLimitedError,
    TransportError,
    UnexpectedStatusError,
)
from metrohero.data.schemas import LineCode
from metrohero.data.stations import StationCode

API_KEY = "test-key"

# (call, path) for every endpoint.
ENDPOINTS = [
    (lambda client: client.get_system_metrics(), "/metrorail/metrics"),
    (lambda client: client.get_trip_info(StationCode.K03, StationCode.C05), "/metrorail/trips/K03/C05"),
    (lambda client: client.get_tweets(), "/metrorail/tweets"),
    (lambda client: client.get_train_positions(), "/metrorail/trains"),
    (lambda client: client.get_train_reports(), "/metrorail/trains/tags"),
    (lambda client: client.get_train_report("402"), "/metrorail/trains/402/tags"),
    (lambda client: client.get_train_predictions(), "/metrorail/stations/trains"),
    (lambda client: client.get_station_train_predictions(StationCode.K03), "/metrorail/stations/K03/trains"),
    (lambda client: client.get_station_reports(), "/metrorail/stations/tags"),
    (lambda client: client.get_station_report(StationCode.K03), "/metrorail/stations/K03/tags"),
]


@pytest.fixture()
def client() -> Iterator[MetroHeroClient]:
    with MetroHeroClient(API_KEY) as client:
        yield client


@responses.activate
def test_station_train_predictions(client: MetroHeroClient, load_fixture) -> None:
    responses.get(
        f"{METROHERO_API_BASE}/metrorail/stations/K03/trains",
        json=load_fixture("station_train_predictions.json"),
        match=[
            matchers.header_matcher({"apiKey": API_KEY}),
            matchers.query_param_matcher({"includeScheduledPredictions": "true"}),
        ],
    )

    predictions = client.get_station_train_predictions(StationCode.K03)

    assert [prediction.min for prediction in predictions] == ["BRD", "ARR", "9"]
    assert [prediction.line for prediction in predictions] == [LineCode.ORANGE, LineCode.SILVER, LineCode.ORANGE]


@responses.activate
def test_station_train_predictions_without_scheduled(client: MetroHeroClient) -> None:
    responses.get(
        f"{METROHERO_API_BASE}/metrorail/stations/K03/trains",
        json=[],
        match=[matchers.query_param_matcher({"includeScheduledPredictions": "false"})],
    )

    assert client.get_station_train_predictions(StationCode.K03, include_scheduled=False) == []


@responses.activate
def test_train_predictions_omit_flag_by_default(client: MetroHeroClient, load_fixture) -> None:
    responses.get(
        f"{METROHERO_API_BASE}/metrorail/stations/trains",
        json=load_fixture("global_train_predictions.json"),
        match=[matchers.query_param_matcher({})],
    )

    predictions = client.get_train_predictions()

    assert list(predictions) == ["C05", "A01"]


@responses.activate
def test_train_predictions_with_flag(client: MetroHeroClient) -> None:
    responses.get(
        f"{METROHERO_API_BASE}/metrorail/stations/trains",
        json={},
        match=[matchers.query_param_matcher({"includeScheduledPredictions": "true"})],
    )

    assert client.get_train_predictions(include_scheduled=True) == {}


@responses.activate
def test_trip_info(client: MetroHeroClient, load_fixture) -> None:
    responses.get(f"{METROHERO_API_BASE}/metrorail/trips/K03/C05", json=load_fixture("trip_info.json"))

    trip_info = client.get_trip_info(StationCode.K03, StationCode.C05)

    assert trip_info.to_station_name == "Rosslyn"
    assert [train.min for train in trip_info.from_station_train_statuses] == ["ARR", "6"]


@responses.activate
def test_system_metrics_and_tweets(client: MetroHeroClient, load_fixture) -> None:
    responses.get(f"{METROHERO_API_BASE}/metrorail/metrics", json=load_fixture("system_metrics.json"))
    responses.get(f"{METROHERO_API_BASE}/metrorail/tweets", json=load_fixture("tweets.json"))

    metrics = client.get_system_metrics()
    tweets = client.get_tweets()

    assert metrics.line_metrics_by_line.red.line_code is LineCode.RED
    assert len(tweets) == 2


@responses.activate
def test_reports(client: MetroHeroClient, load_fixture) -> None:
    responses.get(f"{METROHERO_API_BASE}/metrorail/trains/tags", json=load_fixture("global_train_reports.json"))
    responses.get(f"{METROHERO_API_BASE}/metrorail/trains/402/tags", json=load_fixture("train_tags.json"))
    responses.get(
        f"{METROHERO_API_BASE}/metrorail/stations/tags", json=load_fixture("global_station_reports.json")
    )
    responses.get(f"{METROHERO_API_BASE}/metrorail/stations/K03/tags", json=load_fixture("station_tags.json"))

    assert set(client.get_train_reports()) == {"402", "135"}
    assert client.get_train_report("402").num_negative_tags == 3
    assert set(client.get_station_reports()) == {"K03", "A01"}
    assert client.get_station_report(StationCode.K03).num_negative_tags == 7


@responses.activate
def test_train_positions(client: MetroHeroClient, load_fixture) -> None:
    responses.get(f"{METROHERO_API_BASE}/metrorail/trains", json=load_fixture("train_positions.json"))

    positions = client.get_train_positions()

    assert [train.train_id for train in positions] == ["135", "910"]


@responses.activate
def test_train_id_is_quoted(client: MetroHeroClient, load_fixture) -> None:
    responses.get(f"{METROHERO_API_BASE}/metrorail/trains/a%2Fb/tags", json=load_fixture("train_tags.json"))

    client.get_train_report("a/b")

    assert responses.calls[0].request.url.endswith("/trains/a%2Fb/tags")


@responses.activate
def test_request_headers(client: MetroHeroClient) -> None:
    responses.get(f"{METROHERO_API_BASE}/metrorail/tweets", json=[])

    client.get_tweets()

    headers = responses.calls[0].request.headers
    assert headers["apiKey"] == API_KEY
    assert headers["Accept"] == "application/json"


@responses.activate
def test_trip_400_is_invalid_itinerary(client: MetroHeroClient) -> None:
    responses.get(f"{METROHERO_API_BASE}/metrorail/trips/K03/A01", status=400)

    with pytest.raises(InvalidItineraryError) as exc_info:
        client.get_trip_info(StationCode.K03, StationCode.A01)

    assert type(exc_info.value) is InvalidItineraryError
    assert str(exc_info.value) == "Provided itinerary is invalid"


@responses.activate
def test_train_report_400_is_invalid_train_id(client: MetroHeroClient) -> None:
    responses.get(f"{METROHERO_API_BASE}/metrorail/trains/999/tags", status=400)

    with pytest.raises(InvalidTrainIdError) as exc_info:
        client.get_train_report("999")

    assert type(exc_info.value) is InvalidTrainIdError


@pytest.mark.parametrize(
    "call",
    [
        lambda client: client.get_station_train_predictions(StationCode.K03),
        lambda client: client.get_station_report(StationCode.K03),
    ],
)
@responses.activate
def test_station_400_is_invalid_station(client: MetroHeroClient, call) -> None:
    responses.get(f"{METROHERO_API_BASE}/metrorail/stations/K03/trains", status=400)
    responses.get(f"{METROHERO_API_BASE}/metrorail/stations/K03/tags", status=400)

    with pytest.raises(InvalidStationError) as exc_info:
        call(client)

    assert type(exc_info.value) is InvalidStationError


@pytest.mark.parametrize(
    ("call", "path"),
    [
        (lambda client: client.get_system_metrics(), "/metrorail/metrics"),
        (lambda client: client.get_tweets(), "/metrorail/tweets"),
        (lambda client: client.get_train_positions(), "/metrorail/trains"),
        (lambda client: client.get_train_reports(), "/metrorail/trains/tags"),
        (lambda client: client.get_train_predictions(), "/metrorail/stations/trains"),
        (lambda client: client.get_station_reports(), "/metrorail/stations/tags"),
    ],
)
@responses.activate
def test_generic_400_is_invalid_request(client: MetroHeroClient, call, path: str) -> None:
    responses.get(f"{METROHERO_API_BASE}{path}", status=400)

    with pytest.raises(InvalidRequestError) as exc_info:
        call(client)

    assert type(exc_info.value) is InvalidRequestError


@pytest.mark.parametrize(("call", "path"), ENDPOINTS)
@responses.activate
def test_401_is_authentication_error(client: MetroHeroClient, call, path: str) -> None:
    responses.get(f"{METROHERO_API_BASE}{path}", status=401)

    with pytest.raises(AuthenticationError):
        call(client)


@pytest.mark.parametrize(("call", "path"), ENDPOINTS)
@responses.activate
def test_503_is_rate_limited(client: MetroHeroClient, call, path: str) -> None:
    responses.get(f"{METROHERO_API_BASE}{path}", status=503)

    with pytest.raises(RateLimitedError) as exc_info:
        call(client)

    assert str(exc_info.value) == "Too many requests, limit is: 10/s and 50k/24hr"


@pytest.mark.parametrize(("call", "path"), ENDPOINTS)
@responses.activate
def test_connection_failure_is_transport_error(client: MetroHeroClient, call, path: str) -> None:
    responses.get(f"{METROHERO_API_BASE}{path}", body=requests.ConnectionError("connection refused"))

    with pytest.raises(TransportError):
        call(client)


@pytest.mark.parametrize(("call", "path"), ENDPOINTS)
@responses.activate
def test_schema_mismatch_is_parse_error(client: MetroHeroClient, call, path: str) -> None:
    responses.get(f"{METROHERO_API_BASE}{path}", json=[1])

    with pytest.raises(ParseError):
        call(client)


@responses.activate
def test_invalid_json_is_parse_error(client: MetroHeroClient) -> None:
    responses.get(f"{METROHERO_API_BASE}/metrorail/tweets", body="<html>not json</html>", status=200)

    with pytest.raises(ParseError) as exc_info:
        client.get_tweets()

    assert str(exc_info.value) == "Error while parsing data from MetroHero API"


@responses.activate
def test_timeout_is_transport_error(client: MetroHeroClient) -> None:
    responses.get(f"{METROHERO_API_BASE}/metrorail/tweets", body=requests.Timeout("timed out"))

    with pytest.raises(TransportError) as exc_info:
        client.get_tweets()

    assert isinstance(exc_info.value.__cause__, requests.Timeout)


@pytest.mark.parametrize("status", [403, 404, 500, 502])
@responses.activate
def test_unexpected_status(client: MetroHeroClient, status: int) -> None:
    responses.get(f"{METROHERO_API_BASE}/metrorail/tweets", status=status)

    with pytest.raises(UnexpectedStatusError) as exc_info:
        client.get_tweets()

    assert exc_info.value.status_code == status
    assert isinstance(exc_info.value, MetroHeroError)


@responses.activate
def test_custom_base_url() -> None:
    responses.get("https://example.test/api/v1/metrorail/tweets", json=[])

    with MetroHeroClient(API_KEY, base_url="https://example.test/api/v1/") as client:
        assert client.get_tweets() == []


def test_rejects_plain_http() -> None:
    with pytest.raises(ValueError, match="https"):
        MetroHeroClient(API_KEY, base_url="http://dcmetrohero.com/api/v1")


def test_plain_http_allowed_when_not_required() -> None:
    client = MetroHeroClient(API_KEY, base_url="http://localhost:8080", require_https=False)
    client.close()


def test_from_env(monkeypatch) -> None:
    monkeypatch.setenv("METROHERO_API_KEY", "env-key")

    with MetroHeroClient.from_env() as client:
        assert client._session.headers["apiKey"] == "env-key"


def test_from_env_missing_key() -> None:
    with pytest.raises(ValueError, match="METROHERO_API_KEY"):
        MetroHeroClient.from_env()


@pytest.mark.parametrize("status", [301, 302, 307])
@responses.activate
def test_redirect_is_not_followed(client: MetroHeroClient, status: int) -> None:
    responses.get(
        f"{METROHERO_API_BASE}/metrorail/tweets",
        status=status,
        headers={"Location": "http://evil.test/tweets"},
    )
    responses.get("http://evil.test/tweets", json=[])

    with pytest.raises(UnexpectedStatusError) as exc_info:
        client.get_tweets()

    assert exc_info.value.status_code == status
    assert [call.request.url for call in responses.calls] == [f"{METROHERO_API_BASE}/metrorail/tweets"]


@responses.activate
def test_non_string_station_code_is_parse_error(client: MetroHeroClient, load_fixture) -> None:
    payload = load_fixture("station_train_predictions.json")
    payload[0]["currentStationCode"] = 42
    responses.get(f"{METROHERO_API_BASE}/metrorail/stations/K03/trains", json=payload)

    with pytest.raises(ParseError):
        client.get_station_train_predictions(StationCode.K03)
