"""MetroHero API client.

API documentation: https://dcmetrohero.com/apis
"""

from __future__ import annotations

import logging
import os
import ssl
from typing import Any, TypeVar
from urllib.parse import quote, urlsplit

import requests
from pydantic import BaseModel, TypeAdapter, ValidationError
from requests.adapters import HTTPAdapter
from requests.utils import DEFAULT_CA_BUNDLE_PATH

from metrohero.data.errors import (
    AuthenticationError,
    InvalidItineraryError,
    InvalidRequestError,
    InvalidStationError,
    InvalidTrainIdError,
    ParseError,
    RateLimitedError,
    TransportError,
    UnexpectedStatusError,
)
from metrohero.data.schemas import (
    STATION_REPORTS,
    TRAIN_PREDICTION_LIST,
    TRAIN_PREDICTIONS,
    TRAIN_REPORTS,
    TWEET_LIST,
    StationReports,
    StationTags,
    SystemMetricsResponse,
    TrainPrediction,
    TrainPredictions,
    TrainReports,
    TrainTags,
    TripInfo,
    Tweet,
)
from metrohero.data.stations import StationCode

logger = logging.getLogger(__name__)

METROHERO_API_BASE = "https://dcmetrohero.com/api/v1"
API_KEY_ENV_VAR = "METROHERO_API_KEY"
DEFAULT_TIMEOUT_SECONDS = 10

T = TypeVar("T")


class _TLSAdapter(HTTPAdapter):
    """HTTP adapter that refuses TLS versions below ``min_tls_version``."""

    def __init__(self, min_tls_version: ssl.TLSVersion, **kwargs: Any) -> None:
        self._min_tls_version = min_tls_version
        super().__init__(**kwargs)

    def init_poolmanager(self, *args: Any, **kwargs: Any) -> None:
        context = ssl.create_default_context(cafile=DEFAULT_CA_BUNDLE_PATH)
        context.minimum_version = self._min_tls_version
        kwargs["ssl_context"] = context
        super().init_poolmanager(*args, **kwargs)


class MetroHeroClient:
    """Blocking client for the MetroHero API.

    Each method performs one GET and returns a parsed payload, or raises a
    ``MetroHeroError`` subclass describing why the call failed. Nothing is
    retried or cached, and redirects are never followed.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = METROHERO_API_BASE,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        require_https: bool = True,
        min_tls_version: ssl.TLSVersion = ssl.TLSVersion.TLSv1_2,
    ) -> None:
        if require_https and urlsplit(base_url).scheme != "https":
            raise ValueError(f"MetroHero base URL must use https: {base_url}")
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._session = requests.Session()
        self._session.headers.update({"apiKey": api_key, "Accept": "application/json"})
        self._session.mount("https://", _TLSAdapter(min_tls_version))

    @classmethod
    def from_env(cls, **kwargs: Any) -> MetroHeroClient:
        """Build a client using the key in ``METROHERO_API_KEY``."""
        api_key = os.environ.get(API_KEY_ENV_VAR, "").strip()
        if not api_key:
            raise ValueError(f"Environment variable {API_KEY_ENV_VAR} is missing")
        return cls(api_key, **kwargs)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> MetroHeroClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def get_system_metrics(self) -> SystemMetricsResponse:
        """Fetch system-wide metrics broken down by line and direction (refreshed ~30s)."""
        return self._get("/metrorail/metrics", SystemMetricsResponse)

    def get_trip_info(self, from_station: StationCode, to_station: StationCode) -> TripInfo:
        """Fetch trip information between two stations on the same line.

        Trips with transfers are not supported upstream; split them into
        single-leg segments and request each one.
        """
        path = f"/metrorail/trips/{from_station.value}/{to_station.value}"
        try:
            return self._get(path, TripInfo)
        except InvalidRequestError as exc:
            raise InvalidItineraryError() from exc

    def get_tweets(self) -> list[Tweet]:
        """Fetch the last 30 minutes of Metrorail-related tweets."""
        return self._get("/metrorail/tweets", TWEET_LIST)

    def get_train_positions(self) -> list[TrainPrediction]:
        """Fetch one prediction per train in the system, in no particular order."""
        return self._get("/metrorail/trains", TRAIN_PREDICTION_LIST)

    def get_train_reports(self) -> TrainReports:
        """Fetch rider reports for every train, keyed by train id."""
        return self._get("/metrorail/trains/tags", TRAIN_REPORTS)

    def get_train_report(self, train_id: str) -> TrainTags:
        """Fetch rider reports for one train."""
        path = f"/metrorail/trains/{quote(str(train_id), safe='')}/tags"
        try:
            return self._get(path, TrainTags)
        except InvalidRequestError as exc:
            raise InvalidTrainIdError() from exc

    def get_train_predictions(self, include_scheduled: bool | None = None) -> TrainPredictions:
        """Fetch predictions for every station, keyed by station code."""
        params = None
        if include_scheduled is not None:
            params = {"includeScheduledPredictions": _flag(include_scheduled)}
        return self._get("/metrorail/stations/trains", TRAIN_PREDICTIONS, params=params)

    def get_station_train_predictions(
        self, station: StationCode, include_scheduled: bool = True
    ) -> list[TrainPrediction]:
        """Fetch predictions for one station, ascending by minutes away as returned."""
        path = f"/metrorail/stations/{station.value}/trains"
        params = {"includeScheduledPredictions": _flag(include_scheduled)}
        try:
            return self._get(path, TRAIN_PREDICTION_LIST, params=params)
        except InvalidRequestError as exc:
            raise InvalidStationError() from exc

    def get_station_reports(self) -> StationReports:
        """Fetch rider reports for every station, keyed by station code."""
        return self._get("/metrorail/stations/tags", STATION_REPORTS)

    def get_station_report(self, station: StationCode) -> StationTags:
        """Fetch rider reports for one station."""
        path = f"/metrorail/stations/{station.value}/tags"
        try:
            return self._get(path, StationTags)
        except InvalidRequestError as exc:
            raise InvalidStationError() from exc

    def _get(
        self,
        path: str,
        target: type[BaseModel] | TypeAdapter[T],
        params: dict[str, Any] | None = None,
    ) -> Any:
        url = f"{self._base_url}{path}"
        logger.debug(f"GET {url} params={params}")
        try:
            response = self._session.get(
                url, params=params, timeout=self._timeout_seconds, allow_redirects=False
            )
        except requests.RequestException as exc:
            logger.warning(f"MetroHero request to {path} failed: {exc}")
            raise TransportError() from exc

        status = response.status_code
        if status != 200:
            logger.warning(f"MetroHero request to {path} returned status {status}")
        if status == 400:
            raise InvalidRequestError()
        if status == 401:
            raise AuthenticationError()
        if status == 503:
            raise RateLimitedError()
        if status != 200:
            raise UnexpectedStatusError(status)

        try:
            payload = response.json()
        except ValueError as exc:
            raise ParseError() from exc

        try:
            if isinstance(target, TypeAdapter):
                return target.validate_python(payload)
            return target.model_validate(payload)
        except ValidationError as exc:
            logger.warning(f"MetroHero response from {path} did not match schema: {exc}")
            raise ParseError() from exc


def _flag(value: bool) -> str:
    return "true" if value else "false"


__all__ = ["METROHERO_API_BASE", "API_KEY_ENV_VAR", "DEFAULT_TIMEOUT_SECONDS", "MetroHeroClient"]
