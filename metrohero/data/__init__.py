"""Station directory, API client and response schemas."""

from metrohero.data.client import MetroHeroClient
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
from metrohero.data.schemas import LineCode, StationTags, TrainPrediction, TrainTags, TripInfo
from metrohero.data.stations import StationCode, display_name, resolve_code

__all__ = [
    "MetroHeroClient",
    "MetroHeroError",
    "TransportError",
    "ParseError",
    "InvalidRequestError",
    "InvalidStationError",
    "InvalidTrainIdError",
    "InvalidItineraryError",
    "AuthenticationError",
    "RateLimitedError",
    "UnexpectedStatusError",
    "LineCode",
    "StationCode",
    "StationTags",
    "TrainPrediction",
    "TrainTags",
    "TripInfo",
    "display_name",
    "resolve_code",
]
