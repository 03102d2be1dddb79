"""Errors raised while talking to the MetroHero API."""

from __future__ import annotations

RATE_LIMIT_PER_SECOND = 10
RATE_LIMIT_PER_DAY = 50_000


class MetroHeroError(Exception):
    """Base class for every MetroHero domain error."""

    message = "MetroHero API request failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class TransportError(MetroHeroError):
    """Raised when the HTTP exchange itself fails (connect, timeout, TLS)."""

    message = "Error while communicating with MetroHero API"


class ParseError(MetroHeroError):
    """Raised when a response body does not match the expected schema."""

    message = "Error while parsing data from MetroHero API"


class InvalidRequestError(MetroHeroError):
    """Raised on a generic 400 from the API."""

    message = "Request to MetroHero API was invalid"


class InvalidStationError(MetroHeroError):
    """Raised when a station code or name cannot be resolved or is rejected upstream."""

    message = "Provided station code or name is invalid"


class InvalidTrainIdError(MetroHeroError):
    """Raised when the API rejects a train id."""

    message = "Provided Train ID is not valid"


class InvalidItineraryError(MetroHeroError):
    """Raised when the API rejects a station pair as a trip."""

    message = "Provided itinerary is invalid"


class AuthenticationError(MetroHeroError):
    """Raised on a 401 from the API."""

    message = "Provided MetroHero API key is invalid"


class RateLimitedError(MetroHeroError):
    """Raised on a 503 from the API. Limits are documented, not enforced here."""

    message = (
        f"Too many requests, limit is: {RATE_LIMIT_PER_SECOND}/s "
        f"and {RATE_LIMIT_PER_DAY // 1000}k/24hr"
    )


class UnexpectedStatusError(MetroHeroError):
    """Raised when the API answers with a status outside the documented set."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"Unexpected HTTP status {status_code} from MetroHero API")


__all__ = [
    "RATE_LIMIT_PER_SECOND",
    "RATE_LIMIT_PER_DAY",
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
]
