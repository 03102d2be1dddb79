"""Client and command-line tool for the MetroHero Metrorail API."""

__version__ = "0.1.0"

from metrohero.data import (
    LineCode,
    MetroHeroClient,
    MetroHeroError,
    StationCode,
    TrainPrediction,
    TripInfo,
    display_name,
    resolve_code,
)

__all__ = [
    "MetroHeroClient",
    "MetroHeroError",
    "LineCode",
    "StationCode",
    "TrainPrediction",
    "TripInfo",
    "display_name",
    "resolve_code",
]
