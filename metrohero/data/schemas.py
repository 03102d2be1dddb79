"""Schemas for data returned by the MetroHero API."""

from __future__ import annotations

from enum import Enum
from typing import ClassVar

from colorama import Fore
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from metrohero.data.stations import StationCode

# Min values that are not a minute count.
ETA_SENTINELS = ("ARR", "BRD", "?", ":")
ARRIVING_ETAS = ("ARR", "BRD")


class LineCode(str, Enum):
    """Metrorail line codes. Unrecognized codes are treated as non-revenue."""

    SILVER = "SV"
    RED = "RD"
    ORANGE = "OR"
    BLUE = "BL"
    YELLOW = "YL"
    GREEN = "GR"
    NON_REVENUE = "N/A"

    @classmethod
    def _missing_(cls, value: object) -> LineCode | None:
        if isinstance(value, str):
            return cls.NON_REVENUE
        return None

    def __str__(self) -> str:
        return self.value

    @property
    def color(self) -> str:
        """Terminal foreground color for the line."""
        return _LINE_COLORS[self]


_LINE_COLORS = {
    LineCode.SILVER: Fore.WHITE,
    LineCode.RED: Fore.RED,
    LineCode.ORANGE: Fore.YELLOW,
    LineCode.BLUE: Fore.BLUE,
    LineCode.YELLOW: Fore.LIGHTYELLOW_EX,
    LineCode.GREEN: Fore.GREEN,
    LineCode.NON_REVENUE: Fore.MAGENTA,
}


class MetroHeroModel(BaseModel):
    """Base for API payloads: camelCase on the wire, immutable once parsed."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ServiceGap(MetroHeroModel):
    """Unusually large spacing between consecutive trains on a line and direction."""

    line_code: LineCode
    direction_number: int
    direction: str
    from_station_code: StationCode
    from_station_name: str
    to_station_code: StationCode
    to_station_name: str
    from_train_id: str
    to_train_id: str
    time_between_trains: float
    scheduled_time_between_trains: float
    observed_date: str


class _TrainMetrics(MetroHeroModel):
    date: str
    num_trains: int
    num_cars: int
    num_eight_car_trains: int
    num_delayed_trains: int
    expected_num_trains: int
    average_train_delay: int | None = None
    median_train_delay: int | None = None
    minimum_train_delay: int | None = None
    maximum_train_delay: int | None = None
    average_minimum_headways: float | None = None
    average_train_frequency: float | None = None
    expected_train_frequency: float | None = None
    average_platform_wait_time: float | None = None
    expected_platform_wait_time: float | None = None
    train_frequency_status: str | None = None
    platform_wait_time_trend_status: str | None = None
    average_headway_adherence: float | None = None
    average_schedule_adherence: float | None = None
    standard_deviation_train_frequency: float | None = None
    expected_standard_deviation_train_frequency: float | None = None


class DirectionMetrics(_TrainMetrics):
    """Metrics for one line in one direction of travel."""

    line_code: LineCode
    direction_number: int
    direction: str
    towards_station_name: str


class DirectionMetricsByDirection(MetroHeroModel):
    """Direction metrics keyed by direction number; null when no trains run that way."""

    direction_1: DirectionMetrics | None = Field(default=None, alias="1")
    direction_2: DirectionMetrics | None = Field(default=None, alias="2")


class LineMetrics(_TrainMetrics):
    """Metrics for one line."""

    line_code: LineCode
    service_gaps: list[ServiceGap]
    direction_metrics_by_direction: DirectionMetricsByDirection


class SystemMetrics(MetroHeroModel):
    """Line metrics keyed by line code."""

    red: LineMetrics = Field(alias="RD")
    orange: LineMetrics = Field(alias="OR")
    silver: LineMetrics = Field(alias="SV")
    blue: LineMetrics = Field(alias="BL")
    yellow: LineMetrics = Field(alias="YL")
    green: LineMetrics = Field(alias="GR")

    def by_line(self) -> dict[LineCode, LineMetrics]:
        return {
            LineCode.RED: self.red,
            LineCode.ORANGE: self.orange,
            LineCode.SILVER: self.silver,
            LineCode.BLUE: self.blue,
            LineCode.YELLOW: self.yellow,
            LineCode.GREEN: self.green,
        }


class SystemMetricsResponse(MetroHeroModel):
    """Performance metrics for the whole Metrorail system."""

    line_metrics_by_line: SystemMetrics
    date: str


class AbridgedTweet(MetroHeroModel):
    twitter_id: int
    twitter_id_string: str
    user_id: int
    timestamp: int
    text: str


class RecentTweets(MetroHeroModel):
    """Recent tweets about a specific train (undocumented upstream)."""

    keywords: str
    tweets: list[AbridgedTweet]


class Tweet(MetroHeroModel):
    """Tweet referencing a Metrorail station, line or train."""

    twitter_id: int
    twitter_id_string: str
    user_id: int
    text: str
    station_codes: list[StationCode]
    line_codes: list[LineCode]
    keywords: list[str]
    url: str
    date: str


class MetroAlert(MetroHeroModel):
    """An alert issued by WMATA."""

    description: str
    station_codes: list[StationCode]
    line_codes: list[LineCode]
    keywords: list[str]
    date: str


class ElevatorEscalatorOutage(MetroHeroModel):
    """An elevator or escalator outage reported by WMATA."""

    station_code: StationCode
    station_name: str
    location_description: str
    symptom_description: str
    unit_name: str
    unit_type: str
    out_of_service_date: str
    updated_date: str
    estimated_return_to_service_date: str


class TrainPrediction(MetroHeroModel):
    """Predicted arrival of one train at one location.

    The WMATA-compatible fields keep WMATA's PascalCase names on the wire.
    """

    train_id: str
    real_train_id: str | None = None
    car: str = Field(alias="Car")
    destination: str = Field(alias="Destination")
    destination_code: StationCode | None = Field(default=None, alias="DestinationCode")
    destination_name: str = Field(alias="DestinationName")
    group: str = Field(alias="Group")
    line: LineCode = Field(alias="Line")
    location_code: StationCode | None = Field(default=None, alias="LocationCode")
    location_name: str | None = Field(default=None, alias="LocationName")
    min: str = Field(alias="Min")
    parent_min: str | None = None
    minutes_away: float | None = None
    max_minutes_away: float | None = None
    direction_number: int
    is_scheduled: bool
    num_positive_tags: int
    num_negative_tags: int
    track_number: int
    current_station_code: StationCode
    current_station_name: str
    previous_station_code: StationCode | None = Field(default=None, alias="PreviousStationCode")
    previous_station_name: str | None = None
    seconds_since_last_moved: int
    is_currently_holding_or_slow: bool
    seconds_off_schedule: int
    train_speed: int | None = None
    is_not_on_revenue_track: bool
    is_keyed_down: bool
    was_keyed_down: bool
    distance_from_next_station: int | None = None
    lat: float | None = None
    lon: float | None = None
    direction: int | None = None
    are_doors_open_on_left: bool | None = None
    are_doors_open_on_right: bool | None = None
    observed_date: str
    recent_tweets: RecentTweets | None = None

    @property
    def is_arriving(self) -> bool:
        """True while the train is arriving or boarding."""
        return self.min in ARRIVING_ETAS

    def format_eta(self) -> str:
        """ETA for display: ``"5m"`` for minute counts, sentinels unchanged."""
        if not self.min or any(token in self.min for token in ETA_SENTINELS):
            return self.min
        return f"{self.min}m"


class TripInfo(MetroHeroModel):
    """Travel information for a single-leg trip between two stations."""

    from_station_name: str
    from_station_code: StationCode
    to_station_name: str
    to_station_code: StationCode
    trip_station_codes: list[StationCode]
    line_codes: list[LineCode]
    expected_ride_time: float
    predicted_ride_time: float
    time_since_last_train: float
    from_station_train_statuses: list[TrainPrediction]
    date: str
    time_until_next_train: float | None = None
    metro_alerts: list[MetroAlert] | None = None
    metro_alert_keywords: list[str] | None = None
    tweets: list[Tweet] | None = None
    tweet_keywords: list[str] | None = None
    from_station_elevator_outages: list[ElevatorEscalatorOutage] | None = None
    from_station_escalator_outages: list[ElevatorEscalatorOutage] | None = None
    to_station_elevator_outages: list[ElevatorEscalatorOutage] | None = None
    to_station_escalator_outages: list[ElevatorEscalatorOutage] | None = None


def _tag_alias(name: str) -> str:
    return name.upper()


class _TagCounts(BaseModel):
    model_config = ConfigDict(alias_generator=_tag_alias, populate_by_name=True, frozen=True)

    NEGATIVE_TAGS: ClassVar[tuple[str, ...]] = ()

    def counts(self) -> dict[str, int]:
        """Every category keyed by its API name."""
        return self.model_dump(by_alias=True)

    def negative_counts(self) -> dict[str, int]:
        """Counts for the categories shown as warnings."""
        counts = self.counts()
        return {tag: counts[tag] for tag in self.NEGATIVE_TAGS}


class NumStationTagsByType(_TagCounts):
    """Counts of rider reports about a station, by category."""

    NEGATIVE_TAGS = (
        "UNCOMFORTABLE_TEMPS",
        "CROWDED",
        "LONG_WAITING_TIME",
        "NEEDS_WORK",
        "POSTED_TIMES_INACCURATE",
        "SMOKE_OR_FIRE",
        "UNFRIENDLY_OR_UNHELPFUL_STAFF",
    )

    friendly_or_helpful_staff: int
    uncomfortable_temps: int
    ample_security: int
    broken_elevator: int
    broken_escalator: int
    crowded: int
    empty: int
    free_hand_sanitizer_available: int
    free_masks_available: int
    long_waiting_time: int
    needs_work: int
    no_free_hand_sanitizer: int
    no_free_masks: int
    posted_times_inaccurate: int
    smoke_or_fire: int
    unfriendly_or_unhelpful_staff: int


class NumTrainTagsByType(_TagCounts):
    """Counts of rider reports about a train, by category."""

    NEGATIVE_TAGS = (
        "BAD_OPERATOR",
        "BROKEN_INTERCOM",
        "CROWDED",
        "DISRUPTIVE_PASSENGER",
        "ISOLATED_CARS",
        "NEEDS_WORK",
        "RECENTLY_OFFLOADED",
        "UNCOMFORTABLE_RIDE",
        "UNCOMFORTABLE_TEMPS",
        "WRONG_DESTINATION",
        "WRONG_NUM_CARS",
    )

    bad_operator: int
    isolated_cars: int
    new_train: int
    broken_intercom: int
    crowded: int
    disruptive_passenger: int
    empty: int
    good_operator: int
    good_ride: int
    needs_work: int
    recently_offloaded: int
    uncomfortable_ride: int
    uncomfortable_temps: int
    wrong_destination: int
    wrong_num_cars: int


class StationTags(MetroHeroModel):
    """Rider reports about a station."""

    num_tags_by_type: NumStationTagsByType
    num_positive_tags: int
    num_negative_tags: int


class TrainTags(MetroHeroModel):
    """Rider reports about a train."""

    num_tags_by_type: NumTrainTagsByType
    num_positive_tags: int
    num_negative_tags: int


# Keyed aggregates returned by the system-wide endpoints.
TrainPredictions = dict[str, list[TrainPrediction]]
StationReports = dict[str, StationTags]
TrainReports = dict[str, TrainTags]

TRAIN_PREDICTION_LIST = TypeAdapter(list[TrainPrediction])
TWEET_LIST = TypeAdapter(list[Tweet])
TRAIN_PREDICTIONS = TypeAdapter(TrainPredictions)
STATION_REPORTS = TypeAdapter(StationReports)
TRAIN_REPORTS = TypeAdapter(TrainReports)


__all__ = [
    "ETA_SENTINELS",
    "ARRIVING_ETAS",
    "LineCode",
    "MetroHeroModel",
    "ServiceGap",
    "DirectionMetrics",
    "DirectionMetricsByDirection",
    "LineMetrics",
    "SystemMetrics",
    "SystemMetricsResponse",
    "AbridgedTweet",
    "RecentTweets",
    "Tweet",
    "MetroAlert",
    "ElevatorEscalatorOutage",
    "TrainPrediction",
    "TripInfo",
    "NumStationTagsByType",
    "NumTrainTagsByType",
    "StationTags",
    "TrainTags",
    "TrainPredictions",
    "StationReports",
    "TrainReports",
    "TRAIN_PREDICTION_LIST",
    "TWEET_LIST",
    "TRAIN_PREDICTIONS",
    "STATION_REPORTS",
    "TRAIN_REPORTS",
]
