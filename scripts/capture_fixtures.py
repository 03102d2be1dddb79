"""Capture live MetroHero responses as test fixtures."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Any, Callable

from dotenv import load_dotenv
from pydantic import BaseModel, TypeAdapter

from metrohero.data.client import MetroHeroClient
from metrohero.data.errors import MetroHeroError
from metrohero.data.schemas import (
    STATION_REPORTS,
    TRAIN_PREDICTION_LIST,
    TRAIN_PREDICTIONS,
    TRAIN_REPORTS,
    TWEET_LIST,
)
from metrohero.data.stations import resolve_code

DEFAULT_OUTPUT_DIR = "tests/data"

logger = logging.getLogger("capture_fixtures")


def _dump(value: Any, adapter: TypeAdapter | None = None) -> Any:
    if adapter is not None:
        return adapter.dump_python(value, mode="json", by_alias=True, exclude_unset=True)
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_unset=True)
    return value


def _write_json(path: Path, payload: Any) -> None:
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, ensure_ascii=False)
        handle.write("\n")


def _captures(
    client: MetroHeroClient, station: str, destination: str, train_id: str | None
) -> list[tuple[str, Callable[[], Any], TypeAdapter | None]]:
    from_code = resolve_code(station)
    to_code = resolve_code(destination)
    captures: list[tuple[str, Callable[[], Any], TypeAdapter | None]] = [
        ("system_metrics.json", client.get_system_metrics, None),
        ("trip_info.json", lambda: client.get_trip_info(from_code, to_code), None),
        ("tweets.json", client.get_tweets, TWEET_LIST),
        ("train_positions.json", client.get_train_positions, TRAIN_PREDICTION_LIST),
        ("global_train_reports.json", client.get_train_reports, TRAIN_REPORTS),
        ("global_train_predictions.json", client.get_train_predictions, TRAIN_PREDICTIONS),
        (
            "station_train_predictions.json",
            lambda: client.get_station_train_predictions(from_code),
            TRAIN_PREDICTION_LIST,
        ),
        ("global_station_reports.json", client.get_station_reports, STATION_REPORTS),
        ("station_tags.json", lambda: client.get_station_report(from_code), None),
    ]
    if train_id:
        captures.append(("train_tags.json", lambda: client.get_train_report(train_id), None))
    return captures


def main() -> int:
    parser = argparse.ArgumentParser(description="Capture MetroHero API responses as JSON fixtures")
    parser.add_argument("--output-dir", default=DEFAULT_OUTPUT_DIR, help="Directory to write fixtures to")
    parser.add_argument("--station", default="K03", help="Station code or name for station endpoints")
    parser.add_argument("--to-station", default="C05", help="Destination for the trip endpoint")
    parser.add_argument("--train-id", help="Train id for the single-train report")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    load_dotenv()

    try:
        client = MetroHeroClient.from_env()
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    failures = 0
    with client:
        try:
            captures = _captures(client, args.station, args.to_station, args.train_id)
        except MetroHeroError as exc:
            print(exc, file=sys.stderr)
            return 1

        for filename, fetch, adapter in captures:
            try:
                payload = _dump(fetch(), adapter)
            except MetroHeroError as exc:
                logger.error(f"{filename}: {exc}")
                failures += 1
                continue
            _write_json(output_dir / filename, payload)
            logger.info(f"Wrote {output_dir / filename}")

    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
