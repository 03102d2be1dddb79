from __future__ import annotations

from colorama import Fore, Style

from metrohero.data.schemas import TRAIN_PREDICTION_LIST, StationTags, TripInfo
from metrohero.data.stations import StationCode
from metrohero.rendering.composer import (
    FOOTER,
    compose_departures,
    compose_plan,
    compose_stations,
    departures_table,
    negative_reports_table,
    render_table,
)
from metrohero.rendering.table_data import CENTER, Cell, Table


def _texts(table: Table) -> list[list[str]]:
    return [[cell.text for cell in row] for row in table.rows]


def test_render_table_plain() -> None:
    table = Table(header=["A", "Name"], rows=[[Cell("x"), Cell("yy", align=CENTER)]])

    assert render_table(table, use_color=False).splitlines() == [
        "+---+------+",
        "| A | Name |",
        "+===+======+",
        "| x |  yy  |",
        "+---+------+",
    ]


def test_render_table_color_does_not_change_width() -> None:
    table = Table(header=["Line"], rows=[[Cell("RD", color=Fore.RED, bold=True, align=CENTER)]])

    rendered = render_table(table, use_color=True).splitlines()

    assert rendered[3] == f"| {Fore.RED}{Style.BRIGHT} RD {Style.RESET_ALL} |"
    assert len(rendered[0]) == len("+------+")


def test_render_table_empty() -> None:
    assert render_table(Table(header=["Code", "Name"]), use_color=False).splitlines() == [
        "+------+------+",
        "| Code | Name |",
        "+======+======+",
        "+------+------+",
    ]


def test_departures_table(load_fixture) -> None:
    departures = TRAIN_PREDICTION_LIST.validate_python(load_fixture("station_train_predictions.json"))

    table = departures_table(departures)

    assert table.header == ["Line", "Destination", "ETA", "Notes"]
    assert _texts(table) == [
        ["OR", "Vienna", "BRD", ""],
        ["SV", "Largo", "ARR", ""],
        ["OR", "Vienna", "9m", "Scheduled (Not Live)"],
    ]
    assert table.rows[0][2].bold
    assert not table.rows[2][2].bold
    assert table.rows[1][0].color == Fore.WHITE


def test_departures_table_truncates(load_fixture) -> None:
    departures = TRAIN_PREDICTION_LIST.validate_python(load_fixture("station_train_predictions.json"))

    assert len(departures_table(departures, max_rows=2).rows) == 2
    assert departures_table([], max_rows=3).rows == []


def test_negative_reports_table(load_fixture) -> None:
    tags = StationTags.model_validate(load_fixture("station_tags.json"))

    assert _texts(negative_reports_table(tags)) == [
        ["UNCOMFORTABLE_TEMPS", "2"],
        ["CROWDED", "3"],
        ["POSTED_TIMES_INACCURATE", "1"],
    ]


def test_compose_departures(load_fixture) -> None:
    departures = TRAIN_PREDICTION_LIST.validate_python(load_fixture("station_train_predictions.json"))
    tags = StationTags.model_validate(load_fixture("station_tags.json"))

    output = compose_departures(StationCode.K03, departures, tags, use_color=False)
    lines = output.splitlines()

    assert lines[0] == "Departures for Virginia Square-GMU (K03)"
    assert "|  OR  | Vienna      | BRD | " in output
    assert "9m" in output
    assert "ARRm" not in output
    assert "CROWDED" in output
    assert sum(line.startswith("+=") for line in lines) == 2
    assert lines[-1] == FOOTER
    assert "\x1b[" not in output


def test_compose_departures_without_negative_reports(load_fixture) -> None:
    departures = TRAIN_PREDICTION_LIST.validate_python(load_fixture("station_train_predictions.json"))
    tags = StationTags.model_validate(load_fixture("station_tags_quiet.json"))

    output = compose_departures(StationCode.K03, departures, tags, use_color=False)

    assert "Report" not in output
    assert sum(line.startswith("+=") for line in output.splitlines()) == 1


def test_compose_plan(load_fixture) -> None:
    trip_info = TripInfo.model_validate(load_fixture("trip_info.json"))

    output = compose_plan(trip_info, use_color=False)
    lines = output.splitlines()

    assert lines[0] == "Virginia Square-GMU --> Rosslyn"
    assert lines[1] == "Expected ride:    7m (normally 6m)"
    assert lines[2] == "Next train:       ARR, 6m"
    assert "Departures from Virginia Square-GMU" in lines
    assert "Holding" in output
    assert "WMATA alerts may impact your trip:" in output
    assert "single tracking" in output
    assert lines[-1] == FOOTER


def test_compose_plan_limits_next_trains(load_fixture) -> None:
    trip_info = TripInfo.model_validate(load_fixture("trip_info.json"))

    output = compose_plan(trip_info, max_next_trains=1, use_color=False)

    assert output.splitlines()[2] == "Next train:       ARR"


def test_compose_plan_without_trains_or_alerts(load_fixture) -> None:
    trip_info = TripInfo.model_validate(load_fixture("trip_info_minimal.json"))

    output = compose_plan(trip_info, use_color=False)

    assert output.splitlines()[2] == "Next train:       "
    assert "WMATA alerts" not in output
    assert output.splitlines()[-1] == FOOTER


def test_compose_plan_colored_title(load_fixture) -> None:
    trip_info = TripInfo.model_validate(load_fixture("trip_info.json"))

    output = compose_plan(trip_info, use_color=True)

    assert output.splitlines()[0] == f"{Style.BRIGHT}Virginia Square-GMU --> Rosslyn{Style.RESET_ALL}"


def test_compose_stations() -> None:
    output = compose_stations(use_color=False)
    lines = output.splitlines()

    assert lines[0] == "WMATA Metrorail Stations"
    assert any(line.startswith("| C05  | Rosslyn") for line in lines)
    assert "UNKNOWN" not in output
    # title, three borders, header and one row per station
    assert len(lines) == 1 + 4 + 102
