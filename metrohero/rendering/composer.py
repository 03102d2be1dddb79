"""Text composer for MetroHero console output."""

from __future__ import annotations

from colorama import Fore, Style

from metrohero.data.schemas import MetroAlert, StationTags, TrainPrediction, TripInfo
from metrohero.data.stations import StationCode, get_directory
from metrohero.rendering.table_data import CENTER, Cell, Table

MAX_DEPARTURES = 3
MAX_NEXT_TRAINS = 4

COLOR_SCHEDULED = Fore.LIGHTBLACK_EX
COLOR_HOLDING = Fore.YELLOW
COLOR_WARNING = Fore.RED

FOOTER = "Source: MetroHero API (https://www.dcmetrohero.com)"


def _styled(text: str, color: str | None, bold: bool, use_color: bool) -> str:
    if not use_color or (color is None and not bold):
        return text
    prefix = (color or "") + (Style.BRIGHT if bold else "")
    return f"{prefix}{text}{Style.RESET_ALL}"


def _pad(cell: Cell, width: int) -> str:
    if cell.align == CENTER:
        return cell.text.center(width)
    return cell.text.ljust(width)


def render_table(table: Table, use_color: bool = True) -> str:
    """Render a table as an ASCII grid; widths ignore color codes."""
    widths = [len(title) for title in table.header]
    for row in table.rows:
        for idx, cell in enumerate(row):
            widths[idx] = max(widths[idx], len(cell.text))

    border = "+" + "+".join("-" * (width + 2) for width in widths) + "+"
    header_border = border.replace("-", "=")
    header = "| " + " | ".join(title.ljust(width) for title, width in zip(table.header, widths)) + " |"

    lines = [border, header, header_border]
    for row in table.rows:
        cells = [_styled(_pad(cell, width), cell.color, cell.bold, use_color) for cell, width in zip(row, widths)]
        lines.append("| " + " | ".join(cells) + " |")
    lines.append(border)
    return "\n".join(lines)


def _notes_cell(prediction: TrainPrediction) -> Cell:
    notes: list[str] = []
    color = None
    if prediction.is_scheduled:
        notes.append("Scheduled (Not Live)")
        color = COLOR_SCHEDULED
    if prediction.is_currently_holding_or_slow:
        notes.append("Holding")
        color = COLOR_HOLDING
    return Cell(", ".join(notes), color=color)


def departures_table(departures: list[TrainPrediction], max_rows: int = MAX_DEPARTURES) -> Table:
    """First ``max_rows`` departures, in the order given."""
    rows = [
        [
            Cell(str(departure.line), color=departure.line.color, bold=True, align=CENTER),
            Cell(departure.destination),
            Cell(departure.format_eta(), bold=departure.is_arriving),
            _notes_cell(departure),
        ]
        for departure in departures[:max_rows]
    ]
    return Table(header=["Line", "Destination", "ETA", "Notes"], rows=rows)


def negative_reports_table(station_tags: StationTags) -> Table:
    """Negative report categories with at least one active report."""
    rows = [
        [Cell(tag), Cell(str(count))]
        for tag, count in station_tags.num_tags_by_type.negative_counts().items()
        if count > 0
    ]
    return Table(header=["Report", "Count"], rows=rows)


def alerts_table(alerts: list[MetroAlert]) -> Table:
    rows = [[Cell(alert.date), Cell(alert.description)] for alert in alerts]
    return Table(header=["Date", "Description"], rows=rows)


def stations_table() -> Table:
    directory = get_directory()
    rows = [[Cell(code.value), Cell(directory.display_name(code))] for code in directory.stations()]
    return Table(header=["Code", "Name"], rows=rows)


def compose_plan(
    trip_info: TripInfo,
    max_departures: int = MAX_DEPARTURES,
    max_next_trains: int = MAX_NEXT_TRAINS,
    use_color: bool = True,
) -> str:
    """Ride summary, next departures and any WMATA alerts for a trip."""
    departures = trip_info.from_station_train_statuses
    title = f"{trip_info.from_station_name} --> {trip_info.to_station_name}"
    next_trains = ", ".join(departure.format_eta() for departure in departures[:max_next_trains])

    lines = [
        _styled(title, None, True, use_color),
        f"Expected ride:    {int(trip_info.predicted_ride_time)}m "
        f"(normally {int(trip_info.expected_ride_time)}m)",
        f"Next train:       {next_trains}",
        "",
        f"Departures from {trip_info.from_station_name}",
        render_table(departures_table(departures, max_departures), use_color),
    ]

    if trip_info.metro_alerts:
        lines.append("")
        lines.append(_styled("WMATA alerts may impact your trip:", COLOR_WARNING, True, use_color))
        lines.append(render_table(alerts_table(trip_info.metro_alerts), use_color))

    lines.append(FOOTER)
    return "\n".join(lines)


def compose_departures(
    station: StationCode,
    departures: list[TrainPrediction],
    station_tags: StationTags,
    max_departures: int = MAX_DEPARTURES,
    use_color: bool = True,
) -> str:
    """Departures table for a station, plus its negative rider reports."""
    lines = [
        f"Departures for {get_directory().display_name(station)} ({station.value})",
        render_table(departures_table(departures, max_departures), use_color),
    ]
    if station_tags.num_negative_tags > 0:
        lines.append(render_table(negative_reports_table(station_tags), use_color))
    lines.append(FOOTER)
    return "\n".join(lines)


def compose_stations(use_color: bool = True) -> str:
    """Every Metrorail station code and name."""
    return "\n".join(
        [
            _styled("WMATA Metrorail Stations", None, True, use_color),
            render_table(stations_table(), use_color),
        ]
    )


__all__ = [
    "MAX_DEPARTURES",
    "MAX_NEXT_TRAINS",
    "FOOTER",
    "render_table",
    "departures_table",
    "negative_reports_table",
    "alerts_table",
    "stations_table",
    "compose_plan",
    "compose_departures",
    "compose_stations",
]
