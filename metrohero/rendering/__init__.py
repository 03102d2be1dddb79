"""Console rendering for MetroHero data."""

from metrohero.rendering.composer import compose_departures, compose_plan, compose_stations, render_table
from metrohero.rendering.table_data import Cell, Table

__all__ = ["Cell", "Table", "compose_departures", "compose_plan", "compose_stations", "render_table"]
