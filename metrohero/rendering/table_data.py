"""Data structures for console tables."""

from __future__ import annotations

from dataclasses import dataclass, field

LEFT = "left"
CENTER = "center"


@dataclass(frozen=True)
class Cell:
    """Single table cell; ``color`` is a colorama foreground code."""

    text: str
    color: str | None = None
    bold: bool = False
    align: str = LEFT


@dataclass(frozen=True)
class Table:
    """Header plus rows of cells, ready to render."""

    header: list[str]
    rows: list[list[Cell]] = field(default_factory=list)


__all__ = ["LEFT", "CENTER", "Cell", "Table"]
