from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

DATA_DIR = Path(__file__).parent / "data"


def read_fixture(name: str) -> Any:
    with open(DATA_DIR / name, "r", encoding="utf-8") as handle:
        return json.load(handle)


@pytest.fixture()
def load_fixture() -> Callable[[str], Any]:
    return read_fixture


@pytest.fixture(autouse=True)
def _no_api_key(monkeypatch) -> None:
    monkeypatch.delenv("METROHERO_API_KEY", raising=False)
