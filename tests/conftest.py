from __future__ import annotations

import pytest

from vaka_kielet.core.data_loader import AreaRecord, Dataset


SAMPLE_CSV = (
    "alue;kaikki;vieraskieliset\n"
    "Helsinki;1000;150\n"
    "KOKO MAA;500000;40000\n"
)


@pytest.fixture
def helsinki() -> AreaRecord:
    return AreaRecord(area_name="Helsinki", total_children=1000, foreign_language_children=150)


@pytest.fixture
def koko_maa() -> AreaRecord:
    return AreaRecord(area_name="KOKO MAA", total_children=500000, foreign_language_children=40000)


@pytest.fixture
def sample_dataset(helsinki, koko_maa) -> Dataset:
    return Dataset(records=(helsinki, koko_maa), source="test")


@pytest.fixture
def sample_csv_path(tmp_path):
    path = tmp_path / "paivakoti_kielet.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path
