from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from core.records import Record, RecordSet

from factories import make_record


@pytest.fixture()
def scenario_records() -> RecordSet:
    """The two-record old smoker / young non-smoker example."""
    return RecordSet([
        make_record(age=60, bmi=25.0, children=0, smoker=True, region="southeast", charges=30000.0),
        make_record(age=18, bmi=22.0, children=0, smoker=False, region="northwest", charges=2000.0),
    ])


@pytest.fixture()
def sample_records() -> RecordSet:
    """Eight records, two per region, a spread of ages / BMI / children."""
    rows: List[Record] = [
        make_record(age=19, bmi=27.9, children=0, smoker=True, region="southwest", charges=16884.92),
        make_record(age=18, bmi=33.77, children=1, smoker=False, region="southeast", charges=1725.55),
        make_record(age=28, bmi=33.0, children=3, smoker=False, region="southeast", charges=4449.46),
        make_record(age=33, bmi=22.705, children=0, smoker=False, region="northwest", charges=21984.47),
        make_record(age=32, bmi=28.88, children=0, smoker=False, region="northwest", charges=3866.86),
        make_record(age=46, bmi=33.44, children=1, smoker=False, region="southwest", charges=8240.59),
        make_record(age=37, bmi=27.74, children=3, smoker=False, region="northeast", charges=7281.51),
        make_record(age=60, bmi=25.84, children=0, smoker=True, region="NorthEast", charges=28923.14),
    ]
    return RecordSet(rows)


@pytest.fixture()
def empty_records() -> RecordSet:
    return RecordSet()


CSV_HEADER = "age,sex,bmi,children,smoker,region,charges\n"


@pytest.fixture()
def write_csv(tmp_path: Path):
    """Write CSV text to a temp file and return its path."""
    def _write(body: str, *, header: str = CSV_HEADER, name: str = "insurance.csv") -> Path:
        path = tmp_path / name
        path.write_text(header + body, encoding="utf-8")
        return path
    return _write
