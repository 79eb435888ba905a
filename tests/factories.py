from __future__ import annotations

from core.records import Record


def make_record(
    age: int = 30,
    bmi: float = 25.0,
    children: int = 0,
    smoker: bool = False,
    region: str = "northeast",
    charges: float = 5000.0,
    sex: str = "female",
) -> Record:
    return Record(
        age=age, sex=sex, bmi=bmi, children=children,
        smoker=smoker, region=region, charges=charges,
    )
