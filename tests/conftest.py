import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest


ANIMALS = ["Cat", "Bird", "Dog", "Fox", "cat", "Horse", "Squirrel", "Unknown - Wild Animal", "Deer", "Rabbit"]
BOROUGHS = ["Croydon", "CAMDEN", "Southwark", "Barnet", "Kensington And Chelsea", "Enfield", "Hackney", "Bromley"]
HOURLY_RATE = {2015: 298, 2016: 326, 2017: 328, 2018: 333, 2019: 333}


def make_raw_incidents(n: int = 240, seed: int = 7) -> pd.DataFrame:
    """
    Synthetic incidents in the published snake_case layout, every value as text.
    Cost = pump hours * hourly rate for the year, plus an extra charge for wild animals.
    """
    rng = np.random.default_rng(seed)
    rows = []
    for i in range(n):
        year = 2015 + (i % 5)
        hour = int(rng.integers(0, 24))
        day = int(rng.integers(1, 28))
        month = int(rng.integers(1, 13))
        pumps = int(rng.integers(1, 3))
        hours = float(pumps * rng.integers(1, 4))
        animal = ANIMALS[i % len(ANIMALS)]
        borough = BOROUGHS[(i * 3) % len(BOROUGHS)]
        rate = HOURLY_RATE[year]
        wild_extra = 150 if animal.casefold() in ("bird", "fox", "squirrel", "unknown - wild animal", "deer") else 0
        cost = hours * rate + wild_extra + float(rng.normal(0, 20))
        rows.append(
            {
                "incident_number": f"{100000 + i}",
                "date_time_of_call": f"{day:02d}/{month:02d}/{year} {hour:02d}:{int(rng.integers(0, 60)):02d}",
                "cal_year": str(year),
                "pump_count": str(pumps),
                "pump_hours_total": f"{hours:.1f}",
                "hourly_notional_cost": str(rate),
                "incident_notional_cost": f"{cost:.2f}",
                "animal_group_parent": animal,
                "borough": borough,
            }
        )
    return pd.DataFrame(rows)


@pytest.fixture()
def raw_incidents():
    return make_raw_incidents()


@pytest.fixture()
def dirty_incidents():
    """Clean base plus rows that cleaning must remove."""
    df = make_raw_incidents(n=40)
    bad = pd.DataFrame(
        [
            {**df.iloc[0].to_dict(), "incident_number": "900001", "incident_notional_cost": "NULL"},
            {**df.iloc[1].to_dict(), "incident_number": "900002", "pump_count": "NULL"},
            {**df.iloc[2].to_dict(), "incident_number": "900003", "pump_hours_total": " NULL "},
            {**df.iloc[3].to_dict(), "incident_number": "900004", "date_time_of_call": "not a date"},
            {**df.iloc[4].to_dict(), "incident_number": "900005", "pump_hours_total": "0"},
            {**df.iloc[5].to_dict(), "incident_number": "900006", "incident_notional_cost": ""},
            # duplicate incident number
            {**df.iloc[6].to_dict()},
        ]
    )
    return pd.concat([df, bad], ignore_index=True)


@pytest.fixture()
def recoded_incidents(raw_incidents):
    from src.models.animal_rescue import clean_incidents, recode_incidents

    df, _ = clean_incidents(raw_incidents)
    return recode_incidents(df)


@pytest.fixture()
def rescue_csv(tmp_path, raw_incidents):
    path = tmp_path / "animal_rescues.csv"
    raw_incidents.to_csv(path, index=False)
    return path
