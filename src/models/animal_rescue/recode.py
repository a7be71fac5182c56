"""
recode.py

Derived categorical columns for the rescue cost models.

Rules:
1) hour comes from the call timestamp; time_bin is
      Night (0–5), Morning (6–11), Afternoon (12–17), Evening (18–23)
2) day_night is Day for 06:00–17:59, Night otherwise
3) animal_class is Domestic / Wild from the animal group, anything unmapped is Unknown
4) borough_zone is Inner / Outer London, anything unmapped is Unknown

Each categorical also gets a 0/1 indicator (is_night, is_wild, is_inner) for correlation work.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from . import config


def add_hour(df: pd.DataFrame, time_col: str = config.CALL_TIME_COL, out_col: str = "hour") -> pd.DataFrame:
    out = df.copy()
    out[out_col] = pd.to_datetime(out[time_col]).dt.hour.astype(int)
    return out


def add_time_of_day_bin(df: pd.DataFrame, hour_col: str = "hour", out_col: str = "time_bin") -> pd.DataFrame:
    """
    Adds time-of-day bins:
      Night (0–5), Morning (6–11), Afternoon (12–17), Evening (18–23)
    """
    out = df.copy()
    h = out[hour_col]
    out[out_col] = np.select(
        [
            (h >= 0) & (h <= 5),
            (h >= 6) & (h <= 11),
            (h >= 12) & (h <= 17),
        ],
        ["Night", "Morning", "Afternoon"],
        default="Evening",
    )
    return out


def add_day_night(
    df: pd.DataFrame,
    hour_col: str = "hour",
    out_col: str = "day_night",
    day_start: int = config.DAY_START_HOUR,
    night_start: int = config.NIGHT_START_HOUR,
) -> pd.DataFrame:
    out = df.copy()
    h = out[hour_col]
    is_day = (h >= day_start) & (h < night_start)
    out[out_col] = np.where(is_day, "Day", "Night")
    out["is_night"] = (~is_day).astype(int)
    return out


def classify_animal(value) -> str:
    """
    Map an animal group to Domestic / Wild.
    Matching ignores case and surrounding whitespace ("cat" and "Cat" are the same group).
    """
    if value is None or (isinstance(value, float) and np.isnan(value)):
        return config.UNKNOWN
    key = str(value).strip().casefold()
    if key in config.DOMESTIC_ANIMALS:
        return "Domestic"
    if key in config.WILD_ANIMALS:
        return "Wild"
    return config.UNKNOWN


def add_animal_class(df: pd.DataFrame, animal_col: str = config.ANIMAL_COL, out_col: str = "animal_class") -> pd.DataFrame:
    out = df.copy()
    out[out_col] = out[animal_col].map(classify_animal)
    out["is_wild"] = np.where(out[out_col] == "Wild", 1, np.where(out[out_col] == "Domestic", 0, np.nan))
    return out


def classify_borough(value) -> str:
    if value is None or (isinstance(value, float) and np.isnan(value)):
        return config.UNKNOWN
    # Published names mix "Kensington And Chelsea", "KENSINGTON AND CHELSEA" and stray double spaces
    key = " ".join(str(value).split()).upper().replace("&", "AND")
    if key in config.INNER_LONDON_BOROUGHS:
        return "Inner"
    if key in config.OUTER_LONDON_BOROUGHS:
        return "Outer"
    return config.UNKNOWN


def add_borough_zone(df: pd.DataFrame, borough_col: str = config.BOROUGH_COL, out_col: str = "borough_zone") -> pd.DataFrame:
    out = df.copy()
    out[out_col] = out[borough_col].map(classify_borough)
    out["is_inner"] = np.where(out[out_col] == "Inner", 1, np.where(out[out_col] == "Outer", 0, np.nan))
    return out


def recode_incidents(df: pd.DataFrame) -> pd.DataFrame:
    out = add_hour(df)
    out = add_time_of_day_bin(out)
    out = add_day_night(out)
    out = add_animal_class(out)
    out = add_borough_zone(out)
    return out
