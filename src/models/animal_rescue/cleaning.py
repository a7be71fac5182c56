from __future__ import annotations

import logging

import pandas as pd

from . import config

logger = logging.getLogger(__name__)


def drop_sentinel_rows(df: pd.DataFrame, cols: list[str], sentinel: str = config.SENTINEL) -> pd.DataFrame:
    """
    Drop rows where any of cols is missing, blank, or equal to the sentinel string.
    """
    mask = pd.Series(True, index=df.index)
    for c in cols:
        s = df[c]
        text = s.astype(str).str.strip()
        mask &= s.notna() & (text != "") & (text != sentinel)
    return df[mask].copy()


def parse_call_time(series: pd.Series, formats: list[str] | None = None) -> pd.Series:
    """
    Parse call timestamps trying each format in turn; the first format that matches wins.
    Anything no format matches becomes NaT.
    """
    if formats is None:
        formats = config.CALL_TIME_FORMATS

    text = series.astype(str).str.strip()
    parsed = pd.Series(pd.NaT, index=series.index, dtype="datetime64[ns]")
    for fmt in formats:
        parsed = parsed.fillna(pd.to_datetime(text, format=fmt, errors="coerce"))
    return parsed


def clean_incidents(
    df: pd.DataFrame,
    min_year: int | None = None,
    max_year: int | None = None,
) -> tuple[pd.DataFrame, dict]:
    """
    Incident table -> analysis-ready table with:
    - NULL sentinel rows removed for call time, pump count, pump hours and cost
    - numeric coercion of year, pump count, pump hours and costs
    - unparseable call times dropped
    - non-positive pump count / pump hours / cost dropped
    - duplicate incident numbers dropped (first occurrence kept)
    - optional calendar-year window [min_year, max_year]

    Returns:
      (clean_df, drop_report)
    """
    n_input = len(df)

    required = [config.CALL_TIME_COL, config.PUMP_COUNT_COL, config.PUMP_HOURS_COL, config.COST_COL]
    out = drop_sentinel_rows(df, required)
    n_after_sentinel = len(out)

    numeric_cols = [config.YEAR_COL, config.PUMP_COUNT_COL, config.PUMP_HOURS_COL, config.COST_COL]
    if config.HOURLY_COST_COL in out.columns:
        numeric_cols.append(config.HOURLY_COST_COL)
    for c in numeric_cols:
        out[c] = pd.to_numeric(out[c], errors="coerce")

    out[config.CALL_TIME_COL] = parse_call_time(out[config.CALL_TIME_COL])
    bad_time = out[config.CALL_TIME_COL].isna()
    n_bad_time = int(bad_time.sum())
    out = out[~bad_time].copy()

    # Fall back to the call timestamp when the year column is missing
    out[config.YEAR_COL] = out[config.YEAR_COL].fillna(out[config.CALL_TIME_COL].dt.year)

    valid = (
        (out[config.PUMP_COUNT_COL] > 0)
        & (out[config.PUMP_HOURS_COL] > 0)
        & (out[config.COST_COL] > 0)
    )
    n_non_positive = int((~valid).sum())
    out = out[valid].copy()

    n_before_dupes = len(out)
    out = out.drop_duplicates(subset=[config.INCIDENT_COL], keep="first")
    n_duplicates = n_before_dupes - len(out)

    n_before_years = len(out)
    if min_year is not None:
        out = out[out[config.YEAR_COL] >= min_year]
    if max_year is not None:
        out = out[out[config.YEAR_COL] <= max_year]
    n_outside_years = n_before_years - len(out)

    out[config.YEAR_COL] = out[config.YEAR_COL].astype(int)
    out = out.reset_index(drop=True)

    drop_report = {
        "n_rows_input": int(n_input),
        "n_dropped_sentinel": int(n_input - n_after_sentinel),
        "n_dropped_bad_call_time": n_bad_time,
        "n_dropped_non_positive": n_non_positive,
        "n_dropped_duplicates": int(n_duplicates),
        "n_dropped_outside_years": int(n_outside_years),
        "n_rows_final": int(len(out)),
    }
    logger.debug("Cleaning report: %s", drop_report)
    return out, drop_report
