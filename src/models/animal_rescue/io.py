from __future__ import annotations

import logging
import re

import pandas as pd

from . import config

logger = logging.getLogger(__name__)


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Normalise headers to snake_case so both published header styles load the same way:
      - "IncidentNotionalCost(£)" -> "incident_notional_cost"
      - "PumpHoursTotal"          -> "pump_hours_total"
      - "pump_hours_total"        -> unchanged
    """
    def _snake(name: str) -> str:
        s = re.sub(r"\(.*?\)", "", str(name)).strip()
        s = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s)
        s = re.sub(r"[^0-9A-Za-z]+", "_", s)
        return s.strip("_").lower()

    out = df.copy()
    out.columns = [_snake(c) for c in out.columns]
    return out


def load_rescues_csv(source=None, columns: list | None = None) -> pd.DataFrame:
    """
    Load the animal rescue incident CSV from a local path or URL.

    Rules:
      - every value is read as text so the NULL sentinel survives until cleaning
      - headers are normalised to snake_case
      - all required columns must be present, otherwise ValueError
      - only analysis columns are returned (optional ones when available)
    """
    if source is None:
        source = config.DATA_URL
    if columns is None:
        columns = config.REQUIRED_COLUMNS

    logger.debug("Reading incidents from %s", source)
    raw = pd.read_csv(source, dtype=str, keep_default_na=False, encoding_errors="replace")
    df = normalize_columns(raw)

    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}. Available: {list(df.columns)}")

    keep = list(columns) + [c for c in config.OPTIONAL_COLUMNS if c in df.columns and c not in columns]
    return df[keep].reset_index(drop=True)
