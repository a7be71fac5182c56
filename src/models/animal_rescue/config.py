"""
Configuration for the London Fire Brigade animal rescue cost analysis.

Data source, output locations, recoding vocabularies and model predictor
lists live here so notebooks and the main script share one definition.
"""

import os
from pathlib import Path


# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).resolve().parents[3]

DATA_URL = os.getenv(
    "ANIMAL_RESCUE_DATA_URL",
    "https://raw.githubusercontent.com/rfordatascience/tidytuesday/master/data/2021/2021-06-29/animal_rescues.csv",
)
OUTPUT_DIR = Path(os.getenv("ANIMAL_RESCUE_OUTPUT_DIR", str(PROJECT_ROOT / "output")))


# =============================================================================
# COLUMNS
# =============================================================================

INCIDENT_COL = "incident_number"
CALL_TIME_COL = "date_time_of_call"
YEAR_COL = "cal_year"
PUMP_COUNT_COL = "pump_count"
PUMP_HOURS_COL = "pump_hours_total"
HOURLY_COST_COL = "hourly_notional_cost"
COST_COL = "incident_notional_cost"
ANIMAL_COL = "animal_group_parent"
BOROUGH_COL = "borough"

REQUIRED_COLUMNS = [
    INCIDENT_COL,
    CALL_TIME_COL,
    YEAR_COL,
    PUMP_COUNT_COL,
    PUMP_HOURS_COL,
    COST_COL,
    ANIMAL_COL,
    BOROUGH_COL,
]
OPTIONAL_COLUMNS = [HOURLY_COST_COL]

# Missing values are written as the literal string NULL in the published file
SENTINEL = "NULL"

CALL_TIME_FORMATS = [
    "%d/%m/%Y %H:%M",
    "%d/%m/%Y %H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
]


# =============================================================================
# RECODING
# =============================================================================

# Day covers [DAY_START_HOUR, NIGHT_START_HOUR)
DAY_START_HOUR = 6
NIGHT_START_HOUR = 18

TIME_BIN_ORDER = ["Night", "Morning", "Afternoon", "Evening"]

UNKNOWN = "Unknown"

DOMESTIC_ANIMALS = {
    "cat",
    "dog",
    "hamster",
    "rabbit",
    "ferret",
    "budgie",
    "tortoise",
    "lizard",
    "snake",
    "fish",
    "horse",
    "cow",
    "bull",
    "sheep",
    "lamb",
    "goat",
    "unknown - domestic animal or pet",
    "unknown - heavy livestock animal",
    "unknown - animal rescue from water - farm animal",
    "unknown - animal rescue from below ground - farm animal",
}

WILD_ANIMALS = {
    "bird",
    "pigeon",
    "fox",
    "deer",
    "squirrel",
    "hedgehog",
    "badger",
    "unknown - wild animal",
}

# Inner London as defined by the London Government Act 1963
INNER_LONDON_BOROUGHS = {
    "CAMDEN",
    "CITY OF LONDON",
    "GREENWICH",
    "HACKNEY",
    "HAMMERSMITH AND FULHAM",
    "ISLINGTON",
    "KENSINGTON AND CHELSEA",
    "LAMBETH",
    "LEWISHAM",
    "SOUTHWARK",
    "TOWER HAMLETS",
    "WANDSWORTH",
    "WESTMINSTER",
}

OUTER_LONDON_BOROUGHS = {
    "BARKING AND DAGENHAM",
    "BARNET",
    "BEXLEY",
    "BRENT",
    "BROMLEY",
    "CROYDON",
    "EALING",
    "ENFIELD",
    "HARINGEY",
    "HARROW",
    "HAVERING",
    "HILLINGDON",
    "HOUNSLOW",
    "KINGSTON UPON THAMES",
    "MERTON",
    "NEWHAM",
    "REDBRIDGE",
    "RICHMOND UPON THAMES",
    "SUTTON",
    "WALTHAM FOREST",
}


# =============================================================================
# MODELLING
# =============================================================================

TARGET = COST_COL

MODEL_A_NUMERIC = [PUMP_HOURS_COL]
MODEL_A_CATEGORICAL = []

MODEL_B_NUMERIC = [PUMP_HOURS_COL, PUMP_COUNT_COL, YEAR_COL]
MODEL_B_CATEGORICAL = ["day_night", "animal_class", "borough_zone"]

CORRELATION_COLUMNS = [
    COST_COL,
    PUMP_HOURS_COL,
    PUMP_COUNT_COL,
    YEAR_COL,
    "hour",
    "is_night",
    "is_wild",
    "is_inner",
]

ALPHA = 0.05
TEST_SIZE = 0.20
SEED = 42
