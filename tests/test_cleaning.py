import pandas as pd

from src.models.animal_rescue import clean_incidents, drop_sentinel_rows, parse_call_time


def test_drop_sentinel_rows():
    df = pd.DataFrame({"a": ["1", "NULL", " NULL", "", None, "2"], "b": ["x"] * 6})
    out = drop_sentinel_rows(df, ["a"])
    assert out["a"].tolist() == ["1", "2"]


def test_parse_call_time_formats():
    s = pd.Series(["01/02/2015 03:04", "2016-05-06 07:08:09", "garbage"])
    out = parse_call_time(s)

    assert out.iloc[0] == pd.Timestamp(2015, 2, 1, 3, 4)
    assert out.iloc[1] == pd.Timestamp(2016, 5, 6, 7, 8, 9)
    assert pd.isna(out.iloc[2])


def test_clean_incidents_report(dirty_incidents):
    df, report = clean_incidents(dirty_incidents)

    assert report["n_rows_input"] == 47
    assert report["n_dropped_sentinel"] == 4
    assert report["n_dropped_bad_call_time"] == 1
    assert report["n_dropped_non_positive"] == 1
    assert report["n_dropped_duplicates"] == 1
    assert report["n_dropped_outside_years"] == 0
    assert report["n_rows_final"] == 40
    assert len(df) == 40
    assert df["incident_number"].is_unique


def test_clean_incidents_types(raw_incidents):
    df, _ = clean_incidents(raw_incidents)

    assert pd.api.types.is_datetime64_any_dtype(df["date_time_of_call"])
    assert pd.api.types.is_integer_dtype(df["cal_year"])
    for c in ["pump_count", "pump_hours_total", "incident_notional_cost"]:
        assert pd.api.types.is_numeric_dtype(df[c])
        assert (df[c] > 0).all()


def test_clean_incidents_year_window(raw_incidents):
    df, report = clean_incidents(raw_incidents, min_year=2016, max_year=2018)

    assert df["cal_year"].between(2016, 2018).all()
    assert report["n_dropped_outside_years"] == len(raw_incidents) - len(df)
