import numpy as np
import pandas as pd
import pytest

from src.models.animal_rescue import (
    correlation_matrix,
    correlation_tests,
    describe_numeric,
    group_difference_test,
    group_summary,
    yearly_summary,
)


def test_describe_numeric():
    df = pd.DataFrame({"x": [1.0, 2.0, 3.0, 4.0, 100.0]})
    out = describe_numeric(df, ["x"]).iloc[0]

    assert out["count"] == 5
    assert out["median"] == 3.0
    assert out["mean"] == pytest.approx(22.0)
    assert out["skew"] > 0


def test_group_summary_sorted_by_count(recoded_incidents):
    out = group_summary(recoded_incidents, "time_bin")

    assert list(out.columns) == ["time_bin", "count", "mean", "median", "p90"]
    assert out["count"].sum() == len(recoded_incidents)
    assert out["count"].is_monotonic_decreasing


def test_yearly_summary(recoded_incidents):
    out = yearly_summary(recoded_incidents)

    assert out["cal_year"].tolist() == [2015, 2016, 2017, 2018, 2019]
    assert out["incidents"].sum() == len(recoded_incidents)
    assert out["total_cost"].sum() == pytest.approx(recoded_incidents["incident_notional_cost"].sum())


def test_correlation_matrix_skips_constant_columns():
    df = pd.DataFrame({"a": [1, 2, 3, 4], "b": [2, 4, 6, 8], "c": [5, 5, 5, 5]})
    corr = correlation_matrix(df, ["a", "b", "c", "missing"])

    assert list(corr.columns) == ["a", "b"]
    assert corr.loc["a", "b"] == pytest.approx(1.0)


def test_correlation_matrix_spearman(recoded_incidents):
    corr = correlation_matrix(recoded_incidents, method="spearman")
    assert np.allclose(np.diag(corr.values), 1.0)


def test_correlation_matrix_rejects_method():
    with pytest.raises(ValueError):
        correlation_matrix(pd.DataFrame({"a": [1, 2]}), ["a"], method="kendall")


def test_correlation_tests_pump_hours_leads(recoded_incidents):
    out = correlation_tests(recoded_incidents)

    assert out.iloc[0]["feature"] == "pump_hours_total"
    assert out.iloc[0]["pearson_r"] > 0.9
    assert out.iloc[0]["pearson_p"] < 0.001
    assert "incident_notional_cost" not in set(out["feature"])


def test_group_difference_test(recoded_incidents):
    res = group_difference_test(recoded_incidents, "animal_class", "Domestic", "Wild")

    counts = recoded_incidents["animal_class"].value_counts()
    assert res["n_a"] == counts["Domestic"]
    assert res["n_b"] == counts["Wild"]
    assert 0 <= res["welch_p"] <= 1
    assert 0 <= res["mannwhitney_p"] <= 1


def test_group_difference_test_needs_both_groups(recoded_incidents):
    with pytest.raises(ValueError, match="animal_class"):
        group_difference_test(recoded_incidents, "animal_class", "Domestic", "Unknown")
