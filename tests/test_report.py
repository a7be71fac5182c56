import numpy as np
import pandas as pd

from src.models.animal_rescue import (
    cleaning_summary_text,
    comparison_summary_text,
    correlation_summary_text,
    model_summary_text,
    run_regression_comparison,
)


def test_cleaning_summary_text():
    report = {
        "n_rows_input": 10,
        "n_dropped_sentinel": 2,
        "n_dropped_bad_call_time": 1,
        "n_dropped_non_positive": 0,
        "n_dropped_duplicates": 1,
        "n_dropped_outside_years": 0,
        "n_rows_final": 6,
    }
    text = cleaning_summary_text(report)
    assert "Rows loaded: 10" in text
    assert "Rows retained for analysis: 6" in text


def test_correlation_summary_text_empty():
    empty = pd.DataFrame(columns=["feature", "n", "pearson_r", "pearson_p", "spearman_rho", "spearman_p"])
    assert "No usable predictors" in correlation_summary_text(empty)


def test_correlation_summary_text_zero_p():
    tests = pd.DataFrame(
        [{"feature": "pump_hours_total", "n": 100, "pearson_r": 0.99, "pearson_p": 0.0, "spearman_rho": 0.98, "spearman_p": 0.0}]
    )
    text = correlation_summary_text(tests)
    assert "pump_hours_total: r=0.990" in text
    assert "< 1e-300" in text


def test_model_and_comparison_text(recoded_incidents):
    res = run_regression_comparison(recoded_incidents)

    text_a = model_summary_text("Model A", res["formula_a"], res["fit_stats_a"], res["coef_a"])
    assert text_a.startswith("Model A: incident_notional_cost ~ pump_hours_total")
    assert "pump_hours_total:" in text_a
    assert "Intercept" not in text_a

    text_cmp = comparison_summary_text(res["comparison"], res["holdout_a"], res["holdout_b"])
    assert "Model A nested in Model B" in text_cmp
    assert "Holdout RMSE" in text_cmp
    assert text_cmp.endswith("Preferred model: Model B")


def test_comparison_text_skips_missing_holdout(recoded_incidents):
    res = run_regression_comparison(recoded_incidents)
    holdout_b = {**res["holdout_b"], "rmse": np.nan, "mae": np.nan, "r2": np.nan}

    text_cmp = comparison_summary_text(res["comparison"], res["holdout_a"], holdout_b)
    assert "Holdout RMSE" not in text_cmp
    assert "Preferred model:" in text_cmp
