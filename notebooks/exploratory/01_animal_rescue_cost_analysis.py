# ---
# jupyter:
#   jupytext:
#     text_representation:
#       extension: .py
#       format_name: percent
#       format_version: '1.3'
#       jupytext_version: 1.19.1
# ---

# %% [markdown]
# # Animal Rescue Incidents: Cost Analysis
#
# This notebook explores London Fire Brigade animal rescue incidents and asks what drives the notional cost of an incident. It cleans the published incident file, recodes call time, animal type and borough into a small set of interpretable categories, describes the data with plots and correlations, and compares a simple cost model (pump hours only) against a multi-predictor model.

# %% [markdown]
# ## 0. Import Libraries

# %%
import pandas as pd
import seaborn as sns

from src.models.animal_rescue import config
from src.models.animal_rescue import (
    load_rescues_csv,
    clean_incidents,
    recode_incidents,
    describe_numeric,
    group_summary,
    yearly_summary,
    correlation_matrix,
    correlation_tests,
    group_difference_test,
    cost_histogram,
    incidents_per_year,
    cost_by_group,
    pump_hours_vs_cost,
    correlation_heatmap,
    residuals_vs_fitted,
    run_regression_comparison,
    cleaning_summary_text,
    correlation_summary_text,
    model_summary_text,
    comparison_summary_text,
)

sns.set_theme(style="whitegrid", context="notebook")

# %% [markdown]
# ## 1. Load and Clean
#
# - Missing values are published as the literal string `NULL`; rows with `NULL` cost, pump count, pump hours or call time are removed.
# - Rows with zero pump hours or zero cost are removed (no attendance recorded).
# - The current calendar year is incomplete, so the analysis window stops at the last full year.

# %%
raw = load_rescues_csv(config.DATA_URL)
print("Rows loaded:", len(raw))

# %%
df_clean, drop_report = clean_incidents(raw, max_year=2020)
print(cleaning_summary_text(drop_report))

# %% [markdown]
# ## 2. Recode
#
# | derived column | rule |
# |---|---|
# | `time_bin` | Night (0–5), Morning (6–11), Afternoon (12–17), Evening (18–23) |
# | `day_night` | Day 06:00–17:59, otherwise Night |
# | `animal_class` | Domestic (pets and livestock) / Wild |
# | `borough_zone` | Inner / Outer London |

# %%
df = recode_incidents(df_clean)
df[["date_time_of_call", "hour", "time_bin", "day_night", "animal_group_parent", "animal_class", "borough", "borough_zone"]].head()

# %%
df["animal_class"].value_counts(), df["borough_zone"].value_counts()

# %% [markdown]
# ## 3. Descriptive Statistics

# %%
describe_numeric(df, [config.COST_COL, config.PUMP_HOURS_COL, config.PUMP_COUNT_COL])

# %%
yearly = yearly_summary(df)
yearly

# %%
incidents_per_year(yearly, show=True)

# %%
cost_histogram(df, show=True)

# %%
for col, title in [
    ("animal_class", "Incident Cost by Animal Type"),
    ("day_night", "Incident Cost by Day / Night"),
    ("borough_zone", "Incident Cost by Borough Zone"),
]:
    display(group_summary(df, col))
    cost_by_group(df, col, title, show=True)

# %%
cost_by_group(df, "time_bin", "Incident Cost by Time of Day", group_order=config.TIME_BIN_ORDER, show=True)

# %% [markdown]
# Notional cost is right-skewed (a few long multi-pump rescues sit far above the typical one-pump call), so the cost histogram and box plots use a log scale.

# %% [markdown]
# ## 4. Correlation

# %%
corr = correlation_matrix(df, method="pearson")
correlation_heatmap(corr, title="Pearson Correlation Matrix", show=True)

# %%
corr_tests = correlation_tests(df)
print(correlation_summary_text(corr_tests))
corr_tests

# %%
pd.DataFrame(
    [
        group_difference_test(df, "animal_class", "Domestic", "Wild"),
        group_difference_test(df, "borough_zone", "Inner", "Outer"),
        group_difference_test(df, "day_night", "Day", "Night"),
    ]
)

# %% [markdown]
# ## 5. Cost Models
#
# - **Model A:** `incident_notional_cost ~ pump_hours_total`
# - **Model B:** adds pump count, calendar year, day/night, animal class and borough zone
#
# Both models are fit on the same rows so the F-test compares like with like.

# %%
res = run_regression_comparison(df)
res["design_report"]

# %%
print(model_summary_text("Model A", res["formula_a"], res["fit_stats_a"], res["coef_a"]))

# %%
pump_hours_vs_cost(res["design_df"], model=res["model_a"], show=True)

# %%
print(model_summary_text("Model B", res["formula_b"], res["fit_stats_b"], res["coef_b"]))
res["vif"]

# %%
residuals_vs_fitted(res["model_a"], title="Residuals vs Fitted (Model A)", show=True)
residuals_vs_fitted(res["model_b"], title="Residuals vs Fitted (Model B)", show=True)

# %% [markdown]
# ## 6. Model Comparison

# %%
print(comparison_summary_text(res["comparison"], res["holdout_a"], res["holdout_b"]))
res["comparison"]["table"]

# %% [markdown]
# The notional cost is an hourly rate multiplied by pump hours, so pump hours are expected to carry most of the explanatory power. The calendar year stands in for the annual change in that hourly rate; the F-test and holdout RMSE show whether the recoded categoricals add anything beyond it.
