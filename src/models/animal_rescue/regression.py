"""
regression.py

Reusable OLS utilities for explaining animal rescue notional cost.

Project rules:
1) Model A is the simple model:
      incident_notional_cost ~ pump_hours_total
2) Model B adds pump count, calendar year and the recoded categoricals:
      day_night, animal_class, borough_zone
3) Both models are fit on the SAME design rows (complete for every model B predictor,
   Unknown categorical levels removed) so the nested F-test compares like with like.
4) The reference level of each categorical is its most frequent level.

Dependencies:
  - statsmodels (OLS, nested ANOVA, VIF)
  - scikit-learn (train/test split and holdout metrics)
  - pandas, numpy
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd
import statsmodels.api as sm
import statsmodels.formula.api as smf
from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score
from sklearn.model_selection import train_test_split
from statsmodels.stats.outliers_influence import variance_inflation_factor

from . import config

logger = logging.getLogger(__name__)


# ----------------------------
# Design matrix
# ----------------------------

def determine_reference_levels(pdf: pd.DataFrame, categorical_cols: list[str]) -> dict:
    """
    Determine most frequent category for each categorical column.
    Returns dict: {column: reference_category}
    """
    ref_map = {}
    for c in categorical_cols:
        counts = pdf[c].value_counts(dropna=True)
        if len(counts) == 0:
            continue
        ref_map[c] = counts.idxmax()
    return ref_map


def build_regression_design(
    df: pd.DataFrame,
    target: str = config.TARGET,
    numeric_cols: list | None = None,
    categorical_cols: list | None = None,
    unknown_label: str = config.UNKNOWN,
) -> tuple[pd.DataFrame, dict, dict]:
    """
    Incident table -> OLS design frame with:
    - numeric coercion of target and numeric predictors
    - rows missing target or any predictor dropped
    - rows with an Unknown categorical level dropped
    - categoricals ordered so the baseline is the most frequent level
    - categoricals left with a single level are dropped from the design

    Returns:
      (design_df, design_report, reference_map)
    """
    if numeric_cols is None:
        numeric_cols = list(config.MODEL_B_NUMERIC)
    if categorical_cols is None:
        categorical_cols = list(config.MODEL_B_CATEGORICAL)

    keep_cols = [target] + list(numeric_cols) + list(categorical_cols)
    missing = [c for c in keep_cols if c not in df.columns]
    if missing:
        raise ValueError(f"Design columns not found: {missing}")

    pdf = df[keep_cols].copy()
    n_input = len(pdf)

    for c in [target] + list(numeric_cols):
        pdf[c] = pd.to_numeric(pdf[c], errors="coerce")

    pdf = pdf.dropna(subset=keep_cols).copy()
    n_rows_dropped_missing = n_input - len(pdf)

    n_before_unknown = len(pdf)
    for c in categorical_cols:
        pdf = pdf[pdf[c].astype(str) != unknown_label]
    pdf = pdf.copy()
    n_rows_dropped_unknown = n_before_unknown - len(pdf)

    reference_map = determine_reference_levels(pdf, categorical_cols)

    single_level = []
    for c in categorical_cols:
        categories = pdf[c].value_counts().index.tolist()
        if len(categories) < 2:
            single_level.append(c)
            continue
        ref = reference_map[c]
        ordered = [ref] + [x for x in categories if x != ref]
        pdf[c] = pd.Categorical(pdf[c], categories=ordered)

    if single_level:
        pdf = pdf.drop(columns=single_level)
        for c in single_level:
            reference_map.pop(c, None)

    pdf = pdf.reset_index(drop=True)

    design_report = {
        "n_rows_input": int(n_input),
        "n_rows_dropped_missing": int(n_rows_dropped_missing),
        "n_rows_dropped_unknown_level": int(n_rows_dropped_unknown),
        "n_rows_final": int(len(pdf)),
        "dropped_single_level_categoricals": single_level,
        "reference_categories": reference_map,
    }
    return pdf, design_report, reference_map


def build_formula(target: str, numeric_cols: list, categorical_cols: list) -> str:
    terms = list(numeric_cols) + [f"C({c})" for c in categorical_cols]
    if not terms:
        return f"{target} ~ 1"
    return f"{target} ~ " + " + ".join(terms)


# ----------------------------
# OLS model + outputs
# ----------------------------

def fit_ols(design_df: pd.DataFrame, formula: str):
    """
    Fits an OLS model from a formula. Raises ValueError when the design has
    no more rows than parameters.
    """
    model = smf.ols(formula=formula, data=design_df)
    n_params = model.exog.shape[1]
    if len(design_df) <= n_params:
        raise ValueError(f"Not enough rows ({len(design_df)}) for {n_params} parameters: {formula}")
    return model.fit()


def coef_table(model, alpha: float = config.ALPHA) -> pd.DataFrame:
    """
    Coefficient table with (1 - alpha) CI + p-values.
    """
    ci = model.conf_int(alpha=alpha)
    out = pd.DataFrame(
        {
            "coef": model.params,
            "std_err": model.bse,
            "t": model.tvalues,
            "p": model.pvalues,
            "ci_lower": ci[0],
            "ci_upper": ci[1],
        }
    )
    return out.reset_index().rename(columns={"index": "term"})


def fit_stats(model) -> dict:
    return {
        "n": int(model.nobs),
        "n_params": int(len(model.params)),
        "r_squared": float(model.rsquared),
        "adj_r_squared": float(model.rsquared_adj),
        "f_statistic": float(model.fvalue) if model.fvalue is not None else np.nan,
        "f_p_value": float(model.f_pvalue) if model.f_pvalue is not None else np.nan,
        "aic": float(model.aic),
        "bic": float(model.bic),
        "rmse": float(np.sqrt(model.mse_resid)),
    }


def vif_table(design_df: pd.DataFrame, numeric_cols: list[str]) -> pd.DataFrame:
    """
    Variance inflation factor for each numeric predictor (constant excluded).
    """
    cols = [c for c in numeric_cols if c in design_df.columns]
    if len(cols) < 2:
        return pd.DataFrame({"feature": cols, "vif": [1.0] * len(cols)})

    X = sm.add_constant(design_df[cols].astype(float))
    rows = []
    for i, c in enumerate(X.columns):
        if c == "const":
            continue
        rows.append({"feature": c, "vif": float(variance_inflation_factor(X.values, i))})
    return pd.DataFrame(rows).sort_values("vif", ascending=False).reset_index(drop=True)


def compare_models(model_a, model_b, alpha: float = config.ALPHA, labels=("Model A", "Model B")) -> dict:
    """
    Nested comparison of a simple model against a larger one fit on the same rows.

    Model B is preferred when its extra terms are jointly significant (F-test p < alpha)
    and it has the lower AIC; otherwise the simpler model A is kept.
    """
    if int(model_a.nobs) != int(model_b.nobs):
        raise ValueError(
            f"Models must be fit on the same rows: {labels[0]} n={int(model_a.nobs)}, {labels[1]} n={int(model_b.nobs)}"
        )

    anova = sm.stats.anova_lm(model_a, model_b)
    f_stat = float(anova["F"].iloc[1])
    f_p = float(anova["Pr(>F)"].iloc[1])

    stats_a = fit_stats(model_a)
    stats_b = fit_stats(model_b)
    table = pd.DataFrame([stats_a, stats_b], index=list(labels))

    prefer_b = (f_p < alpha) and (stats_b["aic"] < stats_a["aic"])

    return {
        "table": table,
        "anova": anova,
        "f_statistic": f_stat,
        "f_p_value": f_p,
        "delta_adj_r_squared": stats_b["adj_r_squared"] - stats_a["adj_r_squared"],
        "delta_aic": stats_b["aic"] - stats_a["aic"],
        "preferred": labels[1] if prefer_b else labels[0],
    }


def holdout_evaluation(
    design_df: pd.DataFrame,
    formula: str,
    target: str = config.TARGET,
    test_size: float = config.TEST_SIZE,
    seed: int = config.SEED,
) -> dict:
    """
    Refit the formula on a training split and score it on the held-out rows.
    A training split too small for the formula gives NaN scores instead of failing the comparison.
    """
    train_df, test_df = train_test_split(design_df, test_size=test_size, random_state=seed)
    try:
        model = fit_ols(train_df, formula)
    except ValueError as exc:
        logger.warning("Skipping holdout evaluation: %s", exc)
        return {
            "n_train": int(len(train_df)),
            "n_test": int(len(test_df)),
            "rmse": np.nan,
            "mae": np.nan,
            "r2": np.nan,
        }
    pred = model.predict(test_df)

    y = test_df[target].to_numpy(dtype=float)
    p = np.asarray(pred, dtype=float)
    return {
        "n_train": int(len(train_df)),
        "n_test": int(len(test_df)),
        "rmse": float(np.sqrt(mean_squared_error(y, p))),
        "mae": float(mean_absolute_error(y, p)),
        "r2": float(r2_score(y, p)),
    }


def run_regression_comparison(
    df: pd.DataFrame,
    target: str = config.TARGET,
    model_a_numeric: list | None = None,
    model_a_categorical: list | None = None,
    model_b_numeric: list | None = None,
    model_b_categorical: list | None = None,
    alpha: float = config.ALPHA,
    test_size: float = config.TEST_SIZE,
    seed: int = config.SEED,
) -> dict:
    """
    Full pipeline:
      build shared design (model B predictors) -> fit model A -> fit model B
      -> coefficient tables + fit stats -> nested comparison -> holdout scores -> VIF
    """
    if model_a_numeric is None:
        model_a_numeric = list(config.MODEL_A_NUMERIC)
    if model_a_categorical is None:
        model_a_categorical = list(config.MODEL_A_CATEGORICAL)
    if model_b_numeric is None:
        model_b_numeric = list(config.MODEL_B_NUMERIC)
    if model_b_categorical is None:
        model_b_categorical = list(config.MODEL_B_CATEGORICAL)

    numeric_cols = list(dict.fromkeys(model_a_numeric + model_b_numeric))
    categorical_cols = list(dict.fromkeys(model_a_categorical + model_b_categorical))

    design_df, design_report, reference_map = build_regression_design(
        df,
        target=target,
        numeric_cols=numeric_cols,
        categorical_cols=categorical_cols,
    )

    dropped = set(design_report["dropped_single_level_categoricals"])
    model_a_categorical = [c for c in model_a_categorical if c not in dropped]
    model_b_categorical = [c for c in model_b_categorical if c not in dropped]

    formula_a = build_formula(target, model_a_numeric, model_a_categorical)
    formula_b = build_formula(target, model_b_numeric, model_b_categorical)
    logger.debug("Model A: %s | Model B: %s | rows=%d", formula_a, formula_b, len(design_df))

    model_a = fit_ols(design_df, formula_a)
    model_b = fit_ols(design_df, formula_b)

    return {
        "design_df": design_df,
        "design_report": design_report,
        "reference_categories": reference_map,
        "formula_a": formula_a,
        "formula_b": formula_b,
        "model_a": model_a,
        "model_b": model_b,
        "coef_a": coef_table(model_a, alpha=alpha),
        "coef_b": coef_table(model_b, alpha=alpha),
        "fit_stats_a": fit_stats(model_a),
        "fit_stats_b": fit_stats(model_b),
        "comparison": compare_models(model_a, model_b, alpha=alpha),
        "holdout_a": holdout_evaluation(design_df, formula_a, target=target, test_size=test_size, seed=seed),
        "holdout_b": holdout_evaluation(design_df, formula_b, target=target, test_size=test_size, seed=seed),
        "vif": vif_table(design_df, model_b_numeric),
    }
