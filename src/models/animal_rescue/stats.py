from __future__ import annotations

import numpy as np
import pandas as pd
from scipy import stats as sps

from . import config


def describe_numeric(df: pd.DataFrame, cols: list[str]) -> pd.DataFrame:
    rows = []
    for c in cols:
        s = pd.to_numeric(df[c], errors="coerce").dropna()
        rows.append(
            {
                "column": c,
                "count": int(s.count()),
                "mean": float(s.mean()) if len(s) else np.nan,
                "median": float(s.median()) if len(s) else np.nan,
                "std": float(s.std()) if len(s) > 1 else np.nan,
                "p90": float(s.quantile(0.90)) if len(s) else np.nan,
                "p95": float(s.quantile(0.95)) if len(s) else np.nan,
                "skew": float(s.skew()) if len(s) > 2 else np.nan,
            }
        )
    return pd.DataFrame(rows)


def group_summary(df: pd.DataFrame, group_col: str, value_col: str = config.COST_COL) -> pd.DataFrame:
    """
    Count / mean / median / P90 of value_col per level of group_col, largest groups first.
    """
    out = (
        df.groupby(group_col)[value_col]
        .agg(
            count="count",
            mean="mean",
            median="median",
            p90=lambda s: s.quantile(0.90),
        )
        .reset_index()
        .sort_values("count", ascending=False)
        .reset_index(drop=True)
    )
    return out


def yearly_summary(df: pd.DataFrame, year_col: str = config.YEAR_COL, cost_col: str = config.COST_COL) -> pd.DataFrame:
    return (
        df.groupby(year_col)[cost_col]
        .agg(incidents="count", total_cost="sum", mean_cost="mean")
        .reset_index()
        .sort_values(year_col)
        .reset_index(drop=True)
    )


def usable_columns(df: pd.DataFrame, cols: list[str]) -> list[str]:
    """
    Columns present in df that are numeric-convertible and hold at least two distinct values
    (correlation is undefined otherwise).
    """
    keep = []
    for c in cols:
        if c not in df.columns:
            continue
        s = pd.to_numeric(df[c], errors="coerce")
        if s.nunique(dropna=True) > 1:
            keep.append(c)
    return keep


def correlation_matrix(df: pd.DataFrame, cols: list[str] | None = None, method: str = "pearson") -> pd.DataFrame:
    if cols is None:
        cols = config.CORRELATION_COLUMNS
    if method not in ("pearson", "spearman"):
        raise ValueError(f"Unsupported correlation method: {method}")
    cols = usable_columns(df, cols)
    num = df[cols].apply(pd.to_numeric, errors="coerce")
    return num.corr(method=method)


def correlation_tests(
    df: pd.DataFrame,
    target: str = config.TARGET,
    cols: list[str] | None = None,
) -> pd.DataFrame:
    """
    Pearson r (with p-value) and Spearman rho of every column against the target,
    using pairwise-complete rows. Sorted by absolute Pearson r.
    """
    if cols is None:
        cols = [c for c in config.CORRELATION_COLUMNS if c != target]
    cols = [c for c in usable_columns(df, cols) if c != target]

    rows = []
    for c in cols:
        pair = df[[c, target]].apply(pd.to_numeric, errors="coerce").dropna()
        if len(pair) < 3 or pair[c].nunique() < 2 or pair[target].nunique() < 2:
            continue
        r, p = sps.pearsonr(pair[c], pair[target])
        rho, p_rho = sps.spearmanr(pair[c], pair[target])
        rows.append(
            {
                "feature": c,
                "n": int(len(pair)),
                "pearson_r": float(r),
                "pearson_p": float(p),
                "spearman_rho": float(rho),
                "spearman_p": float(p_rho),
            }
        )

    out = pd.DataFrame(rows, columns=["feature", "n", "pearson_r", "pearson_p", "spearman_rho", "spearman_p"])
    if len(out):
        out = out.reindex(out["pearson_r"].abs().sort_values(ascending=False).index).reset_index(drop=True)
    return out


def group_difference_test(
    df: pd.DataFrame,
    group_col: str,
    a: str,
    b: str,
    value_col: str = config.COST_COL,
    alpha: float = config.ALPHA,
) -> dict:
    """
    Compare value_col between two levels of group_col.
    Welch t-test on means and Mann–Whitney U on distributions (costs are right-skewed).
    """
    xa = pd.to_numeric(df.loc[df[group_col] == a, value_col], errors="coerce").dropna()
    xb = pd.to_numeric(df.loc[df[group_col] == b, value_col], errors="coerce").dropna()
    if len(xa) < 2 or len(xb) < 2:
        raise ValueError(f"{group_col}: need at least 2 rows per group, got {a}={len(xa)}, {b}={len(xb)}")

    t = sps.ttest_ind(xa, xb, equal_var=False)
    u = sps.mannwhitneyu(xa, xb, alternative="two-sided")

    return {
        "group_col": group_col,
        "group_a": a,
        "group_b": b,
        "n_a": int(len(xa)),
        "n_b": int(len(xb)),
        "mean_a": float(xa.mean()),
        "mean_b": float(xb.mean()),
        "median_a": float(xa.median()),
        "median_b": float(xb.median()),
        "welch_t": float(t.statistic),
        "welch_p": float(t.pvalue),
        "mannwhitney_u": float(u.statistic),
        "mannwhitney_p": float(u.pvalue),
        "significant": bool(t.pvalue < alpha),
    }
