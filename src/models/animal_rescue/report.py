from __future__ import annotations

import numpy as np

from . import config


def _p_txt(p: float) -> str:
    return "< 1e-300" if p == 0 else f"{p:.3g}"


def cleaning_summary_text(drop_report: dict) -> str:
    r = drop_report
    lines = []
    lines.append("Data cleaning:")
    lines.append(f"- Rows loaded: {r['n_rows_input']}")
    lines.append(f"- Dropped NULL/blank cost, pump or call-time values: {r['n_dropped_sentinel']}")
    lines.append(f"- Dropped unparseable call times: {r['n_dropped_bad_call_time']}")
    lines.append(f"- Dropped non-positive pump count / pump hours / cost: {r['n_dropped_non_positive']}")
    lines.append(f"- Dropped duplicate incident numbers: {r['n_dropped_duplicates']}")
    lines.append(f"- Dropped outside the year window: {r['n_dropped_outside_years']}")
    lines.append(f"- Rows retained for analysis: {r['n_rows_final']}")
    return "\n".join(lines)


def correlation_summary_text(corr_tests, target: str = config.TARGET, alpha: float = config.ALPHA, top: int = 5) -> str:
    lines = []
    lines.append(f"Correlation with {target} (Pearson r, Spearman rho):")
    if len(corr_tests) == 0:
        lines.append("- No usable predictors.")
        return "\n".join(lines)

    for _, row in corr_tests.head(top).iterrows():
        sig = row["pearson_p"] < alpha
        lines.append(
            f"- {row['feature']}: r={row['pearson_r']:.3f} (p={_p_txt(row['pearson_p'])}, significant={sig}), "
            f"rho={row['spearman_rho']:.3f}"
        )
    return "\n".join(lines)


def model_summary_text(name: str, formula: str, stats: dict, coefs, alpha: float = config.ALPHA) -> str:
    lines = []
    lines.append(f"{name}: {formula}")
    lines.append(
        f"- n={stats['n']}, R²={stats['r_squared']:.3f}, adjusted R²={stats['adj_r_squared']:.3f}, "
        f"AIC={stats['aic']:.1f}, RMSE=£{stats['rmse']:.2f}"
    )
    for _, row in coefs.iterrows():
        if row["term"] == "Intercept":
            continue
        sig = "*" if row["p"] < alpha else ""
        lines.append(
            f"  {row['term']}: {row['coef']:.3f} "
            f"[{row['ci_lower']:.3f}, {row['ci_upper']:.3f}] p={_p_txt(row['p'])}{sig}"
        )
    return "\n".join(lines)


def comparison_summary_text(comparison: dict, holdout_a: dict | None = None, holdout_b: dict | None = None, alpha: float = config.ALPHA) -> str:
    sig = comparison["f_p_value"] < alpha
    t = comparison["table"]
    name_a, name_b = t.index[0], t.index[1]

    lines = []
    lines.append(f"Model comparison ({name_a} nested in {name_b}):")
    lines.append(f"- F-test for added terms: F={comparison['f_statistic']:.2f}, p={_p_txt(comparison['f_p_value'])} (significant={sig})")
    lines.append(f"- Change in adjusted R²: {comparison['delta_adj_r_squared']:+.4f}")
    lines.append(f"- Change in AIC: {comparison['delta_aic']:+.1f}")
    if holdout_a is not None and holdout_b is not None and not (np.isnan(holdout_a["rmse"]) or np.isnan(holdout_b["rmse"])):
        lines.append(
            f"- Holdout RMSE: {name_a}=£{holdout_a['rmse']:.2f} | {name_b}=£{holdout_b['rmse']:.2f} "
            f"(n_test={holdout_a['n_test']})"
        )
    lines.append(f"Preferred model: {comparison['preferred']}")
    return "\n".join(lines)
