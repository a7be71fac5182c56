"""
End-to-end animal rescue cost analysis:
  load -> clean -> recode -> plots -> correlations -> model A -> model B -> compare

Figures go to <output>/graph, tables to <output>/csv.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from . import config
from .cleaning import clean_incidents
from .io import load_rescues_csv
from .plots import (
    correlation_heatmap,
    cost_by_group,
    cost_histogram,
    incidents_per_year,
    pump_hours_vs_cost,
    residuals_vs_fitted,
)
from .recode import recode_incidents
from .regression import run_regression_comparison
from .report import (
    cleaning_summary_text,
    comparison_summary_text,
    correlation_summary_text,
    model_summary_text,
)
from .stats import (
    correlation_matrix,
    correlation_tests,
    describe_numeric,
    group_difference_test,
    group_summary,
    yearly_summary,
)

logger = logging.getLogger(__name__)


def run_analysis(source=None, output_dir=None, min_year=None, max_year=None, show: bool = False) -> dict:
    output_dir = Path(output_dir) if output_dir is not None else config.OUTPUT_DIR
    graph_dir = output_dir / "graph"
    csv_dir = output_dir / "csv"
    graph_dir.mkdir(parents=True, exist_ok=True)
    csv_dir.mkdir(parents=True, exist_ok=True)

    # Load + clean
    raw = load_rescues_csv(source)
    df_clean, drop_report = clean_incidents(raw, min_year=min_year, max_year=max_year)
    print("Rows after cleaning:", len(df_clean))
    print(cleaning_summary_text(drop_report))

    # Recode
    df = recode_incidents(df_clean)

    # Descriptives
    numeric_summary = describe_numeric(df, [config.COST_COL, config.PUMP_HOURS_COL, config.PUMP_COUNT_COL])
    yearly = yearly_summary(df)
    groups = {c: group_summary(df, c) for c in ["animal_class", "time_bin", "day_night", "borough_zone"]}

    numeric_summary.to_csv(csv_dir / "numeric_summary.csv", index=False)
    yearly.to_csv(csv_dir / "yearly_summary.csv", index=False)
    for c, g in groups.items():
        g.to_csv(csv_dir / f"cost_by_{c}.csv", index=False)

    # Plots
    cost_histogram(df, save_path=graph_dir / "cost_histogram.png", show=show)
    incidents_per_year(yearly, save_path=graph_dir / "incidents_per_year.png", show=show)
    cost_by_group(df, "animal_class", "Incident Cost by Animal Type", save_path=graph_dir / "cost_by_animal_class.png", show=show)
    cost_by_group(
        df,
        "time_bin",
        "Incident Cost by Time of Day",
        group_order=[b for b in config.TIME_BIN_ORDER if b in set(df["time_bin"])],
        save_path=graph_dir / "cost_by_time_bin.png",
        show=show,
    )
    cost_by_group(df, "borough_zone", "Incident Cost by Borough Zone", save_path=graph_dir / "cost_by_borough_zone.png", show=show)

    # Correlations
    corr_pearson = correlation_matrix(df, method="pearson")
    corr_spearman = correlation_matrix(df, method="spearman")
    corr_tests = correlation_tests(df)
    corr_pearson.to_csv(csv_dir / "correlation_pearson.csv")
    corr_spearman.to_csv(csv_dir / "correlation_spearman.csv")
    corr_tests.to_csv(csv_dir / "correlation_tests.csv", index=False)
    correlation_heatmap(corr_pearson, title="Pearson Correlation Matrix", save_path=graph_dir / "correlation_heatmap.png", show=show)
    print(correlation_summary_text(corr_tests))

    group_tests = {}
    for group_col, a, b in [("animal_class", "Domestic", "Wild"), ("borough_zone", "Inner", "Outer"), ("day_night", "Day", "Night")]:
        try:
            group_tests[group_col] = group_difference_test(df, group_col, a, b)
        except ValueError as exc:
            logger.warning("Skipping %s test: %s", group_col, exc)

    # Models
    res = run_regression_comparison(df)
    res["coef_a"].to_csv(csv_dir / "model_a_coefficients.csv", index=False)
    res["coef_b"].to_csv(csv_dir / "model_b_coefficients.csv", index=False)
    res["comparison"]["table"].to_csv(csv_dir / "model_comparison.csv")
    res["vif"].to_csv(csv_dir / "model_b_vif.csv", index=False)

    pump_hours_vs_cost(res["design_df"], model=res["model_a"], save_path=graph_dir / "pump_hours_vs_cost.png", show=show)
    residuals_vs_fitted(res["model_a"], title="Residuals vs Fitted (Model A)", save_path=graph_dir / "residuals_model_a.png", show=show)
    residuals_vs_fitted(res["model_b"], title="Residuals vs Fitted (Model B)", save_path=graph_dir / "residuals_model_b.png", show=show)

    print()
    print(model_summary_text("Model A", res["formula_a"], res["fit_stats_a"], res["coef_a"]))
    print()
    print(model_summary_text("Model B", res["formula_b"], res["fit_stats_b"], res["coef_b"]))
    print()
    print(comparison_summary_text(res["comparison"], res["holdout_a"], res["holdout_b"]))

    return {
        "df": df,
        "drop_report": drop_report,
        "numeric_summary": numeric_summary,
        "yearly_summary": yearly,
        "group_summaries": groups,
        "group_tests": group_tests,
        "correlation_pearson": corr_pearson,
        "correlation_spearman": corr_spearman,
        "correlation_tests": corr_tests,
        "regression": res,
        "output_dir": output_dir,
    }


def main(argv=None):
    parser = argparse.ArgumentParser(description="London Fire Brigade animal rescue cost analysis")
    parser.add_argument("--source", default=config.DATA_URL, help="CSV path or URL")
    parser.add_argument("--output-dir", default=str(config.OUTPUT_DIR), help="Directory for graph/ and csv/ outputs")
    parser.add_argument("--min-year", type=int, default=None)
    parser.add_argument("--max-year", type=int, default=None)
    parser.add_argument("--show", action="store_true", help="Display figures interactively")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    run_analysis(
        source=args.source,
        output_dir=args.output_dir,
        min_year=args.min_year,
        max_year=args.max_year,
        show=args.show,
    )


if __name__ == "__main__":
    main()
