from .io import (
    load_rescues_csv,
    normalize_columns,
)
from .cleaning import (
    clean_incidents,
    drop_sentinel_rows,
    parse_call_time,
)
from .recode import (
    add_hour,
    add_time_of_day_bin,
    add_day_night,
    classify_animal,
    add_animal_class,
    classify_borough,
    add_borough_zone,
    recode_incidents,
)
from .stats import (
    describe_numeric,
    group_summary,
    yearly_summary,
    correlation_matrix,
    correlation_tests,
    group_difference_test,
)
from .plots import (
    cost_histogram,
    incidents_per_year,
    cost_by_group,
    pump_hours_vs_cost,
    correlation_heatmap,
    residuals_vs_fitted,
)
from .report import (
    cleaning_summary_text,
    correlation_summary_text,
    model_summary_text,
    comparison_summary_text,
)
from .regression import (
    run_regression_comparison,
    determine_reference_levels,
    build_regression_design,
    build_formula,
    fit_ols,
    coef_table,
    fit_stats,
    vif_table,
    compare_models,
    holdout_evaluation,
)
