import matplotlib.pyplot as plt

from src.models.animal_rescue import (
    correlation_heatmap,
    correlation_matrix,
    cost_by_group,
    cost_histogram,
    incidents_per_year,
    pump_hours_vs_cost,
    residuals_vs_fitted,
    run_regression_comparison,
    yearly_summary,
)


def test_descriptive_plots_save(tmp_path, recoded_incidents, capsys):
    df = recoded_incidents

    ax = cost_histogram(df, save_path=tmp_path / "hist.png")
    assert isinstance(ax, plt.Axes)
    assert "Cost" in ax.get_title()

    incidents_per_year(yearly_summary(df), save_path=tmp_path / "years.png")
    cost_by_group(df, "animal_class", "Cost by animal", save_path=tmp_path / "animal.png")
    correlation_heatmap(correlation_matrix(df), save_path=tmp_path / "corr.png")

    for name in ["hist.png", "years.png", "animal.png", "corr.png"]:
        assert (tmp_path / name).exists()
    assert "Saved:" in capsys.readouterr().out


def test_model_plots(tmp_path, recoded_incidents):
    res = run_regression_comparison(recoded_incidents)

    ax = pump_hours_vs_cost(res["design_df"], model=res["model_a"], save_path=tmp_path / "fit.png")
    assert len(ax.get_lines()) == 1

    residuals_vs_fitted(res["model_b"], save_path=tmp_path / "resid.png")
    assert (tmp_path / "fit.png").exists()
    assert (tmp_path / "resid.png").exists()


def test_plot_without_save_closes_figure(recoded_incidents):
    before = len(plt.get_fignums())
    cost_by_group(recoded_incidents, "time_bin", "Cost by time of day", group_order=["Night", "Morning", "Afternoon", "Evening"])
    assert len(plt.get_fignums()) == before
