from __future__ import annotations

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from . import config


def _finish(ax, save_path=None, show: bool = False):
    plt.tight_layout()
    if save_path is not None:
        plt.savefig(save_path, dpi=200)
        print("Saved:", save_path)
    if show:
        plt.show()
    else:
        plt.close(ax.figure)
    return ax


def cost_histogram(df, cost_col: str = config.COST_COL, log_x: bool = True, save_path=None, show: bool = False):
    plt.figure(figsize=(8, 6))
    ax = plt.gca()

    sns.histplot(data=df, x=cost_col, bins=40, log_scale=log_x, ax=ax)

    ax.set_title("Distribution of Incident Notional Cost", fontsize=13, fontweight="bold")
    ax.set_xlabel("Incident notional cost (£)" + (" (log scale)" if log_x else ""))
    ax.set_ylabel("Incidents")
    ax.grid(True, linestyle="--", linewidth=0.5)
    return _finish(ax, save_path, show)


def incidents_per_year(yearly_df: pd.DataFrame, year_col: str = config.YEAR_COL, save_path=None, show: bool = False):
    """
    Bar chart of incident counts per calendar year (expects yearly_summary output).
    """
    plt.figure(figsize=(9, 5))
    ax = sns.barplot(data=yearly_df, x=year_col, y="incidents", color="steelblue")

    ax.grid(axis="y", linestyle="--", alpha=0.5)
    ax.tick_params(axis="x", labelsize=9, labelrotation=45)

    ax.set_title("Animal Rescue Incidents per Year", fontsize=13, fontweight="bold")
    ax.set_xlabel("Year", fontsize=11)
    ax.set_ylabel("Incidents", fontsize=11)

    y_max = yearly_df["incidents"].max() if len(yearly_df) else 1
    ax.set_ylim(0, y_max * 1.15)

    for p in ax.patches:
        height = p.get_height()
        ax.annotate(
            f"{height:.0f}",
            (p.get_x() + p.get_width() / 2.0, height),
            ha="center",
            va="bottom",
            fontsize=8,
            xytext=(0, 3),
            textcoords="offset points",
        )
    return _finish(ax, save_path, show)


def cost_by_group(
    df,
    group_col: str,
    title: str,
    cost_col: str = config.COST_COL,
    group_order=None,
    log_y: bool = True,
    save_path=None,
    show: bool = False,
):
    """
    Box plot of cost per level of a recoded categorical (outliers hidden).
    """
    plt.figure(figsize=(8, 5))
    if group_order is None:
        group_order = sorted(df[group_col].dropna().astype(str).unique())

    ax = sns.boxplot(data=df, x=group_col, y=cost_col, order=group_order, showfliers=False)
    if log_y:
        ax.set_yscale("log")

    ax.set_title(title, fontsize=13, fontweight="bold")
    ax.set_xlabel(group_col.replace("_", " ").title(), fontsize=11)
    ax.set_ylabel("Incident notional cost (£)", fontsize=11)
    ax.grid(axis="y", linestyle="--", alpha=0.5)
    return _finish(ax, save_path, show)


def pump_hours_vs_cost(
    df,
    model=None,
    x_col: str = config.PUMP_HOURS_COL,
    cost_col: str = config.COST_COL,
    save_path=None,
    show: bool = False,
):
    """
    Scatter of pump hours vs cost; overlays the simple-model fit line when a fitted model is given.
    """
    plt.figure(figsize=(8, 6))
    ax = plt.gca()

    ax.scatter(df[x_col], df[cost_col], s=8, alpha=0.4, label="Incidents")

    if model is not None:
        xs = np.linspace(float(df[x_col].min()), float(df[x_col].max()), 100)
        ys = model.predict(pd.DataFrame({x_col: xs}))
        ax.plot(xs, ys, color="darkred", linewidth=2, label="OLS fit")

    ax.set_title("Pump Hours vs Incident Notional Cost", fontsize=13, fontweight="bold")
    ax.set_xlabel("Total pump hours")
    ax.set_ylabel("Incident notional cost (£)")
    ax.grid(True, linestyle="--", linewidth=0.5)
    ax.legend()
    return _finish(ax, save_path, show)


def correlation_heatmap(corr: pd.DataFrame, title: str = "Correlation Matrix", save_path=None, show: bool = False):
    size = max(6, 0.8 * len(corr.columns))
    plt.figure(figsize=(size, size * 0.8))
    ax = sns.heatmap(
        corr,
        annot=True,
        fmt=".2f",
        cmap="coolwarm",
        vmin=-1,
        vmax=1,
        square=True,
        linewidths=0.3,
        cbar_kws={"shrink": 0.7},
    )
    ax.set_title(title, fontsize=13, fontweight="bold")
    return _finish(ax, save_path, show)


def residuals_vs_fitted(model, title: str = "Residuals vs Fitted", save_path=None, show: bool = False):
    plt.figure(figsize=(8, 6))
    ax = plt.gca()

    ax.scatter(model.fittedvalues, model.resid, s=8, alpha=0.4)
    ax.axhline(0, linestyle="--", linewidth=1, color="black")

    ax.set_title(title, fontsize=13, fontweight="bold")
    ax.set_xlabel("Fitted cost (£)")
    ax.set_ylabel("Residual (£)")
    ax.grid(True, linestyle="--", linewidth=0.5)
    return _finish(ax, save_path, show)
