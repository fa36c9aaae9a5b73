import os
import tempfile

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from survey.dashboard import AggregateSummary
from survey.scoring_engine import BAR_SCALE, SurveyResult


def _save_fig(fig, name):
    path = os.path.join(tempfile.gettempdir(), name)
    fig.savefig(path, bbox_inches="tight", dpi=200)
    plt.close(fig)
    return path


def plot_result_scores(result: SurveyResult) -> str:
    ranked = result.ranked_scores()
    keys, vals = [k for k, _ in ranked], [v for _, v in ranked]
    fig, ax = plt.subplots(figsize=(6, 4))
    ax.barh(keys, vals)
    ax.set_xlim(0, BAR_SCALE)
    ax.set_xlabel("Score")
    ax.set_title("Persona Scores")
    ax.invert_yaxis()
    return _save_fig(fig, "persona_scores.png")


def plot_distribution_bar(summary: AggregateSummary) -> str:
    names = [n for n, _, _ in summary.distribution]
    counts = [c for _, c, _ in summary.distribution]
    fig, ax = plt.subplots(figsize=(6, 3.5))
    ax.bar(names, counts)
    ax.set_ylabel("Count")
    ax.set_title("Distribution Chart")
    ax.tick_params(axis="x", labelrotation=45)
    for label in ax.get_xticklabels():
        label.set_horizontalalignment("right")
    return _save_fig(fig, "distribution_bar.png")


def plot_distribution_pie(summary: AggregateSummary) -> str:
    labels = [n for n, _, _ in summary.distribution]
    vals = [c for _, c, _ in summary.distribution]
    fig, ax = plt.subplots(figsize=(4, 4))
    ax.pie(vals, labels=labels, autopct="%1.1f%%", startangle=90)
    ax.set_title("Percentage Distribution")
    return _save_fig(fig, "distribution_pie.png")


def create_dashboard_visuals(summary: AggregateSummary) -> dict:
    if not summary.distribution:
        return {}
    return {
        "Distribution_Chart": plot_distribution_bar(summary),
        "Percentage_Distribution": plot_distribution_pie(summary),
    }


def create_result_visuals(result: SurveyResult) -> dict:
    return {"Persona_Scores": plot_result_scores(result)}
