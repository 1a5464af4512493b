#!/usr/bin/env python3
"""
Budget Pie Chart

Renders family spending per root category plus the remaining (or
over-budget) amount as a pie chart image.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import matplotlib

matplotlib.use("Agg")  # Use non-interactive backend

import matplotlib.pyplot as plt

from ..budget.calculator import BudgetFigures
from ..budget.hierarchy import RootTotals
from ..core.config import ChartConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PieSlice:
    """One labelled wedge of the chart."""

    label: str
    value: float
    color: str


def build_slices(root_totals: RootTotals, budget: BudgetFigures, config: ChartConfig) -> list[PieSlice]:
    """
    Turn root totals and the budget outcome into chart slices.

    Spending categories are negated to positive wedges, largest first.
    Categories with a net refund (non-negative total) cannot be drawn and
    are skipped. A gray "Remaining Budget" or red "Over Budget" wedge is
    appended depending on the sign of the remaining amount.
    """
    slices: list[PieSlice] = []
    color_index = 0
    for name, amount in root_totals.ordered():
        if amount.cents >= 0:
            logger.info("Leaving %s out of the chart: net amount %s", name, amount)
            continue
        color = config.colors[color_index % len(config.colors)]
        slices.append(PieSlice(label=name, value=(-amount).to_float(), color=color))
        color_index += 1

    remaining = budget.remaining
    if remaining.cents > 0:
        slices.append(
            PieSlice(label="Remaining Budget", value=remaining.to_float(), color=config.remaining_color)
        )
    elif remaining.cents < 0:
        slices.append(
            PieSlice(label="Over Budget", value=(-remaining).to_float(), color=config.over_budget_color)
        )

    return slices


def render_budget_chart(
    root_totals: RootTotals,
    budget: BudgetFigures,
    output_file: Path,
    config: ChartConfig | None = None,
    title: str | None = None,
) -> Path | None:
    """
    Render the pie chart to ``output_file``.

    Returns:
        Path to the image, or None when there is nothing to draw
    """
    config = config or ChartConfig()
    slices = build_slices(root_totals, budget, config)
    if not slices:
        logger.warning("No chart data; skipping pie chart")
        return None

    output_file.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(config.width, config.height))
    try:
        ax.pie(
            [s.value for s in slices],
            labels=[f"{s.label}\n€{s.value:,.2f}" for s in slices],
            colors=[s.color for s in slices],
            autopct="%1.1f%%",
            startangle=90,
            counterclock=False,
            wedgeprops={"edgecolor": "white", "linewidth": 1},
        )
        ax.axis("equal")
        if title:
            ax.set_title(title, fontsize=12, fontweight="bold")
        fig.tight_layout()
        fig.savefig(output_file, dpi=config.dpi, bbox_inches="tight")
    finally:
        plt.close(fig)

    logger.info("Pie chart saved to %s", output_file)
    return output_file
