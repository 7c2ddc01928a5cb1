from __future__ import annotations

import io
from typing import Protocol

import matplotlib

matplotlib.use("Agg")  # Non-interactive backend for server use
import matplotlib.pyplot as plt

from ..core.exceptions import RenderFailure
from ..reports.charts import GROUPED_BAR, PIE, STACKED_BAR, ChartData

DEFAULT_WIDTH_IN = 8.0
HEIGHT_IN = 4.0
PX_PER_INCH = 100


class ChartRenderer(Protocol):
    def render(self, chart: ChartData) -> bytes:
        """PNG bytes for ``chart``; raises RenderFailure."""

        raise NotImplementedError


def _style_axes(ax, chart: ChartData) -> None:
    ax.set_title(chart.title, fontsize=12, fontweight="bold", pad=12)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    if chart.y_max:
        ax.set_ylim(0, chart.y_max)
    if len(chart.categories) > 6:
        ax.tick_params(axis="x", rotation=45, labelsize=8)


def _draw_stacked(ax, chart: ChartData) -> None:
    positions = list(range(len(chart.categories)))
    bottoms = [0.0] * len(positions)
    for s in chart.series:
        ax.bar(positions, s.values, bottom=bottoms, color=s.color, label=s.name, edgecolor="white", linewidth=0.5)
        bottoms = [b + v for b, v in zip(bottoms, s.values)]
    ax.set_xticks(positions)
    ax.set_xticklabels(chart.categories)
    ax.legend(fontsize=8, frameon=False)


def _draw_grouped(ax, chart: ChartData) -> None:
    positions = list(range(len(chart.categories)))
    width = 0.8 / max(len(chart.series), 1)
    for i, s in enumerate(chart.series):
        offset = (i - (len(chart.series) - 1) / 2) * width
        color = chart.category_colors if chart.category_colors and len(chart.series) == 1 else s.color
        ax.bar([p + offset for p in positions], s.values, width=width, color=color, label=s.name)
    ax.set_xticks(positions)
    ax.set_xticklabels(chart.categories)
    if len(chart.series) > 1:
        ax.legend(fontsize=8, frameon=False)


def _draw_pie(ax, chart: ChartData) -> None:
    values = chart.series[0].values if chart.series else []
    if not sum(values):
        ax.text(0.5, 0.5, "Belum ada data", ha="center", va="center", fontsize=10, color="#64748B")
        ax.axis("off")
        return
    ax.pie(
        values,
        labels=chart.categories,
        colors=chart.category_colors or None,
        autopct="%1.0f%%",
        startangle=90,
        wedgeprops={"edgecolor": "white"},
    )
    ax.axis("equal")


_DRAWERS = {
    STACKED_BAR: _draw_stacked,
    GROUPED_BAR: _draw_grouped,
    PIE: _draw_pie,
}


class MatplotlibChartRenderer:
    def __init__(self, *, dpi: int = 150):
        self._dpi = int(dpi)

    def render(self, chart: ChartData) -> bytes:
        drawer = _DRAWERS.get(chart.kind)
        if drawer is None:
            raise RenderFailure(f"Jenis grafik tidak dikenal: {chart.kind}")

        width = chart.width_px / PX_PER_INCH if chart.width_px else DEFAULT_WIDTH_IN
        fig = None
        try:
            fig, ax = plt.subplots(figsize=(width, HEIGHT_IN))
            drawer(ax, chart)
            _style_axes(ax, chart)
            fig.tight_layout()
            buf = io.BytesIO()
            fig.savefig(buf, format="png", dpi=self._dpi, bbox_inches="tight", facecolor="white")
            return buf.getvalue()
        except Exception as exc:
            raise RenderFailure(f"Gagal membuat grafik: {chart.title}") from exc
        finally:
            if fig is not None:
                plt.close(fig)
