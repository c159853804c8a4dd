"""
Shared plotly styling for ampsparam figures.
"""

from typing import Any

import plotly.graph_objects as go

FONT_FAMILY = "Helvetica"
FONT_COLOR = "#333333"

FONT_SIZES: dict[str, int] = {
    "title": 18,
    "axis_title": 15,
    "tick_label": 13,
    "legend": 12,
}

# Log-log axes with minor grid, for spectra spanning several decades
LOG_AXIS_STYLE: dict[str, Any] = {
    "type": "log",
    "showgrid": True,
    "gridcolor": "#E7E7E7",
    "minor": dict(showgrid=True, gridcolor="#F3F3F3"),
    "zeroline": False,
    "linewidth": 2,
    "linecolor": "#333333",
    "exponentformat": "power",
}

LAYOUT_STYLE: dict[str, Any] = {
    "plot_bgcolor": "#FBFCFF",
    "paper_bgcolor": "#FBFCFF",
    "margin": dict(t=50, b=50, l=70, r=30),
}

DEVELOPMENT_STYLE: dict[str, Any] = {
    "template": "plotly_dark",
    "plot_bgcolor": "black",
    "paper_bgcolor": "black",
    "font": dict(color="white"),
}

# Trace colours per spectrum type
SPECTRUM_COLORS: dict[str, str] = {
    "POWER_LAW": "#1f77b4",
    "POWER_LAW_CUTOFF": "#d62728",
    "LIS_FORCE_FIELD": "#2ca02c",
    "BAND": "#ff9a3c",
}
ENERGY_BIN_COLOR = "#7f7f7f"


def get_font_dict(size: int, bold: bool = False) -> dict[str, Any]:
    return dict(family=FONT_FAMILY, size=size, color=FONT_COLOR, weight="bold" if bold else None)


def apply_log_axes(fig: go.Figure) -> None:
    """Log scale and publication fonts on both axes of a single-panel figure."""
    for axis in (fig.layout.xaxis, fig.layout.yaxis):
        axis.update(
            LOG_AXIS_STYLE,
            title_font=get_font_dict(FONT_SIZES["axis_title"], bold=True),
            tickfont=get_font_dict(FONT_SIZES["tick_label"]),
        )


def apply_publication_style(fig: go.Figure, **kwargs: Any) -> None:
    """Light background, Helvetica fonts and log-log axes.

    Args:
        fig: A plotly figure
        **kwargs: Layout overrides
    """
    apply_log_axes(fig)
    layout: dict[str, Any] = LAYOUT_STYLE.copy()
    layout.update(kwargs)
    fig.update_layout(
        layout,
        font=get_font_dict(FONT_SIZES["tick_label"]),
        legend=dict(font=get_font_dict(FONT_SIZES["legend"])),
    )
    if fig.layout.title.text:
        fig.layout.title.update(font=get_font_dict(FONT_SIZES["title"], bold=True))


def apply_development_style(fig: go.Figure) -> None:
    """Dark theme for quick interactive inspection."""
    fig.update_layout(**DEVELOPMENT_STYLE)
