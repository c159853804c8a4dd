import plotly.graph_objects as go

from ampsparam.core import RunConfiguration
from ampsparam.spectrum import differential_flux, spectrum_curve
from ampsparam.visualize.style import (
    ENERGY_BIN_COLOR,
    SPECTRUM_COLORS,
    apply_development_style,
    apply_publication_style,
)


def plot_source_spectrum(
    config: RunConfiguration,
    title: str | None = None,
    n_points: int = 301,
    development: bool = False,
) -> go.Figure:
    """
    Plots the boundary source spectrum J(E) of a run configuration.

    Output energy bins inside the spectrum range are marked on the curve.

    Args:
        config (RunConfiguration): Configuration providing the spectrum parameters.
        title (str, optional): Figure title. Defaults to "<SPECTRUM_TYPE> source spectrum".
        n_points (int, optional): Number of log-spaced energies. Defaults to 301.
        development (bool, optional): Use the dark development theme. Defaults to False.

    Returns:
        plotly.graph_objects.Figure: The generated figure.

    Raises:
        NotSupportedError: For TABLE or unknown spectrum types.
    """
    energies, fluxes = spectrum_curve(config, n_points)
    color = SPECTRUM_COLORS.get(config.spectrum_type, "#1f77b4")

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(x=energies, y=fluxes, mode="lines", line=dict(color=color, width=2.5), name=config.spectrum_type)
    )

    bins = [e for e in config.energy_bins if config.spec_emin <= e <= config.spec_emax]
    if bins:
        fig.add_trace(
            go.Scatter(
                x=bins,
                y=[differential_flux(config, e) for e in bins],
                mode="markers",
                marker=dict(color=ENERGY_BIN_COLOR, size=9, symbol="diamond"),
                name="Energy bins",
            )
        )

    if config.spectrum_type == "BAND":
        e_break = (config.spec_gamma1 - config.spec_gamma2) * config.spec_e0
        if config.spec_emin < e_break < config.spec_emax:
            fig.add_trace(
                go.Scatter(
                    x=[e_break, e_break],
                    y=[min(fluxes), max(fluxes)],
                    mode="lines",
                    line=dict(color=color, dash="dash", width=1),
                    name=f"E<sub>b</sub> = {e_break:.3g} MeV/n",
                )
            )

    fig.update_layout(
        title=title or f"{config.spectrum_type} source spectrum",
        xaxis_title="Energy (MeV/n)",
        yaxis_title="J (p cm<sup>-2</sup> s<sup>-1</sup> sr<sup>-1</sup> (MeV/n)<sup>-1</sup>)",
        showlegend=len(fig.data) > 1,
    )
    apply_publication_style(fig)
    if development:
        apply_development_style(fig)
    return fig
