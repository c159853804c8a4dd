import pytest

from ampsparam.core import RunConfiguration
from ampsparam.exceptions import NotSupportedError
from ampsparam.visualize import plot_source_spectrum
from ampsparam.visualize.style import ENERGY_BIN_COLOR, SPECTRUM_COLORS


def test_curve_and_bins(default_config: RunConfiguration) -> None:
    """Verify the spectrum line plus markers for the in-range energy bins."""
    fig = plot_source_spectrum(default_config, n_points=50)
    curve, bins = fig.data
    assert len(curve.x) == 50
    assert curve.line.color == SPECTRUM_COLORS["POWER_LAW"]
    assert list(bins.x) == [1.0, 5.0, 10.0, 30.0, 100.0, 300.0, 1000.0]
    assert bins.marker.color == ENERGY_BIN_COLOR
    assert fig.layout.showlegend is True


def test_out_of_range_bins_dropped() -> None:
    config = RunConfiguration(energy_bins=[0.5, 2000.0])
    fig = plot_source_spectrum(config, n_points=20)
    assert len(fig.data) == 1
    assert fig.layout.showlegend is False


def test_log_axes_and_title(default_config: RunConfiguration) -> None:
    fig = plot_source_spectrum(default_config, n_points=20)
    assert fig.layout.xaxis.type == "log"
    assert fig.layout.yaxis.type == "log"
    assert fig.layout.title.text == "POWER_LAW source spectrum"
    assert plot_source_spectrum(default_config, title="Storm", n_points=20).layout.title.text == "Storm"


def test_band_break_marker() -> None:
    config = RunConfiguration(spectrum_type="BAND", spec_gamma1=3.5, spec_gamma2=1.5, spec_e0=10.0, energy_bins=[])
    fig = plot_source_spectrum(config, n_points=20)
    assert len(fig.data) == 2
    assert list(fig.data[1].x) == [20.0, 20.0]
    assert fig.data[1].line.dash == "dash"


def test_development_style(default_config: RunConfiguration) -> None:
    fig = plot_source_spectrum(default_config, n_points=20, development=True)
    assert fig.layout.plot_bgcolor == "black"


def test_table_spectrum_not_plottable() -> None:
    with pytest.raises(NotSupportedError):
        plot_source_spectrum(RunConfiguration(spectrum_type="TABLE"))
