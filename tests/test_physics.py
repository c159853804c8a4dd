"""Tests for the empirical relations in physics.py."""

import logging
import math

import pytest

from ampsparam.exceptions import ConfigurationError
from ampsparam.physics import (
    KP_STRATEGIES,
    SHUE_ALPHA_RANGE,
    SHUE_R0_RANGE,
    VS_A0,
    dst_to_kp,
    dst_to_kp_linear,
    dst_to_kp_sqrt,
    shue_parameters,
    shue_radius,
    vs_intensity_a,
)
from ampsparam.utils import logger

logger.setLevel(logging.CRITICAL)


# === Tests for Dst -> Kp ===


@pytest.mark.parametrize(
    "dst, expected",
    [(-142.0, 5.9), (-98.0, 4.3), (0.0, 0.8), (-28.0, 1.8), (50.0, 0.0), (-1000.0, 9.0)],
)
def test_dst_to_kp_linear(dst: float, expected: float) -> None:
    assert dst_to_kp_linear(dst) == pytest.approx(expected)


@pytest.mark.parametrize("dst, expected", [(-142.0, 6.0), (-98.0, 4.9), (-100.0, 5.0), (0.0, 0.0), (30.0, 0.0)])
def test_dst_to_kp_sqrt(dst: float, expected: float) -> None:
    assert dst_to_kp_sqrt(dst) == pytest.approx(expected)


@pytest.mark.parametrize("strategy", sorted(KP_STRATEGIES))
@pytest.mark.parametrize("dst", [-600.0, -250.0, -142.0, -50.0, -1.0, 0.0, 40.0])
def test_dst_to_kp_range_and_rounding(strategy: str, dst: float) -> None:
    """Verify every strategy returns a one-decimal Kp in [0, 9]."""
    kp = dst_to_kp(dst, strategy)
    assert 0.0 <= kp <= 9.0
    assert round(kp, 1) == pytest.approx(kp)


def test_dst_to_kp_dispatches_by_name() -> None:
    assert dst_to_kp(-98.0) == dst_to_kp_linear(-98.0)
    assert dst_to_kp(-98.0, "sqrt") == dst_to_kp_sqrt(-98.0)


def test_dst_to_kp_unknown_strategy() -> None:
    with pytest.raises(ConfigurationError, match="Unknown Dst to Kp strategy"):
        dst_to_kp(-50.0, "table")


# === Tests for vs_intensity_a() ===


def test_vs_intensity_quiet_time() -> None:
    assert vs_intensity_a(0.0) == VS_A0


def test_vs_intensity_value() -> None:
    assert vs_intensity_a(3.0) == pytest.approx(0.2015, rel=1e-3)


def test_vs_intensity_increases_with_kp() -> None:
    values = [vs_intensity_a(kp / 2) for kp in range(0, 17)]
    assert all(a < b for a, b in zip(values, values[1:]))


# === Tests for the Shue magnetopause ===


def test_shue_parameters_reference_point() -> None:
    """Verify Bz = 0, Pdyn = 1 nPa gives the bare model coefficients."""
    r0, alpha = shue_parameters(0.0, 1.0)
    assert r0 == pytest.approx(11.4)
    assert alpha == pytest.approx(0.58)


def test_shue_parameters_storm_compression() -> None:
    r0_quiet, _ = shue_parameters(0.0, 2.0)
    r0_storm, alpha_storm = shue_parameters(-18.5, 3.5)
    assert r0_storm < r0_quiet
    assert r0_storm == pytest.approx(9.23, abs=0.01)
    assert alpha_storm > 0.58


@pytest.mark.parametrize("bz, pdyn", [(0.0, 0.0), (0.0, -3.0), (30.0, 0.01), (-200.0, 80.0), (100.0, 1.0)])
def test_shue_parameters_clamped(bz: float, pdyn: float) -> None:
    """Verify extreme drivers stay within the model's validity ranges."""
    r0, alpha = shue_parameters(bz, pdyn)
    assert SHUE_R0_RANGE[0] <= r0 <= SHUE_R0_RANGE[1]
    assert SHUE_ALPHA_RANGE[0] <= alpha <= SHUE_ALPHA_RANGE[1]


def test_shue_parameters_pressure_floor() -> None:
    assert shue_parameters(0.0, 0.0) == shue_parameters(0.0, 0.1)


def test_shue_radius() -> None:
    assert shue_radius(10.0, 0.6, 0.0) == pytest.approx(10.0)
    assert shue_radius(10.0, 0.6, 90.0) == pytest.approx(10.0 * 2**0.6)
    assert shue_radius(10.0, 0.6, 120.0) > shue_radius(10.0, 0.6, 90.0)
    assert math.isfinite(shue_radius(10.0, 0.6, 179.0))
