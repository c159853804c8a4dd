"""
Empirical space-physics relations used to derive AMPS inputs from solar-wind drivers.

Includes the Dst → Kp conversion (two interchangeable strategies), the
Maynard & Chen (1975) Volland–Stern intensity and the Shue et al. (1998)
magnetopause model.
"""

import math
from collections.abc import Callable

from ampsparam.exceptions import ConfigurationError
from ampsparam.utils import logger

KP_MIN = 0.0
KP_MAX = 9.0

# Volland-Stern intensity coefficient at Kp = 0 [kV / RE^2]
VS_A0 = 0.045

# Shue 1998 validity clamps
SHUE_R0_RANGE = (4.0, 15.0)
SHUE_ALPHA_RANGE = (0.3, 0.9)
SHUE_MIN_PDYN = 0.1  # nPa


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def _round1(value: float) -> float:
    """Round half up to one decimal."""
    return math.floor(value * 10.0 + 0.5) / 10.0


def dst_to_kp_linear(dst: float) -> float:
    """Kp from Dst using the linear storm-time relation Kp ≈ -Dst/28 + 0.8."""
    return _clamp(_round1(-dst / 28.0 + 0.8), KP_MIN, KP_MAX)


def dst_to_kp_sqrt(dst: float) -> float:
    """Kp from Dst using the square-root relation Kp ≈ 0.5·sqrt(-Dst)."""
    return _clamp(_round1(0.5 * math.sqrt(max(0.0, -dst))), KP_MIN, KP_MAX)


KpStrategy = Callable[[float], float]

KP_STRATEGIES: dict[str, KpStrategy] = {
    "linear": dst_to_kp_linear,
    "sqrt": dst_to_kp_sqrt,
}


def dst_to_kp(dst: float, strategy: str = "linear") -> float:
    """
    Convert a Dst index to Kp with a named strategy.

    Args:
        dst: Dst index in nT.
        strategy: Key in KP_STRATEGIES ("linear" or "sqrt").

    Returns:
        Kp rounded to one decimal and clamped to [0, 9].

    Raises:
        ConfigurationError: If the strategy name is unknown.
    """
    try:
        convert = KP_STRATEGIES[strategy]
    except KeyError as e:
        raise ConfigurationError(
            f"Unknown Dst to Kp strategy '{strategy}'. Available: {', '.join(sorted(KP_STRATEGIES))}"
        ) from e
    kp = convert(dst)
    logger.debug(f"Dst {dst} nT -> Kp {kp} ({strategy})")
    return kp


def vs_intensity_a(kp: float) -> float:
    """Volland–Stern convection intensity A(Kp) = 0.045 / (1 - 0.159 Kp + 0.0093 Kp^2)^3."""
    denominator = (1.0 - 0.159 * kp + 0.0093 * kp * kp) ** 3
    if denominator <= 0:
        return VS_A0
    return VS_A0 / denominator


def shue_parameters(bz: float, pdyn: float) -> tuple[float, float]:
    """
    Shue et al. (1998) standoff distance and flaring exponent.

    Args:
        bz: IMF Bz in nT (GSM).
        pdyn: Solar-wind dynamic pressure in nPa. Floored at 0.1 nPa.

    Returns:
        (r0, alpha) with r0 in RE, both clamped to the model's validity range.
    """
    pd = max(SHUE_MIN_PDYN, pdyn)
    r0 = (11.4 + 0.013 * bz) * pd ** (-1.0 / 6.6)
    alpha = (0.58 - 0.007 * bz) * (1.0 + 0.024 * math.log(pd))
    return _clamp(r0, *SHUE_R0_RANGE), _clamp(alpha, *SHUE_ALPHA_RANGE)


def shue_radius(r0: float, alpha: float, theta_deg: float) -> float:
    """Magnetopause distance r(θ) = r0 · (2 / (1 + cos θ))^α, θ measured from the Sun-Earth line."""
    theta = math.radians(theta_deg)
    return r0 * (2.0 / (1.0 + math.cos(theta))) ** alpha
