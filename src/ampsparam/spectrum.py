"""
Differential flux J(E) of the AMPS boundary source spectrum.

Energies are kinetic energies per nucleon in MeV/n; fluxes are in
p / (cm^2 s sr MeV/n), normalised by the configuration's J0 parameters.
"""

import math

from ampsparam.core import RunConfiguration
from ampsparam.exceptions import NotSupportedError

PROTON_REST_MASS_MEV = 938.272


def power_law(energy: float, j0: float, gamma: float, e0: float) -> float:
    return j0 * (energy / e0) ** (-gamma)


def power_law_cutoff(energy: float, j0: float, gamma: float, e0: float, ec: float) -> float:
    return power_law(energy, j0, gamma, e0) * math.exp(-energy / ec)


def lis_force_field(energy: float, lis_j0: float, lis_gamma: float, e0: float, phi_mv: float) -> float:
    """Force-field modulated local interstellar spectrum (Gleeson & Axford 1968) for protons."""
    m = PROTON_REST_MASS_MEV
    e_lis = energy + phi_mv
    j_lis = power_law(e_lis, lis_j0, lis_gamma, e0)
    return j_lis * (energy * energy + 2.0 * energy * m) / (e_lis * e_lis + 2.0 * e_lis * m)


def band(energy: float, j0: float, gamma1: float, gamma2: float, e0: float) -> float:
    """
    Band et al. (1993) double power law.

    Below the break energy Eb = (gamma1 - gamma2) * e0 the spectrum is an
    exponentially rolled-over power law of index gamma1; above it a pure power
    law of index gamma2 whose amplitude makes J(E) continuous at Eb. When
    gamma1 <= gamma2 there is no break and the low-energy form applies throughout.
    """
    d_gamma = gamma1 - gamma2
    e_break = d_gamma * e0
    if d_gamma <= 0 or energy < e_break:
        return j0 * (energy / e0) ** (-gamma1) * math.exp(-energy / e0)
    return j0 * d_gamma ** (gamma2 - gamma1) * math.exp(-d_gamma) * (energy / e0) ** (-gamma2)


def differential_flux(config: RunConfiguration, energy_mev: float) -> float:
    """
    Evaluate the configured source spectrum at one energy.

    Args:
        config: Run configuration; spectrum_type selects the functional form.
        energy_mev: Kinetic energy in MeV/n, must be positive.

    Returns:
        J(E) in p / (cm^2 s sr MeV/n).

    Raises:
        ValueError: If energy_mev is not positive.
        NotSupportedError: For TABLE spectra (defined by an external file) and unknown types.
    """
    if energy_mev <= 0:
        raise ValueError(f"Energy must be positive, got {energy_mev}")

    spectrum = config.spectrum_type
    if spectrum == "POWER_LAW":
        return power_law(energy_mev, config.spec_j0, config.spec_gamma, config.spec_e0)
    if spectrum == "POWER_LAW_CUTOFF":
        return power_law_cutoff(energy_mev, config.spec_j0, config.spec_gamma, config.spec_e0, config.spec_ec)
    if spectrum == "LIS_FORCE_FIELD":
        return lis_force_field(energy_mev, config.spec_lis_j0, config.spec_lis_gamma, config.spec_e0, config.spec_phi)
    if spectrum == "BAND":
        return band(energy_mev, config.spec_j0, config.spec_gamma1, config.spec_gamma2, config.spec_e0)
    if spectrum == "TABLE":
        raise NotSupportedError(f"TABLE spectra are read from '{config.spec_table_file}' and cannot be evaluated here.")
    raise NotSupportedError(f"Unknown spectrum type '{spectrum}'.")


def log_energy_grid(emin: float, emax: float, n: int = 301) -> list[float]:
    """`n` log-spaced energies from emin to emax inclusive."""
    if emin <= 0 or emax <= emin:
        raise ValueError(f"Need 0 < emin < emax, got emin={emin}, emax={emax}")
    if n < 2:
        raise ValueError(f"Need at least 2 grid points, got {n}")
    step = math.log(emax / emin) / (n - 1)
    return [emin * math.exp(i * step) for i in range(n)]


def spectrum_curve(config: RunConfiguration, n: int = 301) -> tuple[list[float], list[float]]:
    """Energies over [spec_emin, spec_emax] and the corresponding J(E)."""
    energies = log_energy_grid(config.spec_emin, config.spec_emax, n)
    return energies, [differential_flux(config, e) for e in energies]
