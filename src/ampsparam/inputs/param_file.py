"""
Writer for AMPS_PARAM.in files.

`export_param_file` renders a RunConfiguration as canonical keyword text. Every
value is written so that `parse_param_file` followed by `hydrate` restores it
exactly: numbers use a fixed number of decimals when that is exact and fall
back to the shortest round-tripping representation otherwise.
"""

import math
from collections.abc import Iterable

from ampsparam.core import RunConfiguration
from ampsparam.exceptions import InputGenerationError
from ampsparam.utils import logger

KEY_WIDTH = 22
AUTO_TOKEN = "AUTO"
MANUAL_TOKEN = "MANUAL"
RULE = "! " + "═" * 63

TS_INPUT_KEYWORDS: dict[str, str] = {
    "omni": "OMNIWEB",
    "file": "FILE",
    "scalar": "SCALAR",
}


# --- Value formatting --- #
def format_float(value: float, decimals: int) -> str:
    """Fixed-point text for `value`, or its shortest exact repr when fixed-point would round it."""
    if not math.isfinite(value):
        raise InputGenerationError(f"Cannot write non-finite number {value!r}.")
    text = f"{value:.{decimals}f}"
    if float(text) != value:
        text = repr(float(value))
    return text


def format_exp(value: float, digits: int = 2) -> str:
    """Scientific notation (e.g. 1.00e+04), falling back to repr when it would round."""
    if not math.isfinite(value):
        raise InputGenerationError(f"Cannot write non-finite number {value!r}.")
    text = f"{value:.{digits}e}"
    if float(text) != value:
        text = repr(float(value))
    return text


def format_bool(value: bool) -> str:
    return "T" if value else "F"


def format_list(values: Iterable[float], decimals: int = 0) -> str:
    return " ".join(format_float(v, decimals) for v in values)


def _checked_str(key: str, value: str) -> str:
    if "\n" in value or "\r" in value:
        raise InputGenerationError(f"{key} value must fit on one line, got {value!r}.")
    if "!" in value:
        raise InputGenerationError(f"{key} value may not contain the comment character '!': {value!r}.")
    return value.strip()


def _line(key: str, value: str, comment: str | None = None) -> str:
    line = f"{key:<{KEY_WIDTH}} {value}"
    if comment:
        line = f"{line}  ! {comment}"
    return line


def _disabled_line(key: str, value: str = "") -> str:
    """Commented-out parameter, recovered on load only when `value` is non-empty."""
    return f"! {key:<{KEY_WIDTH}} {value}".rstrip()


def _optional(key: str, value: float | int | str | None, decimals: int = 2) -> str:
    """Active line when the value is set, empty commented placeholder when it is None."""
    if value is None:
        return _disabled_line(key)
    if isinstance(value, str):
        return _line(key, _checked_str(key, value))
    if isinstance(value, int):
        return _line(key, str(value))
    return _line(key, format_float(value, decimals))


def _disabled_optional(key: str, value: float | int | None, decimals: int = 2) -> str:
    if value is None:
        return _disabled_line(key)
    if isinstance(value, int):
        return _disabled_line(key, str(value))
    return _disabled_line(key, format_float(value, decimals))


# --- Sections --- #
def _header_block(config: RunConfiguration) -> list[str]:
    return [
        RULE,
        "! AMPS_PARAM.in generated by ampsparam",
        f"! Run: {config.run_name or 'unnamed'}",
        RULE,
    ]


def _run_info_block(config: RunConfiguration) -> list[str]:
    lines = ["#RUN_INFO"]
    for key, value in (
        ("RUN_ID", config.run_name),
        ("PI_NAME", config.pi_name),
        ("PI_EMAIL", config.pi_email),
        ("SCIENCE_GOAL", config.science_goal),
    ):
        # Empty strings are left out; the loader keeps its default for absent keys.
        if value:
            lines.append(_line(key, _checked_str(key, value)))
    return lines


def _calculation_mode_blocks(config: RunConfiguration) -> list[list[str]]:
    mode = [
        "! ── Calculation mode ──────────────────────────────────────────",
        "#CALCULATION_MODE",
        _line("CALC_TARGET", _checked_str("CALC_TARGET", config.calc_target)),
        _line("FIELD_EVAL_METHOD", _checked_str("FIELD_EVAL_METHOD", config.field_eval_method)),
    ]
    if config.field_eval_method == "GRID_3D":
        mode += [
            _line("GRID_NX", str(config.grid_nx)),
            _line("GRID_NY", str(config.grid_ny)),
            _line("GRID_NZ", str(config.grid_nz)),
            _line("GRID_XMIN", format_float(config.grid_xmin, 1), "RE GSM"),
            _line("GRID_XMAX", format_float(config.grid_xmax, 1)),
            _line("GRID_YMIN", format_float(config.grid_ymin, 1)),
            _line("GRID_YMAX", format_float(config.grid_ymax, 1)),
            _line("GRID_ZMIN", format_float(config.grid_zmin, 1)),
            _line("GRID_ZMAX", format_float(config.grid_zmax, 1)),
        ]
    blocks = [mode]

    if config.calc_target in ("CUTOFF_RIGIDITY", "BOTH"):
        blocks.append(
            [
                "! ── Cutoff rigidity scan ──────────────────────────────────────",
                "#CUTOFF_RIGIDITY",
                _line("CUTOFF_EMIN", format_float(config.cutoff_emin, 1), "MeV/n"),
                _line("CUTOFF_EMAX", format_float(config.cutoff_emax, 1), "MeV/n"),
                _line("CUTOFF_MAX_PARTICLES", str(config.cutoff_max_particles), "per injection point"),
                _line("CUTOFF_NENERGY", str(config.cutoff_nenergy), "log-spaced energy bins"),
            ]
        )
    if config.calc_target == "DENSITY_3D":
        blocks.append(
            [
                "! ── 3-D ion density sampling ──────────────────────────────────",
                "#DENSITY_3D",
                _line("DENS_EMIN", format_float(config.dens_emin, 1), "MeV/n"),
                _line("DENS_EMAX", format_float(config.dens_emax, 1), "MeV/n"),
                _line("DENS_NENERGY", str(config.dens_nenergy), "energy bins"),
                _line("DENS_ENERGY_SPACING", _checked_str("DENS_ENERGY_SPACING", config.dens_energy_spacing)),
            ]
        )
    return blocks


def _particle_block(config: RunConfiguration) -> list[str]:
    return [
        "#PARTICLE_SPECIES",
        _line("SPECIES", _checked_str("SPECIES", config.species).upper()),
        _line("CHARGE", str(config.charge), "elementary charge"),
        _line("MASS_AMU", format_float(config.mass_amu, 4), "atomic mass units"),
    ]


def _model_specific_lines(config: RunConfiguration) -> list[str]:
    model = config.field_model.upper()
    if model == "T96":
        return [_line("T96_TILT_DEG", format_float(config.t96_tilt_deg, 1), "deg dipole tilt")]
    if model == "T01":
        return [
            _line("T01_TILT_DEG", format_float(config.t01_tilt_deg, 1), "deg dipole tilt"),
            _optional("T01_G1", config.t01_g1),
            _optional("T01_G2", config.t01_g2),
            _optional("T01_EPOCH", config.t01_epoch),
        ]
    if model in ("TA15", "TA16"):
        prefix = model.lower()
        suffixes = [
            "bx_gsw", "by_gsw", "bz_gsw", "vx_gse", "vy_gse", "vz_gse", "np", "t_k", "symh",
        ]  # fmt: skip
        if model == "TA16":
            suffixes.append("symhc")
        suffixes += ["imf_flag", "sw_flag", "tilt_rad", "pdyn", "n_index", "b_index", "epoch"]
        return [_optional(f"{model}_{s.upper()}", getattr(config, f"{prefix}_{s}")) for s in suffixes]
    return []


def _background_field_block(config: RunConfiguration) -> list[str]:
    lines = [
        "#BACKGROUND_FIELD",
        _line("FIELD_MODEL", _checked_str("FIELD_MODEL", config.field_model)),
        _line("DST", format_float(config.dst, 1), "nT ring current index (Dst)"),
        _line("PDYN", format_float(config.pdyn, 2), "nPa solar-wind dynamic pressure"),
        _line("IMF_BZ", format_float(config.imf_bz, 2), "nT IMF Bz (GSM)"),
        _line("SW_VX", format_float(config.sw_vx, 1), "km/s solar-wind Vx"),
        _line("SW_N", format_float(config.sw_n, 2), "cm-3 solar-wind proton density"),
        _line("IMF_BY", format_float(config.imf_by, 2), "nT IMF By"),
        _line("IMF_BX", format_float(config.imf_bx, 2), "nT IMF Bx"),
        _line("EPOCH", _checked_str("EPOCH", config.epoch), "UTC snapshot"),
        *_model_specific_lines(config),
        "! TS05 advanced inputs (optional; for reproducibility / TS05 W-variable runs)",
        _disabled_optional("TS05_TILT_RAD", config.ts05_tilt_rad, 4),
        _disabled_optional("TS05_IMFFLAG", config.ts05_imf_flag),
        _disabled_optional("TS05_ISWFLAG", config.ts05_sw_flag),
    ]
    for i in range(1, 7):
        lines.append(_disabled_optional(f"TS05_W{i}", getattr(config, f"ts05_w{i}")))
    return lines


def _boundary_block(config: RunConfiguration) -> list[str]:
    boundary = _checked_str("BOUNDARY_TYPE", config.boundary_type)
    if boundary == "BOX":
        return [
            "#DOMAIN_BOUNDARY",
            _line("BOUNDARY_TYPE", boundary, "rectangular box in GSM"),
            _line("DOMAIN_X_MAX", format_float(config.box_x_max, 1), "RE dayside"),
            _line("DOMAIN_X_MIN", format_float(config.box_x_min, 1), "RE nightside"),
            _line("DOMAIN_Y_MAX", format_float(config.box_y_max, 1), "RE dusk"),
            _line("DOMAIN_Y_MIN", format_float(config.box_y_min, 1), "RE dawn"),
            _line("DOMAIN_Z_MAX", format_float(config.box_z_max, 1), "RE north"),
            _line("DOMAIN_Z_MIN", format_float(config.box_z_min, 1), "RE south"),
            _line("R_INNER", format_float(config.box_r_inner, 1), "RE inner loss sphere"),
        ]

    if config.shue_mode == "manual":
        # A missing manual value is written as a non-numeric token that reloads as None.
        r0_text = MANUAL_TOKEN if config.shue_r0 is None else format_float(config.shue_r0, 2)
        alpha_text = AUTO_TOKEN if config.shue_alpha is None else format_float(config.shue_alpha, 3)
    else:
        r0_text = alpha_text = AUTO_TOKEN
    return [
        "#DOMAIN_BOUNDARY",
        _line("BOUNDARY_TYPE", boundary, "Shue et al. 1998 magnetopause"),
        _line("SHUE_R0", r0_text, "RE; AUTO = from Bz, Pdyn"),
        _line("SHUE_ALPHA", alpha_text, "flaring; AUTO = from Bz, Pdyn"),
        _line("DOMAIN_X_TAIL", format_float(config.x_tail, 1), "RE nightside cap"),
        _line("R_INNER", format_float(config.shue_r_inner, 1), "RE inner loss sphere"),
    ]


def _electric_field_block(config: RunConfiguration) -> list[str]:
    model = _checked_str("CONV_E_MODEL", config.conv_e_model)
    lines = [
        "#ELECTRIC_FIELD",
        _line("COROTATION_E", format_bool(config.corotation_e), "corotation electric field"),
        _line("CONV_E_MODEL", model),
    ]
    if model == "VOLLAND_STERN":
        kp_text = AUTO_TOKEN if config.vs_kp_mode == "auto" else format_float(config.vs_kp, 1)
        lines += [
            _line("VS_KP", kp_text, "AUTO = from Dst"),
            _line("VS_GAMMA", format_float(config.vs_gamma, 2), "shielding exponent"),
        ]
    elif model == "WEIMER":
        lines.append(_line("WEIMER_MODE", _checked_str("WEIMER_MODE", config.weimer_mode)))
    return lines


def _temporal_block(config: RunConfiguration) -> list[str]:
    lines = ["#TEMPORAL", _line("TEMPORAL_MODE", _checked_str("TEMPORAL_MODE", config.temporal_mode))]
    # Steady-state runs use the EPOCH written in #BACKGROUND_FIELD.
    if config.temporal_mode != "STEADY_STATE":
        lines += [
            _line("EVENT_START", _checked_str("EVENT_START", config.event_start), "UTC"),
            _line("EVENT_END", _checked_str("EVENT_END", config.event_end), "UTC"),
            _line("FIELD_UPDATE_DT", format_float(config.field_update_dt, 0), "min"),
            _line("INJECT_DT", format_float(config.inject_dt, 0), "min"),
            _line("TS_INPUT_MODE", TS_INPUT_KEYWORDS.get(config.ts_source, "SCALAR")),
        ]
    return lines


def _spectrum_block(config: RunConfiguration) -> list[str]:
    spectrum = _checked_str("SPECTRUM_TYPE", config.spectrum_type)
    lines = ["#SPECTRUM", _line("SPECTRUM_TYPE", spectrum)]
    j0 = _line("SPEC_J0", format_exp(config.spec_j0), "p/cm2/s/sr/(MeV/n)")
    e0 = _line("SPEC_E0", format_float(config.spec_e0, 1), "MeV/n pivot")
    if spectrum in ("POWER_LAW", "POWER_LAW_CUTOFF"):
        lines += [j0, _line("SPEC_GAMMA", format_float(config.spec_gamma, 2), "spectral index"), e0]
        if spectrum == "POWER_LAW_CUTOFF":
            lines.append(_line("SPEC_EC", format_float(config.spec_ec, 1), "MeV/n exponential cutoff"))
    elif spectrum == "LIS_FORCE_FIELD":
        lines += [
            _line("SPEC_LIS_J0", format_exp(config.spec_lis_j0), "p/cm2/s/sr/(MeV/n) LIS normalization"),
            _line("SPEC_LIS_GAMMA", format_float(config.spec_lis_gamma, 2), "LIS spectral index"),
            e0,
            _line("SPEC_PHI", format_float(config.spec_phi, 0), "MV solar modulation potential"),
        ]
    elif spectrum == "BAND":
        lines += [
            j0,
            _line("SPEC_GAMMA1", format_float(config.spec_gamma1, 2), "low-energy index"),
            _line("SPEC_GAMMA2", format_float(config.spec_gamma2, 2), "high-energy index"),
            _line("SPEC_E0", format_float(config.spec_e0, 1), "MeV/n break energy"),
        ]
    elif spectrum == "TABLE":
        lines.append(
            _line("SPEC_TABLE_FILE", _checked_str("SPEC_TABLE_FILE", config.spec_table_file), "E vs J table")
        )
    lines += [
        _line("SPEC_EMIN", format_float(config.spec_emin, 1), "MeV/n"),
        _line("SPEC_EMAX", format_float(config.spec_emax, 1), "MeV/n"),
    ]
    return lines


def _output_domain_block(config: RunConfiguration) -> list[str]:
    lines = [
        "#OUTPUT_DOMAIN",
        _line("OUTPUT_MODE", _checked_str("OUTPUT_MODE", config.output_mode)),
        _line("FLUX_DT", format_float(config.flux_dt, 1), "min (trajectory cadence; ignored for POINTS/SHELLS)"),
    ]
    if config.output_mode == "POINTS":
        points = config.point_lines()
        lines.append(_line("N_POINTS", str(len(points)), "number of points provided below"))
        lines.append("POINTS_BEGIN")
        for point in points:
            lines.append(_line("POINT", _checked_str("POINT", point)))
        if not points:
            lines.append("! (no points specified)")
        lines.append("POINTS_END")
    elif config.output_mode == "SHELLS":
        if not config.shell_alts_km:
            raise InputGenerationError("SHELL_ALTS_KM needs at least one altitude in SHELLS mode.")
        lines += [
            _line("SHELL_COUNT", str(config.shell_count), "number of shells"),
            _line("SHELL_ALTS_KM", format_list(config.shell_alts_km, 1), "km; one altitude per shell"),
            _line("SHELL_RES_DEG", str(config.shell_res_deg), "deg; angular resolution (lat/lon)"),
        ]
    return lines


def _output_options_block(config: RunConfiguration) -> list[str]:
    if not config.energy_bins:
        raise InputGenerationError("ENERGY_BINS needs at least one energy.")
    if any(e <= 0 for e in config.energy_bins):
        raise InputGenerationError(f"ENERGY_BINS must all be positive, got {config.energy_bins}.")
    return [
        "#OUTPUT_OPTIONS",
        _line("FLUX_TYPE", _checked_str("FLUX_TYPE", config.flux_type)),
        _line("OUTPUT_CUTOFF", format_bool(config.output_cutoff), "cutoff rigidity maps"),
        _line("OUTPUT_PITCH", format_bool(config.output_pitch), "pitch angle distributions"),
        _line("OUTPUT_FORMAT", _checked_str("OUTPUT_FORMAT", config.output_format)),
        _line("OUTPUT_COORDS", _checked_str("OUTPUT_COORDS", config.output_coords)),
        _line("ENERGY_BINS", format_list(config.energy_bins), "MeV/n"),
    ]


def _numerical_block(config: RunConfiguration) -> list[str]:
    return [
        "#NUMERICAL",
        _line("N_PARTICLES", str(config.n_particles), "test particles per injection"),
        _line("MAX_BOUNCE", str(config.max_bounce), "max mirror reflections"),
        _line("DT_TRACE", format_float(config.dt_trace, 1), "s integration step"),
        _line("PITCH_ISOTROPIC", format_bool(config.pitch_isotropic), "isotropic injection"),
    ]


def export_param_file(config: RunConfiguration) -> str:
    """
    Render a run configuration as AMPS_PARAM.in text.

    Only the fields of the active variants are written (e.g. box faces for a BOX
    boundary, the point block for POINTS output). Empty identity strings are
    omitted.

    Args:
        config: The configuration to write.

    Returns:
        The file content, newline terminated.

    Raises:
        InputGenerationError: If a value cannot be represented in the keyword
            format (multi-line or '!'-containing strings, non-finite numbers,
            an empty energy bin list).
    """
    blocks: list[list[str]] = [
        _header_block(config),
        _run_info_block(config),
        *_calculation_mode_blocks(config),
        _particle_block(config),
        _background_field_block(config),
        _boundary_block(config),
        _electric_field_block(config),
        _temporal_block(config),
        _spectrum_block(config),
        _output_domain_block(config),
        _output_options_block(config),
        _numerical_block(config),
        ["#END"],
    ]
    text = "\n\n".join("\n".join(block) for block in blocks) + "\n"
    logger.info(f"Generated AMPS_PARAM.in for run '{config.run_name}' ({text.count(chr(10))} lines).")
    return text
