from dataclasses import MISSING, dataclass, fields
from typing import Any, Literal

from ampsparam.core import RunConfiguration

FieldKind = Literal["num", "int", "str", "bool"]

_CONFIG_FIELDS = {f.name: f for f in fields(RunConfiguration)}


@dataclass(frozen=True)
class FieldSpec:
    """One row of the keyword table: which keyword fills which RunConfiguration field, and how."""

    keyword: str
    kind: FieldKind
    attribute: str

    @property
    def default(self) -> Any:
        """Default value of the target field on a fresh RunConfiguration."""
        spec = _CONFIG_FIELDS[self.attribute]
        if spec.default is not MISSING:
            return spec.default
        if spec.default_factory is not MISSING:
            return spec.default_factory()
        return None


def _rows(kind: FieldKind, *pairs: tuple[str, str]) -> tuple[FieldSpec, ...]:
    return tuple(FieldSpec(keyword, kind, attribute) for keyword, attribute in pairs)


def _prefixed(kind: FieldKind, keyword_prefix: str, attribute_prefix: str, *suffixes: str) -> tuple[FieldSpec, ...]:
    return tuple(FieldSpec(f"{keyword_prefix}{s}", kind, f"{attribute_prefix}{s.lower()}") for s in suffixes)


def _tsyganenko_andreeva(model: str) -> tuple[FieldSpec, ...]:
    """TA15 and TA16 share their driver keywords."""
    keyword, attribute = f"{model}_", f"{model.lower()}_"
    return (
        *_prefixed("num", keyword, attribute, "BX_GSW", "BY_GSW", "BZ_GSW", "VX_GSE", "VY_GSE", "VZ_GSE"),
        *_prefixed("num", keyword, attribute, "NP", "T_K", "SYMH"),
        *_prefixed("int", keyword, attribute, "IMF_FLAG", "SW_FLAG"),
        *_prefixed("num", keyword, attribute, "TILT_RAD", "PDYN", "N_INDEX", "B_INDEX"),
        *_prefixed("str", keyword, attribute, "EPOCH"),
    )


# Keywords with cross-field behaviour (species, R_INNER, SHUE_R0/ALPHA, VS_KP,
# TS_INPUT_MODE, SHELL_*, ENERGY_BINS) are handled by the hydrator directly.
KEYWORD_FIELDS: tuple[FieldSpec, ...] = (
    # --- Run info --- #
    *_rows("str", ("RUN_ID", "run_name"), ("PI_NAME", "pi_name"), ("PI_EMAIL", "pi_email")),
    *_rows("str", ("SCIENCE_GOAL", "science_goal")),
    # --- Calculation mode --- #
    *_rows("str", ("CALC_TARGET", "calc_target"), ("FIELD_EVAL_METHOD", "field_eval_method")),
    *_prefixed("int", "GRID_", "grid_", "NX", "NY", "NZ"),
    *_prefixed("num", "GRID_", "grid_", "XMIN", "XMAX", "YMIN", "YMAX", "ZMIN", "ZMAX"),
    *_prefixed("num", "CUTOFF_", "cutoff_", "EMIN", "EMAX"),
    *_prefixed("int", "CUTOFF_", "cutoff_", "MAX_PARTICLES", "NENERGY"),
    *_prefixed("num", "DENS_", "dens_", "EMIN", "EMAX"),
    *_prefixed("int", "DENS_", "dens_", "NENERGY"),
    *_prefixed("str", "DENS_", "dens_", "ENERGY_SPACING"),
    # --- Background field --- #
    *_rows("str", ("FIELD_MODEL", "field_model")),
    *_rows(
        "num",
        ("DST", "dst"),
        ("PDYN", "pdyn"),
        ("IMF_BZ", "imf_bz"),
        ("SW_VX", "sw_vx"),
        ("SW_N", "sw_n"),
        ("IMF_BY", "imf_by"),
        ("IMF_BX", "imf_bx"),
    ),
    *_rows("str", ("EPOCH", "epoch")),
    *_prefixed("num", "TS05_", "ts05_", "TILT_RAD"),
    *_rows("int", ("TS05_IMFFLAG", "ts05_imf_flag"), ("TS05_ISWFLAG", "ts05_sw_flag")),
    *_prefixed("num", "TS05_", "ts05_", "W1", "W2", "W3", "W4", "W5", "W6"),
    *_prefixed("num", "T96_", "t96_", "TILT_DEG"),
    *_prefixed("num", "T01_", "t01_", "TILT_DEG", "G1", "G2"),
    *_prefixed("str", "T01_", "t01_", "EPOCH"),
    *_tsyganenko_andreeva("TA15"),
    *_tsyganenko_andreeva("TA16"),
    *_prefixed("num", "TA16_", "ta16_", "SYMHC"),
    # --- Domain boundary --- #
    *_rows("str", ("BOUNDARY_TYPE", "boundary_type")),
    *_prefixed("num", "DOMAIN_", "box_", "X_MAX", "X_MIN", "Y_MAX", "Y_MIN", "Z_MAX", "Z_MIN"),
    *_rows("num", ("DOMAIN_X_TAIL", "x_tail")),
    # --- Electric field --- #
    *_rows("bool", ("COROTATION_E", "corotation_e")),
    *_rows("str", ("CONV_E_MODEL", "conv_e_model")),
    *_rows("num", ("VS_GAMMA", "vs_gamma")),
    *_rows("str", ("WEIMER_MODE", "weimer_mode")),
    # --- Temporal --- #
    *_rows("str", ("TEMPORAL_MODE", "temporal_mode"), ("EVENT_START", "event_start"), ("EVENT_END", "event_end")),
    *_rows("num", ("FIELD_UPDATE_DT", "field_update_dt"), ("INJECT_DT", "inject_dt")),
    # --- Spectrum --- #
    *_rows("str", ("SPECTRUM_TYPE", "spectrum_type")),
    *_prefixed("num", "SPEC_", "spec_", "J0", "GAMMA", "E0", "EMIN", "EMAX", "EC", "LIS_J0", "LIS_GAMMA", "PHI"),
    *_prefixed("num", "SPEC_", "spec_", "GAMMA1", "GAMMA2"),
    *_prefixed("str", "SPEC_", "spec_", "TABLE_FILE"),
    # --- Output domain --- #
    *_rows("str", ("OUTPUT_MODE", "output_mode")),
    *_rows("num", ("FLUX_DT", "flux_dt")),
    # --- Output options --- #
    *_rows("str", ("FLUX_TYPE", "flux_type")),
    *_rows("bool", ("OUTPUT_CUTOFF", "output_cutoff"), ("OUTPUT_PITCH", "output_pitch")),
    *_rows("str", ("OUTPUT_FORMAT", "output_format"), ("OUTPUT_COORDS", "output_coords")),
    # --- Numerical --- #
    *_rows("int", ("N_PARTICLES", "n_particles"), ("MAX_BOUNCE", "max_bounce")),
    *_rows("num", ("DT_TRACE", "dt_trace")),
    *_rows("bool", ("PITCH_ISOTROPIC", "pitch_isotropic")),
)

FIELDS_BY_KEYWORD: dict[str, FieldSpec] = {spec.keyword: spec for spec in KEYWORD_FIELDS}
