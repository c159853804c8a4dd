from collections.abc import Callable, Mapping
from typing import Any

from ampsparam.core import RunConfiguration
from ampsparam.exceptions import ConfigurationError, InternalCodeError
from ampsparam.hydrate.coerce import parse_leading_float, to_bool, to_float, to_float_list, to_int, to_str
from ampsparam.hydrate.fields import KEYWORD_FIELDS, FieldKind
from ampsparam.parsers.typing import KeywordMap
from ampsparam.physics import KP_STRATEGIES, dst_to_kp
from ampsparam.species import CUSTOM_TAG, resolve_species
from ampsparam.utils import logger

COERCERS: dict[FieldKind, Callable[[Mapping[str, str], str, Any], Any]] = {
    "num": to_float,
    "int": to_int,
    "str": to_str,
    "bool": to_bool,
}

AUTO_TOKEN = "AUTO"

TS_INPUT_MODES: dict[str, str] = {
    "OMNIWEB": "omni",
    "FILE": "file",
    "SCALAR": "scalar",
}

# Generic driver keyword -> (generic attribute, model-specific attributes)
DRIVER_SYNC: dict[str, tuple[str, tuple[str, ...]]] = {
    "DST": ("dst", ("t96_dst", "t01_dst")),
    "PDYN": ("pdyn", ("t96_pdyn", "t01_pdyn")),
    "IMF_BY": ("imf_by", ("t96_imf_by", "t01_imf_by")),
    "IMF_BZ": ("imf_bz", ("t96_imf_bz", "t01_imf_bz")),
}


def _apply_keyword_table(kmap: KeywordMap, config: RunConfiguration) -> int:
    """Phase A: every table keyword present in the map overwrites its field. Returns the number applied."""
    applied = 0
    for spec in KEYWORD_FIELDS:
        if spec.keyword not in kmap:
            continue
        try:
            coerce = COERCERS[spec.kind]
        except KeyError as e:
            raise InternalCodeError(f"No coercion for field kind '{spec.kind}' ({spec.keyword})") from e
        setattr(config, spec.attribute, coerce(kmap, spec.keyword, getattr(config, spec.attribute)))
        applied += 1
    return applied


def _apply_species(kmap: KeywordMap, config: RunConfiguration) -> None:
    """Species aliases fill charge and mass; explicit CHARGE / MASS_AMU then override."""
    raw_species = to_str(kmap, "SPECIES", "").strip()
    if raw_species:
        info = resolve_species(raw_species)
        if info is not None:
            config.species, config.charge, config.mass_amu = info.tag, info.charge, info.mass_amu
        else:
            logger.debug(f"Species '{raw_species}' not in alias table, tagging as custom.")
            config.species = CUSTOM_TAG
    config.charge = to_int(kmap, "CHARGE", config.charge)
    config.mass_amu = to_float(kmap, "MASS_AMU", config.mass_amu)


def _sync_model_drivers(kmap: KeywordMap, config: RunConfiguration) -> None:
    """Copy the shared solar-wind drivers into the T96 and T01 driver sets."""
    for keyword, (generic, targets) in DRIVER_SYNC.items():
        if keyword in kmap:
            for target in targets:
                setattr(config, target, getattr(config, generic))


def _apply_boundary(kmap: KeywordMap, config: RunConfiguration) -> None:
    # R_INNER is shared by both boundary shapes; the discriminator decides which one it belongs to.
    if config.boundary_type == "BOX":
        config.box_r_inner = to_float(kmap, "R_INNER", config.box_r_inner)
    else:
        config.shue_r_inner = to_float(kmap, "R_INNER", config.shue_r_inner)

    if "SHUE_R0" not in kmap:
        return
    raw_r0 = kmap["SHUE_R0"].strip()
    if raw_r0.upper() == AUTO_TOKEN:
        config.shue_mode = "auto"
        config.shue_r0 = None
        config.shue_alpha = None
        return
    config.shue_mode = "manual"
    config.shue_r0 = parse_leading_float(raw_r0)
    config.shue_alpha = to_float(kmap, "SHUE_ALPHA", None)


def _apply_electric_field(kmap: KeywordMap, config: RunConfiguration, kp_strategy: str) -> None:
    raw_kp = to_str(kmap, "VS_KP", "").strip()
    if raw_kp.upper() == AUTO_TOKEN:
        config.vs_kp_mode = "auto"
    elif raw_kp:
        config.vs_kp_mode = "manual"
        config.vs_kp = to_float(kmap, "VS_KP", config.vs_kp)

    if config.vs_kp_mode == "auto" and ("DST" in kmap or "VS_KP" in kmap):
        config.vs_kp = dst_to_kp(config.dst, kp_strategy)
        logger.debug(f"Derived Kp {config.vs_kp} from Dst {config.dst} nT.")


def _apply_output_domain(kmap: KeywordMap, config: RunConfiguration) -> None:
    # Structural evidence (point entries, shell keys) outranks the OUTPUT_MODE label.
    if kmap.has_points:
        config.points_text = "\n".join(kmap.points)
        config.output_mode = "POINTS"
        logger.debug(f"Point block with {len(kmap.points)} entries forces output mode POINTS.")

    if "SHELL_COUNT" in kmap:
        config.shell_count = to_int(kmap, "SHELL_COUNT", config.shell_count)
        config.shell_res_deg = to_int(kmap, "SHELL_RES_DEG", config.shell_res_deg)
        config.shell_alts_km = to_float_list(kmap, "SHELL_ALTS_KM", config.shell_alts_km)
        config.output_mode = "SHELLS"
        logger.debug("SHELL_COUNT present, forcing output mode SHELLS.")

    config.energy_bins = to_float_list(kmap, "ENERGY_BINS", config.energy_bins, keep=lambda v: v > 0)


def hydrate(kmap: KeywordMap, config: RunConfiguration, *, kp_strategy: str = "linear") -> KeywordMap:
    """
    Apply a parsed keyword map to a run configuration, in place.

    Fields whose keyword is absent keep their current value, as do fields whose
    value cannot be coerced. Unknown keywords are ignored. Cross-field rules run
    after the plain keyword table, in this order: species, model driver sync,
    boundary, electric field, temporal input source, output domain.

    Args:
        kmap: Result of `parse_param_file`.
        config: Configuration to update. Mutated in place.
        kp_strategy: Name of the Dst to Kp conversion used when Kp is in auto mode.

    Returns:
        The same keyword map, for callers that need raw values.

    Raises:
        ConfigurationError: If kp_strategy is not a known strategy name.
    """
    if kp_strategy not in KP_STRATEGIES:
        raise ConfigurationError(f"Unknown Dst to Kp strategy '{kp_strategy}'")

    applied = _apply_keyword_table(kmap, config)
    logger.debug(f"Keyword table applied {applied} fields.")

    _apply_species(kmap, config)
    _sync_model_drivers(kmap, config)
    _apply_boundary(kmap, config)
    _apply_electric_field(kmap, config, kp_strategy)

    ts_mode = to_str(kmap, "TS_INPUT_MODE", "").strip().upper()
    if ts_mode in TS_INPUT_MODES:
        config.ts_source = TS_INPUT_MODES[ts_mode]  # type: ignore[assignment]

    _apply_output_domain(kmap, config)
    return kmap
