from dataclasses import fields

import pytest

from ampsparam.core import RunConfiguration
from ampsparam.hydrate.fields import FIELDS_BY_KEYWORD, KEYWORD_FIELDS, FieldSpec

CONFIG_ATTRIBUTES = {f.name for f in fields(RunConfiguration)}

# Keywords applied by the hydrator's cross-field rules instead of the table
SPECIAL_KEYWORDS = {
    "SPECIES",
    "CHARGE",
    "MASS_AMU",
    "R_INNER",
    "SHUE_R0",
    "SHUE_ALPHA",
    "VS_KP",
    "TS_INPUT_MODE",
    "SHELL_COUNT",
    "SHELL_RES_DEG",
    "SHELL_ALTS_KM",
    "ENERGY_BINS",
}


def test_keywords_are_unique() -> None:
    keywords = [spec.keyword for spec in KEYWORD_FIELDS]
    assert len(keywords) == len(set(keywords))
    assert len(FIELDS_BY_KEYWORD) == len(KEYWORD_FIELDS)


def test_attributes_are_unique() -> None:
    attributes = [spec.attribute for spec in KEYWORD_FIELDS]
    assert len(attributes) == len(set(attributes))


@pytest.mark.parametrize("spec", KEYWORD_FIELDS, ids=lambda s: s.keyword)
def test_every_row_targets_a_config_field(spec: FieldSpec) -> None:
    """Verify each row names an existing RunConfiguration field and a known kind."""
    assert spec.attribute in CONFIG_ATTRIBUTES
    assert spec.kind in ("num", "int", "str", "bool")


@pytest.mark.parametrize("spec", KEYWORD_FIELDS, ids=lambda s: s.keyword)
def test_keywords_are_keyword_shaped(spec: FieldSpec) -> None:
    assert spec.keyword.upper() == spec.keyword
    assert spec.keyword[0].isalpha()


def test_special_keywords_not_in_table() -> None:
    assert SPECIAL_KEYWORDS.isdisjoint(FIELDS_BY_KEYWORD)


@pytest.mark.parametrize(
    "keyword, kind, attribute, default",
    [
        ("RUN_ID", "str", "run_name", "SEP_Sep2017_VanAllenProbeA"),
        ("GRID_NX", "int", "grid_nx", 64),
        ("DST", "num", "dst", -142.0),
        ("IMF_BZ", "num", "imf_bz", -18.5),
        ("TS05_ISWFLAG", "int", "ts05_sw_flag", None),
        ("TA16_SYMHC", "num", "ta16_symhc", None),
        ("DOMAIN_X_MIN", "num", "box_x_min", -60.0),
        ("DOMAIN_X_TAIL", "num", "x_tail", -60.0),
        ("COROTATION_E", "bool", "corotation_e", True),
        ("SPEC_LIS_GAMMA", "num", "spec_lis_gamma", 2.7),
        ("OUTPUT_PITCH", "bool", "output_pitch", False),
        ("PITCH_ISOTROPIC", "bool", "pitch_isotropic", True),
    ],
)
def test_selected_rows(keyword: str, kind: str, attribute: str, default: object) -> None:
    spec = FIELDS_BY_KEYWORD[keyword]
    assert (spec.kind, spec.attribute) == (kind, attribute)
    assert spec.default == default


def test_tsyganenko_andreeva_rows_cover_both_models() -> None:
    ta15 = {k for k in FIELDS_BY_KEYWORD if k.startswith("TA15_")}
    ta16 = {k for k in FIELDS_BY_KEYWORD if k.startswith("TA16_")}
    assert len(ta15) == 16
    assert {k.replace("TA16_", "TA15_") for k in ta16} == ta15 | {"TA15_SYMHC"}


def test_default_uses_factory_for_lists() -> None:
    spec = FieldSpec("ENERGY_BINS", "num", "energy_bins")
    assert spec.default == [1.0, 5.0, 10.0, 30.0, 100.0, 300.0, 1000.0]
    assert spec.default is not spec.default
