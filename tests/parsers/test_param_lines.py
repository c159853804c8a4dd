import logging

import pytest

from ampsparam.parsers.lines import classify_line, classify_lines, strip_inline_comment
from ampsparam.parsers.typing import LineKind
from ampsparam.utils import logger

logger.setLevel(logging.CRITICAL)

# === Test Data ===

POINT_BLOCK = """POINTS_BEGIN
POINT                 6.6 0.0 0.0
   point  -4.2 3.1 0.5

! (no points specified)
0.0 -5.0 1.0
POINTS_END
POINT  9.9 9.9 9.9""".splitlines()

MIXED_FILE = """! ═══════════════════════
#RUN_INFO
RUN_ID   storm_run   ! identifier
! PI_NAME   Jane Doe
lowercase_key value
#END"""


# === Tests for classify_line() ===


@pytest.mark.parametrize("line", ["", "   ", "\t", "! ══════════════", "  ! ── Calculation mode ──────", "!-----"])
def test_blank_and_decorative_lines(line: str) -> None:
    """Verify whitespace-only and rule lines are BlankOrDecorative."""
    assert classify_line(line, in_block=False).kind is LineKind.BLANK_OR_DECORATIVE


@pytest.mark.parametrize("line, name", [("#RUN_INFO", "RUN_INFO"), ("  #output_domain extra", "output_domain")])
def test_section_header(line: str, name: str) -> None:
    """Verify section headers carry the section name as key."""
    result = classify_line(line, in_block=False)
    assert result.kind is LineKind.SECTION_HEADER
    assert result.key == name


def test_active_param_strips_inline_comment() -> None:
    """Verify value excludes the trailing '! comment' and surrounding whitespace."""
    result = classify_line("DST                    -142.0         ! nT ring current index", in_block=False, line_number=7)
    assert result.kind is LineKind.ACTIVE_PARAM
    assert (result.key, result.value, result.line_number) == ("DST", "-142.0", 7)


def test_active_param_keeps_inner_spaces() -> None:
    """Verify multi-word values are kept whole."""
    result = classify_line("PI_NAME                Jane  Doe", in_block=False)
    assert result.value == "Jane  Doe"


def test_active_param_with_only_comment_has_empty_value() -> None:
    """Verify a keyword followed only by a comment yields an empty value."""
    result = classify_line("PI_NAME      ! fill in", in_block=False)
    assert result.kind is LineKind.ACTIVE_PARAM
    assert result.value == ""


def test_commented_param_recovered() -> None:
    """Verify '! KEY value' lines become CommentedParam."""
    result = classify_line("! TS05_W1                1.50   ! optional", in_block=False)
    assert result.kind is LineKind.COMMENTED_PARAM
    assert (result.key, result.value) == ("TS05_W1", "1.50")


@pytest.mark.parametrize(
    "line",
    [
        "! TS05_ISWFLAG",  # no value
        "! TS05_ISWFLAG     ! empty",  # value is only an inline comment
        "! AB some prose here",  # keyword too short
        "! CALC_TARGET: what the run computes",  # not keyword-shaped
        "! Energy range and particle budget",  # lowercase prose
        "!NO_SPACE value",  # no whitespace after the marker
    ],
)
def test_pure_comments(line: str) -> None:
    """Verify comment lines without a recoverable parameter are PureComment."""
    assert classify_line(line, in_block=False).kind is LineKind.PURE_COMMENT


def test_three_letter_commented_keyword_is_accepted() -> None:
    """Verify the minimum commented keyword length is three characters."""
    result = classify_line("! DST -50", in_block=False)
    assert result.kind is LineKind.COMMENTED_PARAM
    assert result.key == "DST"


@pytest.mark.parametrize("line", ["lowercase_key value", "X 1", "DST", "123 abc", "=== junk ==="])
def test_unrecognized_lines(line: str) -> None:
    """Verify lines matching no rule are Unrecognized and do not raise."""
    assert classify_line(line, in_block=False).kind is LineKind.UNRECOGNIZED


@pytest.mark.parametrize("line", ["POINTS_BEGIN", "  points_begin  "])
def test_block_begin_marker_case_insensitive(line: str) -> None:
    """Verify POINTS_BEGIN is recognized in any case, inside or outside a block."""
    assert classify_line(line, in_block=False).kind is LineKind.BLOCK_BEGIN
    assert classify_line(line, in_block=True).kind is LineKind.BLOCK_BEGIN


def test_block_end_marker() -> None:
    """Verify POINTS_END ends the block."""
    assert classify_line("POINTS_END", in_block=True).kind is LineKind.BLOCK_END


def test_block_body_prefix_stripped() -> None:
    """Verify the POINT keyword is removed from body lines."""
    result = classify_line("POINT                 6.6 0.0 0.0", in_block=True)
    assert result.kind is LineKind.BLOCK_BODY
    assert result.value == "6.6 0.0 0.0"


def test_block_body_outside_block_is_not_body() -> None:
    """Verify the same line outside a block is an ordinary parameter."""
    result = classify_line("POINT                 6.6 0.0 0.0", in_block=False)
    assert result.kind is LineKind.ACTIVE_PARAM
    assert result.key == "POINT"


def test_block_body_prefix_stripped_once() -> None:
    """Verify only the first POINT token is treated as the prefix."""
    assert classify_line("POINT POINT A 1 2", in_block=True).value == "POINT A 1 2"


@pytest.mark.parametrize("line", ["", "    ", "! (no points specified)", "POINT   ! nothing"])
def test_block_body_empty_or_comment_dropped(line: str) -> None:
    """Verify empty and comment-only body lines are not collected."""
    assert classify_line(line, in_block=True).kind is LineKind.BLANK_OR_DECORATIVE


def test_section_header_inside_block_is_body() -> None:
    """Verify the block takes priority over other rules."""
    result = classify_line("#RUN_INFO", in_block=True)
    assert result.kind is LineKind.BLOCK_BODY


# === Tests for classify_lines() ===


def test_classify_lines_tracks_block_mode() -> None:
    """Verify block mode switches on at POINTS_BEGIN and off at POINTS_END."""
    kinds = [c.kind for c in classify_lines("\n".join(POINT_BLOCK))]
    assert kinds == [
        LineKind.BLOCK_BEGIN,
        LineKind.BLOCK_BODY,
        LineKind.BLOCK_BODY,
        LineKind.BLANK_OR_DECORATIVE,
        LineKind.BLANK_OR_DECORATIVE,
        LineKind.BLOCK_BODY,
        LineKind.BLOCK_END,
        LineKind.ACTIVE_PARAM,
    ]


def test_classify_lines_numbers_from_one() -> None:
    """Verify line numbers are 1-based."""
    lines = classify_lines(MIXED_FILE)
    assert [c.line_number for c in lines] == [1, 2, 3, 4, 5, 6]


def test_classify_lines_mixed_file() -> None:
    """Verify a small file with each kind of line."""
    kinds = [c.kind for c in classify_lines(MIXED_FILE)]
    assert kinds == [
        LineKind.BLANK_OR_DECORATIVE,
        LineKind.SECTION_HEADER,
        LineKind.ACTIVE_PARAM,
        LineKind.COMMENTED_PARAM,
        LineKind.UNRECOGNIZED,
        LineKind.SECTION_HEADER,
    ]


def test_classify_lines_accepts_crlf() -> None:
    """Verify Windows line endings do not leak into values."""
    lines = classify_lines("#RUN_INFO\r\nRUN_ID   storm_run\r\n")
    assert lines[1].value == "storm_run"


def test_strip_inline_comment() -> None:
    assert strip_inline_comment("  5 ! min ! more ") == "5"
    assert strip_inline_comment("abc") == "abc"
