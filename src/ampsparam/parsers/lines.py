import re
from collections.abc import Sequence

from ampsparam.parsers.typing import ClassifiedLine, LineKind, LineRule
from ampsparam.utils import logger

# --- Regex Patterns --- #
POINTS_BEGIN_PAT = re.compile(r"^\s*POINTS_BEGIN\s*$", re.IGNORECASE)
POINTS_END_PAT = re.compile(r"^\s*POINTS_END\s*$", re.IGNORECASE)
# Optional per-item keyword on block body lines
POINT_PREFIX_PAT = re.compile(r"^\s*POINT\s+", re.IGNORECASE)

BLANK_PAT = re.compile(r"^\s*$")
# Rule lines such as "! ════" or "! ── Calculation mode ──"
DECORATIVE_PAT = re.compile(r"^\s*!\s*[═─=\-]+")
SECTION_PAT = re.compile(r"^\s*#(\w+)")
COMMENTED_PARAM_PAT = re.compile(r"^\s*!\s+([A-Z][A-Z0-9_]+)\s+(.*)")
COMMENT_PAT = re.compile(r"^\s*!")
ACTIVE_PARAM_PAT = re.compile(r"^\s*([A-Z][A-Z0-9_]+)\s+(.*)")
INLINE_COMMENT_PAT = re.compile(r"\s*!.*$")

COMMENT_CHAR = "!"
# Shorter keywords after "!" are treated as prose ("! AT the...").
MIN_COMMENTED_KEY_LEN = 3


def strip_inline_comment(value: str) -> str:
    """Drop a trailing "! comment" and surrounding whitespace from a raw value."""
    return INLINE_COMMENT_PAT.sub("", value).strip()


class BlockBeginRule(LineRule):
    """POINTS_BEGIN marker. Switches block mode on."""

    def matches(self, line: str, in_block: bool) -> bool:
        return POINTS_BEGIN_PAT.match(line) is not None

    def classify(self, line: str, line_number: int) -> ClassifiedLine:
        return ClassifiedLine(LineKind.BLOCK_BEGIN, line_number)


class BlockEndRule(LineRule):
    """POINTS_END marker. Switches block mode off."""

    def matches(self, line: str, in_block: bool) -> bool:
        return POINTS_END_PAT.match(line) is not None

    def classify(self, line: str, line_number: int) -> ClassifiedLine:
        return ClassifiedLine(LineKind.BLOCK_END, line_number)


class BlockBodyRule(LineRule):
    """Any line inside the point block. Empty and comment-only entries are dropped."""

    def matches(self, line: str, in_block: bool) -> bool:
        return in_block

    def classify(self, line: str, line_number: int) -> ClassifiedLine:
        entry = POINT_PREFIX_PAT.sub("", line, count=1).strip()
        if not entry or entry.startswith(COMMENT_CHAR):
            return ClassifiedLine(LineKind.BLANK_OR_DECORATIVE, line_number)
        return ClassifiedLine(LineKind.BLOCK_BODY, line_number, value=entry)


class BlankOrDecorativeRule(LineRule):
    """Whitespace-only lines and comment rules made of box-drawing characters."""

    def matches(self, line: str, in_block: bool) -> bool:
        return BLANK_PAT.match(line) is not None or DECORATIVE_PAT.match(line) is not None

    def classify(self, line: str, line_number: int) -> ClassifiedLine:
        return ClassifiedLine(LineKind.BLANK_OR_DECORATIVE, line_number)


class SectionHeaderRule(LineRule):
    """#SECTION_NAME header lines."""

    def matches(self, line: str, in_block: bool) -> bool:
        return SECTION_PAT.match(line) is not None

    def classify(self, line: str, line_number: int) -> ClassifiedLine:
        match = SECTION_PAT.match(line)
        assert match is not None
        return ClassifiedLine(LineKind.SECTION_HEADER, line_number, key=match.group(1))


class CommentedParamRule(LineRule):
    """
    Disabled parameters written as "! KEYWORD value".

    Only accepted when the value is non-empty after stripping its inline
    comment and the keyword has at least three characters. Everything else
    falls through to the pure comment rule.
    """

    def _split(self, line: str) -> tuple[str, str] | None:
        match = COMMENTED_PARAM_PAT.match(line)
        if match is None:
            return None
        key = match.group(1)
        value = strip_inline_comment(match.group(2))
        if not value or len(key) < MIN_COMMENTED_KEY_LEN:
            return None
        return key, value

    def matches(self, line: str, in_block: bool) -> bool:
        return self._split(line) is not None

    def classify(self, line: str, line_number: int) -> ClassifiedLine:
        split = self._split(line)
        assert split is not None
        key, value = split
        return ClassifiedLine(LineKind.COMMENTED_PARAM, line_number, key=key, value=value)


class PureCommentRule(LineRule):
    """Descriptive comment lines with no recoverable keyword."""

    def matches(self, line: str, in_block: bool) -> bool:
        return COMMENT_PAT.match(line) is not None

    def classify(self, line: str, line_number: int) -> ClassifiedLine:
        return ClassifiedLine(LineKind.PURE_COMMENT, line_number)


class ActiveParamRule(LineRule):
    """Regular "KEYWORD value ! comment" lines."""

    def matches(self, line: str, in_block: bool) -> bool:
        return ACTIVE_PARAM_PAT.match(line) is not None

    def classify(self, line: str, line_number: int) -> ClassifiedLine:
        match = ACTIVE_PARAM_PAT.match(line)
        assert match is not None
        return ClassifiedLine(
            LineKind.ACTIVE_PARAM, line_number, key=match.group(1), value=strip_inline_comment(match.group(2))
        )


# --- Rule Registry --- #
# Order matters: block markers before block body, block body before everything
# else, commented parameters before pure comments.
LINE_RULES: Sequence[LineRule] = [
    BlockBeginRule(),
    BlockEndRule(),
    BlockBodyRule(),
    BlankOrDecorativeRule(),
    SectionHeaderRule(),
    CommentedParamRule(),
    PureCommentRule(),
    ActiveParamRule(),
]


def classify_line(line: str, in_block: bool, line_number: int = 0) -> ClassifiedLine:
    """
    Classify a single line of an AMPS_PARAM.in file.

    Args:
        line: Raw line without its terminator.
        in_block: Whether the line sits between POINTS_BEGIN and POINTS_END.
        line_number: 1-based position in the file, carried into the result.

    Returns:
        The ClassifiedLine from the first matching rule, or an UNRECOGNIZED
        line when no rule applies.
    """
    for rule in LINE_RULES:
        if rule.matches(line, in_block):
            return rule.classify(line, line_number)
    return ClassifiedLine(LineKind.UNRECOGNIZED, line_number)


def classify_lines(text: str) -> list[ClassifiedLine]:
    """Classify every line of a file, tracking point-block mode across lines."""
    classified: list[ClassifiedLine] = []
    in_block = False
    for line_number, line in enumerate(text.splitlines(), start=1):
        result = classify_line(line, in_block, line_number)
        if result.kind is LineKind.BLOCK_BEGIN:
            in_block = True
            logger.debug(f"Line {line_number}: entering point block.")
        elif result.kind is LineKind.BLOCK_END:
            in_block = False
            logger.debug(f"Line {line_number}: leaving point block.")
        elif result.kind is LineKind.UNRECOGNIZED:
            logger.debug(f"Line {line_number}: ignoring unrecognized line '{line.strip()}'.")
        classified.append(result)
    if in_block:
        logger.debug("Input ended inside an unterminated point block; keeping collected entries.")
    return classified
