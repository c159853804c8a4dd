import re
from collections.abc import Iterable

from ampsparam.parsers.lines import classify_lines
from ampsparam.parsers.typing import (
    ClassifiedLine,
    KeywordMap,
    LineKind,
    Priority,
    SanityCheckResult,
    _MutableKeywordMap,
)
from ampsparam.utils import logger

# --- Format Sanity Gate --- #
# Prefix match, so #PARTICLE also accepts #PARTICLE_SPECIES.
GATE_SECTIONS: tuple[str, ...] = ("RUN_INFO", "BACKGROUND_FIELD", "PARTICLE", "CALCULATION_MODE", "END")
GATE_PAT = re.compile(r"#(" + "|".join(GATE_SECTIONS) + r")", re.IGNORECASE)
REJECT_MESSAGE = "Not a valid AMPS_PARAM.in file (no #SECTION headers found)."


def sanity_check(text: str) -> SanityCheckResult:
    """
    Cheap pre-check that the text is an AMPS_PARAM.in file at all.

    Accepts any text containing at least one of the expected section headers,
    regardless of what else it contains.

    Args:
        text: Full file content.

    Returns:
        SanityCheckResult, truthy on acceptance; carries a user-facing message on rejection.
    """
    if GATE_PAT.search(text):
        return SanityCheckResult(ok=True)
    logger.debug("Sanity gate: no recognized section header found.")
    return SanityCheckResult(ok=False, message=REJECT_MESSAGE)


# --- Keyword Map Builder --- #
def build_keyword_map(lines: Iterable[ClassifiedLine]) -> KeywordMap:
    """
    Fold classified lines into a KeywordMap.

    Active parameters always take precedence over commented ones, independent
    of the order in which they appear. Among duplicates the last active value
    and the first commented value are kept.

    Args:
        lines: Classified lines in file order.

    Returns:
        The immutable KeywordMap.
    """
    results = _MutableKeywordMap()

    for line in lines:
        if line.kind is LineKind.ACTIVE_PARAM:
            assert line.key is not None and line.value is not None
            results.insert(line.key, line.value, Priority.ACTIVE)
        elif line.kind is LineKind.COMMENTED_PARAM:
            assert line.key is not None and line.value is not None
            if results.insert(line.key, line.value, Priority.COMMENTED):
                logger.debug(f"Line {line.line_number}: recovered commented parameter {line.key} = {line.value}")
        elif line.kind is LineKind.BLOCK_BODY:
            assert line.value is not None
            results.points.append(line.value)
        elif line.kind is LineKind.SECTION_HEADER:
            assert line.key is not None
            results.section = line.key

    return KeywordMap.from_mutable(results)


def parse_param_file(text: str) -> KeywordMap:
    """
    Parse AMPS_PARAM.in text into a KeywordMap.

    Never raises on content: malformed and unknown lines are skipped.

    Args:
        text: Full file content. Both LF and CRLF line endings are accepted.

    Returns:
        KeywordMap with every recovered keyword, the point block entries and the last section name.
    """
    kmap = build_keyword_map(classify_lines(text))
    logger.debug(f"Parsed {len(kmap)} keywords and {len(kmap.points)} point entries (last section: '{kmap.section}').")
    return kmap
