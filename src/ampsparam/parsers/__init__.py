from ampsparam.parsers.core import build_keyword_map, parse_param_file, sanity_check
from ampsparam.parsers.lines import classify_line, classify_lines
from ampsparam.parsers.typing import ClassifiedLine, KeywordMap, LineKind, SanityCheckResult

__all__ = [
    "parse_param_file",
    "sanity_check",
    "build_keyword_map",
    "classify_line",
    "classify_lines",
    "ClassifiedLine",
    "KeywordMap",
    "LineKind",
    "SanityCheckResult",
]
