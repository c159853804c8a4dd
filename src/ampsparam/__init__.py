from ampsparam.core import RunConfiguration
from ampsparam.hydrate import hydrate
from ampsparam.inputs import export_param_file
from ampsparam.loader import load_param_file, load_param_text
from ampsparam.parsers import KeywordMap, SanityCheckResult, parse_param_file, sanity_check

__all__ = [
    "RunConfiguration",
    "KeywordMap",
    "SanityCheckResult",
    "parse_param_file",
    "sanity_check",
    "hydrate",
    "export_param_file",
    "load_param_text",
    "load_param_file",
]
