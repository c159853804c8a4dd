from ampsparam.hydrate.core import hydrate
from ampsparam.hydrate.fields import FIELDS_BY_KEYWORD, KEYWORD_FIELDS, FieldSpec

__all__ = ["hydrate", "KEYWORD_FIELDS", "FIELDS_BY_KEYWORD", "FieldSpec"]
