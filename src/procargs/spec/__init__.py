from .model import ParamKind, ParamSpec, ProcSpec
from .parser import parse_spec
from .abbrev import common_prefix_length, min_abbrev, is_abbreviation

__all__ = [
    "ParamKind",
    "ParamSpec",
    "ProcSpec",
    "parse_spec",
    "common_prefix_length",
    "min_abbrev",
    "is_abbreviation",
]
