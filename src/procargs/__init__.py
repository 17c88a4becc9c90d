from .quoting import quote, unquote
from .runtime.exceptions import (
    ProcArgsError,
    MissingValueError,
    UnexpectedValueError,
    InvalidValueError,
    UnterminatedQuoteError,
    InvalidCallError,
    InvalidSpecError,
    UnrecognizedInputError,
    InternalLimitExceededError,
)
from .runtime.resolver import ResolutionResult, resolve
from .runtime.status import Status
from .runtime.tokenizer import extract_positionals, match_keyword
from .spec import ParamKind, ParamSpec, ProcSpec, parse_spec

__all__ = [
    "parse_spec",
    "resolve",
    "match_keyword",
    "extract_positionals",
    "quote",
    "unquote",
    "ParamKind",
    "ParamSpec",
    "ProcSpec",
    "ResolutionResult",
    "Status",
    "ProcArgsError",
    "MissingValueError",
    "UnexpectedValueError",
    "InvalidValueError",
    "UnterminatedQuoteError",
    "InvalidCallError",
    "InvalidSpecError",
    "UnrecognizedInputError",
    "InternalLimitExceededError",
]
