from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from procargs.common.messaging import bus
from procargs.quoting import quote
from procargs.runtime.exceptions import (
    InvalidCallError,
    ProcArgsError,
    UnrecognizedInputError,
)
from procargs.runtime.status import Status
from procargs.runtime.tokenizer import (
    DEFAULT_MAX_ITERATIONS,
    extract_positionals,
    match_keyword,
)
from procargs.spec.model import ProcSpec
from procargs.spec.parser import parse_spec


@dataclass
class ResolutionResult:
    """The outcome of resolving one argument string against one spec."""

    values: Dict[str, str] = field(default_factory=dict)
    status: Status = Status.SUCCESS
    message: str = ""
    leftover: str = ""
    error: Optional[ProcArgsError] = field(default=None, repr=False, compare=False)

    @property
    def ok(self) -> bool:
        return self.status is Status.SUCCESS

    @property
    def code(self) -> int:
        return self.status.code

    def assignments(self) -> Dict[str, str]:
        """Maps each name to its value rendered as a quoted literal."""
        return {name: quote(value) for name, value in self.values.items()}

    def format(self) -> str:
        return "\n".join(f"{name} = {literal}" for name, literal in self.assignments().items())

    def raise_for_status(self) -> None:
        if self.error is not None:
            raise self.error


def _resolve_key(
    text: str, spec: ProcSpec, key: str, max_iterations: int
) -> ResolutionResult:
    positionals, keyword_text = extract_positionals(text, spec, max_iterations)

    if spec.positional(key) is not None:
        return ResolutionResult(
            values={key: positionals[key]}, leftover=keyword_text.strip(" ")
        )

    match = match_keyword(keyword_text, spec, key, max_iterations)
    if not match.found:
        bus.debug("resolve.default_used", name=key, value=match.value)
    return ResolutionResult(values={key: match.value}, leftover=match.remaining)


def _resolve_all(text: str, spec: ProcSpec, max_iterations: int) -> ResolutionResult:
    values, remaining = extract_positionals(text, spec, max_iterations)

    for keyword in spec.keywords:
        match = match_keyword(remaining, spec, keyword.name, max_iterations)
        values[keyword.name] = match.value
        remaining = match.remaining

    remaining = remaining.strip(" ")
    if remaining:
        error = UnrecognizedInputError("resolve.unrecognized_input", text=remaining)
        bus.warning("resolve.failed", status=error.status, message=str(error))
        return ResolutionResult(
            values=values,
            status=error.status,
            message=str(error),
            leftover=remaining,
            error=error,
        )

    return ResolutionResult(values=values)


def resolve(
    *args: Union[str, ProcSpec], max_iterations: int = DEFAULT_MAX_ITERATIONS
) -> ResolutionResult:
    """
    Resolves argument text against a PROC spec.

    Called as `resolve(text, spec)` every positional and keyword parameter
    is resolved, and text matching no parameter is reported as
    unrecognized. Called as `resolve(text, spec, key)` only that parameter
    is resolved; when absent from the text its default is returned.

    Usage errors (a wrong argument count, a malformed spec, an undeclared
    key) are raised. Errors in the argument text are returned in the
    result, with no values: the first one stops the scan.
    """
    if not 2 <= len(args) <= 3:
        raise InvalidCallError("resolve.bad_argument_count", count=len(args))

    text, spec = args[0], args[1]
    key = args[2] if len(args) == 3 else None
    if not isinstance(spec, ProcSpec):
        spec = parse_spec(spec)

    bus.debug("resolve.started", text=text, key=key or "*")
    try:
        if key is None:
            result = _resolve_all(text, spec, max_iterations)
        else:
            result = _resolve_key(text, spec, key, max_iterations)
    except InvalidCallError:
        raise
    except ProcArgsError as e:
        bus.warning("resolve.failed", status=e.status, message=str(e))
        return ResolutionResult(status=e.status, message=str(e), error=e)

    if result.ok:
        bus.debug("resolve.succeeded", count=len(result.values))
    return result
