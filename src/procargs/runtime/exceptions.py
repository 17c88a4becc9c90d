from typing import Any

from procargs.common.messaging import bus
from procargs.runtime.status import Status


class ProcArgsError(Exception):
    """Base class for errors raised while parsing a spec or its arguments."""

    status: Status = Status.INVALID_CALL

    def __init__(self, msg_id: str, **details: Any):
        self.msg_id = msg_id
        self.details = details
        super().__init__(bus.store.get(msg_id, **details))

    @property
    def message(self) -> str:
        return str(self)


class MissingValueError(ProcArgsError):
    """A keyword that requires a value was supplied bare."""

    status = Status.MISSING_VALUE


class UnexpectedValueError(ProcArgsError):
    """A keyword that takes no value was supplied with one."""

    status = Status.UNEXPECTED_VALUE


class InvalidValueError(ProcArgsError):
    """An unquoted value contains a blank or a quote."""

    status = Status.INVALID_VALUE


class UnterminatedQuoteError(ProcArgsError):
    status = Status.UNTERMINATED_QUOTE


class InvalidCallError(ProcArgsError):
    """
    Raised for usage errors: a wrong number of arguments, or a request
    for a parameter the spec does not declare.
    """

    status = Status.INVALID_CALL


class InvalidSpecError(InvalidCallError):
    status = Status.INVALID_SPEC


class UnrecognizedInputError(ProcArgsError):
    status = Status.UNRECOGNIZED_INPUT


class InternalLimitExceededError(ProcArgsError):
    """
    Raised when a tokenizing loop reaches its iteration cap. Seeing this
    means the scanner failed to make progress on some input.
    """

    status = Status.INTERNAL_LIMIT_EXCEEDED

