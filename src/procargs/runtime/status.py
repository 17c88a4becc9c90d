from enum import Enum


class Status(Enum):
    """
    Outcome kinds of a resolution.

    Each member carries the legacy numeric return code and the id of the
    message template describing it.
    """

    SUCCESS = (0, "status.success")
    UNRECOGNIZED_INPUT = (4, "status.unrecognized_input")
    MISSING_VALUE = (8, "status.missing_value")
    UNEXPECTED_VALUE = (12, "status.unexpected_value")
    INVALID_VALUE = (16, "status.invalid_value")
    UNTERMINATED_QUOTE = (20, "status.unterminated_quote")
    INVALID_CALL = (24, "status.invalid_call")
    INVALID_SPEC = (28, "status.invalid_spec")
    INTERNAL_LIMIT_EXCEEDED = (32, "status.internal_limit_exceeded")

    def __init__(self, code: int, msg_id: str):
        self.code = code
        self.msg_id = msg_id

    @property
    def label(self) -> str:
        return "".join(part.capitalize() for part in self.name.split("_"))

    def __str__(self) -> str:
        return self.label
