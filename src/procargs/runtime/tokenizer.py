from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Iterator, List, Tuple

from procargs.common.messaging import bus
from procargs.runtime.exceptions import (
    InternalLimitExceededError,
    InvalidCallError,
    InvalidValueError,
    MissingValueError,
    UnexpectedValueError,
    UnterminatedQuoteError,
)
from procargs.spec.model import ParamSpec, ProcSpec

DEFAULT_MAX_ITERATIONS = 255

# Every scanning routine works on text ending in this sentinel blank, so a
# token at the very end of the input is closed like any other.
SENTINEL = " "


class TokenForm(Enum):
    BARE = auto()  # KEYWORD
    VALUE = auto()  # KEY(value)
    QUOTED = auto()  # KEY('value') or KEY("value")


@dataclass(frozen=True)
class Token:
    word: str
    form: TokenForm
    # For QUOTED tokens, the literal with its enclosing quotes.
    value: str
    # The text the token was scanned from, delimiters included.
    span: str


@dataclass(frozen=True)
class KeywordMatch:
    """What `match_keyword` found for one keyword."""

    name: str
    value: str
    remaining: str
    found: bool


def _bounded(limit: int, loop: str) -> Iterator[int]:
    yield from range(limit)
    raise InternalLimitExceededError("tokenizer.iteration_limit", loop=loop, limit=limit)


def _find_first(text: str, *closers: str) -> Tuple[int, str]:
    """Earliest occurrence of any of `closers`, or (-1, "")."""
    best, best_closer = -1, ""
    for closer in closers:
        index = text.find(closer)
        if index >= 0 and (best < 0 or index < best):
            best, best_closer = index, closer
    return best, best_closer


def _find_quote_close(body: str, quote_char: str) -> Tuple[int, str]:
    """
    Position of the quote that closes a quoted value, followed by `) ` or
    `),`, or (-1, ""). Inside single quotes a doubled quote is literal text.
    """
    index = 0
    while index < len(body):
        if body[index] == quote_char:
            if quote_char == "'" and body.startswith("''", index):
                index += 2
                continue
            closer = body[index + 1 : index + 3]
            if closer in (") ", "),"):
                return index, quote_char + closer
        index += 1
    return -1, ""


def _next_positional(work: str) -> Tuple[str, str]:
    work = work.lstrip(" ")
    if not work:
        return "", ""

    if work[0] == "'":
        closer = "' "
    elif work[0] == "(":
        closer = ") "
    else:
        closer = " "

    close = work.find(closer, 0 if closer == " " else 1)
    if close < 0:
        # No closing delimiter: the value is everything up to the sentinel.
        return work[: -len(SENTINEL)], ""

    end = close + len(closer)
    return work[: end - 1], work[end:]


def extract_positionals(
    text: str, spec: ProcSpec, max_iterations: int = DEFAULT_MAX_ITERATIONS
) -> Tuple[Dict[str, str], str]:
    """
    Takes the positional values off the front of `text`, in declared order.

    A value opened by a quote or a parenthesis runs to the next `' ` or `) `
    and keeps its closing character. A missing closer is not an error: the
    value then runs to the end of the text. Returns the values and the
    keyword text that follows them.
    """
    values: Dict[str, str] = {}
    work = text + SENTINEL
    positionals = iter(spec.positionals)

    for _ in _bounded(max_iterations, "positional"):
        param = next(positionals, None)
        if param is None:
            break
        values[param.name], work = _next_positional(work)
        bus.debug("tokenizer.positional", name=param.name, value=values[param.name])

    return values, work[: -len(SENTINEL)] if work else ""


def _scan_value(word: str, work: str, after: str) -> Tuple[Token, str]:
    """Scans the `(value)`, `('value')` or `("value")` part following `word`."""
    opened = len(word) + 1

    if after[:1] in ("'", '"'):
        quote_char, body = after[0], after[1:]
        close, closer = _find_quote_close(body, quote_char)
        if close < 0:
            raise UnterminatedQuoteError(
                "tokenizer.unterminated_quote", name=word, text=work.rstrip(" ")
            )
        end = opened + 1 + close + len(closer)
        literal = quote_char + body[:close] + quote_char
        return Token(word, TokenForm.QUOTED, literal, work[:end]), work[end:]

    close, closer = _find_first(after, ") ", "),")
    if close < 0:
        value, end = after[: -len(SENTINEL)], len(work)
    else:
        value, end = after[:close], opened + close + len(closer)

    if " " in value or "'" in value:
        raise InvalidValueError("tokenizer.invalid_value", name=word, value=value)

    return Token(word, TokenForm.VALUE, value, work[:end]), work[end:]


def scan_tokens(
    text: str, max_iterations: int = DEFAULT_MAX_ITERATIONS
) -> Iterator[Token]:
    """
    Splits keyword text into tokens.

    The first blank, comma or opening parenthesis after a token's start
    decides its form: a blank or comma ends a bare keyword, a parenthesis
    opens a value.
    """
    work = text + SENTINEL

    for _ in _bounded(max_iterations, "keyword"):
        work = work.lstrip(" ")
        if not work:
            return

        delimiter = next(i for i, ch in enumerate(work) if ch in " ,(")
        word = work[:delimiter]

        if work[delimiter] == "(":
            token, work = _scan_value(word, work, work[delimiter + 1 :])
        else:
            token = Token(word, TokenForm.BARE, "", work[: delimiter + 1])
            work = work[delimiter + 1 :]

        yield token


def _resolved_value(param: ParamSpec, token: Token) -> str:
    if token.form is TokenForm.BARE:
        if param.value_required:
            raise MissingValueError("keyword.missing_value", name=param.name)
        return param.name

    if not param.value_required:
        raise UnexpectedValueError(
            "keyword.unexpected_value", name=param.name, value=token.value
        )

    return token.value


def match_keyword(
    text: str,
    spec: ProcSpec,
    name: str,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> KeywordMatch:
    """
    Resolves keyword `name` from keyword text.

    Every token is tried against the declared keywords in order. Tokens
    belonging to `name` are consumed, the last one winning; all other
    tokens are kept, in order, in `remaining`. When `name` does not occur
    its declared default is returned.
    """
    target = spec.keyword(name)
    if target is None:
        raise InvalidCallError("resolve.unknown_key", key=name)

    value = None
    kept: List[str] = []

    for token in scan_tokens(text, max_iterations):
        param = spec.find(token.word) if token.word else None
        if param is None or param.name != target.name:
            if token.form is TokenForm.BARE:
                if token.word:
                    kept.append(token.word + " ")
            else:
                kept.append(token.span)
            continue

        value = _resolved_value(target, token)
        bus.debug(
            "tokenizer.keyword_matched", name=target.name, token=token.word, value=value
        )

    remaining = "".join(kept).strip(" ")
    if value is None:
        return KeywordMatch(target.name, target.default, remaining, found=False)
    return KeywordMatch(target.name, value, remaining, found=True)
