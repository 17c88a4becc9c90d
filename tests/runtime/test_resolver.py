import pytest

from procargs.quoting import quote, unquote
from procargs.runtime.exceptions import (
    InvalidCallError,
    InvalidSpecError,
    MissingValueError,
)
from procargs.runtime.resolver import ResolutionResult, resolve
from procargs.runtime.status import Status
from procargs.spec.parser import parse_spec


def test_default_value_for_absent_key():
    result = resolve("", "PROC 0 COLOR(RED)", "COLOR")

    assert result.ok
    assert result.values == {"COLOR": "RED"}


@pytest.mark.parametrize("text", ["", "OTHER", "OTHER(1)", "OTHER('a b') JUNK"])
def test_absent_single_key_always_yields_its_default(text):
    result = resolve(text, "PROC 0 NAME(dflt) OTHER(z)", "NAME")

    assert result.status is Status.SUCCESS
    assert result.values == {"NAME": "dflt"}


def test_bare_keyword_resolves_to_its_full_name():
    result = resolve("LIST", "PROC 0 LIST")

    assert result.ok
    assert result.values == {"LIST": "LIST"}
    assert result.assignments() == {"LIST": "'LIST'"}


def test_abbreviated_bare_keyword_resolves_to_its_full_name():
    result = resolve("LI", "PROC 0 LIST MEMBER()")

    assert result.values == {"LIST": "LIST", "MEMBER": ""}


def test_bare_keyword_that_requires_a_value():
    result = resolve("LIST", "PROC 0 LIST(X)")

    assert result.status is Status.MISSING_VALUE
    assert result.code == 8
    assert result.values == {}
    assert "LIST" in result.message


def test_positional_keeps_quotes():
    result = resolve("'USER1.A.LIST'", "PROC 1 DSN")

    assert result.ok
    assert result.values == {"DSN": "'USER1.A.LIST'"}
    assert result.format() == "DSN = \"'USER1.A.LIST'\""


def test_unrecognized_input_in_full_mode():
    result = resolve("FOO", "PROC 0 BAR")

    assert result.status is Status.UNRECOGNIZED_INPUT
    assert "FOO" in result.leftover
    assert "FOO" in result.message
    assert result.values == {"BAR": ""}


def test_single_key_mode_ignores_unrecognized_input():
    result = resolve("FOO LIST", "PROC 0 LIST", "LIST")

    assert result.ok
    assert result.values == {"LIST": "LIST"}
    assert result.leftover == "FOO"


def test_comma_and_blank_delimiters_are_equivalent():
    spec = "PROC 0 KEY1 KEY2"

    with_comma = resolve("KEY1,KEY2", spec)
    with_blank = resolve("KEY1 KEY2", spec)

    assert with_comma.ok and with_blank.ok
    assert with_comma.values == with_blank.values == {"KEY1": "KEY1", "KEY2": "KEY2"}


def test_ambiguous_abbreviation_is_not_matched():
    assert resolve("K", "PROC 0 KEY1 KEY9").status is Status.UNRECOGNIZED_INPUT
    assert resolve("KEY1", "PROC 0 KEY1 KEY9").values == {"KEY1": "KEY1", "KEY9": ""}


def test_lowercase_keyword_is_not_matched():
    result = resolve("list", "PROC 0 LIST")

    assert result.status is Status.UNRECOGNIZED_INPUT
    assert result.leftover == "list"


def test_unterminated_quote():
    result = resolve("NAME('abc", "PROC 0 NAME(default)")

    assert result.status is Status.UNTERMINATED_QUOTE
    assert result.message


@pytest.mark.parametrize("text", ["LIST(X)", "LIST('X')"])
def test_value_for_keyword_without_one(text):
    result = resolve(text, "PROC 0 LIST")

    assert result.status is Status.UNEXPECTED_VALUE


def test_unquoted_value_with_blank():
    result = resolve("NAME(a b)", "PROC 0 NAME()")

    assert result.status is Status.INVALID_VALUE


def test_full_resolution():
    result = resolve(
        "'USER1.A.LIST' MEM(ABC) TI('a b') LI",
        "PROC 1 DSN LIST MEMBER() TITLE(NONE) COLOR(RED)",
    )

    assert result.ok
    assert list(result.values.items()) == [
        ("DSN", "'USER1.A.LIST'"),
        ("LIST", "LIST"),
        ("MEMBER", "ABC"),
        ("TITLE", "'a b'"),
        ("COLOR", "RED"),
    ]
    assert result.leftover == ""


def test_duplicate_keyword_last_occurrence_wins():
    result = resolve("C(RED) C(BLUE)", "PROC 0 COLOR()")

    assert result.values == {"COLOR": "BLUE"}


def test_first_error_discards_resolved_values():
    result = resolve("'DSN' LIST MEMBER", "PROC 1 DSN LIST MEMBER(X)")

    assert result.status is Status.MISSING_VALUE
    assert result.values == {}
    assert "MEMBER" in result.message


def test_single_key_may_name_a_positional():
    result = resolve("'A.B' LIST", "PROC 1 DSN LIST", "DSN")

    assert result.values == {"DSN": "'A.B'"}
    assert result.leftover == "LIST"


def test_iteration_limit_is_reported():
    result = resolve("A B C D", "PROC 0 A", max_iterations=2)

    assert result.status is Status.INTERNAL_LIMIT_EXCEEDED
    assert result.code == 32


def test_raise_for_status():
    resolve("LIST", "PROC 0 LIST").raise_for_status()

    with pytest.raises(MissingValueError):
        resolve("LIST", "PROC 0 LIST(X)").raise_for_status()


def test_accepts_a_parsed_spec():
    spec = parse_spec("PROC 0 LIST")

    assert resolve("LIST", spec).values == {"LIST": "LIST"}


@pytest.mark.parametrize("args", [(), ("LIST",), ("LIST", "PROC 0 LIST", "LIST", "X")])
def test_wrong_argument_count_is_a_usage_error(args):
    with pytest.raises(InvalidCallError) as excinfo:
        resolve(*args)

    assert excinfo.value.status is Status.INVALID_CALL


def test_malformed_spec_is_raised():
    with pytest.raises(InvalidSpecError):
        resolve("LIST", "LIST")


def test_undeclared_key_is_a_usage_error():
    with pytest.raises(InvalidCallError):
        resolve("LIST", "PROC 0 LIST", "MEMBER")


@pytest.mark.parametrize(
    "value",
    ["", "hello", "hello world", 'say "it\'s"', "(a),b", "it's", 'a\') "', "x'),y"],
)
def test_quoted_literals_survive_resolution(value):
    literal = quote(value)

    result = resolve(f"MSG({literal})", "PROC 0 MSG()")

    assert result.ok
    assert result.values["MSG"] == literal
    assert unquote(result.values["MSG"]) == value


def test_failure_is_reported_on_the_bus(spy):
    resolve("LIST", "PROC 0 LIST(X)")

    assert "resolve.failed" in spy.ids("warning")


def test_result_defaults():
    result = ResolutionResult()

    assert result.ok
    assert result.code == 0
    assert result.format() == ""
    result.raise_for_status()


def test_comma_inside_a_value_does_not_close_it():
    """A value closes at the first `) ` or `),`, whichever comes first."""
    result = resolve("A(x,y) B", "PROC 0 A() B")

    assert result.ok
    assert result.values == {"A": "x,y", "B": "B"}
