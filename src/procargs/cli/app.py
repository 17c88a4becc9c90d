import json
from enum import Enum
from typing import Optional

import typer
from rich.console import Console

from procargs.common.messaging import bus, MessageStore
from procargs.quoting import quote as quote_value
from procargs.runtime.exceptions import InvalidCallError
from procargs.runtime.resolver import resolve as resolve_text
from procargs.runtime.tokenizer import DEFAULT_MAX_ITERATIONS
from procargs.spec.parser import parse_spec
from .rendering import (
    CliRenderer,
    JsonRenderer,
    RichCliRenderer,
    custom_theme,
    result_table,
    spec_table,
)

app = typer.Typer(help="Resolve PROC-style command arguments against a spec.")
console = Console(theme=custom_theme)


class LogFormat(str, Enum):
    human = "human"
    rich = "rich"
    json = "json"


class OutputFormat(str, Enum):
    text = "text"
    table = "table"
    json = "json"


@app.callback()
def configure(
    log_level: str = typer.Option(
        "ERROR",
        "--log-level",
        envvar="PROCARGS_LOG_LEVEL",
        help="Minimum level for diagnostics (DEBUG, INFO, WARNING, ERROR).",
    ),
    log_format: LogFormat = typer.Option(
        LogFormat.human,
        "--log-format",
        envvar="PROCARGS_LOG_FORMAT",
        help="Format for diagnostics written to stderr.",
    ),
    locale: str = typer.Option(
        "en", "--locale", envvar="PROCARGS_LOCALE", help="Message locale."
    ),
):
    """
    Sets up diagnostics for every command.
    """
    if locale != bus.store.locale:
        bus.set_store(MessageStore(locale=locale))

    if log_format is LogFormat.json:
        bus.set_renderer(JsonRenderer(store=bus.store, min_level=log_level))
    elif log_format is LogFormat.rich:
        bus.set_renderer(RichCliRenderer(store=bus.store, min_level=log_level))
    else:
        bus.set_renderer(CliRenderer(store=bus.store, min_level=log_level))


@app.command()
def resolve(
    text: str = typer.Argument(..., help="The argument text to resolve."),
    spec: str = typer.Argument(
        ..., help="The PROC spec, e.g. \"PROC 1 DSN LIST MEMBER()\"."
    ),
    key: Optional[str] = typer.Argument(
        None, help="Resolve only this parameter, falling back to its default."
    ),
    output: OutputFormat = typer.Option(
        OutputFormat.text, "--output", "-o", help="How to print the result."
    ),
    max_iterations: int = typer.Option(
        DEFAULT_MAX_ITERATIONS,
        "--max-iterations",
        envvar="PROCARGS_MAX_ITERATIONS",
        min=1,
        help="Upper bound on scanner iterations.",
    ),
):
    """
    Resolve TEXT against SPEC and print one NAME = 'value' line per parameter.
    The exit code is the status's return code.
    """
    args = (text, spec) if key is None else (text, spec, key)
    try:
        result = resolve_text(*args, max_iterations=max_iterations)
    except InvalidCallError as e:
        bus.error("cli.usage_error", status=e.status, message=str(e))
        raise typer.Exit(code=e.status.code)

    if output is OutputFormat.json:
        payload = {
            "status": result.status.label,
            "code": result.code,
            "message": result.message,
            "values": result.values,
            "leftover": result.leftover,
        }
        typer.echo(json.dumps(payload, indent=2))
    elif output is OutputFormat.table:
        console.print(result_table(result))
    elif result.values:
        typer.echo(result.format())

    if not result.ok:
        bus.error(
            "cli.resolution_error",
            status=result.status,
            message=result.message,
        )
        raise typer.Exit(code=result.code)


@app.command("spec")
def show_spec(
    spec: str = typer.Argument(..., help="The PROC spec to parse."),
):
    """
    Parse SPEC and list its parameters with their minimum abbreviations.
    """
    try:
        parsed = parse_spec(spec)
    except InvalidCallError as e:
        bus.error("cli.usage_error", status=e.status, message=str(e))
        raise typer.Exit(code=e.status.code)

    console.print(spec_table(parsed))


@app.command()
def quote(value: str = typer.Argument(..., help="The value to quote.")):
    """
    Print VALUE as a quoted literal.
    """
    typer.echo(quote_value(value))


def main():
    app()


if __name__ == "__main__":
    main()
