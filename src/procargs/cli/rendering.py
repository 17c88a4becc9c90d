import sys
import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from procargs.common.messaging import bus, protocols, MessageStore
from procargs.runtime.resolver import ResolutionResult
from procargs.runtime.status import Status
from procargs.spec.model import ProcSpec

PROG = "procargs"

LOG_LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
}

custom_theme = Theme(
    {
        "debug": "dim",
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "data": "green",
    }
)


def _level_value(level: str) -> int:
    return LOG_LEVELS.get(level.upper(), 20)


class CliRenderer(protocols.Renderer):
    """
    Plain-text diagnostics, one line per message. Warnings and errors are
    prefixed like `procargs: error: ...` so they stand apart from the
    NAME = 'value' lines printed on stdout.
    """

    def __init__(
        self,
        store: MessageStore,
        stream: Optional[TextIO] = None,
        min_level: str = "INFO",
    ):
        self._store = store
        self._stream = stream if stream is not None else sys.stderr
        self._min_level_val = _level_value(min_level)

    def render(self, msg_id: str, level: str, **kwargs):
        if _level_value(level) < self._min_level_val:
            return

        message = self._store.get(msg_id, **kwargs)
        if _level_value(level) >= LOG_LEVELS["WARNING"]:
            message = f"{PROG}: {level.lower()}: {message}"
        print(message, file=self._stream)


class JsonRenderer(protocols.Renderer):
    """
    One JSON record per message, carrying the rendered text next to the raw
    data. A `status` in the data is written as its label, and its return
    code is added to the record.
    """

    def __init__(
        self,
        store: MessageStore,
        stream: Optional[TextIO] = None,
        min_level: str = "INFO",
    ):
        self._store = store
        self._stream = stream if stream is not None else sys.stderr
        self._min_level_val = _level_value(min_level)

    def render(self, msg_id: str, level: str, **kwargs):
        if _level_value(level) < self._min_level_val:
            return

        log_record: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level.upper(),
            "event_id": msg_id,
            "message": self._store.get(msg_id, **kwargs),
            "data": kwargs,
        }
        status = kwargs.get("status")
        if isinstance(status, Status):
            log_record["code"] = status.code

        def default_serializer(o):
            if isinstance(o, Status):
                return o.label
            return repr(o)

        print(json.dumps(log_record, default=default_serializer), file=self._stream)


class RichCliRenderer(protocols.Renderer):
    """
    A renderer that uses the 'rich' library for formatted, colorful output.
    """

    def __init__(
        self,
        store: MessageStore,
        min_level: str = "INFO",
        console: Optional[Console] = None,
    ):
        self._store = store
        self._console = console or Console(theme=custom_theme, stderr=True)
        self._min_level_val = _level_value(min_level)

    def render(self, msg_id: str, level: str, **kwargs):
        if _level_value(level) < self._min_level_val:
            return

        message = self._store.get(msg_id, **kwargs)
        style = level.lower() if level.lower() in custom_theme.styles else ""
        # Messages echo user input, which may contain '[' characters.
        self._console.print(message, style=style, markup=False, highlight=False)


def spec_table(spec: ProcSpec) -> Table:
    table = Table(title=f"PROC {spec.positional_count}")
    table.add_column("Name", style="bold")
    table.add_column("Kind")
    table.add_column("Default")
    table.add_column("Value required")
    table.add_column("Min. abbreviation", justify="right")

    for param in spec.positionals:
        table.add_row(param.name, "positional", "", "", "")
    for param in spec.keywords:
        table.add_row(
            param.name,
            "keyword",
            param.default,
            "yes" if param.value_required else "no",
            str(spec.min_abbrev(param.name)),
        )
    return table


def result_table(result: ResolutionResult) -> Table:
    table = Table(title=bus.store.get(result.status.msg_id))
    table.add_column("Name", style="bold")
    table.add_column("Value", style="data")
    for name, literal in result.assignments().items():
        table.add_row(name, literal)
    return table
