"""
Log event rendering.

Messages that decode to a JSON object are rendered key by key with ANSI
colors; anything else is printed verbatim. Every line carries a
`[timestamp] (stream)` prefix unless hidden.
"""
import json
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import typer

KEY_COLOR = typer.colors.WHITE
INVERTED_KEY_COLOR = typer.colors.BLACK
STRING_COLOR = typer.colors.GREEN
NUMBER_COLOR = typer.colors.CYAN
BOOL_COLOR = typer.colors.YELLOW
NULL_COLOR = typer.colors.MAGENTA
DATE_COLOR = typer.colors.RED
STREAM_COLOR = typer.colors.WHITE

@dataclass
class OutputConfiguration:
    expand: bool = False
    raw: bool = False
    raw_string: bool = False
    hide_stream_name: bool = False
    hide_date: bool = False
    invert: bool = False
    no_color: bool = False

    def formatter(self) -> "JSONFormatter":
        return JSONFormatter(
            indent=4 if self.expand else 0,
            raw_strings=self.raw_string,
            key_color=INVERTED_KEY_COLOR if self.invert else KEY_COLOR,
            color=not self.no_color,
        )

class JSONFormatter:
    """Serialize decoded JSON values with per-type colors."""

    def __init__(self, indent: int = 0, raw_strings: bool = False,
                 key_color: str = KEY_COLOR, color: bool = True):
        self.indent = indent
        self.raw_strings = raw_strings
        self.key_color = key_color
        self.color = color

    def paint(self, text: str, fg: str) -> str:
        if not self.color:
            return text
        return typer.style(text, fg=fg)

    def marshal(self, value: Any) -> str:
        return self._marshal(value, 0)

    def _marshal(self, value: Any, depth: int) -> str:
        if isinstance(value, dict):
            return self._marshal_container(
                [self.paint(json.dumps(k), self.key_color) + ":" + (" " if self.indent else "")
                 + self._marshal(v, depth + 1) for k, v in sorted(value.items())],
                "{", "}", depth)
        if isinstance(value, list):
            return self._marshal_container(
                [self._marshal(v, depth + 1) for v in value], "[", "]", depth)
        if isinstance(value, str):
            return self.paint(value if self.raw_strings else json.dumps(value), STRING_COLOR)
        # bool is an int subclass, check it first
        if isinstance(value, bool):
            return self.paint("true" if value else "false", BOOL_COLOR)
        if value is None:
            return self.paint("null", NULL_COLOR)
        return self.paint(json.dumps(value), NUMBER_COLOR)

    def _marshal_container(self, items, opening: str, closing: str, depth: int) -> str:
        if not items:
            return opening + closing
        if not self.indent:
            return opening + ",".join(items) + closing
        pad = " " * (self.indent * (depth + 1))
        end_pad = " " * (self.indent * depth)
        return opening + "\n" + ",\n".join(pad + item for item in items) + "\n" + end_pad + closing

def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")

def _finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"{text} is out of range")
    return value

def decode_message(message: str) -> Optional[Dict[str, Any]]:
    """Return the message as a JSON object, or None when it is not one.

    NaN, Infinity and out-of-range numbers are rejected; nesting too deep
    to decode counts as not JSON.
    """
    try:
        decoded = json.loads(message, parse_constant=_reject_constant, parse_float=_finite_float)
    except (ValueError, RecursionError):
        return None
    return decoded if isinstance(decoded, dict) else None

def format_timestamp(timestamp_ms: int) -> str:
    """Epoch milliseconds to RFC3339 in local time."""
    moment = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc).astimezone()
    return moment.isoformat(timespec="seconds")

class EventPrinter:
    """Render FilterLogEvents events according to an OutputConfiguration."""

    def __init__(self, output: Optional[OutputConfiguration] = None, echo=typer.echo):
        self.output = output or OutputConfiguration()
        self.formatter = self.output.formatter()
        self.echo = echo

    def render(self, event: Dict[str, Any]) -> str:
        message = event.get("message", "")
        body = message
        if not self.output.raw:
            decoded = decode_message(message)
            if decoded is not None:
                try:
                    body = self.formatter.marshal(decoded)
                except RecursionError:
                    # too deeply nested to format, print as received
                    body = message

        parts = []
        if not self.output.hide_date:
            parts.append("[" + self.formatter.paint(format_timestamp(event["timestamp"]), DATE_COLOR) + "]")
        if not self.output.hide_stream_name:
            parts.append("(" + self.formatter.paint(event.get("logStreamName", ""), STREAM_COLOR) + ")")
        parts.append(body)
        return " ".join(parts)

    def __call__(self, event: Dict[str, Any]) -> None:
        self.echo(self.render(event))
