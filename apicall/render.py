"""Pretty-print JSON response bodies, with terminal colors when attached to a TTY."""

import json
import sys
from typing import Any, TextIO

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import JsonLexer

from .errors import ResponseDecodeError


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid constant {name}")


def format_json(content: bytes) -> str:
    try:
        document: Any = json.loads(content, parse_constant=_reject_constant)
    except ValueError as exc:
        raise ResponseDecodeError(str(exc), content.decode("utf-8", errors="replace")) from exc
    return json.dumps(document, indent=2, sort_keys=True, ensure_ascii=False)


def colorize(text: str) -> str:
    return highlight(text, JsonLexer(), TerminalFormatter()).rstrip("\n")


def _wants_color(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def render(content: bytes, stream: TextIO | None = None, color: bool | None = None) -> str:
    """Write ``content`` as indented JSON followed by a newline and return the plain text."""
    stream = stream or sys.stdout
    pretty = format_json(content)
    use_color = _wants_color(stream) if color is None else color
    stream.write((colorize(pretty) if use_color else pretty) + "\n")
    stream.flush()
    return pretty
