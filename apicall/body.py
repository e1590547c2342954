"""Resolve the ``-d`` body specifier into something ``requests`` can send."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import BinaryIO

from ._logging import get_logger
from .errors import BodyError

FILE_SIGIL = "@"

logger = get_logger("body")

Body = bytes | BinaryIO | None


@contextmanager
def open_body(specifier: str) -> Iterator[Body]:
    """Yield ``None``, the literal bytes, or an open file for ``@name`` specifiers.

    A file opened here is closed when the context exits, whether the request
    completed or failed.
    """
    if not specifier:
        yield None
        return

    if not specifier.startswith(FILE_SIGIL):
        yield specifier.encode("utf-8")
        return

    filename = specifier[len(FILE_SIGIL):]
    try:
        handle = open(filename, "rb")
    except OSError as exc:
        raise BodyError(f"Invalid data: data='{specifier}', {exc}") from exc

    logger.info("Streaming request body from %s", filename)
    with handle:
        yield handle
