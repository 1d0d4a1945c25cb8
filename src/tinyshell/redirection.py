"""Resolve redirection operators and route command output."""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, TextIO

from tinyshell.tokenizer import (
    REDIRECT_APPEND,
    REDIRECT_APPEND_FD,
    REDIRECT_ERR,
    REDIRECT_ERR_APPEND,
    REDIRECT_OUT,
    REDIRECT_OUT_FD,
)

log = logging.getLogger(__name__)


class Stream(Enum):
    STDOUT = 1
    STDERR = 2


@dataclass(frozen=True)
class Redirect:
    """Where one output stream of a command is diverted."""

    stream: Stream
    path: str
    append: bool = False

    @property
    def mode(self) -> str:
        return "ab" if self.append else "wb"


# Checked in this order; the first group with a usable operator wins.
_PRECEDENCE: list[tuple[frozenset[str], Stream, bool]] = [
    (frozenset({REDIRECT_APPEND, REDIRECT_APPEND_FD}), Stream.STDOUT, True),
    (frozenset({REDIRECT_ERR_APPEND}), Stream.STDERR, True),
    (frozenset({REDIRECT_ERR}), Stream.STDERR, False),
    (frozenset({REDIRECT_OUT, REDIRECT_OUT_FD}), Stream.STDOUT, False),
]


def resolve_redirect(words: list[str]) -> tuple[list[str], Redirect | None]:
    """Split words into (operands, redirect).

    Example: ['hi', '>', 'out.txt'] -> (['hi'], Redirect(STDOUT, 'out.txt'))

    Only the first occurrence of each operator group is considered, and
    only if a word follows it. Words after the target are dropped. When
    nothing matches, the words are returned unchanged with None.
    """
    for operators, stream, append in _PRECEDENCE:
        pos = next((i for i, word in enumerate(words) if word in operators), None)
        if pos is None or pos + 1 >= len(words):
            continue
        redirect = Redirect(stream=stream, path=words[pos + 1], append=append)
        log.debug("resolved %s from %r", redirect, words)
        return list(words[:pos]), redirect
    return list(words), None


class RedirectError(Exception):
    """A redirect target could not be opened, written or closed."""

    def __init__(self, path: str, error: OSError) -> None:
        super().__init__(path, error)
        self.path = path
        self.reason = error.strerror or str(error)

    def __str__(self) -> str:
        return f"{self.path}: {self.reason}"


class Sink:
    """A command's output channels with at most one stream diverted to a file.

    Obtained from ``open_sink``, which opens the target before the command
    runs so that a relative path resolves against the directory the command
    was typed in.
    """

    def __init__(self, redirect: Redirect | None = None, fh: BinaryIO | None = None) -> None:
        self.redirect = redirect
        self._fh = fh

    def write(self, stdout: bytes = b"", stderr: bytes = b"") -> None:
        """Write the redirected stream raw to the file, the other to the terminal.

        Terminal output is written even if the file write fails.
        """
        to_file = b""
        match self.redirect:
            case Redirect(stream=Stream.STDOUT):
                to_file, stdout = stdout, b""
            case Redirect(stream=Stream.STDERR):
                to_file, stderr = stderr, b""
        try:
            if to_file:
                try:
                    self._fh.write(to_file)
                except OSError as e:
                    raise RedirectError(self.redirect.path, e) from e
        finally:
            _write_terminal(stdout, sys.stdout)
            _write_terminal(stderr, sys.stderr)

    def out(self, text: str) -> None:
        self.write(stdout=f"{text}\n".encode())

    def err(self, text: str) -> None:
        self.write(stderr=f"{text}\n".encode())


@contextmanager
def open_sink(redirect: Redirect | None) -> Iterator[Sink]:
    """Open the redirect target (if any) and yield a Sink routing into it.

    The target is created, truncated or appended to even when nothing is
    written. Raises RedirectError if it cannot be opened or closed.
    """
    if redirect is None:
        yield Sink()
        return
    try:
        fh = open(redirect.path, redirect.mode)
    except OSError as e:
        raise RedirectError(redirect.path, e) from e
    try:
        yield Sink(redirect, fh)
    finally:
        try:
            fh.close()
        except OSError as e:
            raise RedirectError(redirect.path, e) from e


def _write_terminal(data: bytes, stream: TextIO) -> None:
    if data:
        stream.write(data.decode(errors="replace"))
        stream.flush()
