"""Main shell loop: prompt, read, tokenize, parse, dispatch, repeat."""

import logging
import os
import shutil
import sys
from collections.abc import Callable

from tinyshell.commands import parse
from tinyshell.config import Settings
from tinyshell.executor import execute
from tinyshell.tokenizer import tokenize

log = logging.getLogger(__name__)


class Shell:
    """Shell state and main loop.

    ``which`` and ``getcwd`` are the executable lookup and working
    directory query; tests replace them to run builtins in isolation.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        which: Callable[[str], str | None] = shutil.which,
        getcwd: Callable[[], str] = os.getcwd,
    ) -> None:
        self.settings = settings or Settings()
        self.which = which
        self.getcwd = getcwd
        self.last_exit_code: int = 0

    def get_prompt(self) -> str:
        return self.settings.prompt

    def run_command(self, line: str) -> bool:
        """Tokenize, parse and execute one line.

        Returns False when the line was ``exit`` and the loop should stop.
        """
        try:
            words = tokenize(line, strict=self.settings.strict_quotes)
        except ValueError as e:
            print(f"tinyshell: {e}", file=sys.stderr)
            self.last_exit_code = 2
            return True

        if not words:
            return True

        command = parse(words)
        log.debug("parsed %r as %r", line, command)
        return execute(command, self)

    def run(self) -> None:
        """Main shell loop."""
        while True:
            try:
                line = input(self.get_prompt())
            except (EOFError, KeyboardInterrupt):
                print()
                break

            if not line.strip():
                continue

            if not self.run_command(line):
                break


def main() -> None:
    """Entry point."""
    settings = Settings.from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    shell = Shell(settings)
    shell.run()
