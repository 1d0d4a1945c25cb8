"""Built-in shell commands.

Each builtin resolves redirection over its own trailing words and opens
the target before doing anything else, so stdout and stderr redirects
behave the same way for every builtin. Handlers return an exit status.
"""

import logging
import os
from typing import TYPE_CHECKING

from tinyshell.redirection import open_sink, resolve_redirect

if TYPE_CHECKING:
    from tinyshell.shell import Shell

log = logging.getLogger(__name__)

BUILTIN_NAMES: frozenset[str] = frozenset({"exit", "echo", "pwd", "type", "cd"})


def is_builtin(name: str) -> bool:
    return name in BUILTIN_NAMES


def builtin_echo(args: list[str], shell: "Shell") -> int:
    words, redirect = resolve_redirect(args)
    with open_sink(redirect) as sink:
        sink.out(" ".join(words))
    return 0


def builtin_pwd(args: list[str], shell: "Shell") -> int:
    _, redirect = resolve_redirect(args)
    with open_sink(redirect) as sink:
        try:
            cwd = shell.getcwd()
        except OSError as e:
            log.debug("getcwd failed: %s", e)
            sink.err(f"pwd: {e.strerror or e}")
            return 1
        sink.out(cwd)
    return 0


def builtin_type(name: str, args: list[str], shell: "Shell") -> int:
    _, redirect = resolve_redirect(args)
    with open_sink(redirect) as sink:
        if is_builtin(name):
            sink.out(f"{name} is a shell builtin")
            return 0
        path = shell.which(name)
        if path:
            sink.out(f"{name} is {path}")
            return 0
        sink.err(f"{name}: not found")
    return 1


def builtin_cd(path: str, args: list[str], shell: "Shell") -> int:
    _, redirect = resolve_redirect(args)
    target = os.environ.get("HOME", "/") if path == "~" else path

    # Opened before chdir: a relative target belongs to the old directory.
    with open_sink(redirect) as sink:
        if not os.path.isdir(target):
            sink.err(f"cd: {target}: No such file or directory")
            return 1
        try:
            os.chdir(target)
        except OSError as e:
            sink.err(f"cd: {e.strerror or e}")
            return 1

    log.debug("changed directory to %s", target)
    return 0
