"""Dispatch parsed commands and run external programs."""

import logging
import subprocess
import sys
from typing import TYPE_CHECKING

from tinyshell.builtins import builtin_cd, builtin_echo, builtin_pwd, builtin_type
from tinyshell.commands import Cd, Command, Echo, Empty, Exit, External, Pwd, Type
from tinyshell.redirection import RedirectError, open_sink, resolve_redirect

if TYPE_CHECKING:
    from tinyshell.shell import Shell

log = logging.getLogger(__name__)


def execute(command: Command, shell: "Shell") -> bool:
    """Run one command, returning False only when the shell should exit.

    Sets ``shell.last_exit_code``. A redirect target that cannot be used
    is reported on stderr and the command fails with status 1.
    """
    log.debug("executing %r", command)
    try:
        match command:
            case Exit():
                return False
            case Empty():
                status = 0
            case Echo(args=args):
                status = builtin_echo(args, shell)
            case Pwd(args=args):
                status = builtin_pwd(args, shell)
            case Type(name=name, args=args):
                status = builtin_type(name, args, shell)
            case Cd(path=path, args=args):
                status = builtin_cd(path, args, shell)
            case External(program=program, args=args):
                status = run_external(program, args, shell)
    except RedirectError as e:
        print(f"tinyshell: {e}", file=sys.stderr)
        status = 1

    shell.last_exit_code = status
    return True


def run_external(program: str, args: list[str], shell: "Shell") -> int:
    """Run an external program found on PATH, returning its exit code.

    Without a redirect the program shares the shell's terminal streams.
    With one, the target is opened first, then both streams are captured
    and routed after the program exits. An unknown program is reported
    and never spawned.
    """
    argv, redirect = resolve_redirect(args)

    if shell.which(program) is None:
        print(f"{program}: command not found", file=sys.stderr)
        return 127

    with open_sink(redirect) as sink:
        log.debug("running %s %r (redirect=%s)", program, argv, redirect)
        # The child writes straight to the inherited descriptors.
        sys.stdout.flush()
        sys.stderr.flush()
        try:
            result = subprocess.run([program, *argv], capture_output=redirect is not None)
        except FileNotFoundError:
            print(f"{program}: command not found", file=sys.stderr)
            return 127
        except OSError as e:
            log.debug("failed to start %s: %s", program, e)
            print(f"{program}: {e.strerror or e}", file=sys.stderr)
            return 126

        if redirect is not None:
            sink.write(stdout=result.stdout, stderr=result.stderr)
    return result.returncode
