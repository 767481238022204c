""" Execute a shell command. """
import logging
import subprocess
import sys

from command import CommandContext
from shell_builtins import BUILTINS, find_executable
from shell_state import ShellState

logger = logging.getLogger(__name__)


def unknown_command(ctx: CommandContext, shell_state: ShellState) -> int:
    print(f"{ctx.raw}: command not found", file=ctx.out)
    return 127


def run_external(ctx: CommandContext) -> int:
    """ Run ctx.exe with the line's words as argv and wait for it. """
    logger.debug("exec %s argv=%r", ctx.exe, ctx.argv)

    # anything we printed must land before the child's output
    sys.stdout.flush()
    try:
        completed = subprocess.run(
            ctx.argv,
            executable=ctx.exe,
            stdout=ctx.stdout,
            stderr=ctx.stderr,
        )
    except FileNotFoundError:
        print(f"{ctx.name}: command not found", file=sys.stderr)
        return 127
    except OSError as e:
        print(f"{ctx.name}: {e.strerror or e}", file=sys.stderr)
        return 126

    if completed.returncode != 0:
        logger.debug("%s exited with %d", ctx.exe, completed.returncode)
    return completed.returncode


def execute_command(ctx: CommandContext, shell_state: ShellState) -> int:
    # Builtins first; they write to ctx.out / ctx.err themselves
    if ctx.name in BUILTINS:
        logger.debug("builtin %s %r", ctx.name, ctx.args)
        return BUILTINS[ctx.name](ctx, shell_state) or 0

    ctx.exe = find_executable(ctx.name, shell_state.search_path)
    if ctx.exe is None:
        logger.debug("%r not found on PATH", ctx.name)
        return unknown_command(ctx, shell_state)
    return run_external(ctx)
