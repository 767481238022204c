""" Implement the core of the shell. """
import logging
import sys

from command import CommandContext
from completion import complete
from constants import PROMPT
from exceptions import ShellError, ShellExit
from lexer import read_line
from redirection import open_redirects
from runner import execute_command
from shell_builtins import BUILTINS
from shell_state import ShellState
from terminal import CharReader, raw_mode

logger = logging.getLogger(__name__)


def _write(text):
    sys.stdout.write(text)
    sys.stdout.flush()


def read_command(state: ShellState, prompt=PROMPT):
    """
    Print the prompt and read one line. Returns (raw_text, parts).

    The terminal is in raw mode only while the line is being typed, so the
    line editor does its own echoing and tab completion.
    """
    _write(prompt)

    def completer(prefix):
        return complete(prefix, BUILTINS, state.search_path)

    with raw_mode(sys.stdin) as interactive:
        write = _write if interactive else (lambda text: None)
        return read_line(CharReader(sys.stdin).read_char, write, completer)


class Shell:
    def __init__(self):
        self.state = ShellState()

    def run_line(self, raw, parts) -> int:
        """ Bind redirects, then dispatch. Redirect files close before returning. """
        logger.debug("line %r parts=%r", raw, parts)
        with open_redirects(parts) as (parts, stdout, stderr):
            ctx = CommandContext(raw, parts, stdout, stderr)
            if not ctx.argv:
                return self.state.last_status
            return execute_command(ctx, self.state)

    def run(self):
        while True:
            try:
                raw, parts = read_command(self.state)
                if not parts:
                    continue

                status = self.run_line(raw, parts)
                self.state.set_status(status)
            except ShellExit as e:
                return e.status

            except ShellError as e:
                print(e, file=sys.stderr)
                self.state.set_status(1)

            except EOFError:
                print()
                return 0

            except KeyboardInterrupt:
                print()
