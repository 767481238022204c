""" Bind redirect tokens to open files for one command. """
import contextlib
import logging

from command import Part
from constants import STDERR
from exceptions import RedirectError

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def open_redirects(parts: list[Part]):
    """
    Open every redirect target and yield (parts, stdout, stderr).

    Redirect parts are removed from the yielded parts; everything else is
    passed through in order. A stream with no redirect is yielded as None.
    Targets are opened before the command runs, so they are created (or
    truncated) whatever the command does, and closed when the block exits.
    When a stream is redirected more than once the last target wins.
    """
    stdout = None
    stderr = None
    kept = []

    with contextlib.ExitStack() as stack:
        for part in parts:
            if not part.is_redirect:
                kept.append(part)
                continue

            mode = "a" if part.append else "w"
            try:
                handle = stack.enter_context(open(part.body, mode))
            except OSError as e:
                raise RedirectError(part.body, e.strerror or str(e)) from e

            logger.debug("redirect fd %d to %s (mode %s)", part.stream_id, part.body, mode)
            if part.stream_id == STDERR:
                stderr = handle
            else:
                stdout = handle

        yield kept, stdout, stderr
