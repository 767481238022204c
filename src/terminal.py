""" Terminal input: raw mode and unbuffered character reads. """
import codecs
import contextlib
import io
import os
import sys
import termios
import tty


def is_interactive(stream=None) -> bool:
    stream = stream if stream is not None else sys.stdin
    try:
        return stream.isatty()
    except ValueError:
        # closed stream
        return False


@contextlib.contextmanager
def raw_mode(stream=None):
    """
    Put the terminal behind `stream` into raw mode for the duration of the
    block and restore the previous mode on every way out.

    Yields True when the mode was switched, False when `stream` is not a
    terminal (piped input), in which case nothing is touched.
    """
    stream = stream if stream is not None else sys.stdin
    if not is_interactive(stream):
        yield False
        return

    fd = stream.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        yield True
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


class CharReader:
    """
    Reads `stream` one character at a time, or returns "" at end of input.

    When the stream has a file descriptor, bytes are taken straight from it
    one at a time and decoded incrementally. Nothing is buffered past the
    current character, so a child process that reads the same stdin sees
    the rest of the input.
    """
    def __init__(self, stream=None):
        self.stream = stream if stream is not None else sys.stdin
        try:
            self.fd = self.stream.fileno()
        except (AttributeError, io.UnsupportedOperation):
            self.fd = None
        encoding = getattr(self.stream, "encoding", None) or "utf-8"
        self.decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self.pending = ""

    def read_char(self) -> str:
        if self.fd is None:
            return self.stream.read(1)
        while not self.pending:
            byte = os.read(self.fd, 1)
            if not byte:
                self.pending = self.decoder.decode(b"", final=True)
                if not self.pending:
                    return ""
                break
            # an invalid sequence can decode to a replacement plus the next char
            self.pending = self.decoder.decode(byte)
        char, self.pending = self.pending[0], self.pending[1:]
        return char
