""" Tokens and the per-line command context. """
import sys
from enum import Enum

from constants import STDOUT


class PartKind(Enum):
    PLAIN = "plain"
    SINGLE_QUOTED = "single_quoted"
    DOUBLE_QUOTED = "double_quoted"
    ESCAPED = "escaped"
    SEPARATOR = "separator"
    REDIRECT = "redirect"


class Part:
    """ One lexical unit of a command line. """
    def __init__(self, body, kind=PartKind.PLAIN, stream_id=STDOUT, append=False):
        self.body = body
        self.kind = kind
        self.command = False      # first meaningful token on the line

        # only meaningful for PartKind.REDIRECT
        self.stream_id = stream_id
        self.append = append

    @classmethod
    def separator(cls):
        return cls(" ", PartKind.SEPARATOR)

    @property
    def is_separator(self) -> bool:
        return self.kind is PartKind.SEPARATOR

    @property
    def is_redirect(self) -> bool:
        return self.kind is PartKind.REDIRECT

    @property
    def is_quoted(self) -> bool:
        return self.kind in (PartKind.SINGLE_QUOTED, PartKind.DOUBLE_QUOTED)

    def __eq__(self, other):
        if not isinstance(other, Part):
            return NotImplemented
        return (self.body, self.kind, self.command, self.stream_id, self.append) == \
            (other.body, other.kind, other.command, other.stream_id, other.append)

    def __repr__(self):
        if self.command:
            return f"Cmd({self.body})"
        if self.kind is PartKind.SINGLE_QUOTED:
            return f"'({self.body})"
        if self.kind is PartKind.DOUBLE_QUOTED:
            return f'"({self.body})'
        if self.kind is PartKind.ESCAPED:
            return f"\\({self.body})"
        if self.kind is PartKind.REDIRECT:
            op = ">>" if self.append else ">"
            return f"{self.stream_id}{op}({self.body})"
        if self.kind is PartKind.SEPARATOR:
            return "SEP"
        return f"Part({self.body})"


def split_words(parts: list[Part]) -> list[list[Part]]:
    """
    Group parts into shell words.
    Adjacent non-separator parts belong to the same word ('a b''c d' is one
    word); a separator ends the current word.
    """
    words = []
    current = []
    for part in parts:
        if part.is_separator:
            if current:
                words.append(current)
                current = []
            continue
        current.append(part)
    if current:
        words.append(current)
    return words


def join_words(parts: list[Part]) -> list[str]:
    """ The literal text of each word, quotes and escapes already removed. """
    return ["".join(p.body for p in word) for word in split_words(parts)]


class CommandContext:
    """ Everything a handler needs to run one submitted line. """
    def __init__(self, raw, parts, stdout=None, stderr=None):
        self.raw = raw
        self.parts = parts
        self.argv = join_words(parts)

        # None means "inherit the shell's own stream"
        self.stdout = stdout
        self.stderr = stderr

        # set once the name resolves to a file on PATH
        self.exe = None

    @property
    def name(self):
        return self.argv[0] if self.argv else ""

    @property
    def args(self):
        return self.argv[1:]

    @property
    def words(self):
        """ The argument words with their parts, command word excluded. """
        return split_words(self.parts)[1:]

    @property
    def out(self):
        return self.stdout if self.stdout is not None else sys.stdout

    @property
    def err(self):
        return self.stderr if self.stderr is not None else sys.stderr
