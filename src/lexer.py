""" Lexical analysis for shell commands, one character at a time. """
from command import Part, PartKind
from constants import (BACKSPACE_CHARS, BELL, CONTINUATION_PROMPT, CTRL_C,
                       CTRL_D, ESC, ESCAPABLE_IN_DOUBLE_QUOTES,
                       LINE_TERMINATORS, STDOUT, STREAM_IDS)
from exceptions import ShellSyntaxError


def _silent(text):
    pass


class Lexer:
    """
    Tokenizer and line editor in one.

    Characters are fed in as they are typed so that tab completion can act
    before the line is finished. Anything the user should see (typed
    characters, completed suffixes, the bell) goes through `write`.
    """
    def __init__(self, completer=None, write=_silent):
        self.completer = completer
        self.write = write

        self.parts = []
        self.token = ""
        self.raw = ""
        self.done = False

        self.in_single_quote = False
        self.in_double_quote = False
        self.pending_escape = False

        self.redirect_pending = False
        self.redirect_stream = STDOUT
        self.append_pending = False

        # lexer states before each typed character, newest last
        self._history = []

        self._transitions = {
            ">": self._on_redirect,
            "\\": self._on_backslash,
            "'": self._on_single_quote,
            '"': self._on_double_quote,
            " ": self._on_space,
        }
        for char in LINE_TERMINATORS:
            self._transitions[char] = self._on_terminator

    @property
    def quoted(self) -> bool:
        return self.in_single_quote or self.in_double_quote

    def feed(self, char: str) -> bool:
        """ Consume one character. Returns False once the line is terminated. """
        if self.done:
            return False
        if char in BACKSPACE_CHARS:
            self._on_backspace(char)
        elif self.pending_escape:
            self._step(self._on_escaped, char)
        elif char == "\t":
            self._on_tab(char)
        else:
            self._step(self._transitions.get(char, self._on_other), char)
        return not self.done

    def finish(self):
        """ Flush what is left and return (raw_text, parts). """
        if self.pending_escape:
            self.pending_escape = False
            self.token += "\\"
        if self.redirect_pending and not self.token:
            raise ShellSyntaxError("newline")
        if self.token:
            self._commit_token()
        for part in self.parts:
            if not part.is_separator and not part.is_redirect:
                part.command = True
                break
        return self.raw.strip(), self.parts

    # -----------------------
    # Transitions
    # -----------------------
    def _on_other(self, char):
        self._echo(char)
        self.token += char

    def _on_tab(self, char):
        # only the command word is completed
        if self.parts or self.quoted or self.redirect_pending or self.completer is None:
            self.write(BELL)
            return

        match = self.completer(self.token)
        if not match.found:
            self.write(BELL)
            return

        # one step per completed character so Backspace can take them back singly
        for char in match.suffix:
            self._step(self._on_other, char)
        self._step(self._on_space, " ")

    def _on_redirect(self, char):
        if self.quoted:
            self._on_other(char)
            return
        self._echo(char)

        if self.redirect_pending and not self.token:
            # '>>'
            self.append_pending = True
            return
        if self.redirect_pending:
            self._commit_token()

        self.redirect_pending = True
        self.redirect_stream = STDOUT
        self.append_pending = False
        if self.token and self.token[-1] in STREAM_IDS:
            self.redirect_stream = STREAM_IDS[self.token[-1]]
            self.token = self.token[:-1]
        if self.token:
            self._commit(Part(self.token))
            self.token = ""

    def _on_backslash(self, char):
        self._echo(char)
        self.pending_escape = True

    def _on_escaped(self, char):
        self.pending_escape = False

        if char in LINE_TERMINATORS:
            # line continuation; the backslash is dropped
            self.raw = self.raw[:-1]
            self._history.clear()
            self.write("\r\n" + CONTINUATION_PROMPT)
            return

        self._echo(char)
        if self.quoted:
            if self.in_double_quote and char in ESCAPABLE_IN_DOUBLE_QUOTES:
                self.token += char
            else:
                self.token += "\\" + char
            return

        if self.redirect_pending:
            # part of the target file name
            self.token += char
            return

        if self.token:
            self._commit(Part(self.token))
            self.token = ""
        self._commit(Part(char, PartKind.ESCAPED))

    def _on_single_quote(self, char):
        if self.in_double_quote:
            self._on_other(char)
            return
        self._echo(char)

        if not self.in_single_quote:
            self.in_single_quote = True
            return
        self.in_single_quote = False
        self._close_quote(PartKind.SINGLE_QUOTED)

    def _on_double_quote(self, char):
        if self.in_single_quote:
            self._on_other(char)
            return
        self._echo(char)

        if not self.in_double_quote:
            self.in_double_quote = True
            return
        self.in_double_quote = False
        self._close_quote(PartKind.DOUBLE_QUOTED)

    def _on_space(self, char):
        self._echo(char)
        if self.quoted:
            self.token += char
            return
        if self.token:
            self._commit_token()
        self._separate()

    def _on_terminator(self, char):
        self.done = True
        self.write("\r\n")

    def _on_backspace(self, char):
        """ Undo the last typed character, quotes and escapes included. """
        if not self._history:
            self.write(BELL)
            return
        shown = len(self.raw)
        self._restore(self._history.pop())
        self.write("\b \b" * (shown - len(self.raw)))

    # -----------------------
    # Helpers
    # -----------------------
    def _snapshot(self):
        return (list(self.parts), self.token, self.raw,
                self.in_single_quote, self.in_double_quote, self.pending_escape,
                self.redirect_pending, self.redirect_stream, self.append_pending)

    def _restore(self, snapshot):
        (self.parts, self.token, self.raw,
         self.in_single_quote, self.in_double_quote, self.pending_escape,
         self.redirect_pending, self.redirect_stream, self.append_pending) = snapshot

    def _step(self, handler, char):
        before = self._snapshot()
        self._history.append(before)
        handler(char)
        # empty after a line continuation
        if self._history and self._snapshot() == before:
            self._history.pop()

    def _echo(self, text):
        self.raw += text
        self.write(text)

    def _commit(self, part: Part):
        self.parts.append(part)

    def _commit_token(self):
        """ Commit the buffer as a word, or as the pending redirect target. """
        if self.redirect_pending:
            self._commit(Part(self.token, PartKind.REDIRECT,
                              stream_id=self.redirect_stream,
                              append=self.append_pending))
            self.redirect_pending = False
            self.redirect_stream = STDOUT
            self.append_pending = False
        else:
            self._commit(Part(self.token))
        self.token = ""

    def _close_quote(self, kind):
        # a quoted redirect target stays in the buffer until the word ends
        if self.redirect_pending:
            return
        self._commit(Part(self.token, kind))
        self.token = ""

    def _separate(self):
        """ Record a word boundary; consecutive boundaries collapse into one. """
        if self.parts and not self.parts[-1].is_separator:
            self._commit(Part.separator())


def tokenize(text: str, completer=None):
    """ Run a whole string through the lexer. Returns (raw_text, parts). """
    lexer = Lexer(completer)
    for char in text:
        if not lexer.feed(char):
            break
    return lexer.finish()


def _skip_escape_sequence(read_char):
    """ Swallow a CSI sequence such as an arrow key. """
    if read_char() != "[":
        return
    while True:
        char = read_char()
        if not char or "@" <= char <= "~":
            return


def read_line(read_char, write=_silent, completer=None):
    """
    Read and tokenize one line from `read_char`, which returns a single
    character per call and "" at end of input.

    Raises EOFError when input ends (or Ctrl-D is typed) on an empty line
    and KeyboardInterrupt on Ctrl-C.
    """
    lexer = Lexer(completer, write)
    while True:
        char = read_char()
        if char == "":
            if not lexer.raw:
                raise EOFError
            break
        if char == CTRL_D:
            if not lexer.raw:
                raise EOFError
            write(BELL)
            continue
        if char == CTRL_C:
            write("^C")
            raise KeyboardInterrupt
        if char == ESC:
            _skip_escape_sequence(read_char)
            continue
        if ord(char) < 32 and char not in "\t\r\n\b":
            write(BELL)
            continue
        if not lexer.feed(char):
            break
    return lexer.finish()
