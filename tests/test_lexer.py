import unittest

import lexer
from command import Part, PartKind, join_words
from completion import Completion
from exceptions import ShellSyntaxError


def kinds(parts):
    return [(p.kind, p.body) for p in parts]


PLAIN = PartKind.PLAIN
SQ = PartKind.SINGLE_QUOTED
DQ = PartKind.DOUBLE_QUOTED
ESC = PartKind.ESCAPED
SEP = PartKind.SEPARATOR
REDIR = PartKind.REDIRECT


class TestTokenize(unittest.TestCase):
    def test_plain_words(self):
        raw, parts = lexer.tokenize("echo hello")
        self.assertEqual("echo hello", raw)
        self.assertEqual([(PLAIN, "echo"), (SEP, " "), (PLAIN, "hello")], kinds(parts))

    def test_first_token_is_command(self):
        _, parts = lexer.tokenize("echo a b")
        self.assertTrue(parts[0].command)
        self.assertFalse(any(p.command for p in parts[1:]))

    def test_separators_collapse(self):
        _, parts = lexer.tokenize("echo a        b")
        self.assertEqual(
            [(PLAIN, "echo"), (SEP, " "), (PLAIN, "a"), (SEP, " "), (PLAIN, "b")],
            kinds(parts),
        )

    def test_leading_whitespace_is_ignored(self):
        raw, parts = lexer.tokenize("   pwd")
        self.assertEqual("pwd", raw)
        self.assertEqual([(PLAIN, "pwd")], kinds(parts))
        self.assertTrue(parts[0].command)

    def test_single_quotes_keep_contents(self):
        _, parts = lexer.tokenize("echo 'a   b'")
        self.assertEqual((SQ, "a   b"), kinds(parts)[-1])

    def test_adjacent_quotes_have_no_separator(self):
        _, parts = lexer.tokenize("echo 'a b''c d'")
        self.assertEqual([(SQ, "a b"), (SQ, "c d")], kinds(parts)[2:])

    def test_word_before_quote_is_separated(self):
        _, parts = lexer.tokenize("echo a 'b'")
        self.assertEqual(["echo", "a", "b"], join_words(parts))

    def test_text_before_open_quote_joins_quoted_token(self):
        _, parts = lexer.tokenize("echo a'b c'")
        self.assertEqual((SQ, "ab c"), kinds(parts)[-1])

    def test_double_quote_inside_single_quotes(self):
        _, parts = lexer.tokenize("echo 'say \"hi\"'")
        self.assertEqual((SQ, 'say "hi"'), kinds(parts)[-1])

    def test_single_quote_inside_double_quotes(self):
        _, parts = lexer.tokenize('echo "shell\'s"')
        self.assertEqual((DQ, "shell's"), kinds(parts)[-1])

    def test_escape_outside_quotes_is_own_token(self):
        _, parts = lexer.tokenize("echo a\\ b")
        self.assertEqual([(PLAIN, "a"), (ESC, " "), (PLAIN, "b")], kinds(parts)[2:])

    def test_escapable_chars_collapse_in_double_quotes(self):
        _, parts = lexer.tokenize('echo "a\\"b\\\\c\\$d"')
        self.assertEqual((DQ, 'a"b\\c$d'), kinds(parts)[-1])

    def test_other_escapes_kept_in_double_quotes(self):
        _, parts = lexer.tokenize('echo "before\\   after"')
        self.assertEqual((DQ, "before\\   after"), kinds(parts)[-1])

    def test_escapes_kept_in_single_quotes(self):
        _, parts = lexer.tokenize("echo 'shell\\nscript'")
        self.assertEqual((SQ, "shell\\nscript"), kinds(parts)[-1])

    def test_trailing_backslash_is_literal(self):
        _, parts = lexer.tokenize("echo a\\")
        self.assertEqual((PLAIN, "a\\"), kinds(parts)[-1])

    def test_line_terminator_stops_reading(self):
        raw, parts = lexer.tokenize("echo a\necho b")
        self.assertEqual("echo a", raw)
        self.assertEqual(["echo", "a"], join_words(parts))

    def test_backslash_newline_continues_line(self):
        raw, parts = lexer.tokenize("echo a\\\nb")
        self.assertEqual("echo ab", raw)
        self.assertEqual(["echo", "ab"], join_words(parts))

    def test_empty_input(self):
        raw, parts = lexer.tokenize("")
        self.assertEqual("", raw)
        self.assertEqual([], parts)


class TestRedirectTokens(unittest.TestCase):
    def test_stdout_redirect(self):
        _, parts = lexer.tokenize("ls > out.txt")
        redirect = parts[-1]
        self.assertEqual(REDIR, redirect.kind)
        self.assertEqual("out.txt", redirect.body)
        self.assertEqual(1, redirect.stream_id)
        self.assertFalse(redirect.append)

    def test_explicit_stdout_id(self):
        _, parts = lexer.tokenize("ls 1> out.txt")
        self.assertEqual(Part("out.txt", REDIR, stream_id=1), parts[-1])
        self.assertNotIn((PLAIN, "1"), kinds(parts))

    def test_stderr_redirect(self):
        _, parts = lexer.tokenize("ls 2> err.txt")
        self.assertEqual(Part("err.txt", REDIR, stream_id=2), parts[-1])

    def test_append_redirect(self):
        _, parts = lexer.tokenize("echo hi >> out.txt")
        self.assertEqual(Part("out.txt", REDIR, stream_id=1, append=True), parts[-1])

    def test_stderr_append_redirect(self):
        _, parts = lexer.tokenize("echo hi 2>> err.txt")
        self.assertEqual(Part("err.txt", REDIR, stream_id=2, append=True), parts[-1])

    def test_redirect_without_spaces_flushes_word(self):
        _, parts = lexer.tokenize("echo hi>out.txt")
        self.assertEqual([(PLAIN, "echo"), (SEP, " "), (PLAIN, "hi"), (REDIR, "out.txt")], kinds(parts))

    def test_space_ends_redirect_target(self):
        _, parts = lexer.tokenize("echo a > out.txt b")
        redirects = [p for p in parts if p.is_redirect]
        self.assertEqual(["out.txt"], [p.body for p in redirects])
        self.assertEqual(["echo", "a", "b"], join_words([p for p in parts if not p.is_redirect]))

    def test_quoted_redirect_target(self):
        _, parts = lexer.tokenize("echo a > 'my file'")
        self.assertEqual((REDIR, "my file"), kinds(parts)[-1])

    def test_gt_inside_quotes_is_literal(self):
        _, parts = lexer.tokenize("echo 'a > b'")
        self.assertEqual((SQ, "a > b"), kinds(parts)[-1])

    def test_escaped_gt_is_literal(self):
        _, parts = lexer.tokenize("echo a\\>b")
        self.assertEqual(["echo", "a>b"], join_words(parts))

    def test_redirect_without_target_is_syntax_error(self):
        for line in ("echo hi >", "echo hi > ", "echo hi 2>>", "echo hi > ''"):
            with self.assertRaises(ShellSyntaxError) as cm:
                lexer.tokenize(line)
            self.assertEqual("syntax error near unexpected token `newline'", str(cm.exception))


class FakeTerminal:
    def __init__(self, keys):
        self.keys = list(keys)
        self.output = ""

    def read_char(self):
        return self.keys.pop(0) if self.keys else ""

    def write(self, text):
        self.output += text


class TestReadLine(unittest.TestCase):
    def completer(self, prefix):
        for name in ("echo", "exit"):
            if name.startswith(prefix):
                return Completion(True, name, name[len(prefix):])
        return Completion(False)

    def test_reads_until_carriage_return(self):
        term = FakeTerminal("pwd\rignored")
        raw, parts = lexer.read_line(term.read_char, term.write)
        self.assertEqual("pwd", raw)
        self.assertEqual(["pwd"], join_words(parts))
        self.assertEqual("pwd\r\n", term.output)
        self.assertEqual(list("ignored"), term.keys)

    def test_tab_completes_command_word(self):
        term = FakeTerminal("ec\thello\r")
        raw, parts = lexer.read_line(term.read_char, term.write, self.completer)
        self.assertEqual("echo hello", raw)
        self.assertEqual(["echo", "hello"], join_words(parts))
        self.assertEqual("echo hello\r\n", term.output)

    def test_tab_without_match_rings_bell(self):
        term = FakeTerminal("zz\t\r")
        raw, parts = lexer.read_line(term.read_char, term.write, self.completer)
        self.assertEqual("zz", raw)
        self.assertIn("\a", term.output)
        self.assertEqual(["zz"], join_words(parts))

    def test_tab_after_command_word_rings_bell(self):
        term = FakeTerminal("echo e\t\r")
        raw, _ = lexer.read_line(term.read_char, term.write, self.completer)
        self.assertEqual("echo e", raw)
        self.assertIn("\a", term.output)

    def test_backspace_removes_last_char(self):
        term = FakeTerminal("pwx\x7fd\r")
        raw, parts = lexer.read_line(term.read_char, term.write)
        self.assertEqual("pwd", raw)
        self.assertEqual(["pwd"], join_words(parts))
        self.assertEqual("pwx\b \bd\r\n", term.output)

    def test_backspace_on_empty_line_rings_bell(self):
        term = FakeTerminal("\x7fls\r")
        raw, _ = lexer.read_line(term.read_char, term.write)
        self.assertEqual("ls", raw)
        self.assertEqual("\als\r\n", term.output)

    def test_backspace_removes_opening_quote(self):
        term = FakeTerminal("echo ab'\x7f\r")
        raw, parts = lexer.read_line(term.read_char, term.write)
        self.assertEqual("echo ab", raw)
        self.assertEqual(["echo", "ab"], join_words(parts))
        self.assertEqual([PLAIN, SEP, PLAIN], [p.kind for p in parts])

    def test_backspace_removes_closing_quote(self):
        term = FakeTerminal("echo 'a b'\x7f c'\r")
        raw, parts = lexer.read_line(term.read_char, term.write)
        self.assertEqual("echo 'a b c'", raw)
        self.assertEqual(["echo", "a b c"], join_words(parts))

    def test_backspace_removes_pending_backslash(self):
        term = FakeTerminal("echo a\\\x7fb\r")
        raw, parts = lexer.read_line(term.read_char, term.write)
        self.assertEqual("echo ab", raw)
        self.assertEqual(["echo", "ab"], join_words(parts))

    def test_backspace_crosses_word_boundary(self):
        term = FakeTerminal("ecx \x7f\x7fho hi\r")
        raw, parts = lexer.read_line(term.read_char, term.write)
        self.assertEqual("echo hi", raw)
        self.assertEqual(["echo", "hi"], join_words(parts))

    def test_backspace_undoes_redirect(self):
        term = FakeTerminal("echo hi >\x7f\r")
        raw, parts = lexer.read_line(term.read_char, term.write)
        self.assertEqual("echo hi", raw)
        self.assertFalse(any(p.is_redirect for p in parts))

    def test_backspace_after_completion_removes_one_char(self):
        term = FakeTerminal("ex\t\x7f\r")
        raw, parts = lexer.read_line(term.read_char, term.write, self.completer)
        self.assertEqual("exit", raw)
        self.assertEqual(["exit"], join_words(parts))
        self.assertEqual("exit \b \b\r\n", term.output)

    def test_eof_on_empty_line(self):
        term = FakeTerminal("")
        with self.assertRaises(EOFError):
            lexer.read_line(term.read_char, term.write)

    def test_ctrl_d_on_empty_line(self):
        term = FakeTerminal("\x04")
        with self.assertRaises(EOFError):
            lexer.read_line(term.read_char, term.write)

    def test_eof_with_text_submits_line(self):
        term = FakeTerminal("echo hi")
        raw, parts = lexer.read_line(term.read_char, term.write)
        self.assertEqual("echo hi", raw)
        self.assertEqual(["echo", "hi"], join_words(parts))

    def test_ctrl_c_interrupts(self):
        term = FakeTerminal("echo\x03")
        with self.assertRaises(KeyboardInterrupt):
            lexer.read_line(term.read_char, term.write)

    def test_arrow_keys_are_ignored(self):
        term = FakeTerminal("ls\x1b[A\r")
        raw, _ = lexer.read_line(term.read_char, term.write)
        self.assertEqual("ls", raw)


if __name__ == "__main__":
    unittest.main()
