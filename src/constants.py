import re

PROMPT = "$ "
CONTINUATION_PROMPT = "> "

BELL = "\a"
CTRL_C = "\x03"
CTRL_D = "\x04"
ESC = "\x1b"
BACKSPACE_CHARS = ("\x7f", "\b")
LINE_TERMINATORS = ("\r", "\n")

STDOUT = 1
STDERR = 2
# a trailing digit before '>' picks the stream
STREAM_IDS = {"1": STDOUT, "2": STDERR}

# inside double quotes only these collapse after a backslash
ESCAPABLE_IN_DOUBLE_QUOTES = set('$"\\')

LEGACY_VAR_RX = re.compile(r"^\$(?P<name>[A-Za-z_][A-Za-z0-9_]*)$")
