""" Registry of builtin commands. """
import os

from command import PartKind
from completion import is_executable
from constants import LEGACY_VAR_RX
from exceptions import InvalidPathError, ShellExit

BUILTINS = {}


def builtin(name):
    """Decorator to register builtins"""
    def wrapper(func):
        BUILTINS[name] = func
        return func
    return wrapper


def find_executable(name, search_path):
    """ Return the first executable called `name` on `search_path`, or None. """
    if not name:
        return None
    if "/" in name:
        return name if is_executable(name) else None

    for directory in search_path:
        candidate = os.path.join(directory, name)
        if is_executable(candidate):
            return candidate
    return None


def _echo_word(word, state):
    # legacy form: a bare, unquoted $NAME prints the variable
    if len(word) == 1 and word[0].kind is PartKind.PLAIN:
        m = LEGACY_VAR_RX.match(word[0].body)
        if m and m.group("name") in state.env:
            return state.get_var(m.group("name"))
    return "".join(part.body for part in word)


@builtin("echo")
def builtin_echo(ctx, state) -> int:
    print(" ".join(_echo_word(word, state) for word in ctx.words), file=ctx.out)
    return 0


@builtin("cd")
def builtin_cd(ctx, state):
    if not ctx.args:
        return 0

    target = ctx.args[0]
    try:
        path = state.resolve_path(target)
    except InvalidPathError:
        print(f"cd: {target}: No such file or directory", file=ctx.out)
        return 1

    if not os.path.exists(path):
        print(f"cd: {path}: No such file or directory", file=ctx.out)
        return 1

    try:
        os.chdir(path)
    except NotADirectoryError:
        print(f"cd: {path}: Not a directory", file=ctx.out)
        return 1
    except PermissionError:
        print(f"cd: {path}: Permission denied", file=ctx.out)
        return 1

    state.set_var("PWD", path)
    return 0


@builtin("pwd")
def builtin_pwd(ctx, state):
    print(state.get_var("PWD"), file=ctx.out)
    return 0


@builtin("exit")
def builtin_exit(ctx, state):
    if len(ctx.args) > 1:
        print("exit: too many arguments", file=ctx.out)
        return 1
    try:
        status = int(ctx.args[0]) if ctx.args else 0
    except ValueError:
        print(f"exit: {ctx.args[0]}: numeric argument required", file=ctx.out)
        return 2
    raise ShellExit(status)


@builtin("type")
def builtin_type(ctx, state):
    """
    type NAME...
    Say whether each NAME is a builtin or an executable on PATH.
    Nothing is run.
    """
    if not ctx.args:
        print("type: missing argument", file=ctx.out)
        return 1

    rc = 0
    for name in ctx.args:
        if name in BUILTINS:
            print(f"{name} is a shell builtin", file=ctx.out)
            continue

        path = find_executable(name, state.search_path)
        if path:
            print(f"{name} is {path}", file=ctx.out)
        else:
            print(f"{name}: not found", file=ctx.out)
            rc = 1
    return rc
