""" Tab completion of the command word. """
import os
import stat
from typing import NamedTuple

EXECUTE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


class Completion(NamedTuple):
    found: bool
    name: str = ""
    suffix: str = ""


NO_COMPLETION = Completion(False)


def is_executable(path: str) -> bool:
    """ True for a regular file with any execute bit set. """
    try:
        st = os.stat(path)
    except OSError:
        return False
    return stat.S_ISREG(st.st_mode) and bool(st.st_mode & EXECUTE_BITS)


def list_executables(directory: str) -> list[str]:
    """ Executable names in one PATH directory, sorted. Missing dirs are empty. """
    try:
        entries = os.listdir(directory)
    except OSError:
        return []
    return sorted(e for e in entries if is_executable(os.path.join(directory, e)))


def complete(prefix: str, builtin_names, search_path) -> Completion:
    """
    Complete `prefix` to a command name.

    Builtins are tried first, then each directory of `search_path` in order.
    Within each group names are compared in lexicographic order, so the
    first match is stable even when several names share the prefix.
    Directories are re-read on every call.
    """
    if not prefix:
        return NO_COMPLETION

    for name in sorted(builtin_names):
        if name.startswith(prefix):
            return Completion(True, name, name[len(prefix):])

    for directory in search_path:
        for name in list_executables(directory):
            if name.startswith(prefix):
                return Completion(True, name, name[len(prefix):])

    return NO_COMPLETION
