""" Current state of the shell. """
import os

from exceptions import InvalidPathError


class ShellState:
    """
    State shared across prompts: the environment mapping (PATH, HOME, PWD)
    and the status of the last command. Only `cd` changes the environment
    after startup.
    """
    def __init__(self, env=None):
        if env is None:
            env = {
                "PATH": os.environ.get("PATH", ""),
                "HOME": os.environ.get("HOME", ""),
                "PWD": os.getcwd(),
            }
        self.env = env
        self.last_status = 0

    def get_var(self, name, default=""):
        return self.env.get(name, default)

    def set_var(self, name, value):
        self.env[name] = value

    def set_status(self, status: int):
        self.last_status = int(status) if status is not None else 0

    @property
    def search_path(self) -> list[str]:
        """ PATH split into directories, empty entries dropped. """
        return [d for d in self.get_var("PATH").split(os.pathsep) if d]

    def resolve_path(self, path: str) -> str:
        """
        Turn a `cd` argument into an absolute path, working from PWD rather
        than the real working directory.

        Leading `..` segments each strip one component off PWD; running out
        of components raises InvalidPathError.
        """
        if path.startswith("/"):
            return path
        if path.startswith("~"):
            return self.get_var("HOME") + path[1:]
        if path == "." or path.startswith("./"):
            return self.get_var("PWD").rstrip("/") + path[1:] or "/"

        pwd = self.get_var("PWD").rstrip("/")
        remainder = path
        while remainder == ".." or remainder.startswith("../"):
            if not pwd:
                raise InvalidPathError(path)
            pwd = pwd.rsplit("/", 1)[0]
            remainder = remainder[3:]

        return f"{pwd}/{remainder}".rstrip("/") or "/"
