""" Exceptions raised inside the shell. """


class ShellExit(Exception):
    """ Raised by `exit` to leave the prompt loop. """
    def __init__(self, status=0):
        super().__init__(status)
        self.status = status


class ShellError(Exception):
    """ A per-command failure; reported to the user, never fatal. """


class InvalidPathError(ShellError):
    def __init__(self, path):
        super().__init__(f"{path}: invalid path")
        self.path = path


class RedirectError(ShellError):
    def __init__(self, path, reason):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class ShellSyntaxError(ShellError):
    def __init__(self, token):
        super().__init__(f"syntax error near unexpected token `{token}'")
        self.token = token
