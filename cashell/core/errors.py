"""
Exception types raised by the Cashell kernel
"""


class CashellError(Exception):
    """Base class for kernel errors"""


class CommandError(CashellError):
    """A command failed while executing"""

    def __init__(self, message: str, status: int = 1):
        super().__init__(message)
        self.status = status


class CommandNotFound(CommandError):
    """No registered unit matches the command name"""

    def __init__(self, name: str):
        super().__init__(f"Invalid command: {name}", status=127)
        self.name = name


class SessionExit(CashellError):
    """Raised by the exit command to leave the interactive loop"""
