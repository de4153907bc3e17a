"""Exceptions raised inside the shell.

Only SpawnError is fatal. Everything else is reported by the prompt loop,
which then goes back to the prompt.
"""


class ShellError(Exception):
    """Base class for shell errors"""


class RecallError(ShellError):
    """A !-reference that is malformed or no longer in the history"""

    def __init__(self, reference, reason="event not found"):
        self.reference = reference
        self.reason = reason
        super().__init__(f"{reference}: {reason}")


class SpawnError(ShellError):
    """The shell could not create a child process"""


class ReadInterrupted(ShellError):
    """The blocking terminal read was cut short by the interrupt key"""
