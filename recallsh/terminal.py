import logging
import os
import sys

try:
    import readline
except ImportError:
    readline = None

logger = logging.getLogger(__name__)


def init_readline():
    """Configure line editing so the prompt behaves like a Linux terminal"""
    if readline is None:
        logger.warning("readline is not available, line editing disabled")
        return
    if not sys.stdin.isatty():
        return

    try:
        readline.parse_and_bind("set editing-mode emacs")

        # Ctrl+Left/Right to jump between words
        readline.parse_and_bind("\\e[1;5D: backward-word")
        readline.parse_and_bind("\\e[1;5C: forward-word")

        # Up/down arrows browse what was typed this session
        readline.parse_and_bind("\\e[A: previous-history")
        readline.parse_and_bind("\\e[B: next-history")
    except Exception as e:
        logger.warning("could not configure readline: %s", e)


class Terminal:
    """
    Input source and raw output sink of the shell.
    `reading` is true only while the shell is blocked waiting for a line,
    which is how the interrupt handler knows it may abandon the read.
    """

    def __init__(self, reader=input, fd=None):
        self._reader = reader
        self.fd = sys.stdout.fileno() if fd is None else fd
        self.reading = False

    def read_line(self, prompt):
        """
        Show the prompt and read one line.
        Raises EOFError at end of input, ReadInterrupted if the interrupt
        key was pressed while waiting.
        """
        self.reading = True
        try:
            return self._reader(prompt)
        finally:
            self.reading = False

    def write(self, text):
        """Write text straight to the output descriptor, bypassing sys.stdout"""
        data = text.encode(errors="surrogateescape")
        while data:
            written = os.write(self.fd, data)
            data = data[written:]
