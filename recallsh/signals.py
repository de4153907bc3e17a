"""
Interrupt key handling.

Python runs signal handlers on the main thread between bytecodes, so the
handler never sees a history entry half-written. It still sticks to
os.write() and the pre-rendered entry bytes, and never uses print() or
logging, because the interrupted code may be in the middle of either.
"""

import os
import signal

from recallsh.errors import ReadInterrupted

_previous_handler = None


def make_interrupt_handler(log, terminal):
    def handle_sigint(signum, frame):
        os.write(terminal.fd, b"\n")
        log.dump(terminal.fd)
        # Only a pending read is abandoned; a foreground wait carries on
        if terminal.reading:
            raise ReadInterrupted()

    return handle_sigint


def install_interrupt_handler(log, terminal):
    """Show the history on Ctrl+C instead of terminating the shell"""
    global _previous_handler
    previous = signal.signal(signal.SIGINT, make_interrupt_handler(log, terminal))
    if _previous_handler is None:
        _previous_handler = previous


def restore_interrupt_handler():
    global _previous_handler
    if _previous_handler is not None:
        signal.signal(signal.SIGINT, _previous_handler)
        _previous_handler = None
