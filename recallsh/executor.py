import errno
import logging
import os
import subprocess

from recallsh.errors import SpawnError
from recallsh.job_control import exit_status

logger = logging.getLogger(__name__)

# Errors that mean the system could not create the child at all
SPAWN_ERRNOS = (errno.EAGAIN, errno.ENOMEM)

UNKNOWN_COMMAND_STATUS = 127


def start_process(args, background=False):
    """
    Start an external program.
    Returns: Popen object, or None if the program cannot be run
    Raises SpawnError if no child process could be created
    """
    try:
        if background:
            # Own process group: the interrupt key only reaches foreground jobs
            return subprocess.Popen(args, preexec_fn=os.setpgrp)
        return subprocess.Popen(args)
    except MemoryError as e:
        raise SpawnError(f"cannot create process: {e}") from e
    except OSError as e:
        if e.errno in SPAWN_ERRNOS:
            raise SpawnError(f"cannot create process: {e.strerror}") from e
        logger.debug("could not execute %r: %s", args[0], e)
        return None


def run_external(args, background, jobs, terminal, text=None):
    """
    Run an external command in the foreground or background.
    Returns: exit status of a foreground job, 0 for a background job,
    127 if the program could not be run
    """
    proc = start_process(args, background)
    if proc is None:
        terminal.write(f"{args[0]}: Unknown command.\n")
        return UNKNOWN_COMMAND_STATUS

    if background:
        terminal.write(jobs.add(proc, text or " ".join(args)))
        return 0

    logger.debug("waiting for foreground job %d", proc.pid)
    return exit_status(proc.wait())
