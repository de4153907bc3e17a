import logging
import signal

import psutil

logger = logging.getLogger(__name__)


def exit_status(returncode):
    """Shell-style status: a child killed by signal N reports 128 + N"""
    if returncode < 0:
        return 128 - returncode
    return returncode


def describe_status(returncode):
    if returncode < 0:
        try:
            return signal.Signals(-returncode).name
        except ValueError:
            return f"signal {-returncode}"
    return f"Exit {returncode}"


class JobTable:
    """Background jobs: pid -> (Popen, command text)"""

    def __init__(self):
        self._jobs = {}

    def __len__(self):
        return len(self._jobs)

    def __contains__(self, pid):
        return pid in self._jobs

    def add(self, proc, text):
        """Track a background job and announce it"""
        self._jobs[proc.pid] = (proc, text)
        logger.debug("tracking background job %d: %s", proc.pid, text)
        return f"[{proc.pid}] {text}\n"

    def reap(self):
        """
        Collect background jobs that have finished, without blocking.
        Returns: one notice line per finished job
        """
        notices = []
        for pid, (proc, text) in list(self._jobs.items()):
            status = proc.poll()
            if status is None:
                continue
            del self._jobs[pid]
            logger.debug("reaped background job %d with status %d", pid, exit_status(status))
            if status == 0:
                notices.append(f"[{pid}] Done\t{text}\n")
            else:
                notices.append(f"[{pid}] {describe_status(status)}\t{text}\n")
        return notices

    def show(self):
        """Render the job list with the live status of each process"""
        if not self._jobs:
            return "No background jobs.\n"

        lines = [f"{'PID':<8} {'Command'}\n", "-" * 40 + "\n"]
        for pid, (_, text) in self._jobs.items():
            try:
                status = psutil.Process(pid).status()
            except psutil.NoSuchProcess:
                status = "terminated"
            except psutil.Error:
                status = "unknown"
            lines.append(f"{pid:<8} {text}  [{status}]\n")
        return "".join(lines)
