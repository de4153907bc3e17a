import logging
import os
import sys

from recallsh import config
from recallsh.builtin import execute_builtin
from recallsh.errors import ReadInterrupted, RecallError, SpawnError
from recallsh.executor import run_external
from recallsh.history import HistoryLog
from recallsh.job_control import JobTable
from recallsh.parser import CommandLine
from recallsh.recall import resolve
from recallsh.signals import install_interrupt_handler, restore_interrupt_handler
from recallsh.terminal import Terminal, init_readline

logger = logging.getLogger(__name__)


def prompt():
    """Generate shell prompt: the working directory followed by '> '"""
    try:
        cwd = os.getcwd()
    except OSError as e:
        logger.warning("cannot determine working directory: %s", e)
        cwd = "?"
    return cwd + config.PROMPT_SUFFIX


class Shell:
    """The read / recall / record / dispatch loop"""

    def __init__(self, terminal=None, log=None, jobs=None):
        self.terminal = terminal or Terminal()
        self.log = log if log is not None else HistoryLog()
        self.jobs = jobs if jobs is not None else JobTable()
        self.last_status = 0

    def dispatch(self, line):
        """
        Run one parsed command line.
        Returns: exit status of the command
        """
        argv = line.argv
        executed, exit_code = execute_builtin(argv, self.log, self.jobs, self.terminal)
        if executed:
            return exit_code
        return run_external(argv, line.background, self.jobs, self.terminal, line.text)

    def execute(self, raw):
        """
        Process one line of input as if it had been typed at the prompt.
        Returns: exit status, or None if nothing was run
        """
        line = CommandLine(raw)
        if not line:
            return None

        if line.is_recall:
            try:
                line = resolve(line, self.log, self.terminal)
            except RecallError as e:
                self.terminal.write(f"{config.SHELL_NAME}: {e}\n")
                return None
        else:
            self.log.record(line.text)

        self.last_status = self.dispatch(line)
        return self.last_status

    def run(self):
        """
        Main shell loop.
        Returns: the status the shell process should exit with
        """
        try:
            while True:
                for notice in self.jobs.reap():
                    self.terminal.write(notice)

                try:
                    raw = self.terminal.read_line(prompt())
                except ReadInterrupted:
                    continue
                except EOFError:
                    self.terminal.write("\n")
                    return 0
                except UnicodeDecodeError:
                    self.terminal.write(f"{config.SHELL_NAME}: cannot decode input line\n")
                    continue
                except OSError as e:
                    print(f"{config.SHELL_NAME}: unable to read command: {e}", file=sys.stderr)
                    return 1

                self.execute(raw)
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 0
        except SpawnError as e:
            print(f"{config.SHELL_NAME}: {e}", file=sys.stderr)
            return 1


def main():
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT, stream=sys.stderr)
    # Bytes that are not valid text still reach the history and execvp unchanged
    sys.stdin.reconfigure(errors="surrogateescape")

    init_readline()
    shell = Shell()
    install_interrupt_handler(shell.log, shell.terminal)
    try:
        status = shell.run()
    finally:
        restore_interrupt_handler()
    sys.exit(status)
