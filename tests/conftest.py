"""Shared test fixtures for the recallsh test suite."""

import os

import pytest

from recallsh.history import HistoryLog
from recallsh.job_control import JobTable
from recallsh.terminal import Terminal


class ScriptedTerminal(Terminal):
    """Terminal fed from a list of lines, writing to a file"""

    def __init__(self, lines, path):
        self.path = path
        self.prompts = []
        self._lines = iter(lines)
        super().__init__(reader=self._next_line,
                         fd=os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC))

    def _next_line(self, prompt):
        self.prompts.append(prompt)
        line = next(self._lines, None)
        if line is None:
            raise EOFError
        if isinstance(line, BaseException):
            raise line
        return line

    @property
    def output(self):
        return self.path.read_text()

    def close(self):
        os.close(self.fd)


@pytest.fixture
def make_terminal(tmp_path):
    """Factory for scripted terminals; each one writes to its own file"""
    terminals = []

    def factory(lines=()):
        term = ScriptedTerminal(lines, tmp_path / f"out{len(terminals)}.txt")
        terminals.append(term)
        return term

    yield factory
    for term in terminals:
        term.close()


@pytest.fixture
def terminal(make_terminal):
    return make_terminal()


@pytest.fixture
def log():
    return HistoryLog(capacity=10)


@pytest.fixture
def jobs():
    table = JobTable()
    yield table
    for pid in list(table._jobs):
        proc, _ = table._jobs[pid]
        if proc.poll() is None:
            proc.kill()
            proc.wait()
