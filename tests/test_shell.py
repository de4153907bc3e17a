"""Tests for the prompt loop."""

import os
import sys
import time
from unittest.mock import patch

from recallsh.errors import ReadInterrupted, SpawnError
from recallsh.history import HistoryLog
from recallsh.shell import Shell, prompt


class TestPrompt:
    def test_shows_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert prompt() == f"{tmp_path.resolve()}> "

    def test_unknown_directory(self):
        with patch("recallsh.shell.os.getcwd", side_effect=FileNotFoundError(2, "gone")):
            assert prompt() == "?> "


class TestExecute:
    def test_records_typed_lines(self, make_terminal, log, jobs):
        shell = Shell(make_terminal(), log, jobs)
        shell.execute("cd  /\n")
        shell.execute("pwd")
        assert [e.text for e in log.entries()] == ["cd /", "pwd"]

    def test_blank_line_does_nothing(self, make_terminal, log, jobs):
        term = make_terminal()
        shell = Shell(term, log, jobs)
        assert shell.execute("   ") is None
        assert log.total == 0
        assert term.output == ""

    def test_recall_runs_resolved_command(self, tmp_path, monkeypatch, make_terminal, log, jobs):
        monkeypatch.chdir(tmp_path)
        term = make_terminal()
        shell = Shell(term, log, jobs)
        shell.execute("pwd")
        assert shell.execute("!!") == 0

        assert term.output == f"{tmp_path.resolve()}\npwd\n{tmp_path.resolve()}\n"
        assert [(e.ordinal, e.text) for e in log.entries()] == [(1, "pwd"), (2, "pwd")]

    def test_failed_recall_is_reported(self, make_terminal, log, jobs):
        term = make_terminal()
        shell = Shell(term, log, jobs)
        assert shell.execute("!3") is None
        assert term.output == "recallsh: !3: event not found\n"
        assert log.total == 0

    def test_recall_of_evicted_entry(self, make_terminal, jobs):
        log = HistoryLog(capacity=10)
        for i in range(17):
            log.record(f"c{i + 1}")
        term = make_terminal()
        assert Shell(term, log, jobs).execute("!5") is None
        assert log.total == 17

    def test_unknown_command_keeps_going(self, make_terminal, log, jobs):
        term = make_terminal()
        shell = Shell(term, log, jobs)
        assert shell.execute("doesnotexist123 --flag") == 127
        assert shell.last_status == 127
        assert "doesnotexist123: Unknown command." in term.output
        assert log.last().text == "doesnotexist123 --flag"

    def test_background_line_logged_once(self, make_terminal, log, jobs):
        shell = Shell(make_terminal(), log, jobs)
        shell.execute(f"{sys.executable} -c pass &")
        assert log.last().text == f"{sys.executable} -c pass &"
        assert len(jobs) == 1


class TestUndecodableInput:
    def test_line_with_raw_byte_is_recorded(self, tmp_path, monkeypatch, make_terminal, log, jobs):
        monkeypatch.chdir(tmp_path)
        shell = Shell(make_terminal(), log, jobs)
        assert shell.execute("pwd \udcff") == 0
        assert log.last().rendered == b"1\tpwd \xff\n"

    def test_undecodable_read_is_not_fatal(self, make_terminal, log, jobs):
        bad = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        term = make_terminal([bad, "history", "exit"])
        assert Shell(term, log, jobs).run() == 0
        assert len(term.prompts) == 3
        assert term.output == "recallsh: cannot decode input line\n1\thistory\n"


class TestRun:
    def test_eof_ends_loop(self, make_terminal, log, jobs):
        term = make_terminal(["pwd"])
        assert Shell(term, log, jobs).run() == 0
        assert len(term.prompts) == 2

    def test_exit_builtin(self, make_terminal, log, jobs):
        term = make_terminal(["exit", "pwd"])
        assert Shell(term, log, jobs).run() == 0
        assert len(term.prompts) == 1
        assert log.last().text == "exit"

    def test_interrupted_read_is_retried(self, make_terminal, log, jobs):
        term = make_terminal([ReadInterrupted(), "history", "exit"])
        assert Shell(term, log, jobs).run() == 0
        assert len(term.prompts) == 3
        assert term.output == "1\thistory\n"

    def test_read_error_is_fatal(self, make_terminal, log, jobs, capsys):
        term = make_terminal([OSError(5, "Input/output error")])
        assert Shell(term, log, jobs).run() == 1
        assert "unable to read command" in capsys.readouterr().err

    def test_spawn_failure_is_fatal(self, make_terminal, log, jobs, capsys):
        term = make_terminal(["ls", "pwd"])
        with patch("recallsh.shell.run_external", side_effect=SpawnError("cannot create process")):
            assert Shell(term, log, jobs).run() == 1
        assert len(term.prompts) == 1
        assert "cannot create process" in capsys.readouterr().err

    def test_cd_failure_then_pwd(self, tmp_path, monkeypatch, make_terminal, log, jobs):
        monkeypatch.chdir(tmp_path)
        term = make_terminal(["cd /no/such/place", "pwd", "exit"])
        Shell(term, log, jobs).run()
        assert os.getcwd() == str(tmp_path.resolve())
        assert term.output.endswith(f"{tmp_path.resolve()}\n")
        assert "Invalid directory" in term.output

    def test_background_prompt_before_child_finishes(self, tmp_path, make_terminal, log, jobs):
        script = tmp_path / "sleeper.py"
        script.write_text("import time\ntime.sleep(3)\n")
        term = make_terminal([f"{sys.executable} {script} &", "jobs"])
        start = time.monotonic()
        Shell(term, log, jobs).run()
        assert time.monotonic() - start < 2
        assert len(term.prompts) == 3
        assert len(jobs) == 1
        assert "[" in term.output

    def test_finished_jobs_are_reported(self, make_terminal, log, jobs):
        term = make_terminal()
        shell = Shell(term, log, jobs)
        shell.execute(f"{sys.executable} -c pass &")
        proc, _ = next(iter(jobs._jobs.values()))
        proc.wait()
        shell.run()
        assert "Done" in term.output
        assert len(jobs) == 0
