import subprocess

import pytest
from pgpull import ProcessFailedError
from pgpull._process import check_command, run_command


def test_run_command_captures_combined_output(fake_run):
    fake_run.respond("pg_dump", "pg_dump: error: connection refused\n", 1)

    output, returncode = run_command(["pg_dump", "-U", "u"], env={"A": "b"})

    assert output == "pg_dump: error: connection refused\n"
    assert returncode == 1
    (call,) = fake_run.calls
    assert call.cmd == ["pg_dump", "-U", "u"]
    assert call.env == {"A": "b"}
    assert call.kwargs["stderr"] == subprocess.STDOUT
    assert call.kwargs["stdout"] == subprocess.PIPE
    assert call.kwargs["check"] is False


def test_check_command_returns_output(fake_run):
    fake_run.respond("psql", "CREATE DATABASE\n")

    assert check_command(["psql", "-c", "CREATE DATABASE x;"]) == "CREATE DATABASE\n"


def test_check_command_raises_with_output_and_status(fake_run):
    fake_run.respond("pg_dump", "connection refused", 1)

    with pytest.raises(ProcessFailedError) as exc_info:
        check_command(["pg_dump"])

    err = exc_info.value
    assert err.returncode == 1
    assert err.output == "connection refused"
    assert err.cmd == "pg_dump"
    assert "status 1" in str(err)
    assert "connection refused" in str(err)


def test_missing_binary_propagates(monkeypatch: pytest.MonkeyPatch):
    def _not_found(cmd, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    monkeypatch.setattr(subprocess, "run", _not_found)

    with pytest.raises(FileNotFoundError):
        run_command(["heroku", "run"])


def test_command_is_logged_shell_quoted(fake_run, caplog: pytest.LogCaptureFixture):
    import logging

    with caplog.at_level(logging.INFO):
        run_command(["psql", "-c", "DROP DATABASE x;"], log_note="passing password")

    assert "Run psql -c 'DROP DATABASE x;' (passing password)" in caplog.text
