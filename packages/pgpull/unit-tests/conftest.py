from __future__ import annotations

import dataclasses as _dataclasses
import subprocess as _subprocess

import pytest


@_dataclasses.dataclass
class FakeCall:
    cmd: list[str]
    env: dict[str, str] | None
    kwargs: dict


class FakeSubprocessRun:
    """Stand-in for :func:`subprocess.run` answering by program name."""

    def __init__(self) -> None:
        self.calls: list[FakeCall] = []
        self._responses: dict[str, list[tuple[str, int]]] = {}

    def respond(self, program: str, output: str = "", returncode: int = 0) -> None:
        self._responses.setdefault(program, []).append((output, returncode))

    def __call__(self, cmd, **kwargs):
        cmd = list(cmd)
        self.calls.append(FakeCall(cmd=cmd, env=kwargs.get("env"), kwargs=kwargs))
        queue = self._responses.get(cmd[0], [])
        output, returncode = queue.pop(0) if len(queue) > 1 else (queue or [("", 0)])[0]
        return _subprocess.CompletedProcess(cmd, returncode, stdout=output)

    def programs(self) -> list[str]:
        return [call.cmd[0] for call in self.calls]

    def calls_of(self, program: str) -> list[FakeCall]:
        return [call for call in self.calls if call.cmd[0] == program]


@pytest.fixture
def fake_run(monkeypatch: pytest.MonkeyPatch) -> FakeSubprocessRun:
    fake = FakeSubprocessRun()
    monkeypatch.setattr(_subprocess, "run", fake)
    return fake
