import pytest

import run


class FakeProcess:
    returncode = 1

    def __init__(self, args, **kwargs) -> None:
        self.args = args
        self.kwargs = kwargs
        self.terminated = False

    def poll(self):
        return self.returncode

    def terminate(self) -> None:
        self.terminated = True


def test_backend_output_not_captured(monkeypatch) -> None:
    started: list[FakeProcess] = []

    def fake_popen(args, **kwargs):
        proc = FakeProcess(args, **kwargs)
        started.append(proc)
        return proc

    monkeypatch.setattr(run.subprocess, "Popen", fake_popen)
    monkeypatch.setattr(run, "wait_for_backend", lambda url: False)

    with pytest.raises(SystemExit):
        run.main()

    (backend,) = started
    assert backend.args[-2:] == ["-m", "relay.main"]
    assert backend.kwargs.get("stdout") is None
    assert backend.kwargs.get("stderr") is None
    assert backend.terminated
