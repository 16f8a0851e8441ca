"""Shared fixtures for mlw tests."""

import itertools

import pytest


class FakeProcess:
    """Stands in for subprocess.Popen without starting anything."""

    _pids = itertools.count(1000)

    def __init__(self, args, **kwargs):
        self.args = list(args)
        self.kwargs = kwargs
        self.pid = next(self._pids)
        self.returncode = None
        self.terminated = False
        self.killed = False

    def poll(self):
        return self.returncode

    def terminate(self):
        self.terminated = True
        self.returncode = -15

    def kill(self):
        self.killed = True
        self.returncode = -9

    def wait(self, timeout=None):
        return self.returncode


class FakePopen:
    """Records every spawned FakeProcess."""

    def __init__(self):
        self.processes = []

    def __call__(self, args, **kwargs):
        process = FakeProcess(args, **kwargs)
        self.processes.append(process)
        return process

    @property
    def live(self):
        return [p for p in self.processes if p.returncode is None]


@pytest.fixture
def fake_popen():
    return FakePopen()


@pytest.fixture
def sleeper_script(tmp_path):
    """A shell script that idles until it is terminated."""
    script = tmp_path / "sleeper.sh"
    script.write_text("exec sleep 30\n")
    return script

