import io

import pytest

from disposable import Docker, Image, Logs, Ports, RuntimeCallFailure


class FakeDocker(Docker):
    """In-memory runtime client that records every call it receives."""

    def __init__(self, mapping=None, stdout="", stderr=""):
        self.calls = []
        self.mapping = dict(mapping or {})
        self.stdout = stdout
        self.stderr = stderr
        self.failing = set()
        self._next_id = 0

    def _record(self, op, container_id):
        self.calls.append((op, container_id))
        if op in self.failing:
            raise RuntimeCallFailure(f"{op} failed for {container_id}")

    def create(self, image):
        self._next_id += 1
        container_id = f"fake{self._next_id}"
        self._record("create", container_id)
        return container_id

    def start(self, container_id):
        self._record("start", container_id)

    def stop(self, container_id):
        self._record("stop", container_id)

    def rm(self, container_id):
        self._record("rm", container_id)

    def ports(self, container_id):
        self._record("ports", container_id)
        return Ports(mapping=dict(self.mapping))

    def logs(self, container_id):
        self._record("logs", container_id)
        return Logs(io.StringIO(self.stdout), io.StringIO(self.stderr))

    def teardown_calls(self, container_id):
        return [
            call
            for call in self.calls
            if call in (("stop", container_id), ("rm", container_id))
        ]


class ReadyImage(Image):
    """Image that is ready as soon as it is asked."""

    def __init__(self, reference="fake:latest"):
        self.reference = reference
        self.checked = 0
        self.password = "secret"

    def descriptor(self):
        return self.reference

    def wait_until_ready(self, container):
        self.checked += 1


class FailingImage(Image):
    """Image whose readiness check raises the given exception."""

    def __init__(self, error):
        self.error = error

    def descriptor(self):
        return "broken:latest"

    def wait_until_ready(self, container):
        raise self.error


@pytest.fixture
def docker():
    return FakeDocker(mapping={80: 49153})


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the host environment out of the teardown policy."""
    monkeypatch.delenv("KEEP_CONTAINERS", raising=False)
    monkeypatch.delenv("RUNNER", raising=False)
