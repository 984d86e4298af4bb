"""Exceptions raised by disposable."""

from typing import List, Optional


class DisposableError(RuntimeError):
    """Base class for all disposable errors."""


class ReadinessFailure(DisposableError):
    """The readiness check of an image failed while constructing a container."""

    def __init__(self, container_id: str, message: str):
        super().__init__(f"Container {container_id} did not become ready: {message}")
        self.container_id = container_id


class RuntimeCallFailure(DisposableError):
    """A call to the container runtime failed."""

    def __init__(
        self,
        message: str,
        command: Optional[List[str]] = None,
        returncode: Optional[int] = None,
    ):
        super().__init__(message)
        self.command = command
        self.returncode = returncode


class WaitError(DisposableError):
    """A log stream ended before the awaited message appeared."""
