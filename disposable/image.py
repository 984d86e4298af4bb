"""Image definitions.

An image definition describes how to launch a container (reference,
arguments, environment, volumes, published ports) and how to tell when the
service inside it is ready to be used.
"""

import copy
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional

if TYPE_CHECKING:
    from .container import Container


class Image(ABC):
    """Interface every image definition implements.

    Only ``descriptor`` and ``wait_until_ready`` are required; the remaining
    hooks default to "nothing extra".
    """

    @abstractmethod
    def descriptor(self) -> str:
        """Image reference passed to the runtime, e.g. ``redis:7-alpine``."""

    @abstractmethod
    def wait_until_ready(self, container: "Container") -> None:
        """Block until the service in ``container`` is usable.

        Implementations may query ``container.logs()`` or
        ``container.get_host_port()``. Raising signals that the container
        will never become ready.
        """

    def args(self) -> List[str]:
        return []

    def env_vars(self) -> Dict[str, str]:
        return {}

    def volumes(self) -> Dict[str, str]:
        return {}

    def entrypoint(self) -> Optional[str]:
        return None

    def ports(self) -> List[int]:
        """Internal ports to publish on top of those the image exposes."""
        return []


@dataclass(frozen=True)
class WaitFor:
    """Readiness strategy for images that need no custom logic."""

    kind: str = "nothing"
    message: str = ""
    seconds: float = 0.0

    @classmethod
    def nothing(cls) -> "WaitFor":
        return cls()

    @classmethod
    def stdout_message(cls, message: str) -> "WaitFor":
        return cls(kind="stdout", message=message)

    @classmethod
    def stderr_message(cls, message: str) -> "WaitFor":
        return cls(kind="stderr", message=message)

    @classmethod
    def duration(cls, seconds: float) -> "WaitFor":
        return cls(kind="duration", seconds=seconds)

    def wait(self, container: "Container") -> None:
        if self.kind == "nothing":
            return
        if self.kind == "duration":
            logging.debug(f"Sleeping {self.seconds}s for container {container.id}")
            time.sleep(self.seconds)
            return
        if self.kind not in ("stdout", "stderr"):
            raise ValueError(f"Unknown wait strategy: {self.kind}")

        logging.debug(
            f"Waiting for {self.kind} message {self.message!r} "
            f"from container {container.id}"
        )
        with container.logs() as logs:
            if self.kind == "stdout":
                logs.wait_for_stdout_message(self.message)
            else:
                logs.wait_for_stderr_message(self.message)


class GenericImage(Image):
    """Image definition built from plain values.

    The ``with_*`` methods return a modified copy, so a base definition can
    be shared between tests::

        redis = GenericImage("redis:7-alpine").with_wait_for(
            WaitFor.stdout_message("Ready to accept connections")
        )
    """

    def __init__(
        self,
        reference: str,
        wait_for: Optional[WaitFor] = None,
        args: Optional[List[str]] = None,
        env_vars: Optional[Dict[str, str]] = None,
        volumes: Optional[Dict[str, str]] = None,
        entrypoint: Optional[str] = None,
        ports: Optional[List[int]] = None,
    ) -> None:
        if not reference:
            raise ValueError("Image reference cannot be empty")
        self.reference = reference
        self.wait_for = wait_for or WaitFor.nothing()
        self._args = list(args or [])
        self._env_vars = dict(env_vars or {})
        self._volumes = dict(volumes or {})
        self._entrypoint = entrypoint
        self._ports = list(ports or [])

    def __repr__(self) -> str:
        return f"GenericImage({self.reference!r}, wait_for={self.wait_for!r})"

    def descriptor(self) -> str:
        return self.reference

    def wait_until_ready(self, container: "Container") -> None:
        self.wait_for.wait(container)

    def args(self) -> List[str]:
        return list(self._args)

    def env_vars(self) -> Dict[str, str]:
        return dict(self._env_vars)

    def volumes(self) -> Dict[str, str]:
        return dict(self._volumes)

    def entrypoint(self) -> Optional[str]:
        return self._entrypoint

    def ports(self) -> List[int]:
        return list(self._ports)

    def _copy(self) -> "GenericImage":
        image = copy.copy(self)
        image._args = list(self._args)
        image._env_vars = dict(self._env_vars)
        image._volumes = dict(self._volumes)
        image._ports = list(self._ports)
        return image

    def with_wait_for(self, wait_for: WaitFor) -> "GenericImage":
        image = self._copy()
        image.wait_for = wait_for
        return image

    def with_args(self, args: List[str]) -> "GenericImage":
        image = self._copy()
        image._args = list(args)
        return image

    def with_env_var(self, key: str, value: str) -> "GenericImage":
        image = self._copy()
        image._env_vars[key] = value
        return image

    def with_volume(self, host_path: str, container_path: str) -> "GenericImage":
        image = self._copy()
        image._volumes[host_path] = container_path
        return image

    def with_entrypoint(self, entrypoint: str) -> "GenericImage":
        image = self._copy()
        image._entrypoint = entrypoint
        return image

    def with_exposed_port(self, port: int) -> "GenericImage":
        image = self._copy()
        image._ports.append(port)
        return image
