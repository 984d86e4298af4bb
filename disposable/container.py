"""Lifecycle of a single running container.

A ``Container`` is only ever handed out after its image reported it ready,
and it tears the underlying runtime container down exactly once when its
scope ends::

    docker = Cli()
    with docker.run(GenericImage("redis:7-alpine")) as redis:
        port = redis.get_host_port(6379)
        ...
    # stopped and removed here

Teardown removes the container unless ``KEEP_CONTAINERS=true`` is set in the
environment at that moment, in which case it is only stopped. Leaving the
``with`` block, calling ``close()``, the handle being garbage collected or
the interpreter exiting all trigger it; whichever comes first wins and the
rest are no-ops.
"""

import logging
import weakref
from typing import TYPE_CHECKING, Optional

from .config import keep_containers
from .errors import ReadinessFailure
from .image import Image
from .logs import Logs

if TYPE_CHECKING:
    from .client import Docker


def _teardown(client: "Docker", container_id: str) -> None:
    # Runs from weakref.finalize, possibly at interpreter exit, so it must
    # not raise and must not reference the Container itself.
    try:
        if keep_containers():
            logging.debug(f"KEEP_CONTAINERS is set, only stopping container {container_id}")
            client.stop(container_id)
        else:
            client.stop(container_id)
            client.rm(container_id)
    except Exception as e:
        logging.warning(f"Teardown of container {container_id} failed: {e}")


class Container:
    """A running container bound to the client that manages it."""

    def __init__(self, container_id: str, client: "Docker", image: Image) -> None:
        """Bind ``container_id`` to ``client`` and block until ``image`` says it is ready.

        Raises:
            ReadinessFailure: If ``image.wait_until_ready`` raised. The
                container has already been torn down when this propagates.
        """
        self._id = container_id
        self._client = client
        self._image = image
        self._finalizer = weakref.finalize(self, _teardown, client, container_id)

        self._block_until_ready()

    def __repr__(self) -> str:
        return f"Container(id={self._id!r}, image={self._image.descriptor()!r})"

    @property
    def id(self) -> str:
        return self._id

    @property
    def image(self) -> Image:
        """The image definition this container was started from."""
        return self._image

    @property
    def closed(self) -> bool:
        """True once teardown has run."""
        return not self._finalizer.alive

    def logs(self) -> Logs:
        return self._client.logs(self._id)

    def get_host_port(self, internal_port: int) -> Optional[int]:
        """Return the host port mapped to ``internal_port``, or None.

        This only looks up ports that are already exposed and published; it
        never exposes a port. A port the image does not expose resolves to
        None.
        """
        resolved_port = self._client.ports(self._id).map_to_host_port(internal_port)

        if resolved_port is not None:
            logging.debug(
                f"Resolved port {internal_port} to {resolved_port} for container {self._id}"
            )
        else:
            logging.warning(
                f"Unable to resolve port {internal_port} for container {self._id}"
            )

        return resolved_port

    def start(self) -> None:
        logging.debug(f"Starting container {self._id}")
        self._client.start(self._id)

    def stop(self) -> None:
        logging.debug(f"Stopping container {self._id}")
        self._client.stop(self._id)

    def rm(self) -> None:
        logging.debug(f"Deleting container {self._id}")
        self._client.rm(self._id)

    def close(self) -> None:
        """Tear the container down now. Later calls do nothing."""
        self._finalizer()

    def _block_until_ready(self) -> None:
        logging.debug(f"Waiting for container {self._id} to be ready")

        try:
            self._image.wait_until_ready(self)
        except Exception as e:
            logging.error(f"Container {self._id} failed its readiness check: {e}")
            self._finalizer()
            if isinstance(e, ReadinessFailure):
                raise
            raise ReadinessFailure(self._id, str(e)) from e

        logging.debug(f"Container {self._id} is now ready!")

    def __enter__(self) -> "Container":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False  # Don't suppress exceptions
