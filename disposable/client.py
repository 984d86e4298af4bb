"""Runtime client interface.

A runtime client creates containers and performs operations on them by id.
``Cli`` drives the docker/podman command line; tests use an in-memory fake.
"""

import logging
from abc import ABC, abstractmethod

from .container import Container
from .image import Image
from .logs import Logs
from .ports import Ports


class Docker(ABC):
    """Operations a container runtime must provide.

    Every method may raise ``RuntimeCallFailure``. Implementations are
    shared by many containers and handle their own thread-safety.
    """

    def run(self, image: Image) -> Container:
        """Create a container from ``image`` and return it once it is ready.

        Blocks until ``image.wait_until_ready`` returns.
        """
        container_id = self.create(image)
        logging.debug(f"Created container {container_id} from {image.descriptor()}")
        return Container(container_id, self, image)

    @abstractmethod
    def create(self, image: Image) -> str:
        """Create and start a container from ``image``, returning its id."""

    @abstractmethod
    def start(self, container_id: str) -> None:
        pass

    @abstractmethod
    def stop(self, container_id: str) -> None:
        """Stop the container. Stopping a stopped container is not an error."""

    @abstractmethod
    def rm(self, container_id: str) -> None:
        """Remove the container and its anonymous volumes, stopping it first."""

    @abstractmethod
    def ports(self, container_id: str) -> Ports:
        pass

    @abstractmethod
    def logs(self, container_id: str) -> Logs:
        pass
