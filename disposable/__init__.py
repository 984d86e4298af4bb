"""disposable - Throwaway containers for integration tests"""

from .version import __version__
from .errors import DisposableError, ReadinessFailure, RuntimeCallFailure, WaitError
from .ports import Ports
from .logs import Logs, wait_for_message
from .image import Image, GenericImage, WaitFor
from .container import Container
from .client import Docker
from .cli import Cli

__all__ = [
    "__version__",
    # Lifecycle
    "Container",
    "Docker",
    "Cli",
    # Images
    "Image",
    "GenericImage",
    "WaitFor",
    # Connection details
    "Ports",
    "Logs",
    "wait_for_message",
    # Errors
    "DisposableError",
    "ReadinessFailure",
    "RuntimeCallFailure",
    "WaitError",
]
