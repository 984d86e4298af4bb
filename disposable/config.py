"""Settings read from the environment.

Values are looked up at the point of use and never cached, so tests can
change them between containers in the same process.
"""

import os
from typing import Mapping, Optional

KEEP_CONTAINERS = "KEEP_CONTAINERS"
RUNNER = "RUNNER"


def keep_containers(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Return True if containers should only be stopped, not removed, on teardown.

    Only the value ``true`` (any case) enables keeping. Anything else,
    including an unset variable, means remove.
    """
    if environ is None:
        environ = os.environ
    value = environ.get(KEEP_CONTAINERS)
    if value is None:
        return False
    return value.strip().lower() == "true"


def container_runtime(environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the container runtime binary (docker or podman)."""
    if environ is None:
        environ = os.environ
    return environ.get(RUNNER) or "docker"
