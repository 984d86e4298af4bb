"""Helpers for inspecting containers from integration tests."""

import subprocess
from typing import Optional

from disposable.config import container_runtime


def container_state(container_id: str) -> Optional[str]:
    """Return the container's state ("running", "exited", ...) or None if it is gone."""
    result = subprocess.run(
        [container_runtime(), "inspect", "--format", "{{.State.Status}}", container_id],
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        return None
    return result.stdout.strip()
