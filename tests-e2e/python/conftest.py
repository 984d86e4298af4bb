"""Fixtures for tests that run real containers.

The runtime binary comes from ``RUNNER`` (docker by default), the same
setting ``Cli`` uses, so the suite can be pointed at podman.
"""

import subprocess

import pytest

from disposable import Cli
from disposable.config import container_runtime

IMAGES = ["alpine:latest", "python:3-alpine"]


@pytest.fixture(scope="session")
def runner():
    """Name of the container runtime, skipping the session if it is unusable."""
    binary = container_runtime()
    try:
        subprocess.run([binary, "info"], capture_output=True, check=True)
    except (subprocess.CalledProcessError, FileNotFoundError):
        pytest.skip(f"Container runtime {binary!r} not available")
    return binary


@pytest.fixture(scope="session")
def pulled_images(runner):
    for image in IMAGES:
        result = subprocess.run([runner, "pull", image], capture_output=True, text=True)
        if result.returncode != 0:
            pytest.skip(f"Could not pull {image}: {result.stderr.strip()}")
    return IMAGES


@pytest.fixture
def docker(runner, pulled_images, monkeypatch):
    monkeypatch.delenv("KEEP_CONTAINERS", raising=False)
    return Cli(runner=runner)
