"""Runtime client driving the docker (or podman) command line."""

import json
import logging
import subprocess
from typing import Any, Dict, List, Optional

from .client import Docker
from .config import container_runtime
from .errors import RuntimeCallFailure
from .image import Image
from .logs import Logs
from .ports import Ports
from .version import __version__

MANAGED_LABEL = "disposable.managed=true"


class Cli(Docker):
    """Docker client implemented on top of the ``docker`` binary.

    The binary is taken from the ``RUNNER`` environment variable when not
    given explicitly, so ``RUNNER=podman`` switches runtimes.
    """

    def __init__(self, runner: Optional[str] = None) -> None:
        self.runner = runner or container_runtime()

    def __repr__(self) -> str:
        return f"Cli(runner={self.runner!r})"

    def build_run_args(self, image: Image) -> List[str]:
        """Build the ``docker run`` command line for ``image``."""
        logging.debug("Building run arguments")

        args = [
            self.runner,
            "run",
            "-d",
            "-P",
            f"--label={MANAGED_LABEL}",
            f"--label=disposable.version={__version__}",
        ]

        for key, value in image.env_vars().items():
            args.append(f"--env={key}={value}")
            logging.debug(f"  Setting: {key}={value}")

        for host_path, container_path in image.volumes().items():
            args.append(f"--volume={host_path}:{container_path}")
            logging.debug(f"  Volume: {host_path} -> {container_path}")

        for port in image.ports():
            args.append(f"--publish={port}")
            logging.debug(f"  Publishing port {port}")

        entrypoint = image.entrypoint()
        if entrypoint:
            args.extend(["--entrypoint", entrypoint])

        args.append(image.descriptor())
        args.extend(image.args())

        return args

    def _run_command(self, args: List[str]) -> str:
        logging.debug(f"Executing command: {' '.join(args)}")
        try:
            result = subprocess.run(args, capture_output=True, text=True, check=True)
        except subprocess.CalledProcessError as e:
            error_msg = f"Command {' '.join(args)} failed with exit code {e.returncode}"
            if e.stderr:
                error_msg += f": {e.stderr.strip()}"
            raise RuntimeCallFailure(error_msg, command=args, returncode=e.returncode) from e
        except FileNotFoundError:
            raise RuntimeCallFailure(
                f"Container runtime '{self.runner}' not found. Please install Docker or Podman.",
                command=args,
            ) from None
        return result.stdout

    def create(self, image: Image) -> str:
        output = self._run_command(self.build_run_args(image))
        container_id = output.strip()
        if not container_id:
            raise RuntimeCallFailure(f"No container id returned for image {image.descriptor()}")
        return container_id

    def start(self, container_id: str) -> None:
        self._run_command([self.runner, "start", container_id])

    def stop(self, container_id: str) -> None:
        self._run_command([self.runner, "stop", container_id])

    def rm(self, container_id: str) -> None:
        # -f stops a running container first, -v drops its anonymous volumes
        self._run_command([self.runner, "rm", "-f", "-v", container_id])

    def inspect(self, container_id: str) -> Dict[str, Any]:
        """Return the ``docker inspect`` document for the container."""
        output = self._run_command([self.runner, "inspect", container_id])
        try:
            return json.loads(output)[0]
        except (ValueError, IndexError) as e:
            raise RuntimeCallFailure(
                f"Unexpected inspect output for container {container_id}: {e}"
            ) from e

    def ports(self, container_id: str) -> Ports:
        return Ports.from_inspect(self.inspect(container_id))

    def logs(self, container_id: str) -> Logs:
        args = [self.runner, "logs", "-f", container_id]
        logging.debug(f"Streaming logs: {' '.join(args)}")
        try:
            process = subprocess.Popen(
                args,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except FileNotFoundError:
            raise RuntimeCallFailure(
                f"Container runtime '{self.runner}' not found. Please install Docker or Podman.",
                command=args,
            ) from None
        return Logs(process.stdout, process.stderr, process=process)
