"""Log streams of a container."""

import logging
import subprocess
import threading
import weakref
from typing import IO, Optional

from .errors import WaitError


def wait_for_message(stream: IO[str], message: str) -> int:
    """Block until a line containing ``message`` is read from ``stream``.

    Returns the number of lines consumed, including the matching one.

    Raises:
        WaitError: If the stream ends before the message shows up
    """
    number_of_lines = 0
    for line in stream:
        number_of_lines += 1
        if message in line:
            logging.debug(f"Found message after {number_of_lines} lines")
            return number_of_lines

    raise WaitError(
        f"End of stream reached after {number_of_lines} lines "
        f"without finding message: {message!r}"
    )


def _drain(stream: IO[str]) -> None:
    # Discard output so the writer never blocks on a full pipe.
    try:
        for _line in stream:
            pass
    except (ValueError, OSError):
        # Stream closed underneath us by Logs.close()
        pass


def _release(
    process: Optional[subprocess.Popen], stdout: IO[str], stderr: IO[str]
) -> None:
    if process is not None and process.poll() is None:
        process.terminate()
        process.wait()
    stdout.close()
    stderr.close()


class Logs:
    """The stdout and stderr streams of a container.

    When backed by a process (``docker logs -f``), closing the Logs
    terminates that process. Use it as a context manager; an unclosed Logs
    is released when it is garbage collected or at interpreter exit.

    Waiting on one stream of a process-backed Logs discards the other one
    from then on, since an unread pipe would eventually stall the process.
    """

    def __init__(
        self,
        stdout: IO[str],
        stderr: IO[str],
        process: Optional[subprocess.Popen] = None,
    ) -> None:
        self.stdout = stdout
        self.stderr = stderr
        self._process = process
        self._draining: Optional[threading.Thread] = None
        self._finalizer = weakref.finalize(self, _release, process, stdout, stderr)

    @property
    def closed(self) -> bool:
        return not self._finalizer.alive

    def _drain_in_background(self, stream: IO[str]) -> None:
        if self._process is None or self._draining is not None:
            return
        self._draining = threading.Thread(target=_drain, args=(stream,), daemon=True)
        self._draining.start()

    def wait_for_stdout_message(self, message: str) -> int:
        self._drain_in_background(self.stderr)
        return wait_for_message(self.stdout, message)

    def wait_for_stderr_message(self, message: str) -> int:
        self._drain_in_background(self.stdout)
        return wait_for_message(self.stderr, message)

    def close(self) -> None:
        self._finalizer()

    def __enter__(self) -> "Logs":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False
