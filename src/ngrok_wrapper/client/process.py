"""Process management for the ngrok binary."""

import shutil
import subprocess
import time
from enum import Enum
from typing import IO

from ..common.exceptions import BinaryNotFoundError, ProcessError
from ..common.logging import ProgressLogger, get_logger, get_progress_logger
from ..common.utils import validate_port

logger = get_logger(__name__)

# Seconds to wait for the kernel to reap ngrok after SIGKILL
KILL_WAIT_TIMEOUT = 1.0


class ShutdownState(str, Enum):
    """Stages of the escalating shutdown sequence."""

    RUNNING = "running"
    SIGNALED = "signaled"
    POLLING = "polling"
    FORCED = "forced"
    EXITED = "exited"


def find_binary(name: str) -> str:
    """Locate an executable on the system search path.

    Args:
        name: Executable name, e.g. "ngrok"

    Returns:
        Absolute path to the executable

    Raises:
        BinaryNotFoundError: If the executable is not on PATH
    """
    location = shutil.which(name)
    if location is None:
        raise BinaryNotFoundError(f"{name} not found in PATH")
    return location


class NgrokProcess:
    """Owns one ngrok child process: launch, status and shutdown."""

    def __init__(
        self,
        binary_path: str,
        port: int,
        protocol: str = "http",
        log: ProgressLogger | None = None,
    ):
        """Initialize NgrokProcess for one local port

        Args:
            binary_path: Path to the ngrok binary
            port: Local port to expose
            protocol: ngrok tunnel verb
            log: Progress logger, silent by default

        Raises:
            ValueError: If port is invalid
        """
        validate_port(port)
        self.binary_path = binary_path
        self.port = port
        self.protocol = protocol
        self._log = log or get_progress_logger(__name__, verbose=False)
        self._process: subprocess.Popen[bytes] | None = None
        self.shutdown_state = ShutdownState.RUNNING

    @property
    def args(self) -> list[str]:
        return [self.binary_path, self.protocol, str(self.port)]

    def start(self) -> None:
        """Start the ngrok process with its diagnostic stream captured

        Raises:
            ProcessError: If the process fails to start or was already started
        """
        if self._process is not None:
            raise ProcessError("ngrok process already started")

        self._log.info("Starting ngrok process", args=self.args)
        try:
            self._process = subprocess.Popen(
                self.args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            logger.error("Failed to start ngrok process", error=str(e))
            raise ProcessError(f"Failed to start ngrok process: {e}") from e
        self.shutdown_state = ShutdownState.RUNNING
        self._log.info("ngrok process started", pid=self._process.pid)

    @property
    def stderr(self) -> IO[bytes] | None:
        if self._process is None:
            return None
        return self._process.stderr

    @property
    def pid(self) -> int | None:
        """Get process ID if running"""
        if self.is_running() and self._process:
            return self._process.pid
        return None

    @property
    def returncode(self) -> int | None:
        if self._process is None:
            return None
        return self._process.poll()

    def is_running(self) -> bool:
        """Check if process is currently running"""
        if self._process is None:
            return False
        return self._process.poll() is None

    @property
    def exited(self) -> bool:
        """True once a started process has terminated."""
        return self._process is not None and self._process.poll() is not None

    def wait(self) -> int:
        """Block until the process exits and return its status.

        Raises:
            ProcessError: If the process was never started
        """
        if self._process is None:
            raise ProcessError("ngrok process not started")
        return self._process.wait()

    def stop(self, poll_interval: float = 0.2, retries: int = 20) -> ShutdownState:
        """Stop the process: signal, poll for exit, then force kill.

        Args:
            poll_interval: Seconds between exit checks
            retries: Exit checks before escalating to kill

        Returns:
            EXITED if the process was already gone, POLLING if it exited
            after the terminate signal, FORCED if it had to be killed

        Raises:
            ProcessError: If the process could not be killed
        """
        if self._process is None or self.exited:
            self.shutdown_state = ShutdownState.EXITED
            return self.shutdown_state

        self.shutdown_state = ShutdownState.SIGNALED
        self._log.info("Sending terminate signal to ngrok", pid=self._process.pid)
        self._process.terminate()

        self.shutdown_state = ShutdownState.POLLING
        for attempt in range(1, retries + 1):
            self._log.debug("Waiting for ngrok process to shut down", attempt=attempt)
            time.sleep(poll_interval)
            if self.exited:
                self._log.info("ngrok shutdown successful", attempts=attempt)
                return self.shutdown_state

        self.shutdown_state = ShutdownState.FORCED
        logger.warning(
            "ngrok did not terminate gracefully, force killing",
            pid=self._process.pid,
            retries=retries,
        )
        try:
            self._process.kill()
        except OSError as e:
            logger.error("Failed to kill ngrok process", error=str(e))
            raise ProcessError(f"Failed to kill ngrok process: {e}") from e

        # Reap the killed child
        try:
            self._process.wait(timeout=KILL_WAIT_TIMEOUT)
        except subprocess.TimeoutExpired:
            logger.error("ngrok process did not exit after kill", pid=self._process.pid)
        return self.shutdown_state
