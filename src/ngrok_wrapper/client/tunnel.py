"""ngrok HTTP tunnel lifecycle.

``HTTPTunnel.open`` launches ngrok and races three sources against each
other: the process watcher, the status API poller and a timeout. The first
one to settle decides the outcome. The losing workers are not interrupted;
their late results land in a queue nobody reads. ``HTTPTunnel.close`` tears
the process down with an escalating shutdown.
"""

import queue
import threading
from collections.abc import Callable
from types import TracebackType
from typing import Literal

from ..common.exceptions import (
    AlreadyOpenedError,
    ExistingTunnelError,
    NotAcceptedError,
    ProcessError,
    StartupTimeoutError,
)
from ..common.logging import get_logger, get_progress_logger
from ..common.oneshot import OneShot, Outcome
from ..common.utils import validate_port
from .classifier import OutputClassifier
from .config import TunnelSettings
from .discovery import ConnectionPoller
from .guard import TunnelGuard, default_guard
from .models import Endpoint
from .process import NgrokProcess, find_binary
from .watcher import ProcessWatcher

logger = get_logger(__name__)


class HTTPTunnel:
    """An ngrok http tunnel to one local port.

    Only one tunnel may be open per Python process; the shared guard enforces
    this across all instances. There is no finalizer, so ``close`` must be
    called explicitly or the tunnel used as a context manager.

    Example:
        >>> with HTTPTunnel(accepted_terms=True) as tunnel:
        ...     endpoints = tunnel.open(8080)
    """

    def __init__(
        self,
        accepted_terms: bool,
        verbose: bool = False,
        *,
        settings: TunnelSettings | None = None,
        guard: TunnelGuard | None = None,
        classifier: OutputClassifier | None = None,
    ):
        """Create a tunnel, ready to open.

        Args:
            accepted_terms: Acknowledges the ngrok terms of service
                (https://ngrok.com/tos); open refuses to run without it
            verbose: Log progress while opening and closing
            settings: Timings and locations, defaults to TunnelSettings()
            guard: Single tunnel guard, defaults to the process-wide guard
            classifier: Output classifier used by the process watcher
        """
        self.accepted_terms = accepted_terms
        self.verbose = verbose
        self.settings = settings or TunnelSettings()
        self._guard = guard if guard is not None else default_guard
        self._classifier = classifier
        self._log = get_progress_logger(__name__, verbose)

        self._lock = threading.Lock()
        self._opened = False
        self._process: NgrokProcess | None = None
        self._stop_event: threading.Event | None = None
        self._endpoints: list[Endpoint] = []

    @property
    def opened(self) -> bool:
        with self._lock:
            return self._opened

    @property
    def pid(self) -> int | None:
        """PID of the running ngrok process, if any."""
        with self._lock:
            process = self._process
        return process.pid if process else None

    @property
    def endpoints(self) -> list[Endpoint]:
        """Endpoints discovered by the last successful open."""
        with self._lock:
            return list(self._endpoints)

    def open(self, port: int) -> list[Endpoint]:
        """Start ngrok and wait for its public endpoints.

        Args:
            port: Local port to expose

        Returns:
            The discovered endpoints, one secure and one insecure

        Raises:
            ValueError: If port is invalid
            NotAcceptedError: If the terms have not been accepted
            ExistingTunnelError: If another tunnel is open in this process
            AlreadyOpenedError: If this tunnel is already open
            BinaryNotFoundError: If ngrok is not on PATH
            ProcessError: If ngrok fails to start, writes output or exits
            MultipleTunnelsError: If the status API reports anything but one
                http/https pair
            StartupTimeoutError: If nothing settles within the timeout
        """
        validate_port(port)
        self._claim()
        try:
            endpoints = self._start(port)
        except BaseException:
            self._abort()
            raise

        with self._lock:
            self._endpoints = list(endpoints)
        return endpoints

    def _claim(self) -> None:
        """Check preconditions and take the guard together with ``opened``."""
        with self._lock:
            if not self.accepted_terms:
                raise NotAcceptedError()
            if not self._guard.try_acquire(self):
                if self._guard.held_by(self):
                    raise AlreadyOpenedError()
                raise ExistingTunnelError()
            if self._opened:
                self._guard.release(self)
                raise AlreadyOpenedError()
            self._opened = True

    def _start(self, port: int) -> list[Endpoint]:
        log = self._log.bind(local_port=port)
        log.info("Searching for ngrok in PATH", name=self.settings.binary_name)
        binary_path = find_binary(self.settings.binary_name)
        log.info("ngrok found", path=binary_path)

        process = NgrokProcess(
            binary_path, port, protocol=self.settings.protocol, log=log
        )
        stop_event = threading.Event()
        with self._lock:
            self._process = process
            self._stop_event = stop_event
        process.start()

        results: queue.Queue[Outcome] = queue.Queue()
        watcher = ProcessWatcher(process, self._classifier, log)
        poller = ConnectionPoller(self.settings, stop_event, log)
        self._spawn("ngrok-watcher", watcher.run, OneShot("watcher", results))
        self._spawn("ngrok-poller", poller.run, OneShot("poller", results))

        timeout = self.settings.connection_timeout
        try:
            outcome = results.get(timeout=timeout)
        except queue.Empty:
            raise StartupTimeoutError(timeout) from None

        if outcome.failed:
            assert outcome.error is not None
            log.warning(
                "ngrok failed to start", source=outcome.source, error=str(outcome.error)
            )
            raise outcome.error

        if not self.opened:
            raise ProcessError("Tunnel was closed while opening")
        return list(outcome.value)

    @staticmethod
    def _spawn(name: str, target: Callable[[OneShot], None], slot: OneShot) -> None:
        thread = threading.Thread(target=target, args=(slot,), name=name, daemon=True)
        thread.start()

    def _abort(self) -> None:
        """Roll back a failed open and stop whatever it launched."""
        with self._lock:
            process, stop_event = self._process, self._stop_event
            self._process = None
            self._stop_event = None
            self._opened = False
            self._guard.release(self)

        if stop_event is not None:
            stop_event.set()
        if process is None:
            return
        try:
            process.stop(
                self.settings.terminate_poll_interval, self.settings.terminate_retries
            )
        except ProcessError as e:
            logger.error("Failed to stop ngrok after failed open", error=str(e))

    def close(self) -> None:
        """Stop ngrok, ending the tunnel. Safe to call multiple times.

        The guard is released before the process is stopped so a slow
        shutdown does not block tunnels opened elsewhere.

        Raises:
            ProcessError: If ngrok could not be killed
        """
        with self._lock:
            if not self._opened:
                self._log.debug("Close called and tunnel not open")
                return
            self._opened = False
            self._guard.release(self)
            process, stop_event = self._process, self._stop_event
            self._process = None
            self._stop_event = None
            self._endpoints = []

        if stop_event is not None:
            stop_event.set()
        if process is None:
            return
        state = process.stop(
            self.settings.terminate_poll_interval, self.settings.terminate_retries
        )
        self._log.info("ngrok tunnel closed", shutdown=state.value)

    def __enter__(self) -> "HTTPTunnel":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> Literal[False]:
        """Close the tunnel on context exit without suppressing exceptions."""
        try:
            self.close()
        except ProcessError as e:
            logger.error("Error during context exit", error=str(e))
            if exc_type is None:
                raise
        return False
