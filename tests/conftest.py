"""Shared pytest fixtures for ngrok wrapper tests."""

import io
import subprocess
import threading
from unittest.mock import Mock

import pytest

from ngrok_wrapper.client.config import TunnelSettings
from ngrok_wrapper.client.guard import TunnelGuard

NGROK_PATH = "/usr/local/bin/ngrok"

TWO_TUNNELS = [
    ("http://abc.example", "http"),
    ("https://abc.example", "https"),
]

THREE_TUNNELS = TWO_TUNNELS + [("https://def.example", "https")]


class FakeProcess:
    """Stand-in for subprocess.Popen with controllable exit behaviour.

    ``stderr`` is read to EOF immediately. ``wait`` blocks until the process
    is terminated, killed, or was created with a ``returncode``.
    """

    def __init__(
        self,
        stderr: bytes = b"",
        returncode: int | None = None,
        exits_on_terminate: bool = True,
    ):
        self.pid = 12345
        self.stderr = io.BytesIO(stderr)
        self.returncode = returncode
        self.exits_on_terminate = exits_on_terminate
        self._exited = threading.Event()
        if returncode is not None:
            self._exited.set()
        self.terminate = Mock(side_effect=self._on_terminate)
        self.kill = Mock(side_effect=self._on_kill)

    def _on_terminate(self) -> None:
        if self.exits_on_terminate:
            self._finish(-15)

    def _on_kill(self) -> None:
        self._finish(-9)

    def _finish(self, code: int) -> None:
        if self.returncode is None:
            self.returncode = code
        self._exited.set()

    def poll(self) -> int | None:
        return self.returncode

    def wait(self, timeout: float | None = None) -> int | None:
        if not self._exited.wait(timeout):
            raise subprocess.TimeoutExpired("ngrok", timeout or 0)
        return self.returncode


@pytest.fixture
def fast_settings():
    """Settings with millisecond timings so tests never wait on real delays."""
    return TunnelSettings(
        connection_timeout=2.0,
        initial_connection_wait=0,
        poll_interval=0.01,
        request_timeout=0.1,
        terminate_poll_interval=0.01,
        terminate_retries=5,
    )


@pytest.fixture
def guard():
    """A fresh guard per test, independent of the process-wide default."""
    return TunnelGuard()


@pytest.fixture
def ngrok_on_path(monkeypatch):
    """Pretend ngrok is installed.

    Returns:
        Mock: Mocked shutil.which
    """
    which = Mock(return_value=NGROK_PATH)
    monkeypatch.setattr("shutil.which", which)
    return which


@pytest.fixture
def fake_process():
    return FakeProcess()


@pytest.fixture
def mock_popen(monkeypatch, fake_process):
    """Mock subprocess.Popen to hand out ``fake_process``, then fresh fakes.

    Returns:
        Mock: Mocked Popen class
    """
    pending = [fake_process]

    def launch(*args, **kwargs):
        return pending.pop() if pending else FakeProcess()

    popen = Mock(side_effect=launch)
    monkeypatch.setattr("subprocess.Popen", popen)
    return popen


@pytest.fixture
def status_response():
    """Factory for mocked status API responses."""

    def make(tunnels: list[tuple[str, str]]) -> Mock:
        response = Mock()
        response.raise_for_status.return_value = None
        response.json.return_value = {
            "tunnels": [
                {"public_url": url, "proto": proto, "name": f"tunnel-{index}"}
                for index, (url, proto) in enumerate(tunnels)
            ]
        }
        return response

    return make


@pytest.fixture
def status_api(monkeypatch):
    """Mock requests.get as seen by the connection poller.

    Returns:
        Mock: Configure ``return_value`` or ``side_effect`` per test
    """
    get = Mock()
    monkeypatch.setattr("ngrok_wrapper.client.discovery.requests.get", get)
    return get


@pytest.fixture
def make_tunnel(fast_settings, guard):
    """Build tunnels that are always closed at teardown.

    Returns:
        Callable creating HTTPTunnel instances sharing the test guard
    """
    from ngrok_wrapper.client.tunnel import HTTPTunnel  # noqa: PLC0415

    created = []

    def make(accepted_terms: bool = True, verbose: bool = False, **kwargs):
        kwargs.setdefault("settings", fast_settings)
        kwargs.setdefault("guard", guard)
        tunnel = HTTPTunnel(accepted_terms, verbose, **kwargs)
        created.append(tunnel)
        return tunnel

    yield make

    for tunnel in created:
        tunnel.close()


@pytest.fixture(autouse=True)
def join_workers():
    """Let ngrok watcher and poller threads finish before the next test."""
    yield
    for thread in threading.enumerate():
        if thread.name.startswith("ngrok-"):
            thread.join(timeout=1.0)
