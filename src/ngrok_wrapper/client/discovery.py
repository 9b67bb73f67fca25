"""Connection discovery through the ngrok status API."""

import threading

import requests
from pydantic import ValidationError

from ..common.exceptions import MultipleTunnelsError
from ..common.logging import ProgressLogger, get_progress_logger
from ..common.oneshot import OneShot
from .config import TunnelSettings
from .models import ConnectionInfo, Endpoint, TunnelEntry, TunnelsResponse

# ngrok opens one http and one https tunnel per session.
EXPECTED_TUNNEL_COUNT = 2


class ConnectionPoller:
    """Polls the ngrok status API until the tunnel endpoints appear.

    The poller produces a single result: the discovered endpoints, or a
    ``MultipleTunnelsError`` when the API reports anything other than the
    http/https pair of one session. Only an empty report, a failed request
    or a malformed response is retried, until the stop event is set.
    """

    def __init__(
        self,
        settings: TunnelSettings | None = None,
        stop_event: threading.Event | None = None,
        log: ProgressLogger | None = None,
    ):
        self.settings = settings or TunnelSettings()
        self.stop_event = stop_event or threading.Event()
        self._log = log or get_progress_logger(__name__, verbose=False)

    def fetch_tunnels(self) -> list[TunnelEntry] | None:
        """Query the status API once.

        Returns:
            Reported tunnel entries, or None if the request failed or the
            response could not be parsed
        """
        url = self.settings.status_url
        self._log.debug("Requesting ngrok status API", url=url)
        try:
            response = requests.get(url, timeout=self.settings.request_timeout)
            response.raise_for_status()
            body = TunnelsResponse.model_validate(response.json())
        except requests.RequestException as e:
            self._log.debug("ngrok status request failed, retrying", error=str(e))
            return None
        except (ValidationError, ValueError) as e:
            self._log.debug("Malformed ngrok status response, retrying", error=str(e))
            return None
        return body.tunnels

    def evaluate(self, entries: list[TunnelEntry]) -> ConnectionInfo | None:
        """Decide whether a status report settles discovery.

        Returns:
            ConnectionInfo on success or ambiguity, None to keep polling
        """
        count = len(entries)
        if count == 0:
            self._log.debug("Tunnel not established yet", tunnels=count)
            return None
        if count == EXPECTED_TUNNEL_COUNT:
            endpoints = [Endpoint.from_entry(entry) for entry in entries]
            for endpoint in endpoints:
                self._log.info(
                    "ngrok tunnel established",
                    url=endpoint.url,
                    secure=endpoint.secure,
                )
            return ConnectionInfo(endpoints=endpoints)
        return ConnectionInfo(error=MultipleTunnelsError(count))

    def discover(self) -> ConnectionInfo | None:
        """Poll until the tunnel is discovered or the poller is stopped.

        Returns:
            ConnectionInfo, or None if stopped before a result
        """
        if self.stop_event.wait(self.settings.initial_connection_wait):
            return None

        first_run = True
        while True:
            if not first_run and self.stop_event.wait(self.settings.poll_interval):
                return None
            first_run = False

            if self.stop_event.is_set():
                return None
            entries = self.fetch_tunnels()
            if entries is None:
                continue
            info = self.evaluate(entries)
            if info is not None:
                return info

    def run(self, slot: OneShot) -> None:
        """Thread target: discover and deliver the single result to ``slot``."""
        try:
            info = self.discover()
        except Exception as e:
            slot.fail(e)
            return
        if info is None:
            self._log.debug("Connection discovery stopped")
            return
        if info.ok:
            slot.send(info.endpoints)
        else:
            assert info.error is not None
            slot.fail(info.error)
