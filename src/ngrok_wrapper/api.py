"""High-level API for the ngrok wrapper.

This module provides simple, user-friendly functions for common tunneling tasks.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from .client.config import TunnelSettings
from .client.guard import TunnelGuard
from .client.models import Endpoint
from .client.tunnel import HTTPTunnel
from .common.logging import get_progress_logger


def open_tunnel(
    port: int,
    *,
    accepted_terms: bool,
    verbose: bool = False,
    settings: TunnelSettings | None = None,
    guard: TunnelGuard | None = None,
) -> tuple[HTTPTunnel, list[Endpoint]]:
    """Open an ngrok http tunnel to a local port.

    The caller owns the returned tunnel and must close it.

    Args:
        port: Local port to expose
        accepted_terms: Acknowledges the ngrok terms of service
        verbose: Log progress while opening and closing
        settings: Optional timings and locations
        guard: Optional single tunnel guard, defaults to the process-wide one

    Returns:
        tuple: The open tunnel and its public endpoints

    Example:
        >>> tunnel, endpoints = open_tunnel(8080, accepted_terms=True)
        >>> print(find_endpoint(endpoints).url)
        https://abc123.ngrok.io
        >>> tunnel.close()
    """
    tunnel = HTTPTunnel(accepted_terms, verbose, settings=settings, guard=guard)
    endpoints = tunnel.open(port)
    log = get_progress_logger(__name__, verbose)
    log.info(
        "Tunnel opened", local_port=port, urls=[endpoint.url for endpoint in endpoints]
    )
    return tunnel, endpoints


@contextmanager
def managed_tunnel(
    port: int,
    *,
    accepted_terms: bool,
    verbose: bool = False,
    settings: TunnelSettings | None = None,
    guard: TunnelGuard | None = None,
) -> Iterator[list[Endpoint]]:
    """Open an ngrok tunnel that is closed when the context exits.

    Args:
        port: Local port to expose
        accepted_terms: Acknowledges the ngrok terms of service
        verbose: Log progress while opening and closing
        settings: Optional timings and locations
        guard: Optional single tunnel guard, defaults to the process-wide one

    Yields:
        list[Endpoint]: The public endpoints of the tunnel

    Example:
        >>> with managed_tunnel(8080, accepted_terms=True) as endpoints:
        ...     print(find_endpoint(endpoints).url)
        https://abc123.ngrok.io
        # Tunnel is automatically closed here
    """
    tunnel, endpoints = open_tunnel(
        port,
        accepted_terms=accepted_terms,
        verbose=verbose,
        settings=settings,
        guard=guard,
    )
    log = get_progress_logger(__name__, verbose)
    with tunnel:
        try:
            yield endpoints
        finally:
            log.info("Managed tunnel closing", local_port=port)


def find_endpoint(endpoints: list[Endpoint], secure: bool = True) -> Endpoint:
    """Pick the secure (or insecure) endpoint from an open tunnel.

    Raises:
        LookupError: If no endpoint matches
    """
    for endpoint in endpoints:
        if endpoint.secure == secure:
            return endpoint
    kind = "secure" if secure else "insecure"
    raise LookupError(f"No {kind} endpoint among {len(endpoints)} endpoints")
