"""Protocol interfaces for tunnel implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .models import Endpoint


@runtime_checkable
class TunnelerProtocol(Protocol):
    """Something that can open a tunnel to a local port and close it."""

    def open(self, port: int) -> list[Endpoint]:
        """Create and start the tunnel, returning its public endpoints."""
        ...

    def close(self) -> None:
        """Close the tunnel and clean up all associated resources."""
        ...
