"""ngrok client components."""

from .classifier import (
    OutputClassifier,
    OutputPattern,
    classify_output,
    default_classifier,
)
from .config import TunnelSettings
from .discovery import ConnectionPoller
from .guard import TunnelGuard, default_guard
from .interfaces import TunnelerProtocol
from .models import ConnectionInfo, Endpoint, TunnelEntry, TunnelsResponse
from .process import NgrokProcess, ShutdownState, find_binary
from .tunnel import HTTPTunnel
from .watcher import ProcessWatcher

__all__ = [
    "HTTPTunnel",
    "TunnelerProtocol",
    "TunnelSettings",
    "TunnelGuard",
    "default_guard",
    "Endpoint",
    "ConnectionInfo",
    "TunnelEntry",
    "TunnelsResponse",
    "ConnectionPoller",
    "ProcessWatcher",
    "NgrokProcess",
    "ShutdownState",
    "find_binary",
    "OutputClassifier",
    "OutputPattern",
    "classify_output",
    "default_classifier",
]
