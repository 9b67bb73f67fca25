"""ngrok Python Wrapper - supervise an ngrok http tunnel from Python."""

# High-level API
from . import client  # For test access to client components
from .api import find_endpoint, managed_tunnel, open_tunnel

# Client functionality
from .client import (
    ConnectionPoller,
    Endpoint,
    HTTPTunnel,
    NgrokProcess,
    OutputClassifier,
    ProcessWatcher,
    TunnelerProtocol,
    TunnelGuard,
    TunnelSettings,
    default_guard,
)

# Common utilities
from .common.exceptions import (
    AlreadyOpenedError,
    BinaryNotFoundError,
    ExistingTunnelError,
    MultipleTunnelsError,
    NgrokWrapperError,
    NotAcceptedError,
    PreconditionError,
    ProcessError,
    ProcessExitError,
    ProcessOutputError,
    StartupTimeoutError,
    TooManyConnectionsError,
    UnexpectedOutputError,
)
from .common.logging import get_logger, setup_logging
from .common.utils import validate_port

# Setup logging on package initialization
setup_logging(level="INFO")

# Package level logger
logger = get_logger(__name__)

__version__ = "0.1.0"


__all__ = [
    # High-level API
    "open_tunnel",
    "managed_tunnel",
    "find_endpoint",
    # Tunnel management
    "HTTPTunnel",
    "TunnelerProtocol",
    "TunnelSettings",
    "TunnelGuard",
    "default_guard",
    "Endpoint",
    "ConnectionPoller",
    "ProcessWatcher",
    "NgrokProcess",
    "OutputClassifier",
    # Exceptions
    "NgrokWrapperError",
    "PreconditionError",
    "NotAcceptedError",
    "ExistingTunnelError",
    "AlreadyOpenedError",
    "BinaryNotFoundError",
    "ProcessError",
    "ProcessExitError",
    "ProcessOutputError",
    "TooManyConnectionsError",
    "UnexpectedOutputError",
    "MultipleTunnelsError",
    "StartupTimeoutError",
    # Utilities
    "get_logger",
    "setup_logging",
    "validate_port",
    "client",
]
