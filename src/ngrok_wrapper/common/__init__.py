"""Common utilities and shared functionality."""

from .exceptions import (
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
from .logging import ProgressLogger, get_logger, get_progress_logger, setup_logging
from .oneshot import OneShot, Outcome
from .utils import (
    MAX_PORT,
    MIN_PORT,
    SECURE_SCHEME,
    decode_output,
    is_secure_scheme,
    validate_port,
)

__all__ = [
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
    # Logging
    "get_logger",
    "get_progress_logger",
    "setup_logging",
    "ProgressLogger",
    # Result slots
    "OneShot",
    "Outcome",
    # Utils
    "validate_port",
    "is_secure_scheme",
    "decode_output",
    "SECURE_SCHEME",
    "MIN_PORT",
    "MAX_PORT",
]
