"""Custom exceptions for ngrok wrapper."""


class NgrokWrapperError(Exception):
    """Base exception for all ngrok wrapper errors."""

    pass


class PreconditionError(NgrokWrapperError):
    """Raised when a tunnel cannot be opened in its current state."""

    pass


class NotAcceptedError(PreconditionError):
    """Raised when the ngrok terms of service have not been accepted.

    See https://ngrok.com/tos
    """

    def __init__(self, message: str = "Users have not accepted the ngrok terms of service"):
        super().__init__(message)


class ExistingTunnelError(PreconditionError):
    """Raised when another tunnel in this process is already online.

    ngrok refuses more than one simultaneous client session on free accounts,
    so only one tunnel may be open at a time.
    """

    def __init__(
        self, message: str = "Another ngrok tunnel in this process is already online"
    ):
        super().__init__(message)


class AlreadyOpenedError(PreconditionError):
    """Raised when open is called on a tunnel that is already open."""

    def __init__(self, message: str = "Tunnel already opened"):
        super().__init__(message)


class BinaryNotFoundError(NgrokWrapperError):
    """Raised when the ngrok binary is not found on the search path."""

    pass


class ProcessError(NgrokWrapperError):
    """Raised when ngrok process operations fail."""

    pass


class ProcessExitError(ProcessError):
    """Raised when the ngrok process exits with a non-zero status."""

    def __init__(self, returncode: int):
        self.returncode = returncode
        super().__init__(f"ngrok exited unexpectedly with status {returncode}")


class ProcessOutputError(ProcessError):
    """Raised when the ngrok process writes to its diagnostic stream."""

    pass


class TooManyConnectionsError(ProcessOutputError):
    """Raised when ngrok reports its simultaneous session limit.

    This generally means an ngrok process is already running elsewhere.
    """

    def __init__(
        self,
        message: str = (
            "ngrok cannot be started because there are too many "
            "simultaneous connections"
        ),
    ):
        super().__init__(message)


class UnexpectedOutputError(ProcessOutputError):
    """Raised when ngrok outputs text that matches no known failure."""

    def __init__(self, output: str):
        self.output = output
        super().__init__(f"ngrok output text unexpectedly. Text: {output}")


class MultipleTunnelsError(NgrokWrapperError):
    """Raised when the status API reports an unexpected number of tunnels.

    ngrok opens one http and one https tunnel per session, so any other
    non-zero count means another session is running or the report is partial.
    """

    def __init__(self, count: int):
        self.count = count
        super().__init__(
            f"More than one ngrok tunnel detected ({count} tunnel entries reported, "
            "expected 2)"
        )


class StartupTimeoutError(NgrokWrapperError):
    """Raised when ngrok neither connects nor fails within the timeout."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"ngrok startup timed out after {timeout:g}s")
