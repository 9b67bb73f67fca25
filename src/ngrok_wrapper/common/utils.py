"""Utility functions for ngrok wrapper."""

# Port range constants
MIN_PORT = 1
MAX_PORT = 65535

SECURE_SCHEME = "https"


def validate_port(port: int, port_name: str = "Port") -> None:
    """Validate port number range.

    Args:
        port: Port number to validate
        port_name: Name of the port for error messages

    Raises:
        ValueError: If port is not in valid range (1-65535)
    """
    if (
        isinstance(port, bool)
        or not isinstance(port, int)
        or not (MIN_PORT <= port <= MAX_PORT)
    ):
        raise ValueError(f"{port_name} must be between {MIN_PORT} and {MAX_PORT}")


def is_secure_scheme(value: str) -> bool:
    """Return True if a protocol name or URL uses the secure scheme.

    Accepts either a bare protocol (``"https"``) as reported by the ngrok
    status API, or a full URL. The comparison is exact: ``"HTTPS"`` or a
    padded value is not secure.

    Args:
        value: Protocol name or URL

    Returns:
        True for https, False for anything else
    """
    scheme = value.split("://", 1)[0]
    return scheme == SECURE_SCHEME


def decode_output(output: bytes) -> str:
    """Decode raw process output for error messages and logging.

    Args:
        output: Bytes captured from a process stream

    Returns:
        Decoded text with undecodable bytes replaced and whitespace trimmed
    """
    return output.decode("utf-8", errors="replace").strip()
