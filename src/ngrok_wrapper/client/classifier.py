"""Classification of unexpected ngrok output into known failures.

In its normal operation ngrok writes nothing to its diagnostic stream, so any
captured text is a failure. The classifier maps that text to the most
specific exception it recognises, falling back to ``UnexpectedOutputError``.
"""

from collections.abc import Callable
from dataclasses import dataclass

from ..common.exceptions import (
    NgrokWrapperError,
    TooManyConnectionsError,
    UnexpectedOutputError,
)
from ..common.utils import decode_output

TOO_MANY_CONNECTIONS_TEXT = "is limited to 1 simultaneous ngrok client session."

ErrorFactory = Callable[[str], NgrokWrapperError]


@dataclass(frozen=True)
class OutputPattern:
    """Substring to look for and the error it maps to."""

    substring: str
    factory: ErrorFactory

    def matches(self, text: str) -> bool:
        return self.substring in text


class OutputClassifier:
    """Ordered list of output patterns with a fallback."""

    def __init__(self, patterns: list[OutputPattern] | None = None):
        self._patterns: list[OutputPattern] = list(patterns or [])

    @property
    def patterns(self) -> list[OutputPattern]:
        return list(self._patterns)

    def register(self, substring: str, factory: ErrorFactory) -> "OutputClassifier":
        """Add a pattern checked after the ones already registered.

        Args:
            substring: Text that identifies the failure
            factory: Called with the full decoded output to build the error

        Returns:
            Self for method chaining
        """
        if not substring:
            raise ValueError("Pattern substring cannot be empty")
        self._patterns.append(OutputPattern(substring, factory))
        return self

    def classify(self, output: bytes) -> NgrokWrapperError:
        """Map captured process output to an exception.

        Args:
            output: Non-empty bytes read from the process

        Returns:
            The first matching pattern's error, else UnexpectedOutputError

        Raises:
            ValueError: If output is empty
        """
        if not output:
            raise ValueError("classify called with empty output")

        text = decode_output(output)
        for pattern in self._patterns:
            if pattern.matches(text):
                return pattern.factory(text)
        return UnexpectedOutputError(text)


def default_classifier() -> OutputClassifier:
    """Build a classifier that knows the ngrok failures seen in the wild."""
    return OutputClassifier().register(
        TOO_MANY_CONNECTIONS_TEXT, lambda _text: TooManyConnectionsError()
    )


def classify_output(output: bytes) -> NgrokWrapperError:
    """Classify output with the default patterns."""
    return default_classifier().classify(output)
