"""Watches the ngrok process for failure."""

from ..common.exceptions import NgrokWrapperError, ProcessError, ProcessExitError
from ..common.logging import ProgressLogger, get_progress_logger
from ..common.oneshot import OneShot
from .classifier import OutputClassifier, default_classifier
from .process import NgrokProcess


class ProcessWatcher:
    """Reports ngrok output or a non-zero exit as a failure.

    ngrok writes nothing to its diagnostic stream when it runs normally, so
    any captured bytes are classified and reported. Otherwise the watcher
    waits for the process and reports an abnormal exit status. A clean exit
    with no output is not a failure and produces no result.
    """

    def __init__(
        self,
        process: NgrokProcess,
        classifier: OutputClassifier | None = None,
        log: ProgressLogger | None = None,
    ):
        self.process = process
        self.classifier = classifier or default_classifier()
        self._log = log or get_progress_logger(__name__, verbose=False)

    def watch(self) -> NgrokWrapperError | None:
        """Block until ngrok closes its stream or exits.

        Returns:
            The failure observed, or None for a clean exit
        """
        stream = self.process.stderr
        if stream is None:
            return ProcessError("ngrok diagnostic stream is not captured")

        try:
            output = stream.read()
        except (OSError, ValueError) as e:
            return ProcessError(f"Failed to read ngrok output: {e}")
        finally:
            stream.close()

        if output:
            error = self.classifier.classify(output)
            self._log.warning("ngrok wrote unexpected output", error=str(error))
            return error

        returncode = self.process.wait()
        if returncode != 0:
            self._log.warning("ngrok exited", returncode=returncode)
            return ProcessExitError(returncode)
        self._log.debug("ngrok exited cleanly")
        return None

    def run(self, slot: OneShot) -> None:
        """Thread target: deliver a failure to ``slot`` if one occurs."""
        try:
            error = self.watch()
        except Exception as e:
            slot.fail(e)
            return
        if error is not None:
            slot.fail(error)
