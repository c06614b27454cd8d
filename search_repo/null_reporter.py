"""Reporter for library use and tests, where nothing is shown to a user."""

from search_repo.interfaces import IReporter
from search_repo.logging import get_logger

logger = get_logger(__name__)


class NullReporter(IReporter):
    """Discard messages and progress, and answer every prompt with ``answer``."""

    def __init__(self, answer: str = "") -> None:
        self._answer = answer

    def on_message(self, *messages: str) -> None:
        pass

    def on_input(self, message: str) -> str:
        logger.debug("Answering prompt %r with %r", message, self._answer)
        return self._answer

    def start_progress(self, total: int) -> None:
        pass

    def stop_progress(self) -> None:
        pass

    def on_progress(self, value: int) -> None:
        pass
