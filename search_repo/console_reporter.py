"""Console reporter for CLI commands."""

from tqdm import tqdm

from search_repo.interfaces import IReporter


class ConsoleReporter(IReporter):
    """Print messages to stdout and show indexing progress with a tqdm bar.

    While the bar is shown, messages go through ``tqdm.write`` so the bar
    stays on its own line.
    """

    def __init__(self, *, unit: str = "doc", description: str | None = "Indexing") -> None:
        self._unit = unit
        self._description = description
        self._progress_bar: tqdm | None = None

    def on_message(self, *messages: str) -> None:
        for message in messages:
            if self._progress_bar is not None:
                tqdm.write(message)
            else:
                print(message)

    def on_input(self, message: str) -> str:
        return input(message).strip()

    def start_progress(self, total: int) -> None:
        self.stop_progress()
        self._progress_bar = tqdm(total=total, unit=self._unit, desc=self._description)

    def stop_progress(self) -> None:
        if self._progress_bar is not None:
            self._progress_bar.close()
            self._progress_bar = None

    def on_progress(self, value: int) -> None:
        if self._progress_bar is not None:
            self._progress_bar.update(value)
