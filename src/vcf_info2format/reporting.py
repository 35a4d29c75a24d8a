"""Progress reporters passed into the pipeline.

Reporters only observe a run; nothing they do changes which records are
processed or how.
"""

import logging

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

logger = logging.getLogger(__name__)

DEFAULT_REPORT_INTERVAL = 10_000


class ProgressReporter:
    """Base reporter: called at start, per record and at the end of a run."""

    def __init__(self, interval: int = DEFAULT_REPORT_INTERVAL):
        if interval <= 0:
            raise ValueError(f"Report interval must be positive, got {interval}")
        self.interval = interval

    def start(self) -> None:
        pass

    def record_processed(self, n_records: int) -> None:
        if n_records % self.interval == 0:
            self.report(n_records)

    def report(self, n_records: int) -> None:
        pass

    def finish(self, n_records: int) -> None:
        pass

    def stop(self) -> None:
        """Release any display resources; called on success and on failure."""
        pass


class NullReporter(ProgressReporter):
    """Reports nothing."""

    def record_processed(self, n_records: int) -> None:
        pass


class LoggingReporter(ProgressReporter):
    """Log progress every ``interval`` records at DEBUG level."""

    def report(self, n_records: int) -> None:
        logger.debug(" - %d processed", n_records)

    def finish(self, n_records: int) -> None:
        logger.info("Finished transferring fields for %d records", n_records)


class RichProgressReporter(LoggingReporter):
    """Show a rich spinner with the running record count."""

    def __init__(self, console: Console, interval: int = DEFAULT_REPORT_INTERVAL):
        super().__init__(interval)
        self.console = console
        self._progress: Progress | None = None
        self._task = None

    def start(self) -> None:
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )
        self._progress.start()
        self._task = self._progress.add_task("Transferring fields...", total=None)

    def report(self, n_records: int) -> None:
        super().report(n_records)
        if self._progress is not None:
            self._progress.update(
                self._task, completed=n_records, description=f"Processed {n_records:,} records"
            )

    def finish(self, n_records: int) -> None:
        self.stop()
        super().finish(n_records)

    def stop(self) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None
