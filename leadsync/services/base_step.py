"""Base class for pipeline steps that report progress to the UI."""

from typing import Callable, Optional


class ProgressReporter:
    """Holds an optional progress callback shared by long-running steps."""

    def __init__(self, on_progress: Optional[Callable[[str], None]] = None):
        """
        Initialize the step.

        Args:
            on_progress: Optional callback for progress updates
        """
        self.on_progress = on_progress

    def report_progress(self, message: str) -> None:
        """Report progress to the UI if callback is set."""
        if self.on_progress:
            self.on_progress(message)
