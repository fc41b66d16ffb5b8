"""Console progress display driven by per-attempt notifications."""

import sys
from typing import Optional, TextIO

from ..core.models import AttemptResult


class ProgressDisplay:
    """
    Single-line progress bar redrawn on every completed attempt.

    When disabled, notifications are still accepted and counted but
    nothing is drawn.
    """

    BAR_WIDTH = 40

    def __init__(self, total: int, enabled: bool = True, stream: Optional[TextIO] = None):
        self.total = total
        self.enabled = enabled
        self.stream = stream or sys.stderr
        self.completed = 0
        self.failed = 0
        self.current_method: Optional[str] = None

    def start_method(self, method: str) -> None:
        self.current_method = method
        self._draw()

    def advance(self, result: AttemptResult) -> None:
        self.completed += 1
        if not result.success:
            self.failed += 1
        self._draw()

    def finish(self, message: str = "Testing completed!") -> None:
        if not self.enabled:
            return
        self.current_method = None
        self._draw()
        self.stream.write(f" {message}\n")
        self.stream.flush()

    def render(self) -> str:
        fraction = self.completed / self.total if self.total else 1.0
        filled = int(self.BAR_WIDTH * min(fraction, 1.0))
        bar = "█" * filled + "░" * (self.BAR_WIDTH - filled)
        line = f"[{bar}] {self.completed}/{self.total}"
        if self.failed:
            line += f" ({self.failed} failed)"
        if self.current_method:
            line += f" Running {self.current_method}"
        return line

    def _draw(self) -> None:
        if not self.enabled:
            return
        # Pad to clear leftovers from a longer previous line
        self.stream.write("\r" + self.render().ljust(self.BAR_WIDTH + 50))
        self.stream.flush()
