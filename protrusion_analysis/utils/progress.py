"""
Progress Bar Utility
"""

import sys
import time


class ProgressBar:
    """
    Progress over a batch of structures, written in place on one line.
    """

    def __init__(self, total: int, prefix: str = "Analyzing", length: int = 40, stream=None):
        """
        Args:
            total: Number of structures in the batch.
            prefix: Text shown before the bar.
            length: Character length of the bar.
            stream: Output stream, stderr by default.
        """
        self.total = max(total, 1)
        self.prefix = prefix
        self.length = length
        self.stream = stream or sys.stderr
        self.start_time = time.time()
        self.current = 0

    def advance(self, item: str = ""):
        """Marks one more structure as done."""
        self.current = min(self.current + 1, self.total)
        self.render(item)

    def render(self, item: str = ""):
        filled = int(self.length * self.current // self.total)
        bar = "█" * filled + "-" * (self.length - filled)

        elapsed = time.time() - self.start_time
        if self.current > 0:
            eta = (elapsed / self.current) * (self.total - self.current)
            eta_str = f"ETA: {eta:.1f}s"
        else:
            eta_str = "ETA: --"

        self.stream.write(
            f"\r{self.prefix} |{bar}| {self.current}/{self.total} {eta_str} {item}"
        )
        self.stream.flush()

    def finish(self):
        self.current = self.total
        self.render()
        self.stream.write("\n")
        self.stream.flush()
