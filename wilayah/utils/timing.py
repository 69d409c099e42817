"""Timing utilities for pipeline stages."""
import time
from functools import wraps
from typing import Any, Callable, Dict, Optional
from wilayah.utils.logging import log_structured


def time_function(func: Callable) -> Callable:
    """Decorator logging how long a whole run took."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = time.perf_counter() - start

        log_structured(
            "info",
            f"Function {func.__name__} executed",
            function=func.__name__,
            elapsed_seconds=round(elapsed, 3)
        )

        return result
    return wrapper


class Timer:
    """
    Context manager timing one pipeline stage.

    Counts recorded inside the block with `record` are logged with the
    stage duration, so one line per stage says both how long it took and
    what it produced. A stage that raises is logged as failed with
    whatever it had recorded so far.
    """

    def __init__(self, stage: str, source: Optional[str] = None):
        """
        Initialize timer.

        Args:
            stage: Pipeline stage being timed (build, reconcile, match, emit)
            source: Name of the source the stage reads, if any
        """
        self.stage = stage
        self.source = source
        self.counts: Dict[str, Any] = {}
        self.start = None
        self.elapsed = None

    def record(self, **counts):
        """Attach stage output counts to the timing entry."""
        self.counts.update(counts)

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.elapsed = time.perf_counter() - self.start
        failed = exc_type is not None
        log_structured(
            "error" if failed else "info",
            f"Stage {self.stage} {'failed' if failed else 'completed'}",
            stage=self.stage,
            source=self.source,
            elapsed_seconds=round(self.elapsed, 3),
            **self.counts
        )
        return False
