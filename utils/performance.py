"""Stage timing utilities for the comparison pipeline."""
from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Generator, List

from utils.logging import logger


@dataclass
class Timing:
    name: str
    duration: float
    metadata: dict = field(default_factory=dict)


_timings: List[Timing] = []
_lock = threading.Lock()


@contextmanager
def track_time(name: str, **metadata) -> Generator[Timing, None, None]:
    """Context manager to track execution time of a pipeline stage."""
    timing = Timing(name=name, duration=0.0, metadata=metadata)
    start = time.perf_counter()
    try:
        yield timing
    finally:
        timing.duration = time.perf_counter() - start
        with _lock:
            _timings.append(timing)
        logger.debug("Timing: %s took %.3f seconds", name, timing.duration)


def get_timings() -> List[Timing]:
    """Get all recorded timings."""
    with _lock:
        return _timings.copy()


def clear_timings() -> None:
    """Clear recorded timings."""
    with _lock:
        _timings.clear()


def summarize_timings(timings: List[Timing] | None = None) -> Dict[str, float]:
    """Total duration per stage name, in seconds."""
    totals: Dict[str, float] = {}
    for timing in timings if timings is not None else get_timings():
        totals[timing.name] = totals.get(timing.name, 0.0) + timing.duration
    return totals
