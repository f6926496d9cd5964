"""
Wall-clock timing for pipeline phases.
"""

import time
from contextlib import contextmanager
from typing import Dict, Iterator, Optional


class Timer:
    """
    Accumulating timer with named sections.

    Set ``sync_cuda=True`` when timing GPU work so queued kernels are
    finished before the clock is read.

    Examples
    --------
    >>> timer = Timer()
    >>> timer.start()
    >>> with timer.section('factorize'):
    ...     pass
    >>> timer.stop()
    >>> sorted(timer.result())
    ['factorize', 'total_seconds']
    """

    def __init__(self, sync_cuda: bool = False):
        self._sync_cuda = sync_cuda
        self._sections: Dict[str, float] = {}
        self._start_time: Optional[float] = None
        self._total: Optional[float] = None

    def _sync(self) -> None:
        if self._sync_cuda:
            import torch
            if torch.cuda.is_available():
                torch.cuda.synchronize()

    def start(self) -> None:
        self._sync()
        self._start_time = time.perf_counter()

    def stop(self) -> None:
        self._sync()
        if self._start_time is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._start_time

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time a named section (accumulates if entered twice)."""
        self._sync()
        start = time.perf_counter()
        try:
            yield
        finally:
            self._sync()
            elapsed = time.perf_counter() - start
            self._sections[name] = self._sections.get(name, 0.0) + elapsed

    def result(self) -> Dict[str, float]:
        """Section timings plus 'total_seconds'."""
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        result = {'total_seconds': self._total}
        result.update(self._sections)
        return result
