"""
FrameDebouncer — at most one pending unit of work per frame.

A new trigger cancels and replaces any job that has not run yet, so only
the latest of a burst survives. The pygame loop calls flush() once per
frame tick.
"""

from __future__ import annotations
import logging
from typing import Any, Callable, Optional, Tuple

logger = logging.getLogger(__name__)


class FrameDebouncer:

    def __init__(self, name: str = ""):
        self.name = name
        self._job: Optional[Tuple[Callable, tuple, dict]] = None
        self.dropped = 0    # jobs replaced before they ran

    @property
    def pending(self) -> bool:
        return self._job is not None

    def trigger(self, fn: Callable, *args, **kwargs):
        if self._job is not None:
            self.dropped += 1
            logger.debug("%s: pending job replaced (%d so far)", self.name, self.dropped)
        self._job = (fn, args, kwargs)

    def cancel(self):
        self._job = None

    def flush(self) -> Any:
        """Run the pending job, if any. Returns its result."""
        if self._job is None:
            return None
        fn, args, kwargs = self._job
        self._job = None
        return fn(*args, **kwargs)
