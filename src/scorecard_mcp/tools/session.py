"""One-analysis-in-flight session policy."""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AnalysisSupersededError(Exception):
    """Raised to the caller whose analysis was cancelled by a newer request."""

    pass


class AnalysisSession:
    """
    Keeps at most one analysis in flight.

    Starting a new analysis never waits for the pending one: the pending
    task is cancelled and its caller receives AnalysisSupersededError. The
    latest request wins.
    """

    def __init__(self) -> None:
        self._current: asyncio.Task | None = None

    @property
    def in_flight(self) -> bool:
        return self._current is not None and not self._current.done()

    async def run(self, operation: Awaitable[T]) -> T:
        previous = self._current
        if previous is not None and not previous.done():
            logger.info("Cancelling in-flight analysis superseded by a new request")
            previous.cancel()

        task = asyncio.ensure_future(operation)
        self._current = task
        try:
            return await task
        except asyncio.CancelledError:
            # Cancelled by a newer run(), not by our own caller
            if task.cancelled() and self._current is not task:
                raise AnalysisSupersededError("Analysis superseded by a newer request") from None
            raise
        finally:
            if self._current is task:
                self._current = None


# Global instance
analysis_session = AnalysisSession()
