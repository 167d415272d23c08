"""
Runs the search engine on a dedicated worker thread.

The caller (e.g. a UI loop) submits a snapshot and keeps running; the result
arrives through a ``concurrent.futures.Future``. Cancellation is cooperative:
the engine stops after its current depth iteration, and the result is marked
canceled so a late delivery can be discarded.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

from tictactoe_mtdf.engine.mtdf import MtdfEngine, SearchResult
from tictactoe_mtdf.errors import InvalidStateError
from tictactoe_mtdf.game.snapshot import GameSnapshot

logger = logging.getLogger(__name__)


@dataclass
class ExecutorResult:
    """
    Result of a background search.

    The worker may finish at the same moment the caller cancels; such results
    are delivered with ``canceled`` set and should simply be dropped.
    """
    search: Optional[SearchResult] = None
    canceled: bool = False


class _SearchTask:
    def __init__(self, engine: MtdfEngine, snapshot: GameSnapshot):
        self.engine = engine
        self.snapshot = snapshot
        self.result = ExecutorResult()
        self.cancel_event = threading.Event()
        self.future: Optional[Future] = None

    def run(self) -> ExecutorResult:
        self.result.search = self.engine.search(self.snapshot, self.cancel_event)
        if self.result.search.canceled:
            self.result.canceled = True
        return self.result

    def cancel(self):
        self.cancel_event.set()
        self.result.canceled = True
        if self.future is not None:
            self.future.cancel()


class SearchExecutor:
    """
    Single-worker executor for ``MtdfEngine`` searches.

    Only one search may be outstanding at a time.
    """

    def __init__(self, engine: Optional[MtdfEngine] = None):
        self.engine = engine if engine is not None else MtdfEngine()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix='mtdf-search')
        self._task: Optional[_SearchTask] = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def busy(self) -> bool:
        return self._task is not None and not self._task.future.done()

    def submit(self, snapshot: GameSnapshot) -> 'Future[ExecutorResult]':
        """
        Start searching ``snapshot`` in the background.

        The snapshot is copied, so the caller may keep mutating its own.

        Returns:
            Future resolving to an ``ExecutorResult``
        """
        if self.busy:
            raise InvalidStateError("Only one search may be active at a time.")

        task = _SearchTask(self.engine, snapshot.copy())
        task.future = self._executor.submit(task.run)
        self._task = task
        logger.debug("Search submitted for %r", snapshot)
        return task.future

    def cancel(self):
        """Stop the current search and mark its result as canceled."""
        if self._task is not None:
            self._task.cancel()

    def close(self):
        """Cancel any running search and shut the worker down."""
        self.cancel()
        self._executor.shutdown(wait=True)
