#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Bounded-concurrency dispatch of per-file tasks.
"""

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from threading import BoundedSemaphore, Event, Lock
from typing import Callable, List, Sequence

from tqdm import tqdm

from ..config import DEFAULT_MAX_CONCURRENT, PERMIT_POLL_SECONDS
from ..models.candidate import CandidateFile
from ..models.outcome import Failure, FileOutcome, RunReport

logger = logging.getLogger(__name__)

Handler = Callable[[CandidateFile], FileOutcome]


class BoundedDispatcher:
    """
    Run ``handler`` once per candidate with at most ``max_concurrent`` admitted.

    A permit is taken from ``permits`` before a task is handed to the pool and
    the task gives it back when it finishes, whatever happens inside the
    handler. Only admitted tasks are ever queued, so a huge file tree never
    turns into a huge backlog of futures.

    ``stop()`` or a KeyboardInterrupt in the calling thread ends admission;
    files already admitted are allowed to finish, even through further
    interrupts, and the report is marked interrupted.
    """

    def __init__(self, handler: Handler, max_concurrent: int = DEFAULT_MAX_CONCURRENT,
                 show_progress: bool = True, poll_interval: float = PERMIT_POLL_SECONDS):
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")
        self.handler = handler
        self.max_concurrent = max_concurrent
        self.show_progress = show_progress
        self.poll_interval = poll_interval
        self.permits = BoundedSemaphore(max_concurrent)
        self._stop = Event()
        self._lock = Lock()
        self._outcomes: List[FileOutcome] = []

    def stop(self) -> None:
        """Request a cooperative stop: no further files are admitted."""
        self._stop.set()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def run(self, candidates: Sequence[CandidateFile]) -> RunReport:
        """Process every candidate and return once all admitted tasks are done."""
        report = RunReport(total=len(candidates))
        futures: List[Future] = []
        self._outcomes = []
        start_time = time.perf_counter()

        with tqdm(total=len(candidates), unit="file", desc="Sorting images",
                  disable=not self.show_progress) as progress:
            executor = ThreadPoolExecutor(max_workers=self.max_concurrent,
                                          thread_name_prefix="image-processor")
            try:
                self._admit(executor, candidates, futures, progress)
            finally:
                self._join(executor, futures)

        with self._lock:
            outcomes = list(self._outcomes)
        for outcome in outcomes:
            report.add(outcome)

        report.skipped = len(candidates) - len(outcomes)
        report.interrupted = self._stop.is_set()
        report.elapsed = time.perf_counter() - start_time
        if report.interrupted:
            logger.warning("Run interrupted: %d of %d files were not processed",
                           report.skipped, report.total)
        return report

    def _admit(self, executor: ThreadPoolExecutor, candidates: Sequence[CandidateFile],
               futures: List[Future], progress: tqdm) -> None:
        try:
            for candidate in candidates:
                if not self._acquire():
                    break
                try:
                    futures.append(executor.submit(self._run_task, candidate))
                except Exception:
                    self.permits.release()
                    raise
                futures[-1].add_done_callback(lambda _: progress.update(1))
        except KeyboardInterrupt:
            self._stop.set()
            logger.warning("Interrupted: waiting for %d admitted files to finish",
                           sum(1 for f in futures if not f.done()))

    def _join(self, executor: ThreadPoolExecutor, futures: List[Future]) -> None:
        """Wait for every admitted task. Further interrupts only mark the run stopped."""
        while True:
            try:
                wait(futures)
                executor.shutdown(wait=True)
                return
            except KeyboardInterrupt:
                self._stop.set()
                logger.warning("Interrupted again: still waiting for %d admitted files",
                               sum(1 for f in futures if not f.done()))

    def _acquire(self) -> bool:
        """Wait for a permit; False once a stop has been requested."""
        while not self._stop.is_set():
            if self.permits.acquire(timeout=self.poll_interval):
                return True
        return False

    def _run_task(self, candidate: CandidateFile) -> FileOutcome:
        # every admitted task records exactly one outcome, even on BaseException
        outcome = None
        try:
            outcome = self.handler(candidate)
        except Exception as e:
            logger.error("Error processing: %s - %s", candidate.path, e)
            logger.debug("Task failure details for %s", candidate.path, exc_info=True)
            outcome = _task_failure(candidate, e)
        except BaseException as e:
            logger.error("Task aborted: %s - %r", candidate.path, e)
            outcome = _task_failure(candidate, e)
            raise
        finally:
            if outcome is not None:
                with self._lock:
                    self._outcomes.append(outcome)
            self.permits.release()
        return outcome


def _task_failure(candidate: CandidateFile, exc: BaseException) -> FileOutcome:
    message = str(exc) or type(exc).__name__
    return FileOutcome(candidate, failure=Failure(candidate.path, "task", "unexpected", message))
