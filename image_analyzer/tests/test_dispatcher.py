#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tests for bounded-concurrency dispatch.
"""

import _thread
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from unittest.mock import patch

import pytest

from image_analyzer.models.candidate import CandidateFile
from image_analyzer.models.category import Category
from image_analyzer.models.outcome import Classification, FileOutcome
from image_analyzer.scanning.dispatcher import BoundedDispatcher


class CountingPermits:
    """Wraps the dispatcher's semaphore and records how many permits are out."""

    def __init__(self, inner, interrupt_on_call=None):
        self.inner = inner
        self.interrupt_on_call = interrupt_on_call
        self.calls = 0
        self.held = 0
        self.peak = 0
        self._lock = threading.Lock()

    def acquire(self, *args, **kwargs):
        self.calls += 1
        if self.interrupt_on_call is not None and self.calls == self.interrupt_on_call:
            raise KeyboardInterrupt
        acquired = self.inner.acquire(*args, **kwargs)
        if acquired:
            with self._lock:
                self.held += 1
                self.peak = max(self.peak, self.held)
        return acquired

    def release(self):
        with self._lock:
            self.held -= 1
        self.inner.release()


class InterruptAfterSubmit(ThreadPoolExecutor):
    """Raises KeyboardInterrupt right after the second task has been queued."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.submitted = 0

    def submit(self, *args, **kwargs):
        future = super().submit(*args, **kwargs)
        self.submitted += 1
        if self.submitted == 2:
            raise KeyboardInterrupt
        return future


def make_candidates(count):
    root = Path("/photos")
    return [CandidateFile(root / f"img_{i:04d}.jpg", Path(f"img_{i:04d}.jpg")) for i in range(count)]


def valid_outcome(candidate):
    return FileOutcome(candidate, classification=Classification(Category.VALID), target=candidate.path)


def instrument(dispatcher, **kwargs):
    permits = CountingPermits(dispatcher.permits, **kwargs)
    dispatcher.permits = permits
    return permits


class TestBoundedDispatcher:

    def test_processes_every_file(self):
        seen = []
        lock = threading.Lock()

        def handler(candidate):
            with lock:
                seen.append(candidate)
            return valid_outcome(candidate)

        candidates = make_candidates(50)
        report = BoundedDispatcher(handler, max_concurrent=4, show_progress=False).run(candidates)

        assert sorted(c.relative_path for c in seen) == sorted(c.relative_path for c in candidates)
        assert report.total == 50
        assert report.processed == 50
        assert report.count(Category.VALID) == 50
        assert report.moved == 50
        assert not report.interrupted

    def test_concurrency_ceiling_is_respected(self):
        active = 0
        peak = 0
        lock = threading.Lock()

        def handler(candidate):
            nonlocal active, peak
            with lock:
                active += 1
                peak = max(peak, active)
            time.sleep(0.005)
            with lock:
                active -= 1
            return valid_outcome(candidate)

        dispatcher = BoundedDispatcher(handler, max_concurrent=4, show_progress=False)
        permits = instrument(dispatcher)
        dispatcher.run(make_candidates(200))

        assert 1 <= peak <= 4
        assert permits.peak <= 4
        assert permits.held == 0

    def test_handler_errors_are_contained(self):
        def handler(candidate):
            if candidate.relative_path.name.endswith(("3.jpg", "7.jpg")):
                raise RuntimeError("boom")
            return valid_outcome(candidate)

        dispatcher = BoundedDispatcher(handler, max_concurrent=3, show_progress=False)
        permits = instrument(dispatcher)
        report = dispatcher.run(make_candidates(20))

        assert len(report.failures) == 4
        assert {f.stage for f in report.failures} == {"task"}
        assert {f.reason for f in report.failures} == {"unexpected"}
        assert report.count(Category.VALID) == 16
        assert permits.held == 0

    def test_stop_halts_admission(self):
        dispatcher = None

        def handler(candidate):
            dispatcher.stop()
            return valid_outcome(candidate)

        dispatcher = BoundedDispatcher(handler, max_concurrent=1, show_progress=False, poll_interval=0.01)
        report = dispatcher.run(make_candidates(10))

        assert report.interrupted
        assert report.skipped >= 8
        assert report.processed + report.skipped == report.total

    def test_keyboard_interrupt_while_waiting_for_permit(self):
        dispatcher = BoundedDispatcher(valid_outcome, max_concurrent=2, show_progress=False)
        permits = instrument(dispatcher, interrupt_on_call=3)

        report = dispatcher.run(make_candidates(10))

        assert dispatcher.stopped
        assert report.interrupted
        assert report.processed == 2
        assert report.skipped == 8
        assert report.count(Category.VALID) == 2
        assert permits.held == 0

    def test_interrupt_after_submit_keeps_queued_outcome(self):
        dispatcher = BoundedDispatcher(valid_outcome, max_concurrent=2, show_progress=False)
        permits = instrument(dispatcher)

        with patch("image_analyzer.scanning.dispatcher.ThreadPoolExecutor", InterruptAfterSubmit):
            report = dispatcher.run(make_candidates(10))

        assert report.interrupted
        assert report.processed == 2
        assert report.skipped == 8
        assert report.count(Category.VALID) == 2
        assert permits.held == 0

    def test_interrupt_during_final_join_keeps_report(self):
        both_started = threading.Barrier(2, timeout=5)

        def handler(candidate):
            both_started.wait()
            if candidate.relative_path.name == "img_0000.jpg":
                time.sleep(0.05)
                _thread.interrupt_main()
                time.sleep(0.05)
            return valid_outcome(candidate)

        dispatcher = BoundedDispatcher(handler, max_concurrent=2, show_progress=False)
        report = dispatcher.run(make_candidates(2))

        assert dispatcher.stopped
        assert report.interrupted
        assert report.processed == 2
        assert report.skipped == 0
        assert report.count(Category.VALID) == 2

    def test_system_exit_in_handler_is_recorded(self):
        def handler(candidate):
            if candidate.relative_path.name == "img_0002.jpg":
                raise SystemExit(3)
            return valid_outcome(candidate)

        dispatcher = BoundedDispatcher(handler, max_concurrent=2, show_progress=False)
        permits = instrument(dispatcher)
        report = dispatcher.run(make_candidates(5))

        assert not report.interrupted
        assert report.processed == 5
        assert report.count(Category.VALID) == 4
        (failure,) = report.failures
        assert (failure.stage, failure.reason, failure.message) == ("task", "unexpected", "3")
        assert failure.path == Path("/photos/img_0002.jpg")
        assert permits.held == 0

    def test_empty_input(self):
        report = BoundedDispatcher(valid_outcome, show_progress=False).run([])
        assert report.total == 0
        assert not report.interrupted

    def test_invalid_ceiling(self):
        with pytest.raises(ValueError):
            BoundedDispatcher(valid_outcome, max_concurrent=0)
