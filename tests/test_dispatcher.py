"""Tests for the fetch dispatcher."""

import threading
import time

from masjid_widgets.core.dispatcher import FetchDispatcher


def test_results_arrive_for_every_job():
    results = dict(FetchDispatcher().run({"a": lambda: 1, "b": lambda: 2}))

    assert results == {"a": 1, "b": 2}


def test_raising_job_yields_its_exception():
    def broken():
        raise RuntimeError("boom")

    results = dict(FetchDispatcher().run({"broken": broken}))

    assert isinstance(results["broken"], RuntimeError)


def test_wait_budget_drops_slow_jobs():
    release = threading.Event()

    def slow():
        release.wait(5)
        return "late"

    started = time.monotonic()
    try:
        results = list(FetchDispatcher().run({"fast": lambda: "ok", "slow": slow}, wait=0.3))
        elapsed = time.monotonic() - started
    finally:
        release.set()

    assert results == [("fast", "ok")]
    assert elapsed < 3
