from __future__ import annotations

import threading
import time
from datetime import timedelta

from textdesk.application.services.credential_store import CredentialStore
from textdesk.application.services.session_store import SessionStore
from textdesk.application.services.session_sweeper import SessionSweeper


class _CountingStore:
    def __init__(self) -> None:
        self.calls = 0
        self.swept = threading.Event()

    def sweep_expired(self) -> int:
        self.calls += 1
        self.swept.set()
        return 0


class _FailingStore:
    def sweep_expired(self) -> int:
        raise RuntimeError("storage unavailable")


def test_run_once_sweeps_expired(
    credentials: CredentialStore, sessions: SessionStore, clock
) -> None:
    user = credentials.create("alice", "secret1")
    stale = sessions.create(user.id)
    clock.advance(timedelta(days=6))
    fresh = sessions.create(user.id)
    clock.advance(timedelta(days=2))

    sweeper = SessionSweeper(sessions, interval_seconds=3600)

    assert sweeper.run_once() == 1
    assert sessions.count() == 1
    assert sessions.get(fresh) is not None
    assert sessions.get(stale) is None


def test_run_once_swallows_store_failures() -> None:
    sweeper = SessionSweeper(_FailingStore(), interval_seconds=3600)  # type: ignore[arg-type]

    assert sweeper.run_once() == 0


def test_background_loop_runs_and_stops() -> None:
    store = _CountingStore()
    sweeper = SessionSweeper(store, interval_seconds=0.01)  # type: ignore[arg-type]

    sweeper.start()
    try:
        assert store.swept.wait(timeout=2.0)
        assert sweeper.is_running
    finally:
        sweeper.stop(timeout=2.0)

    assert not sweeper.is_running
    calls = store.calls
    time.sleep(0.05)
    assert store.calls == calls


def test_start_and_stop_are_idempotent() -> None:
    sweeper = SessionSweeper(_CountingStore(), interval_seconds=3600)  # type: ignore[arg-type]

    sweeper.stop()
    sweeper.start()
    sweeper.start()
    assert sweeper.is_running

    sweeper.stop(timeout=2.0)
    sweeper.stop()
    assert not sweeper.is_running


def test_stop_does_not_wait_for_interval() -> None:
    sweeper = SessionSweeper(_CountingStore(), interval_seconds=3600)  # type: ignore[arg-type]
    sweeper.start()

    started = time.monotonic()
    sweeper.stop(timeout=2.0)

    assert time.monotonic() - started < 1.0
    assert not sweeper.is_running


class _BlockingStore:
    def __init__(self) -> None:
        self.entered = threading.Event()
        self.release = threading.Event()

    def sweep_expired(self) -> int:
        self.entered.set()
        self.release.wait(timeout=5.0)
        return 0


def test_restart_after_timed_out_stop_does_not_revive_old_loop() -> None:
    store = _BlockingStore()
    sweeper = SessionSweeper(store, interval_seconds=0.01)  # type: ignore[arg-type]

    sweeper.start()
    assert store.entered.wait(timeout=2.0)
    old_thread = sweeper._thread
    assert old_thread is not None

    # Sweep still in progress, so the join gives up
    sweeper.stop(timeout=0.01)
    sweeper.start()
    try:
        store.release.set()
        old_thread.join(timeout=2.0)
        assert not old_thread.is_alive()
        assert sweeper.is_running
    finally:
        sweeper.stop(timeout=2.0)
