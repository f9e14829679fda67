# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import threading

from textdesk.application.services.session_store import SessionStore
from textdesk.shared.logging import logger


class SessionSweeper:
    """Recurring background task that reaps expired sessions.

    Runs on a daemon thread and sleeps on a stop event between passes, so
    ``stop()`` returns promptly instead of waiting out the interval.
    """

    def __init__(self, store: SessionStore, interval_seconds: float = 3600.0) -> None:
        self._store = store
        self._interval = max(0.01, float(interval_seconds))
        self._stop: threading.Event | None = None
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    def run_once(self) -> int:
        try:
            return self._store.sweep_expired()
        except Exception:
            logger.exception("sessions.sweeper: sweep failed")
            return 0

    def start(self) -> None:
        with self._lock:
            if self.is_running:
                return
            # Fresh event per thread so a stopped loop can never resume
            self._stop = threading.Event()
            self._thread = threading.Thread(
                target=self._run,
                args=(self._stop,),
                name="session-sweeper",
                daemon=True,
            )
            self._thread.start()
        logger.info(f"sessions.sweeper: start (interval={self._interval:.0f}s)")

    def stop(self, timeout: float | None = 5.0) -> None:
        with self._lock:
            thread, stop = self._thread, self._stop
            self._thread = self._stop = None
        if stop is not None:
            stop.set()
        if thread is None:
            return
        thread.join(timeout)
        logger.info("sessions.sweeper: stop")

    def _run(self, stop: threading.Event) -> None:
        while not stop.wait(self._interval):
            self.run_once()
