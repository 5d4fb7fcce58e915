"""Tests for ResizeDebouncer and its schedulers."""

from __future__ import annotations

import time

import pytest

from ggraphs.services.resize_debouncer import ManualScheduler, ResizeDebouncer


def test_burst_collapses_to_single_commit():
    clock = ManualScheduler()
    hits = []
    deb = ResizeDebouncer(lambda: hits.append(clock.now_ms), 200, clock)
    for _ in range(10):
        deb.signal()
        clock.advance(20)
    assert hits == []
    assert deb.pending
    clock.advance(200)
    assert len(hits) == 1
    assert hits[0] == 180 + 200  # last-event-wins
    assert not deb.pending
    assert deb.signals == 10


def test_cancel_drops_pending_commit():
    clock = ManualScheduler()
    hits = []
    deb = ResizeDebouncer(lambda: hits.append(1), 100, clock)
    deb.signal()
    deb.cancel()
    clock.advance(500)
    assert hits == []
    assert clock.pending() == 0


def test_force_commit_runs_immediately_once():
    clock = ManualScheduler()
    hits = []
    deb = ResizeDebouncer(lambda: hits.append(1), 100, clock)
    deb.force_commit()
    assert hits == []
    deb.signal()
    deb.force_commit()
    assert hits == [1]
    clock.advance(500)
    assert hits == [1]


def test_manual_scheduler_runs_in_due_order():
    clock = ManualScheduler()
    order = []
    clock.call_later(30, lambda: order.append("b"))
    clock.call_later(10, lambda: order.append("a"))
    assert clock.advance(5) == 0
    assert clock.advance(100) == 2
    assert order == ["a", "b"]
    assert clock.now_ms == 105


def test_qt_timer_scheduler_fires_on_event_loop(qtbot):
    pytest.importorskip("PyQt6")
    from PyQt6.QtCore import QCoreApplication, QEventLoop, QTimer

    from ggraphs.services.resize_debouncer import QtTimerScheduler, default_scheduler

    assert isinstance(default_scheduler(), QtTimerScheduler)
    hits = []
    deb = ResizeDebouncer(lambda: hits.append(1), 20, QtTimerScheduler())
    deb.signal()
    deb.signal()
    loop = QEventLoop()
    QTimer.singleShot(150, loop.quit)
    loop.exec()
    QCoreApplication.processEvents()
    assert hits == [1]


def test_manual_scheduler_drops_cancelled_entries():
    clock = ManualScheduler()
    deb = ResizeDebouncer(lambda: None, 100, clock)
    for _ in range(50):
        deb.signal()
    assert clock.pending() == 1
    deb.cancel()
    assert clock.pending() == 0


def test_thread_timer_scheduler_commits_once():
    import threading

    from ggraphs.services.resize_debouncer import ThreadTimerScheduler

    fired = threading.Event()
    hits = []

    def commit():
        hits.append(1)
        fired.set()

    deb = ResizeDebouncer(commit, 30, ThreadTimerScheduler())
    for _ in range(5):
        deb.signal()
    assert fired.wait(2.0)
    time.sleep(0.1)
    assert hits == [1]
    assert not deb.pending


def test_stale_timer_callback_is_ignored():
    fired = []
    captured = []

    class Unstoppable:
        def cancel(self):
            pass

    class Capture:
        def call_later(self, delay_ms, callback):
            captured.append(callback)
            return Unstoppable()

    deb = ResizeDebouncer(lambda: fired.append(1), 10, Capture())
    deb.signal()
    deb.signal()
    captured[0]()  # superseded timer that could not be stopped in time
    assert fired == []
    assert deb.pending
    captured[1]()
    assert fired == [1]
