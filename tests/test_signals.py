from __future__ import annotations

import signal

import pytest

from charrain.engine import Event
from charrain.ui.signals import SignalEvents


def test_poll_without_signals():
    assert SignalEvents().poll() is Event.NONE


def test_resize_is_reported_once():
    events = SignalEvents()
    events.request_resize()
    assert events.poll() is Event.RESIZED
    assert events.poll() is Event.NONE


def test_stop_sticks_and_wins_over_resize():
    events = SignalEvents()
    events.request_resize()
    events.request_stop()
    assert events.poll() is Event.STOP
    assert events.poll() is Event.STOP


def test_handler_translates_signals():
    events = SignalEvents()
    events._on_signal(signal.SIGTERM, None)
    assert events.poll() is Event.STOP


@pytest.mark.skipif(not hasattr(signal, "SIGWINCH"), reason="no SIGWINCH on this platform")
def test_handler_translates_resize():
    events = SignalEvents()
    events._on_signal(signal.SIGWINCH, None)
    assert events.poll() is Event.RESIZED


def test_handlers_are_restored():
    before = signal.getsignal(signal.SIGTERM)
    with SignalEvents() as events:
        assert signal.getsignal(signal.SIGTERM) == events._on_signal
    assert signal.getsignal(signal.SIGTERM) == before
