from __future__ import annotations

from charrain.config import RainConfig
from charrain.engine import Event
from charrain.ui.running import run_rain, terminal_size


class ScriptedEvents:
    def __init__(self, *events):
        self.events = list(events)

    def poll(self):
        return self.events.pop(0) if self.events else Event.NONE


class FakeClock:
    def __init__(self, step=0.0):
        self.now = 0.0
        self.step = step
        self.sleeps = []

    def __call__(self):
        self.now += self.step
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


def collect(frames):
    def sink(frame):
        frames.append((frame.rows, frame.columns, list(frame.glyphs)))

    return sink


def config():
    return RainConfig(seed=5).resolve()


def test_runs_for_max_frames():
    frames = []
    clock = FakeClock()
    drawn = run_rain(
        config(),
        sink=collect(frames),
        events=ScriptedEvents(),
        max_frames=5,
        size=lambda: (6, 8),
        sleep=clock.sleep,
        clock=clock,
    )
    assert drawn == 5
    assert len(frames) == 5
    assert all(f[:2] == (6, 8) for f in frames)


def test_paces_frames_on_the_clock():
    cfg = config()
    clock = FakeClock()
    run_rain(
        cfg,
        sink=lambda frame: None,
        events=ScriptedEvents(),
        max_frames=4,
        size=lambda: (6, 8),
        sleep=clock.sleep,
        clock=clock,
    )
    # no sleep after the last frame
    assert len(clock.sleeps) == 3
    assert all(abs(s - cfg.frame_delay) < 1e-9 for s in clock.sleeps)


def test_late_frames_do_not_sleep():
    clock = FakeClock(step=1.0)
    run_rain(
        config(),
        sink=lambda frame: None,
        events=ScriptedEvents(),
        max_frames=3,
        size=lambda: (6, 8),
        sleep=clock.sleep,
        clock=clock,
    )
    assert clock.sleeps == []


def test_resize_and_stop_events():
    sizes = iter([(6, 8), (4, 5)])
    frames = []
    clock = FakeClock()
    drawn = run_rain(
        config(),
        sink=collect(frames),
        events=ScriptedEvents(Event.NONE, Event.RESIZED, Event.NONE, Event.STOP),
        size=lambda: next(sizes),
        sleep=clock.sleep,
        clock=clock,
    )
    assert drawn == 3
    assert [f[:2] for f in frames] == [(6, 8), (4, 5), (4, 5)]


def test_terminal_size_is_rows_then_columns(monkeypatch):
    import os

    monkeypatch.setattr(
        "charrain.ui.running.get_terminal_size",
        lambda fallback=(80, 24): os.terminal_size((132, 43)),
    )
    assert terminal_size() == (43, 132)
