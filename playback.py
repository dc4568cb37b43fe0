"""
Run / pause / resume playback on top of VisualizerEngine.

The engine only knows how to take one step. Continuous running is done
here by asking the host for a timer (``schedule(delay_ms, callback)``
returning a handle, ``cancel(handle)``), which in the desktop app is
``widget.after`` / ``widget.after_cancel``. Only one timer is ever
pending, so only one step is ever in flight.
"""
import logging
from typing import Callable, List

from execution_state import ExecutionStatus
from snapshot import Snapshot
from visualizer_engine import VisualizerEngine

LOGGER = logging.getLogger(__name__)

DEFAULT_INTERVAL_MS = 600
MIN_INTERVAL_MS = 50


class PlaybackController:
    def __init__(self, engine: VisualizerEngine,
                 schedule: Callable[[int, Callable[[], None]], object],
                 cancel: Callable[[object], None],
                 interval_ms: int = DEFAULT_INTERVAL_MS):
        self.engine = engine
        self._schedule = schedule
        self._cancel = cancel
        self.interval_ms = max(int(interval_ms), MIN_INTERVAL_MS)
        self._timer = None
        self._playing = False
        self._paused = False
        self._listeners: List[Callable[[Snapshot], None]] = []
        self.snapshot: Snapshot = engine.get_current_state()

    # ── listeners ──

    def subscribe(self, listener: Callable[[Snapshot], None]):
        self._listeners.append(listener)

    def _publish(self, snapshot: Snapshot):
        self.snapshot = snapshot
        for listener in self._listeners:
            listener(snapshot)

    # ── state ──

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def status(self) -> ExecutionStatus:
        """Engine status, with PAUSED while playback is suspended mid-run."""
        status = self.engine.get_status()
        if self._paused and status in (ExecutionStatus.IDLE, ExecutionStatus.RUNNING):
            return ExecutionStatus.PAUSED
        return status

    @property
    def is_finished(self) -> bool:
        return self.engine.get_status() in (ExecutionStatus.COMPLETE, ExecutionStatus.ERROR)

    # ── commands ──

    def load(self, source: str):
        self._stop_timer()
        self._paused = False
        self.engine.load_source(source)
        self._publish(self.engine.get_current_state())

    def step(self) -> Snapshot:
        """Advance one line by hand. Pauses any running playback first."""
        if self._playing:
            self.pause()
        snapshot = self.engine.advance_one_step()
        self._publish(snapshot)
        return snapshot

    def run(self):
        if self._playing or self.is_finished:
            return
        self._playing = True
        self._paused = False
        LOGGER.debug("Playback started at %d ms per step", self.interval_ms)
        self._tick()

    def resume(self):
        self.run()

    def pause(self):
        if not self._playing:
            return
        self._stop_timer()
        self._paused = True

    def reset(self):
        self._stop_timer()
        self._paused = False
        self.engine.reset()
        self._publish(self.engine.get_current_state())

    def set_interval(self, interval_ms: int):
        self.interval_ms = max(int(interval_ms), MIN_INTERVAL_MS)

    # ── timer ──

    def _tick(self):
        self._timer = None
        if not self._playing:
            return
        snapshot = self.engine.advance_one_step()
        self._publish(snapshot)
        if self.is_finished:
            self._playing = False
            LOGGER.debug("Playback stopped: %s", self.engine.get_status().value)
            return
        self._timer = self._schedule(self.interval_ms, self._tick)

    def _stop_timer(self):
        self._playing = False
        if self._timer is not None:
            self._cancel(self._timer)
            self._timer = None
