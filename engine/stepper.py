"""
stepper.py — Frame-Driven Playback Engine
==========================================
The Stepper is the ONLY object the UI interacts with during a run.
It owns the TripSynthesizer, the play-head and the playback state, and
is advanced by an external clock (a render loop, a timer, an HTTP poll).

State machine:
    IDLE     →  start()    →  PLAYING
    PLAYING  →  pause()    →  PAUSED
    PAUSED   →  resume()   →  PLAYING
    PLAYING  →  (trail done) → FINISHED
    FINISHED →  restart()  →  PLAYING   (replay only, no new search)
    any      →  clear()    →  IDLE

Frame contract:
  Each advance(now) performs up to `speed` synthesizer steps, then moves
  the play-head by the wall-clock delta since the previous frame.  The
  previous-frame timestamp is dropped on pause, resume, restart and
  clear, so the first frame after any of them adds nothing.

Thread safety:
  This class is NOT thread-safe.  Drive it from a single thread.
"""

import logging
import time
from enum import Enum
from typing import Callable, List, Optional

from config import Settings
from engine.state import PathfindingState
from engine.trips import TrailSegment, TripPhase, TripSynthesizer

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PLAYING  = "playing"
    PAUSED   = "paused"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (search advances per frame)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1,
    "medium": 5,
    "fast":   20,
    "turbo":  60,
}


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        search    : The PathfindingState being animated.
        settings  : Settings the next start() will use.
        trips     : TripSynthesizer holding the trail.
        status    : Current StepperState.
        time      : Play-head, ms on the trail timeline.
        on_frame  : Optional callback(Stepper) fired after every frame that ran.
    """

    def __init__(
        self,
        search: PathfindingState,
        settings: Optional[Settings] = None,
        on_frame: Optional[Callable[["Stepper"], None]] = None,
        clock: Callable[[], float] = _monotonic_ms,
    ):
        self.search:   PathfindingState = search
        self.settings: Settings         = settings or Settings()
        self.trips:    TripSynthesizer  = TripSynthesizer(search)
        self.status:   StepperState     = StepperState.IDLE
        self.time:     float            = 0.0
        self.on_frame: Optional[Callable[["Stepper"], None]] = on_frame

        self._clock = clock
        self._run_settings:  Settings        = self.settings
        self._previous_time: Optional[float] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, settings: Optional[Settings] = None) -> None:
        """Drop the old trail and start a fresh search."""
        if settings is not None:
            self.settings = settings
        self.clear()
        self._run_settings = self.settings.updated()
        self.search.start(self._run_settings.algorithm)
        self.status = StepperState.PLAYING

    def clear(self) -> None:
        """Back to IDLE with an empty trail.  Call start() to run again."""
        self.trips.clear()
        self.search.reset()
        self.time           = 0.0
        self.status         = StepperState.IDLE
        self._previous_time = None

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def pause(self) -> None:
        if self.status is StepperState.PLAYING:
            self.status = StepperState.PAUSED
        self._previous_time = None

    def resume(self) -> None:
        if self.status is StepperState.PAUSED:
            self.status = StepperState.PLAYING
        self._previous_time = None

    def restart(self) -> bool:
        """Replay a finished trail from the top.  Returns False if not finished."""
        if self.status is not StepperState.FINISHED:
            return False
        self.time = 0.0
        self.trips.rewind()
        self.status         = StepperState.PLAYING
        self._previous_time = None
        return True

    def toggle(self) -> None:
        if self.status is StepperState.FINISHED:
            self.restart()
        elif self.status is StepperState.PLAYING:
            self.pause()
        else:
            self.resume()

    # ------------------------------------------------------------------
    # Frame  (call this from your render loop)
    # ------------------------------------------------------------------
    def advance(self, now: Optional[float] = None) -> bool:
        """
        Run one frame.  `now` is a monotonic timestamp in ms; defaults to
        the stepper's clock.  Returns True if the frame did any work.
        """
        if self.status is not StepperState.PLAYING:
            return False
        if now is None:
            now = self._clock()

        run = self._run_settings
        for _ in range(run.speed):
            if self.trips.phase is TripPhase.DONE:
                break
            self.trips.step(self.time, run.route_multiplier)

        if self.trips.phase is TripPhase.DONE:
            self.status         = StepperState.FINISHED
            self._previous_time = None
            logger.info("Playback finished at %.0f ms", self.time)
        else:
            if self._previous_time is not None:
                self.time += max(0.0, now - self._previous_time)
            self._previous_time = now

        if self.on_frame is not None:
            self.on_frame(self)
        return True

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def segments(self) -> List[TrailSegment]:
        return self.trips.segments

    @property
    def timer(self) -> float:
        return self.trips.timer

    @property
    def is_playing(self) -> bool:
        return self.status is StepperState.PLAYING

    @property
    def is_finished(self) -> bool:
        return self.status is StepperState.FINISHED

    def visible_segments(self) -> List[TrailSegment]:
        return self.trips.visible_segments(self.time)

    def snapshot(self) -> dict:
        return {
            "status":    self.status.value,
            "phase":     self.trips.phase.value,
            "time":      self.time,
            "timer":     self.trips.timer,
            "segments":  len(self.trips.segments),
            "finished":  self.search.finished,
            "algorithm": self.search.algorithm_key,
            "settings":  self.settings.to_dict(),
        }
