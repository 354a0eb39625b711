"""
Animated morphing between two Coordinate Sets.

The engine is a two-state machine (IDLE, ANIMATING). `start()` pads the
currently displayed coordinates up to the destination's shape and records the
start time; each `tick()` blends toward the destination with a quadratic
ease-out and either schedules the next tick or snaps to the destination.
"""
from __future__ import annotations
from copy import deepcopy
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from ..layout.stack import Boundary, Coord, CoordinateSet
from ..utils.fp import pad_to
from ..utils.log import get_logger
from ..utils.time import elapsed_ms, monotonic_ms
from .schedule import ManualScheduler, Scheduler

log = get_logger("streamstack.transition")

EMPTY_SAMPLE: Coord = (0.0, 0.5)
DEFAULT_TICK_MS = 20.0


class Phase(str, Enum):
    IDLE = "idle"
    ANIMATING = "animating"


@dataclass
class TransitionState:
    from_data: CoordinateSet
    destination: CoordinateSet
    start_ms: float
    duration_ms: float


# ---------- pure helpers ----------

def ease_out_quad(progress: float) -> float:
    p = min(1.0, max(0.0, float(progress)))
    return 1.0 - (1.0 - p) * (1.0 - p)


def pad_from(from_data: CoordinateSet, destination: CoordinateSet) -> CoordinateSet:
    """
    Grow `from_data` to the destination's boundary and sample counts.
    New boundaries are copies of boundary 0 added at the front; new samples
    repeat each boundary's last coordinate. Never shrinks.
    """
    frm: CoordinateSet = [list(b) for b in from_data]
    for _ in range(len(destination) - len(frm)):
        frm.insert(0, list(frm[0]) if frm else [])

    samples = len(destination[0]) if destination else 0
    padded: CoordinateSet = []
    for b in frm:
        last = b[-1] if b else EMPTY_SAMPLE
        padded.append(pad_to(b, samples, lambda last=last: last))
    return padded


def _shrink(boundary: Boundary, keep: float) -> Boundary:
    return [(x * keep, y * keep) for x, y in boundary]


def interpolate(from_data: CoordinateSet, destination: CoordinateSet, eased: float) -> CoordinateSet:
    """Blend every boundary of `from_data` toward its clamped destination counterpart."""
    keep = 1.0 - eased
    if not destination:
        return [_shrink(b, keep) for b in from_data]

    last_i = len(destination) - 1
    out: CoordinateSet = []
    for i, boundary in enumerate(from_data):
        dest = destination[min(i, last_i)]
        if not dest:
            out.append(_shrink(boundary, keep))
            continue
        last_j = len(dest) - 1
        row: Boundary = []
        for j, (x, y) in enumerate(boundary):
            dx, dy = dest[min(j, last_j)]
            row.append((x * keep + dx * eased, y * keep + dy * eased))
        out.append(row)
    return out


# ---------- engine ----------

class TransitionEngine:
    """
    Owns the displayed Coordinate Set of one graph instance.

    `on_commit` is called with no arguments after every change to `displayed`.
    Without a scheduler, ticks only happen when `tick()` is called.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], float] = monotonic_ms,
        scheduler: Optional[Scheduler] = None,
        tick_ms: float = DEFAULT_TICK_MS,
        on_commit: Optional[Callable[[], None]] = None,
    ) -> None:
        self._clock = clock
        self._scheduler = scheduler
        self._tick_ms = float(tick_ms)
        self._on_commit = on_commit
        self._displayed: CoordinateSet = []
        self._state: Optional[TransitionState] = None
        self._phase = Phase.IDLE
        # bumped on every start/assign so stale scheduled ticks are dropped
        self._generation = 0

    @property
    def displayed(self) -> CoordinateSet:
        return self._displayed

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def state(self) -> Optional[TransitionState]:
        return self._state

    def _commit(self, coords: CoordinateSet) -> None:
        self._displayed = coords
        if self._on_commit is not None:
            self._on_commit()

    def assign(self, destination: CoordinateSet) -> None:
        """Non-animated path: drop any running transition and show `destination`."""
        self._generation += 1
        self._state = None
        self._phase = Phase.IDLE
        self._commit(deepcopy(destination))

    def start(self, destination: CoordinateSet, duration_ms: float) -> None:
        """Begin a transition from whatever is displayed now; preempts a running one."""
        self._generation += 1
        dest = deepcopy(destination)
        self._state = TransitionState(
            from_data=pad_from(self._displayed, dest),
            destination=dest,
            start_ms=self._clock(),
            duration_ms=max(0.0, float(duration_ms)),
        )
        self._phase = Phase.ANIMATING
        log.debug(
            "transition started",
            extra={
                "from_boundaries": len(self._displayed),
                "to_boundaries": len(dest),
                "duration_ms": float(duration_ms),
            },
        )
        self.tick()

    def tick(self) -> Phase:
        state = self._state
        if self._phase is Phase.IDLE or state is None:
            return self._phase

        elapsed = elapsed_ms(state.start_ms, self._clock())
        if elapsed < state.duration_ms:
            progress = elapsed / state.duration_ms
            self._commit(interpolate(state.from_data, state.destination, ease_out_quad(progress)))
            self._schedule_next()
        elif elapsed == state.duration_ms:
            # full progress shows the destination itself; one more tick ends the run
            self._commit(deepcopy(state.destination))
            self._schedule_next()
        else:
            self._state = None
            self._phase = Phase.IDLE
            log.debug("transition finished", extra={"elapsed_ms": elapsed})
            self._commit(deepcopy(state.destination))
        return self._phase

    def _schedule_next(self) -> None:
        if self._scheduler is None:
            return
        generation = self._generation

        def _tick() -> None:
            if generation == self._generation:
                self.tick()

        self._scheduler.call_later(self._tick_ms, _tick)


def sample_frames(
    from_data: CoordinateSet,
    destination: CoordinateSet,
    duration_ms: float,
    step_ms: float = DEFAULT_TICK_MS,
) -> List[CoordinateSet]:
    """Run a transition on virtual time and return every committed frame, last one exact."""
    sched = ManualScheduler()
    frames: List[CoordinateSet] = []
    engine: TransitionEngine

    def _capture() -> None:
        frames.append(deepcopy(engine.displayed))

    engine = TransitionEngine(clock=sched.now, scheduler=sched, tick_ms=step_ms, on_commit=_capture)
    engine.assign(from_data)
    frames.clear()
    engine.start(destination, duration_ms)
    sched.run_until_idle()
    return frames
