from .schedule import Scheduler, AsyncioScheduler, ManualScheduler
from .transition import (
    Phase,
    TransitionState,
    TransitionEngine,
    ease_out_quad,
    pad_from,
    interpolate,
    sample_frames,
)

__all__ = [
    "Scheduler", "AsyncioScheduler", "ManualScheduler",
    "Phase", "TransitionState", "TransitionEngine",
    "ease_out_quad", "pad_from", "interpolate", "sample_frames",
]
