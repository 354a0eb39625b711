from __future__ import annotations
from typing import Any, Callable, List, Optional
import numpy as np

from streamstack.anim.schedule import Scheduler
from streamstack.anim.transition import Phase, TransitionEngine
from streamstack.config_model.model import RootCfg
from streamstack.layout.baseline import BaselineSelector, resolve_mode
from streamstack.layout.dataset import Dataset, ShapeMismatch, default_dataset
from streamstack.layout.stack import CoordinateSet, build_target
from streamstack.utils.log import get_logger
from streamstack.utils.time import monotonic_ms


class StackedGraph:
    """
    One stacked graph: current Dataset, baseline mode and displayed geometry.

    Rendering is left to `on_draw`, a no-argument callable invoked after every
    committed Coordinate Set; it reads `coordinates` (and anything else it
    needs) from this object. Invalid Datasets are rejected with a warning and
    never raise out of the setters.
    """

    def __init__(
        self,
        data: Any = None,
        *,
        baseline: Optional[str] = None,
        cfg: Optional[RootCfg] = None,
        clock: Optional[Callable[[], float]] = None,
        scheduler: Optional[Scheduler] = None,
        on_draw: Optional[Callable[[], None]] = None,
    ) -> None:
        self.cfg = cfg or RootCfg()
        self.log = get_logger("streamstack.graph", self.cfg.logging.level, self.cfg.logging.structured_json)
        self.on_draw = on_draw
        self._mode = resolve_mode(baseline if baseline is not None else self.cfg.graph.baseline)

        if clock is None:
            clock = getattr(scheduler, "now", None) or monotonic_ms
        self._engine = TransitionEngine(
            clock=clock,
            scheduler=scheduler,
            tick_ms=self.cfg.graph.tick_ms,
            on_commit=self._draw,
        )
        self._selector = BaselineSelector()
        self._target: CoordinateSet = []

        ds = self._coerce(data) if data is not None else None
        self._install(ds if ds is not None else default_dataset())
        self.recompute(animated=False)

    # ---------- data ----------

    def _coerce(self, values: Any) -> Optional[Dataset]:
        try:
            return values if isinstance(values, Dataset) else Dataset(values)
        except ShapeMismatch as e:
            self.log.warning("dataset rejected", extra={"reason": str(e)})
            return None

    def _install(self, ds: Dataset) -> None:
        self._data = ds
        ds.derivatives  # computed once per Dataset
        self._selector.invalidate(ds)

    @property
    def data(self) -> Dataset:
        return self._data

    @data.setter
    def data(self, values: Any) -> None:
        self.set_data(values)

    def set_data(self, values: Any, *, animated: bool = True, duration_ms: Optional[float] = None) -> bool:
        """Replace the Dataset atomically. Returns False (and changes nothing) when it is rejected."""
        ds = self._coerce(values)
        if ds is None:
            return False
        self._install(ds)
        self.recompute(animated=animated, duration_ms=duration_ms)
        return True

    @property
    def dimension(self) -> int:
        return self._data.dimension if self._data.band_count else 0

    @property
    def band_count(self) -> int:
        return self._data.band_count

    @property
    def derivatives(self) -> np.ndarray:
        return self._data.derivatives

    # ---------- baseline ----------

    @property
    def baseline(self) -> str:
        return self._mode

    @baseline.setter
    def baseline(self, mode: str) -> None:
        self.set_baseline(mode)

    def set_baseline(self, mode: str, *, animated: bool = True, duration_ms: Optional[float] = None) -> None:
        self._mode = resolve_mode(mode)
        self.recompute(animated=animated, duration_ms=duration_ms)

    @property
    def baseline_curve(self) -> np.ndarray:
        return self._selector.curve(self._mode)

    # ---------- geometry ----------

    @property
    def coordinates(self) -> CoordinateSet:
        return self._engine.displayed

    @property
    def target(self) -> CoordinateSet:
        return self._target

    @property
    def phase(self) -> Phase:
        return self._engine.phase

    @property
    def engine(self) -> TransitionEngine:
        return self._engine

    def recompute(self, animated: bool = False, duration_ms: Optional[float] = None) -> CoordinateSet:
        """Rebuild the target geometry and show it, directly or through a transition."""
        self._target = build_target(self._data, self._selector.function(self._mode))
        self._show(self._target, animated, duration_ms)
        return self._target

    def clear(self, animated: bool = True, duration_ms: Optional[float] = None) -> None:
        """Collapse the displayed stack to nothing; the Dataset is kept."""
        self._target = []
        self._show(self._target, animated, duration_ms)

    def _show(self, target: CoordinateSet, animated: bool, duration_ms: Optional[float]) -> None:
        if animated:
            duration = self.cfg.graph.duration_ms if duration_ms is None else float(duration_ms)
            self._engine.start(target, duration)
        else:
            self._engine.assign(target)

    def tick(self) -> Phase:
        return self._engine.tick()

    def resize(self) -> None:
        """Re-render the current geometry (viewport changed, data did not)."""
        self._draw()

    def _draw(self) -> None:
        if self.on_draw is None:
            return
        try:
            self.on_draw()
        except Exception:
            self.log.exception("draw hook failed")

    def __repr__(self) -> str:
        return (
            f"StackedGraph(bands={self.band_count}, dimension={self.dimension}, "
            f"baseline={self._mode!r}, phase={self.phase.value})"
        )
