"""
Baseline placement for a stacked graph.

Every mode yields the bottom boundary of the stack, one scalar per sample:

- ``zero``      classic stacked area, stack starts at 0
- ``theme``     ThemeRiver: stack centered on 0, g0 = -1/2 * sum(f_i)
- ``wiggle``    minimizes the summed squared slope of every boundary,
                g0' = -1/(n+1) * sum_i (n - i) * f_i'
- ``weighted``  minimizes slope weighted by band thickness (Byron & Wattenberg),
                g0' = -sum_i (sum_{j<=i} f_j' - f_i'/2) * f_i / sum_i f_i

The two wiggle modes integrate g0' with a running sum starting at sample 0,
so g0[0] == g0'[0].
"""
from __future__ import annotations
from typing import Callable, Dict, Optional
import numpy as np

from ..utils.log import get_logger
from .dataset import Dataset

log = get_logger("streamstack.baseline")

BaselineFn = Callable[[int], float]

MODES = ("zero", "theme", "wiggle", "weighted")

_ALIASES: Dict[str, str] = {
    "zero": "zero",
    "default": "zero",
    "theme": "theme",
    "themeriver": "theme",
    "wiggle": "wiggle",
    "weighted": "weighted",
    "weightedwiggle": "weighted",
}


def resolve_mode(name: Optional[str]) -> str:
    """Map a user-facing mode name to one of MODES; unknown names give 'zero'."""
    key = (name or "").strip().lower()
    mode = _ALIASES.get(key)
    if mode is None:
        log.debug("unknown baseline mode, using zero", extra={"baseline": name})
        return "zero"
    return mode


# ---------- pure curve functions ----------

def zero_baseline(values: np.ndarray, derivatives: Optional[np.ndarray] = None) -> np.ndarray:
    return np.zeros(np.asarray(values).shape[1], dtype=float)

def theme_river_baseline(values: np.ndarray, derivatives: Optional[np.ndarray] = None) -> np.ndarray:
    return -0.5 * np.asarray(values, dtype=float).sum(axis=0)

def wiggle_baseline(values: np.ndarray, derivatives: np.ndarray) -> np.ndarray:
    d = np.asarray(derivatives, dtype=float)
    n = d.shape[0]
    # depth from the top: band 0 carries weight n, the top band weight 1
    weights = np.arange(n, 0, -1, dtype=float).reshape(n, 1)
    dg0 = -(weights * d).sum(axis=0) / float(n + 1)
    return np.cumsum(dg0)

def weighted_wiggle_baseline(values: np.ndarray, derivatives: np.ndarray) -> np.ndarray:
    f = np.asarray(values, dtype=float)
    d = np.asarray(derivatives, dtype=float)
    sfi = f.sum(axis=0)
    sdfj = np.cumsum(d, axis=0)
    num = ((sdfj - d / 2.0) * f).sum(axis=0)
    safe = np.where(sfi == 0.0, 1.0, sfi)
    g0prime = np.where(sfi == 0.0, 0.0, -num / safe)
    return np.cumsum(g0prime)


_CURVES: Dict[str, Callable[[np.ndarray, np.ndarray], np.ndarray]] = {
    "zero": zero_baseline,
    "theme": theme_river_baseline,
    "wiggle": wiggle_baseline,
    "weighted": weighted_wiggle_baseline,
}

# only these are worth caching between calls
_CACHED = ("wiggle", "weighted")


class BaselineSelector:
    """
    Computes baseline curves for the current Dataset.

    The wiggle curves are cached until `invalidate()` is called with the next
    Dataset; switching modes alone never recomputes derivatives.
    """

    def __init__(self, dataset: Optional[Dataset] = None) -> None:
        self._dataset: Optional[Dataset] = dataset
        self._cache: Dict[str, np.ndarray] = {}

    @property
    def dataset(self) -> Optional[Dataset]:
        return self._dataset

    def invalidate(self, dataset: Optional[Dataset]) -> None:
        """Signal that the Dataset changed; drops cached curves."""
        self._dataset = dataset
        self._cache.clear()

    def is_cached(self, mode: str) -> bool:
        return resolve_mode(mode) in self._cache

    def curve(self, mode: str) -> np.ndarray:
        mode = resolve_mode(mode)
        if self._dataset is None:
            return np.zeros(0, dtype=float)
        if mode in self._cache:
            return self._cache[mode]
        ds = self._dataset
        derivs = ds.derivatives if mode in _CACHED else None
        out = _CURVES[mode](ds.values, derivs)
        if mode in _CACHED:
            out.setflags(write=False)
            self._cache[mode] = out
        return out

    def function(self, mode: str) -> BaselineFn:
        """`baseline(sample_index) -> float` for the given mode."""
        curve = self.curve(mode)

        def baseline(index: int) -> float:
            return float(curve[index])

        return baseline
