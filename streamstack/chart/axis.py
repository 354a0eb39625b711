"""
Pixel geometry around the unit-square layout: padding-aware coordinate
conversion and horizontal axis graduations.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple
import math

from streamstack.config_model.model import ViewportCfg

Point = Tuple[float, float]


@dataclass(frozen=True)
class Padding:
    left: float = 20
    right: float = 20
    top: float = 10
    bottom: float = 32


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float
    padding: Padding = field(default_factory=Padding)

    @classmethod
    def from_cfg(cls, cfg: ViewportCfg) -> "Viewport":
        p = cfg.padding
        return cls(cfg.width, cfg.height, Padding(p.left, p.right, p.top, p.bottom))

    @property
    def plot_width(self) -> float:
        return self.width - self.padding.left - self.padding.right

    @property
    def _y_scale(self) -> float:
        p = self.padding
        return -self.height + 2 * p.top + p.bottom

    def local_to_global(self, xy: Point) -> Point:
        """Unit-square point -> pixel point (y grows downward)."""
        x, y = xy
        p = self.padding
        return (
            x * self.plot_width + p.left,
            y * self._y_scale + self.height - p.top - p.bottom,
        )

    def global_to_local(self, xy: Point) -> Point:
        x, y = xy
        p = self.padding
        return (
            (x - p.left) / self.plot_width,
            (y - self.height + p.top + p.bottom) / self._y_scale,
        )


@dataclass(frozen=True)
class Tick:
    x: float
    y_top: float
    y_bottom: float
    label: str
    label_y: float


def tick_step(dimension: int, count: int) -> int:
    """Samples between graduations; rounded to 10s past 50 samples and 100s past 500."""
    if dimension <= 0 or count <= 0:
        return 0
    step = math.ceil(dimension / count)
    if dimension > 500:
        step = math.ceil(step / 100) * 100
    elif dimension > 50:
        step = math.ceil(step / 10) * 10
    return int(step)


def horizontal_ticks(
    dimension: int,
    viewport: Viewport,
    *,
    grad_spacing: float = 100.0,
    grad_height: float = 8.0,
    tag_mapping: Optional[Callable[[int], str]] = None,
) -> List[Tick]:
    tag = tag_mapping or (lambda i: str(i))
    width = viewport.plot_width
    if dimension <= 0 or width <= 0:
        return []
    count = math.ceil(width / grad_spacing)
    step = tick_step(dimension, count)
    step_length = width / dimension * step
    bottom = viewport.height - viewport.padding.bottom
    return [
        Tick(
            x=viewport.padding.left + i * step_length,
            y_top=bottom - grad_height,
            y_bottom=bottom,
            label=tag(i * step),
            label_y=bottom - grad_height + 28,
        )
        for i in range(count)
    ]
