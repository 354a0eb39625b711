from .common import (
    theme_from_cfg,
    apply_theme,
    colorway,
    rgba,
    export_html,
    export_png,
)
from .axis import Padding, Viewport, Tick, horizontal_ticks, tick_step
from .streamgraph import band_polygons, figure_from_coordinates, animated_figure, FigureEmitter

__all__ = [
    "theme_from_cfg", "apply_theme", "colorway", "rgba",
    "export_html", "export_png",
    "Padding", "Viewport", "Tick", "horizontal_ticks", "tick_step",
    "band_polygons", "figure_from_coordinates", "animated_figure", "FigureEmitter",
]
