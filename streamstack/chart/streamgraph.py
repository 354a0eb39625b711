from __future__ import annotations
from typing import Any, List, Optional, Sequence

import plotly.graph_objects as go

from streamstack.config_model.model import RootCfg
from streamstack.layout.stack import CoordinateSet
from .axis import Viewport, horizontal_ticks
from .common import apply_theme, colorway, rgba, theme_from_cfg


# ---------- polygons ----------

def _band_name(names: Optional[Sequence[str]], i: int) -> str:
    if names is not None and i < len(names):
        return str(names[i])
    return f"band {i}"

def band_polygons(coords: CoordinateSet, viewport: Optional[Viewport] = None) -> List[tuple[list, list]]:
    """
    One closed outline per band: upper boundary left-to-right, then the lower
    boundary right-to-left. Pixel space when a viewport is given.
    """
    out = []
    for k in range(len(coords) - 1):
        upper = list(coords[k + 1])
        lower = list(reversed(coords[k]))
        pts = upper + lower
        if viewport is not None:
            pts = [viewport.local_to_global(p) for p in pts]
        out.append(([p[0] for p in pts], [p[1] for p in pts]))
    return out

def _traces(
    coords: CoordinateSet,
    pal: List[str],
    names: Optional[Sequence[str]],
    viewport: Optional[Viewport],
) -> List[go.Scatter]:
    traces = []
    for i, (xs, ys) in enumerate(band_polygons(coords, viewport)):
        traces.append(go.Scatter(
            x=xs, y=ys,
            mode="lines", fill="toself",
            line=dict(width=0),
            fillcolor=rgba(pal[i % len(pal)], 0.85),
            name=_band_name(names, i),
            hoverinfo="name",
        ))
    return traces

def _layout_axes(fig: go.Figure, viewport: Optional[Viewport]) -> None:
    if viewport is None:
        fig.update_xaxes(range=[0, 1], showgrid=False, zeroline=False)
        fig.update_yaxes(range=[0, 1], showgrid=False, zeroline=False)
        return
    fig.update_xaxes(range=[0, viewport.width], visible=False)
    # pixel space: y grows downward
    fig.update_yaxes(range=[viewport.height, 0], visible=False)


def _add_horizontal_axis(fig: go.Figure, viewport: Viewport, dimension: int, cfg: RootCfg) -> None:
    p = viewport.padding
    y = viewport.height - p.bottom
    fig.add_shape(type="line", x0=p.left, x1=viewport.width - p.right, y0=y, y1=y,
                  line=dict(color="#aaaaaa", width=1))
    for t in horizontal_ticks(dimension, viewport,
                              grad_spacing=cfg.viewport.grad_spacing,
                              grad_height=cfg.viewport.grad_height):
        fig.add_shape(type="line", x0=t.x, x1=t.x, y0=t.y_top, y1=t.y_bottom,
                      line=dict(color="#aaaaaa", width=1))
        fig.add_annotation(x=t.x, y=t.label_y, text=t.label, showarrow=False)


# ---------- figures ----------

def figure_from_coordinates(
    coords: CoordinateSet,
    *,
    names: Optional[Sequence[str]] = None,
    viewport: Optional[Viewport] = None,
    dimension: Optional[int] = None,
    title: Optional[str] = None,
    theme_name: Optional[str] = None,
    cfg: Optional[RootCfg] = None,
) -> go.Figure:
    """Filled polygons for an already laid-out Coordinate Set."""
    cfg = cfg or RootCfg()
    theme = theme_from_cfg(theme_name, cfg)
    fig = go.Figure(data=_traces(coords, colorway(theme), names, viewport))
    _layout_axes(fig, viewport)
    if viewport is not None and dimension:
        _add_horizontal_axis(fig, viewport, dimension, cfg)
    fig.update_layout(title=title or "Streamgraph", showlegend=True)
    return apply_theme(fig, theme)


def animated_figure(
    frames: Sequence[CoordinateSet],
    *,
    names: Optional[Sequence[str]] = None,
    viewport: Optional[Viewport] = None,
    frame_ms: float = 20.0,
    title: Optional[str] = None,
    theme_name: Optional[str] = None,
    cfg: Optional[RootCfg] = None,
) -> go.Figure:
    """
    Plotly animation over pre-computed frames (see `sample_frames`).
    Every frame carries as many traces as the widest frame so plotly can
    morph between them; missing bands are emitted empty.
    """
    if not frames:
        raise ValueError("animated_figure needs at least one frame")
    cfg = cfg or RootCfg()
    theme = theme_from_cfg(theme_name, cfg)
    pal = colorway(theme)
    width = max(max(len(f) - 1, 0) for f in frames)

    def _padded_traces(coords: CoordinateSet) -> List[go.Scatter]:
        traces = _traces(coords, pal, names, viewport)
        for i in range(len(traces), width):
            traces.append(go.Scatter(x=[], y=[], mode="lines", fill="toself",
                                     line=dict(width=0), fillcolor=rgba(pal[i % len(pal)], 0.85),
                                     name=_band_name(names, i)))
        return traces

    fig = go.Figure(
        data=_padded_traces(frames[0]),
        frames=[go.Frame(data=_padded_traces(f), name=str(i)) for i, f in enumerate(frames)],
    )
    _layout_axes(fig, viewport)
    step: dict[str, Any] = {"frame": {"duration": frame_ms, "redraw": True}, "fromcurrent": True,
                            "transition": {"duration": 0}}
    fig.update_layout(
        title=title or "Streamgraph",
        updatemenus=[dict(
            type="buttons", showactive=False,
            buttons=[dict(label="Play", method="animate", args=[None, step])],
        )],
    )
    return apply_theme(fig, theme)


class FigureEmitter:
    """
    Draw hook for a StackedGraph: rebuilds `figure` from the graph's displayed
    coordinates on every call.
    """

    def __init__(
        self,
        graph: Any,
        *,
        viewport: Optional[Viewport] = None,
        title: Optional[str] = None,
        theme_name: Optional[str] = None,
    ) -> None:
        self.graph = graph
        self.viewport = viewport
        self.title = title
        self.theme_name = theme_name
        self.figure: Optional[go.Figure] = None
        self.draws = 0

    def __call__(self) -> None:
        g = self.graph
        self.figure = figure_from_coordinates(
            g.coordinates,
            names=g.data.names,
            viewport=self.viewport,
            dimension=g.dimension,
            title=self.title,
            theme_name=self.theme_name,
            cfg=g.cfg,
        )
        self.draws += 1

    def attach(self) -> "FigureEmitter":
        self.graph.on_draw = self
        self.graph.resize()
        return self
