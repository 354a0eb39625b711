from __future__ import annotations

import argparse
from pathlib import Path
import numpy as np
import pandas as pd

from streamstack.anim.transition import sample_frames
from streamstack.chart import Viewport, animated_figure, export_html, export_png, figure_from_coordinates
from streamstack.config_model.model import load_config
from streamstack.graph import StackedGraph
from streamstack.layout import MODES, dataset_from_frame

# ---------- small I/O helper ----------

def _save(fig, outdir: Path, name: str, cfg, png: bool, auto_play: bool = False):
    outdir.mkdir(parents=True, exist_ok=True)
    export_html(fig, str(outdir / f"{name}.html"), auto_play=auto_play)
    if png:
        export_png(fig, str(outdir / f"{name}.png"),
                   width=cfg.charts.png_width, height=cfg.charts.png_height, scale=cfg.charts.png_scale)

# ---------- synthetic data factories (reproducible) ----------

def _rng(seed=42):
    return np.random.default_rng(seed)

def make_streamgraph(T=36, groups=("Alpha", "Beta", "Gamma", "Delta"), seed=12):
    rng = _rng(seed)
    t = pd.date_range("2022-01-01", periods=T, freq="MS")
    rows = []
    for g in groups:
        base = np.clip(20 + 5*np.sin(np.linspace(0, 3, T) + rng.uniform(0, 2*np.pi)) + rng.normal(0, 2, T), 0, None)
        rows.append(pd.DataFrame({"time": t, "group": g, "value": base}))
    return pd.concat(rows, ignore_index=True)


# ---------- main demo ----------

def main():
    ap = argparse.ArgumentParser(description="Streamgraph layout + transition demo")
    ap.add_argument("-o", "--out", default="out/streamgraph_demo", help="output directory")
    ap.add_argument("--config", default=None, help="path to config TOML")
    ap.add_argument("--theme", default=None, help="theme name in config")
    ap.add_argument("--png", action="store_true", help="also export PNGs (needs playwright)")
    args = ap.parse_args()
    cfg = load_config(args.config)
    outdir = Path(args.out)
    viewport = Viewport.from_cfg(cfg.viewport)

    ds = dataset_from_frame(make_streamgraph(), time="time", group="group", value="value")
    graph = StackedGraph(ds, cfg=cfg)

    # 1) One static figure per baseline mode
    for i, mode in enumerate(MODES, start=1):
        graph.set_baseline(mode, animated=False)
        fig = figure_from_coordinates(graph.coordinates, names=ds.names, viewport=viewport,
                                      dimension=graph.dimension, theme_name=args.theme, cfg=cfg,
                                      title=f"Baseline: {mode}")
        _save(fig, outdir, f"{i:02d}_{mode}", cfg, args.png)

    # 2) Animated transition to a dataset with more bands and more samples
    before = graph.coordinates
    bigger = dataset_from_frame(make_streamgraph(T=48, groups=("Alpha", "Beta", "Gamma", "Delta", "Eps"), seed=13),
                                time="time", group="group", value="value")
    graph.set_data(bigger, animated=False)
    frames = sample_frames(before, graph.coordinates, cfg.graph.duration_ms, cfg.graph.tick_ms)
    fig = animated_figure(frames, names=bigger.names, viewport=viewport, frame_ms=cfg.graph.tick_ms,
                          theme_name=args.theme, cfg=cfg, title="Transition (4x36 -> 5x48)")
    _save(fig, outdir, "05_transition", cfg, png=False, auto_play=True)

    print(f"Wrote {len(MODES) + 1} charts ({len(frames)} animation frames) to: {outdir.resolve()}")


if __name__ == "__main__":
    main()
