from __future__ import annotations
from pathlib import Path
from typing import List, Optional
import tempfile

import plotly.graph_objects as go

from streamstack.config_model.model import RootCfg, ThemeCfg, load_config

ENGINES = ("playwright", "kaleido")


# ---------- theme ----------

def theme_from_cfg(theme_name: Optional[str] = None, cfg: Optional[RootCfg] = None) -> ThemeCfg:
    """Look up a named theme; unknown names fall back to the default dark theme."""
    cfg = cfg or load_config()
    return cfg.theme(theme_name)

def colorway(theme: ThemeCfg) -> List[str]:
    return list(theme.colorway) or ["#6b7280"]

def apply_theme(fig: go.Figure, theme: ThemeCfg) -> go.Figure:
    fig.update_layout(
        template=theme.template,
        paper_bgcolor=theme.paper_bgcolor,
        plot_bgcolor=theme.plot_bgcolor,
        font=dict(color=theme.font_color),
        colorway=colorway(theme),
    )
    return fig

def rgba(col: str, alpha: float) -> str:
    """
    Convert a color to an rgba() string with the given alpha.
    Accepts '#RRGGBB' or 'rgb(r,g,b)'. Falls back to a neutral gray.
    """
    col = (col or "").strip()
    if col.startswith("rgb("):
        return "rgba(" + col[4:-1] + f",{alpha})"
    if col.startswith("#") and len(col) == 7:
        r = int(col[1:3], 16)
        g = int(col[3:5], 16)
        b = int(col[5:7], 16)
        return f"rgba({r},{g},{b},{alpha})"
    return f"rgba(107,114,128,{alpha})"


# ---------- export ----------

def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)

def export_html(fig: go.Figure, out_html: Optional[str] = None, *, auto_play: bool = False) -> Path:
    """Write a self-contained HTML file for a Plotly figure and return its path."""
    from plotly.io import to_html
    html = to_html(fig, full_html=True, include_plotlyjs="cdn", auto_play=auto_play)
    if out_html is None:
        tmp = tempfile.NamedTemporaryFile(delete=False, suffix=".html")
        tmp.write(html.encode("utf-8"))
        tmp.flush()
        tmp.close()
        return Path(tmp.name)
    out = Path(out_html)
    _ensure_parent(out)
    out.write_text(html, encoding="utf-8")
    return out

def export_png(
    fig: go.Figure,
    out_path: str,
    *,
    width: int = 1200,
    height: int = 700,
    scale: float = 2.0,
    engine: str = "playwright",
    timeout_ms: int = 10_000,
) -> str:
    """
    Export a Plotly figure to PNG.
    - engine="playwright" (default): render the HTML in headless Chromium and screenshot.
    - engine="kaleido": use fig.write_image if kaleido is installed.
    Returns the absolute path to the PNG.
    """
    if engine not in ENGINES:
        raise ValueError(f"Unknown engine '{engine}'. Use 'playwright' or 'kaleido'.")
    out = Path(out_path).resolve()
    _ensure_parent(out)

    if engine == "kaleido":
        try:
            fig.write_image(str(out), format="png", width=width, height=height, scale=scale)
            return str(out)
        except Exception as e:
            raise RuntimeError(
                "Kaleido export failed. Either install kaleido or use engine='playwright'."
            ) from e

    try:
        from playwright.sync_api import sync_playwright
    except ImportError as e:
        raise RuntimeError(
            "Playwright not available. Install it and run 'playwright install chromium'."
        ) from e

    html_path = export_html(fig)  # tmp file
    html_uri = html_path.resolve().as_uri()

    try:
        with sync_playwright() as p:
            browser = p.chromium.launch(headless=True, args=["--allow-file-access-from-files"])
            # device_scale_factor gives crisp output; viewport controls capture size
            context = browser.new_context(
                viewport={"width": width, "height": height},
                device_scale_factor=scale,
            )
            page = context.new_page()
            page.goto(html_uri, wait_until="networkidle", timeout=timeout_ms)
            page.screenshot(path=str(out))
            context.close()
            browser.close()
    finally:
        html_path.unlink(missing_ok=True)

    return str(out)
