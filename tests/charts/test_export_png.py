import pytest
from pathlib import Path

from plotly import graph_objects as go

from streamstack.chart import common

# Skip if playwright isn't importable or chromium not installed
playwright_ready = True
try:
    import playwright  # noqa: F401
except ImportError:
    playwright_ready = False

@pytest.mark.skipif(not playwright_ready, reason="Playwright not available")
def test_export_png_smoke(tmp_path, cfg):
    fig = go.Figure(data=[go.Scatter(x=[0, 1, 1, 0], y=[0, 0, 1, 1], fill="toself")])
    png = tmp_path / "missing" / "nested" / "stream.png"
    try:
        out = common.export_png(
            fig,
            out_path=str(png),
            width=cfg.charts.png_width,
            height=cfg.charts.png_height,
            scale=cfg.charts.png_scale,
            engine="playwright",
        )
    except Exception as e:  # browser binaries may be missing
        pytest.skip(f"chromium not usable: {e}")
    assert Path(out).exists()
    assert Path(out).stat().st_size > 0

def test_export_png_rejects_unknown_engine(tmp_path):
    fig = go.Figure(data=[go.Bar(x=["x"], y=[1])])
    with pytest.raises(ValueError):
        common.export_png(fig, str(tmp_path / "x.png"), width=400, height=300, scale=1.0, engine="unknown")
