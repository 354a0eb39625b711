import pytest

from streamstack.chart.axis import Padding, Viewport, horizontal_ticks, tick_step
from streamstack.config_model.model import PaddingCfg, ViewportCfg


def test_local_to_global_corners():
    vp = Viewport(960, 480)
    assert vp.local_to_global((0, 0)) == (20, 438)
    assert vp.local_to_global((1, 1)) == (940, 10)

def test_global_to_local_inverts():
    vp = Viewport(800, 600, Padding(10, 30, 5, 40))
    for pt in [(0.0, 0.0), (0.25, 0.8), (1.0, 1.0)]:
        assert vp.global_to_local(vp.local_to_global(pt)) == pytest.approx(pt)

@pytest.mark.parametrize("dimension,count,expected", [
    (10, 10, 1),
    (120, 10, 20),
    (1000, 10, 100),
    (1234, 10, 200),
    (0, 10, 0),
])
def test_tick_step_rounding(dimension, count, expected):
    assert tick_step(dimension, count) == expected

def test_horizontal_ticks_positions_and_labels():
    vp = Viewport(960, 480)
    ticks = horizontal_ticks(10, vp, tag_mapping=lambda i: f"t{i}")
    assert len(ticks) == 10
    t = ticks[3]
    assert t.x == pytest.approx(20 + 3 * 92)
    assert t.label == "t3"
    assert (t.y_top, t.y_bottom, t.label_y) == (440, 448, 468)

def test_horizontal_ticks_empty_dataset():
    assert horizontal_ticks(0, Viewport(960, 480)) == []

def test_viewport_from_cfg():
    vp = Viewport.from_cfg(ViewportCfg(width=500, height=300, padding=PaddingCfg(left=1, right=2, top=3, bottom=4)))
    assert vp.plot_width == 497
    assert vp.padding == Padding(1, 2, 3, 4)
