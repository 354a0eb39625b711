import pytest

from streamstack.anim.schedule import ManualScheduler
from streamstack.anim.transition import (
    Phase,
    TransitionEngine,
    ease_out_quad,
    interpolate,
    pad_from,
    sample_frames,
)


def _boundary(n, y=0.0):
    return [(i / max(n - 1, 1), y) for i in range(n)]

def _clock():
    now = {"t": 0.0}
    return now, (lambda: now["t"])


# ---------- easing / padding / blending ----------

@pytest.mark.parametrize("p,expected", [(0, 0.0), (0.5, 0.75), (1, 1.0), (-1, 0.0), (2, 1.0)])
def test_ease_out_quad_clamps(p, expected):
    assert ease_out_quad(p) == expected

def test_pad_one_by_three_to_three_by_five():
    b0 = [(0.0, 0.1), (0.5, 0.2), (1.0, 0.3)]
    dest = [_boundary(5) for _ in range(3)]
    padded = pad_from([b0], dest)
    assert len(padded) == 3
    assert all(len(b) == 5 for b in padded)
    assert padded[0] == padded[1] == padded[2]
    assert padded[2][:3] == b0
    assert padded[2][3] == padded[2][4] == (1.0, 0.3)

def test_pad_duplicates_bottom_boundary_at_the_front():
    b0, b1 = _boundary(2, 0.0), _boundary(2, 1.0)
    padded = pad_from([b0, b1], [_boundary(2)] * 3)
    assert padded == [b0, b0, b1]

def test_pad_from_nothing_uses_midline_point():
    padded = pad_from([], [_boundary(3)] * 2)
    assert padded == [[(0.0, 0.5)] * 3] * 2

def test_pad_never_shrinks_and_does_not_mutate_input():
    src = [_boundary(5) for _ in range(3)]
    snapshot = [list(b) for b in src]
    padded = pad_from(src, [_boundary(2)])
    assert [len(b) for b in padded] == [5, 5, 5]
    assert src == snapshot

def test_interpolate_endpoints():
    src = [[(0.0, 0.0), (1.0, 0.0)]]
    dst = [[(0.0, 1.0), (1.0, 1.0)]]
    assert interpolate(src, dst, 0.0) == src
    assert interpolate(src, dst, 1.0) == dst
    assert interpolate(src, dst, 0.25) == [[(0.0, 0.25), (1.0, 0.25)]]

def test_interpolate_clamps_boundary_and_sample_indices():
    src = [_boundary(4, 0.0) for _ in range(3)]
    dst = [[(0.0, 1.0), (1.0, 0.5)]]
    out = interpolate(src, dst, 1.0)
    assert len(out) == 3
    for b in out:
        assert b == [(0.0, 1.0), (1.0, 0.5), (1.0, 0.5), (1.0, 0.5)]

def test_interpolate_to_empty_shrinks_toward_origin():
    src = [[(1.0, 0.5)]]
    assert interpolate(src, [], 0.5) == [[(0.5, 0.25)]]


# ---------- engine ----------

def test_engine_starts_idle_and_assign_copies():
    eng = TransitionEngine(clock=lambda: 0.0)
    assert eng.phase is Phase.IDLE
    dest = [_boundary(3)]
    eng.assign(dest)
    assert eng.displayed == dest
    assert eng.displayed is not dest

def test_manual_ticks_ease_and_snap():
    now, clock = _clock()
    eng = TransitionEngine(clock=clock)
    eng.assign([[(0.0, 0.0)]])
    dest = [[(1.0, 1.0)]]
    eng.start(dest, 100)
    assert eng.phase is Phase.ANIMATING
    assert eng.displayed == [[(0.0, 0.0)]]

    now["t"] = 50
    assert eng.tick() is Phase.ANIMATING
    assert eng.displayed[0][0] == pytest.approx((0.75, 0.75))

    now["t"] = 100
    assert eng.tick() is Phase.ANIMATING

    now["t"] = 101
    assert eng.tick() is Phase.IDLE
    assert eng.displayed == dest
    assert eng.state is None

def test_tick_when_idle_is_a_no_op():
    eng = TransitionEngine(clock=lambda: 0.0)
    eng.assign([[(0.2, 0.2)]])
    assert eng.tick() is Phase.IDLE
    assert eng.displayed == [[(0.2, 0.2)]]

def test_restart_begins_from_displayed_frame():
    now, clock = _clock()
    eng = TransitionEngine(clock=clock)
    eng.assign([[(0.0, 0.0)]])
    eng.start([[(1.0, 1.0)]], 100)
    now["t"] = 50
    eng.tick()

    eng.start([[(0.0, 0.0)]], 100)
    assert eng.state.start_ms == 50
    assert eng.state.from_data[0][0] == pytest.approx((0.75, 0.75))
    now["t"] = 200
    eng.tick()
    assert eng.displayed == [[(0.0, 0.0)]]
    assert eng.phase is Phase.IDLE

def test_scheduler_drives_ticks_until_snap(sched: ManualScheduler):
    commits = []
    eng = TransitionEngine(clock=sched.now, scheduler=sched, tick_ms=20,
                           on_commit=lambda: commits.append(sched.now()))
    eng.assign([_boundary(3)])
    commits.clear()
    dest = [_boundary(3, 1.0), _boundary(3, 0.5)]
    eng.start(dest, 100)
    ran = sched.run_until_idle()
    assert ran == 6
    assert commits == [0, 20, 40, 60, 80, 100, 120]
    assert eng.phase is Phase.IDLE
    assert eng.displayed == dest
    assert sched.pending == 0

def test_restart_drops_stale_scheduled_ticks(sched: ManualScheduler):
    commits = []
    eng = TransitionEngine(clock=sched.now, scheduler=sched, tick_ms=20,
                           on_commit=lambda: commits.append(sched.now()))
    eng.assign([[(0.0, 0.0)]])
    eng.start([[(1.0, 1.0)]], 100)
    sched.advance(10)
    commits.clear()
    eng.start([[(0.0, 1.0)]], 100)
    sched.run_until_idle()
    assert commits == [10, 30, 50, 70, 90, 110, 130]
    assert eng.displayed == [[(0.0, 1.0)]]

def test_zero_duration_snaps_on_next_tick(sched: ManualScheduler):
    eng = TransitionEngine(clock=sched.now, scheduler=sched)
    eng.assign([[(0.0, 0.0)]])
    eng.start([[(1.0, 1.0)]], 0)
    assert eng.displayed == [[(1.0, 1.0)]]
    assert eng.phase is Phase.ANIMATING
    sched.run_until_idle()
    assert eng.phase is Phase.IDLE

def test_animating_to_empty_ends_empty(sched: ManualScheduler):
    eng = TransitionEngine(clock=sched.now, scheduler=sched)
    eng.assign([_boundary(3, 0.4)])
    eng.start([], 60)
    sched.advance(30)
    assert len(eng.displayed) == 1
    sched.run_until_idle()
    assert eng.displayed == []

@pytest.mark.parametrize("duration", [0, 1, 35, 100, 999])
def test_convergence_for_any_duration(duration):
    now, clock = _clock()
    eng = TransitionEngine(clock=clock)
    eng.assign([_boundary(2, 0.3)])
    dest = [_boundary(4, 0.1), _boundary(4, 0.9), _boundary(4, 1.0)]
    eng.start(dest, duration)
    now["t"] = duration + 1
    eng.tick()
    assert eng.displayed == dest

@pytest.mark.parametrize("duration", [0, 20, 100])
def test_tick_exactly_at_duration_shows_destination_after_shrink(duration):
    now, clock = _clock()
    eng = TransitionEngine(clock=clock)
    eng.assign([[(0.0, 0.0), (1.0, 0.0)]] * 3)
    dest = [[(0.0, 1.0), (1.0, 1.0)]]
    eng.start(dest, duration)
    now["t"] = duration
    assert eng.tick() is Phase.ANIMATING
    assert eng.displayed == dest
    now["t"] = duration + 20
    assert eng.tick() is Phase.IDLE
    assert eng.displayed == dest

def test_scheduled_tick_at_duration_lands_on_fewer_samples(sched: ManualScheduler):
    frames = []
    eng = TransitionEngine(clock=sched.now, scheduler=sched, tick_ms=20,
                           on_commit=lambda: frames.append((sched.now(), eng.displayed)))
    eng.assign([_boundary(5, 0.2), _boundary(5, 0.8)])
    frames.clear()
    dest = [_boundary(2, 0.5)]
    eng.start(dest, 100)
    sched.run_until_idle()
    assert [t for t, _ in frames] == [0, 20, 40, 60, 80, 100, 120]
    assert frames[-2][1] == dest
    assert frames[-1][1] == dest

def test_sample_frames_last_frame_is_exact():
    src = [_boundary(2, 0.2)]
    dest = [_boundary(3, 0.0), _boundary(3, 1.0)]
    frames = sample_frames(src, dest, 100, 20)
    assert len(frames) == 7
    assert [len(f) for f in frames[:-1]] == [2] * 6
    assert all(len(b) == 3 for b in frames[0])
    assert frames[-1] == dest
