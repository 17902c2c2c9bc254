import numpy as np
import pytest

from physics_lab.collision.boundaries import resolve_floor_contact
from physics_lab.constraints.solver import (
    max_link_deviation,
    mean_link_deviation,
    relax_distance_constraints,
)
from physics_lab.labs.chain_fountain import (
    ChainFountainLab,
    ChainParams,
    create_chain,
    fountain_height,
    link_positions,
    step_chain_fountain,
)
from physics_lab.types import ChainLink


def _jittered_line(n=30, link_dist=10.0, seed=7):
    rng = np.random.default_rng(seed)
    x = np.arange(n) * link_dist + rng.normal(0, 4.0, n)
    y = 100.0 + rng.normal(0, 4.0, n)
    return np.stack([x, y], axis=1)


def _as_links(positions):
    return [ChainLink(p) for p in positions]


def test_relaxation_never_increases_mean_deviation():
    """
    Each pair projection zeroes its own error e and moves its endpoints by |e|
    in total, so neighbor errors grow by at most |e|: Σ|d - rest| cannot grow.
    """
    pos = _jittered_line()
    dev = [mean_link_deviation(pos, 10.0)]
    for _ in range(20):
        relax_distance_constraints(pos, 10.0, iterations=1)
        dev.append(mean_link_deviation(pos, 10.0))
    print("deviation per pass", dev[:5], "...", dev[-1])

    assert np.all(np.diff(dev) <= 1e-9)
    assert dev[-1] < 0.1 * dev[0]


def test_half_and_double_spacing_converges_frame_over_frame():
    """
    Gaps alternate between 0.5 and 1.5 times the rest length (±50%). Each
    frame runs the fixed 5-iteration pass; the mean deviation shrinks every
    frame until it is negligible.
    """
    gaps = np.where(np.arange(39) % 2 == 0, 5.0, 15.0)
    pos = np.zeros((40, 2))
    pos[1:, 0] = np.cumsum(gaps)

    dev = [mean_link_deviation(pos, 10.0)]
    for _ in range(30):
        relax_distance_constraints(pos, 10.0, iterations=5)
        dev.append(mean_link_deviation(pos, 10.0))
    print("deviation per frame", dev[:4], "...", dev[-1])

    assert dev[0] == pytest.approx(5.0)
    assert np.all(np.diff(dev) <= 1e-9)
    assert dev[-1] < 0.1 * dev[0]


def test_relaxation_respects_fixed_links():
    pos = _jittered_line(n=10)
    fixed = np.zeros(10, dtype=bool)
    fixed[0] = True
    anchor = pos[0].copy()
    corrections = relax_distance_constraints(pos, 10.0, iterations=10, fixed=fixed)

    assert np.array_equal(pos[0], anchor)
    assert np.array_equal(corrections[0], [0.0, 0.0])
    assert corrections.shape == (10, 2)

    # Free neighbor of a fixed link takes the full correction.
    pair = np.array([[0.0, 0.0], [0.0, 20.0]])
    relax_distance_constraints(pair, 10.0, iterations=1, fixed=np.array([True, False]))
    assert pair[1] == pytest.approx([0.0, 10.0])


def test_relaxation_skips_coincident_and_doubly_fixed_pairs():
    pos = np.array([[5.0, 5.0], [5.0, 5.0]])
    relax_distance_constraints(pos, 10.0)
    assert np.all(np.isfinite(pos))

    fixed = np.array([[0.0, 0.0], [30.0, 0.0]])
    relax_distance_constraints(fixed, 10.0, fixed=np.array([True, True]))
    assert fixed[1] == pytest.approx([30.0, 0.0])
    assert max_link_deviation(fixed, 10.0) == pytest.approx(20.0)


def test_relaxation_rejects_non_positive_distance():
    with pytest.raises(ValueError):
        relax_distance_constraints(_jittered_line(n=3), 0.0)
    with pytest.raises(ValueError):
        ChainParams(link_dist=-1.0)


def test_floor_contact_bounce_and_kick():
    """
    y = 410 below a floor at 400, v = (20, 100) px/s:
      vy → -100·0.1 = -10, then kick: -10 - 15·10·0.016 = -12.4
      vx → 20·0.5 = 10
    """
    pos = np.array([[50.0, 410.0]])
    vel = np.array([[20.0, 100.0]])
    touched = resolve_floor_contact(pos, vel, 400.0, 0.016, kick_strength=15.0)
    assert touched.tolist() == [True]
    assert pos[0, 1] == 400.0
    assert vel[0, 1] == pytest.approx(-12.4)
    assert vel[0, 0] == pytest.approx(10.0)


def test_floor_contact_no_kick_when_moving_down_after_bounce():
    # Already moving up while below the floor: the reflected vy points down.
    # Second link is above the floor, third is an anchor below it.
    pos = np.array([[0.0, 405.0], [0.0, 300.0], [0.0, 500.0]])
    vel = np.array([[0.0, -50.0], [0.0, 50.0], [0.0, 0.0]])
    free = np.array([True, True, False])
    touched = resolve_floor_contact(pos, vel, 400.0, 0.016, 15.0, free=free)

    assert touched.tolist() == [True, False, False]
    assert vel[0, 1] == pytest.approx(5.0)
    assert vel[1, 1] == 50.0
    assert pos[2, 1] == 500.0


def test_step_is_pure_and_keeps_anchor():
    links = create_chain(40, np.random.default_rng(3))
    links[0].is_fixed = True
    before = [l.copy() for l in links]

    out = links
    for _ in range(100):
        out = step_chain_fountain(out, 0.016, 15.0, 400.0)

    for a, b in zip(links, before):
        assert np.array_equal(a.position, b.position)
        assert np.array_equal(a.velocity, b.velocity)
    assert np.array_equal(out[0].position, links[0].position)
    assert all(np.all(np.isfinite(l.position)) for l in out)


def test_velocity_matches_displacement_after_relaxation():
    """
    Constraint corrections are carried into the velocity, so for a link
    that did not touch the floor v_new = (x_new - x_old) / dt exactly.
    """
    links = _as_links(_jittered_line(n=15))
    dt = 0.016
    out = step_chain_fountain(links, dt, kick_strength=15.0, container_height=10_000.0)
    for old, new in zip(links, out):
        assert new.velocity == pytest.approx((new.position - old.position) / dt, abs=1e-6)


def test_hanging_chain_does_not_accumulate_velocity():
    """
    A chain hanging from an anchor would reach g·t ≈ 3100 px/s after 3.2 s
    of free fall. Held by its links it must stay far below that.
    """
    links = [ChainLink((0.0, 10.0 * i), is_fixed=(i == 0)) for i in range(20)]
    for _ in range(200):
        links = step_chain_fountain(links, 0.016, 0.0, container_height=10_000.0)
    top_speed = max(float(np.hypot(*l.velocity)) for l in links)
    print("hanging chain top speed", top_speed)
    assert top_speed < 500.0


def test_create_chain_layout():
    links = create_chain(100, np.random.default_rng(0))
    assert len(links) == 100
    assert links[0].position == pytest.approx([150.0, 350.0])
    assert links[3].position == pytest.approx([180.0, 290.0])
    # Draped links past the 6th hang back down.
    assert links[7].position == pytest.approx([220.0, 270.0])
    assert all(100.0 <= l.x <= 120.0 for l in links[10:])

    again = create_chain(100, np.random.default_rng(0))
    assert all(np.array_equal(a.position, b.position) for a, b in zip(links, again))

    with pytest.raises(ValueError):
        create_chain(0)


def test_fountain_height():
    links = [ChainLink((0.0, 390.0)), ChainLink((0.0, 150.0))]
    assert fountain_height(links, 400.0) == 250.0
    assert fountain_height([], 400.0) == 0.0
    assert fountain_height([ChainLink((0.0, 420.0))], 400.0) == 0.0


def test_lab_splits_long_frames_into_substeps():
    lab = ChainFountainLab(ChainParams(chain_length=30, seed=11))
    start = lab.state

    manual = start
    for _ in range(2):
        manual = step_chain_fountain(manual, 0.016, 15.0, 400.0)
    stepped = lab.step(start, 0.032)

    for a, b in zip(manual, stepped):
        assert a.position == pytest.approx(b.position)


def test_lab_runs_and_resets():
    lab = ChainFountainLab(ChainParams(chain_length=60, seed=5))
    initial = [l.position.copy() for l in lab.state]
    for _ in range(120):
        assert lab.advance(1 / 60)

    frame = lab.snapshot()
    assert frame.positions.shape == (60, 2)
    assert np.all(np.isfinite(frame.positions))
    assert lab.peak_height >= lab.heights.last().value
    assert "Chain Length=60" in lab.summary()

    lab.reset()
    assert lab.time == 0.0
    assert len(lab.heights) == 0
    assert all(np.array_equal(p, l.position) for p, l in zip(initial, lab.state))

    lab.set_params(chain_length=80)
    assert len(lab.state) == 80


def test_a_60hz_frame_is_a_single_step():
    lab = ChainFountainLab(ChainParams(chain_length=30, seed=4))
    start = lab.state
    one = step_chain_fountain(start, 1 / 60, 15.0, 400.0)
    stepped = lab.step(start, 1 / 60)
    for a, b in zip(one, stepped):
        assert np.array_equal(a.position, b.position)


def test_links_never_drawn_below_the_floor():
    """Relaxation may pull a link under the floor; it is put back on it."""
    lab = ChainFountainLab(ChainParams(kick_strength=30.0, chain_length=120, seed=8))
    lowest = 0.0
    for _ in range(600):
        lab.advance(1 / 60)
        lowest = max(lowest, float(link_positions(lab.state)[:, 1].max()))
    print("lowest link y", lowest)
    assert lowest <= lab.params.container_height
    assert lab.snapshot().positions[:, 1].max() <= lab.params.container_height
