import math

import numpy as np
import pytest

from physics_lab.core.integrators import step_pendulum_rk4
from physics_lab.core.invariants import pendulum_energy
from physics_lab.labs.pendulum import PendulumLab, PendulumParams, step_pendulum
from physics_lab.materials import get_material
from physics_lab.models.pendulum import (
    calculate_energy,
    calculate_ideal_period,
    calculate_large_angle_period,
    calculate_pendulum_forces,
)
from physics_lab.types import PendulumState


def _upward_zero_crossings(times, thetas):
    """Linearly interpolated times where theta crosses 0 going from - to +."""
    out = []
    for i in range(1, len(thetas)):
        if thetas[i - 1] < 0.0 <= thetas[i]:
            frac = -thetas[i - 1] / (thetas[i] - thetas[i - 1])
            out.append(times[i - 1] + frac * (times[i] - times[i - 1]))
    return out


def test_rk4_period_matches_large_angle_formula():
    """
    Undamped pendulum, L = 1.5 m, θ0 = 30°:
      T0 = 2π√(L/g) ≈ 2.457 s
      T  = T0·(1 + ¼ sin²(θ0/2) + 9/64 sin⁴(θ0/2)) ≈ 2.4996 s
    Period measured from consecutive upward zero crossings over 10 s.
    """
    L, dt = 1.5, 0.02
    theta, omega = math.radians(30.0), 0.0
    times, thetas = [0.0], [theta]
    for i in range(500):
        s = step_pendulum_rk4(theta, omega, dt, L, damping=0.0)
        theta, omega = s.theta, s.omega
        times.append((i + 1) * dt)
        thetas.append(theta)

    crossings = _upward_zero_crossings(times, thetas)
    assert len(crossings) >= 3
    period = float(np.mean(np.diff(crossings)))
    expected = calculate_large_angle_period(L, 9.81, math.radians(30.0))
    print("measured period", period, "expected", expected)

    assert expected == pytest.approx(2.4996, abs=1e-3)
    assert abs(period - expected) / expected < 0.005


def test_rk4_energy_conserved_without_damping():
    """E = m g L (1 - cos θ) + ½ m (L ω)² stays constant to well under 0.01% over 10 s."""
    L = 1.5
    theta, omega = math.radians(30.0), 0.0
    e0 = pendulum_energy(theta, omega, L)
    for _ in range(600):
        s = step_pendulum_rk4(theta, omega, 1 / 60, L, damping=0.0)
        theta, omega = s.theta, s.omega
    e1 = pendulum_energy(theta, omega, L)
    drift = abs(e1 - e0) / e0
    print("energy drift", drift)
    assert drift < 1e-4


@pytest.mark.parametrize("length,theta0_deg", [(0.5, 10.0), (1.5, 30.0), (3.0, 120.0)])
def test_rk4_energy_bounded_over_long_run(length, theta0_deg):
    """10,000 steps of dt = 0.02 s: RK4 drift stays bounded, even past 90°."""
    theta, omega = math.radians(theta0_deg), 0.0
    e0 = pendulum_energy(theta, omega, length)
    worst = 0.0
    for _ in range(10_000):
        s = step_pendulum_rk4(theta, omega, 0.02, length, damping=0.0)
        theta, omega = s.theta, s.omega
        worst = max(worst, abs(pendulum_energy(theta, omega, length) - e0) / e0)
    print("L", length, "theta0", theta0_deg, "worst drift", worst)
    assert worst < 1e-3


def test_damped_energy_never_increases():
    L = 1.5
    theta, omega = math.radians(45.0), 0.0
    energies = [pendulum_energy(theta, omega, L)]
    for _ in range(600):
        s = step_pendulum_rk4(theta, omega, 1 / 60, L, damping=0.1)
        theta, omega = s.theta, s.omega
        energies.append(pendulum_energy(theta, omega, L))

    diffs = np.diff(energies)
    assert np.all(diffs <= 1e-6 * energies[0])
    assert energies[-1] < 0.5 * energies[0]


def test_theta_is_not_wrapped():
    """ω0 = 10 rad/s exceeds 2√(g/L) ≈ 6.26, so the pendulum loops over the top."""
    theta, omega = 0.0, 10.0
    for _ in range(120):
        s = step_pendulum_rk4(theta, omega, 1 / 60, 1.0, damping=0.0)
        theta, omega = s.theta, s.omega
    assert theta > 2 * math.pi


def test_large_angle_period_increases_with_amplitude():
    t0 = calculate_ideal_period(1.0)
    assert calculate_large_angle_period(1.0, 9.81, 0.0) == pytest.approx(t0)
    angles = np.linspace(0.05, math.pi / 2, 20)
    periods = [calculate_large_angle_period(1.0, 9.81, a) for a in angles]
    assert np.all(np.diff(periods) > 0)


def test_energy_and_forces_closed_form():
    e = calculate_energy(mass=2.0, length=1.0, theta=math.pi / 2, omega=0.0)
    assert e.potential == pytest.approx(2.0 * 9.81)
    assert e.kinetic == 0.0

    f = calculate_pendulum_forces(mass=1.0, length=1.0, theta=0.0, omega=0.0)
    assert f.tension == pytest.approx(9.81)
    assert f.tangential == 0.0

    # At the bottom with ω = 2 rad/s the rod also supplies m L ω² = 4 N.
    f = calculate_pendulum_forces(mass=1.0, length=1.0, theta=0.0, omega=2.0)
    assert f.centripetal == pytest.approx(4.0)
    assert f.tension == pytest.approx(13.81)


def test_material_friction_adds_damping():
    steel = PendulumParams(material="steel", damping=0.02)
    wood = PendulumParams(material="wood", damping=0.02)
    assert steel.effective_damping == pytest.approx(0.02 + 0.002 * 5)
    assert wood.effective_damping == pytest.approx(0.02 + 0.01 * 5)

    s = step_pendulum(PendulumState(0.0, 1.0), 0.1, wood)
    ref = step_pendulum_rk4(0.0, 1.0, 0.1, 1.5, wood.effective_damping)
    assert s == ref


def test_invalid_pendulum_parameters():
    with pytest.raises(ValueError):
        PendulumParams(material="plastic")
    with pytest.raises(ValueError):
        PendulumParams(length=0.0)
    with pytest.raises(ValueError):
        get_material("unobtainium")


def test_denser_bob_is_smaller():
    assert get_material("gold").bob_radius(1.0) < get_material("steel").bob_radius(1.0) < get_material("wood").bob_radius(1.0)


def test_lab_histories_are_capped():
    lab = PendulumLab()
    for _ in range(400):
        lab.advance(1 / 60)
    assert len(lab.data) == 300
    assert len(lab.trace) == 100
    assert lab.data.last().time == pytest.approx(lab.time)


def test_lab_reset_and_parameter_change():
    lab = PendulumLab(PendulumParams(initial_angle_deg=20.0))
    for _ in range(50):
        lab.advance(1 / 60)
    assert lab.state.omega != 0.0

    lab.set_params(initial_angle_deg=45.0)
    assert lab.time == 0.0
    assert lab.state == PendulumState(math.radians(45.0), 0.0)
    assert len(lab.data) == 0

    with pytest.raises(ValueError):
        lab.set_params(length=-1.0)


def test_lab_snapshot_and_summary():
    lab = PendulumLab()
    frame = lab.snapshot()
    # Pivot and bob, bob one rod length away.
    assert frame.positions.shape == (2, 2)
    assert np.hypot(*frame.positions[1]) == pytest.approx(1.5)
    assert frame.scalars["kinetic"] == 0.0

    for _ in range(120):
        lab.advance(1 / 60)
    text = lab.summary()
    print(text)
    assert "Theoretical Period (Small Angle): 2.457s" in text
    assert lab.max_observed_speed() > 0.0
