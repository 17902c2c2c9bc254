import math

import pytest

from physics_lab.models.closed_form import (
    DopplerParameters,
    RLCParameters,
    WaveParameters,
    calculate_double_slit_intensity,
    calculate_impedance,
    calculate_inclined_forces,
    calculate_orbital_velocity,
    calculate_tunneling_probability,
    doppler_shift,
    induced_current,
    interference_amplitude,
    resonance_frequency,
    snell_refraction_angle,
    thin_lens_image,
    travelling_wave_displacement,
)


def test_rlc_at_resonance_is_purely_resistive():
    """L = 0.1 H, C = 100 µF: f0 = 1/(2π√(LC)) ≈ 50.33 Hz, X_L = X_C, Z = R, φ = 0."""
    f0 = resonance_frequency(0.1, 1e-4)
    assert f0 == pytest.approx(50.329, rel=1e-4)

    r = calculate_impedance(RLCParameters(resistance=20.0, inductance=0.1, capacitance=1e-4, frequency=f0))
    assert r.xl == pytest.approx(r.xc)
    assert r.z == pytest.approx(20.0)
    assert r.phase_deg == pytest.approx(0.0, abs=1e-6)
    assert r.current == pytest.approx(0.5)


def test_rlc_degenerate_inputs_stay_finite():
    no_r = calculate_impedance(RLCParameters(0.0, 0.1, 1e-4, resonance_frequency(0.1, 1e-4)))
    assert math.isfinite(no_r.current)

    dc = calculate_impedance(RLCParameters(10.0, 0.1, 1e-4, frequency=0.0))
    assert math.isfinite(dc.z) and dc.current < 1e-6
    assert dc.phase_deg == pytest.approx(-90.0, abs=1e-6)

    inductive = calculate_impedance(RLCParameters(0.0, 0.1, 1e-4, frequency=1000.0))
    assert inductive.phase_deg == pytest.approx(90.0)


def test_tunneling_probability():
    assert calculate_tunneling_probability(energy=10.0, barrier=5.0, width=3.0) == 1.0
    thin = calculate_tunneling_probability(energy=2.0, barrier=6.0, width=1.0)
    thick = calculate_tunneling_probability(energy=2.0, barrier=6.0, width=2.0)
    # exp(-2·0.5·√4·1) = e^-2
    assert thin == pytest.approx(math.exp(-2.0))
    assert 0.0 < thick < thin < 1.0
    assert calculate_tunneling_probability(energy=5.0, barrier=5.0, width=4.0) == 1.0


def test_thin_lens():
    """Object at 2f images at 2f, inverted, same size."""
    img = thin_lens_image(focal_length=10.0, object_distance=20.0, object_height=2.0)
    assert img.distance == pytest.approx(20.0)
    assert img.magnification == pytest.approx(-1.0)
    assert img.height == pytest.approx(-2.0)
    assert not img.is_virtual

    at_focus = thin_lens_image(10.0, 10.0)
    assert at_focus.at_infinity

    magnifier = thin_lens_image(10.0, 5.0)
    assert magnifier.is_virtual
    assert magnifier.magnification == pytest.approx(2.0)


def test_snell():
    assert snell_refraction_angle(1.0, 1.0, 0.3) == pytest.approx(0.3)
    assert snell_refraction_angle(1.0, 1.5, math.radians(30)) == pytest.approx(math.asin(0.5 / 1.5))
    # Glass to air beyond the critical angle (41.8°).
    assert snell_refraction_angle(1.5, 1.0, math.radians(60)) is None


def test_double_slit_central_maximum_and_first_minimum():
    assert calculate_double_slit_intensity(0.0, 1.0, 1e-4, 500e-9) == pytest.approx(1.0)
    # First dark fringe: d·sin θ = λ/2.
    d, lam, D = 1e-4, 500e-9, 1.0
    x = D * math.tan(math.asin(lam / (2 * d)))
    assert calculate_double_slit_intensity(x, D, d, lam) == pytest.approx(0.0, abs=1e-12)


def test_doppler():
    p = DopplerParameters(frequency=440.0, source_velocity=34.3)
    assert doppler_shift(p, approaching=True) == pytest.approx(440.0 * 343.0 / 308.7)
    assert doppler_shift(p, approaching=False) < 440.0
    supersonic = doppler_shift(DopplerParameters(440.0, source_velocity=400.0))
    assert math.isfinite(supersonic) and supersonic > 1e6


def test_waves():
    w = WaveParameters(amplitude=2.0, frequency=1.0, wave_speed=10.0)
    assert travelling_wave_displacement(w, distance=50.0, time=1.0) == 0.0
    assert travelling_wave_displacement(w, distance=10.0, time=1.0) == pytest.approx(2.0)

    # Equidistant from both sources: the two waves add in phase.
    amp = interference_amplitude((0.0, 5.0), (-3.0, 0.0), (3.0, 0.0), time=0.7, frequency=2.0)
    single = math.sin(math.dist((0.0, 5.0), (3.0, 0.0)) * 0.1 - 1.4)
    assert amp == pytest.approx(single)


def test_inclined_plane():
    """μ = 1 holds a block up to 45°; at 30° with μ = 0.1 it slides."""
    stuck = calculate_inclined_forces(mass=2.0, angle_deg=30.0, mu=1.0)
    assert stuck.net_force == 0.0 and stuck.acceleration == 0.0

    slide = calculate_inclined_forces(mass=2.0, angle_deg=30.0, mu=0.1)
    expected = 9.81 * (math.sin(math.radians(30)) - 0.1 * math.cos(math.radians(30)))
    assert slide.acceleration == pytest.approx(expected)
    assert slide.normal == pytest.approx(2.0 * 9.81 * math.cos(math.radians(30)))


def test_orbital_velocity_low_earth_orbit():
    v = calculate_orbital_velocity(5.972e24, 6.371e6)
    assert v == pytest.approx(7909.0, rel=1e-3)


def test_induced_current():
    assert induced_current(45.0, 48.0) == pytest.approx(15.0)
    assert induced_current(0.0, 3.0) == pytest.approx(1.5)
    assert induced_current(10.0, 10.0) == 0.0
