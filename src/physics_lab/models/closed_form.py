# MIT License (see LICENSE)
"""
Stateless formulas evaluated once per frame from the current slider values.

Circuits, optics, waves, quantum barriers and simple mechanics. None of
these carry state between frames. Where a formula divides by something
that can reach zero for valid slider input (impedance away from any
capacitance, a lens with the object at its focus, E ≈ V for a barrier),
the denominator is floored or the physically distinct case is returned
outright.
"""
from __future__ import annotations
import math
from dataclasses import dataclass

from ..constants import G_EARTH

# Floor for denominators that can reach zero for valid input.
MIN_DENOMINATOR: float = 1e-12
GRAVITATIONAL_CONSTANT: float = 6.674e-11
# Stand-in for √(2m)/ħ in the simulated barrier units.
TUNNELING_K_FACTOR: float = 0.5


# =============================================================================
# Parameter structs
# =============================================================================

@dataclass(frozen=True)
class RLCParameters:
    """Series RLC circuit driven by an AC source (ohms, henries, farads, hertz, volts)."""
    resistance: float
    inductance: float
    capacitance: float
    frequency: float
    voltage: float = 10.0


@dataclass(frozen=True)
class DopplerParameters:
    """Moving sound source; speeds in m/s."""
    frequency: float
    source_velocity: float
    wave_speed: float = 343.0


@dataclass(frozen=True)
class WaveParameters:
    """Travelling wave emitted from a point source at distance 0."""
    amplitude: float
    frequency: float
    wave_speed: float


# =============================================================================
# Electronics
# =============================================================================

@dataclass(frozen=True)
class ImpedanceResult:
    z: float
    xl: float
    xc: float
    phase_deg: float
    current: float


def calculate_impedance(params: RLCParameters) -> ImpedanceResult:
    """
    Impedance of a series RLC circuit.

        X_L = ωL,  X_C = 1/(ωC),  Z = √(R² + (X_L - X_C)²)
        φ   = atan((X_L - X_C) / R),  I = V / Z

    ωC is floored so a zero frequency or capacitance gives a huge but
    finite X_C. At resonance with R = 0 the impedance is floored as well,
    so the current stays finite. The phase uses atan2, which gives ±90°
    for a purely reactive circuit.
    """
    omega = 2.0 * math.pi * params.frequency
    xl = omega * params.inductance
    xc = 1.0 / max(omega * params.capacitance, MIN_DENOMINATOR)
    z = math.hypot(params.resistance, xl - xc)
    phase = math.degrees(math.atan2(xl - xc, params.resistance))
    return ImpedanceResult(
        z=z,
        xl=xl,
        xc=xc,
        phase_deg=phase,
        current=params.voltage / max(z, MIN_DENOMINATOR),
    )


def resonance_frequency(inductance: float, capacitance: float) -> float:
    """f₀ = 1 / (2π·√(LC))."""
    return 1.0 / (2.0 * math.pi * math.sqrt(max(inductance * capacitance, MIN_DENOMINATOR)))


def induced_current(
    previous_position: float,
    position: float,
    coil_position: float = 50.0,
    near_distance: float = 20.0,
) -> float:
    """
    Current induced in a coil by a magnet moving along its axis.

    Faraday's law, EMF = -dΦ/dt, reduced to "proportional to how far the
    magnet moved this frame", with full coupling inside ``near_distance`` of
    the coil and a tenth of it outside.
    """
    coupling = 1.0 if abs(coil_position - position) < near_distance else 0.1
    return abs(position - previous_position) * 5.0 * coupling


# =============================================================================
# Optics
# =============================================================================

@dataclass(frozen=True)
class LensImage:
    """
    Image formed by a thin lens.

    Attributes:
        distance: Image distance (negative for a virtual image); inf when
                  the object sits at the focal point.
        magnification: -d_i/d_o (inf at the focal point).
        height: Image height, negative when inverted.
        is_virtual: True for an image on the object's side of the lens.
    """
    distance: float
    magnification: float
    height: float
    is_virtual: bool

    @property
    def at_infinity(self) -> bool:
        return math.isinf(self.distance)


def thin_lens_image(focal_length: float, object_distance: float, object_height: float = 1.0) -> LensImage:
    """
    Thin-lens imaging, 1/f = 1/d_o + 1/d_i.

    An object exactly at the focal point sends parallel rays out of the
    lens; that case is returned as an image at infinity instead of
    dividing by zero.
    """
    inv_di = 1.0 / focal_length - 1.0 / object_distance
    if abs(inv_di) < MIN_DENOMINATOR:
        return LensImage(distance=math.inf, magnification=math.inf, height=math.inf, is_virtual=False)
    di = 1.0 / inv_di
    m = -di / object_distance
    return LensImage(distance=di, magnification=m, height=m * object_height, is_virtual=di < 0)


def snell_refraction_angle(n1: float, n2: float, incidence_rad: float) -> float | None:
    """
    Refraction angle from Snell's law, n₁·sin θ₁ = n₂·sin θ₂.

    Returns:
        The refracted angle in radians, or None on total internal
        reflection.
    """
    s = n1 * math.sin(incidence_rad) / n2
    if abs(s) > 1.0:
        return None
    return math.asin(s)


# =============================================================================
# Quantum
# =============================================================================

def calculate_double_slit_intensity(x: float, screen_distance: float, slit_separation: float, wavelength: float) -> float:
    """
    Normalized two-slit intensity at screen position x.

        I/I₀ = cos²(π·d·sin θ / λ),  θ = atan(x / D)
    """
    theta = math.atan(x / screen_distance)
    phase = math.pi * slit_separation * math.sin(theta) / wavelength
    return math.cos(phase) ** 2


def calculate_tunneling_probability(energy: float, barrier: float, width: float) -> float:
    """
    Transmission probability through a rectangular barrier.

    Above the barrier (E > V) the particle passes: exactly 1. Below it the
    thick-barrier approximation T ≈ exp(-2·κ·L) with κ ∝ √(V - E) is
    used, which lies in (0, 1) and falls off as the barrier widens.
    """
    if energy > barrier:
        return 1.0
    kappa = TUNNELING_K_FACTOR * math.sqrt(barrier - energy)
    return math.exp(-2.0 * kappa * width)


# =============================================================================
# Waves
# =============================================================================

def doppler_shift(params: DopplerParameters, approaching: bool = True) -> float:
    """
    Frequency heard by a stationary observer from a moving source.

        f' = f·c / (c ∓ v)

    The approaching denominator is floored so a source at or beyond the
    wave speed yields a very large finite frequency.
    """
    c, v = params.wave_speed, params.source_velocity
    denom = c - v if approaching else c + v
    return params.frequency * c / max(denom, MIN_DENOMINATOR)


def travelling_wave_displacement(params: WaveParameters, distance: float, time: float) -> float:
    """
    u(x, t) = A·cos(ω·(t - x/v)), zero until the wavefront reaches x.
    """
    if time * params.wave_speed < distance:
        return 0.0
    omega = 2.0 * math.pi * params.frequency
    return params.amplitude * math.cos(omega * (time - distance / params.wave_speed))


def interference_amplitude(
    point: tuple[float, float],
    source_a: tuple[float, float],
    source_b: tuple[float, float],
    time: float,
    frequency: float,
    wave_number: float = 0.1,
) -> float:
    """
    Superposed displacement of two equal in-phase point sources, in [-1, 1].
    """
    d1 = math.dist(point, source_a)
    d2 = math.dist(point, source_b)
    return 0.5 * (math.sin(d1 * wave_number - time * frequency) + math.sin(d2 * wave_number - time * frequency))


# =============================================================================
# Mechanics
# =============================================================================

@dataclass(frozen=True)
class InclineForces:
    weight: float
    normal: float
    parallel: float
    friction_max: float
    net_force: float
    acceleration: float


def calculate_inclined_forces(mass: float, angle_deg: float, mu: float, gravity: float = G_EARTH) -> InclineForces:
    """
    Block on an incline with static/kinetic friction coefficient ``mu``.

    The block only accelerates when the downhill component of its weight
    exceeds the maximum friction force.
    """
    angle = math.radians(angle_deg)
    weight = mass * gravity
    normal = weight * math.cos(angle)
    parallel = weight * math.sin(angle)
    friction_max = normal * mu
    net = parallel - friction_max if parallel > friction_max else 0.0
    return InclineForces(
        weight=weight,
        normal=normal,
        parallel=parallel,
        friction_max=friction_max,
        net_force=net,
        acceleration=net / mass,
    )


def calculate_orbital_velocity(central_mass: float, radius: float, g_const: float = GRAVITATIONAL_CONSTANT) -> float:
    """Circular orbit speed v = √(G·M / r)."""
    return math.sqrt(g_const * central_mass / radius)
