# MIT License (see LICENSE)
"""
Analytic models: pendulum reference values, closed-form formulas and the
gravitational-wave chirp.
"""
from .pendulum import (
    PendulumEnergy,
    PendulumForces,
    calculate_energy,
    calculate_ideal_period,
    calculate_large_angle_period,
    calculate_pendulum_forces,
)
from .closed_form import (
    DopplerParameters,
    ImpedanceResult,
    InclineForces,
    LensImage,
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
from .gravitational_waves import (
    MergerRemnant,
    calculate_gravitational_wave_strain,
    chirp_frequency,
    effective_merger_time,
    merger_remnant,
    orbital_positions,
    spin_alignment,
)

__all__ = [
    # Pendulum
    "PendulumEnergy",
    "PendulumForces",
    "calculate_energy",
    "calculate_ideal_period",
    "calculate_large_angle_period",
    "calculate_pendulum_forces",
    # Closed form
    "DopplerParameters",
    "ImpedanceResult",
    "InclineForces",
    "LensImage",
    "RLCParameters",
    "WaveParameters",
    "calculate_double_slit_intensity",
    "calculate_impedance",
    "calculate_inclined_forces",
    "calculate_orbital_velocity",
    "calculate_tunneling_probability",
    "doppler_shift",
    "induced_current",
    "interference_amplitude",
    "resonance_frequency",
    "snell_refraction_angle",
    "thin_lens_image",
    "travelling_wave_displacement",
    # Gravitational waves
    "MergerRemnant",
    "calculate_gravitational_wave_strain",
    "chirp_frequency",
    "effective_merger_time",
    "merger_remnant",
    "orbital_positions",
    "spin_alignment",
]
