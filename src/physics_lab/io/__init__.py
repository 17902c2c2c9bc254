# MIT License (see LICENSE)
"""
Input/Output utilities.

This subpackage provides JSON presets: a lab type, its parameters and
optionally the animation timing.

Typical usage:
    from physics_lab.io import load_lab, save_lab

    lab = load_lab("pendulum_45deg.json")
    save_lab(lab, "copy.json")
"""
from .json_io import (
    LAB_TYPES,
    black_hole_from_json,
    black_hole_to_json,
    driver_settings_from_json,
    driver_settings_to_json,
    lab_from_json,
    lab_to_json,
    load_lab,
    load_lab_raw,
    save_lab,
)

__all__ = [
    "LAB_TYPES",
    # Loading
    "load_lab",
    "load_lab_raw",
    "lab_from_json",
    "black_hole_from_json",
    "driver_settings_from_json",
    # Saving
    "save_lab",
    "lab_to_json",
    "black_hole_to_json",
    "driver_settings_to_json",
]
