# MIT License (see LICENSE)
"""
JSON presets for labs.

A preset stores which lab to open, its parameters and optionally the
animation timing, so a demonstration can be reproduced exactly (set
``seed`` for the labs with a random initial layout).

JSON Schema Overview:
---------------------
{
  "lab": "pendulum" | "chain_fountain" | "thermodynamics" | "black_hole",
  "params": {                      # Optional, per lab type; missing keys
                                   # take the parameter defaults
    # pendulum
    "length": float, "mass": float, "initial_angle_deg": float,
    "damping": float, "material": "steel" | "wood" | "gold",
    "gravity": float,
    # chain_fountain
    "kick_strength": float, "chain_length": int,
    "container_height": float, "link_dist": float, "gravity": float,
    "iterations": int, "seed": int | null,
    # thermodynamics
    "mode": "gas" | "states" | "friction_heat", "temperature": float,
    "volume": float, "particle_count": int, "width": float,
    "height": float, "seed": int | null
  },
  # black_hole only
  "merger_time": float,            # Default: 10
  "bodies": [
    {
      "mass": float,               # Default: 30
      "spin": float,               # Default: 0
      "spin_tilt_deg": float,      # Default: 0
      "initial_angle": float       # Default: 0
    }
  ],
  "driver": {                      # Optional
    "max_dt": float,               # Default: 0.1
    "time_scale": float,           # Default: 1.0
    "sync_every": int              # Default: 2
  }
}
"""
from __future__ import annotations
import json
from dataclasses import asdict, fields
from typing import Any

from ..animation.driver import DriverSettings
from ..labs.base import Lab
from ..labs.black_hole import DEFAULT_MERGER_TIME, BlackHoleLab
from ..labs.chain_fountain import ChainFountainLab, ChainParams
from ..labs.pendulum import PendulumLab, PendulumParams
from ..labs.thermodynamics import GasParams, ThermodynamicsLab
from ..logging_utils import get_logger
from ..types import BlackHole

logger = get_logger(__name__)

LAB_TYPES: dict[str, type[Lab]] = {
    "pendulum": PendulumLab,
    "chain_fountain": ChainFountainLab,
    "thermodynamics": ThermodynamicsLab,
    "black_hole": BlackHoleLab,
}

_PARAM_TYPES = {
    "pendulum": PendulumParams,
    "chain_fountain": ChainParams,
    "thermodynamics": GasParams,
}


def _lab_type_name(lab: Lab) -> str:
    for name, cls in LAB_TYPES.items():
        if isinstance(lab, cls):
            return name
    raise TypeError(f"Cannot serialize unknown lab type: {type(lab).__name__}")


def _build(cls, data: dict[str, Any], what: str):
    """Construct a parameter dataclass, rejecting keys it does not have."""
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown {what} field(s): {', '.join(unknown)}")
    return cls(**data)


# =============================================================================
# Black holes
# =============================================================================

def black_hole_from_json(d: dict[str, Any]) -> BlackHole:
    """
    Raises:
        ValueError: For unknown fields or out-of-range values.
    """
    return _build(BlackHole, d, "black hole")


def black_hole_to_json(body: BlackHole) -> dict[str, Any]:
    """Serialize a BlackHole, omitting fields at their defaults."""
    default = BlackHole()
    return {
        f.name: getattr(body, f.name)
        for f in fields(BlackHole)
        if f.name == "mass" or getattr(body, f.name) != getattr(default, f.name)
    }


# =============================================================================
# Driver settings
# =============================================================================

def driver_settings_from_json(data: dict[str, Any]) -> DriverSettings:
    """Read the optional "driver" section of a preset."""
    section = data.get("driver", {})
    return DriverSettings(
        max_dt=float(section.get("max_dt", DriverSettings.max_dt)),
        time_scale=float(section.get("time_scale", DriverSettings.time_scale)),
        sync_every=int(section.get("sync_every", DriverSettings.sync_every)),
    )


def driver_settings_to_json(settings: DriverSettings) -> dict[str, Any]:
    return asdict(settings)


# =============================================================================
# Labs
# =============================================================================

def lab_to_json(lab: Lab, settings: DriverSettings | None = None) -> dict[str, Any]:
    """
    Serialize a lab's configuration (not its running state).

    Raises:
        TypeError: For a lab type without a preset format.
    """
    name = _lab_type_name(lab)
    result: dict[str, Any] = {"lab": name}

    if isinstance(lab, BlackHoleLab):
        result["merger_time"] = lab.merger_time
        result["bodies"] = [black_hole_to_json(b) for b in lab.bodies]
    else:
        params = asdict(lab.params)
        if "mode" in params:
            params["mode"] = params["mode"].value
        result["params"] = params

    if settings is not None:
        result["driver"] = driver_settings_to_json(settings)
    return result


def lab_from_json(data: dict[str, Any]) -> Lab:
    """
    Construct a lab from preset data.

    Raises:
        ValueError: If the lab type is missing or unknown, or any parameter
                    is unknown or out of range.
    """
    name = data.get("lab")
    if name not in LAB_TYPES:
        raise ValueError(f"Unknown lab type: {name!r} (expected one of {sorted(LAB_TYPES)})")

    if name == "black_hole":
        bodies = [black_hole_from_json(b) for b in data.get("bodies", [{}, {}])]
        return BlackHoleLab(bodies, merger_time=float(data.get("merger_time", DEFAULT_MERGER_TIME)))

    params = _build(_PARAM_TYPES[name], data.get("params", {}), f"{name} parameter")
    return LAB_TYPES[name](params)


def load_lab_raw(path: str) -> dict[str, Any]:
    """Load a preset file without constructing anything."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_lab(path: str) -> Lab:
    """
    Load a preset file and build its lab.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the preset is invalid.
    """
    data = load_lab_raw(path)
    lab = lab_from_json(data)
    logger.info("Loaded %s preset from %s", data["lab"], path)
    return lab


def save_lab(lab: Lab, path: str, settings: DriverSettings | None = None, indent: int = 2) -> None:
    data = lab_to_json(lab, settings)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent)
    logger.info("Saved %s preset to %s", data["lab"], path)
