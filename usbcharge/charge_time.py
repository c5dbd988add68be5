"""
usbcharge/charge_time.py
========================
USB Charging Estimator — Charge-Time Estimator

Converts negotiated power and battery capacity into an estimated time for
a representative 20 % → 80 % charge.

Model:
    E_battery = battery_wh                    (if stated)
              = battery_mAh · V_nominal / 1000
    E_needed  = 0.6 · E_battery
    P_eff     = min(P_negotiated, P_device,max)
    t         = E_needed / P_eff · taper

    taper = 1.15  if P_eff ≥ P_recommended
          = 1.30  if P_eff ≥ 15 W
          = 1.40  otherwise

Rules:
    - Pure functions only; ``None`` stands for "not available".
    - Times are returned in whole minutes (nearest integer).
"""

from __future__ import annotations

from typing import Optional

from usbcharge.config import (
    CHARGE_WINDOW_FRACTION,
    LOW_POWER_THRESHOLD_W,
    MIN_EFFECTIVE_POWER_W,
    TAPER_AT_RECOMMENDED,
    TAPER_LOW_POWER,
    TAPER_NEAR_RECOMMENDED,
)
from usbcharge.specs import DeviceSpec


# ---------------------------------------------------------------------------
# Battery capacity
# ---------------------------------------------------------------------------

def resolve_battery_wh(device: DeviceSpec) -> Optional[float]:
    """Battery capacity in Wh, or ``None`` if it cannot be determined.

    Example:
        >>> resolve_battery_wh(DeviceSpec("phone", 27, 30, 9, battery_mah=3274, nominal_v=3.85))
        12.6049
    """
    if device.battery_wh is not None:
        return device.battery_wh
    if device.battery_mah is not None and device.nominal_v is not None:
        return device.battery_mah * device.nominal_v / 1000.0
    return None


# ---------------------------------------------------------------------------
# Taper model
# ---------------------------------------------------------------------------

def effective_power(negotiated_power_w: float, device: DeviceSpec) -> float:
    """Power the device actually absorbs [W]."""
    return min(negotiated_power_w, device.max_w)


def taper_factor(effective_power_w: float, recommended_w: float) -> float:
    """Slow-down multiplier applied to the ideal constant-power time."""
    if effective_power_w >= recommended_w:
        return TAPER_AT_RECOMMENDED
    if effective_power_w >= LOW_POWER_THRESHOLD_W:
        return TAPER_NEAR_RECOMMENDED
    return TAPER_LOW_POWER


def estimate_charge_hours(negotiated_power_w: float, device: DeviceSpec) -> Optional[float]:
    """Full-precision charge time [hours]; see :func:`estimate_charge_time`."""
    capacity_wh = resolve_battery_wh(device)
    if capacity_wh is None:
        return None

    p_eff = effective_power(negotiated_power_w, device)
    if p_eff <= MIN_EFFECTIVE_POWER_W:
        return None

    energy_wh = capacity_wh * CHARGE_WINDOW_FRACTION
    return energy_wh / p_eff * taper_factor(p_eff, device.recommended_w)


def estimate_charge_time(negotiated_power_w: float, device: DeviceSpec) -> Optional[int]:
    """Estimated minutes for a 20 % → 80 % charge.

    Args:
        negotiated_power_w: Negotiated power [W].
        device:             Device record (capacity, max and recommended W).

    Returns:
        Whole minutes, or ``None`` if the capacity is unknown or the
        effective power is at or below 0.1 W.

    Example:
        >>> estimate_charge_time(45.0, DeviceSpec("tablet", 35, 45, 15, battery_wh=31.0))
        29
    """
    hours = estimate_charge_hours(negotiated_power_w, device)
    if hours is None:
        return None
    return int(round(hours * 60.0))
