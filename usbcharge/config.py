"""
usbcharge/config.py
===================
USB Charging Estimator — Negotiation Constants

Raw constants used by the negotiation and estimation engine.

Rules:
    - No calculations or derived quantities here.
    - All quantities in SI base units (W, A, V, Wh, dimensionless).
    - Time constants are in minutes unless the name says otherwise.
    - No simulation logic or conditional expressions.
"""

from __future__ import annotations

from usbcharge.specs import Standard


# ---------------------------------------------------------------------------
# Standard selection
# ---------------------------------------------------------------------------

STANDARD_PRIORITY: tuple[Standard, ...] = (
    Standard.PD_31_EPR,
    Standard.PD_PPS,
    Standard.PD_30,
    Standard.QC_4_PLUS,
    Standard.QC_30,
    Standard.APPLE_24A,
    Standard.BC_12,
)
"""Automatic selection order, most capable first."""

FALLBACK_STANDARD: Standard = Standard.BC_12
"""Returned by Auto selection when no candidate is fully compatible."""


# ---------------------------------------------------------------------------
# Voltage negotiation windows
# ---------------------------------------------------------------------------

# (floor_V, ceiling_V) per standard.
VOLTAGE_WINDOWS: dict[Standard, tuple[float, float]] = {
    Standard.PD_31_EPR: (20.0, 48.0),
    Standard.PD_PPS:    (5.0, 21.0),
    Standard.PD_30:     (5.0, 20.0),
    Standard.QC_4_PLUS: (5.0, 12.0),
    Standard.QC_30:     (5.0, 12.0),
    Standard.APPLE_24A: (5.0, 5.0),
    Standard.BC_12:     (5.0, 5.0),
}


# ---------------------------------------------------------------------------
# USB-A transport
# ---------------------------------------------------------------------------

USB_A_ALLOWED_STANDARDS: frozenset[Standard] = frozenset({
    Standard.BC_12,
    Standard.APPLE_24A,
    Standard.QC_30,
})
"""Legacy standards that may be negotiated over a USB-A end."""

USB_A_VOLTAGE_CLAMP: float = 5.0    # Volts


# ---------------------------------------------------------------------------
# Extended Power Range
# ---------------------------------------------------------------------------

EPR_MIN_VOLTAGE: float = 28.0       # Volts — both adapter and device
EMARKED_CURRENT: float = 5.0        # Amperes — rating implied by an e-marker
HIGH_VOLTAGE_THRESHOLD: float = 20.0


# ---------------------------------------------------------------------------
# Numeric tolerances
# ---------------------------------------------------------------------------

EPSILON: float = 1e-6
"""Tolerance for "component is at its ceiling" comparisons."""

RECOMMENDED_TOLERANCE: float = 0.95
"""Fraction of the recommended wattage that still counts as meeting it."""


# ---------------------------------------------------------------------------
# Charge-time model
# ---------------------------------------------------------------------------

CHARGE_WINDOW_START_SOC: float = 0.20
CHARGE_WINDOW_STOP_SOC: float = 0.80
CHARGE_WINDOW_FRACTION: float = 0.60
"""Share of total capacity charged in the representative 20 % → 80 % window."""

TAPER_AT_RECOMMENDED: float = 1.15
TAPER_NEAR_RECOMMENDED: float = 1.30
TAPER_LOW_POWER: float = 1.40
LOW_POWER_THRESHOLD_W: float = 15.0

MIN_EFFECTIVE_POWER_W: float = 0.1
"""Below this effective power the charge time is reported as unknown."""
