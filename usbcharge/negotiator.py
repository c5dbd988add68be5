"""
usbcharge/negotiator.py
=======================
USB Charging Estimator — Electrical Negotiator

Derives the negotiated voltage, current and power for a chosen standard
by taking the minimum across adapter, cable and device at each stage.

Model:
    V = min(V_adapter, V_cable, V_device, V_ceiling(standard), V_usb_a)
        → 0 if V falls below the standard's floor (no contract possible)
    I = min(I_adapter, I_cable, I_device)
        where a missing I_x is derived as P_x,max / V
    P = min(V · I, P_adapter, P_device, P_cable if rated)

Rules:
    - Pure and deterministic; inputs are never mutated.
    - Full precision is kept here. Display rounding happens only when the
      engine builds its :class:`~usbcharge.specs.SimulationResult`.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from usbcharge.config import EPSILON, USB_A_VOLTAGE_CLAMP, VOLTAGE_WINDOWS
from usbcharge.specs import AdapterSpec, CableSpec, DeviceSpec, Part, Standard

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data containers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PartLimits:
    """Ceilings one part imposes for a given negotiated voltage.

    Attributes:
        voltage_v: Voltage ceiling [V].
        current_a: Current ceiling [A] (stated or derived).
        power_w:   Wattage ceiling [W]; ``None`` if the part states none.
    """
    voltage_v: float
    current_a: float
    power_w:   Optional[float]


@dataclass(frozen=True)
class NegotiationResult:
    """Full-precision negotiated operating point.

    Attributes:
        standard:  Standard the point was negotiated under.
        voltage_v: Negotiated voltage [V].
        current_a: Negotiated current [A].
        power_w:   Negotiated power [W].
        limits:    Per-part ceilings used in the computation.
    """
    standard:  Standard
    voltage_v: float
    current_a: float
    power_w:   float
    limits:    dict[Part, PartLimits]


# ---------------------------------------------------------------------------
# Negotiation stages
# ---------------------------------------------------------------------------

def negotiate_voltage(
    standard: Standard,
    adapter: AdapterSpec,
    cable: CableSpec,
    device: DeviceSpec,
) -> float:
    """Voltage the chain settles on under ``standard`` [V].

    A USB-A end clamps the chain to 5 V regardless of standard. If the
    component limits cannot reach the standard's floor, no contract is
    possible and 0.0 is returned.
    """
    floor_v, ceiling_v = VOLTAGE_WINDOWS[standard]
    transport_v = USB_A_VOLTAGE_CLAMP if cable.uses_usb_a else math.inf

    voltage = min(adapter.max_v, cable.max_v, device.max_v, ceiling_v, transport_v)
    if voltage < floor_v - EPSILON:
        logger.debug(
            "%s cannot reach its %.1f V floor (chain max %.2f V)",
            standard.value, floor_v, voltage,
        )
        return 0.0
    return voltage


def _current_limit(max_a: Optional[float], max_w: float, voltage_v: float) -> float:
    """Stated current limit, or ``max_w / V`` when none is stated."""
    if max_a is not None:
        return max_a
    if voltage_v <= 0.0:
        return 0.0
    return max_w / voltage_v


def part_limits(
    adapter: AdapterSpec,
    cable: CableSpec,
    device: DeviceSpec,
    voltage_v: float,
) -> dict[Part, PartLimits]:
    """Per-part ceilings at the negotiated voltage."""
    return {
        Part.ADAPTER: PartLimits(
            voltage_v=adapter.max_v,
            current_a=_current_limit(adapter.max_a, adapter.max_w, voltage_v),
            power_w=adapter.max_w,
        ),
        Part.CABLE: PartLimits(
            voltage_v=cable.max_v,
            current_a=cable.max_a,
            power_w=cable.max_w,
        ),
        Part.DEVICE: PartLimits(
            voltage_v=device.max_v,
            current_a=_current_limit(device.max_a, device.max_w, voltage_v),
            power_w=device.max_w,
        ),
    }


def negotiate(
    standard: Standard,
    adapter: AdapterSpec,
    cable: CableSpec,
    device: DeviceSpec,
) -> NegotiationResult:
    """Compute the negotiated operating point for ``standard``.

    Compatibility is not checked here; an incompatible standard simply
    yields whatever degenerate point the limits allow.

    Args:
        standard: Standard to negotiate under.
        adapter:  Power adapter record.
        cable:    Cable record.
        device:   Device record.

    Returns:
        :class:`NegotiationResult` at full precision.

    Example:
        >>> negotiate(Standard.PD_30, apple_20w, c_to_c_3a, iphone).power_w
        20.0
    """
    standard = Standard(standard)
    voltage = negotiate_voltage(standard, adapter, cable, device)
    limits = part_limits(adapter, cable, device, voltage)

    if voltage <= 0.0:
        current = 0.0
    else:
        current = min(lim.current_a for lim in limits.values())

    power_caps = [lim.power_w for lim in limits.values() if lim.power_w is not None]
    power = min([voltage * current, *power_caps])

    logger.debug(
        "Negotiated %s: %.3f V × %.3f A → %.3f W",
        standard.value, voltage, current, power,
    )
    return NegotiationResult(
        standard=standard,
        voltage_v=voltage,
        current_a=current,
        power_w=power,
        limits=limits,
    )
