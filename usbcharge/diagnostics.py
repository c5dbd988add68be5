"""
usbcharge/diagnostics.py
========================
USB Charging Estimator — Diagnostics Generator

Compares a negotiated operating point against each part's stated ceilings
to name the limiting parts, explain the bottlenecks and suggest upgrades.

Every explanation is a :class:`~usbcharge.specs.MessageDescriptor`; string
rendering belongs to :mod:`usbcharge.messages`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from usbcharge.compatibility import is_allowed_on_usb_a
from usbcharge.config import (
    EMARKED_CURRENT,
    EPSILON,
    HIGH_VOLTAGE_THRESHOLD,
    RECOMMENDED_TOLERANCE,
)
from usbcharge.negotiator import NegotiationResult
from usbcharge.selector import mutual_standards
from usbcharge.specs import (
    AdapterSpec,
    CableSpec,
    DeviceSpec,
    MessageDescriptor,
    Part,
    Standard,
    message,
)


# ---------------------------------------------------------------------------
# Data containers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Diagnostics:
    """Limiting parts plus bottleneck and suggestion descriptors."""
    limiting_parts: tuple[Part, ...] = ()
    bottlenecks:    tuple[MessageDescriptor, ...] = ()
    suggestions:    tuple[MessageDescriptor, ...] = ()


NO_COMMON_STANDARD = Diagnostics(
    limiting_parts=(Part.ADAPTER, Part.CABLE, Part.DEVICE),
    bottlenecks=(message("no_common_standard"),),
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def meets_recommended(power_w: float, device: DeviceSpec) -> bool:
    """True if ``power_w`` is within tolerance of the device's recommended wattage."""
    return power_w >= device.recommended_w * RECOMMENDED_TOLERANCE - EPSILON


def _at_ceiling(value: float, ceiling: Optional[float]) -> bool:
    # 0 A / 0 W means nothing was negotiated, not that a part is saturated.
    return ceiling is not None and value > 0.0 and ceiling <= value + EPSILON


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def diagnose(
    negotiation: Optional[NegotiationResult],
    adapter: AdapterSpec,
    cable: CableSpec,
    device: DeviceSpec,
) -> Diagnostics:
    """Explain what limits ``negotiation`` and how to improve it.

    Args:
        negotiation: Negotiated point, or ``None`` when no common standard
                     exists.
        adapter:     Power adapter record.
        cable:       Cable record.
        device:      Device record.

    Returns:
        :class:`Diagnostics`. With no negotiation every part is limiting and
        a single ``no_common_standard`` bottleneck is reported.
    """
    if negotiation is None:
        return NO_COMMON_STANDARD

    standard = negotiation.standard
    limiting: list[Part] = []
    bottlenecks: list[MessageDescriptor] = []
    suggestions: list[MessageDescriptor] = []

    # ------------------------------------------------------------------
    # Per-quantity ceilings
    # ------------------------------------------------------------------
    quantities = (
        ("bottleneck_voltage", negotiation.voltage_v, lambda lim: lim.voltage_v),
        ("bottleneck_current", negotiation.current_a, lambda lim: lim.current_a),
        ("bottleneck_power", negotiation.power_w, lambda lim: lim.power_w),
    )
    for key, value, ceiling_of in quantities:
        for part, lim in negotiation.limits.items():
            ceiling = ceiling_of(lim)
            if _at_ceiling(value, ceiling):
                bottlenecks.append(message(key, part=part.value, limit=round(ceiling, 2)))
                if part not in limiting:
                    limiting.append(part)

    # ------------------------------------------------------------------
    # Standard-level bottlenecks
    # ------------------------------------------------------------------
    if standard is Standard.PD_31_EPR and not cable.e_marked:
        bottlenecks.append(message("bottleneck_epr_cable"))
        if Part.CABLE not in limiting:
            limiting.append(Part.CABLE)
    if cable.uses_usb_a and not is_allowed_on_usb_a(standard):
        bottlenecks.append(message("bottleneck_usb_a_pd", standard=standard.value))
        if Part.CABLE not in limiting:
            limiting.append(Part.CABLE)

    # ------------------------------------------------------------------
    # Suggestions
    # ------------------------------------------------------------------
    if not meets_recommended(negotiation.power_w, device):
        suggestions.append(message(
            "suggest_below_recommended",
            powerW=round(negotiation.power_w, 1),
            recommendedW=device.recommended_w,
        ))
    if negotiation.voltage_v >= HIGH_VOLTAGE_THRESHOLD - EPSILON and cable.max_a < EMARKED_CURRENT:
        suggestions.append(message("suggest_emarked_cable", maxA=cable.max_a))
    if adapter.max_w < device.recommended_w:
        suggestions.append(message(
            "suggest_upgrade_adapter",
            maxW=adapter.max_w,
            recommendedW=device.recommended_w,
        ))
    if cable.max_w is not None and cable.max_w < device.recommended_w:
        suggestions.append(message("suggest_higher_rated_cable", maxW=cable.max_w))
    if Standard.PD_31_EPR in device.standards and Standard.PD_31_EPR not in adapter.standards:
        suggestions.append(message("suggest_epr_adapter"))
    if standard is Standard.PD_31_EPR and not cable.e_marked:
        suggestions.append(message("suggest_epr_cable"))
    if cable.uses_usb_a and is_allowed_on_usb_a(standard):
        blocked = [
            s for s in mutual_standards(adapter.standards, device.standards)
            if not is_allowed_on_usb_a(s)
        ]
        if blocked:
            suggestions.append(message("suggest_switch_usb_c", standard=blocked[0].value))

    ordered = tuple(p for p in (Part.ADAPTER, Part.CABLE, Part.DEVICE) if p in limiting)
    return Diagnostics(
        limiting_parts=ordered,
        bottlenecks=tuple(bottlenecks),
        suggestions=tuple(suggestions),
    )
