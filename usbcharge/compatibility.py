"""
usbcharge/compatibility.py
==========================
USB Charging Estimator — Compatibility Checker

Decides whether a charging standard can be negotiated at all over a given
adapter/cable/device chain, and lists every reason when it cannot.

Rules (all evaluated, never short-circuited):
    1. Connector shape — cable ends must match adapter ports and the
       device receptacle.
    2. Mutual support — adapter and device both list the standard.
    3. USB-A restriction — only legacy standards travel over USB-A.
    4. EPR prerequisites — e-marked cable, and ≥ 28 V on adapter and device.
"""

from __future__ import annotations

from dataclasses import dataclass

from usbcharge.config import EPR_MIN_VOLTAGE, USB_A_ALLOWED_STANDARDS
from usbcharge.specs import (
    AdapterSpec,
    CableSpec,
    Connector,
    DeviceSpec,
    MessageDescriptor,
    Port,
    Standard,
    message,
)


# ---------------------------------------------------------------------------
# Data containers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Compatibility:
    """Outcome of a compatibility check.

    Attributes:
        compatible: True iff no rule fired.
        reasons:    One descriptor per violated rule, in rule order.
    """
    compatible: bool
    reasons:    tuple[MessageDescriptor, ...] = ()


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def check_connectors(
    adapter: AdapterSpec,
    cable: CableSpec,
    device: DeviceSpec,
) -> list[MessageDescriptor]:
    """Rule 1: physical fit of the cable ends."""
    reasons: list[MessageDescriptor] = []

    if cable.adapter_end is Connector.USB_C and Port.USB_C not in adapter.ports:
        reasons.append(message("adapter_lacks_usb_c"))
    if cable.adapter_end is Connector.USB_A and Port.USB_A not in adapter.ports:
        reasons.append(message("adapter_lacks_usb_a"))

    if device.connector is Connector.USB_C and cable.device_end is not Connector.USB_C:
        reasons.append(message("device_needs_usb_c"))
    if device.connector is Connector.LIGHTNING and cable.device_end is not Connector.LIGHTNING:
        reasons.append(message("device_needs_lightning"))

    return reasons


def is_allowed_on_usb_a(standard: Standard) -> bool:
    """True for the legacy standards that may be negotiated over USB-A."""
    return standard in USB_A_ALLOWED_STANDARDS


def check_compatibility(
    standard: Standard,
    adapter: AdapterSpec,
    cable: CableSpec,
    device: DeviceSpec,
) -> Compatibility:
    """Evaluate every negotiation prerequisite for ``standard``.

    Args:
        standard: Candidate charging standard.
        adapter:  Power adapter record.
        cable:    Cable record.
        device:   Device record.

    Returns:
        :class:`Compatibility` whose ``reasons`` hold one descriptor per
        violated rule, so callers can localise them.

    Example:
        >>> check_compatibility(Standard.PD_31_EPR, adapter, plain_cable, device).reasons
        (MessageDescriptor(key='epr_requires_cable', values={}),)
    """
    standard = Standard(standard)
    reasons = check_connectors(adapter, cable, device)

    if standard not in adapter.standards:
        reasons.append(message("adapter_no_standard", standard=standard.value))
    if standard not in device.standards:
        reasons.append(message("device_no_standard", standard=standard.value))

    if cable.uses_usb_a and not is_allowed_on_usb_a(standard):
        reasons.append(message("usb_a_cable_no_pd", standard=standard.value))

    if standard is Standard.PD_31_EPR:
        if not cable.e_marked:
            reasons.append(message("epr_requires_cable"))
        if min(adapter.max_v, device.max_v) < EPR_MIN_VOLTAGE:
            reasons.append(message("epr_requires_voltage", minV=EPR_MIN_VOLTAGE))

    return Compatibility(compatible=not reasons, reasons=tuple(reasons))
