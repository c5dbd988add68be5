"""
usbcharge/selector.py
=====================
USB Charging Estimator — Standard Selector

Picks the standard to evaluate: the caller's explicit choice, or under
``"Auto"`` the most capable mutually supported standard that passes the
compatibility check and can reach its voltage floor.
"""

from __future__ import annotations

import logging
from typing import Iterable

from usbcharge.compatibility import check_compatibility
from usbcharge.config import FALLBACK_STANDARD, STANDARD_PRIORITY
from usbcharge.negotiator import negotiate_voltage
from usbcharge.specs import AUTO, AdapterSpec, CableSpec, DeviceSpec, Selection, Standard

logger = logging.getLogger(__name__)


def mutual_standards(
    adapter_standards: Iterable[Standard],
    device_standards: Iterable[Standard],
) -> list[Standard]:
    """Standards listed by both sides, ordered most capable first."""
    adapter_set = set(adapter_standards)
    device_set = set(device_standards)
    return [s for s in STANDARD_PRIORITY if s in adapter_set and s in device_set]


def is_viable(
    standard: Standard,
    adapter: AdapterSpec,
    cable: CableSpec,
    device: DeviceSpec,
) -> bool:
    """True if ``standard`` passes every rule and the chain reaches its voltage floor."""
    if not check_compatibility(standard, adapter, cable, device).compatible:
        return False
    return negotiate_voltage(standard, adapter, cable, device) > 0.0


def select_standard(
    adapter_standards: Iterable[Standard],
    device_standards: Iterable[Standard],
    selection: Selection,
    *,
    adapter: AdapterSpec,
    cable: CableSpec,
    device: DeviceSpec,
) -> Standard:
    """Resolve a selection directive to a concrete standard.

    An explicit standard is returned unchanged; its viability is reported
    by the compatibility checker, not corrected here. ``"Auto"`` walks the
    mutual candidates in priority order and returns the first viable one
    (fully compatible, and the chain reaches the standard's voltage floor),
    falling back to USB BC 1.2.

    Args:
        adapter_standards: Standards supported by the adapter.
        device_standards:  Standards supported by the device.
        selection:         ``"Auto"`` or a :class:`Standard` (or its value).
        adapter, cable, device: Records used for the compatibility check.

    Returns:
        The standard to negotiate.

    Raises:
        ValueError: If ``selection`` is neither ``"Auto"`` nor a known standard.
    """
    if selection != AUTO:
        return Standard(selection)

    for candidate in mutual_standards(adapter_standards, device_standards):
        if is_viable(candidate, adapter, cable, device):
            logger.debug("Auto selected %s", candidate.value)
            return candidate

    logger.debug("No compatible candidate; falling back to %s", FALLBACK_STANDARD.value)
    return FALLBACK_STANDARD
