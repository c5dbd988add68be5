"""
usbcharge/engine.py
===================
USB Charging Estimator — Simulation Engine

Connects the engine stages into one pure call:

    1. Select the standard           (selector.select_standard)
    2. Validate it                   (compatibility.check_compatibility)
    3. Negotiate V / I / P           (negotiator.negotiate)
    4. Diagnose bottlenecks          (diagnostics.diagnose)
    5. Estimate charge time          (charge_time.estimate_charge_time)

Failure cases are result states, never exceptions:
    - Auto finds no viable standard → ``standard=None``, zero power,
      ``no_common_standard``, all parts limiting.
    - Forced standard is incompatible → negotiated anyway, reasons listed
      in ``incompatibilities``.
    - Unknown battery → ``charge_time_min=None``.
"""

from __future__ import annotations

import logging

from usbcharge.charge_time import estimate_charge_time
from usbcharge.compatibility import check_compatibility
from usbcharge.diagnostics import diagnose, meets_recommended
from usbcharge.negotiator import negotiate
from usbcharge.selector import is_viable, select_standard
from usbcharge.specs import AUTO, AdapterSpec, CableSpec, DeviceSpec, Selection, SimulationResult

logger = logging.getLogger(__name__)


def simulate(
    adapter: AdapterSpec,
    cable: CableSpec,
    device: DeviceSpec,
    selection: Selection = AUTO,
) -> SimulationResult:
    """Estimate the charging outcome for one adapter/cable/device chain.

    Args:
        adapter:   Power adapter record.
        cable:     Cable record.
        device:    Device record.
        selection: ``"Auto"`` or an explicit standard.

    Returns:
        A new :class:`SimulationResult`; inputs are not modified.

    Raises:
        ValueError: If ``selection`` names an unknown standard.
    """
    standard = select_standard(
        adapter.standards,
        device.standards,
        selection,
        adapter=adapter,
        cable=cable,
        device=device,
    )
    compatibility = check_compatibility(standard, adapter, cable, device)

    if selection == AUTO and not is_viable(standard, adapter, cable, device):
        logger.debug("No common standard for %s / %s / %s", adapter.name, cable.name, device.name)
        diagnostics = diagnose(None, adapter, cable, device)
        return SimulationResult(
            standard=None,
            voltage_v=0.0,
            current_a=0.0,
            power_w=0.0,
            meets_recommended=False,
            charge_time_min=None,
            limiting_parts=diagnostics.limiting_parts,
            bottlenecks=diagnostics.bottlenecks,
            suggestions=diagnostics.suggestions,
            incompatibilities=compatibility.reasons,
        )

    negotiation = negotiate(standard, adapter, cable, device)
    diagnostics = diagnose(negotiation, adapter, cable, device)

    return SimulationResult(
        standard=standard,
        voltage_v=round(float(negotiation.voltage_v), 1),
        current_a=round(float(negotiation.current_a), 2),
        power_w=round(float(negotiation.power_w), 1),
        meets_recommended=meets_recommended(negotiation.power_w, device),
        charge_time_min=estimate_charge_time(negotiation.power_w, device),
        limiting_parts=diagnostics.limiting_parts,
        bottlenecks=diagnostics.bottlenecks,
        suggestions=diagnostics.suggestions,
        incompatibilities=compatibility.reasons,
    )
