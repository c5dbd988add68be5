"""
usbcharge/specs.py
==================
USB Charging Estimator — Component Records

Immutable descriptors for the three parts of a charging chain (adapter,
cable, device), the charging standards they may negotiate, and the
structured message descriptors the engine emits instead of prose.

Rules:
    - Records are frozen; user edits produce a new copy via
      :func:`with_overrides` / :func:`with_standards`.
    - Electrical limits are in Volts [V], Amperes [A] and Watts [W].
    - Battery capacity is in Wh, or mAh together with a nominal voltage.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable, Optional, Union


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Standard(str, Enum):
    """Charging negotiation protocols known to the engine."""

    PD_31_EPR = "USB PD 3.1 EPR"
    PD_PPS = "USB PD PPS"
    PD_30 = "USB PD 3.0/2.0"
    QC_4_PLUS = "Quick Charge 4+"
    QC_30 = "Quick Charge 3.0"
    APPLE_24A = "Apple 2.4A"
    BC_12 = "USB BC 1.2"

    def __str__(self) -> str:
        return self.value


class Port(str, Enum):
    USB_C = "USB-C"
    USB_A = "USB-A"


class Connector(str, Enum):
    USB_C = "USB-C"
    USB_A = "USB-A"
    LIGHTNING = "Lightning"


class Part(str, Enum):
    """A link in the adapter → cable → device chain."""

    ADAPTER = "adapter"
    CABLE = "cable"
    DEVICE = "device"


AUTO = "Auto"

Selection = Union[str, Standard]
"""Either the literal ``"Auto"`` or an explicit :class:`Standard`."""


# ---------------------------------------------------------------------------
# Message descriptors
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MessageDescriptor:
    """A localisable message: a template key plus interpolation values.

    Attributes:
        key:    Template key resolved by :mod:`usbcharge.messages`.
        values: Placeholder values (numbers or strings) for the template.
    """
    key:    str
    values: dict[str, Any] = field(default_factory=dict)


def message(key: str, **values: Any) -> MessageDescriptor:
    """Shorthand constructor used throughout the engine."""
    return MessageDescriptor(key=key, values=dict(values))


# ---------------------------------------------------------------------------
# Component records
# ---------------------------------------------------------------------------

def _require_non_negative(owner: str, **limits: Optional[float]) -> None:
    for name, value in limits.items():
        if value is not None and value < 0.0:
            raise ValueError(
                f"{owner} limits must be non-negative; received {name}={value!r}"
            )


@dataclass(frozen=True)
class AdapterSpec:
    """Power adapter (charger) limits.

    Attributes:
        name:       Display name.
        max_w:      Maximum output power [W].
        max_v:      Maximum output voltage [V].
        max_a:      Maximum output current [A]. ``None`` → derived as
                    ``max_w / negotiated voltage``.
        standards:  Supported charging standards.
        ports:      Physical ports exposed by the adapter.
        notes:      Optional free text.
    """
    name:      str
    max_w:     float
    max_v:     float
    max_a:     Optional[float] = None
    standards: frozenset[Standard] = frozenset()
    ports:     frozenset[Port] = frozenset({Port.USB_C})
    notes:     Optional[str] = None

    def __post_init__(self) -> None:
        _require_non_negative("Adapter", max_w=self.max_w, max_v=self.max_v, max_a=self.max_a)
        object.__setattr__(self, "standards", frozenset(Standard(s) for s in self.standards))
        object.__setattr__(self, "ports", frozenset(Port(p) for p in self.ports))


@dataclass(frozen=True)
class CableSpec:
    """Charging cable limits.

    ``connector`` is the ordered pair (adapter-side end, device-side end).
    ``e_marked`` flags a cable electronically rated for 5 A / EPR voltages.
    """
    name:        str
    connector:   tuple[Connector, Connector]
    max_a:       float
    max_v:       float
    max_w:       Optional[float] = None
    e_marked:    bool = False
    usb_version: Optional[str] = None
    notes:       Optional[str] = None

    def __post_init__(self) -> None:
        _require_non_negative("Cable", max_a=self.max_a, max_v=self.max_v, max_w=self.max_w)
        if len(self.connector) != 2:
            raise ValueError(
                f"Cable connector must be an (adapter_end, device_end) pair; "
                f"received connector={self.connector!r}"
            )
        adapter_end, device_end = self.connector
        object.__setattr__(self, "connector", (Connector(adapter_end), Connector(device_end)))

    @property
    def adapter_end(self) -> Connector:
        return self.connector[0]

    @property
    def device_end(self) -> Connector:
        return self.connector[1]

    @property
    def uses_usb_a(self) -> bool:
        """True if either end of the cable is USB-A."""
        return Connector.USB_A in self.connector

    @property
    def label(self) -> str:
        return f"{self.adapter_end.value} to {self.device_end.value}"


@dataclass(frozen=True)
class DeviceSpec:
    """Device (charging sink) limits and battery.

    Attributes:
        name:          Display name.
        recommended_w: Sustained wattage the device is designed to charge at [W].
        max_w:         Peak accepted power [W].
        max_v:         Maximum accepted voltage [V].
        max_a:         Maximum accepted current [A]; ``None`` → derived.
        standards:     Supported charging standards.
        connector:     Device receptacle (USB-C or Lightning).
        battery_wh:    Battery capacity [Wh], if known directly.
        battery_mah:   Battery capacity [mAh], used with ``nominal_v``.
        nominal_v:     Nominal cell/pack voltage [V].
        notes:         Optional free text.
    """
    name:          str
    recommended_w: float
    max_w:         float
    max_v:         float
    max_a:         Optional[float] = None
    standards:     frozenset[Standard] = frozenset()
    connector:     Connector = Connector.USB_C
    battery_wh:    Optional[float] = None
    battery_mah:   Optional[float] = None
    nominal_v:     Optional[float] = None
    notes:         Optional[str] = None

    def __post_init__(self) -> None:
        _require_non_negative(
            "Device",
            recommended_w=self.recommended_w,
            max_w=self.max_w,
            max_v=self.max_v,
            max_a=self.max_a,
            battery_wh=self.battery_wh,
            battery_mah=self.battery_mah,
            nominal_v=self.nominal_v,
        )
        connector = Connector(self.connector)
        if connector is Connector.USB_A:
            raise ValueError(
                f"Device connector must be USB-C or Lightning; received connector={self.connector!r}"
            )
        object.__setattr__(self, "connector", connector)
        object.__setattr__(self, "standards", frozenset(Standard(s) for s in self.standards))


ComponentSpec = Union[AdapterSpec, CableSpec, DeviceSpec]


# ---------------------------------------------------------------------------
# Copy-on-edit helpers
# ---------------------------------------------------------------------------

def with_overrides(spec: ComponentSpec, **changes: Any) -> ComponentSpec:
    """Return a copy of ``spec`` with user-edited fields replaced.

    Raises:
        TypeError:  If a field name does not exist on the record.
        ValueError: If an edited limit is negative.
    """
    return replace(spec, **changes)


def with_standards(
    spec: Union[AdapterSpec, DeviceSpec],
    standards: Iterable[Standard],
) -> Union[AdapterSpec, DeviceSpec]:
    """Return a copy of ``spec`` whose supported-standards set is ``standards``."""
    return replace(spec, standards=frozenset(standards))


def toggle_standard(
    spec: Union[AdapterSpec, DeviceSpec],
    standard: Standard,
) -> Union[AdapterSpec, DeviceSpec]:
    """Return a copy with ``standard`` added if absent, removed if present."""
    return with_standards(spec, spec.standards ^ {Standard(standard)})


# ---------------------------------------------------------------------------
# Result record
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SimulationResult:
    """Composite engine output for one adapter/cable/device combination.

    ``voltage_v``, ``current_a`` and ``power_w`` are display-rounded
    (1, 2 and 1 decimal places). ``charge_time_min`` is ``None`` when the
    battery capacity is unknown or the power is negligible.
    """
    standard:          Optional[Standard]
    voltage_v:         float
    current_a:         float
    power_w:           float
    meets_recommended: bool
    charge_time_min:   Optional[int]
    limiting_parts:    tuple[Part, ...] = ()
    bottlenecks:       tuple[MessageDescriptor, ...] = ()
    suggestions:       tuple[MessageDescriptor, ...] = ()
    incompatibilities: tuple[MessageDescriptor, ...] = ()

    @property
    def compatible(self) -> bool:
        return self.standard is not None and not self.incompatibilities
