"""
usbcharge/catalog.py
====================
USB Charging Estimator — Preset Catalog

Read-only presets for common adapters, cables and devices. Values are
manufacturer ratings for a single port; multi-port chargers list their
single-port maximum.

Rules:
    - Data only; no negotiation logic.
    - Tuples of frozen records, safe to share between callers.
"""

from __future__ import annotations

from typing import Sequence, TypeVar, Union

from usbcharge.specs import (
    AdapterSpec,
    CableSpec,
    Connector,
    DeviceSpec,
    Port,
    Standard,
)

C = Connector
S = Standard


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------

ADAPTERS: tuple[AdapterSpec, ...] = (
    AdapterSpec(
        name="Apple 20W USB-C Power Adapter",
        max_w=20, max_v=9,
        standards={S.PD_30, S.APPLE_24A},
        notes="Common iPhone charger. No PPS.",
    ),
    AdapterSpec(
        name="Apple 35W Dual USB-C Adapter",
        max_w=35, max_v=20,
        standards={S.PD_30},
    ),
    AdapterSpec(
        name="Anker 715 (Nano II) 65W",
        max_w=65, max_v=20,
        standards={S.PD_30, S.PD_PPS, S.QC_4_PLUS, S.APPLE_24A},
        notes="Single-port 65W with PPS.",
    ),
    AdapterSpec(
        name="Anker 737 (GaNPrime) 120W",
        max_w=100, max_v=20, max_a=5,
        standards={S.PD_30, S.PD_PPS, S.QC_30, S.APPLE_24A},
        notes="120W across three ports; 100W max from a single port.",
    ),
    AdapterSpec(
        name="Belkin BoostCharge Pro 4-Port GaN 108W",
        max_w=96, max_v=20,
        standards={S.PD_30, S.APPLE_24A},
        ports={Port.USB_C, Port.USB_A},
        notes="108W total; 96W max from a single USB-C port.",
    ),
    AdapterSpec(
        name="Samsung 45W USB-C Charger",
        max_w=45, max_v=21,
        standards={S.PD_PPS, S.PD_30},
        notes="Super Fast Charging 2.0 over PPS.",
    ),
    AdapterSpec(
        name="Nintendo Switch OEM Adapter",
        max_w=39, max_v=15,
        standards={S.PD_30},
    ),
    AdapterSpec(
        name="Apple 140W USB-C Power Adapter",
        max_w=140, max_v=28,
        standards={S.PD_31_EPR, S.PD_30},
        notes="PD 3.1 EPR; intended for MacBook Pro 16.",
    ),
    AdapterSpec(
        name="UGREEN 300W (PD 3.1 EPR)",
        max_w=300, max_v=48,
        standards={S.PD_31_EPR, S.PD_30},
    ),
    AdapterSpec(
        name="Generic 12W USB-A",
        max_w=12, max_v=5, max_a=2.4,
        standards={S.APPLE_24A, S.BC_12},
        ports={Port.USB_A},
    ),
)


# ---------------------------------------------------------------------------
# Cables
# ---------------------------------------------------------------------------

CABLES: tuple[CableSpec, ...] = (
    CableSpec(
        name="Generic USB-C 3A (60W)",
        connector=(C.USB_C, C.USB_C),
        max_a=3, max_v=20, max_w=60,
        usb_version="USB 2.0",
        notes="Typical C-to-C cable without e-marker.",
    ),
    CableSpec(
        name="USB-C to USB-C 5A / 100W (eMarked)",
        connector=(C.USB_C, C.USB_C),
        max_a=5, max_v=20, max_w=100, e_marked=True,
        usb_version="USB 3.2",
    ),
    CableSpec(
        name="Baseus 240W USB-C to USB-C (EPR)",
        connector=(C.USB_C, C.USB_C),
        max_a=5, max_v=48, max_w=240, e_marked=True,
        usb_version="USB 4",
        notes="PD 3.1 EPR rated.",
    ),
    CableSpec(
        name="Apple 240W USB-C Charge Cable (2 m)",
        connector=(C.USB_C, C.USB_C),
        max_a=5, max_v=48, max_w=240, e_marked=True,
        usb_version="USB 2.0",
        notes="PD 3.1 EPR rated, braided.",
    ),
    CableSpec(
        name="USB-A to USB-C (legacy)",
        connector=(C.USB_A, C.USB_C),
        max_a=2.4, max_v=5,
        usb_version="USB 2.0",
        notes="Roughly 12W to 15W at most.",
    ),
    CableSpec(
        name="Anker PowerLine+ USB-A to USB-C",
        connector=(C.USB_A, C.USB_C),
        max_a=3, max_v=5,
        usb_version="USB 3.0",
        notes="5V 3A charging.",
    ),
    CableSpec(
        name="Apple USB-C to Lightning Cable (1 m)",
        connector=(C.USB_C, C.LIGHTNING),
        max_a=3, max_v=20,
        usb_version="USB 2.0",
        notes="MFi certified; supports PD fast charging.",
    ),
    CableSpec(
        name="Apple USB-A to Lightning",
        connector=(C.USB_A, C.LIGHTNING),
        max_a=2.4, max_v=5,
        usb_version="USB 2.0",
        notes="Apple 5V 2.4A (12W).",
    ),
)


# ---------------------------------------------------------------------------
# Devices
# ---------------------------------------------------------------------------

DEVICES: tuple[DeviceSpec, ...] = (
    DeviceSpec(
        name="Apple iPhone 15 Pro",
        recommended_w=27, max_w=30, max_v=9, max_a=3,
        battery_mah=3274, nominal_v=3.85,
        standards={S.PD_30, S.PD_PPS, S.APPLE_24A, S.BC_12},
        notes="Peaks around 27W.",
    ),
    DeviceSpec(
        name="Legacy iPad (Lightning)",
        recommended_w=12, max_w=12, max_v=5, max_a=2.4,
        battery_wh=32.4,
        standards={S.APPLE_24A, S.BC_12},
        connector=C.LIGHTNING,
    ),
    DeviceSpec(
        name="iPad Pro 11 (M4)",
        recommended_w=35, max_w=45, max_v=15, max_a=3,
        battery_wh=31,
        standards={S.PD_30, S.PD_PPS},
    ),
    DeviceSpec(
        name="MacBook Air 13 (M2/M3)",
        recommended_w=35, max_w=45, max_v=20, max_a=2.25,
        battery_wh=52,
        standards={S.PD_30},
    ),
    DeviceSpec(
        name="MacBook Pro 14 (M3)",
        recommended_w=70, max_w=96, max_v=20, max_a=5,
        battery_wh=70,
        standards={S.PD_31_EPR, S.PD_30},
    ),
    DeviceSpec(
        name="MacBook Pro 16 (M3 Max)",
        recommended_w=140, max_w=140, max_v=28, max_a=5,
        battery_wh=100, battery_mah=8700, nominal_v=11.4,
        standards={S.PD_31_EPR, S.PD_30},
        notes="140W charging over PD 3.1 (28V/5A).",
    ),
    DeviceSpec(
        name="Nintendo Switch",
        recommended_w=18, max_w=39, max_v=15, max_a=2.6,
        battery_wh=16,
        standards={S.PD_30},
    ),
    DeviceSpec(
        name="Google Pixel 8 Pro",
        recommended_w=30, max_w=30, max_v=11, max_a=3,
        battery_mah=5050, nominal_v=3.85,
        standards={S.PD_30, S.PD_PPS, S.QC_4_PLUS, S.BC_12},
        notes="30W fast charging over PPS.",
    ),
    DeviceSpec(
        name="Samsung Galaxy S24 Ultra",
        recommended_w=45, max_w=45, max_v=11, max_a=5,
        battery_mah=5000, nominal_v=3.85,
        standards={S.PD_PPS, S.PD_30, S.QC_4_PLUS},
        notes="Super Fast Charging 2.0.",
    ),
    DeviceSpec(
        name="Steam Deck OLED",
        recommended_w=45, max_w=45, max_v=15, max_a=3,
        battery_wh=50.1, battery_mah=6470, nominal_v=7.74,
        standards={S.PD_30, S.BC_12},
        notes="Fast charges from the bundled 45W (15V/3A) PD charger.",
    ),
)


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------

T = TypeVar("T", AdapterSpec, CableSpec, DeviceSpec)


def _lookup(records: Sequence[T], key: Union[str, int], kind: str) -> T:
    if isinstance(key, int):
        if not (0 <= key < len(records)):
            raise IndexError(f"{kind} index out of range: {key!r} (have {len(records)})")
        return records[key]
    wanted = key.strip().casefold()
    for record in records:
        if record.name.casefold() == wanted:
            return record
    raise KeyError(f"Unknown {kind} preset: {key!r}")


def get_adapter(key: Union[str, int]) -> AdapterSpec:
    """Adapter preset by exact (case-insensitive) name or index."""
    return _lookup(ADAPTERS, key, "adapter")


def get_cable(key: Union[str, int]) -> CableSpec:
    """Cable preset by exact (case-insensitive) name or index."""
    return _lookup(CABLES, key, "cable")


def get_device(key: Union[str, int]) -> DeviceSpec:
    """Device preset by exact (case-insensitive) name or index."""
    return _lookup(DEVICES, key, "device")
