"""
tests/test_compatibility.py
===========================
USB Charging Estimator — Unit Tests for the Compatibility Checker

Every rule is exercised on its own, then in combination to confirm that
rules are never short-circuited.
"""

import pytest

from usbcharge.catalog import get_adapter, get_cable, get_device
from usbcharge.compatibility import check_compatibility, check_connectors, is_allowed_on_usb_a
from usbcharge.specs import (
    AdapterSpec,
    CableSpec,
    Connector,
    DeviceSpec,
    Port,
    Standard,
    with_overrides,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def c_adapter():
    return AdapterSpec("C adapter", max_w=100, max_v=28, standards=set(Standard), ports={Port.USB_C})


@pytest.fixture
def a_adapter():
    return AdapterSpec("A adapter", max_w=12, max_v=5, standards=set(Standard), ports={Port.USB_A})


@pytest.fixture
def c_to_c():
    return CableSpec("C-C", connector=(Connector.USB_C, Connector.USB_C), max_a=5, max_v=48, e_marked=True)


@pytest.fixture
def c_device():
    return DeviceSpec("C device", recommended_w=60, max_w=100, max_v=28, standards=set(Standard))


def keys(compat):
    return [r.key for r in compat.reasons]


# ---------------------------------------------------------------------------
# Rule 1 — Connector shape
# ---------------------------------------------------------------------------

class TestConnectors:

    def test_matching_chain_has_no_reasons(self, c_adapter, c_to_c, c_device):
        assert check_connectors(c_adapter, c_to_c, c_device) == []

    def test_usb_c_cable_needs_usb_c_port(self, a_adapter, c_to_c, c_device):
        assert [r.key for r in check_connectors(a_adapter, c_to_c, c_device)] == ["adapter_lacks_usb_c"]

    def test_usb_a_cable_needs_usb_a_port(self, c_adapter, c_device):
        cable = CableSpec("A-C", connector=(Connector.USB_A, Connector.USB_C), max_a=3, max_v=5)
        assert [r.key for r in check_connectors(c_adapter, cable, c_device)] == ["adapter_lacks_usb_a"]

    def test_usb_a_only_adapter_with_a_to_c_cable(self, a_adapter, c_device):
        # the USB-C end plugs into the device, not the adapter
        cable = CableSpec("A-C", connector=(Connector.USB_A, Connector.USB_C), max_a=2.4, max_v=5)
        assert check_connectors(a_adapter, cable, c_device) == []

    def test_catalog_usb_a_brick_with_legacy_cable(self):
        compat = check_compatibility(
            Standard.APPLE_24A,
            get_adapter("Generic 12W USB-A"),
            get_cable("USB-A to USB-C (legacy)"),
            get_device("Apple iPhone 15 Pro"),
        )
        assert compat.compatible
        assert compat.reasons == ()

    def test_lightning_device_needs_lightning_end(self, c_adapter, c_to_c):
        device = DeviceSpec("L", 12, 12, 5, standards={Standard.APPLE_24A}, connector=Connector.LIGHTNING)
        assert [r.key for r in check_connectors(c_adapter, c_to_c, device)] == ["device_needs_lightning"]

    def test_usb_c_device_rejects_lightning_cable(self, c_adapter, c_device):
        cable = get_cable("Apple USB-C to Lightning Cable (1 m)")
        assert [r.key for r in check_connectors(c_adapter, cable, c_device)] == ["device_needs_usb_c"]


# ---------------------------------------------------------------------------
# Rules 2–4
# ---------------------------------------------------------------------------

class TestStandardRules:

    def test_fully_compatible(self, c_adapter, c_to_c, c_device):
        compat = check_compatibility(Standard.PD_31_EPR, c_adapter, c_to_c, c_device)
        assert compat.compatible is True
        assert compat.reasons == ()

    def test_adapter_and_device_both_missing_standard(self, c_adapter, c_to_c, c_device):
        adapter = with_overrides(c_adapter, standards={Standard.PD_30})
        device = with_overrides(c_device, standards={Standard.PD_30})
        compat = check_compatibility(Standard.QC_30, adapter, c_to_c, device)
        assert keys(compat) == ["adapter_no_standard", "device_no_standard"]
        assert compat.reasons[0].values == {"standard": "Quick Charge 3.0"}

    @pytest.mark.parametrize("standard", [Standard.PD_30, Standard.PD_PPS, Standard.PD_31_EPR, Standard.QC_4_PLUS])
    def test_pd_family_blocked_on_usb_a(self, standard, a_adapter):
        cable = get_cable("USB-A to USB-C (legacy)")
        device = DeviceSpec("d", 20, 30, 28, standards=set(Standard))
        assert "usb_a_cable_no_pd" in keys(check_compatibility(standard, a_adapter, cable, device))

    @pytest.mark.parametrize("standard", [Standard.BC_12, Standard.APPLE_24A, Standard.QC_30])
    def test_legacy_allowed_on_usb_a(self, standard, a_adapter):
        cable = get_cable("USB-A to USB-C (legacy)")
        device = DeviceSpec("d", 10, 12, 5, standards=set(Standard))
        assert check_compatibility(standard, a_adapter, cable, device).compatible
        assert is_allowed_on_usb_a(standard)

    def test_epr_requires_emarked_cable(self, c_adapter, c_device):
        cable = get_cable("Generic USB-C 3A (60W)")
        assert keys(check_compatibility(Standard.PD_31_EPR, c_adapter, cable, c_device)) == ["epr_requires_cable"]

    def test_epr_requires_28v_on_both_sides(self, c_adapter, c_to_c, c_device):
        device = with_overrides(c_device, max_v=20)
        compat = check_compatibility(Standard.PD_31_EPR, c_adapter, c_to_c, device)
        assert keys(compat) == ["epr_requires_voltage"]
        assert compat.reasons[0].values == {"minV": 28.0}

    def test_epr_voltage_rule_ignored_for_other_standards(self, c_adapter, c_to_c, c_device):
        device = with_overrides(c_device, max_v=20)
        assert check_compatibility(Standard.PD_30, c_adapter, c_to_c, device).compatible


class TestAllRulesEvaluated:

    def test_multiple_reasons_surface_together(self):
        adapter = get_adapter("Apple 20W USB-C Power Adapter")
        cable = get_cable("Apple USB-A to Lightning")
        device = get_device("MacBook Pro 16 (M3 Max)")
        compat = check_compatibility(Standard.PD_31_EPR, adapter, cable, device)
        assert compat.compatible is False
        assert keys(compat) == [
            "adapter_lacks_usb_a",
            "device_needs_usb_c",
            "adapter_no_standard",
            "usb_a_cable_no_pd",
            "epr_requires_cable",
            "epr_requires_voltage",
        ]

    def test_accepts_standard_value_string(self, c_adapter, c_to_c, c_device):
        assert check_compatibility("USB PD 3.0/2.0", c_adapter, c_to_c, c_device).compatible
