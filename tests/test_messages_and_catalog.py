"""
tests/test_messages_and_catalog.py
==================================
USB Charging Estimator — Message Rendering and Preset Catalog
"""

import re

import pytest

from usbcharge.catalog import ADAPTERS, CABLES, DEVICES, get_adapter, get_cable, get_device
from usbcharge.engine import simulate
from usbcharge.messages import EN, JA, TRANSLATIONS, format_charge_time, format_message, render
from usbcharge.specs import MessageDescriptor, Standard, message


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

class TestTemplates:

    def test_locales_share_keys(self):
        assert set(EN) == set(JA)

    def test_locales_share_placeholders(self):
        for key in EN:
            assert set(re.findall(r"\{(\w+)\}", EN[key])) == set(re.findall(r"\{(\w+)\}", JA[key])), key

    def test_every_engine_key_has_a_template(self):
        emitted = set()
        for adapter in ADAPTERS:
            for cable in CABLES:
                for device in DEVICES:
                    for selection in ("Auto", *Standard):
                        r = simulate(adapter, cable, device, selection)
                        emitted.update(d.key for d in (*r.bottlenecks, *r.suggestions, *r.incompatibilities))
        for table in TRANSLATIONS.values():
            assert emitted <= set(table)


class TestRender:

    def test_plain_key(self):
        assert render(message("epr_requires_cable")) == EN["epr_requires_cable"]

    def test_interpolation(self):
        text = render(message("suggest_upgrade_adapter", maxW=20, recommendedW=27))
        assert "27" in text and "20" in text

    def test_part_is_translated(self):
        descriptor = message("bottleneck_power", part="adapter", limit=20.0)
        assert render(descriptor, "en") == "The adapter caps power at 20.0 W."
        assert render(descriptor, "ja").startswith("アダプタ")

    def test_missing_value_left_as_placeholder(self):
        assert format_message("{a} and {b}", {"a": 1}) == "1 and {b}"

    def test_no_values_returns_template(self):
        assert format_message("{a}", None) == "{a}"

    def test_unknown_locale_raises(self):
        with pytest.raises(ValueError, match="locale"):
            render(MessageDescriptor("no_common_standard"), "fr")

    def test_unknown_key_raises(self):
        with pytest.raises(KeyError):
            render(MessageDescriptor("not_a_key"))


class TestChargeTimeFormat:

    def test_hours_and_minutes(self):
        assert format_charge_time(95) == "1 h 35 min"
        assert format_charge_time(95, "ja") == "1時間35分"

    def test_under_an_hour(self):
        assert format_charge_time(29) == "0 h 29 min"

    @pytest.mark.parametrize("minutes", [None, 0])
    def test_not_available(self, minutes):
        assert format_charge_time(minutes) == "N/A"


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

class TestCatalog:

    def test_lookup_by_name_is_case_insensitive(self):
        assert get_adapter("apple 20w usb-c power adapter") is ADAPTERS[0]

    def test_lookup_by_index(self):
        assert get_cable(0) is CABLES[0]
        assert get_device(len(DEVICES) - 1) is DEVICES[-1]

    def test_unknown_name_raises_key_error(self):
        with pytest.raises(KeyError, match="Unknown device"):
            get_device("Nokia 3310")

    def test_bad_index_raises_index_error(self):
        with pytest.raises(IndexError):
            get_adapter(len(ADAPTERS))

    def test_names_unique(self):
        for records in (ADAPTERS, CABLES, DEVICES):
            names = [r.name for r in records]
            assert len(names) == len(set(names))

    def test_presets_are_frozen(self):
        with pytest.raises(AttributeError):
            ADAPTERS[0].max_w = 999
