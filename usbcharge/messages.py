"""
usbcharge/messages.py
=====================
USB Charging Estimator — Message Templates

Resolves engine :class:`~usbcharge.specs.MessageDescriptor` values to
display strings for a locale. The engine itself never formats prose.

Templates use ``{name}`` placeholders. Placeholders without a value are
left untouched. A ``part`` value is itself translated through the
``part_<value>`` template.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from usbcharge.specs import MessageDescriptor


EN: dict[str, str] = {
    # compatibility
    "adapter_lacks_usb_c": "The adapter has no USB-C port for this cable.",
    "adapter_lacks_usb_a": "The adapter has no USB-A port for this cable.",
    "device_needs_usb_c": "The device needs a cable with a USB-C end.",
    "device_needs_lightning": "The device needs a cable with a Lightning end.",
    "adapter_no_standard": "The adapter does not support {standard}.",
    "device_no_standard": "The device does not support {standard}.",
    "usb_a_cable_no_pd": "{standard} cannot be negotiated over a USB-A cable.",
    "epr_requires_cable": "USB PD 3.1 EPR requires an EPR-rated (e-marked) cable.",
    "epr_requires_voltage": "USB PD 3.1 EPR requires adapter and device support for at least {minV} V.",
    # bottlenecks
    "no_common_standard": "Adapter and device share no usable charging standard.",
    "bottleneck_voltage": "The {part} caps voltage at {limit} V.",
    "bottleneck_current": "The {part} caps current at {limit} A.",
    "bottleneck_power": "The {part} caps power at {limit} W.",
    "bottleneck_epr_cable": "The cable is not EPR-rated, so EPR voltages are unavailable.",
    "bottleneck_usb_a_pd": "{standard} is unavailable over USB-A.",
    # suggestions
    "suggest_below_recommended": "Expect {powerW} W, below the device's recommended {recommendedW} W.",
    "suggest_emarked_cable": "At 20 V and above, a 5 A e-marked cable would lift the {maxA} A limit.",
    "suggest_upgrade_adapter": "Use an adapter rated for at least {recommendedW} W (currently {maxW} W).",
    "suggest_higher_rated_cable": "Use a cable rated above {maxW} W.",
    "suggest_epr_adapter": "The device supports EPR; an EPR-capable adapter would charge faster.",
    "suggest_epr_cable": "Use an EPR-rated (240 W) cable.",
    "suggest_switch_usb_c": "Switch to a USB-C to USB-C path to use {standard}.",
    # parts
    "part_adapter": "adapter",
    "part_cable": "cable",
    "part_device": "device",
    # time
    "time_format": "{hrs} h {mins} min",
    "not_available": "N/A",
}

JA: dict[str, str] = {
    "adapter_lacks_usb_c": "アダプタにこのケーブル用のUSB-Cポートがありません。",
    "adapter_lacks_usb_a": "アダプタにこのケーブル用のUSB-Aポートがありません。",
    "device_needs_usb_c": "デバイスにはUSB-C端子のケーブルが必要です。",
    "device_needs_lightning": "デバイスにはLightning端子のケーブルが必要です。",
    "adapter_no_standard": "アダプタは{standard}に対応していません。",
    "device_no_standard": "デバイスは{standard}に対応していません。",
    "usb_a_cable_no_pd": "USB-Aケーブルでは{standard}をネゴシエートできません。",
    "epr_requires_cable": "USB PD 3.1 EPRにはEPR対応(eMarker付き)ケーブルが必要です。",
    "epr_requires_voltage": "USB PD 3.1 EPRにはアダプタとデバイスの{minV}V以上の対応が必要です。",
    "no_common_standard": "アダプタとデバイスに共通の充電規格がありません。",
    "bottleneck_voltage": "{part}が電圧を{limit}Vに制限しています。",
    "bottleneck_current": "{part}が電流を{limit}Aに制限しています。",
    "bottleneck_power": "{part}が電力を{limit}Wに制限しています。",
    "bottleneck_epr_cable": "ケーブルがEPR非対応のため、EPR電圧は使えません。",
    "bottleneck_usb_a_pd": "USB-Aでは{standard}を利用できません。",
    "suggest_below_recommended": "推定{powerW}Wで、推奨の{recommendedW}Wを下回ります。",
    "suggest_emarked_cable": "20V以上では5A eMarkerケーブルで{maxA}Aの制限を解除できます。",
    "suggest_upgrade_adapter": "{recommendedW}W以上のアダプタを使用してください(現在{maxW}W)。",
    "suggest_higher_rated_cable": "{maxW}Wより高定格のケーブルを使用してください。",
    "suggest_epr_adapter": "デバイスはEPR対応です。EPR対応アダプタでより速く充電できます。",
    "suggest_epr_cable": "EPR対応(240W)ケーブルを使用してください。",
    "suggest_switch_usb_c": "{standard}を使うにはUSB-C to USB-C構成に切り替えてください。",
    "part_adapter": "アダプタ",
    "part_cable": "ケーブル",
    "part_device": "デバイス",
    "time_format": "{hrs}時間{mins}分",
    "not_available": "N/A",
}

TRANSLATIONS: dict[str, dict[str, str]] = {"en": EN, "ja": JA}

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def _table(locale: str) -> dict[str, str]:
    try:
        return TRANSLATIONS[locale]
    except KeyError:
        raise ValueError(
            f"Unsupported locale {locale!r}; expected one of {sorted(TRANSLATIONS)}"
        ) from None


def format_message(template: str, values: Optional[dict[str, Any]] = None) -> str:
    """Substitute ``{name}`` placeholders; unknown names are kept verbatim."""
    if not values:
        return template
    return _PLACEHOLDER.sub(
        lambda m: str(values[m.group(1)]) if m.group(1) in values else m.group(0),
        template,
    )


def render(descriptor: MessageDescriptor, locale: str = "en") -> str:
    """Display string for ``descriptor`` in ``locale``.

    Raises:
        ValueError: If ``locale`` is not supported.
        KeyError:   If the descriptor key has no template.
    """
    table = _table(locale)
    values = dict(descriptor.values)
    if "part" in values:
        values["part"] = table.get(f"part_{values['part']}", values["part"])
    return format_message(table[descriptor.key], values)


def format_charge_time(minutes: Optional[int], locale: str = "en") -> str:
    """``"{hrs} h {mins} min"`` style text, or the not-available sentinel."""
    table = _table(locale)
    if minutes is None or minutes <= 0:
        return table["not_available"]
    hrs, mins = divmod(minutes, 60)
    return format_message(table["time_format"], {"hrs": hrs, "mins": mins})
