"""
tests/test_charge_time.py
=========================
USB Charging Estimator — Unit Tests for Charge-Time Estimation

Verifies the closed-form estimator against hand-computed values and checks
that the forward Euler charge curve ends at the same time.

Hand-computed values under test:
    iPad Pro 11 @ 45 W   31 Wh · 0.6 / 45 · 1.15 · 60  = 28.52 → 29 min
    iPhone 15 Pro @ 20 W 12.6049 Wh · 0.6 / 20 · 1.30 · 60 = 29.50 min
    Legacy iPad @ 12 W   32.4 Wh · 0.6 / 12 · 1.15 · 60 = 111.78 → 112 min

All float comparisons use pytest.approx().
"""

import pytest

from usbcharge.battery_model import ChargeCurveModel
from usbcharge.catalog import get_device
from usbcharge.charge_time import (
    effective_power,
    estimate_charge_hours,
    estimate_charge_time,
    resolve_battery_wh,
    taper_factor,
)
from usbcharge.config import TAPER_AT_RECOMMENDED, TAPER_LOW_POWER, TAPER_NEAR_RECOMMENDED
from usbcharge.specs import DeviceSpec, Standard


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def ipad_pro():
    return get_device("iPad Pro 11 (M4)")


@pytest.fixture
def iphone():
    return get_device("Apple iPhone 15 Pro")


@pytest.fixture
def legacy_ipad():
    return get_device("Legacy iPad (Lightning)")


# ---------------------------------------------------------------------------
# Battery capacity
# ---------------------------------------------------------------------------

class TestBatteryCapacity:

    def test_direct_watt_hours(self, ipad_pro):
        assert resolve_battery_wh(ipad_pro) == pytest.approx(31.0)

    def test_derived_from_mah_and_nominal_voltage(self, iphone):
        """3274 mAh × 3.85 V / 1000 = 12.6049 Wh."""
        assert resolve_battery_wh(iphone) == pytest.approx(12.6049, rel=1e-9)

    def test_direct_value_preferred_over_mah(self):
        device = get_device("Steam Deck OLED")
        assert resolve_battery_wh(device) == pytest.approx(50.1)

    def test_unknown_without_nominal_voltage(self):
        device = DeviceSpec("d", 20, 20, 9, battery_mah=3000)
        assert resolve_battery_wh(device) is None


# ---------------------------------------------------------------------------
# Taper model
# ---------------------------------------------------------------------------

class TestTaper:

    def test_at_or_above_recommended(self):
        assert taper_factor(35.0, 35.0) == TAPER_AT_RECOMMENDED

    def test_near_recommended(self):
        assert taper_factor(20.0, 27.0) == TAPER_NEAR_RECOMMENDED

    def test_low_power(self):
        assert taper_factor(12.0, 27.0) == TAPER_LOW_POWER

    def test_effective_power_capped_by_device(self, ipad_pro):
        assert effective_power(100.0, ipad_pro) == pytest.approx(45.0)


# ---------------------------------------------------------------------------
# Closed-form estimate
# ---------------------------------------------------------------------------

class TestEstimate:

    def test_ipad_at_full_power(self, ipad_pro):
        assert estimate_charge_time(45.0, ipad_pro) == 29

    def test_iphone_on_20w(self, iphone):
        hours = estimate_charge_hours(20.0, iphone)
        assert hours * 60 == pytest.approx(12.6049 * 0.6 / 20.0 * 1.3 * 60, rel=1e-9)
        assert estimate_charge_time(20.0, iphone) in (29, 30)

    def test_legacy_ipad_on_12w(self, legacy_ipad):
        assert estimate_charge_time(12.0, legacy_ipad) == 112

    def test_power_above_device_max_does_not_speed_up(self, ipad_pro):
        assert estimate_charge_time(200.0, ipad_pro) == estimate_charge_time(45.0, ipad_pro)

    def test_more_power_never_slower(self, ipad_pro):
        times = [estimate_charge_time(p, ipad_pro) for p in (5, 10, 15, 20, 30, 35, 45)]
        assert times == sorted(times, reverse=True)

    def test_unknown_capacity_is_none(self):
        device = DeviceSpec("d", 20, 20, 9, standards={Standard.PD_30})
        assert estimate_charge_time(20.0, device) is None

    @pytest.mark.parametrize("power", [0.0, 0.05, 0.1])
    def test_negligible_power_is_none(self, power, ipad_pro):
        assert estimate_charge_time(power, ipad_pro) is None

    def test_mah_only_device_gives_positive_finite_minutes(self):
        device = DeviceSpec(
            "mAh phone", recommended_w=25, max_w=25, max_v=9,
            battery_mah=5000, nominal_v=3.85, standards={Standard.PD_30},
        )
        minutes = estimate_charge_time(25.0, device)
        # 19.25 Wh · 0.6 / 25 · 1.15 · 60
        assert minutes == round(19.25 * 0.6 / 25.0 * 1.15 * 60)
        assert 0 < minutes < 10_000


# ---------------------------------------------------------------------------
# Charge curve (forward Euler)
# ---------------------------------------------------------------------------

class TestChargeCurve:

    def test_starts_and_stops_at_window_bounds(self, ipad_pro):
        curve = ChargeCurveModel.for_device(ipad_pro).simulate(power_w=45.0)
        assert curve.steps[0].soc == pytest.approx(0.20)
        assert curve.steps[0].time_min == 0.0
        assert curve.steps[-1].soc == pytest.approx(0.80)

    def test_end_time_matches_closed_form(self, ipad_pro):
        model = ChargeCurveModel.for_device(ipad_pro)
        curve = model.simulate_for(45.0, ipad_pro, dt_min=1.0)
        expected_min = estimate_charge_hours(45.0, ipad_pro) * 60
        assert curve.time_to_stop_min == pytest.approx(expected_min, rel=1e-9)

    def test_soc_monotonic(self, iphone):
        curve = ChargeCurveModel.for_device(iphone).simulate_for(20.0, iphone, dt_min=0.5)
        socs = [s.soc for s in curve.steps]
        assert socs == sorted(socs)
        assert all(s.delta_e_wh >= 0.0 for s in curve.steps)

    def test_zero_power_never_reaches_stop(self, ipad_pro):
        curve = ChargeCurveModel.for_device(ipad_pro).simulate(power_w=0.0)
        assert len(curve.steps) == 1
        assert curve.time_to_stop_min is None

    def test_duration_bound_respected(self, ipad_pro):
        curve = ChargeCurveModel.for_device(ipad_pro).simulate(power_w=1.0, max_duration_min=30.0)
        assert curve.steps[-1].time_min == pytest.approx(30.0)
        assert curve.time_to_stop_min is None


class TestChargeCurveGuards:

    def test_unknown_capacity_raises(self):
        with pytest.raises(ValueError, match="unknown"):
            ChargeCurveModel.for_device(DeviceSpec("d", 20, 20, 9))

    def test_non_positive_capacity_raises(self):
        with pytest.raises(ValueError, match="capacity"):
            ChargeCurveModel(0.0)

    def test_inverted_window_raises(self):
        with pytest.raises(ValueError, match="SoC window"):
            ChargeCurveModel(50.0, start_soc=0.8, stop_soc=0.2)

    def test_non_positive_timestep_raises(self):
        with pytest.raises(ValueError, match="Timestep"):
            ChargeCurveModel(50.0).simulate(power_w=20.0, dt_min=0.0)

    def test_taper_below_one_raises(self):
        with pytest.raises(ValueError, match="Taper"):
            ChargeCurveModel(50.0).simulate(power_w=20.0, taper=0.9)
