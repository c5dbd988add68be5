"""
usbcharge/battery_model.py
==========================
USB Charging Estimator — Charge-Curve Model

Time-stepped companion to :mod:`usbcharge.charge_time`: integrates stored
energy over the 20 % → 80 % window so the charge can be plotted as SoC vs
time.

Governing equation:
    dE/dt = P_eff / taper

Integration method: Forward Euler (explicit, fixed timestep)
    E(t + dt) = E(t) + P_eff / taper · dt

Scope:
    - Constant effective power; the taper multiplier stands in for the
      CV phase, so the curve ends at the same time as the closed-form
      estimate.
    - Energy is clamped to the stop SoC; the final step is shortened to
      land exactly on it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from usbcharge.charge_time import effective_power, resolve_battery_wh, taper_factor
from usbcharge.config import CHARGE_WINDOW_START_SOC, CHARGE_WINDOW_STOP_SOC
from usbcharge.specs import DeviceSpec


# ---------------------------------------------------------------------------
# Data containers
# ---------------------------------------------------------------------------

@dataclass
class ChargeStep:
    """Snapshot of the battery at a single timestep.

    Attributes:
        time_min:   Elapsed charging time [minutes].
        energy_wh:  Stored energy [Wh].
        soc:        State of charge as a fraction [0.0, 1.0].
        delta_e_wh: Energy added during this step [Wh].
    """
    time_min:   float
    energy_wh:  float
    soc:        float
    delta_e_wh: float


@dataclass
class ChargeCurve:
    """Complete time series from a charge-curve simulation.

    Attributes:
        steps:       Ordered ChargeStep snapshots, including t = 0.
        dt_min:      Fixed timestep [minutes].
        capacity_wh: Battery capacity [Wh].
        power_w:     Effective charging power [W].
        taper:       Taper multiplier applied to the power.
        stop_soc:    SoC at which charging stops.
    """
    steps:       list[ChargeStep] = field(default_factory=list)
    dt_min:      float = 0.0
    capacity_wh: float = 0.0
    power_w:     float = 0.0
    taper:       float = 1.0
    stop_soc:    float = 0.0

    @property
    def time_to_stop_min(self) -> Optional[float]:
        """Time at which the stop SoC was reached, or None if it never was."""
        for step in self.steps:
            if step.soc >= self.stop_soc - 1e-9:
                return step.time_min
        return None


# ---------------------------------------------------------------------------
# Charge-curve model
# ---------------------------------------------------------------------------

class ChargeCurveModel:
    """Forward Euler model of a partial charge.

    Args:
        capacity_wh: Battery capacity [Wh]. Must be positive.
        start_soc:   SoC at t = 0, fraction in [0.0, 1.0).
        stop_soc:    SoC at which charging ends, in (start_soc, 1.0].

    Raises:
        ValueError: If any argument is outside its valid range.
    """

    def __init__(
        self,
        capacity_wh: float,
        start_soc: float = CHARGE_WINDOW_START_SOC,
        stop_soc: float = CHARGE_WINDOW_STOP_SOC,
    ) -> None:
        if capacity_wh <= 0.0:
            raise ValueError(
                f"Battery capacity must be positive; received capacity_wh={capacity_wh!r}"
            )
        if not (0.0 <= start_soc < stop_soc <= 1.0):
            raise ValueError(
                f"SoC window must satisfy 0 <= start < stop <= 1; "
                f"received start_soc={start_soc!r}, stop_soc={stop_soc!r}"
            )
        self._capacity_wh: float = capacity_wh
        self._start_soc: float = start_soc
        self._stop_soc: float = stop_soc

    @classmethod
    def for_device(cls, device: DeviceSpec) -> "ChargeCurveModel":
        """Build a model from a device's battery capacity.

        Raises:
            ValueError: If the device's capacity cannot be determined.
        """
        capacity_wh = resolve_battery_wh(device)
        if capacity_wh is None:
            raise ValueError(f"Battery capacity of {device.name!r} is unknown")
        return cls(capacity_wh)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def simulate(
        self,
        power_w: float,
        dt_min: float = 1.0,
        taper: float = 1.0,
        max_duration_min: float = 24 * 60.0,
    ) -> ChargeCurve:
        """Integrate stored energy until the stop SoC or ``max_duration_min``.

        Args:
            power_w:          Effective charging power [W].
            dt_min:           Fixed timestep [minutes]. Must be positive.
            taper:            Multiplier ≥ 1 slowing the ideal rate.
            max_duration_min: Upper bound on simulated time [minutes].

        Returns:
            ChargeCurve with one ChargeStep per timestep including t = 0.

        Raises:
            ValueError: If ``dt_min`` or ``max_duration_min`` is non-positive,
                        ``taper`` is below 1, or ``power_w`` is negative.
        """
        if dt_min <= 0.0:
            raise ValueError(f"Timestep must be positive; received dt_min={dt_min!r}")
        if max_duration_min <= 0.0:
            raise ValueError(
                f"Duration must be positive; received max_duration_min={max_duration_min!r}"
            )
        if taper < 1.0:
            raise ValueError(f"Taper must be at least 1.0; received taper={taper!r}")
        if power_w < 0.0:
            raise ValueError(f"Charging power must be non-negative; received power_w={power_w!r}")

        curve = ChargeCurve(
            dt_min=dt_min,
            capacity_wh=self._capacity_wh,
            power_w=power_w,
            taper=taper,
            stop_soc=self._stop_soc,
        )

        energy_wh = self._start_soc * self._capacity_wh
        stop_wh = self._stop_soc * self._capacity_wh
        rate_wh_per_min = power_w / taper / 60.0
        time_min = 0.0

        curve.steps.append(ChargeStep(time_min, energy_wh, self._to_soc(energy_wh), 0.0))

        if rate_wh_per_min <= 0.0:
            return curve

        while energy_wh < stop_wh and time_min < max_duration_min:
            step_min = min(dt_min, max_duration_min - time_min)
            delta_e = rate_wh_per_min * step_min
            if energy_wh + delta_e >= stop_wh:
                # shorten the last step to land on the stop SoC
                delta_e = stop_wh - energy_wh
                step_min = delta_e / rate_wh_per_min
                energy_wh = stop_wh
            else:
                energy_wh += delta_e
            time_min += step_min
            curve.steps.append(
                ChargeStep(
                    time_min=round(time_min, 10),
                    energy_wh=energy_wh,
                    soc=self._to_soc(energy_wh),
                    delta_e_wh=delta_e,
                )
            )

        return curve

    def simulate_for(self, negotiated_power_w: float, device: DeviceSpec, dt_min: float = 1.0) -> ChargeCurve:
        """Simulate with the same effective power and taper as the estimator."""
        p_eff = effective_power(negotiated_power_w, device)
        return self.simulate(
            power_w=max(p_eff, 0.0),
            dt_min=dt_min,
            taper=taper_factor(p_eff, device.recommended_w),
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def capacity_wh(self) -> float:
        return self._capacity_wh

    @property
    def stop_soc(self) -> float:
        return self._stop_soc

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _to_soc(self, energy_wh: float) -> float:
        return energy_wh / self._capacity_wh
