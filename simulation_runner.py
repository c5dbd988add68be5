"""
simulation_runner.py
====================
USB Charging Estimator — Simulation Runner

Runs the engine for one adapter/cable/device combination picked from the
preset catalog and reports the result.

Execution sequence:
    1. Resolve presets                  (catalog.get_adapter / get_cable / get_device)
    2. Simulate the charging chain      (engine.simulate)
    3. Print console summary
    4. Simulate the charge curve        (battery_model.ChargeCurveModel)
    5. Plot SoC vs time

Usage:
    python simulation_runner.py --adapter "Apple 20W USB-C Power Adapter" \\
        --cable "Generic USB-C 3A (60W)" --device "Apple iPhone 15 Pro"
    python simulation_runner.py --list
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

import matplotlib.pyplot as plt
import matplotlib.ticker as mticker

from usbcharge.battery_model import ChargeCurve, ChargeCurveModel
from usbcharge.catalog import ADAPTERS, CABLES, DEVICES, get_adapter, get_cable, get_device
from usbcharge.config import STANDARD_PRIORITY
from usbcharge.engine import simulate
from usbcharge.messages import format_charge_time, render
from usbcharge.negotiator import negotiate
from usbcharge.specs import AUTO, AdapterSpec, CableSpec, DeviceSpec, SimulationResult

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Execution configuration
# ---------------------------------------------------------------------------

DT_MIN: float = 1.0                      # charge-curve timestep: 1 minute
PLOT_OUTPUT_FILE: str = "charge_curve.png"


# ---------------------------------------------------------------------------
# Step 1: Arguments and presets
# ---------------------------------------------------------------------------

def _preset_key(value: str):
    """Preset names pass through; bare integers select by index."""
    return int(value) if value.isdigit() else value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Estimate USB charging power for an adapter, cable and device.",
    )
    parser.add_argument("--adapter", type=_preset_key, default=0, help="adapter preset name or index")
    parser.add_argument("--cable", type=_preset_key, default=0, help="cable preset name or index")
    parser.add_argument("--device", type=_preset_key, default=0, help="device preset name or index")
    parser.add_argument(
        "--standard",
        default=AUTO,
        choices=[AUTO, *(s.value for s in STANDARD_PRIORITY)],
        help="force a charging standard (default: Auto)",
    )
    parser.add_argument("--locale", default="en", choices=["en", "ja"])
    parser.add_argument("--plot", default=PLOT_OUTPUT_FILE, help="output PNG for the charge curve")
    parser.add_argument("--no-plot", action="store_true", help="skip the charge-curve plot")
    parser.add_argument("--list", action="store_true", help="list presets and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def print_presets() -> None:
    for title, records in (("ADAPTERS", ADAPTERS), ("CABLES", CABLES), ("DEVICES", DEVICES)):
        print(f"\n  {title}")
        for index, record in enumerate(records):
            print(f"    [{index:2d}] {record.name}")
    print()


# ---------------------------------------------------------------------------
# Step 3: Console summary
# ---------------------------------------------------------------------------

def print_console_summary(
    adapter: AdapterSpec,
    cable: CableSpec,
    device: DeviceSpec,
    result: SimulationResult,
    locale: str,
) -> None:
    """Print a structured console summary of the simulation result."""

    sep = "─" * 60

    print(f"\n{'═' * 60}")
    print("  USB CHARGING ESTIMATE — SIMULATION SUMMARY")
    print(f"{'═' * 60}")

    print(f"\n{sep}")
    print("  CHAIN")
    print(sep)
    print(f"    Adapter   :  {adapter.name}  ({adapter.max_w:g} W / {adapter.max_v:g} V)")
    print(f"    Cable     :  {cable.name}  ({cable.label}, {cable.max_a:g} A / {cable.max_v:g} V"
          f"{', e-marked' if cable.e_marked else ''})")
    print(f"    Device    :  {device.name}  (recommended {device.recommended_w:g} W)")

    print(f"\n{sep}")
    print("  NEGOTIATED")
    print(sep)
    standard = result.standard.value if result.standard is not None else "—"
    print(f"    Standard                    :  {standard}")
    print(f"    Voltage                     :  {result.voltage_v:7.1f} V")
    print(f"    Current                     :  {result.current_a:7.2f} A")
    print(f"    Power                       :  {result.power_w:7.1f} W  "
          f"[{'✔ MEETS RECOMMENDED' if result.meets_recommended else '✘ BELOW RECOMMENDED'}]")
    print(f"    Charge time (20 % → 80 %)   :  {format_charge_time(result.charge_time_min, locale)}")
    limiting = ", ".join(part.value for part in result.limiting_parts) or "—"
    print(f"    Limiting parts              :  {limiting}")

    sections = (
        ("INCOMPATIBILITIES", result.incompatibilities),
        ("BOTTLENECKS", result.bottlenecks),
        ("SUGGESTIONS", result.suggestions),
    )
    for title, descriptors in sections:
        if not descriptors:
            continue
        print(f"\n{sep}")
        print(f"  {title}")
        print(sep)
        for descriptor in descriptors:
            print(f"    • {render(descriptor, locale)}")

    print(f"{'═' * 60}\n")


# ---------------------------------------------------------------------------
# Step 4–5: Charge curve
# ---------------------------------------------------------------------------

def run_charge_curve(
    result: SimulationResult,
    adapter: AdapterSpec,
    cable: CableSpec,
    device: DeviceSpec,
) -> Optional[ChargeCurve]:
    """Simulate SoC vs time; None when the curve cannot be drawn.

    The curve is driven by the full-precision negotiated power, the same
    input the charge-time estimate uses, not the rounded display value.
    """
    if result.charge_time_min is None:
        logger.info("Charge time unavailable for %s; skipping curve", device.name)
        return None
    power_w = negotiate(result.standard, adapter, cable, device).power_w
    model = ChargeCurveModel.for_device(device)
    return model.simulate_for(power_w, device, dt_min=DT_MIN)


def plot_soc_vs_time(curve: ChargeCurve, result: SimulationResult, device: DeviceSpec, path: str) -> None:
    """Render and save battery SoC vs charging time."""

    times_min = [s.time_min for s in curve.steps]
    soc_pct = [s.soc * 100 for s in curve.steps]

    fig, ax = plt.subplots(figsize=(10, 5))
    standard = result.standard.value if result.standard is not None else "—"
    fig.suptitle(
        f"{device.name} — Charge Curve\n"
        f"{standard}  |  {result.power_w:.1f} W  |  taper = {curve.taper:.2f}",
        fontsize=12, fontweight="bold",
    )

    ax.plot(times_min, soc_pct, color="#2196F3", linewidth=2, label="SoC (simulated)")
    ax.axhline(curve.stop_soc * 100, color="#F44336", linewidth=1.2, linestyle="--",
               label=f"Stop SoC ({curve.stop_soc:.0%})")
    ax.axvline(result.charge_time_min, color="#FF9800", linewidth=1.2, linestyle="-.",
               label=f"Estimate ({result.charge_time_min} min)")

    ax.set_xlabel("Charging Time [minutes]", fontsize=11)
    ax.set_ylabel("State of Charge [%]", fontsize=11)
    ax.set_ylim(0, 100)
    ax.yaxis.set_major_formatter(mticker.PercentFormatter(xmax=100))
    ax.legend(fontsize=9, loc="lower right")
    ax.grid(True, linestyle="--", alpha=0.5)

    fig.tight_layout()
    fig.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"  [plot] Saved → {path}")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list:
        print_presets()
        return 0

    # Step 1: presets
    try:
        adapter = get_adapter(args.adapter)
        cable = get_cable(args.cable)
        device = get_device(args.device)
    except (KeyError, IndexError) as exc:
        print(f"error: {exc.args[0]}", file=sys.stderr)
        return 2

    # Step 2: engine
    result = simulate(adapter, cable, device, args.standard)

    # Step 3: console summary
    print_console_summary(adapter, cable, device, result, args.locale)

    # Step 4–5: charge curve (last — writes a file)
    if not args.no_plot:
        curve = run_charge_curve(result, adapter, cable, device)
        if curve is not None:
            plot_soc_vs_time(curve, result, device, args.plot)

    return 0


if __name__ == "__main__":
    sys.exit(main())
