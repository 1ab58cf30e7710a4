#!/usr/bin/python3

import argparse
import logging
import sys

from heatsim import results
from heatsim.compare import simulate
from heatsim.config import NightWindow, SimulationConfig, config_from_dict, load_config
from heatsim.errors import ConfigurationError


def build_config(args) -> SimulationConfig:
    overrides = {
        "outside_base_temp_f": args.outside_temp,
        "desired_temp_f": args.desired_temp,
        "insulation_factor": args.insulation,
        "house_heat_capacity": args.heat_capacity,
        "heater_output": args.heater_output,
        "diurnal_amplitude": args.diurnal,
        "hysteresis_band": args.hysteresis,
        "mode": args.mode,
        "time_step_seconds": args.time_step,
        "total_hours": args.hours,
        "setback_policy": args.setback_policy,
        "setback_temp_f": args.setback_temp,
        "initial_temp_f": args.start_temp,
        "solver": args.solver,
    }

    if args.config:
        config = load_config(args.config, **overrides)
    else:
        config = config_from_dict({}, **overrides)

    # Night window edges can be overridden independently
    if args.night_start is not None or args.night_end is not None:
        window = NightWindow(
            start=config.night_window.start if args.night_start is None else args.night_start,
            end=config.night_window.end if args.night_end is None else args.night_end,
        )
        data = config.to_dict()
        data["night_window"] = window
        config = config_from_dict(data)
    return config


def run_main(args_list=None):
    parser = argparse.ArgumentParser(
        description="House Heating Simulation: does turning the heat down at night save energy?",
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument("config", nargs='?', help="Path to simulation config JSON (// comments allowed).\n"
                                                  "Omitted values use the reference house defaults.")

    # House / Weather
    parser.add_argument("--outside-temp", type=float, help="Base outside temperature (F)")
    parser.add_argument("--desired-temp", type=float, help="Desired inside temperature (F)")
    parser.add_argument("--insulation", type=float, help="Insulation efficiency 1-10 (higher = better)")
    parser.add_argument("--heat-capacity", type=float, help="House heat capacity (BTU/F)")
    parser.add_argument("--heater-output", type=float, help="Heater output while ON (BTU/hr)")
    parser.add_argument("--diurnal", type=float, help="Daily outdoor temperature swing, peak-to-trough (F)")

    # Control
    parser.add_argument("--hysteresis", type=float, help="Thermostat dead-zone width (F)")
    parser.add_argument("--mode", choices=["constant", "night_setback"],
                        help="Primary heating mode (both modes are always simulated for the comparison)")
    parser.add_argument("--night-start", type=float, help="Night window start hour (default: 22)")
    parser.add_argument("--night-end", type=float, help="Night window end hour (default: 8)")
    parser.add_argument("--setback-policy", choices=["disabled", "setback_target"],
                        help="disabled: heater forced OFF at night (default)\n"
                             "setback_target: thermostat holds --setback-temp at night")
    parser.add_argument("--setback-temp", type=float, help="Night target for setback_target policy (F)")
    parser.add_argument("--start-temp", type=float, help="Starting inside temperature (F). Defaults to desired temp.")

    # Integration
    parser.add_argument("--time-step", type=float, help="Integration step in seconds (default: 10)")
    parser.add_argument("--hours", type=float, help="Simulated horizon in hours (default: 24)")
    parser.add_argument("--solver", choices=["rk4", "euler", "odeint"], help="Integration method (default: rk4)")

    # Output Options
    parser.add_argument("--plot", action="store_true", help="Show temperature/heater/energy charts")
    parser.add_argument("--csv", metavar="CSV_FILE", help="Save both time series to CSV")
    parser.add_argument("--debug-output", metavar="JSON_FILE",
                        help="Export results to JSON file (for agent/automation use)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(args_list)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # 1. Load Config
    try:
        config = build_config(args)
    except ConfigurationError as e:
        print(f"Error: {e}")
        return 1
    except FileNotFoundError:
        print(f"Error: Config file '{args.config}' not found.")
        return 1

    # 2. Simulate both modes
    summary, series = simulate(config, return_series=True)

    # 3. Report
    print(results.format_report(summary, config))
    sys.stdout.flush()

    if args.csv:
        results.export_csv(series, args.csv)

    if args.debug_output:
        results.export_debug_output(args.debug_output, config, summary, series)

    if args.plot:
        results.plot_results(summary, series, config)

    return 0


if __name__ == "__main__":
    sys.exit(run_main())
