"""miningsim Command Line Interface.

Usage:
    miningsim run --trucks N --stations M     Run one simulation
    miningsim interactive                     Prompt for parameters, run repeatedly
    miningsim schema                          Output JSON schema
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

TRUCKS_PROMPT = "Number of trucks: (1 - 65535) "
STATIONS_PROMPT = "Number of stations: (1 - 65535) "
DEBUG_PROMPT = "Debug mode: (0: Debug Off, 1 : Debug On) "
CONTINUE_PROMPT = "Would you like to run another simulation? (y/n): "


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build_config(args: argparse.Namespace):
    """Merge an optional config file with command line overrides."""
    from miningsim.models.config import SimulationConfig, load_config

    data: dict[str, Any] = {}
    if args.config:
        data = load_config(args.config).model_dump()

    overrides = {
        "truck_count": args.trucks,
        "station_count": args.stations,
        "total_ticks": args.ticks,
        "random_seed": args.seed,
        "log_level": args.log_level,
    }
    data.update({k: v for k, v in overrides.items() if v is not None})
    if args.debug:
        data["debug"] = True
    if args.events:
        data["record_events"] = True

    return SimulationConfig.model_validate(data)


def cmd_run(args: argparse.Namespace) -> int:
    """Run a simulation and output results."""
    from pydantic import ValidationError

    from miningsim.analysis.kpis import compute_fleet_kpis
    from miningsim.exceptions import SimulationError
    from miningsim.simulation.engine import SimulationEngine

    try:
        config = _build_config(args)
    except FileNotFoundError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"ERROR: Invalid JSON at line {e.lineno}: {e.msg}", file=sys.stderr)
        return 1
    except ValidationError as e:
        print("ERROR: Invalid configuration:", file=sys.stderr)
        for error in e.errors():
            loc = " -> ".join(str(x) for x in error["loc"])
            print(f"  {loc}: {error['msg']}", file=sys.stderr)
        return 1

    _configure_logging(config.log_level)
    print(config.summary())
    print()

    try:
        engine = SimulationEngine(config)
        report = engine.run()
    except SimulationError as e:
        print(f"ERROR: {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    print(report.summary())
    print()

    kpis = compute_fleet_kpis(report)
    print(kpis.summary())

    if args.output:
        output_dir = Path(args.output)
        output_dir.mkdir(parents=True, exist_ok=True)

        trucks_path = output_dir / "trucks.csv"
        report.trucks_to_dataframe().to_csv(trucks_path, index=False)
        print(f"\nTrucks saved to: {trucks_path}")

        stations_path = output_dir / "stations.csv"
        report.stations_to_dataframe().to_csv(stations_path, index=False)
        print(f"Stations saved to: {stations_path}")

        kpis_path = output_dir / "kpis.json"
        with open(kpis_path, "w") as f:
            json.dump(kpis.to_dict(), f, indent=2)
        print(f"KPIs saved to: {kpis_path}")

        if engine.event_log is not None:
            events_path = output_dir / "events.csv"
            engine.event_log.to_dataframe().to_csv(events_path, index=False)
            print(f"Events saved to: {events_path}")

    return 0


def _parse_count(raw: str) -> Optional[int]:
    """Accept a plain decimal count in 1..65535."""
    if not raw or not raw.isdecimal():
        return None
    value = int(raw)
    if 0 < value < 65536:
        return value
    return None


def _parse_flag(raw: str) -> Optional[bool]:
    """Accept 0 or 1."""
    if not raw or not raw.isdecimal():
        return None
    value = int(raw)
    if value in (0, 1):
        return bool(value)
    return None


def prompt_value(prompt: str, parse) -> Any:
    """Ask until the operator enters something parse() accepts."""
    while True:
        value = parse(input(prompt))
        if value is not None:
            print("Success")
            return value
        print("Invalid input")


def prompt_to_continue() -> bool:
    """Ask whether to run another simulation."""
    while True:
        answer = input(CONTINUE_PROMPT)
        if answer in ("y", "Y"):
            return True
        if answer in ("n", "N"):
            return False
        print("Invalid input")


def cmd_interactive(args: argparse.Namespace) -> int:
    """Collect run parameters from the operator and run until they stop."""
    from miningsim.exceptions import SimulationError
    from miningsim.models.config import SimulationConfig
    from miningsim.simulation.engine import SimulationEngine

    _configure_logging(args.log_level or "WARNING")

    while True:
        try:
            trucks = prompt_value(TRUCKS_PROMPT, _parse_count)
            stations = prompt_value(STATIONS_PROMPT, _parse_count)
            debug = prompt_value(DEBUG_PROMPT, _parse_flag)
        except EOFError:
            print("ERROR: input closed", file=sys.stderr)
            return 1

        config = SimulationConfig(truck_count=trucks, station_count=stations, debug=debug)
        try:
            report = SimulationEngine(config).run()
        except SimulationError as e:
            print(f"ERROR: {type(e).__name__}: {e}", file=sys.stderr)
            return 1

        print(report.summary())
        print()

        try:
            if not prompt_to_continue():
                return 0
        except EOFError:
            print("ERROR: input closed", file=sys.stderr)
            return 1


def cmd_schema(args: argparse.Namespace) -> int:
    """Output JSON schema for configuration files."""
    from miningsim.models.config import SimulationConfig

    schema = SimulationConfig.model_json_schema()

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(schema, f, indent=2)
        print(f"Schema written to: {output_path}")
    else:
        print(json.dumps(schema, indent=2))

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="miningsim",
        description="miningsim: mining truck and unloading station simulation",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # run command
    p_run = subparsers.add_parser(
        "run",
        help="Run one simulation",
    )
    p_run.add_argument("--trucks", "-t", type=int, help="Number of trucks (1-65535)")
    p_run.add_argument("--stations", "-s", type=int, help="Number of stations (1-65535)")
    p_run.add_argument("--ticks", type=int, help="Run length in 5-minute ticks (default 864)")
    p_run.add_argument("--seed", type=int, help="RNG seed for reproducible runs")
    p_run.add_argument("--debug", action="store_true", help="Enable runtime self-checks")
    p_run.add_argument("--events", action="store_true", help="Record truck transitions")
    p_run.add_argument("--config", "-c", help="Path to configuration JSON file")
    p_run.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    p_run.add_argument(
        "--output", "-o",
        help="Output directory for results",
    )
    p_run.set_defaults(func=cmd_run)

    # interactive command
    p_interactive = subparsers.add_parser(
        "interactive",
        help="Prompt for parameters and run repeatedly",
    )
    p_interactive.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    p_interactive.set_defaults(func=cmd_interactive)

    # schema command
    p_schema = subparsers.add_parser(
        "schema",
        help="Output JSON schema",
    )
    p_schema.add_argument(
        "--output", "-o",
        help="Output file (default: stdout)",
    )
    p_schema.set_defaults(func=cmd_schema)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
