"""CLI entry point for the inter-VLAN reachability check."""

from __future__ import annotations

import argparse
import sys

from pydantic import ValidationError

from vlanreach.exceptions import ConfigurationError, ReachabilityError, TargetFileNotFoundError, UsageError
from vlanreach.models import DEFAULT_VLAN_IDS, AddressPolicy, CheckerConfig
from vlanreach.reporter import Reporter
from vlanreach.runner import ReachabilityCheck

EXIT_OK = 0
EXIT_ERROR = 1


def _parse_vlan_ids(value: str) -> tuple[int, ...]:
    """Parse a comma-separated VLAN id list such as ``2,201,202``."""
    ids: list[int] = []
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            vlan_id = int(part)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid VLAN id: {part!r}")
        if vlan_id < 1:
            raise argparse.ArgumentTypeError(f"VLAN id must be positive: {vlan_id}")
        ids.append(vlan_id)
    if not ids:
        raise argparse.ArgumentTypeError("at least one VLAN id is required")
    return tuple(ids)


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}")
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1: {n}")
    return n


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Build argparse parser for the reachability check."""
    defaults = CheckerConfig()
    parser = argparse.ArgumentParser(
        prog="vlanreach",
        description="Ping every target address from every active VLAN subinterface.",
    )
    parser.add_argument(
        "target_file",
        nargs="?",
        help="File with one target IP address per line ('#' comments and empty lines ignored)",
    )
    parser.add_argument(
        "-i",
        "--interface",
        default=defaults.base_interface,
        help=f"Base interface carrying the VLAN subinterfaces (default: {defaults.base_interface})",
    )
    parser.add_argument(
        "--vlans",
        type=_parse_vlan_ids,
        default=DEFAULT_VLAN_IDS,
        help="Comma-separated VLAN ids to look for (default: " + ",".join(str(v) for v in DEFAULT_VLAN_IDS) + ")",
    )
    parser.add_argument(
        "-c",
        "--count",
        type=_positive_int,
        default=defaults.probe_count,
        help=f"Echo requests per target (default: {defaults.probe_count})",
    )
    parser.add_argument(
        "-W",
        "--timeout",
        type=_positive_int,
        default=defaults.probe_timeout,
        help=f"Seconds to wait for each echo reply (default: {defaults.probe_timeout})",
    )
    parser.add_argument(
        "-l",
        "--log-file",
        default=str(defaults.log_path),
        help=f"Log file, truncated at start (default: {defaults.log_path})",
    )
    parser.add_argument(
        "--address-policy",
        choices=[p.value for p in AddressPolicy],
        default=defaults.address_policy.value,
        help="Which IPv4 address of a subinterface to report (default: first)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose logging",
    )
    parsed = parser.parse_args(args)
    try:
        parsed.config = CheckerConfig(
            base_interface=parsed.interface,
            vlan_ids=parsed.vlans,
            probe_count=parsed.count,
            probe_timeout=parsed.timeout,
            log_path=parsed.log_file,
            address_policy=AddressPolicy(parsed.address_policy),
        )
    except ValidationError as e:
        parser.error(f"invalid configuration: {e.errors()[0]['msg']}")
    return parsed


def help_text(config: CheckerConfig) -> list[str]:
    """Usage and background shown when no target file is given."""
    base = config.base_interface
    return [
        "Usage: vlanreach [options] <target_ip_file>",
        "",
        "This tool iterates through configured VLAN subinterfaces and uses each",
        "to ping ALL IP addresses listed in the provided <target_ip_file>.",
        "This means a single interface will attempt to ping IPs across all specified VLANs.",
        "",
        "Arguments:",
        "  <target_ip_file>  A text file containing one IP address per line to ping.",
        "                    Empty lines and lines starting with '#' are ignored.",
        "",
        "Example target_ip_file content:",
        "  # Some IPs from VLAN 2",
        "  11.3.2.10",
        "  11.3.2.15",
        "",
        "  # Some IPs from VLAN 201",
        "  11.3.201.5",
        "  11.3.201.100",
        "",
        "Prerequisites:",
        "  - VLAN subinterfaces for the configured VLAN ids must be",
        f"    configured and active on your system (e.g., {base}.201).",
        f"    Example: sudo ip link add link {base} name {base}.201 type vlan id 201",
        f"             sudo ip addr add 11.3.201.X/24 dev {base}.201",
        f"             sudo ip link set dev {base}.201 up",
        "  - Each active subinterface should ideally have a default gateway configured",
        "    pointing to its respective Layer 3 switch/router's SVI for proper inter-VLAN routing.",
        "  - Binding pings to specific interfaces requires root privileges. Run with 'sudo'.",
        "",
        "Output:",
        "  - Live status updates in green (SUCCESS) or red (FAILED) in the terminal.",
        f"  - A detailed log of all pings in '{config.log_path}' (without colors).",
        "",
        f"Current BASE_INTERFACE setting: {base}",
        f"VLAN IDs expected to have subinterfaces: {' '.join(str(v) for v in config.vlan_ids)}",
    ]


def main(args: list[str] | None = None) -> int:
    """Main entry point for the reachability check; returns the exit status."""
    parsed = parse_args(args)
    config: CheckerConfig = parsed.config
    try:
        reporter = Reporter(config.log_path, verbose=parsed.verbose)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    try:
        if not parsed.target_file:
            lines = help_text(config)
            reporter.error(lines[0])
            for line in lines[1:]:
                reporter.info(line)
            raise UsageError("no target file given")

        ReachabilityCheck(config, reporter).run(parsed.target_file)
    except UsageError:
        return EXIT_ERROR
    except TargetFileNotFoundError as e:
        reporter.error(f"Error: {e}")
        reporter.info("Please ensure the file exists and the path is correct.")
        return EXIT_ERROR
    except ReachabilityError as e:
        reporter.error(f"Error: {e}")
        return EXIT_ERROR
    finally:
        reporter.close()

    return EXIT_OK

