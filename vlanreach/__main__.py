"""Console entry point.

Examples:
  vlanreach targets.txt

  sudo vlanreach -i enp3s0 --vlans 10,20,30 -c 3 targets.txt

  python -m vlanreach --address-policy prefer-primary -l vlan.log targets.txt
"""

from __future__ import annotations

import sys

from vlanreach.cli import main as cli_main


def main() -> None:
    """Run the reachability check with the process arguments and exit with its status."""
    sys.exit(cli_main(sys.argv[1:]))


if __name__ == "__main__":
    main()
