"""Exception hierarchy for the reachability checker.

Every exception here is terminal: it is raised before any probe is sent and
aborts the run. A failed probe is never an exception, only a ``FAILED``
:class:`~vlanreach.models.ProbeResult`.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class ReachabilityError(Exception):
    """Base exception for all terminal checker errors."""


class UsageError(ReachabilityError):
    """No target file argument was given."""


class TargetFileNotFoundError(ReachabilityError):
    """The target file does not exist or cannot be read."""

    def __init__(self, path: str | Path, reason: str = "not found"):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Target IP file '{path}' {reason}!")


class EmptyTargetListError(ReachabilityError):
    """The target file contains no usable address lines."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        super().__init__(f"No valid IP addresses found in '{path}'.")


class NoActiveInterfacesError(ReachabilityError):
    """None of the configured VLAN ids maps to an existing, addressed subinterface."""

    def __init__(self, base_interface: str, vlan_ids: Sequence[int]):
        self.base_interface = base_interface
        self.vlan_ids = tuple(vlan_ids)
        super().__init__(
            "No active VLAN subinterfaces found based on configuration. "
            "Please ensure they are configured and up."
        )


class ConfigurationError(ReachabilityError):
    """The run environment or options are invalid, e.g. an unknown log level."""
