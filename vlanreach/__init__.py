"""Inter-VLAN reachability checker.

Sends source-bound ICMP probes from every active VLAN subinterface of a
multi-homed host to a list of target addresses and records the outcome of
each (interface, target) pair on the console and in a plain-text log.
"""

__version__ = "0.1.0"

from loguru import logger as glogger

glogger.disable(__name__)

from vlanreach.exceptions import (  # noqa: E402
    EmptyTargetListError,
    NoActiveInterfacesError,
    ReachabilityError,
    TargetFileNotFoundError,
    UsageError,
)
from vlanreach.models import (  # noqa: E402
    ActiveSubinterface,
    AddressPolicy,
    CheckerConfig,
    ProbeOutcome,
    ProbeResult,
)
from vlanreach.runner import ReachabilityCheck  # noqa: E402

__all__ = [
    "glogger",
    "ReachabilityCheck",
    "CheckerConfig",
    "AddressPolicy",
    "ActiveSubinterface",
    "ProbeOutcome",
    "ProbeResult",
    "ReachabilityError",
    "UsageError",
    "TargetFileNotFoundError",
    "EmptyTargetListError",
    "NoActiveInterfacesError",
]
