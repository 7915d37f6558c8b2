"""Interface inspection: does an interface exist, and which IPv4 address does it hold."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod

from loguru import logger

from vlanreach._util import _run_cmd, _run_cmd_status, _validate_interface_name
from vlanreach.models import AddressPolicy, Ipv4Assignment, ResolvedInterface

_INET_RE = re.compile(r"^\s*inet\s+(\d{1,3}(?:\.\d{1,3}){3})(?:/(\d{1,2}))?(.*)$")


class InterfaceInspector(ABC):
    """Abstract access to the OS network-link and address facility."""

    @abstractmethod
    def link_exists(self, name: str) -> bool:
        """Return True if a network link with this name exists."""

    @abstractmethod
    def ipv4_assignments(self, name: str) -> list[Ipv4Assignment]:
        """Return the IPv4 addresses configured on the link, in OS order."""


class IpCommandInspector(InterfaceInspector):
    """Inspector backed by the iproute2 ``ip`` command."""

    def __init__(self, ip_binary: str = "ip", timeout: int = 10):
        self.ip_binary = ip_binary
        self.timeout = timeout

    def link_exists(self, name: str) -> bool:
        if not _validate_interface_name(name):
            logger.warning(f"Invalid interface name: {name}")
            return False
        status, _ = _run_cmd_status([self.ip_binary, "link", "show", "dev", name], timeout=self.timeout)
        return status == 0

    def ipv4_assignments(self, name: str) -> list[Ipv4Assignment]:
        if not _validate_interface_name(name):
            return []
        output = _run_cmd([self.ip_binary, "-4", "addr", "show", "dev", name], timeout=self.timeout)
        return parse_ip_addr_output(output)


def parse_ip_addr_output(output: str) -> list[Ipv4Assignment]:
    """Parse ``ip -4 addr show`` output into address assignments."""
    assignments: list[Ipv4Assignment] = []
    for line in output.splitlines():
        m = _INET_RE.match(line)
        if not m:
            continue
        flags = m.group(3).split()
        assignments.append(
            Ipv4Assignment(
                address=m.group(1),
                prefixlen=int(m.group(2)) if m.group(2) else 32,
                secondary="secondary" in flags,
            )
        )
    return assignments


class AddressResolver:
    """Resolve an interface name to its existence and selected IPv4 address(es)."""

    def __init__(self, inspector: InterfaceInspector, policy: AddressPolicy = AddressPolicy.FIRST):
        self.inspector = inspector
        self.policy = policy

    def resolve(self, name: str) -> ResolvedInterface:
        if not self.inspector.link_exists(name):
            return ResolvedInterface(name=name, exists=False)

        assignments = self.inspector.ipv4_assignments(name)
        logger.debug(f"{name}: {len(assignments)} IPv4 address(es) reported")
        return ResolvedInterface(name=name, exists=True, addresses=self._select(assignments))

    def _select(self, assignments: list[Ipv4Assignment]) -> list[str]:
        if not assignments:
            return []
        if self.policy is AddressPolicy.ALL:
            return [a.address for a in assignments]
        if self.policy is AddressPolicy.PREFER_PRIMARY:
            for a in assignments:
                if not a.secondary:
                    return [a.address]
        return [assignments[0].address]
