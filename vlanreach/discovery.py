"""SubinterfaceDiscoverer: map configured VLAN ids to active, addressed subinterfaces."""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from vlanreach._util import subinterface_name
from vlanreach.exceptions import NoActiveInterfacesError
from vlanreach.inspector import AddressResolver
from vlanreach.models import ActiveSubinterface
from vlanreach.reporter import Reporter


class SubinterfaceDiscoverer:
    def __init__(self, resolver: AddressResolver, reporter: Reporter):
        self.resolver = resolver
        self.reporter = reporter

    def discover(self, base_interface: str, vlan_ids: Sequence[int]) -> list[ActiveSubinterface]:
        """Return the active subinterfaces in VLAN id order.

        Missing or unaddressed subinterfaces are reported and skipped.

        Raises:
            NoActiveInterfacesError: if no VLAN id resolved to an addressed interface.
        """
        self.reporter.info("Discovering active VLAN subinterfaces...")
        active: list[ActiveSubinterface] = []

        for vlan_id in vlan_ids:
            name = subinterface_name(base_interface, vlan_id)
            resolved = self.resolver.resolve(name)

            if not resolved.exists:
                self.reporter.warning(f"Warning: Subinterface {name} not found. Skipping.")
                continue
            if resolved.ipv4 is None:
                self.reporter.warning(f"Warning: Subinterface {name} exists but has no IP address. Skipping.")
                continue

            active.append(
                ActiveSubinterface(
                    interface_name=name,
                    source_address=resolved.ipv4,
                    vlan_id=vlan_id,
                    addresses=tuple(resolved.addresses),
                )
            )
            msg = f"Found active subinterface: {name} with IP: {resolved.ipv4}"
            if len(resolved.addresses) > 1:
                msg += f" (all: {', '.join(resolved.addresses)})"
            self.reporter.success(msg)

        if not active:
            raise NoActiveInterfacesError(base_interface, vlan_ids)

        logger.debug(f"{len(active)}/{len(vlan_ids)} VLAN subinterfaces active")
        self.reporter.info()
        return active
