"""Source-bound reachability probes and the interface x target probe engine."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from typing import Optional

from loguru import logger

from vlanreach._util import _run_cmd_status, destination_vlan_label, format_vlan_label
from vlanreach.models import ActiveSubinterface, ProbeOutcome, ProbeReply, ProbeResult, ProbeStats
from vlanreach.reporter import Reporter

# iputils: "2 packets transmitted, 2 received, 0% packet loss, time 1001ms"
# busybox: "2 packets transmitted, 2 packets received, 0% packet loss"
_PACKETS_RE = re.compile(
    r"(\d+)\s+packets transmitted,\s+(\d+)\s+(?:packets\s+)?received,.*?([\d.]+)%\s+packet loss"
)
# "rtt min/avg/max/mdev = 0.045/0.050/0.055/0.005 ms" or "round-trip min/avg/max = ..."
_RTT_RE = re.compile(r"(?:rtt|round-trip)\s+min/avg/max(?:/\w+)?\s*=\s*[\d.]+/([\d.]+)/")


def parse_ping_statistics(output: str) -> Optional[ProbeStats]:
    """Parse the summary block of ping output; None if there is none."""
    m = _PACKETS_RE.search(output)
    if not m:
        return None
    rtt = _RTT_RE.search(output)
    return ProbeStats(
        transmitted=int(m.group(1)),
        received=int(m.group(2)),
        loss_percent=float(m.group(3)),
        rtt_avg_ms=float(rtt.group(1)) if rtt else None,
    )


class ProbeService(ABC):
    """Abstract source-bound ICMP echo facility."""

    @abstractmethod
    def probe(self, interface: str, destination: str, count: int) -> ProbeReply:
        """Probe *destination* with *count* echo requests sent out of *interface*."""


class PingProbeService(ProbeService):
    """Probe service backed by the system ``ping`` binary (``ping -I``)."""

    def __init__(self, timeout: int = 2, ping_binary: str = "ping"):
        self.timeout = timeout
        self.ping_binary = ping_binary

    def build_command(self, interface: str, destination: str, count: int) -> list[str]:
        return [
            self.ping_binary,
            "-c",
            str(count),
            "-W",
            str(self.timeout),
            "-I",
            interface,
            "--",
            destination,
        ]

    def probe(self, interface: str, destination: str, count: int) -> ProbeReply:
        cmd = self.build_command(interface, destination, count)
        logger.debug(f"Running: {' '.join(cmd)}")
        status, output = _run_cmd_status(cmd, timeout=count * (self.timeout + 1) + 5)
        return ProbeReply(success=status == 0, output=output, stats=parse_ping_statistics(output))


class ProbeEngine:
    """Probe every target from every active subinterface, one pair at a time."""

    def __init__(self, probe_service: ProbeService, reporter: Reporter, probe_count: int = 2):
        self.probe_service = probe_service
        self.reporter = reporter
        self.probe_count = probe_count

    def run(self, active: Sequence[ActiveSubinterface], targets: Sequence[str]) -> Iterator[ProbeResult]:
        """Yield one ProbeResult per (interface, target) pair.

        Iteration is source-major: all targets are probed from the first
        interface before moving on to the second. Each result is reported
        before it is yielded.
        """
        for iface in active:
            self.reporter.info(
                f"--- Using Source Interface: {iface.interface_name} "
                f"(IP: {iface.source_address}, VLAN: {iface.vlan_id}) to ping all targets ---"
            )
            for destination in targets:
                yield self._probe_pair(iface, destination)
                self.reporter.info()
            self.reporter.info(f"--- Finished with Source Interface: {iface.interface_name} ---")
            self.reporter.info()

    def _probe_pair(self, iface: ActiveSubinterface, destination: str) -> ProbeResult:
        label = destination_vlan_label(destination)
        self.reporter.info(f"  Pinging Destination: {destination} (Dest VLAN: {format_vlan_label(label)})...")

        reply = self.probe_service.probe(iface.interface_name, destination, self.probe_count)
        self.reporter.probe_output(reply.output)

        result = ProbeResult(
            source_interface=iface.interface_name,
            source_address=iface.source_address,
            destination_address=destination,
            destination_vlan_label=label,
            outcome=ProbeOutcome.SUCCESS if reply.success else ProbeOutcome.FAILED,
            stats=reply.stats,
        )
        self.reporter.outcome(result)
        return result
