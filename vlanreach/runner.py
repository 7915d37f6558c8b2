"""ReachabilityCheck: discovery, target loading and probing in a single sequential run."""

from __future__ import annotations

from pathlib import Path

from tabulate import tabulate

from vlanreach import __version__
from vlanreach.discovery import SubinterfaceDiscoverer
from vlanreach.inspector import AddressResolver, InterfaceInspector, IpCommandInspector
from vlanreach.models import CheckerConfig, ProbeResult
from vlanreach.probe import PingProbeService, ProbeEngine, ProbeService
from vlanreach.reporter import Reporter
from vlanreach.targets import check_target_file, load_targets


class ReachabilityCheck:
    """One inter-VLAN reachability run.

    All terminal conditions (missing target file, no active subinterfaces,
    empty target list) raise a :class:`~vlanreach.exceptions.ReachabilityError`
    before the first probe is sent.
    """

    def __init__(
        self,
        config: CheckerConfig,
        reporter: Reporter,
        inspector: InterfaceInspector | None = None,
        probe_service: ProbeService | None = None,
    ):
        self.config = config
        self.reporter = reporter
        self.inspector = inspector or IpCommandInspector()
        self.probe_service = probe_service or PingProbeService(timeout=config.probe_timeout)

    def run(self, target_file: str | Path) -> list[ProbeResult]:
        cfg = self.config
        self.reporter.info("Starting ping script...")
        self._announce(target_file)

        target_path = check_target_file(target_file)

        resolver = AddressResolver(self.inspector, policy=cfg.address_policy)
        active = SubinterfaceDiscoverer(resolver, self.reporter).discover(cfg.base_interface, cfg.vlan_ids)

        targets = load_targets(target_path)
        self.reporter.info(f"Target IPs to ping: {' '.join(targets)}")
        self.reporter.info()

        engine = ProbeEngine(self.probe_service, self.reporter, probe_count=cfg.probe_count)
        results = list(engine.run(active, targets))

        self.reporter.summary(results)
        self.reporter.info(f"Ping script finished. Results saved to {cfg.log_path}")
        return results

    def _announce(self, target_file: str | Path) -> None:
        cfg = self.config
        rows = [
            ["version", __version__],
            ["target file", str(target_file)],
            ["base interface", cfg.base_interface],
            ["VLAN ids", " ".join(str(v) for v in cfg.vlan_ids)],
            ["probe count", cfg.probe_count],
            ["address policy", cfg.address_policy.value],
            ["log file", str(cfg.log_path)],
        ]
        for line in tabulate(rows, tablefmt="plain").splitlines():
            self.reporter.info(f"  {line}")
        self.reporter.info()
