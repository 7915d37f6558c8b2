"""Shared fixtures for the vlanreach test suite."""

from __future__ import annotations

import io

import pytest

from vlanreach.inspector import InterfaceInspector
from vlanreach.models import ActiveSubinterface, Ipv4Assignment, ProbeReply
from vlanreach.probe import ProbeService
from vlanreach.reporter import Reporter

# ── fakes for the OS collaborators ────────────────────────────────────


class FakeInspector(InterfaceInspector):
    """Inspector backed by a dict of interface name -> list of addresses."""

    def __init__(self, links: dict[str, list[str | Ipv4Assignment]] | None = None):
        self.links = links or {}
        self.queried: list[str] = []

    def link_exists(self, name: str) -> bool:
        self.queried.append(name)
        return name in self.links

    def ipv4_assignments(self, name: str) -> list[Ipv4Assignment]:
        return [a if isinstance(a, Ipv4Assignment) else Ipv4Assignment(address=a) for a in self.links.get(name, [])]


class FakeProbeService(ProbeService):
    """Probe service that succeeds unless the destination (or pair) is marked unreachable."""

    def __init__(self, unreachable: set[str] | None = None, unreachable_pairs: set[tuple[str, str]] | None = None):
        self.unreachable = unreachable or set()
        self.unreachable_pairs = unreachable_pairs or set()
        self.calls: list[tuple[str, str, int]] = []

    def probe(self, interface: str, destination: str, count: int) -> ProbeReply:
        self.calls.append((interface, destination, count))
        ok = destination not in self.unreachable and (interface, destination) not in self.unreachable_pairs
        output = f"PING {destination} from {interface}\n{count} packets transmitted, {count if ok else 0} received\n"
        return ProbeReply(success=ok, output=output)


@pytest.fixture()
def fake_inspector():
    """Factory fixture returning a FakeInspector for the given links."""

    def _make(links=None):
        return FakeInspector(links)

    return _make


@pytest.fixture()
def fake_probe_service():
    """Factory fixture returning a FakeProbeService."""

    def _make(**kwargs):
        return FakeProbeService(**kwargs)

    return _make


# ── reporter fixtures ─────────────────────────────────────────────────


@pytest.fixture()
def console():
    return io.StringIO()


@pytest.fixture()
def log_path(tmp_path):
    return tmp_path / "ping_results.log"


@pytest.fixture()
def reporter(log_path, console):
    """Reporter writing to a StringIO console and a log file under tmp_path."""
    rep = Reporter(log_path, console=console, colorize=False)
    yield rep
    rep.close()


@pytest.fixture()
def sample_active():
    """Factory fixture returning an ActiveSubinterface with customizable fields."""

    def _make(vlan_id: int = 2, address: str | None = None, base: str = "eth1"):
        addr = address or f"10.0.{vlan_id}.5"
        return ActiveSubinterface(
            interface_name=f"{base}.{vlan_id}",
            source_address=addr,
            vlan_id=vlan_id,
            addresses=(addr,),
        )

    return _make
