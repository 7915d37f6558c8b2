"""Pydantic models and enums for VLAN reachability checks."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

from vlanreach._util import _validate_interface_name, _validate_ip

DEFAULT_VLAN_IDS: tuple[int, ...] = (2, 201, 202, 203, 211, 212, 213, 221, 222, 240)


class AddressPolicy(str, Enum):
    """Which IPv4 address(es) of an interface count as its source address."""

    FIRST = "first"
    ALL = "all"
    PREFER_PRIMARY = "prefer-primary"


class ProbeOutcome(str, Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class CheckerConfig(BaseModel):
    """Immutable run configuration, built once at startup."""

    model_config = ConfigDict(frozen=True)

    base_interface: str = "eth1"
    vlan_ids: tuple[PositiveInt, ...] = DEFAULT_VLAN_IDS
    probe_count: PositiveInt = 2
    probe_timeout: PositiveInt = 2  # seconds per echo request
    log_path: Path = Path("ping_results.log")
    address_policy: AddressPolicy = AddressPolicy.FIRST

    @field_validator("base_interface")
    @classmethod
    def _check_base_interface(cls, v: str) -> str:
        if not _validate_interface_name(v):
            raise ValueError(f"invalid interface name: {v!r}")
        return v


class Ipv4Assignment(BaseModel):
    """A single ``inet`` entry reported for an interface."""

    address: str
    prefixlen: int = 32
    secondary: bool = False


class ResolvedInterface(BaseModel):
    name: str
    exists: bool = False
    addresses: list[str] = Field(default_factory=list)

    @property
    def ipv4(self) -> Optional[str]:
        return self.addresses[0] if self.addresses else None


class ActiveSubinterface(BaseModel):
    """A VLAN subinterface that exists and holds an IPv4 address."""

    model_config = ConfigDict(frozen=True)

    interface_name: str
    source_address: str
    vlan_id: int
    addresses: tuple[str, ...] = ()

    @field_validator("source_address")
    @classmethod
    def _check_source_address(cls, v: str) -> str:
        if not _validate_ip(v, version=4):
            raise ValueError(f"not an IPv4 address: {v!r}")
        return v


class ProbeStats(BaseModel):
    """Packet counters parsed from a ping summary."""

    transmitted: int = 0
    received: int = 0
    loss_percent: float = 100.0
    rtt_avg_ms: Optional[float] = None


class ProbeReply(BaseModel):
    """Verdict of a single probe service invocation."""

    success: bool
    output: str = ""
    stats: Optional[ProbeStats] = None


class ProbeResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    source_interface: str
    source_address: str
    destination_address: str
    destination_vlan_label: Optional[int] = None
    outcome: ProbeOutcome
    stats: Optional[ProbeStats] = None

    @property
    def ok(self) -> bool:
        return self.outcome is ProbeOutcome.SUCCESS
