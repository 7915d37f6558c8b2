"""Tests for vlanreach/models.py"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from vlanreach.models import (
    DEFAULT_VLAN_IDS,
    ActiveSubinterface,
    AddressPolicy,
    CheckerConfig,
    ProbeOutcome,
    ProbeResult,
    ResolvedInterface,
)


class TestCheckerConfig:
    """Tests for CheckerConfig."""

    def test_defaults(self):
        """Test defaults match the stock deployment."""
        cfg = CheckerConfig()

        assert cfg.base_interface == "eth1"
        assert cfg.vlan_ids == DEFAULT_VLAN_IDS
        assert cfg.vlan_ids[0] == 2
        assert cfg.probe_count == 2
        assert cfg.log_path == Path("ping_results.log")
        assert cfg.address_policy is AddressPolicy.FIRST

    def test_frozen(self):
        """Test config cannot be mutated after construction."""
        cfg = CheckerConfig()

        with pytest.raises(ValidationError):
            cfg.probe_count = 5

    def test_vlan_ids_list_becomes_tuple(self):
        """Test VLAN ids keep their order and become a tuple."""
        cfg = CheckerConfig(vlan_ids=[203, 2, 203])

        assert cfg.vlan_ids == (203, 2, 203)

    def test_non_positive_vlan_id_rejected(self):
        with pytest.raises(ValidationError):
            CheckerConfig(vlan_ids=[2, 0])

    def test_zero_probe_count_rejected(self):
        with pytest.raises(ValidationError):
            CheckerConfig(probe_count=0)

    def test_invalid_base_interface_rejected(self):
        """Test shell metacharacters in the interface name are rejected."""
        with pytest.raises(ValidationError):
            CheckerConfig(base_interface="eth1; reboot")

    def test_policy_from_string(self):
        cfg = CheckerConfig(address_policy="prefer-primary")

        assert cfg.address_policy is AddressPolicy.PREFER_PRIMARY


class TestResolvedInterface:
    """Tests for ResolvedInterface.ipv4."""

    def test_first_address_is_ipv4(self):
        r = ResolvedInterface(name="eth1.2", exists=True, addresses=["10.0.2.5", "10.0.2.6"])

        assert r.ipv4 == "10.0.2.5"

    def test_no_addresses_gives_none(self):
        r = ResolvedInterface(name="eth1.2", exists=True)

        assert r.ipv4 is None


class TestActiveSubinterface:
    """Tests for ActiveSubinterface."""

    def test_valid_instance(self):
        a = ActiveSubinterface(interface_name="eth1.2", source_address="10.0.2.5", vlan_id=2)

        assert a.source_address == "10.0.2.5"

    def test_invalid_source_address_rejected(self):
        """Test an instance cannot exist without a valid IPv4 address."""
        with pytest.raises(ValidationError):
            ActiveSubinterface(interface_name="eth1.2", source_address="", vlan_id=2)

        with pytest.raises(ValidationError):
            ActiveSubinterface(interface_name="eth1.2", source_address="fe80::1", vlan_id=2)


class TestProbeResult:
    """Tests for ProbeResult."""

    def test_ok_property(self):
        base = dict(source_interface="eth1.2", source_address="10.0.2.5", destination_address="10.0.201.1")

        assert ProbeResult(outcome=ProbeOutcome.SUCCESS, **base).ok is True
        assert ProbeResult(outcome=ProbeOutcome.FAILED, **base).ok is False

    def test_label_defaults_to_none(self):
        r = ProbeResult(
            source_interface="eth1.2",
            source_address="10.0.2.5",
            destination_address="abc",
            outcome=ProbeOutcome.FAILED,
        )

        assert r.destination_vlan_label is None
