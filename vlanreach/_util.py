"""Shared helper functions for interface inspection and probing."""

from __future__ import annotations

import ipaddress
import re
import subprocess
from typing import Optional

from loguru import logger


def _run_cmd(cmd: list[str], timeout: int = 30) -> str:
    """Run a subprocess command and return stdout."""
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
        return result.stdout
    except (subprocess.TimeoutExpired, FileNotFoundError) as e:
        logger.debug(f"Command {cmd[0]} failed: {e}")
        return ""


def _run_cmd_status(cmd: list[str], timeout: int = 30) -> tuple[Optional[int], str]:
    """Run a subprocess command and return (exit status, combined stdout/stderr).

    The exit status is ``None`` when the command could not be run or timed out.
    """
    try:
        result = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True, timeout=timeout)
        return result.returncode, result.stdout or ""
    except subprocess.TimeoutExpired:
        logger.debug(f"Command {cmd[0]} timed out after {timeout}s")
        return None, f"{cmd[0]}: timed out after {timeout}s\n"
    except FileNotFoundError as e:
        logger.debug(f"Command {cmd[0]} failed: {e}")
        return None, f"{cmd[0]}: command not found\n"


def _validate_interface_name(name: str) -> bool:
    """Validate interface name to prevent injection."""
    return bool(re.match(r"^[a-zA-Z0-9._-]+$", name))


def _validate_ip(ip: str, version: Optional[int] = None) -> bool:
    """Validate IP address string, optionally restricted to IPv4 or IPv6."""
    try:
        addr = ipaddress.ip_address(ip)
    except ValueError:
        return False
    return version is None or addr.version == version


def subinterface_name(base_interface: str, vlan_id: int) -> str:
    """Derive the conventional VLAN subinterface name, e.g. ``eth1.201``."""
    return f"{base_interface}.{vlan_id}"


def destination_vlan_label(address: str) -> Optional[int]:
    """Best-effort VLAN id of a destination, read from its third octet.

    ``11.3.201.5`` gives 201 and ``10.0.1`` gives 1. Addresses with fewer than
    three dot-separated parts or a non-numeric third part give ``None``.
    Only used for display.
    """
    parts = address.split(".")
    if len(parts) < 3:
        return None
    third = parts[2].strip()
    if not (third.isascii() and third.isdigit()):
        return None
    return int(third)


def format_vlan_label(label: Optional[int]) -> str:
    return "" if label is None else str(label)
