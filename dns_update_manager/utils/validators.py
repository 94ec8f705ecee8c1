"""
Validators - Name and address handling for DNS records

This module provides the zone-name normalisations used by lookups and by
update messages, absolute-name resolution for record names, and validation
helpers for IP addresses and server endpoints.
"""

import ipaddress
import logging
import re
from typing import Tuple, Union

logger = logging.getLogger(__name__)

APEX = "@"

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


def query_name(zone: str) -> str:
    """
    Normalise a zone name for recursive lookups.

    Lookups are issued for the relative form, so any trailing dot is
    stripped: "example.com." and "example.com" both become "example.com".
    """
    return zone.strip().rstrip(".")


def update_zone(zone: str) -> str:
    """
    Normalise a zone name for the zone section of an update message.

    Update messages need the absolute form, so a trailing dot is enforced.
    """
    zone = zone.strip()
    if not zone.endswith("."):
        zone += "."
    return zone


def absolute_name(name: str, zone: str) -> str:
    """
    Combine a record name with its zone into an absolute domain name.

    Args:
        name: Record name, relative to the zone ("_acme-challenge"), the
            apex marker ("@" or ""), or already absolute ("www.example.com.")
        zone: Zone the record belongs to, with or without trailing dot

    Returns:
        Dot-terminated domain name
    """
    name = (name or "").strip()
    zone = update_zone(zone)

    if name in ("", APEX):
        return zone
    if name.endswith("."):
        return name
    return f"{name}.{zone}"


def validate_ip_address(value: str) -> bool:
    """
    Validate an IPv4 or IPv6 address.

    Args:
        value: The address to validate

    Returns:
        True if valid, False otherwise
    """
    if not value or not isinstance(value, str):
        return False

    try:
        ipaddress.ip_address(value.strip())
        return True
    except ValueError:
        logger.warning(f"Invalid IP address: {value}")
        return False


def validate_hostname(hostname: str) -> bool:
    """
    Validate a server host name (not an IP literal).

    Args:
        hostname: The host name to validate, trailing dot allowed

    Returns:
        True if valid, False otherwise
    """
    if not hostname or not isinstance(hostname, str):
        return False

    hostname = hostname.rstrip(".")
    if len(hostname) > 253:
        logger.warning(f"Host name too long: {hostname}")
        return False

    labels = hostname.split(".")
    if any(not _validate_label(label) for label in labels):
        logger.warning(f"Invalid label in host name: {hostname}")
        return False

    return True


def _validate_label(label: str) -> bool:
    """Validate a single host name label."""
    if len(label) == 0 or len(label) > 63:
        return False

    # Letters, digits and hyphens; cannot start or end with a hyphen
    return re.match(r"^[a-zA-Z0-9]([a-zA-Z0-9-]*[a-zA-Z0-9])?$", label) is not None


def split_host_port(address: str, default_port: int = 53) -> Tuple[str, int]:
    """
    Split "host", "host:port", "[v6]:port" or a bare IPv6 literal.

    Raises:
        ValueError: If the port is not a valid number or the host is empty
    """
    address = (address or "").strip()
    if not address:
        raise ValueError("empty server address")

    if address.startswith("["):
        host, sep, rest = address[1:].partition("]")
        if not sep:
            raise ValueError(f"unterminated IPv6 literal in {address!r}")
        port = rest[1:] if rest.startswith(":") else ""
    elif address.count(":") == 1:
        host, port = address.split(":")
        if not port:
            raise ValueError(f"missing port in {address!r}")
    else:
        # bare host, or bare IPv6 literal with several colons
        host, port = address, ""

    if not host:
        raise ValueError(f"missing host in {address!r}")

    if not port:
        return host, default_port
    if not port.isdigit() or not 0 < int(port) < 65536:
        raise ValueError(f"invalid port in {address!r}")
    return host, int(port)


def is_ip_literal(host: str) -> bool:
    """Return True if host is an IPv4 or IPv6 literal."""
    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        return False
