"""
DNS provider implementations.

This package contains the RFC 2136 provider with its update client and
zone reader, an in-memory mock provider, and the client that selects
between them.
"""

from .base_provider import DNSProvider
from .dns_client import DNSClient
from .mock_provider import MockDNSProvider
from .rfc2136_provider import RFC2136Provider
from .update_client import apply_update
from .zone_reader import resolve_zone

__all__ = [
    "DNSClient",
    "DNSProvider",
    "MockDNSProvider",
    "RFC2136Provider",
    "apply_update",
    "resolve_zone",
]
