"""
DNS Update Manager - Authenticated dynamic DNS updates

Adds and removes TXT and address records on authoritative servers through
TSIG-signed RFC 2136 update messages, and reads a zone's current records
back through a recursive resolver.
"""

__version__ = "1.0.0"
__author__ = "DNS Update Manager Team"
__description__ = "TSIG-authenticated dynamic DNS record updates"

from .core.config import ProviderConfig
from .errors import DNSUpdateError
from .providers.dns_client import DNSClient
from .providers.rfc2136_provider import RFC2136Provider

__all__ = [
    "DNSClient",
    "DNSUpdateError",
    "ProviderConfig",
    "RFC2136Provider",
]
