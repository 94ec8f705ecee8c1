"""
DNS Client - Unified interface for DNS providers

This module selects the provider named in the application configuration,
currently supporting RFC 2136 servers and an in-memory mock.
"""

import logging
from typing import Dict, List, Optional

from ..core.config import ProviderConfig
from ..core.records import GenericRecord
from .base_provider import DNSProvider
from .mock_provider import MockDNSProvider
from .rfc2136_provider import RFC2136Provider

logger = logging.getLogger(__name__)


class DNSClient:
    """Unified DNS client that supports multiple providers."""

    def __init__(self, config: Dict):
        """Initialize DNS client with configuration."""
        self.config = config
        self.provider = self._get_provider()

    def _get_provider(self) -> DNSProvider:
        """Get DNS provider based on configuration."""
        provider_name = self.config.get("default_provider", "rfc2136")
        provider_config = self.config.get("dns_providers", {}).get(provider_name, {})

        if provider_name == "rfc2136":
            return RFC2136Provider(ProviderConfig.from_dict(provider_config))
        elif provider_name == "mock":
            return MockDNSProvider()
        else:
            logger.warning(f"Unknown provider '{provider_name}', using mock provider")
            return MockDNSProvider()

    def get_records(self, zone: str, lock_timeout: Optional[float] = None) -> List[GenericRecord]:
        """Get the zone's current records."""
        return self.provider.get_records(zone, lock_timeout)

    def append_records(self, zone: str, records: List, lock_timeout: Optional[float] = None) -> List:
        """Add records to the zone."""
        return self.provider.append_records(zone, records, lock_timeout)

    def set_records(self, zone: str, records: List, lock_timeout: Optional[float] = None) -> List:
        """Set records in the zone."""
        return self.provider.set_records(zone, records, lock_timeout)

    def delete_records(self, zone: str, records: List, lock_timeout: Optional[float] = None) -> List:
        """Delete records from the zone."""
        return self.provider.delete_records(zone, records, lock_timeout)
