"""
Mock DNS provider for testing and demonstration.

This module provides a mock DNS provider that stores records in memory
for safe testing and demonstration purposes.
"""

import logging
import threading
from typing import Dict, List, Optional

from ..core.records import GenericRecord, Record, parse_record, record_to_dict
from ..utils.validators import absolute_name, query_name
from .base_provider import DNSProvider, locked

logger = logging.getLogger(__name__)


class MockDNSProvider(DNSProvider):
    """Mock DNS provider for testing and demonstration purposes."""

    def __init__(self):
        """Initialize mock provider."""
        self.zones: Dict[str, List[Record]] = {}
        self._lock = threading.Lock()
        logger.info("Mock DNS provider initialized")

    def get_records(self, zone: str, lock_timeout: Optional[float] = None) -> List[GenericRecord]:
        """Get all records for a zone."""
        with locked(self._lock, lock_timeout):
            records = [record_to_dict(r) for r in self.zones.get(query_name(zone), [])]
        logger.info(f"Mock: Retrieved {len(records)} records")
        return records

    def append_records(
        self, zone: str, records: List, lock_timeout: Optional[float] = None
    ) -> List:
        """Add records to the zone."""
        return self._apply(zone, records, lock_timeout, delete=False)

    def set_records(
        self, zone: str, records: List, lock_timeout: Optional[float] = None
    ) -> List:
        """Set records in the zone."""
        return self._apply(zone, records, lock_timeout, delete=False)

    def delete_records(
        self, zone: str, records: List, lock_timeout: Optional[float] = None
    ) -> List:
        """Delete records from the zone."""
        return self._apply(zone, records, lock_timeout, delete=True)

    def _apply(
        self, zone: str, records: List, lock_timeout: Optional[float], delete: bool
    ) -> List:
        processed = []
        with locked(self._lock, lock_timeout):
            stored = self.zones.setdefault(query_name(zone), [])
            for record in records:
                parsed = parse_record(record)
                domain = absolute_name(parsed.name, zone)
                if delete:
                    if parsed in stored:
                        stored.remove(parsed)
                        logger.info(f"Mock: Deleted {parsed.rdtype.value} record {domain}")
                elif parsed not in stored:
                    stored.append(parsed)
                    logger.info(f"Mock: Created {parsed.rdtype.value} record {domain}")
                processed.append(record)
        return processed
