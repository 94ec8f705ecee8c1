"""
RFC 2136 DNS provider implementation.

This module coordinates batches of record changes against an authoritative
server that accepts TSIG-signed dynamic updates, and reads a zone's current
records back through a recursive resolver.
"""

import logging
import threading
from enum import Enum
from typing import List, Optional

from ..core.config import ProviderConfig
from ..core.records import GenericRecord, parse_record
from .base_provider import DNSProvider, locked
from .update_client import apply_update
from .zone_reader import resolve_zone

logger = logging.getLogger(__name__)


class Operation(str, Enum):
    APPEND = "append"
    SET = "set"
    DELETE = "delete"


class RFC2136Provider(DNSProvider):
    """
    DNS provider for servers accepting signed dynamic updates.

    Every operation holds the provider lock for its whole duration, so at
    most one DNS exchange per provider instance is in flight at a time.
    Records within a batch are applied one after another without rollback:
    if record k fails, records before it stay applied on the server.
    """

    def __init__(self, config: ProviderConfig):
        """Initialize RFC 2136 provider."""
        self.config = config
        self._lock = threading.Lock()
        logger.info(
            f"RFC 2136 provider initialized for server {config.server}"
            f" with key {config.key_name}"
        )

    def get_records(self, zone: str, lock_timeout: Optional[float] = None) -> List[GenericRecord]:
        """Get the zone's apex address and text records."""
        with locked(self._lock, lock_timeout):
            return resolve_zone(self.config, zone)

    def append_records(
        self, zone: str, records: List, lock_timeout: Optional[float] = None
    ) -> List:
        """
        Add records to the zone and return them.

        Raises the error of the first failing record; earlier records in
        the batch have already been applied.
        """
        return self._update_records(Operation.APPEND, zone, records, lock_timeout)

    def set_records(
        self, zone: str, records: List, lock_timeout: Optional[float] = None
    ) -> List:
        """
        Set records in the zone and return them.

        Behaves like append_records: whether an addition replaces an
        existing value is up to the server's update semantics.
        """
        return self._update_records(Operation.SET, zone, records, lock_timeout)

    def delete_records(
        self, zone: str, records: List, lock_timeout: Optional[float] = None
    ) -> List:
        """
        Delete records from the zone and return them.

        Raises the error of the first failing record; earlier records in
        the batch have already been deleted.
        """
        return self._update_records(Operation.DELETE, zone, records, lock_timeout)

    def _update_records(
        self,
        operation: Operation,
        zone: str,
        records: List,
        lock_timeout: Optional[float],
    ) -> List:
        is_delete = operation is Operation.DELETE
        processed = []

        with locked(self._lock, lock_timeout):
            for record in records:
                try:
                    apply_update(self.config, zone, parse_record(record), is_delete)
                except Exception:
                    if processed:
                        logger.warning(
                            f"{operation.value} on {zone} aborted after"
                            f" {len(processed)}/{len(records)} records were applied"
                        )
                    raise
                processed.append(record)

        logger.info(f"{operation.value}: {len(processed)} records processed in {zone}")
        return processed
