"""
Base DNS provider interface.

This module defines the abstract base class that all DNS providers must implement.
"""

import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import List, Optional

from ..core.records import GenericRecord
from ..errors import ProviderBusyError


@contextmanager
def locked(lock: threading.Lock, lock_timeout: Optional[float] = None):
    """Hold lock for the block, waiting at most lock_timeout seconds (None waits forever)."""
    timeout = -1 if lock_timeout is None else lock_timeout
    if not lock.acquire(timeout=timeout):
        raise ProviderBusyError(
            f"timed out after {lock_timeout}s waiting for provider lock"
        )
    try:
        yield
    finally:
        lock.release()


class DNSProvider(ABC):
    """Abstract base class for DNS providers."""

    @abstractmethod
    def get_records(self, zone: str, lock_timeout: Optional[float] = None) -> List[GenericRecord]:
        """Get the zone's current address and text records."""
        pass

    @abstractmethod
    def append_records(
        self, zone: str, records: List, lock_timeout: Optional[float] = None
    ) -> List:
        """Add records to the zone."""
        pass

    @abstractmethod
    def set_records(
        self, zone: str, records: List, lock_timeout: Optional[float] = None
    ) -> List:
        """Set records in the zone."""
        pass

    @abstractmethod
    def delete_records(
        self, zone: str, records: List, lock_timeout: Optional[float] = None
    ) -> List:
        """Delete records from the zone."""
        pass
