"""
Core record and configuration model.

This package contains the typed record variants, the generic-record
parser and the provider configuration.
"""

from .config import ProviderConfig
from .records import AddressRecord, RecordType, TXTRecord, parse_record, record_to_dict

__all__ = [
    "ProviderConfig",
    "AddressRecord",
    "RecordType",
    "TXTRecord",
    "parse_record",
    "record_to_dict",
]
