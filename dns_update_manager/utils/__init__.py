"""
Utility functions and helpers.

This package contains name normalisation and validation helpers
shared by the providers and the configuration layer.
"""

from .validators import (
    APEX,
    absolute_name,
    query_name,
    split_host_port,
    update_zone,
    validate_hostname,
    validate_ip_address,
)

__all__ = [
    "APEX",
    "absolute_name",
    "query_name",
    "split_host_port",
    "update_zone",
    "validate_hostname",
    "validate_ip_address",
]
