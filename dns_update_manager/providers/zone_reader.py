"""
Zone reader - Current apex records through recursive lookups

The zone's address and text records are looked up through a fixed
recursive resolver (not the authoritative server) and normalised into
generic records named with the apex marker.
"""

import logging
from typing import List

import dns.exception
import dns.resolver

from ..core.config import ProviderConfig
from ..core.records import GenericRecord, RecordType
from ..errors import ResolutionError
from ..utils.validators import APEX, query_name

logger = logging.getLogger(__name__)

ADDRESS_TYPES = (RecordType.A, RecordType.AAAA)


def build_resolver(config: ProviderConfig) -> dns.resolver.Resolver:
    """Create a resolver that only ever talks to the configured resolver."""
    ip, port = config.resolver_endpoint
    resolver = dns.resolver.Resolver(configure=False)
    # port must be set before nameservers
    resolver.port = port
    resolver.nameservers = [ip]
    resolver.timeout = config.resolver_timeout
    resolver.lifetime = config.resolver_timeout
    return resolver


def _lookup(resolver: dns.resolver.Resolver, qname: str, rdtype: RecordType) -> list:
    """Resolve one type; a missing RRset is an empty result, not an error."""
    try:
        return list(resolver.resolve(qname, rdtype.value))
    except dns.resolver.NoAnswer:
        logger.debug(f"No {rdtype.value} records for {qname}")
        return []
    except dns.exception.DNSException as e:
        logger.error(f"{rdtype.value} lookup for {qname} failed: {e}")
        raise ResolutionError(qname, rdtype.value, e) from e


def resolve_zone(config: ProviderConfig, zone: str) -> List[GenericRecord]:
    """
    Get the zone's apex address and text records.

    Args:
        config: Provider configuration (resolver address and timeout)
        zone: Zone name, with or without trailing dot

    Returns:
        Address records followed by text records, in discovery order

    Raises:
        ResolutionError: If a lookup fails
    """
    qname = query_name(zone)
    resolver = build_resolver(config)
    records = []

    for rdtype in ADDRESS_TYPES:
        for rdata in _lookup(resolver, qname, rdtype):
            records.append({"type": rdtype.value, "name": APEX, "ip": rdata.address})

    for rdata in _lookup(resolver, qname, RecordType.TXT):
        text = b"".join(rdata.strings).decode("utf-8", errors="replace")
        if not text:
            continue
        records.append({"type": RecordType.TXT.value, "name": APEX, "text": text})

    logger.info(f"Retrieved {len(records)} records for {qname}")
    return records
