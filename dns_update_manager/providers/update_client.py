"""
Update client - Signed RFC 2136 updates

This module builds one TSIG-signed dynamic-update message per record,
exchanges it with the authoritative server and interprets the response
code. It keeps no state between calls: every call builds a fresh message.
"""

import logging
from typing import Callable, Dict, Mapping, Tuple, Type, Union

import dns.exception
import dns.message
import dns.name
import dns.query
import dns.rcode
import dns.rdata
import dns.rdataclass
import dns.rdatatype
import dns.rdtypes.ANY.TXT
import dns.resolver
import dns.update

from ..core.config import TSIG_FUDGE, ProviderConfig
from ..core.records import AddressRecord, Record, TXTRecord, parse_record
from ..errors import (
    ProtocolError,
    RecordParseError,
    TransportError,
    UnsupportedRecordTypeError,
)
from ..utils.validators import absolute_name, is_ip_literal, update_zone

logger = logging.getLogger(__name__)

# A single TXT character-string holds at most 255 octets.
TXT_CHUNK_SIZE = 255


def _txt_rdata(record: TXTRecord) -> dns.rdata.Rdata:
    data = record.text.encode("utf-8")
    chunks = [data[i : i + TXT_CHUNK_SIZE] for i in range(0, len(data), TXT_CHUNK_SIZE)]
    return dns.rdtypes.ANY.TXT.TXT(
        dns.rdataclass.IN, dns.rdatatype.TXT, chunks or [b""]
    )


def _address_rdata(record: AddressRecord) -> dns.rdata.Rdata:
    return dns.rdata.from_text(
        dns.rdataclass.IN, dns.rdatatype.from_text(record.rdtype.value), str(record.ip)
    )


RDATA_BUILDERS: Dict[Type, Callable[..., dns.rdata.Rdata]] = {
    TXTRecord: _txt_rdata,
    AddressRecord: _address_rdata,
}


def build_rdata(record: Record) -> dns.rdata.Rdata:
    """Build the wire payload for a typed record."""
    builder = RDATA_BUILDERS.get(type(record))
    if builder is None:
        raise UnsupportedRecordTypeError(type(record).__name__)
    return builder(record)


def build_update(
    config: ProviderConfig, zone: str, record: Record, is_delete: bool = False
) -> dns.update.UpdateMessage:
    """
    Create a signed update message for a single record.

    The record is placed in the update section either as an addition or,
    when is_delete is set, as a delete-specific-RR entry (class NONE).
    """
    rdata = build_rdata(record)
    try:
        domain = dns.name.from_text(absolute_name(record.name, zone))
        update = dns.update.Update(update_zone(zone))
    except dns.exception.DNSException as e:
        raise RecordParseError(
            f"cannot place {record.name!r} in zone {zone!r}: {e}"
        ) from e

    # dnspython stamps the signing time when the message is rendered
    update.use_tsig(config.tsig_key(), fudge=TSIG_FUDGE)

    if is_delete:
        update.delete(domain, rdata)
    else:
        update.add(domain, config.ttl, rdata)

    return update


def server_address(config: ProviderConfig) -> Tuple[str, int]:
    """Return the authoritative server as (ip, port), resolving a host name."""
    host, port = config.server_endpoint
    if is_ip_literal(host):
        return host, port

    for rdtype in ("A", "AAAA"):
        try:
            answers = dns.resolver.resolve(host, rdtype, lifetime=config.timeout)
        except dns.resolver.NoAnswer:
            continue
        except dns.exception.DNSException as e:
            logger.error(f"Cannot resolve DNS server {host}: {e}")
            raise TransportError(f"cannot resolve DNS server {host}: {e}") from e
        return answers[0].address, port

    raise TransportError(f"DNS server {host} has no address records")


def apply_update(
    config: ProviderConfig,
    zone: str,
    record: Union[Mapping, Record],
    is_delete: bool = False,
) -> None:
    """
    Apply or remove one record on the authoritative server.

    Args:
        config: Provider configuration (server, TSIG key, TTL, timeout)
        zone: Zone the record belongs to
        record: Generic or typed TXT/A/AAAA record
        is_delete: Remove the record instead of adding it

    Raises:
        RecordParseError: If the record cannot be parsed or is unsupported
        TransportError: If signing, sending or receiving fails
        ProtocolError: If the server answers with a non-success rcode
    """
    record = parse_record(record)
    update = build_update(config, zone, record, is_delete)
    domain = absolute_name(record.name, zone)
    action = "delete" if is_delete else "add"

    address, port = server_address(config)
    try:
        response, used_tcp = dns.query.udp_with_fallback(
            update, address, timeout=config.timeout, port=port
        )
    except (dns.exception.DNSException, OSError) as e:
        logger.error(f"DNS {action} for {domain} failed to send: {e}")
        raise TransportError(f"failed to send update for {domain}: {e}") from e

    if response is None:
        raise TransportError(f"no response to update for {domain}")

    if response.rcode() != dns.rcode.NOERROR:
        _handle_dns_error(response, domain, action)

    logger.debug(
        f"{'Deleted' if is_delete else 'Added'} {record.rdtype.value} record {domain}"
        f" via {address}:{port}{' (tcp)' if used_tcp else ''}"
    )


def _handle_dns_error(response: dns.message.Message, domain: str, action: str) -> None:
    """Log a DNS error response and raise ProtocolError with the rcode name."""
    rcode = dns.rcode.to_text(response.rcode())
    logger.error(f"DNS {action} for {domain} failed with response code: {rcode}")
    raise ProtocolError(rcode, domain)
