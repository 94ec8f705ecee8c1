"""
Records - Typed record model

Callers hand the providers generic records: plain dictionaries with a
"type" tag and a type-specific payload. This module decodes them into a
closed set of typed records (TXT and address records) and rejects anything
else before it gets anywhere near the network.
"""

import ipaddress
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Union

import dns.exception
import dns.name

from ..errors import RecordParseError, UnsupportedRecordTypeError
from ..utils.validators import APEX, IPAddress, absolute_name


class RecordType(str, Enum):
    """Record types this package can manage."""

    A = "A"
    AAAA = "AAAA"
    TXT = "TXT"


@dataclass(frozen=True)
class TXTRecord:
    """A text record."""

    name: str
    text: str

    @property
    def rdtype(self) -> RecordType:
        return RecordType.TXT


@dataclass(frozen=True)
class AddressRecord:
    """An A or AAAA record; the type follows the IP version."""

    name: str
    ip: IPAddress

    @property
    def rdtype(self) -> RecordType:
        return RecordType.A if self.ip.version == 4 else RecordType.AAAA


Record = Union[TXTRecord, AddressRecord]

GenericRecord = Dict[str, str]


def parse_record(record: Union[Mapping, Record]) -> Record:
    """
    Decode a generic record into its typed variant.

    Args:
        record: Mapping with "type", "name" and either "text" (TXT) or
            "ip" (A/AAAA); typed records are passed through unchanged

    Returns:
        TXTRecord or AddressRecord

    Raises:
        UnsupportedRecordTypeError: If the type tag is not TXT, A or AAAA
        RecordParseError: If the record is malformed
    """
    if isinstance(record, (TXTRecord, AddressRecord)):
        return record

    if not isinstance(record, Mapping):
        raise RecordParseError(f"cannot parse record of type {type(record).__name__}")

    tag = record.get("type")
    if not tag or not isinstance(tag, str):
        raise RecordParseError(f"record has no type: {dict(record)}")

    try:
        rdtype = RecordType(tag.strip().upper())
    except ValueError:
        raise UnsupportedRecordTypeError(tag) from None

    name = record.get("name", APEX)
    if name is None or not isinstance(name, str):
        raise RecordParseError(f"{rdtype.value} record has an invalid name: {name!r}")
    _check_name(name, rdtype)

    if rdtype is RecordType.TXT:
        text = record.get("text")
        if not isinstance(text, str):
            raise RecordParseError(f"TXT record {name!r} has no text value")
        return TXTRecord(name=name, text=text)

    raw_ip = record.get("ip")
    try:
        ip = ipaddress.ip_address(str(raw_ip).strip())
    except ValueError:
        raise RecordParseError(
            f"{rdtype.value} record {name!r} has an invalid IP address: {raw_ip!r}"
        ) from None

    parsed = AddressRecord(name=name, ip=ip)
    if parsed.rdtype is not rdtype:
        raise RecordParseError(
            f"{rdtype.value} record {name!r} carries an IPv{ip.version} address"
        )
    return parsed


def _check_name(name: str, rdtype: RecordType) -> None:
    """Reject names that cannot form a legal DNS name."""
    try:
        dns.name.from_text(absolute_name(name, "invalid."))
    except dns.exception.DNSException as e:
        raise RecordParseError(
            f"{rdtype.value} record has an invalid name {name!r}: {e}"
        ) from e


def record_to_dict(record: Record) -> GenericRecord:
    """Encode a typed record back into its generic form."""
    if isinstance(record, TXTRecord):
        return {"type": RecordType.TXT.value, "name": record.name, "text": record.text}
    if isinstance(record, AddressRecord):
        return {"type": record.rdtype.value, "name": record.name, "ip": str(record.ip)}
    raise UnsupportedRecordTypeError(type(record).__name__)


def record_value(record: Record) -> str:
    """Return the payload of a typed record as text."""
    if isinstance(record, TXTRecord):
        return record.text
    return str(record.ip)
