"""
Errors - Exception hierarchy for DNS update operations

Every failure raised by the providers derives from DNSUpdateError so callers
can catch the whole family, or pick out parse, transport, protocol and
resolution failures individually.
"""

from typing import Optional


class DNSUpdateError(Exception):
    """Base class for all DNS update manager errors."""


class ConfigError(DNSUpdateError, ValueError):
    """Provider configuration is missing or invalid."""


class RecordParseError(DNSUpdateError, ValueError):
    """A generic record could not be decoded into a typed record."""


class UnsupportedRecordTypeError(RecordParseError):
    """A generic record decoded to a type this provider cannot manage."""

    def __init__(self, record_type):
        self.record_type = record_type
        super().__init__(f"unsupported record type: {record_type}")


class TransportError(DNSUpdateError):
    """Signing, sending or receiving an update message failed."""


class ProviderBusyError(TransportError):
    """The provider lock could not be acquired before the deadline."""


class ProtocolError(DNSUpdateError):
    """The authoritative server answered with a non-success rcode."""

    def __init__(self, rcode: str, domain: Optional[str] = None):
        self.rcode = rcode
        self.domain = domain
        message = f"update failed: {rcode}"
        if domain:
            message = f"update of {domain} failed: {rcode}"
        super().__init__(message)


class ResolutionError(DNSUpdateError):
    """A recursive lookup failed (absence of records is not an error)."""

    def __init__(self, qname: str, rdtype: str, cause: Exception):
        self.qname = qname
        self.rdtype = rdtype
        super().__init__(f"{rdtype} lookup for {qname} failed: {cause}")
