"""
Fake authoritative server and resolver for the unittest suite.

FakeDNSServer stands in for the network seams used by the providers:
dns.query.udp_with_fallback (update exchange), dns.resolver.Resolver.resolve
(zone reads) and dns.resolver.resolve (server host name lookups). Updates
are re-parsed from their wire form with the TSIG key, so a message with a
bad signature fails inside the fake just as it would on a real server.
"""

import base64
import threading
import time
from contextlib import ExitStack
from typing import Dict, List, Tuple
from unittest.mock import Mock, patch

import dns.exception
import dns.message
import dns.name
import dns.rcode
import dns.rdata
import dns.rdataclass
import dns.rdatatype
import dns.rdtypes.ANY.TXT
import dns.resolver
import dns.tsig

SECRET = base64.b64encode(b"s3cr3t").decode()


class FakeDNSServer:
    """In-memory zone behind a fake UDP/TCP exchange and resolver."""

    def __init__(self, key_name: str = "k1", secret: str = SECRET, algorithm: str = "hmac-sha256"):
        self.key = dns.tsig.Key(
            dns.name.from_text(key_name), secret, dns.name.from_text(algorithm)
        )
        # (owner name, rdtype text) -> list of values, in insertion order
        self.zone: Dict[Tuple[str, str], List[str]] = {}
        self.messages: List[dns.message.Message] = []
        self.destinations: List[Tuple[str, int]] = []
        self.queries: List[Tuple[str, str, List[str], int]] = []
        self.refuse: Dict[int, int] = {}
        self.resolve_errors: Dict[str, Exception] = {}
        self.delay = 0.0
        self.overlaps = 0
        self._in_flight = 0
        self._state_lock = threading.Lock()

    def patch(self) -> ExitStack:
        """Patch the network seams; use as a context manager."""
        stack = ExitStack()
        stack.enter_context(patch("dns.query.udp_with_fallback", side_effect=self.exchange))
        stack.enter_context(
            patch.object(dns.resolver.Resolver, "resolve", autospec=True, side_effect=self.lookup)
        )
        stack.enter_context(patch("dns.resolver.resolve", side_effect=self.host_lookup))
        return stack

    @property
    def exchanges(self) -> int:
        return len(self.messages)

    def refuse_message(self, number: int, rcode: int = dns.rcode.REFUSED):
        """Answer the given (1-based) update message with an error rcode."""
        self.refuse[number] = rcode

    def exchange(self, query, where, timeout=None, port=53, **kwargs):
        with self._state_lock:
            if self._in_flight:
                self.overlaps += 1
            self._in_flight += 1
        try:
            if self.delay:
                time.sleep(self.delay)

            received = dns.message.from_wire(query.to_wire(), keyring=self.key)
            with self._state_lock:
                self.messages.append(received)
                self.destinations.append((where, port))
                number = len(self.messages)

            response = dns.message.make_response(query)
            if number in self.refuse:
                response.set_rcode(self.refuse[number])
            else:
                self._apply(received)
            return response, False
        finally:
            with self._state_lock:
                self._in_flight -= 1

    def _apply(self, message):
        for rrset in message.update:
            key = (rrset.name.to_text(), dns.rdatatype.to_text(rrset.rdtype))
            values = self.zone.setdefault(key, [])
            for rdata in rrset:
                value = _value(rdata)
                if rrset.deleting == dns.rdataclass.NONE:
                    if value in values:
                        values.remove(value)
                elif value not in values:
                    values.append(value)

    def lookup(self, resolver, qname, rdtype="A", *args, **kwargs):
        qname = str(qname)
        nameservers = [getattr(ns, "address", ns) for ns in resolver.nameservers]
        self.queries.append((qname, rdtype, nameservers, resolver.port))
        if qname in self.resolve_errors:
            raise self.resolve_errors[qname]

        owner = dns.name.from_text(qname).to_text()
        values = self.zone.get((owner, rdtype), [])
        if not values:
            raise dns.resolver.NoAnswer()

        rdclass = dns.rdataclass.IN
        if rdtype == "TXT":
            return [_txt(value) for value in values]
        return [
            dns.rdata.from_text(rdclass, dns.rdatatype.from_text(rdtype), value)
            for value in values
        ]

    def host_lookup(self, host, rdtype="A", *args, **kwargs):
        if rdtype != "A":
            raise dns.resolver.NoAnswer()
        return [Mock(address="192.0.2.53")]


def _value(rdata) -> str:
    if rdata.rdtype == dns.rdatatype.TXT:
        return b"".join(rdata.strings).decode()
    return rdata.address


def _txt(text: str):
    data = text.encode()
    chunks = [data[i : i + 255] for i in range(0, len(data), 255)] or [b""]
    return dns.rdtypes.ANY.TXT.TXT(dns.rdataclass.IN, dns.rdatatype.TXT, chunks)
