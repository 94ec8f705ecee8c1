#!/usr/bin/env python3
"""
Tests for the record model and name handling helpers.
"""

import ipaddress
import unittest

from dns_update_manager.core.records import (
    AddressRecord,
    RecordType,
    TXTRecord,
    parse_record,
    record_to_dict,
)
from dns_update_manager.errors import RecordParseError, UnsupportedRecordTypeError
from dns_update_manager.utils.validators import (
    absolute_name,
    query_name,
    split_host_port,
    update_zone,
    validate_hostname,
    validate_ip_address,
)


class TestParseRecord(unittest.TestCase):
    """Test decoding generic records into typed records."""

    def test_parse_txt(self):
        """TXT records keep name and text."""
        record = parse_record({"type": "TXT", "name": "_acme-challenge", "text": "abc123"})
        self.assertEqual(record, TXTRecord(name="_acme-challenge", text="abc123"))
        self.assertEqual(record.rdtype, RecordType.TXT)

    def test_parse_type_is_case_insensitive(self):
        """Type tags are matched case-insensitively."""
        record = parse_record({"type": "txt", "name": "a", "text": "b"})
        self.assertIsInstance(record, TXTRecord)

    def test_parse_address(self):
        """A and AAAA records carry an ipaddress value."""
        v4 = parse_record({"type": "A", "name": "www", "ip": "192.0.2.1"})
        v6 = parse_record({"type": "AAAA", "name": "www", "ip": "2001:db8::1"})

        self.assertEqual(v4.ip, ipaddress.ip_address("192.0.2.1"))
        self.assertEqual(v4.rdtype, RecordType.A)
        self.assertEqual(v6.rdtype, RecordType.AAAA)

    def test_missing_name_means_apex(self):
        """A record without a name sits at the zone apex."""
        record = parse_record({"type": "TXT", "text": "v=spf1 -all"})
        self.assertEqual(record.name, "@")

    def test_typed_records_pass_through(self):
        """Already-typed records are returned unchanged."""
        record = TXTRecord(name="x", text="y")
        self.assertIs(parse_record(record), record)

    def test_unsupported_types_rejected(self):
        """Types other than TXT, A and AAAA are rejected."""
        for record_type in ("MX", "CNAME", "SRV", "NS"):
            with self.subTest(record_type=record_type):
                with self.assertRaises(UnsupportedRecordTypeError) as ctx:
                    parse_record({"type": record_type, "name": "x", "target": "y"})
                self.assertEqual(ctx.exception.record_type, record_type)

    def test_malformed_records_rejected(self):
        """Malformed records raise RecordParseError."""
        invalid_records = [
            ({}, "Missing type"),
            ({"type": ""}, "Empty type"),
            ({"type": "TXT", "name": "x"}, "Missing text"),
            ({"type": "TXT", "name": None, "text": "y"}, "Null name"),
            ({"type": "A", "name": "x", "ip": "256.1.2.3"}, "Invalid IPv4"),
            ({"type": "A", "name": "x"}, "Missing IP"),
            ({"type": "A", "name": "x", "ip": "2001:db8::1"}, "IPv6 in A record"),
            ({"type": "AAAA", "name": "x", "ip": "192.0.2.1"}, "IPv4 in AAAA record"),
            ({"type": "TXT", "name": "a" * 64, "text": "x"}, "Label over 63 octets"),
            ({"type": "TXT", "name": "a..b", "text": "x"}, "Empty label"),
            ("TXT x y", "Not a mapping"),
        ]

        for record, description in invalid_records:
            with self.subTest(description=description):
                with self.assertRaises(RecordParseError):
                    parse_record(record)

    def test_record_to_dict(self):
        """Typed records encode back into generic records."""
        self.assertEqual(
            record_to_dict(TXTRecord(name="@", text="hello")),
            {"type": "TXT", "name": "@", "text": "hello"},
        )
        self.assertEqual(
            record_to_dict(AddressRecord(name="www", ip=ipaddress.ip_address("2001:db8::1"))),
            {"type": "AAAA", "name": "www", "ip": "2001:db8::1"},
        )


class TestNameHandling(unittest.TestCase):
    """Test zone normalisation and absolute name resolution."""

    def test_query_name_strips_trailing_dot(self):
        """Lookups use the zone without trailing dot."""
        self.assertEqual(query_name("example.com."), "example.com")
        self.assertEqual(query_name("example.com"), "example.com")

    def test_update_zone_enforces_trailing_dot(self):
        """Update messages use the zone with trailing dot."""
        self.assertEqual(update_zone("example.com"), "example.com.")
        self.assertEqual(update_zone("example.com."), "example.com.")

    def test_absolute_name(self):
        """Record names are resolved against the zone."""
        cases = [
            ("_acme-challenge", "example.com.", "_acme-challenge.example.com."),
            ("_acme-challenge", "example.com", "_acme-challenge.example.com."),
            ("a.b", "example.com.", "a.b.example.com."),
            ("@", "example.com.", "example.com."),
            ("", "example.com", "example.com."),
            ("www.other.org.", "example.com.", "www.other.org."),
        ]

        for name, zone, expected in cases:
            with self.subTest(name=name, zone=zone):
                self.assertEqual(absolute_name(name, zone), expected)

    def test_split_host_port(self):
        """Server addresses default to port 53."""
        cases = [
            ("ns.test:53", ("ns.test", 53)),
            ("192.0.2.1", ("192.0.2.1", 53)),
            ("192.0.2.1:5353", ("192.0.2.1", 5353)),
            ("2001:db8::53", ("2001:db8::53", 53)),
            ("[2001:db8::53]:5353", ("2001:db8::53", 5353)),
        ]

        for address, expected in cases:
            with self.subTest(address=address):
                self.assertEqual(split_host_port(address), expected)

    def test_split_host_port_invalid(self):
        """Bad ports and empty hosts are rejected."""
        for address in ("", "ns.test:", "ns.test:dns", "ns.test:70000", ":53", "[::1"):
            with self.subTest(address=address):
                with self.assertRaises(ValueError):
                    split_host_port(address)

    def test_validate_hostname(self):
        """Host names follow label rules."""
        self.assertTrue(validate_hostname("ns1.example.com"))
        self.assertTrue(validate_hostname("ns1.example.com."))
        self.assertTrue(validate_hostname("localhost"))
        self.assertFalse(validate_hostname("-ns.example.com"))
        self.assertFalse(validate_hostname("ns..example.com"))
        self.assertFalse(validate_hostname("a" * 64 + ".com"))

    def test_validate_ip_address(self):
        """IPv4 and IPv6 addresses are both accepted."""
        self.assertTrue(validate_ip_address("192.0.2.1"))
        self.assertTrue(validate_ip_address("2001:db8::1"))
        self.assertFalse(validate_ip_address("192.0.2"))
        self.assertFalse(validate_ip_address(""))


if __name__ == "__main__":
    unittest.main(verbosity=2)
