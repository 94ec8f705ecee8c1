#!/usr/bin/env python3
"""
Tests for provider selection and the in-memory mock provider.
"""

import unittest

from dns_fakes import SECRET, FakeDNSServer
from dns_update_manager.errors import (
    ConfigError,
    ProviderBusyError,
    UnsupportedRecordTypeError,
)
from dns_update_manager.providers.dns_client import DNSClient
from dns_update_manager.providers.mock_provider import MockDNSProvider
from dns_update_manager.providers.rfc2136_provider import RFC2136Provider


class TestDNSClient(unittest.TestCase):
    """Test provider selection from the application config."""

    def test_rfc2136_provider(self):
        """The rfc2136 provider is built from its mapping."""
        client = DNSClient(
            {
                "default_provider": "rfc2136",
                "dns_providers": {
                    "rfc2136": {"server": "192.0.2.53", "key_name": "k1", "secret": SECRET}
                },
            }
        )

        self.assertIsInstance(client.provider, RFC2136Provider)
        self.assertEqual(client.provider.config.key_name, "k1")

    def test_rfc2136_is_default(self):
        """Without default_provider the RFC 2136 provider is used."""
        with self.assertRaises(ConfigError):
            DNSClient({"dns_providers": {}})

    def test_unknown_provider_falls_back_to_mock(self):
        """Unknown providers fall back to the mock provider."""
        with self.assertLogs("dns_update_manager.providers.dns_client", "WARNING"):
            client = DNSClient({"default_provider": "route53"})
        self.assertIsInstance(client.provider, MockDNSProvider)

    def test_client_delegates(self):
        """Client operations go to the selected provider."""
        server = FakeDNSServer()
        with server.patch():
            client = DNSClient(
                {
                    "dns_providers": {
                        "rfc2136": {"server": "192.0.2.53", "key_name": "k1", "secret": SECRET}
                    }
                }
            )
            record = {"type": "TXT", "name": "@", "text": "hello"}
            self.assertEqual(client.append_records("example.com", [record]), [record])
            self.assertEqual(client.get_records("example.com"), [record])
            self.assertEqual(client.delete_records("example.com", [record]), [record])

        self.assertEqual(server.exchanges, 2)


class TestMockDNSProvider(unittest.TestCase):
    """Test the mock DNS provider."""

    def setUp(self):
        """Set up test fixtures."""
        self.provider = MockDNSProvider()

    def test_append_and_get(self):
        """Appended records are returned by get_records."""
        records = [
            {"type": "A", "name": "@", "ip": "192.0.2.1"},
            {"type": "TXT", "name": "@", "text": "hello"},
        ]

        self.assertEqual(self.provider.append_records("example.com.", records), records)
        self.assertEqual(self.provider.get_records("example.com"), records)

    def test_set_does_not_duplicate(self):
        """Setting an existing record keeps one copy."""
        record = {"type": "TXT", "name": "@", "text": "hello"}
        self.provider.append_records("example.com", [record])
        self.provider.set_records("example.com", [record])

        self.assertEqual(len(self.provider.get_records("example.com")), 1)

    def test_delete(self):
        """Deleted records disappear; deleting absent records is a no-op."""
        record = {"type": "TXT", "name": "@", "text": "hello"}
        self.provider.append_records("example.com", [record])

        self.provider.delete_records("example.com", [record])
        self.provider.delete_records("example.com", [record])

        self.assertEqual(self.provider.get_records("example.com"), [])

    def test_unsupported_record(self):
        """The mock rejects unsupported types like the real provider."""
        with self.assertRaises(UnsupportedRecordTypeError):
            self.provider.append_records("example.com", [{"type": "MX", "name": "@"}])

    def test_lock_timeout(self):
        """A held lock makes every operation give up after lock_timeout."""
        record = {"type": "TXT", "name": "@", "text": "hello"}
        self.provider._lock.acquire()
        try:
            with self.assertRaises(ProviderBusyError):
                self.provider.get_records("example.com", lock_timeout=0.01)
            with self.assertRaises(ProviderBusyError):
                self.provider.append_records("example.com", [record], lock_timeout=0.01)
            with self.assertRaises(ProviderBusyError):
                self.provider.delete_records("example.com", [record], lock_timeout=0.01)
        finally:
            self.provider._lock.release()

        self.assertEqual(self.provider.get_records("example.com"), [])


if __name__ == "__main__":
    unittest.main(verbosity=2)
