"""
Behave environment configuration for DNS Update Manager integration tests.

The scenarios talk to a real BIND server that accepts TSIG-signed updates
for the test zone. Point them at it with DNS_TEST_SERVER, DNS_TEST_ZONE,
DNS_TEST_KEY_NAME and DNS_TEST_SECRET (or DNS_TEST_KEY_FILE).
"""

import logging
import os
from pathlib import Path

import dns.exception
import dns.message
import dns.query
import dns.rcode

from dns_update_manager.utils.validators import split_host_port, update_zone

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def before_all(context):
    """Set up test environment before all tests."""
    context.base_dir = Path(__file__).parent.parent

    context.test_zone = os.environ.get("DNS_TEST_ZONE", "test.example.com.")
    context.test_server = os.environ.get("DNS_TEST_SERVER", "127.0.0.1:53")

    context.provider_config = {
        "server": context.test_server,
        "key_name": os.environ.get("DNS_TEST_KEY_NAME", "update-key"),
        "secret": os.environ.get("DNS_TEST_SECRET", ""),
        "key_file": os.environ.get(
            "DNS_TEST_KEY_FILE", str(context.base_dir / "bind" / "update-key.conf")
        ),
        # reads go to the test server too; it is authoritative for the zone
        "resolver": context.test_server,
        "ttl": 60,
        "timeout": 5,
        "resolver_timeout": 5,
    }

    context.bind_running = _check_bind_running(context.test_server, context.test_zone)
    if not context.bind_running:
        logger.warning("BIND DNS server is not running. Scenarios will be skipped.")

    logger.info("Test environment setup complete")


def before_scenario(context, scenario):
    """Set up each test scenario."""
    context.applied_records = []
    logger.info(f"Starting scenario: {scenario.name}")


def after_scenario(context, scenario):
    """Clean up records the scenario left behind."""
    provider = getattr(context, "provider", None)
    if provider and context.applied_records:
        try:
            provider.delete_records(context.test_zone, context.applied_records)
        except Exception as e:
            logger.warning(f"Failed to cleanup test records: {e}")

    logger.info(f"Completed scenario: {scenario.name}")


def _check_bind_running(server: str, zone: str) -> bool:
    """Check that the server answers authoritatively for the test zone."""
    try:
        host, port = split_host_port(server)
        query = dns.message.make_query(update_zone(zone), "SOA")
        response = dns.query.udp(query, host, port=port, timeout=2)
        return response.rcode() == dns.rcode.NOERROR
    except (dns.exception.DNSException, OSError, ValueError):
        return False
