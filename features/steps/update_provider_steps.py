"""
Step definitions for RFC 2136 provider integration tests.
"""

import base64

from behave import given, when, then

from dns_update_manager.core.config import ProviderConfig
from dns_update_manager.errors import (
    DNSUpdateError,
    ProtocolError,
    TransportError,
    UnsupportedRecordTypeError,
)
from dns_update_manager.providers.rfc2136_provider import RFC2136Provider


def _skip_without_server(context):
    if not context.bind_running:
        context.scenario.skip("BIND DNS server is not running")
        return True
    return False


def _record(record_type, value):
    if record_type == "TXT":
        return {"type": "TXT", "name": "@", "text": value}
    return {"type": record_type, "name": "@", "ip": value}


@given("I have an RFC 2136 provider for the test server")
def step_impl(context):
    """Build the provider from the environment configuration."""
    if _skip_without_server(context):
        return
    context.provider = RFC2136Provider(ProviderConfig.from_dict(context.provider_config))


@given("I have a provider with a wrong TSIG secret")
def step_impl(context):
    """Build a provider whose secret the server does not know."""
    config = dict(context.provider_config)
    config["secret"] = base64.b64encode(b"definitely-not-the-key").decode()
    context.provider = RFC2136Provider(ProviderConfig.from_dict(config))


@when('I append the {record_type} record "{value}" at the apex')
def step_impl(context, record_type, value):
    """Append a record and remember it for cleanup."""
    record = _record(record_type, value)
    try:
        context.provider.append_records(context.test_zone, [record])
        context.applied_records.append(record)
        context.update_error = None
    except DNSUpdateError as e:
        context.update_error = e


@when('I delete the {record_type} record "{value}" at the apex')
def step_impl(context, record_type, value):
    """Delete a previously appended record."""
    record = _record(record_type, value)
    context.provider.delete_records(context.test_zone, [record])
    if record in context.applied_records:
        context.applied_records.remove(record)


@when("I append a CNAME record")
def step_impl(context):
    """Attempt to append an unsupported record type."""
    try:
        context.provider.append_records(
            context.test_zone, [{"type": "CNAME", "name": "www", "target": "example.net."}]
        )
        context.update_error = None
    except DNSUpdateError as e:
        context.update_error = e


@then('the zone should contain the {record_type} record "{value}"')
def step_impl(context, record_type, value):
    """Verify that the record is visible."""
    records = context.provider.get_records(context.test_zone)
    assert _record(record_type, value) in records, f"{value} not found in {records}"


@then('the zone should not contain the {record_type} record "{value}"')
def step_impl(context, record_type, value):
    """Verify that the record is gone."""
    records = context.provider.get_records(context.test_zone)
    assert _record(record_type, value) not in records, f"{value} still present in {records}"


@then("the update should fail with an unsupported record type error")
def step_impl(context):
    """Verify that the record was rejected locally."""
    assert isinstance(context.update_error, UnsupportedRecordTypeError), context.update_error


@then("the update should fail with the server refusing the key")
def step_impl(context):
    """Verify that the server refused the signature."""
    # BIND answers NOTAUTH with an unsigned BADSIG/BADKEY TSIG, which dnspython
    # reports as a verification failure
    assert isinstance(context.update_error, (ProtocolError, TransportError)), context.update_error
