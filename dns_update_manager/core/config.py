"""
Provider configuration.

ProviderConfig is built once, validated at construction and then shared by
reference with every update and lookup. It can be created directly or from
the "dns_providers.rfc2136" mapping of the YAML application config, where
the TSIG secret may come from a BIND key file instead of being inline.
"""

import binascii
import logging
import re
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

import dns.exception
import dns.name
import dns.tsig

from ..errors import ConfigError
from ..utils.validators import is_ip_literal, split_host_port, validate_hostname

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "hmac-sha256"
DEFAULT_RESOLVER = "8.8.8.8:53"  # Google public DNS
DEFAULT_TTL = 300
MAX_TTL = 2**31 - 1  # RFC 2181 section 8
DEFAULT_TIMEOUT = 10.0
TSIG_FUDGE = 300

SUPPORTED_ALGORITHMS = {
    dns.tsig.HMAC_MD5,
    dns.tsig.HMAC_SHA1,
    dns.tsig.HMAC_SHA224,
    dns.tsig.HMAC_SHA256,
    dns.tsig.HMAC_SHA384,
    dns.tsig.HMAC_SHA512,
}

# BIND key files call it hmac-md5; the wire name is the older registry form
ALGORITHM_ALIASES = {dns.name.from_text("hmac-md5"): dns.tsig.HMAC_MD5}


def algorithm_name(algorithm: str) -> dns.name.Name:
    """Return the absolute TSIG algorithm name for a configured algorithm."""
    name = dns.name.from_text(algorithm)
    return ALGORITHM_ALIASES.get(name, name)


@dataclass(frozen=True)
class ProviderConfig:
    """Connection and signing settings for an RFC 2136 server."""

    key_name: str
    secret: str
    server: str
    algorithm: str = DEFAULT_ALGORITHM
    resolver: str = DEFAULT_RESOLVER
    ttl: int = DEFAULT_TTL
    timeout: float = DEFAULT_TIMEOUT
    resolver_timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        if not self.key_name:
            raise ConfigError("key_name is required")
        if not self.secret:
            raise ConfigError(f"no secret configured for key '{self.key_name}'")

        try:
            algorithm = algorithm_name(self.algorithm)
        except dns.exception.DNSException as e:
            raise ConfigError(f"invalid TSIG algorithm '{self.algorithm}': {e}") from e
        if algorithm not in SUPPORTED_ALGORITHMS:
            raise ConfigError(f"unsupported TSIG algorithm '{self.algorithm}'")

        try:
            self.tsig_key()
        except (binascii.Error, ValueError) as e:
            raise ConfigError(f"secret for key '{self.key_name}' is not valid base64") from e
        except dns.exception.DNSException as e:
            raise ConfigError(f"invalid key name '{self.key_name}': {e}") from e

        host, _ = self._endpoint(self.server, "server")
        if not is_ip_literal(host) and not validate_hostname(host):
            raise ConfigError(f"invalid server host '{host}'")

        host, _ = self._endpoint(self.resolver, "resolver")
        if not is_ip_literal(host):
            raise ConfigError(f"resolver must be an IP address, got '{host}'")

        if (
            not isinstance(self.ttl, int)
            or isinstance(self.ttl, bool)
            or not 0 <= self.ttl <= MAX_TTL
        ):
            raise ConfigError(f"ttl must be an integer from 0 to {MAX_TTL}, got {self.ttl!r}")
        if self.timeout <= 0 or self.resolver_timeout <= 0:
            raise ConfigError("timeouts must be positive")

    @staticmethod
    def _endpoint(address: str, field: str) -> Tuple[str, int]:
        try:
            return split_host_port(address)
        except ValueError as e:
            raise ConfigError(f"invalid {field} address: {e}") from e

    @property
    def server_endpoint(self) -> Tuple[str, int]:
        """Authoritative server as (host, port)."""
        return split_host_port(self.server)

    @property
    def resolver_endpoint(self) -> Tuple[str, int]:
        """Recursive resolver as (ip, port)."""
        return split_host_port(self.resolver)

    def tsig_key(self) -> dns.tsig.Key:
        """Build the TSIG key; key and algorithm names become absolute."""
        return dns.tsig.Key(
            dns.name.from_text(self.key_name),
            self.secret,
            algorithm_name(self.algorithm),
        )

    @classmethod
    def from_dict(cls, config: Mapping) -> "ProviderConfig":
        """
        Build a ProviderConfig from a provider mapping.

        Recognised keys: server, key_name, secret or key_file, algorithm,
        resolver, ttl, timeout, resolver_timeout.
        """
        key_name = config.get("key_name", "")
        secret = config.get("secret", "")
        algorithm = config.get("algorithm")

        key_file = config.get("key_file", "")
        if key_file and not secret:
            try:
                with open(key_file, "r") as f:
                    key_content = f.read()
            except OSError as e:
                raise ConfigError(f"cannot read key file {key_file}: {e}") from e

            key = parse_bind_key_file(key_content, key_name)
            if key is None:
                raise ConfigError(
                    f"Could not extract secret for key '{key_name}' from {key_file}"
                )
            secret = key["secret"]
            algorithm = algorithm or key.get("algorithm")
            logger.info(f"TSIG key loaded from {key_file}")

        try:
            return cls(
                key_name=key_name,
                secret=secret,
                server=config.get("server", ""),
                algorithm=algorithm or DEFAULT_ALGORITHM,
                resolver=config.get("resolver", DEFAULT_RESOLVER),
                ttl=_as_int(config.get("ttl", DEFAULT_TTL)),
                timeout=float(config.get("timeout", DEFAULT_TIMEOUT)),
                resolver_timeout=float(config.get("resolver_timeout", DEFAULT_TIMEOUT)),
            )
        except ConfigError:
            raise
        except (TypeError, ValueError) as e:
            raise ConfigError(f"invalid provider configuration: {e}") from e


def _as_int(value):
    """Convert numeric strings; anything else is left for validation."""
    if isinstance(value, str):
        return int(value.strip())
    return value


def parse_bind_key_file(key_content: str, key_name: str) -> Optional[Dict[str, str]]:
    """
    Extract a key from BIND key file syntax.

    Args:
        key_content: Text of the key file
        key_name: Key to look for; the first key in the file when empty

    Returns:
        Mapping with "secret" and, when declared, "algorithm"; None if the
        key or its secret is not present
    """
    if key_name:
        key_pattern = rf'key\s+"?{re.escape(key_name.rstrip("."))}\.?"?\s*{{(.*?)}}'
    else:
        key_pattern = r'key\s+"?[^\s"{]+"?\s*{(.*?)}'

    match = re.search(key_pattern, key_content, re.DOTALL)
    if not match:
        return None

    key_block = match.group(1)
    secret_match = re.search(r'secret\s+"([^"]+)"', key_block)
    if not secret_match:
        return None

    key = {"secret": secret_match.group(1)}
    algorithm_match = re.search(r'algorithm\s+"?([\w.-]+?)"?\s*;', key_block)
    if algorithm_match:
        key["algorithm"] = algorithm_match.group(1)
    return key
