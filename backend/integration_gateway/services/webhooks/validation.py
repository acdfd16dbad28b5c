"""
Outbound target URL safety checks.

Every target URL an integration will deliver to is checked against the
tenant-independent security policy before the configuration is accepted.
Hostnames are not resolved; only IP literals are matched against the
private network blocks. IPv4 literals are read the way browsers and Node
read them, so ``2130706433``, ``0x7f000001``, ``0177.0.0.1`` and ``127.1``
all mean ``127.0.0.1``.
"""

import ipaddress
import re
from typing import Any, List, Optional, Union
from urllib.parse import unquote, urlparse

from integration_gateway.core.constants import (
    ALLOWED_URL_SCHEMES,
    PRIVATE_NETWORK_BLOCKS,
    URL_REASON_HTTPS,
    URL_REASON_INVALID,
    URL_REASON_LOCALHOST,
    URL_REASON_PRIVATE_IP,
    URL_REASON_REQUIRED,
    URL_REASON_SCHEME,
)
from integration_gateway.schemas.template import SecurityPolicy, UrlCheckResult

IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]
IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

PRIVATE_NETWORKS: List[IPNetwork] = [
    ipaddress.ip_network(block) for block in PRIVATE_NETWORK_BLOCKS
]

_NUMERIC_LABEL = re.compile(r"^(?:[0-9]+|0[xX][0-9a-fA-F]*)$")
_DIGITS = {
    16: re.compile(r"^[0-9a-fA-F]+$"),
    8: re.compile(r"^[0-7]+$"),
    10: re.compile(r"^[0-9]+$"),
}


def _parse_ipv4_number(label: str) -> int:
    if not label:
        raise ValueError("Empty IPv4 label")
    radix = 10
    if label[:2].lower() == "0x":
        radix, label = 16, label[2:]
    elif len(label) > 1 and label[0] == "0":
        radix, label = 8, label[1:]
    if not label:
        return 0
    if not _DIGITS[radix].match(label):
        raise ValueError(f"Invalid IPv4 label: {label}")
    return int(label, radix)


def parse_ipv4_host(host: str) -> Optional[ipaddress.IPv4Address]:
    """
    Parse an IPv4 host in any of the forms URL parsers accept.

    Dotted quads, fewer than four labels (``127.1``), a single 32-bit number
    and hex or octal labels are all supported.

    Returns:
        The address, or None when the host is an ordinary hostname

    Raises:
        ValueError: If the host ends in a number but is not a valid address
    """
    labels = host.split(".")
    if len(labels) > 1 and labels[-1] == "":
        labels.pop()
    if not _NUMERIC_LABEL.match(labels[-1]):
        return None
    if len(labels) > 4:
        raise ValueError(f"Too many IPv4 labels: {host}")

    numbers = [_parse_ipv4_number(label) for label in labels]
    if any(number > 255 for number in numbers[:-1]):
        raise ValueError(f"IPv4 label out of range: {host}")
    if numbers[-1] >= 256 ** (5 - len(numbers)):
        raise ValueError(f"IPv4 address out of range: {host}")

    value = numbers[-1]
    for index, number in enumerate(numbers[:-1]):
        value += number * 256 ** (3 - index)
    return ipaddress.IPv4Address(value)


def host_ip_address(host: str) -> Optional[IPAddress]:
    """
    Return the IP address a host literal denotes, or None for hostnames.

    IPv4-mapped IPv6 addresses are unwrapped to their IPv4 address.

    Raises:
        ValueError: If the host looks like an IP literal but is malformed
    """
    if ":" in host:
        ip = ipaddress.ip_address(host)
        if ip.ipv4_mapped is not None:
            return ip.ipv4_mapped
        return ip
    return parse_ipv4_host(host)


def is_private_ip(host: str) -> bool:
    """
    Check whether a host is an IP literal inside a private, loopback or link-local block.

    Args:
        host: Hostname or IP literal (without brackets)

    Returns:
        True for private IP literals, False for anything else including hostnames
    """
    try:
        ip = host_ip_address(host)
    except ValueError:
        return False
    if ip is None:
        return False
    return any(ip in network for network in PRIVATE_NETWORKS)


def check_target_url(
    url: Any, policy: Optional[SecurityPolicy] = None
) -> UrlCheckResult:
    """
    Check an outbound target URL against the security policy.

    Args:
        url: The URL to check; anything other than a string is invalid
        policy: HTTPS / private network policy (defaults to the strict policy)

    Returns:
        UrlCheckResult with valid=False and a human readable reason on rejection
    """
    policy = policy or SecurityPolicy()

    if not url:
        return UrlCheckResult(valid=False, reason=URL_REASON_REQUIRED)
    if not isinstance(url, str):
        return UrlCheckResult(valid=False, reason=URL_REASON_INVALID)

    try:
        parsed = urlparse(url)
        host = unquote(parsed.hostname or "").lower()
        # out of range ports raise ValueError
        _ = parsed.port
    except ValueError:
        return UrlCheckResult(valid=False, reason=URL_REASON_INVALID)

    if not parsed.scheme:
        return UrlCheckResult(valid=False, reason=URL_REASON_INVALID)
    if parsed.scheme not in ALLOWED_URL_SCHEMES:
        return UrlCheckResult(valid=False, reason=URL_REASON_SCHEME)
    if not host:
        return UrlCheckResult(valid=False, reason=URL_REASON_INVALID)

    try:
        ip = host_ip_address(host)
    except ValueError:
        return UrlCheckResult(valid=False, reason=URL_REASON_INVALID)

    if policy.enforce_https and parsed.scheme != "https":
        return UrlCheckResult(valid=False, reason=URL_REASON_HTTPS)

    if policy.block_private_networks:
        if host == "localhost":
            return UrlCheckResult(valid=False, reason=URL_REASON_LOCALHOST)
        if ip is not None and any(ip in network for network in PRIVATE_NETWORKS):
            return UrlCheckResult(valid=False, reason=URL_REASON_PRIVATE_IP)

    return UrlCheckResult(valid=True)
