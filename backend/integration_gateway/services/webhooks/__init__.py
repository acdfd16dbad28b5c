"""
Webhook services package.

Provides the outbound target URL safety checks used before an integration
configuration is accepted.
"""

from integration_gateway.services.webhooks.validation import (
    PRIVATE_NETWORKS,
    check_target_url,
    host_ip_address,
    is_private_ip,
    parse_ipv4_host,
)

__all__ = [
    "PRIVATE_NETWORKS",
    "check_target_url",
    "host_ip_address",
    "is_private_ip",
    "parse_ipv4_host",
]
