"""
Shared Constants

Centralized constants used across the template engine and the API layer.
"""

from typing import Dict, List

# Integration defaults applied when neither the template nor the overrides set a value
DEFAULT_SCOPE: str = "INCLUDE_CHILDREN"
DEFAULT_TIMEOUT_MS: int = 15000
DEFAULT_RETRY_COUNT: int = 3
DEFAULT_IS_ACTIVE: bool = True

# Legacy auth type names mapped to the names the delivery engine understands
AUTH_TYPE_ALIASES: Dict[str, str] = {
    "BEARER_TOKEN": "BEARER",
}

# Placeholder token delimiters, e.g. {{HOST}}
PLACEHOLDER_OPEN: str = "{{"
PLACEHOLDER_CLOSE: str = "}}"

# MongoDB collection holding integration templates
TEMPLATES_COLLECTION: str = "integration_templates"

# Validation messages
MSG_TEMPLATE_NOT_FOUND: str = "Template not found"
MSG_NAME_REQUIRED: str = "Name is required"
MSG_EVENT_TYPE_REQUIRED: str = "Event type is required"
MSG_TARGET_URL_REQUIRED: str = "Target URL is required"

# URL safety reasons
URL_REASON_REQUIRED: str = "URL required"
URL_REASON_INVALID: str = "Invalid URL format"
URL_REASON_SCHEME: str = "Unsupported URL scheme"
URL_REASON_HTTPS: str = "HTTPS required"
URL_REASON_LOCALHOST: str = "Localhost is not allowed"
URL_REASON_PRIVATE_IP: str = "Private IP not allowed"

ALLOWED_URL_SCHEMES = ("http", "https")

# Loopback, link-local and RFC 1918 / RFC 4193 ranges
PRIVATE_NETWORK_BLOCKS: List[str] = [
    "10.0.0.0/8",
    "172.16.0.0/12",
    "192.168.0.0/16",
    "127.0.0.0/8",
    "0.0.0.0/8",
    "169.254.0.0/16",
    "::1/128",
    "fc00::/7",
    "fe80::/10",
]

# Auth config keys masked in integration previews
SENSITIVE_AUTH_KEYS: List[str] = ["apiKey", "clientSecret", "token", "password"]
MASKED_VALUE: str = "***HIDDEN***"

# Template tenant header
TENANT_HEADER: str = "X-Tenant-ID"
