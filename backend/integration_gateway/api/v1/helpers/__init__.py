"""
API v1 Helper Functions
"""

from integration_gateway.api.v1.helpers.templates import get_template_or_404

__all__ = [
    "get_template_or_404",
]
