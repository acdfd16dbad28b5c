"""
Prometheus Metrics for the Integration Gateway template engine.

Counters are process-local; every API pod exposes its own /metrics endpoint.
"""

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, generate_latest

# =============================================================================
# Template Engine Metrics
# =============================================================================

template_validations_total = Counter(
    "template_validations_total",
    "Template validations by outcome",
    ["result"],  # valid, invalid, not_found, build_failed
)

template_builds_total = Counter(
    "template_builds_total",
    "Integration configurations built from templates",
    ["status"],  # success, failure
)


async def metrics_endpoint() -> Response:
    """Expose the default registry in Prometheus text format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
