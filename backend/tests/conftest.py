"""
Shared test fixtures and configuration.

Environment variables are set BEFORE any package imports to prevent
accidental connections to real databases.
"""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Override settings before any code imports the settings singleton
os.environ["MONGODB_URL"] = "mongodb://localhost:27017"
os.environ["DATABASE_NAME"] = "test_integration_gateway"
os.environ["SECURITY_ENFORCE_HTTPS"] = "true"
os.environ["SECURITY_BLOCK_PRIVATE_NETWORKS"] = "true"

import pytest  # noqa: E402

from integration_gateway.schemas.template import SecurityPolicy  # noqa: E402
from tests.mocks.templates import FakeTemplateStore, make_template  # noqa: E402


@pytest.fixture
def strict_policy():
    """HTTPS only, private networks blocked."""
    return SecurityPolicy(enforce_https=True, block_private_networks=True)


@pytest.fixture
def permissive_policy():
    """Plain HTTP and private networks allowed."""
    return SecurityPolicy(enforce_https=False, block_private_networks=False)


@pytest.fixture
def bill_template():
    """Single target template with placeholders and a legacy auth type."""
    return make_template(
        id="t1",
        name="Bill Hook",
        category="billing",
        event_type="{{EVT}}",
        target_url="https://{{HOST}}/hook",
        http_method="POST",
        auth_type="BEARER_TOKEN",
        auth_config={"token": "{{TOKEN}}"},
        headers={"X-Source": "{{HOST}}"},
        timeout_ms=5000,
        transformation={"billId": "{{payload.billId}}", "fields": ["{{EVT}}", 1, None]},
        metadata={"owner": "finance", "tags": ["erp"]},
    )


@pytest.fixture
def multi_action_template():
    """Template with two actions: one without a target, one aimed at cloud metadata."""
    return make_template(
        id="t-multi",
        name="Fan Out",
        category="notifications",
        target_url=None,
        actions=[{}, {"targetUrl": "http://169.254.169.254/"}],
    )


@pytest.fixture
def bill_placeholders():
    return {"EVT": "BILL_CREATED", "HOST": "erp.example.com", "TOKEN": "s3cr3t"}


@pytest.fixture
def template_store(bill_template, multi_action_template):
    return FakeTemplateStore(bill_template, multi_action_template)
