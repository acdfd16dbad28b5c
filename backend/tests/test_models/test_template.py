"""Tests for the IntegrationTemplate model."""

import pytest
from bson import ObjectId
from pydantic import ValidationError

from integration_gateway.models.template import IntegrationTemplate


class TestIntegrationTemplate:
    def test_camel_case_document(self):
        template = IntegrationTemplate.model_validate(
            {
                "_id": "t1",
                "tenantId": "tenant-1",
                "eventType": "BILL_CREATED",
                "targetUrl": "https://erp.example.com/hook",
                "authType": "BEARER_TOKEN",
                "retryCount": 5,
            }
        )
        assert template.id == "t1"
        assert template.tenant_id == "tenant-1"
        assert template.event_type == "BILL_CREATED"
        assert template.retry_count == 5

    def test_objectid_converted_to_str(self):
        oid = ObjectId()
        template = IntegrationTemplate.model_validate({"_id": oid})
        assert template.id == str(oid)

    def test_snake_case_input(self):
        template = IntegrationTemplate(id="t1", event_type="E", target_url="https://x.example")
        assert template.event_type == "E"

    def test_defaults(self):
        template = IntegrationTemplate(id="t1")
        assert template.is_active is True
        assert template.auth_config == {}
        assert template.headers == {}
        assert template.transformation == {}
        assert template.actions is None
        assert template.is_global

    def test_frozen(self):
        template = IntegrationTemplate(id="t1", name="Hook")
        with pytest.raises(ValidationError):
            template.name = "Other"

    def test_summary(self):
        template = IntegrationTemplate(id="t1", name="Hook", category="billing")
        assert template.summary() == {"id": "t1", "name": "Hook", "category": "billing"}
