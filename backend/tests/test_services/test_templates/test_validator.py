"""Tests for template validation (build + required fields + target URL checks)."""

import asyncio
import copy
from unittest.mock import patch

from integration_gateway.schemas.template import (
    BuiltIntegrationConfig,
    SecurityPolicy,
)
from integration_gateway.services.templates.builder import TemplateBuildError
from integration_gateway.services.templates.validator import (
    BuildOutcome,
    check_built_config,
    try_build,
    validate_template,
)
from tests.mocks.templates import FakeTemplateStore, make_template

MODULE = "integration_gateway.services.templates.validator"


def _config(**kwargs):
    defaults = {
        "name": "Hook",
        "event_type": "BILL_CREATED",
        "scope": "INCLUDE_CHILDREN",
        "target_url": "https://erp.example.com/hook",
    }
    defaults.update(kwargs)
    return BuiltIntegrationConfig(**defaults)


class TestTryBuild:
    def test_success(self, bill_template, bill_placeholders):
        outcome = try_build(bill_template, {"placeholders": bill_placeholders})
        assert outcome.ok
        assert outcome.error is None
        assert outcome.config.event_type == "BILL_CREATED"

    def test_build_error_becomes_data(self, bill_template):
        outcome = try_build(bill_template, {"timeoutMs": "soon"})
        assert not outcome.ok
        assert outcome.config is None
        assert "timeoutMs" in outcome.error

    def test_unexpected_error_becomes_data(self, bill_template):
        with patch(f"{MODULE}.build_integration_config", side_effect=RuntimeError("boom")):
            outcome = try_build(bill_template, {})
        assert outcome == BuildOutcome(config=None, error="boom")

    def test_build_error_message_preserved(self, bill_template):
        with patch(
            f"{MODULE}.build_integration_config",
            side_effect=TemplateBuildError("Overrides must be an object, got str"),
        ):
            outcome = try_build(bill_template, "x")
        assert outcome.error == "Overrides must be an object, got str"


class TestCheckBuiltConfig:
    def test_valid_single_target(self, strict_policy):
        assert check_built_config(_config(), strict_policy) == []

    def test_missing_everything_in_order(self, strict_policy):
        config = _config(name=None, event_type=None, target_url=None)
        assert check_built_config(config, strict_policy) == [
            "Name is required",
            "Event type is required",
            "Target URL is required",
        ]

    def test_empty_strings_count_as_missing(self, strict_policy):
        config = _config(name="", event_type="")
        assert check_built_config(config, strict_policy) == [
            "Name is required",
            "Event type is required",
        ]

    def test_single_target_reason_without_prefix(self, strict_policy):
        config = _config(target_url="http://erp.example.com/hook")
        assert check_built_config(config, strict_policy) == ["HTTPS required"]

    def test_single_target_private_ip(self, strict_policy):
        config = _config(target_url="https://10.1.2.3/hook")
        assert check_built_config(config, strict_policy) == ["Private IP not allowed"]

    def test_actions_with_missing_and_link_local_targets(self):
        policy = SecurityPolicy(enforce_https=False, block_private_networks=True)
        config = _config(target_url=None, actions=[{}, {"targetUrl": "http://169.254.169.254/"}])
        assert check_built_config(config, policy) == [
            "Action 1 requires targetUrl",
            "Action 2: Private IP not allowed",
        ]

    def test_actions_fall_back_to_top_level_target(self, strict_policy):
        config = _config(actions=[{}, {"targetUrl": "https://other.example.com"}])
        assert check_built_config(config, strict_policy) == []

    def test_actions_fallback_target_is_checked(self, strict_policy):
        config = _config(target_url="https://localhost/hook", actions=[{"name": "a"}])
        assert check_built_config(config, strict_policy) == [
            "Action 1: Localhost is not allowed"
        ]

    def test_actions_skip_top_level_required_check(self, strict_policy):
        config = _config(target_url=None, actions=[{"targetUrl": "https://a.example.com"}])
        assert check_built_config(config, strict_policy) == []

    def test_non_string_action_target_is_invalid(self, strict_policy):
        config = _config(
            target_url=None,
            actions=[{"targetUrl": 123}, {"targetUrl": ["https://a.example.com"]}],
        )
        assert check_built_config(config, strict_policy) == [
            "Action 1: Invalid URL format",
            "Action 2: Invalid URL format",
        ]

    def test_numeric_loopback_action_target_blocked(self):
        policy = SecurityPolicy(enforce_https=False, block_private_networks=True)
        config = _config(actions=[{"targetUrl": "http://2130706433/"}])
        assert check_built_config(config, policy) == ["Action 1: Private IP not allowed"]

    def test_non_mapping_action_requires_target(self, strict_policy):
        config = _config(target_url=None, actions=["https://a.example.com"])
        assert check_built_config(config, strict_policy) == ["Action 1 requires targetUrl"]

    def test_empty_actions_use_single_target_branch(self, strict_policy):
        config = _config(target_url=None, actions=[])
        assert check_built_config(config, strict_policy) == ["Target URL is required"]

    def test_policy_controls_checks(self, permissive_policy):
        config = _config(target_url="http://127.0.0.1:8080/hook")
        assert check_built_config(config, permissive_policy) == []


class TestValidateTemplate:
    def test_template_not_found(self, template_store, strict_policy):
        result = asyncio.run(
            validate_template(template_store, "tenant-1", "missing", {}, strict_policy)
        )
        assert result.valid is False
        assert result.errors == ["Template not found"]
        assert result.warnings == []
        assert result.template is None
        assert result.built_config is None

    def test_store_failure_reported_as_not_found(self, strict_policy):
        store = FakeTemplateStore(fail_with=ConnectionError("mongo down"))
        result = asyncio.run(validate_template(store, "tenant-1", "t1", {}, strict_policy))
        assert result.valid is False
        assert result.errors == ["Template not found"]

    def test_valid_bill_hook(self, template_store, bill_placeholders, strict_policy):
        result = asyncio.run(
            validate_template(
                template_store,
                "tenant-1",
                "t1",
                {"placeholders": bill_placeholders},
                strict_policy,
            )
        )
        assert result.valid is True
        assert result.errors == []
        assert result.template.id == "t1"
        assert result.built_config.target_url == "https://erp.example.com/hook"
        assert result.built_config.outgoing_auth_type == "BEARER"

    def test_unresolved_placeholders_left_in_place(self, template_store, strict_policy):
        result = asyncio.run(
            validate_template(template_store, "tenant-1", "t1", {}, strict_policy)
        )
        assert result.valid is True
        assert result.warnings == []
        assert result.built_config.event_type == "{{EVT}}"
        assert result.built_config.target_url == "https://{{HOST}}/hook"

    def test_build_failure(self, template_store, bill_template, strict_policy):
        result = asyncio.run(
            validate_template(template_store, "tenant-1", "t1", ["bad"], strict_policy)
        )
        assert result.valid is False
        assert result.errors == ["Overrides must be an object, got list"]
        assert result.template is bill_template
        assert result.built_config is None

    def test_multi_action_scenario(self, template_store, strict_policy):
        result = asyncio.run(
            validate_template(template_store, "tenant-1", "t-multi", {}, strict_policy)
        )
        assert result.valid is False
        assert result.errors[0] == "Action 1 requires targetUrl"
        assert result.errors[1].startswith("Action 2: ")
        assert len(result.errors) == 2

    def test_non_string_action_target_does_not_raise(self, strict_policy):
        template = make_template(id="tx", target_url=None, actions=[{"targetUrl": 123}])
        store = FakeTemplateStore(template)
        result = asyncio.run(validate_template(store, "tenant-1", "tx", {}, strict_policy))
        assert result.valid is False
        assert result.errors == ["Action 1: Invalid URL format"]

    def test_missing_fields_scenario(self, strict_policy):
        template = make_template(id="t-empty", name=None, event_type=None, target_url=None)
        store = FakeTemplateStore(template)
        result = asyncio.run(validate_template(store, "tenant-1", "t-empty", {}, strict_policy))
        assert result.errors == [
            "Name is required",
            "Event type is required",
            "Target URL is required",
        ]

    def test_overrides_fill_missing_fields(self, strict_policy):
        template = make_template(id="t-empty", name=None, event_type=None, target_url=None)
        store = FakeTemplateStore(template)
        overrides = {
            "name": "Mine",
            "eventType": "PATIENT_REGISTERED",
            "targetUrl": "https://crm.example.com/in",
        }
        result = asyncio.run(
            validate_template(store, "tenant-1", "t-empty", overrides, strict_policy)
        )
        assert result.valid is True

    def test_global_template_visible_to_tenant(self, strict_policy):
        template = make_template(id="g1", tenant_id=None)
        store = FakeTemplateStore(template)
        result = asyncio.run(validate_template(store, "tenant-9", "g1", {}, strict_policy))
        assert result.valid is True

    def test_default_policy_from_settings(self, template_store):
        result = asyncio.run(
            validate_template(
                template_store,
                "tenant-1",
                "t1",
                {"placeholders": {"HOST": "127.0.0.1", "EVT": "E"}},
            )
        )
        assert result.errors == ["Private IP not allowed"]

    def test_template_not_mutated(self, template_store, bill_template, bill_placeholders, strict_policy):
        snapshot = copy.deepcopy(bill_template.model_dump())
        asyncio.run(
            validate_template(
                template_store, "tenant-1", "t1", {"placeholders": bill_placeholders}, strict_policy
            )
        )
        assert bill_template.model_dump() == snapshot

    def test_concurrent_validations_are_independent(self, template_store, strict_policy):
        async def run_both():
            return await asyncio.gather(
                validate_template(
                    template_store, "tenant-1", "t1",
                    {"placeholders": {"EVT": "A", "HOST": "a.example.com"}}, strict_policy,
                ),
                validate_template(
                    template_store, "tenant-1", "t1",
                    {"placeholders": {"EVT": "B", "HOST": "b.example.com"}}, strict_policy,
                ),
            )

        first, second = asyncio.run(run_both())
        assert first.built_config.target_url == "https://a.example.com/hook"
        assert second.built_config.target_url == "https://b.example.com/hook"

    def test_serializes_camel_case(self, template_store, bill_placeholders, strict_policy):
        result = asyncio.run(
            validate_template(
                template_store, "tenant-1", "t1", {"placeholders": bill_placeholders}, strict_policy
            )
        )
        data = result.model_dump(mode="json", by_alias=True)
        assert data["valid"] is True
        assert data["builtConfig"]["eventType"] == "BILL_CREATED"
        assert data["template"]["id"] == "t1"
