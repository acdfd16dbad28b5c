"""
Template Validator

Builds an integration from a stored template and checks the result before it
may be persisted or executed. ``validate_template`` never raises: a missing
template, a build failure and failed checks all come back as a
ValidationResult with valid=False.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from integration_gateway.core.config import settings
from integration_gateway.core.constants import (
    MSG_EVENT_TYPE_REQUIRED,
    MSG_NAME_REQUIRED,
    MSG_TARGET_URL_REQUIRED,
    MSG_TEMPLATE_NOT_FOUND,
)
from integration_gateway.core.metrics import (
    template_builds_total,
    template_validations_total,
)
from integration_gateway.models.template import IntegrationTemplate
from integration_gateway.repositories.templates import TemplateRepository
from integration_gateway.schemas.template import (
    BuiltIntegrationConfig,
    SecurityPolicy,
    ValidationResult,
)
from integration_gateway.services.templates.builder import (
    OverridesInput,
    TemplateBuildError,
    build_integration_config,
)
from integration_gateway.services.templates.catalog import get_template_by_id
from integration_gateway.services.webhooks.validation import check_target_url

logger = logging.getLogger(__name__)


@dataclass
class BuildOutcome:
    """Result of building an integration: either a config or an error message."""

    config: Optional[BuiltIntegrationConfig] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def try_build(template: IntegrationTemplate, overrides: OverridesInput) -> BuildOutcome:
    """Build an integration config, returning failures as data instead of raising."""
    try:
        config = build_integration_config(template, overrides)
    except TemplateBuildError as e:
        template_builds_total.labels(status="failure").inc()
        logger.warning(f"Building integration from template {template.id} failed: {e}")
        return BuildOutcome(error=str(e))
    except Exception as e:
        template_builds_total.labels(status="failure").inc()
        logger.exception(f"Unexpected error building integration from template {template.id}")
        return BuildOutcome(error=str(e) or type(e).__name__)

    template_builds_total.labels(status="success").inc()
    return BuildOutcome(config=config)


def _action_target(action: Any) -> Any:
    # Non-string targets are kept so the URL check reports them as invalid
    if isinstance(action, dict):
        return action.get("targetUrl")
    return None


def check_built_config(
    config: BuiltIntegrationConfig, policy: SecurityPolicy
) -> List[str]:
    """
    Check required fields and every delivery target of a built config.

    Multi-action configs check each action's targetUrl (falling back to the
    top-level targetUrl) and prefix errors with the 1-based action index.
    Single target configs check the top-level targetUrl.

    Returns:
        Error messages in check order (empty when the config is valid)
    """
    errors: List[str] = []

    if not config.name:
        errors.append(MSG_NAME_REQUIRED)
    if not config.event_type:
        errors.append(MSG_EVENT_TYPE_REQUIRED)

    if isinstance(config.actions, list) and config.actions:
        for index, action in enumerate(config.actions, start=1):
            target = _action_target(action) or config.target_url
            if not target:
                errors.append(f"Action {index} requires targetUrl")
                continue
            check = check_target_url(target, policy)
            if not check.valid:
                errors.append(f"Action {index}: {check.reason}")
    elif not config.target_url:
        errors.append(MSG_TARGET_URL_REQUIRED)
    else:
        check = check_target_url(config.target_url, policy)
        if not check.valid:
            errors.append(check.reason)

    return errors


async def validate_template(
    repository: TemplateRepository,
    tenant_id: str,
    template_id: str,
    overrides: OverridesInput = None,
    security_policy: Optional[SecurityPolicy] = None,
) -> ValidationResult:
    """
    Build and validate an integration from a template.

    Args:
        repository: Template store used to look the template up
        tenant_id: Tenant requesting the integration
        template_id: Template to instantiate
        overrides: Caller overrides including ``placeholders``
        security_policy: Target URL policy (defaults to the configured policy)

    Returns:
        ValidationResult; ``built_config`` is None when the template is
        missing or the build failed
    """
    policy = security_policy or settings.security_policy
    warnings: List[str] = []

    template = await get_template_by_id(repository, tenant_id, template_id)
    if template is None:
        template_validations_total.labels(result="not_found").inc()
        return ValidationResult(
            valid=False,
            errors=[MSG_TEMPLATE_NOT_FOUND],
            warnings=warnings,
            template=None,
            built_config=None,
        )

    outcome = try_build(template, overrides)
    if not outcome.ok:
        template_validations_total.labels(result="build_failed").inc()
        return ValidationResult(
            valid=False,
            errors=[outcome.error],
            warnings=warnings,
            template=template,
            built_config=None,
        )

    errors = check_built_config(outcome.config, policy)
    valid = not errors
    template_validations_total.labels(result="valid" if valid else "invalid").inc()
    logger.debug(
        f"Template {template_id} validated for tenant {tenant_id}: "
        f"valid={valid}, errors={len(errors)}"
    )
    return ValidationResult(
        valid=valid,
        errors=errors,
        warnings=warnings,
        template=template,
        built_config=outcome.config,
    )
