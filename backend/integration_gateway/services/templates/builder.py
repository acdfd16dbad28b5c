"""
Integration Builder

Merges an integration template with caller overrides into a fully resolved
integration configuration. The template is only read; every container in the
result is a fresh copy.
"""

import copy
import logging
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from integration_gateway.core.constants import (
    AUTH_TYPE_ALIASES,
    DEFAULT_IS_ACTIVE,
    DEFAULT_RETRY_COUNT,
    DEFAULT_SCOPE,
    DEFAULT_TIMEOUT_MS,
)
from integration_gateway.models.template import IntegrationTemplate
from integration_gateway.schemas.template import BuiltIntegrationConfig, TemplateOverrides
from integration_gateway.services.templates.substitution import substitute_placeholders

logger = logging.getLogger(__name__)

OverridesInput = Union[TemplateOverrides, Mapping[str, Any], None]


class TemplateBuildError(ValueError):
    """Raised when overrides cannot be applied to a template."""


def normalize_auth_type(auth_type: Optional[str]) -> Optional[str]:
    """Map legacy auth type names (BEARER_TOKEN) to their current name. Idempotent."""
    if auth_type is None:
        return None
    return AUTH_TYPE_ALIASES.get(auth_type, auth_type)


def is_unset(value: Any) -> bool:
    """
    Whether an override value counts as absent.

    None, empty strings, zero and False are absent. Empty mappings and
    lists are real values and win over the template.
    """
    if value is None:
        return True
    if isinstance(value, (str, bool, int, float)):
        return not value
    return False


def pick(*candidates: Any) -> Any:
    """Return the first candidate that is set, else the last candidate."""
    for candidate in candidates[:-1]:
        if not is_unset(candidate):
            return candidate
    return candidates[-1]


def _format_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        problems.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return "Invalid overrides: " + "; ".join(problems)


def parse_overrides(overrides: OverridesInput) -> TemplateOverrides:
    """
    Coerce caller supplied overrides into TemplateOverrides.

    Raises:
        TemplateBuildError: If overrides are not a mapping or fail validation
    """
    if overrides is None:
        return TemplateOverrides()
    if isinstance(overrides, TemplateOverrides):
        return overrides
    if not isinstance(overrides, Mapping):
        raise TemplateBuildError(
            f"Overrides must be an object, got {type(overrides).__name__}"
        )
    try:
        return TemplateOverrides.model_validate(dict(overrides))
    except ValidationError as e:
        raise TemplateBuildError(_format_validation_error(e)) from e


def build_integration_config(
    template: IntegrationTemplate,
    overrides: OverridesInput = None,
) -> BuiltIntegrationConfig:
    """
    Build an integration configuration from a template and overrides.

    Each field takes the override when it is set, otherwise the template
    value. Placeholders from ``overrides.placeholders`` are substituted into
    eventType, targetUrl, outgoingAuthConfig, headers, transformation and
    actions after that merge.

    Args:
        template: Template to instantiate (not modified)
        overrides: TemplateOverrides or a camelCase/snake_case mapping

    Returns:
        BuiltIntegrationConfig

    Raises:
        TemplateBuildError: If the overrides are malformed
    """
    parsed = parse_overrides(overrides)
    placeholders = parsed.placeholders

    # retryCount and isActive honor explicit 0 / False overrides
    if parsed.retry_count is not None:
        retry_count = parsed.retry_count
    else:
        retry_count = pick(template.retry_count, DEFAULT_RETRY_COUNT)
    is_active = parsed.is_active if parsed.is_active is not None else DEFAULT_IS_ACTIVE

    raw_auth_type = (
        parsed.outgoing_auth_type
        if parsed.outgoing_auth_type is not None
        else template.auth_type
    )

    config = BuiltIntegrationConfig(
        name=pick(parsed.name, template.name),
        event_type=substitute_placeholders(
            pick(parsed.event_type, template.event_type), placeholders
        ),
        scope=pick(parsed.scope, template.scope, DEFAULT_SCOPE),
        target_url=substitute_placeholders(
            pick(parsed.target_url, template.target_url), placeholders
        ),
        http_method=pick(parsed.http_method, template.http_method),
        outgoing_auth_type=normalize_auth_type(raw_auth_type),
        outgoing_auth_config=substitute_placeholders(
            pick(parsed.outgoing_auth_config, template.auth_config), placeholders
        ),
        headers=substitute_placeholders(
            pick(parsed.headers, template.headers, {}), placeholders
        ),
        timeout_ms=pick(parsed.timeout_ms, template.timeout_ms, DEFAULT_TIMEOUT_MS),
        retry_count=retry_count,
        transformation_mode=pick(parsed.transformation_mode, template.transformation_mode),
        transformation=substitute_placeholders(
            pick(parsed.transformation, template.transformation, {}), placeholders
        ),
        actions=substitute_placeholders(
            pick(parsed.actions, template.actions), placeholders
        ),
        is_active=is_active,
        description=pick(parsed.description, template.description),
        metadata={
            **copy.deepcopy(template.metadata),
            "templateId": template.id,
            "templateName": template.name,
            "templateCategory": template.category,
        },
    )
    logger.debug(f"Built integration config from template {template.id}")
    return config
