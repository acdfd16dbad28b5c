"""
Integration preview: validate a template instantiation and return the built
configuration with secrets masked, without persisting anything.
"""

import copy
from typing import Any, Dict, Optional, Tuple

from integration_gateway.core.constants import MASKED_VALUE, SENSITIVE_AUTH_KEYS
from integration_gateway.repositories.templates import TemplateRepository
from integration_gateway.schemas.template import (
    BuiltIntegrationConfig,
    SecurityPolicy,
    ValidationResult,
)
from integration_gateway.services.templates.builder import OverridesInput
from integration_gateway.services.templates.validator import validate_template


def mask_sensitive_auth(config: BuiltIntegrationConfig) -> Dict[str, Any]:
    """Serialize a built config (camelCase) with sensitive auth values masked."""
    data = copy.deepcopy(config.model_dump(by_alias=True))
    auth_config = data.get("outgoingAuthConfig")
    if isinstance(auth_config, dict):
        for key in SENSITIVE_AUTH_KEYS:
            if auth_config.get(key):
                auth_config[key] = MASKED_VALUE
    return data


async def preview_integration(
    repository: TemplateRepository,
    tenant_id: str,
    template_id: str,
    overrides: OverridesInput = None,
    security_policy: Optional[SecurityPolicy] = None,
) -> Tuple[ValidationResult, Optional[Dict[str, Any]]]:
    """
    Returns:
        (validation result, masked preview). The preview is None when the
        validation failed.
    """
    result = await validate_template(
        repository, tenant_id, template_id, overrides, security_policy
    )
    if not result.valid:
        return result, None
    return result, mask_sensitive_auth(result.built_config)
