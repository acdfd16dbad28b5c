"""
Template engine package.

Instantiates integration templates: placeholder substitution, building the
integration configuration from template + overrides, and validating it.
"""

from integration_gateway.services.templates.builder import (
    TemplateBuildError,
    build_integration_config,
    normalize_auth_type,
    parse_overrides,
)
from integration_gateway.services.templates.catalog import (
    filter_active,
    get_template_by_id,
    get_template_categories,
    get_templates_by_category,
    list_templates,
)
from integration_gateway.services.templates.preview import (
    mask_sensitive_auth,
    preview_integration,
)
from integration_gateway.services.templates.substitution import (
    replace_placeholders,
    substitute_placeholders,
)
from integration_gateway.services.templates.validator import (
    BuildOutcome,
    check_built_config,
    try_build,
    validate_template,
)

__all__ = [
    # Substitution
    "replace_placeholders",
    "substitute_placeholders",
    # Builder
    "TemplateBuildError",
    "build_integration_config",
    "normalize_auth_type",
    "parse_overrides",
    # Validator
    "BuildOutcome",
    "check_built_config",
    "try_build",
    "validate_template",
    # Catalog
    "filter_active",
    "get_template_by_id",
    "get_template_categories",
    "get_templates_by_category",
    "list_templates",
    # Preview
    "mask_sensitive_auth",
    "preview_integration",
]
