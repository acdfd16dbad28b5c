"""
Schema Exports
"""

from integration_gateway.schemas.template import (
    BuiltIntegrationConfig,
    SecurityPolicy,
    TemplateCategoriesResponse,
    TemplateCategoryResponse,
    TemplateDetailResponse,
    TemplateListResponse,
    TemplateOverrides,
    TemplatePreviewResponse,
    UrlCheckResult,
    ValidationResult,
)

__all__ = [
    "BuiltIntegrationConfig",
    "SecurityPolicy",
    "TemplateCategoriesResponse",
    "TemplateCategoryResponse",
    "TemplateDetailResponse",
    "TemplateListResponse",
    "TemplateOverrides",
    "TemplatePreviewResponse",
    "UrlCheckResult",
    "ValidationResult",
]
