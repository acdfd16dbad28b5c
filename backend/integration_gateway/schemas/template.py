"""
Template engine schemas.

Overrides, the built integration configuration and validation results are
serialized with camelCase keys (``model_dump(by_alias=True)``), which is the
shape the persistence and delivery subsystems expect.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from integration_gateway.models.template import IntegrationTemplate


class SecurityPolicy(BaseModel):
    """Outbound target URL policy."""

    enforce_https: bool = True
    block_private_networks: bool = True


class UrlCheckResult(BaseModel):
    valid: bool
    reason: Optional[str] = None


class TemplateOverrides(BaseModel):
    """Caller supplied values that win over the template when building an integration."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = None
    description: Optional[str] = None
    event_type: Optional[str] = None
    scope: Optional[str] = None
    target_url: Optional[str] = None
    http_method: Optional[str] = None
    outgoing_auth_type: Optional[str] = None
    outgoing_auth_config: Optional[Dict[str, Any]] = None
    headers: Optional[Dict[str, Any]] = None
    timeout_ms: Optional[int] = None
    retry_count: Optional[int] = None
    transformation_mode: Optional[str] = None
    transformation: Optional[Any] = None
    actions: Optional[List[Any]] = None
    is_active: Optional[bool] = None
    placeholders: Dict[str, Optional[str]] = Field(default_factory=dict)

    @field_validator("placeholders", mode="before")
    @classmethod
    def _placeholders_default(cls, v: Any) -> Any:
        return {} if v is None else v


class BuiltIntegrationConfig(BaseModel):
    """Fully resolved, tenant specific integration configuration."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = None
    event_type: Optional[str] = None
    scope: str
    target_url: Optional[str] = None
    http_method: Optional[str] = None
    outgoing_auth_type: Optional[str] = None
    outgoing_auth_config: Any = None
    headers: Any = None
    timeout_ms: Optional[int] = None
    retry_count: Optional[int] = None
    transformation_mode: Optional[str] = None
    transformation: Any = None
    actions: Optional[List[Any]] = None
    is_active: Optional[bool] = None
    description: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class ValidationResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    template: Optional[IntegrationTemplate] = None
    built_config: Optional[BuiltIntegrationConfig] = None


# API responses


class TemplateListResponse(BaseModel):
    templates: List[IntegrationTemplate]
    total: int


class TemplateCategoryResponse(TemplateListResponse):
    category: str


class TemplateCategoriesResponse(BaseModel):
    categories: List[str]


class TemplateDetailResponse(BaseModel):
    template: IntegrationTemplate


class TemplatePreviewResponse(BaseModel):
    preview: Dict[str, Any]
    template: Dict[str, Optional[str]]
    warnings: List[str] = Field(default_factory=list)
