"""
Integration template documents.

Templates live in the ``integration_templates`` collection with camelCase keys
(``eventType``, ``targetUrl`` ...). Fields are exposed in snake_case and accept
either spelling on input.
"""

from datetime import datetime
from typing import Annotated, Any, Dict, List, Optional

from bson import ObjectId
from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


def convert_objectid_to_str(v: Any) -> Any:
    """Convert MongoDB ObjectId to str before Pydantic validation."""
    if isinstance(v, ObjectId):
        return str(v)
    return v


PyObjectId = Annotated[str, BeforeValidator(convert_objectid_to_str)]


class IntegrationTemplate(BaseModel):
    """Reusable, tenant-scoped (or global) blueprint for an outbound integration.

    ``tenant_id`` is None for global templates. Instances are frozen; the
    template engine only ever reads them.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: PyObjectId = Field(validation_alias=AliasChoices("_id", "id"))
    tenant_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    event_type: Optional[str] = None
    scope: Optional[str] = None
    target_url: Optional[str] = None
    http_method: Optional[str] = None
    auth_type: Optional[str] = None
    auth_config: Dict[str, Any] = Field(default_factory=dict)
    headers: Dict[str, Any] = Field(default_factory=dict)
    timeout_ms: Optional[int] = None
    retry_count: Optional[int] = None
    transformation_mode: Optional[str] = None
    transformation: Any = Field(default_factory=dict)
    # Multi-action templates: each action is a mini target (targetUrl, httpMethod, headers ...)
    actions: Optional[List[Any]] = None
    is_active: bool = True
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_global(self) -> bool:
        return self.tenant_id is None

    def summary(self) -> Dict[str, Optional[str]]:
        """Short reference used in preview responses."""
        return {"id": self.id, "name": self.name, "category": self.category}
