"""
Template Repository

Read-only access to integration templates. A tenant sees its own templates
plus global ones (documents whose tenantId is null).
"""

from typing import Any, Dict, List, Optional

from bson import ObjectId

from integration_gateway.core.config import settings
from integration_gateway.core.constants import TEMPLATES_COLLECTION
from integration_gateway.models.template import IntegrationTemplate
from integration_gateway.repositories.base import BaseRepository


class TemplateRepository(BaseRepository[IntegrationTemplate]):
    """Repository for integration template lookups."""

    collection_name = TEMPLATES_COLLECTION
    model_class = IntegrationTemplate

    @staticmethod
    def tenant_scope(tenant_id: str) -> Dict[str, Any]:
        """Query fragment matching the tenant's templates and global templates."""
        return {"$or": [{"tenantId": tenant_id}, {"tenantId": None}]}

    @staticmethod
    def id_filter(template_id: str) -> Any:
        """Match both ObjectId and string _id values for ObjectId-shaped ids."""
        if ObjectId.is_valid(template_id):
            return {"$in": [ObjectId(template_id), template_id]}
        return template_id

    async def list_for_tenant(
        self, tenant_id: str, limit: Optional[int] = None
    ) -> List[IntegrationTemplate]:
        """List templates visible to a tenant, most recently updated first."""
        return await self.find_many(
            self.tenant_scope(tenant_id),
            limit=limit or settings.TEMPLATE_LIST_LIMIT,
            sort_by="updatedAt",
            sort_order=-1,
        )

    async def get_for_tenant(
        self, tenant_id: str, template_id: str
    ) -> Optional[IntegrationTemplate]:
        """Get a template by id if it is visible to the tenant."""
        query = {"_id": self.id_filter(template_id), **self.tenant_scope(tenant_id)}
        return await self.find_one(query)

    async def list_by_category(
        self, tenant_id: str, category: str, limit: Optional[int] = None
    ) -> List[IntegrationTemplate]:
        """List templates of one category visible to a tenant."""
        query = {"category": category, **self.tenant_scope(tenant_id)}
        return await self.find_many(
            query,
            limit=limit or settings.TEMPLATE_LIST_LIMIT,
            sort_by="updatedAt",
            sort_order=-1,
        )

    async def list_categories(self, tenant_id: str) -> List[str]:
        """Sorted distinct non-empty categories visible to a tenant."""
        categories = await self.distinct("category", self.tenant_scope(tenant_id))
        return sorted({c for c in categories if c})
