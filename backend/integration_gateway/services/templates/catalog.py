"""
Template catalog reads.

Store failures are logged and downgraded (empty list / None) so callers
only ever see "no templates" or "template not found".
"""

import logging
from typing import List, Optional

from integration_gateway.models.template import IntegrationTemplate
from integration_gateway.repositories.templates import TemplateRepository

logger = logging.getLogger(__name__)


async def list_templates(
    repository: TemplateRepository, tenant_id: str
) -> List[IntegrationTemplate]:
    try:
        return await repository.list_for_tenant(tenant_id)
    except Exception as e:
        logger.error(f"Failed to list templates for tenant {tenant_id}: {e}")
        return []


async def get_template_by_id(
    repository: TemplateRepository, tenant_id: str, template_id: str
) -> Optional[IntegrationTemplate]:
    try:
        return await repository.get_for_tenant(tenant_id, template_id)
    except Exception as e:
        logger.error(
            f"Failed to get template {template_id} for tenant {tenant_id}: {e}"
        )
        return None


async def get_templates_by_category(
    repository: TemplateRepository, tenant_id: str, category: str
) -> List[IntegrationTemplate]:
    try:
        return await repository.list_by_category(tenant_id, category)
    except Exception as e:
        logger.error(f"Failed to list templates in category {category}: {e}")
        return []


async def get_template_categories(
    repository: TemplateRepository, tenant_id: str
) -> List[str]:
    try:
        return await repository.list_categories(tenant_id)
    except Exception as e:
        logger.error(f"Failed to get template categories for tenant {tenant_id}: {e}")
        return []


def filter_active(
    templates: List[IntegrationTemplate], include_inactive: bool = False
) -> List[IntegrationTemplate]:
    """Drop inactive templates unless explicitly requested."""
    if include_inactive:
        return list(templates)
    return [t for t in templates if t.is_active]
