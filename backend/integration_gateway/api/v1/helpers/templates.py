"""
Template Helper Functions

Shared helper functions for template endpoints.
"""

from fastapi import HTTPException

from integration_gateway.core.constants import MSG_TEMPLATE_NOT_FOUND
from integration_gateway.models.template import IntegrationTemplate
from integration_gateway.repositories import TemplateRepository
from integration_gateway.services.templates import get_template_by_id


async def get_template_or_404(
    template_repo: TemplateRepository,
    tenant_id: str,
    template_id: str,
) -> IntegrationTemplate:
    """
    Fetch a template visible to the tenant or raise 404 if not found.

    Args:
        template_repo: TemplateRepository instance
        tenant_id: Tenant requesting the template
        template_id: Template ID to fetch

    Returns:
        IntegrationTemplate model instance

    Raises:
        HTTPException: 404 if template not found
    """
    template = await get_template_by_id(template_repo, tenant_id, template_id)
    if not template:
        raise HTTPException(status_code=404, detail=MSG_TEMPLATE_NOT_FOUND)
    return template
