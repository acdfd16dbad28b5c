from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import JSONResponse

from integration_gateway.api import deps
from integration_gateway.api.v1.helpers.templates import get_template_or_404
from integration_gateway.repositories import TemplateRepository
from integration_gateway.schemas.template import (
    SecurityPolicy,
    TemplateCategoriesResponse,
    TemplateCategoryResponse,
    TemplateDetailResponse,
    TemplateListResponse,
    TemplatePreviewResponse,
)
from integration_gateway.services.templates import (
    filter_active,
    get_template_categories,
    get_templates_by_category,
    list_templates,
    preview_integration,
    validate_template,
)

router = APIRouter()


@router.get("/", response_model=TemplateListResponse)
async def list_available_templates(
    category: Optional[str] = None,
    include_inactive: bool = False,
    tenant_id: str = Depends(deps.get_tenant_id),
    template_repo: TemplateRepository = Depends(deps.get_template_repository),
):
    """
    List templates visible to the tenant (own and global).
    """
    templates = await list_templates(template_repo, tenant_id)
    if category:
        templates = [t for t in templates if t.category == category]
    templates = filter_active(templates, include_inactive)
    return TemplateListResponse(templates=templates, total=len(templates))


@router.get("/categories", response_model=TemplateCategoriesResponse)
async def list_template_categories(
    tenant_id: str = Depends(deps.get_tenant_id),
    template_repo: TemplateRepository = Depends(deps.get_template_repository),
):
    categories = await get_template_categories(template_repo, tenant_id)
    return TemplateCategoriesResponse(categories=categories)


@router.get("/category/{category}", response_model=TemplateCategoryResponse)
async def list_templates_in_category(
    category: str,
    include_inactive: bool = False,
    tenant_id: str = Depends(deps.get_tenant_id),
    template_repo: TemplateRepository = Depends(deps.get_template_repository),
):
    templates = await get_templates_by_category(template_repo, tenant_id, category)
    templates = filter_active(templates, include_inactive)
    if not templates:
        raise HTTPException(
            status_code=404, detail="No templates found for this category"
        )
    return TemplateCategoryResponse(
        category=category, templates=templates, total=len(templates)
    )


@router.get("/{template_id}", response_model=TemplateDetailResponse)
async def get_template(
    template_id: str,
    tenant_id: str = Depends(deps.get_tenant_id),
    template_repo: TemplateRepository = Depends(deps.get_template_repository),
):
    template = await get_template_or_404(template_repo, tenant_id, template_id)
    return TemplateDetailResponse(template=template)


@router.post("/{template_id}/validate")
async def validate_template_overrides(
    template_id: str,
    overrides: Dict[str, Any] = Body(default_factory=dict),
    tenant_id: str = Depends(deps.get_tenant_id),
    template_repo: TemplateRepository = Depends(deps.get_template_repository),
    policy: SecurityPolicy = Depends(deps.get_security_policy),
):
    """
    Build an integration from the template and overrides and validate it.

    Returns 200 with the validation result when valid, 400 otherwise.
    """
    result = await validate_template(
        template_repo, tenant_id, template_id, overrides, policy
    )
    return JSONResponse(
        status_code=200 if result.valid else 400,
        content=result.model_dump(mode="json", by_alias=True),
    )


@router.post("/{template_id}/preview", response_model=TemplatePreviewResponse)
async def preview_template_integration(
    template_id: str,
    overrides: Dict[str, Any] = Body(default_factory=dict),
    tenant_id: str = Depends(deps.get_tenant_id),
    template_repo: TemplateRepository = Depends(deps.get_template_repository),
    policy: SecurityPolicy = Depends(deps.get_security_policy),
):
    """
    Preview the integration configuration a template would produce, with
    secrets masked. Nothing is persisted.
    """
    result, preview = await preview_integration(
        template_repo, tenant_id, template_id, overrides, policy
    )
    if preview is None:
        raise HTTPException(
            status_code=400,
            detail={"message": "Template validation failed", "errors": result.errors},
        )
    return TemplatePreviewResponse(
        preview=preview,
        template=result.template.summary(),
        warnings=result.warnings,
    )
