from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from integration_gateway.core.config import settings
from integration_gateway.core.constants import TENANT_HEADER
from integration_gateway.db.mongodb import get_database
from integration_gateway.repositories import TemplateRepository
from integration_gateway.schemas.template import SecurityPolicy


async def get_tenant_id(
    tenant_id: Optional[str] = Header(default=None, alias=TENANT_HEADER),
) -> str:
    if not tenant_id or not tenant_id.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{TENANT_HEADER} header is required",
        )
    return tenant_id.strip()


async def get_template_repository(
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> TemplateRepository:
    return TemplateRepository(db)


def get_security_policy() -> SecurityPolicy:
    return settings.security_policy
