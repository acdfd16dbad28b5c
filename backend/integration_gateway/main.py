import logging

from fastapi import FastAPI

from integration_gateway.api import health
from integration_gateway.api.v1.endpoints import templates
from integration_gateway.core.config import settings
from integration_gateway.core.metrics import metrics_endpoint
from integration_gateway.db.mongodb import close_mongo_connection, connect_to_mongo

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
    Integration Gateway API for instantiating outbound integration templates.

    ## Features
    * **Template Catalog**: Browse tenant and global integration templates by category.
    * **Validation**: Build an integration from a template plus overrides and check it,
      including target URL safety (HTTPS, private network blocking).
    * **Preview**: Inspect the fully resolved configuration with secrets masked.

    """,
    version="0.1.0",
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
)


@app.on_event("startup")
async def startup_event():
    await connect_to_mongo()


@app.on_event("shutdown")
async def shutdown_event():
    await close_mongo_connection()


app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(templates.router, prefix=f"{settings.API_V1_STR}/templates", tags=["templates"])
app.add_api_route("/metrics", metrics_endpoint, methods=["GET"], include_in_schema=False)


@app.get("/")
async def root():
    return {"message": "Welcome to Integration Gateway API"}
