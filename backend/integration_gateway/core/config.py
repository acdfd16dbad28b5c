from pydantic_settings import BaseSettings

from integration_gateway.schemas.template import SecurityPolicy


class Settings(BaseSettings):
    PROJECT_NAME: str = "Integration Gateway"
    API_V1_STR: str = "/api/v1"

    MONGODB_URL: str
    DATABASE_NAME: str = "integration_gateway"

    LOG_LEVEL: str = "INFO"

    # Outbound target URL policy
    SECURITY_ENFORCE_HTTPS: bool = True
    SECURITY_BLOCK_PRIVATE_NETWORKS: bool = True

    # Templates
    TEMPLATE_LIST_LIMIT: int = 500

    class Config:
        case_sensitive = True
        env_file = ".env"

    @property
    def security_policy(self) -> SecurityPolicy:
        return SecurityPolicy(
            enforce_https=self.SECURITY_ENFORCE_HTTPS,
            block_private_networks=self.SECURITY_BLOCK_PRIVATE_NETWORKS,
        )


settings = Settings()
