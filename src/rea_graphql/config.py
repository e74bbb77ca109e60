"""
Configuration management for the REA GraphQL gateway
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Capability modules enabled for this deployment
    enabled_modules: list[str] = [
        "agent",
        "agreement",
        "knowledge",
        "measurement",
        "observation",
        "planning",
        "proposal",
    ]

    # Backend conductor
    conductor_uri: str = "http://localhost:4000"
    cell_addresses: dict[str, str] = {}  # cell name -> deployed cell address
    rpc_timeout: float = 30.0

    # Optional YAML deployment file; environment values win over it
    deployment_config_path: str | None = None

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 4001
    api_reload: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]

    # Environment
    environment: str = "development"  # 'development', 'staging', 'production'
    debug: bool = True
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "REA_"
        case_sensitive = False


# Global settings instance
settings = Settings()

# Debug: Log settings initialization (only in debug mode)
if settings.debug:
    from .logging import get_logger

    _logger = get_logger(__name__)
    _logger.debug(
        "Settings initialized",
        conductor_uri=settings.conductor_uri,
        enabled_modules=settings.enabled_modules,
        environment=settings.environment,
    )
