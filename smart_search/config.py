"""
Smart Search Configuration
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "info"

    # Custom sources
    custom_sources_path: str = ".smart_search/custom_sources.json"
    custom_sources_key: str = "arrow-crm-custom-sources"

    # Classifier context
    max_known_orgs: int = 100
    max_deal_details: int = 5

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
