"""Client configuration and settings."""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""
    
    # SOAP service
    wsdl_url: Optional[str] = None
    endpoint: Optional[str] = None
    
    # Transport timeouts (seconds)
    timeout: int = 300
    operation_timeout: Optional[int] = None
    
    # Default credentials
    username: Optional[str] = None
    password: Optional[str] = None
    
    class Config:
        env_prefix = "COMPRAFACIL_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
