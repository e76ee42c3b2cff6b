from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    app_env: str = "dev"
    log_level: str = "INFO"
    # Used to compose short URLs when the service sits behind a proxy
    public_base_url: Optional[str] = None

    # Database
    database_url: str = "sqlite:///./shortlinks.db"
    create_tables: bool = True

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
