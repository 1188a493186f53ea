from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (json or console)")

    # City Generation Configuration
    max_grid_size: int = Field(default=200, description="Largest grid size the API will generate")
    default_workers: int = Field(default=1, description="Worker threads used when a request sets none")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "CITYGEN_"
        extra = "ignore"


# Instantiate singleton settings object
settings = Settings()
