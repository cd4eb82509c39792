from typing import List
from pydantic import Field
from .base import EnvConfig


class SystemConfig(EnvConfig):
    """
    General system-wide configuration.
    """

    # Maps to CRYPTOSTATS_ENV in .env
    environment: str = Field(validation_alias="CRYPTOSTATS_ENV", default="production")

    debug: bool = Field(validation_alias="DEBUG", default=False)
    project_name: str = "CryptoStats"
    version: str = "1.0.0"

    # Comma-separated string in .env, parsed into a list below
    allowed_origins: str = Field(
        validation_alias="CORS_ORIGINS",
        default="http://localhost:3000,http://127.0.0.1:3000",
    )

    @property
    def allowed_origins_list(self) -> List[str]:
        return [url.strip() for url in self.allowed_origins.split(",")]
