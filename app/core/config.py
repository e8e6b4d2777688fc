# core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional, List


class Settings(BaseSettings):
    """
    Centralized application configuration.
    Layer definition constants are not settings; see core/constants.py.
    """

    # ------------------------------------------------------------
    # Project / Runtime
    # ------------------------------------------------------------
    PROJECT_NAME: str = "Lambda Layer Distributor"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ------------------------------------------------------------
    # AWS Core
    # ------------------------------------------------------------
    """
    Region the distributor itself runs in. The artifact bucket and the
    CodePipeline job channel are reached through this region; layer
    publishing uses the region carried by each job.
    """
    AWS_REGION: str = "us-east-1"
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    AWS_SESSION_TOKEN: Optional[str] = None

    # ------------------------------------------------------------
    # Client tuning
    # ------------------------------------------------------------
    LAMBDA_CONNECT_TIMEOUT: int = Field(
        default=5,
        description="Connect timeout (seconds) for regional Lambda clients"
    )
    LAMBDA_READ_TIMEOUT: int = Field(
        default=10,
        description="Read timeout (seconds) for regional Lambda clients"
    )
    LAMBDA_MAX_ATTEMPTS: int = Field(
        default=0,
        description="botocore retry attempts for publish/grant calls (0 = fail fast)"
    )
    S3_MAX_ATTEMPTS: int = Field(
        default=0,
        description="botocore retry attempts for artifact downloads"
    )

    # ------------------------------------------------------------
    # Local fan-out (stand-in for the Distribute stage)
    # ------------------------------------------------------------
    DISTRIBUTION_REGIONS: List[str] = Field(
        default_factory=lambda: ["us-east-1", "eu-west-1"],
        description="Regions to distribute into when running the fan-out locally"
    )
    LAYER_PRINCIPAL: str = Field(
        default="",
        description="Account id, '*' or service principal granted layer usage"
    )
    ORGANIZATION_ID: str = Field(
        default="",
        description="Optional AWS Organizations id narrowing a '*' principal; empty means no scope"
    )
    FANOUT_MAX_WORKERS: int = Field(
        default=8,
        description="Upper bound on concurrently running regional workers"
    )

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
