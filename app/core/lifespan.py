from contextlib import asynccontextmanager

from fastapi import FastAPI

from core.aws_client import validate_aws_credentials
from core.config import settings
from core.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup only logs configuration; AWS clients are built per job,
    never here.
    """
    validate_aws_credentials()
    logger.info(
        f"Lifespan startup: home region {settings.AWS_REGION}, "
        f"fan-out regions {settings.DISTRIBUTION_REGIONS}"
    )
    yield
    logger.info("Lifespan shutdown.")
