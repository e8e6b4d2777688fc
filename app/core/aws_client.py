# core/aws_client.py
"""
Centralized AWS client factory to ensure proper credential handling.

Every call builds a fresh client. Distribution jobs for different regions
run concurrently, so nothing here caches a client at module level.
"""
import boto3
from botocore.config import Config
from core.config import settings
from core.logger import logger
import os


def _credentials():
    """Explicit credentials from settings (.env) or environment; None falls back to the default chain."""
    return {
        "aws_access_key_id": getattr(settings, 'AWS_ACCESS_KEY_ID', None) or os.getenv('AWS_ACCESS_KEY_ID'),
        "aws_secret_access_key": getattr(settings, 'AWS_SECRET_ACCESS_KEY', None) or os.getenv('AWS_SECRET_ACCESS_KEY'),
        "aws_session_token": getattr(settings, 'AWS_SESSION_TOKEN', None) or os.getenv('AWS_SESSION_TOKEN'),
    }


def _session():
    """A private session per client; the boto3 default session is not safe to share across threads."""
    return boto3.session.Session()


def get_lambda_client(region: str):
    """Get a Lambda client bound to the given target region."""
    try:
        config = Config(
            connect_timeout=settings.LAMBDA_CONNECT_TIMEOUT,
            read_timeout=settings.LAMBDA_READ_TIMEOUT,
            retries={'max_attempts': settings.LAMBDA_MAX_ATTEMPTS}
        )
        client = _session().client(
            "lambda",
            region_name=region,
            config=config,
            **_credentials()
        )
        logger.debug(f"Lambda client initialized for region {region}")
        return client
    except Exception as e:
        logger.error(f"Failed to initialize Lambda client for {region}: {str(e)}")
        raise


def get_s3_client():
    """Get S3 client for reading pipeline artifacts."""
    try:
        config = Config(retries={'max_attempts': settings.S3_MAX_ATTEMPTS})
        client = _session().client(
            "s3",
            region_name=settings.AWS_REGION,
            config=config,
            **_credentials()
        )
        logger.debug("S3 client initialized")
        return client
    except Exception as e:
        logger.error(f"Failed to initialize S3 client: {str(e)}")
        raise


def get_codepipeline_client():
    """Get CodePipeline client for reporting job results."""
    try:
        client = _session().client(
            "codepipeline",
            region_name=settings.AWS_REGION,
            **_credentials()
        )
        logger.debug("CodePipeline client initialized")
        return client
    except Exception as e:
        logger.error(f"Failed to initialize CodePipeline client: {str(e)}")
        raise


def validate_aws_credentials():
    """Check whether explicit credentials are configured (the Lambda role is used otherwise)."""
    creds = _credentials()

    if not creds["aws_access_key_id"] or not creds["aws_secret_access_key"]:
        logger.info("No explicit AWS credentials configured; using the default credential chain")
        return False

    logger.info("AWS credentials found and validated")
    return True
