# integrations/artifact_store.py
from botocore.exceptions import BotoCoreError, ClientError

from core.aws_client import get_s3_client
from core.errors import ArtifactUnavailable, client_error_code
from core.logger import logger
from schemas.distribution_models import S3Location

_NOT_FOUND_CODES = {"NoSuchKey", "NoSuchBucket", "404", "NotFound"}


class ArtifactStoreClient:
    """Reads build artifacts out of the pipeline's S3 artifact bucket."""

    def __init__(self, s3_client=None):
        self._s3 = s3_client if s3_client is not None else get_s3_client()

    def get(self, location: S3Location) -> bytes:
        """
        Download the artifact at ``location``.

        Raises:
            ArtifactUnavailable: reason "NotFound" for a missing bucket/key,
                "TransientIO" for anything else (network, throttling, ...).
        """
        try:
            response = self._s3.get_object(
                Bucket=location.bucket_name,
                Key=location.object_key
            )
            body = response["Body"].read()
        except ClientError as e:
            code = client_error_code(e)
            reason = "NotFound" if code in _NOT_FOUND_CODES else "TransientIO"
            raise ArtifactUnavailable(
                f"Could not read artifact {location}: {e}",
                reason=reason,
                error_code=code
            ) from e
        except BotoCoreError as e:
            raise ArtifactUnavailable(
                f"Could not read artifact {location}: {e}",
                reason="TransientIO",
                error_code=client_error_code(e)
            ) from e

        logger.debug(f"Downloaded artifact {location} ({len(body)} bytes)")
        return body
