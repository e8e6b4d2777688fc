# integrations/lambda_layers.py
"""
Regional Lambda layer operations.

A RegionalLayerClient is bound to exactly one region for its whole life:
publishing and granting for a job always go through the same client.
"""
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from core.aws_client import get_lambda_client
from core.constants import Constants
from core.errors import GrantRejected, PublishRejected, client_error_code
from schemas.distribution_models import PermissionGrant, PublishedLayerVersion

_PUBLISH_REASONS = {
    "TooManyRequestsException": "Throttled",
    "ThrottlingException": "Throttled",
    "InvalidParameterValueException": "InvalidContent",
    "RequestTooLargeException": "InvalidContent",
    "CodeStorageExceededException": "InvalidContent",
    "AccessDeniedException": "PermissionDenied",
}

_GRANT_REASONS = {
    "InvalidParameterValueException": "InvalidPrincipal",
    "AccessDeniedException": "PermissionDenied",
    "TooManyRequestsException": "Throttled",
}


class RegionalLayerClient:

    def __init__(self, region: str, lambda_client=None):
        self.region = region
        self._lambda = lambda_client if lambda_client is not None else get_lambda_client(region)

    def publish(self, artifact: bytes) -> PublishedLayerVersion:
        """Publish ``artifact`` as a new version of the layer in this region."""
        try:
            response = self._lambda.publish_layer_version(
                LayerName=Constants.LAYER_NAME,
                Description=Constants.LAYER_DESCRIPTION,
                Content={"ZipFile": artifact},
                CompatibleRuntimes=list(Constants.COMPATIBLE_RUNTIMES),
                LicenseInfo=Constants.LICENSE_INFO
            )
        except (ClientError, BotoCoreError) as e:
            code = client_error_code(e)
            raise PublishRejected(
                f"PublishLayerVersion failed in {self.region}: {e}",
                reason=_PUBLISH_REASONS.get(code, code or "Unknown"),
                error_code=code
            ) from e

        return PublishedLayerVersion(
            region=self.region,
            layer_arn=response.get("LayerArn"),
            layer_version_arn=response.get("LayerVersionArn"),
            version_number=response.get("Version") or None,
            compatible_runtimes=response.get("CompatibleRuntimes") or list(Constants.COMPATIBLE_RUNTIMES),
            description=response.get("Description") or Constants.LAYER_DESCRIPTION,
            license_info=response.get("LicenseInfo") or Constants.LICENSE_INFO
        )

    def grant(
        self,
        version_number: int,
        principal: str,
        organization_id: Optional[str] = None
    ) -> PermissionGrant:
        """
        Allow ``principal`` to use one layer version.

        OrganizationId is only sent when ``organization_id`` is non-empty.
        Without it a '*' principal opens the layer to every AWS account.
        """
        params = {
            "LayerName": Constants.LAYER_NAME,
            "VersionNumber": version_number,
            "StatementId": Constants.PERMISSION_STATEMENT_ID,
            "Action": Constants.PERMISSION_ACTION,
            "Principal": principal,
        }
        if organization_id:
            params["OrganizationId"] = organization_id

        try:
            response = self._lambda.add_layer_version_permission(**params)
        except (ClientError, BotoCoreError) as e:
            code = client_error_code(e)
            raise GrantRejected(
                f"AddLayerVersionPermission failed in {self.region} for version {version_number}: {e}",
                reason=_GRANT_REASONS.get(code, code or "Unknown"),
                error_code=code
            ) from e

        return PermissionGrant(
            version_number=version_number,
            principal=principal,
            organization_id=organization_id or None,
            revision_id=response.get("RevisionId")
        )
