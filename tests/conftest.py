import io
import json
from unittest import mock

import pytest
from botocore.exceptions import ClientError

from integrations.artifact_store import ArtifactStoreClient
from integrations.codepipeline_client import JobReporter
from integrations.lambda_layers import RegionalLayerClient
from schemas.distribution_models import DistributionRequest, S3Location
from services.distribution_service import DistributionWorker


LAYER_ZIP = b"PK\x03\x04fake-layer-zip"


def client_error(code: str, operation: str, message: str = "boom") -> ClientError:
    return ClientError(
        error_response={"Error": {"Code": code, "Message": message}},
        operation_name=operation,
    )


def make_request(**overrides) -> DistributionRequest:
    fields = {
        "artifact_location": S3Location(bucket_name="pipeline-artifacts", object_key="Build/layer.zip"),
        "job_id": "11111111-2222-3333-4444-555555555555",
        "region": "us-east-1",
        "principal": "123456789012",
        "organization_id": None,
    }
    fields.update(overrides)
    return DistributionRequest(**fields)


def make_event(job_id="job-123", region="us-east-1", principal="123456789012", organization_id=""):
    return {
        "CodePipeline.job": {
            "id": job_id,
            "accountId": "123456789012",
            "data": {
                "actionConfiguration": {
                    "configuration": {
                        "FunctionName": "LambdaLayerDistributor",
                        "UserParameters": json.dumps({
                            "region": region,
                            "layerPrincipal": principal,
                            "organizationId": organization_id,
                        }),
                    }
                },
                "inputArtifacts": [
                    {
                        "name": "Artifact_Build_CodeBuild",
                        "location": {
                            "type": "S3",
                            "s3Location": {
                                "bucketName": "pipeline-artifacts",
                                "objectKey": "LambdaLayerBuilderPi/Artifact_B/abc123",
                            },
                        },
                    }
                ],
                "outputArtifacts": [],
            },
        }
    }


class AwsDoubles:
    """MagicMock stand-ins for the S3, Lambda and CodePipeline clients of one job."""

    def __init__(self):
        self.s3 = mock.MagicMock()
        self.s3.get_object.side_effect = lambda **kwargs: {"Body": io.BytesIO(LAYER_ZIP)}

        self.lambda_client = mock.MagicMock()
        self.lambda_client.publish_layer_version.return_value = {
            "LayerArn": "arn:aws:lambda:us-east-1:123456789012:layer:sample-layer",
            "LayerVersionArn": "arn:aws:lambda:us-east-1:123456789012:layer:sample-layer:7",
            "Version": 7,
            "CompatibleRuntimes": ["nodejs12.x", "nodejs14.x"],
            "LicenseInfo": "MIT",
        }
        self.lambda_client.add_layer_version_permission.return_value = {
            "Statement": "{}",
            "RevisionId": "rev-1",
        }

        self.codepipeline = mock.MagicMock()
        self.regions_bound = []

    def regional_client_factory(self, region):
        self.regions_bound.append(region)
        return RegionalLayerClient(region, lambda_client=self.lambda_client)

    def worker(self) -> DistributionWorker:
        return DistributionWorker(
            artifact_store=ArtifactStoreClient(s3_client=self.s3),
            regional_client_factory=self.regional_client_factory,
            reporter=JobReporter(codepipeline_client=self.codepipeline),
        )


@pytest.fixture
def aws():
    return AwsDoubles()
