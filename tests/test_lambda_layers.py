"""Tests for the region-bound layer client against stubbed botocore clients."""
import boto3
import pytest
from botocore.stub import Stubber

from core.errors import GrantRejected, PublishRejected
from integrations.lambda_layers import RegionalLayerClient

from conftest import LAYER_ZIP

LAYER_ARN = "arn:aws:lambda:eu-west-1:123456789012:layer:sample-layer"


@pytest.fixture
def lambda_client():
    client = boto3.client(
        "lambda",
        region_name="eu-west-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )
    with Stubber(client) as stubber:
        yield client, stubber
        stubber.assert_no_pending_responses()


def _publish_params():
    return {
        "LayerName": "sample-layer",
        "Description": "Sample layer distributed to multiple region by CodePipeline",
        "Content": {"ZipFile": LAYER_ZIP},
        "CompatibleRuntimes": ["nodejs12.x", "nodejs14.x"],
        "LicenseInfo": "MIT",
    }


def test_publish_returns_version(lambda_client):
    client, stubber = lambda_client
    stubber.add_response(
        "publish_layer_version",
        {
            "LayerArn": LAYER_ARN,
            "LayerVersionArn": f"{LAYER_ARN}:3",
            "Version": 3,
            "Description": "Sample layer distributed to multiple region by CodePipeline",
            "CompatibleRuntimes": ["nodejs12.x", "nodejs14.x"],
            "LicenseInfo": "MIT",
        },
        _publish_params(),
    )

    published = RegionalLayerClient("eu-west-1", lambda_client=client).publish(LAYER_ZIP)

    assert published.region == "eu-west-1"
    assert published.version_number == 3
    assert published.layer_version_arn == f"{LAYER_ARN}:3"
    assert published.compatible_runtimes == ["nodejs12.x", "nodejs14.x"]


def test_grant_without_org_sends_no_organization_id(lambda_client):
    client, stubber = lambda_client
    stubber.add_response(
        "add_layer_version_permission",
        {"Statement": "{}", "RevisionId": "rev-9"},
        {
            "LayerName": "sample-layer",
            "VersionNumber": 3,
            "StatementId": "layer-policy",
            "Action": "lambda:GetLayerVersion",
            "Principal": "123456789012",
        },
    )

    grant = RegionalLayerClient("eu-west-1", lambda_client=client).grant(3, "123456789012", "")

    assert grant.organization_id is None
    assert grant.revision_id == "rev-9"


def test_grant_with_org_scope(lambda_client):
    client, stubber = lambda_client
    stubber.add_response(
        "add_layer_version_permission",
        {"Statement": "{}", "RevisionId": "rev-10"},
        {
            "LayerName": "sample-layer",
            "VersionNumber": 3,
            "StatementId": "layer-policy",
            "Action": "lambda:GetLayerVersion",
            "Principal": "*",
            "OrganizationId": "o-abc123",
        },
    )

    grant = RegionalLayerClient("eu-west-1", lambda_client=client).grant(3, "*", "o-abc123")

    assert grant.principal == "*"
    assert grant.organization_id == "o-abc123"
    assert grant.statement_id == "layer-policy"


@pytest.mark.parametrize(
    "code,reason",
    [
        ("TooManyRequestsException", "Throttled"),
        ("InvalidParameterValueException", "InvalidContent"),
        ("AccessDeniedException", "PermissionDenied"),
        ("ServiceException", "ServiceException"),
    ],
)
def test_publish_errors_map_to_reasons(lambda_client, code, reason):
    client, stubber = lambda_client
    stubber.add_client_error("publish_layer_version", service_error_code=code, http_status_code=400)

    with pytest.raises(PublishRejected) as exc_info:
        RegionalLayerClient("eu-west-1", lambda_client=client).publish(LAYER_ZIP)

    assert exc_info.value.reason == reason
    assert exc_info.value.error_code == code


@pytest.mark.parametrize(
    "code,reason",
    [
        ("InvalidParameterValueException", "InvalidPrincipal"),
        ("AccessDeniedException", "PermissionDenied"),
    ],
)
def test_grant_errors_map_to_reasons(lambda_client, code, reason):
    client, stubber = lambda_client
    stubber.add_client_error("add_layer_version_permission", service_error_code=code, http_status_code=400)

    with pytest.raises(GrantRejected) as exc_info:
        RegionalLayerClient("eu-west-1", lambda_client=client).grant(3, "not-a-principal")

    assert exc_info.value.reason == reason
