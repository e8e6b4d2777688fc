# schemas/distribution_models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, List, Literal, Optional, Union

from core.constants import Constants


class S3Location(BaseModel):
    """Bucket/key pair of a pipeline artifact"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    bucket_name: str = Field(..., alias="bucketName", min_length=1)
    object_key: str = Field(..., alias="objectKey", min_length=1)

    def __str__(self) -> str:
        return f"s3://{self.bucket_name}/{self.object_key}"


class DistributionRequest(BaseModel):
    """
    One unit of work: put the artifact at ``artifact_location`` into ``region``.
    Built once per pipeline job and never mutated.
    """
    model_config = ConfigDict(frozen=True)

    artifact_location: S3Location
    job_id: str = Field(..., min_length=1)
    region: str = Field(..., min_length=1)
    principal: str = Field(..., min_length=1)
    organization_id: Optional[str] = None


class PublishedLayerVersion(BaseModel):
    """Result of PublishLayerVersion in a single region"""
    region: str
    layer_name: str = Constants.LAYER_NAME
    layer_arn: Optional[str] = None
    layer_version_arn: Optional[str] = None
    version_number: Optional[int] = None
    compatible_runtimes: List[str] = Field(default_factory=lambda: list(Constants.COMPATIBLE_RUNTIMES))
    description: str = Constants.LAYER_DESCRIPTION
    license_info: str = Constants.LICENSE_INFO


class PermissionGrant(BaseModel):
    """Usage permission attached to one published layer version"""
    version_number: int
    principal: str
    organization_id: Optional[str] = None
    action: str = Constants.PERMISSION_ACTION
    statement_id: str = Constants.PERMISSION_STATEMENT_ID
    revision_id: Optional[str] = None


# ============================================================================
# JOB OUTCOMES
# ============================================================================

class JobSuccess(BaseModel):
    status: Literal["success"] = "success"
    job_id: str
    summary: str = ""
    warnings: List[str] = Field(default_factory=list)


class JobFailure(BaseModel):
    """
    ``message`` and ``failure_type`` are what CodePipeline shows. ``error_kind``
    stays inside the process for logging.
    """
    status: Literal["failure"] = "failure"
    job_id: str
    message: str = Constants.FAILURE_MESSAGE
    failure_type: str = Constants.FAILURE_TYPE
    error_kind: str = Field("", exclude=True)


JobOutcome = Annotated[Union[JobSuccess, JobFailure], Field(discriminator="status")]
