# schemas/pipeline_models.py
"""
Shape of the event CodePipeline sends to a Lambda invoke action.

Only the fields the distributor reads are modelled; everything else in the
payload (artifact credentials, continuation tokens, ...) is ignored.
"""
import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.errors import InvalidJobEvent
from schemas.distribution_models import DistributionRequest, S3Location


class _PipelineModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ArtifactLocation(_PipelineModel):
    type: str = "S3"
    s3_location: S3Location = Field(..., alias="s3Location")


class InputArtifact(_PipelineModel):
    name: Optional[str] = None
    location: ArtifactLocation


class ActionConfiguration(_PipelineModel):
    configuration: Dict[str, Any] = {}


class JobData(_PipelineModel):
    action_configuration: ActionConfiguration = Field(..., alias="actionConfiguration")
    input_artifacts: List[InputArtifact] = Field(..., alias="inputArtifacts", min_length=1)


class PipelineJob(_PipelineModel):
    id: str = Field(..., min_length=1)
    account_id: Optional[str] = Field(None, alias="accountId")
    data: JobData


class CodePipelineJobEvent(_PipelineModel):
    job: PipelineJob = Field(..., alias="CodePipeline.job")


class UserParameters(_PipelineModel):
    """Per-action configuration, passed by CodePipeline as a single JSON string."""
    region: str = Field(..., min_length=1)
    layer_principal: str = Field(..., alias="layerPrincipal", min_length=1)
    organization_id: Optional[str] = Field(None, alias="organizationId")


def _recover_job_id(event: Any) -> Optional[str]:
    try:
        job_id = event["CodePipeline.job"]["id"]
    except (KeyError, TypeError):
        return None
    return job_id if isinstance(job_id, str) and job_id else None


def parse_job_event(event: Dict[str, Any]) -> DistributionRequest:
    """
    Turn a raw CodePipeline invoke event into a DistributionRequest.

    Raises InvalidJobEvent; its ``job_id`` is set whenever the job id itself
    could be read, so the caller can still report a failure for it.
    """
    job_id = _recover_job_id(event)
    try:
        job = CodePipelineJobEvent.model_validate(event).job
        raw_params = job.data.action_configuration.configuration.get("UserParameters")
        if not isinstance(raw_params, str):
            raise InvalidJobEvent("UserParameters missing from action configuration", job_id=job_id, reason="MissingUserParameters")
        params = UserParameters.model_validate(json.loads(raw_params))
    except json.JSONDecodeError as e:
        raise InvalidJobEvent(f"UserParameters is not valid JSON: {e}", job_id=job_id, reason="MalformedUserParameters") from e
    except ValidationError as e:
        raise InvalidJobEvent(f"Invalid CodePipeline job event: {e}", job_id=job_id, reason="ValidationError") from e

    return DistributionRequest(
        artifact_location=job.data.input_artifacts[0].location.s3_location,
        job_id=job.id,
        region=params.region,
        principal=params.layer_principal,
        organization_id=params.organization_id or None,
    )
