# schemas/request_models.py
from pydantic import BaseModel
from typing import List, Optional

from schemas.distribution_models import JobOutcome, S3Location


class HealthResponse(BaseModel):
    status: str = "healthy"
    message: str = ""
    home_region: str = ""
    distribution_regions: List[str] = []


class DistributionRunRequest(BaseModel):
    """
    Ad-hoc fan-out of one artifact. Omitted fields fall back to the
    DISTRIBUTION_REGIONS / LAYER_PRINCIPAL / ORGANIZATION_ID settings.
    """
    artifact_location: S3Location
    regions: Optional[List[str]] = None
    principal: Optional[str] = None
    organization_id: Optional[str] = None


class DistributionRunResponse(BaseModel):
    succeeded: int
    failed: int
    outcomes: List[JobOutcome]
