# routers/router.py
"""
FastAPI Router for the layer distribution worker
"""

from typing import Any, Callable, Dict

from fastapi import (
    APIRouter,
    Body,
    Depends,
    HTTPException,
    status
)

from core.config import settings
from core.errors import InvalidJobEvent, ReportingUnreachable
from core.logger import logger
from handler import handler
from schemas.distribution_models import JobFailure, JobSuccess
from schemas.request_models import (
    DistributionRunRequest,
    DistributionRunResponse,
    HealthResponse,
)
from services.distribution_service import DistributionWorker
from services.fanout import build_requests, fan_out


# ============================================================================
# ROUTER CONFIGURATION
# ============================================================================

router = APIRouter(
    prefix="/api/v1",
    tags=["Layer Distribution"],
    responses={
        422: {"description": "Unusable job payload"},
        502: {"description": "CodePipeline job channel unreachable"}
    }
)


def get_worker() -> DistributionWorker:
    """A fresh worker (and fresh AWS clients) per request."""
    return DistributionWorker()


def get_worker_factory() -> Callable[[], DistributionWorker]:
    return DistributionWorker


# ============================================================================
# HEALTH CHECK ENDPOINTS
# ============================================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Service Health Check"
)
def check_health() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        message="Layer distributor is operational",
        home_region=settings.AWS_REGION,
        distribution_regions=settings.DISTRIBUTION_REGIONS
    )


# ============================================================================
# DISTRIBUTION ENDPOINTS
# ============================================================================

@router.post(
    "/jobs",
    status_code=status.HTTP_200_OK,
    summary="Run a CodePipeline distribute job",
    description="Accepts the same event CodePipeline sends to the Lambda action and reports the result back"
)
def run_job(
    event: Dict[str, Any] = Body(...),
    worker: DistributionWorker = Depends(get_worker)
) -> Dict[str, Any]:
    try:
        return handler(event, worker=worker)
    except InvalidJobEvent as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid CodePipeline job event ({e.reason})"
        )
    except ReportingUnreachable as e:
        logger.error(f"Job result could not be reported: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="CodePipeline job channel unreachable"
        )


@router.post(
    "/distributions",
    response_model=DistributionRunResponse,
    status_code=status.HTTP_200_OK,
    summary="Distribute an artifact to several regions in parallel"
)
def run_distribution(
    payload: DistributionRunRequest,
    worker_factory: Callable[[], DistributionWorker] = Depends(get_worker_factory)
) -> DistributionRunResponse:
    principal = payload.principal or settings.LAYER_PRINCIPAL
    if not principal:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="No layer principal given and LAYER_PRINCIPAL is not configured"
        )

    organization_id = payload.organization_id if payload.organization_id is not None else settings.ORGANIZATION_ID
    requests = build_requests(
        payload.artifact_location,
        payload.regions or settings.DISTRIBUTION_REGIONS,
        principal,
        organization_id
    )
    outcomes = fan_out(requests, worker_factory=worker_factory)

    return DistributionRunResponse(
        succeeded=sum(1 for o in outcomes if isinstance(o, JobSuccess)),
        failed=sum(1 for o in outcomes if isinstance(o, JobFailure)),
        outcomes=outcomes
    )
