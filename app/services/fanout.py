# services/fanout.py
"""
Local stand-in for the pipeline's Distribute stage: one independent worker
per region, run in parallel. Nothing is shared between the tasks; each gets
its own worker and therefore its own AWS clients.
"""
import uuid
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional

from core.config import settings
from core.logger import logger
from schemas.distribution_models import DistributionRequest, JobFailure, JobOutcome, S3Location
from services.distribution_service import DistributionWorker


def build_requests(
    location: S3Location,
    regions: Iterable[str],
    principal: str,
    organization_id: Optional[str] = None,
    job_id_factory: Callable[[str], str] = lambda region: f"local-{region}-{uuid.uuid4()}"
) -> List[DistributionRequest]:
    """One request per region, all pointing at the same artifact."""
    return [
        DistributionRequest(
            artifact_location=location,
            job_id=job_id_factory(region),
            region=region,
            principal=principal,
            organization_id=organization_id or None
        )
        for region in regions
    ]


def fan_out(
    requests: List[DistributionRequest],
    worker_factory: Callable[[], DistributionWorker] = DistributionWorker,
    max_workers: Optional[int] = None
) -> List[JobOutcome]:
    """
    Distribute every request concurrently and return outcomes in input order.
    A failure in one region has no effect on the others.
    """
    if not requests:
        return []

    max_workers = max(1, min(max_workers or settings.FANOUT_MAX_WORKERS, len(requests)))
    logger.info(f"Fanning out {len(requests)} distribution job(s) with {max_workers} worker(s)")

    def _run(request: DistributionRequest) -> JobOutcome:
        return worker_factory().distribute(request)

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = [pool.submit(_run, request) for request in requests]
        outcomes = []
        for request, future in zip(requests, futures):
            try:
                outcomes.append(future.result())
            except Exception as e:
                # e.g. a worker_factory that cannot build its clients
                logger.error(f"Distribution to {request.region} crashed: {e}")
                outcomes.append(JobFailure(job_id=request.job_id, error_kind=e.__class__.__name__))

    failed = [o.job_id for o in outcomes if isinstance(o, JobFailure)]
    if failed:
        logger.warning(f"{len(failed)} of {len(outcomes)} distribution job(s) failed")
    return outcomes
