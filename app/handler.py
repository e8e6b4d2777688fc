"""
AWS Lambda entry point for the CodePipeline "distribute" action.

One invocation handles one region. CodePipeline runs one invocation per
configured region in parallel and waits for each job result.
"""
from core.errors import InvalidJobEvent
from core.logger import logger
from schemas.distribution_models import JobFailure
from schemas.pipeline_models import parse_job_event
from services.distribution_service import DistributionWorker
from utils.log_event import log_event, redact_job_event


def handler(event, context=None, worker: DistributionWorker = None) -> dict:
    log_event("event_received", payload=redact_job_event(event))
    worker = worker or DistributionWorker()

    try:
        request = parse_job_event(event)
    except InvalidJobEvent as e:
        logger.error(f"Rejected CodePipeline event: {e}")
        if e.job_id is None:
            # Nothing to correlate a failure report with
            raise
        outcome = JobFailure(job_id=e.job_id, error_kind=e.kind)
        worker.reporter.report(outcome)
        return outcome.model_dump()

    outcome = worker.run(request)
    return outcome.model_dump()
