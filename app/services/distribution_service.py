# services/distribution_service.py
"""
Regional Distribution Worker

Runs one CodePipeline "distribute" job:
1. Download the built layer zip from the artifact bucket
2. Publish it as a new layer version in the job's region
3. Grant usage permission on that version (only if a version came back)
4. Report success/failure to CodePipeline

Steps run strictly in order with no retries. A version published before a
failed grant is left in place; the pipeline's own rerun is the recovery path.
"""
import logging
from typing import Callable, Optional

from core.constants import Constants
from core.errors import DistributionError
from core.logger import logger
from integrations.artifact_store import ArtifactStoreClient
from integrations.codepipeline_client import JobReporter
from integrations.lambda_layers import RegionalLayerClient
from schemas.distribution_models import DistributionRequest, JobFailure, JobOutcome, JobSuccess
from utils.log_event import log_event

NO_VERSION_WARNING = "PublishLayerVersion returned no version number; permission step skipped"


class DistributionWorker:
    """
    Composes the artifact store, a region-bound layer client and the job
    reporter. Holds no per-job state, but every collaborator is created per
    worker, so build a new worker for each concurrent job.
    """

    def __init__(
        self,
        artifact_store: Optional[ArtifactStoreClient] = None,
        regional_client_factory: Callable[[str], RegionalLayerClient] = RegionalLayerClient,
        reporter: Optional[JobReporter] = None
    ):
        self._artifact_store = artifact_store
        self._regional_client_factory = regional_client_factory
        self._reporter = reporter

    @property
    def artifact_store(self) -> ArtifactStoreClient:
        if self._artifact_store is None:
            self._artifact_store = ArtifactStoreClient()
        return self._artifact_store

    @property
    def reporter(self) -> JobReporter:
        if self._reporter is None:
            self._reporter = JobReporter()
        return self._reporter

    def distribute(self, request: DistributionRequest) -> JobOutcome:
        """Run the job and return its outcome. Never raises for distribution failures."""
        log_event(
            "distribution_started",
            job_id=request.job_id,
            region=request.region,
            artifact=str(request.artifact_location),
            principal=request.principal,
            organization_id=request.organization_id
        )

        try:
            artifact = self.artifact_store.get(request.artifact_location)

            layers = self._regional_client_factory(request.region)
            published = layers.publish(artifact)
            log_event(
                "layer_published",
                job_id=request.job_id,
                region=request.region,
                layer_version_arn=published.layer_version_arn,
                version=published.version_number
            )

            if not published.version_number:
                log_event(
                    "permission_skipped",
                    level=logging.WARNING,
                    job_id=request.job_id,
                    region=request.region,
                    reason=NO_VERSION_WARNING
                )
                return JobSuccess(
                    job_id=request.job_id,
                    summary=f"Published {Constants.LAYER_NAME} in {request.region}; {NO_VERSION_WARNING}",
                    warnings=[NO_VERSION_WARNING]
                )

            grant = layers.grant(
                published.version_number,
                request.principal,
                request.organization_id
            )
            log_event(
                "permission_applied",
                job_id=request.job_id,
                region=request.region,
                version=grant.version_number,
                principal=grant.principal,
                organization_id=grant.organization_id,
                revision_id=grant.revision_id
            )
        except Exception as e:
            # Unexpected errors are still a failed job, not a crashed invocation
            return self._failure(request, e)

        return JobSuccess(
            job_id=request.job_id,
            summary=f"Published {published.layer_version_arn or Constants.LAYER_NAME} "
                    f"(version {published.version_number}) in {request.region}"
        )

    def run(self, request: DistributionRequest) -> JobOutcome:
        """Distribute, then report the outcome. ReportingUnreachable propagates."""
        outcome = self.distribute(request)
        self.reporter.report(outcome)
        return outcome

    def _failure(self, request: DistributionRequest, error: Exception) -> JobFailure:
        fields = error.to_log_fields() if isinstance(error, DistributionError) else {
            "error_kind": error.__class__.__name__,
            "detail": str(error),
        }
        logger.exception(f"Layer distribution failed for job {request.job_id} in {request.region}")
        log_event(
            "distribution_failed",
            level=logging.ERROR,
            job_id=request.job_id,
            region=request.region,
            **fields
        )
        return JobFailure(job_id=request.job_id, error_kind=fields["error_kind"])
