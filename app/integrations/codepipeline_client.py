# integrations/codepipeline_client.py
from botocore.exceptions import BotoCoreError, ClientError

from core.aws_client import get_codepipeline_client
from core.errors import ReportingUnreachable, client_error_code
from schemas.distribution_models import JobFailure, JobOutcome, JobSuccess
from utils.log_event import log_event

# CodePipeline rejects longer execution summaries
_MAX_SUMMARY_LENGTH = 2048


class JobReporter:
    """
    Sends the terminal result of a job back to CodePipeline.
    The job id is passed through exactly as received.
    """

    def __init__(self, codepipeline_client=None):
        self._codepipeline = codepipeline_client if codepipeline_client is not None else get_codepipeline_client()

    def report(self, outcome: JobOutcome) -> None:
        try:
            if isinstance(outcome, JobSuccess):
                params = {"jobId": outcome.job_id}
                if outcome.summary:
                    params["executionDetails"] = {
                        "summary": outcome.summary[:_MAX_SUMMARY_LENGTH],
                        "percentComplete": 100,
                    }
                self._codepipeline.put_job_success_result(**params)
            elif isinstance(outcome, JobFailure):
                self._codepipeline.put_job_failure_result(
                    jobId=outcome.job_id,
                    failureDetails={
                        "type": outcome.failure_type,
                        "message": outcome.message,
                    }
                )
            else:
                raise TypeError(f"Unsupported job outcome: {type(outcome).__name__}")
        except (ClientError, BotoCoreError) as e:
            raise ReportingUnreachable(
                f"Could not report {outcome.status} for job {outcome.job_id}: {e}",
                reason="Unreachable",
                error_code=client_error_code(e)
            ) from e

        log_event("job_reported", job_id=outcome.job_id, status=outcome.status)
