# core/errors.py
"""
Failure taxonomy of a regional distribution.

Each class keeps a short machine-readable ``reason`` plus the error code
returned by AWS (when there is one). None of this leaves the process except
through the logs: the pipeline only ever sees the generic failure message.
"""
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError


class DistributionError(Exception):
    """Base class for everything that can fail a distribution job."""

    kind = "DistributionError"

    def __init__(self, message: str, *, reason: str = "", error_code: Optional[str] = None):
        super().__init__(message)
        self.reason = reason
        self.error_code = error_code

    def to_log_fields(self) -> dict:
        return {
            "error_kind": self.kind,
            "reason": self.reason,
            "error_code": self.error_code,
            "detail": str(self),
        }


class ArtifactUnavailable(DistributionError):
    kind = "ArtifactUnavailable"


class PublishRejected(DistributionError):
    kind = "PublishRejected"


class GrantRejected(DistributionError):
    kind = "GrantRejected"


class ReportingUnreachable(DistributionError):
    """The CodePipeline job channel could not be reached. Fatal, never retried."""

    kind = "ReportingUnreachable"


class InvalidJobEvent(DistributionError):
    """The invocation payload is not a usable CodePipeline job."""

    kind = "InvalidJobEvent"

    def __init__(self, message: str, *, job_id: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.job_id = job_id


def client_error_code(exc: Exception) -> Optional[str]:
    """Extract the AWS error code from a botocore exception, if any."""
    if isinstance(exc, ClientError):
        return exc.response.get("Error", {}).get("Code") or None
    if isinstance(exc, BotoCoreError):
        return exc.__class__.__name__
    return None
