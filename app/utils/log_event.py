import copy
import json
import logging
from datetime import datetime, timezone
from core.logger import logger

REDACTED = "***redacted***"

# Keys under CodePipeline.job.data that carry credentials or resume tokens
_SENSITIVE_JOB_DATA_KEYS = ("artifactCredentials", "continuationToken", "encryptionKey")


def log_event(event: str, level: int = logging.INFO, **fields) -> dict:
    """
    Emit one JSON log line for a distribution lifecycle event.
    Values that are not JSON-native are stringified.
    """
    log_data = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "event": event,
    }
    log_data.update(fields)

    logger.log(level, json.dumps(log_data, default=str))
    return log_data


def redact_job_event(event):
    """
    Copy of a CodePipeline invoke event that is safe to log.
    The temporary artifact credentials CodePipeline hands to the action are masked.
    """
    if not isinstance(event, dict):
        return event

    redacted = copy.deepcopy(event)
    job = redacted.get("CodePipeline.job")
    data = job.get("data") if isinstance(job, dict) else None
    if isinstance(data, dict):
        for key in _SENSITIVE_JOB_DATA_KEYS:
            if key in data:
                data[key] = REDACTED
    return redacted
