"""Client for the Jenkins trigger endpoint, with user-facing error classification."""

from jenkins_trigger.classifier import classify
from jenkins_trigger.client import ClientConfig, TriggerClient
from jenkins_trigger.models import (
    ErrorKind,
    Failure,
    Success,
    TriggerOutcome,
    TriggerRequest,
    format_technical_details,
    format_user_message,
)

__version__ = "0.1.0"

__all__ = [
    "ClientConfig",
    "ErrorKind",
    "Failure",
    "Success",
    "TriggerClient",
    "TriggerOutcome",
    "TriggerRequest",
    "classify",
    "format_technical_details",
    "format_user_message",
]
