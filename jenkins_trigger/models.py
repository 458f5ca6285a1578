"""Data models for Jenkins trigger calls.

Contains the request sent to the trigger endpoint and the two outcome types:
    - TriggerRequest
    - ErrorKind
    - Success
    - Failure
    - TriggerOutcome   (Success | Failure)

Helpers:
    format_user_message(outcome)       -> "User message. Suggested action"
    format_technical_details(outcome)  -> "[error_kind] technical details"
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

DEFAULT_JENKINS_USER = "sonar"


class ErrorKind(str, Enum):
    """Closed set of failure categories surfaced to callers."""

    MISSING_HEADERS = "missing_headers"
    AUTHENTICATION_FAILED = "authentication_failed"
    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    CONNECTION_ERROR = "connection_error"
    REQUEST_ERROR = "request_error"
    UNKNOWN = "unknown"


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TriggerRequest:
    jenkins_url: str
    jenkins_token: str
    jenkins_job: str
    jenkins_user: str = DEFAULT_JENKINS_USER

    def headers(self) -> dict[str, str]:
        """Return the headers the trigger endpoint reads the job from."""
        return {
            "X-Jenkins-Url":   self.jenkins_url,
            "X-Jenkins-Token": self.jenkins_token,
            "X-Jenkins-Job":   self.jenkins_job,
            "X-Jenkins-User":  self.jenkins_user,
        }


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Success:
    message: str
    data: Any = None

    @property
    def success(self) -> bool:
        return True

    def to_dict(self) -> dict:
        return {"success": True, "message": self.message, "data": self.data}


@dataclass(frozen=True)
class Failure:
    error_kind: ErrorKind
    user_message: str
    technical_details: str
    suggested_action: str
    timestamp: str

    @property
    def success(self) -> bool:
        return False

    def to_dict(self) -> dict:
        return {
            "success":           False,
            "error_kind":        self.error_kind.value,
            "user_message":      self.user_message,
            "technical_details": self.technical_details,
            "suggested_action":  self.suggested_action,
            "timestamp":         self.timestamp,
        }


TriggerOutcome = Success | Failure


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def format_user_message(outcome: TriggerOutcome) -> str:
    """Message suitable for display to an end user; empty on success."""
    if isinstance(outcome, Success):
        return ""
    return f"{outcome.user_message}. {outcome.suggested_action}"


def format_technical_details(outcome: TriggerOutcome) -> str:
    """Message suitable for logs; empty on success."""
    if isinstance(outcome, Success):
        return ""
    return f"[{outcome.error_kind.value}] {outcome.technical_details}"
