"""Failure classification for trigger calls.

Usage:
    failure = classify(exc)        # exc is any requests exception
    failure.error_kind             # ErrorKind.NOT_FOUND, ...

Responses are matched against an ordered rule list keyed on the HTTP status
and the ``error`` field of the JSON body. The first matching rule wins; a
response matching no rule is reported as ``unknown``. Exceptions without a
response are reported as ``connection_error`` when the server could not be
reached (including timeouts) and ``request_error`` otherwise.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

import requests

from jenkins_trigger.models import ErrorKind, Failure

UNKNOWN_ERROR_TEXT = "Unknown error"
NO_RESPONSE_DETAILS = "No response received from server"


def _never(status: int, text: str) -> bool:
    return False


@dataclass(frozen=True)
class Rule:
    kind: ErrorKind
    user_message: str
    suggested_action: str
    matches: Callable[[int, str], bool] = _never


# Order matters: a 400 is only claimed by the text-based rules.
RESPONSE_RULES: tuple[Rule, ...] = (
    Rule(
        ErrorKind.MISSING_HEADERS,
        "Required headers are missing or invalid",
        "Please provide all required headers: X-Jenkins-Url, X-Jenkins-Token, X-Jenkins-Job",
        lambda status, text: status == 400 and "Missing or invalid headers" in text,
    ),
    Rule(
        ErrorKind.AUTHENTICATION_FAILED,
        "Jenkins authentication failed",
        "Please verify your Jenkins credentials and permissions",
        lambda status, text: status == 400 and "authentication failed" in text,
    ),
    Rule(
        ErrorKind.PERMISSION_DENIED,
        "Permission denied",
        "Check your Jenkins user permissions and CSRF settings",
        lambda status, text: status == 403,
    ),
    Rule(
        ErrorKind.NOT_FOUND,
        "Jenkins job not found",
        "Please verify the Jenkins job name is correct",
        lambda status, text: status == 404,
    ),
    Rule(
        ErrorKind.SERVER_ERROR,
        "Server error occurred",
        "Please try again later or contact support",
        lambda status, text: status >= 500,
    ),
)

UNMATCHED_RESPONSE = Rule(
    ErrorKind.UNKNOWN,
    "Failed to trigger Jenkins job",
    "Please try again or contact support",
)

CONNECTION_FAILURE = Rule(
    ErrorKind.CONNECTION_ERROR,
    "Cannot connect to server",
    "Please check your network connection and server availability",
)

REQUEST_FAILURE = Rule(
    ErrorKind.REQUEST_ERROR,
    "Request failed",
    "Please check your request parameters",
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def classify(error: Exception) -> Failure:
    """Turn a failed trigger call into a Failure value."""
    response = getattr(error, "response", None)

    if response is not None:
        status = response.status_code
        text = error_text(response)
        rule = match_response(status, text)
        return _failure(rule, f"HTTP {status}: {text}")

    if isinstance(error, (requests.exceptions.ConnectionError, requests.exceptions.Timeout)):
        return _failure(CONNECTION_FAILURE, NO_RESPONSE_DETAILS)

    return _failure(REQUEST_FAILURE, str(error) or type(error).__name__)


def match_response(status: int, text: str) -> Rule:
    """Return the first rule matching *status* and *text*."""
    for rule in RESPONSE_RULES:
        if rule.matches(status, text):
            return rule
    return UNMATCHED_RESPONSE


def error_text(response: requests.Response) -> str:
    """Extract the ``error`` field from a JSON error body.

    Falls back to ``"Unknown error"`` when the body is not JSON, is not an
    object, or carries no string ``error`` field.
    """
    try:
        body = response.json()
    except ValueError:
        return UNKNOWN_ERROR_TEXT

    if isinstance(body, dict):
        message = body.get("error")
        if isinstance(message, str) and message:
            return message
    return UNKNOWN_ERROR_TEXT


# ---------------------------------------------------------------------------
# Internal
# ---------------------------------------------------------------------------

def _failure(rule: Rule, technical_details: str) -> Failure:
    return Failure(
        error_kind=rule.kind,
        user_message=rule.user_message,
        technical_details=technical_details,
        suggested_action=rule.suggested_action,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
