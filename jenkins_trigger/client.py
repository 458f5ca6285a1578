"""Jenkins trigger API client.

Usage:
    client  = TriggerClient(ClientConfig(base_url="http://localhost:8080"))
    outcome = client.trigger(TriggerRequest(
        jenkins_url="https://jenkins.example.com",
        jenkins_token="xxxx",
        jenkins_job="my-job",
    ))
    if not outcome.success:
        print(format_user_message(outcome))
"""

from dataclasses import dataclass

import requests

from jenkins_trigger.classifier import classify
from jenkins_trigger.models import Success, TriggerOutcome, TriggerRequest

TRIGGER_PATH = "/api/v1/jenkins/trigger"
DEFAULT_TIMEOUT = 10
SUCCESS_MESSAGE = "Jenkins job triggered successfully"


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for the trigger service, fixed per client."""

    base_url: str
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @property
    def trigger_url(self) -> str:
        return f"{self.base_url}{TRIGGER_PATH}"


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class TriggerClient:
    """Thin wrapper around the trigger endpoint of the reporting service."""

    def __init__(self, config: ClientConfig, session: requests.Session | None = None) -> None:
        self.config = config
        self._session = session or requests.Session()

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def trigger(self, request: TriggerRequest) -> TriggerOutcome:
        """Start the Jenkins job described by *request*.

        Never raises for HTTP or transport failures: a non-2xx response, a
        timeout, an unreachable server or a header that cannot be encoded are
        all returned as a Failure.
        """
        try:
            response = self._session.post(
                self.config.trigger_url,
                headers=request.headers(),
                timeout=self.config.timeout,
            )
            # raise_for_status() lets 1xx/3xx through; only 2xx counts here
            if not 200 <= response.status_code < 300:
                raise requests.exceptions.HTTPError(
                    f"Unexpected response {response.status_code} from {self.config.trigger_url}",
                    response=response,
                )
        except requests.exceptions.RequestException as exc:
            return classify(exc)
        except (ValueError, TypeError) as exc:
            # http.client encodes header values as latin-1 after requests has validated them
            return classify(exc)

        return Success(message=SUCCESS_MESSAGE, data=_payload(response))


# ---------------------------------------------------------------------------
# Internal
# ---------------------------------------------------------------------------

def _payload(response: requests.Response):
    """Parsed JSON body, or the raw text when the body is not JSON."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
