"""Configuration loading and validation.

Usage:
    config  = load("trigger-config.yaml")       # raises ConfigError on bad config
    job     = config.resolve_job("nightly")     # returns "my-folder/nightly-build"
    client  = TriggerClient(config.client_config())
    request = config.build_request("nightly")
    generate_template("trigger-config.yaml")    # writes example file to disk
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from jenkins_trigger.client import DEFAULT_TIMEOUT, ClientConfig
from jenkins_trigger.models import DEFAULT_JENKINS_USER, TriggerRequest

DEFAULT_CONFIG_PATH = "trigger-config.yaml"


class ConfigError(Exception):
    """Raised when the configuration is missing or invalid."""


# ---------------------------------------------------------------------------
# Config dataclass
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Config:
    server_url: str
    jenkins_url: str
    jenkins_token: str
    jenkins_user: str = DEFAULT_JENKINS_USER
    timeout: float = DEFAULT_TIMEOUT
    jobs: dict[str, str] = field(default_factory=dict)

    def resolve_job(self, name: str) -> str:
        """Return the Jenkins job name for a given alias.

        Names that are not configured aliases are used as job names directly.
        """
        name = name.strip()
        if not name:
            raise ConfigError("Job name must not be empty.")
        return self.jobs.get(name, name)

    def client_config(self) -> ClientConfig:
        return ClientConfig(base_url=self.server_url, timeout=self.timeout)

    def build_request(self, job: str, user: str | None = None) -> TriggerRequest:
        return TriggerRequest(
            jenkins_url=self.jenkins_url,
            jenkins_token=self.jenkins_token,
            jenkins_job=self.resolve_job(job),
            jenkins_user=user or self.jenkins_user,
        )


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

def load(config_path: str = DEFAULT_CONFIG_PATH) -> Config:
    """Load and validate configuration from a YAML file.

    Environment variables TRIGGER_SERVER_URL, JENKINS_URL, JENKINS_TOKEN and
    JENKINS_USER override file values.

    Raises:
        ConfigError: if the file is missing, malformed, or required fields
                     are absent.
    """
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(
            f"Config file not found: '{config_path}'\n"
            "Run `python -m jenkins_trigger init` to generate a template."
        )

    try:
        with path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse '{config_path}': {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"'{config_path}' must be a YAML mapping at the top level.")

    server  = _section(raw, "server")
    jenkins = _section(raw, "jenkins")
    jobs = raw.get("jobs") or {}
    if not isinstance(jobs, dict):
        raise ConfigError("'jobs' must be a mapping of alias to Jenkins job name.")

    server_url = os.environ.get("TRIGGER_SERVER_URL") or server.get("url", "")
    jenkins_url = os.environ.get("JENKINS_URL") or jenkins.get("url", "")
    token = os.environ.get("JENKINS_TOKEN") or jenkins.get("token", "")
    user = os.environ.get("JENKINS_USER") or jenkins.get("user") or DEFAULT_JENKINS_USER

    config = Config(
        server_url=str(server_url).strip(),
        jenkins_url=str(jenkins_url).strip(),
        jenkins_token=str(token).strip(),
        jenkins_user=str(user).strip(),
        timeout=_parse_timeout(server.get("timeout", DEFAULT_TIMEOUT)),
        jobs=_parse_jobs(jobs),
    )
    _validate(config)
    return config


def _section(raw: dict, name: str) -> dict:
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be a mapping, got {section!r}")
    return section


def _parse_jobs(jobs: dict) -> dict[str, str]:
    parsed: dict[str, str] = {}
    for alias, job in jobs.items():
        if job is None or not str(job).strip():
            raise ConfigError(f"Job alias '{alias}' has no Jenkins job name.")
        parsed[str(alias)] = str(job).strip()
    return parsed


def _parse_timeout(value) -> float:
    # bool is an int subclass; "timeout: yes" is not a timeout
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"'server.timeout' must be a positive number of seconds, got {value!r}")
    return float(value)


def _validate(config: Config) -> None:
    """Raise ConfigError if required fields are missing."""
    errors: list[str] = []

    if not config.server_url:
        errors.append(
            "  - 'server.url' is missing (or set the TRIGGER_SERVER_URL environment variable)"
        )
    if not config.jenkins_url:
        errors.append(
            "  - 'jenkins.url' is missing (or set the JENKINS_URL environment variable)"
        )
    if not config.jenkins_token:
        errors.append(
            "  - 'jenkins.token' is missing (or set the JENKINS_TOKEN environment variable)"
        )

    if errors:
        raise ConfigError("Invalid configuration:\n" + "\n".join(errors))


# ---------------------------------------------------------------------------
# Template generator (used by `init` command)
# ---------------------------------------------------------------------------

TEMPLATE = """\
server:
  url: "http://localhost:8080"    # Reporting service exposing /api/v1/jenkins/trigger
  timeout: 10                     # Seconds

jenkins:
  url: "https://jenkins.example.com"
  token: "xxxxxxxxxxxx"           # Generate at: <your-jenkins-url>/me/configure
  user: "sonar"

jobs:
  # Short alias: Jenkins job name
  nightly: "my-folder/nightly-build"
"""


def generate_template(output_path: str = DEFAULT_CONFIG_PATH) -> None:
    """Write a template trigger-config.yaml to *output_path*.

    Raises:
        ConfigError: if the file already exists (to avoid overwriting secrets).
    """
    path = Path(output_path)
    if path.exists():
        raise ConfigError(
            f"'{output_path}' already exists. Remove it first or choose a different path."
        )
    path.write_text(TEMPLATE, encoding="utf-8")
