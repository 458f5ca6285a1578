"""Tests for jenkins_trigger/cli.py"""

import json
import textwrap

import pytest
import requests
from click.testing import CliRunner

from jenkins_trigger.cli import cli

TRIGGER_URL = "http://trigger.example.com/api/v1/jenkins/trigger"

CONFIG_YAML = """\
    server:
      url: "http://trigger.example.com"
    jenkins:
      url: "https://jenkins.example.com"
      token: "tok_abc123"
    jobs:
      nightly: "folder/nightly-build"
    """


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for name in ("TRIGGER_SERVER_URL", "JENKINS_URL", "JENKINS_TOKEN", "JENKINS_USER"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_path(tmp_path) -> str:
    p = tmp_path / "trigger-config.yaml"
    p.write_text(textwrap.dedent(CONFIG_YAML), encoding="utf-8")
    return str(p)


def _run(*args: str):
    return CliRunner().invoke(cli, list(args))


# ---------------------------------------------------------------------------
# trigger
# ---------------------------------------------------------------------------

def test_trigger_success(config_path, requests_mock):
    adapter = requests_mock.post(TRIGGER_URL, json={"success": True})
    result = _run("--config", config_path, "trigger", "nightly")

    assert result.exit_code == 0
    assert "Jenkins job triggered successfully" in result.stdout
    assert adapter.last_request.headers["X-Jenkins-Job"] == "folder/nightly-build"


def test_trigger_user_option(config_path, requests_mock):
    adapter = requests_mock.post(TRIGGER_URL, json={})
    _run("--config", config_path, "trigger", "nightly", "--user", "bot")
    assert adapter.last_request.headers["X-Jenkins-User"] == "bot"


def test_trigger_failure_prints_user_message_and_exits_1(config_path, requests_mock):
    requests_mock.post(TRIGGER_URL, status_code=404, json={"error": "no such job"})
    result = _run("--config", config_path, "trigger", "missing-job")

    assert result.exit_code == 1
    assert "Jenkins job not found. Please verify the Jenkins job name is correct" in result.stderr
    assert "[not_found]" not in result.stderr


def test_trigger_failure_verbose_prints_technical_details(config_path, requests_mock):
    requests_mock.post(TRIGGER_URL, exc=requests.exceptions.ConnectTimeout)
    result = _run("--config", config_path, "--verbose", "trigger", "nightly")

    assert result.exit_code == 1
    assert "[verbose] Triggering 'folder/nightly-build'" in result.stderr
    assert "[connection_error] No response received from server" in result.stderr


def test_trigger_json_output(config_path, requests_mock):
    requests_mock.post(TRIGGER_URL, status_code=403, json={"error": "Forbidden"})
    result = _run("--config", config_path, "--json", "trigger", "nightly")

    assert result.exit_code == 1
    data = json.loads(result.stdout)
    assert data["success"] is False
    assert data["error_kind"] == "permission_denied"


def test_trigger_missing_config(tmp_path):
    result = _run("--config", str(tmp_path / "nope.yaml"), "trigger", "nightly")
    assert result.exit_code == 1
    assert "Configuration error" in result.stderr


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------

def test_init_writes_template(tmp_path):
    out = tmp_path / "trigger-config.yaml"
    result = _run("init", "--output", str(out))
    assert result.exit_code == 0
    assert out.exists()


def test_init_refuses_to_overwrite(tmp_path):
    out = tmp_path / "trigger-config.yaml"
    out.write_text("existing")
    result = _run("init", "--output", str(out))
    assert result.exit_code == 1
    assert "already exists" in result.stderr
