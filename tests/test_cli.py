"""Tests for the rollup_release command line entry point."""

import json
from unittest.mock import patch

import pytest

import rollup_release
from conftest import make_response

ARGS = [
    "--organization", "org",
    "--project", "proj",
    "--iteration-path", "proj\\R1",
    "--release-id", "9000",
    "--target-field", "Custom.Total",
    "--config", "/nonexistent-but-unused.yaml",
]


@pytest.fixture(autouse=True)
def no_dotenv():
    with patch("rollup_release.load_dotenv"), \
         patch("rollup_release.load_rollup_config", return_value={}):
        yield


def handler(method, url, headers=None, json=None):
    if "/wiql?" in url:
        return make_response(200, {"workItems": [{"id": 1}]})
    if "/workitemsbatch?" in url:
        return make_response(200, {"value": [{"id": 1, "fields": {"Microsoft.VSTS.Scheduling.Effort": 2}}]})
    if method == "GET":
        return make_response(200, {"id": 9000, "fields": {}})
    return make_response(200, {"id": 9000, "fields": {"Custom.Total": 2.0}})


def test_success_prints_result(clean_env, capsys):
    clean_env.setenv("AZURE_DEVOPS_PAT", "pat")
    with patch("rollup.workitem.rest.requests.request", side_effect=handler):
        rc = rollup_release.main(ARGS)

    assert rc == 0
    output = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert output["total"] == 2.0
    assert output["upsert"]["operation"] == "add"


def test_missing_credentials_exit_before_network(clean_env, capsys):
    with patch("rollup.workitem.rest.requests.request") as mock_request:
        rc = rollup_release.main(ARGS)

    assert rc == 2
    mock_request.assert_not_called()
    assert "SYSTEM_ACCESSTOKEN" in capsys.readouterr().err


def test_missing_required_setting(clean_env, capsys):
    clean_env.setenv("AZURE_DEVOPS_PAT", "pat")
    rc = rollup_release.main(["--organization", "org"])

    assert rc == 2
    assert "Missing required settings" in capsys.readouterr().err


def test_remote_failure_reports_diagnostics(clean_env, capsys):
    clean_env.setenv("SYSTEM_ACCESSTOKEN", "tok")
    with patch(
        "rollup.workitem.rest.requests.request",
        return_value=make_response(401, text="unauthorized"),
    ):
        rc = rollup_release.main(ARGS)

    err = capsys.readouterr().err
    assert rc == 1
    assert "POST" in err
    assert "/_apis/wit/wiql" in err
    assert "401" in err
    assert "unauthorized" in err
