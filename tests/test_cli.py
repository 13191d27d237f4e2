"""Tests for the command-line interface."""

import json
from unittest.mock import patch

from click.testing import CliRunner

from fbafileutil.__main__ import main


def test_status(clean_env, sample_config_file):
    result = CliRunner().invoke(
        main,
        ["--config", str(sample_config_file), "--log-level", "WARNING", "status"],
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["state"] == "OK"


def test_missing_configuration_fails(clean_env, temp_dir, test_utils):
    config_file = test_utils.create_test_config(
        temp_dir, {"FBAFileUtil": {"scratch": "/tmp"}}
    )
    result = CliRunner().invoke(main, ["--config", str(config_file), "status"])
    assert result.exit_code == 1
    assert "no workspace-url defined" in result.output


def test_model_to_sbml(clean_env, sample_config_file):
    with patch(
        "fbafileutil.__main__.FBAFileUtil.model_to_sbml_file",
        return_value={"path": "/scratch/abc/model1.xml"},
    ) as export:
        result = CliRunner().invoke(
            main,
            [
                "--config", str(sample_config_file),
                "--log-level", "WARNING",
                "model-to-sbml",
                "--model-name", "model1",
                "--workspace-name", "workspace1",
            ],
        )
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"path": "/scratch/abc/model1.xml"}
    export.assert_called_once_with(
        {"model_name": "model1", "workspace_name": "workspace1"}
    )


def test_shock_to_file(clean_env):
    with patch("fbafileutil.__main__.DataFileUtilClient") as client_class:
        client_class.return_value.shock_to_file.return_value = {
            "node_file_name": "reads.fq",
            "attributes": {},
        }
        result = CliRunner().invoke(
            main,
            [
                "shock-to-file", "node-1", "/tmp/out",
                "--url", "http://callback.example.org",
                "--token", "tok",
                "--check-interval-ms", "100",
            ],
        )
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["node_file_name"] == "reads.fq"
    client_class.assert_called_once_with(
        "http://callback.example.org", token="tok", async_job_check_time_ms=100
    )
    client_class.return_value.shock_to_file.assert_called_once_with(
        {"shock_id": "node-1", "file_path": "/tmp/out"}, timeout=None
    )


def test_file_to_shock_flags(clean_env, temp_dir):
    upload = f"{temp_dir}/reads.fq"
    with open(upload, "w") as f:
        f.write("@r1\nACGT\n+\n!!!!\n")
    with patch("fbafileutil.__main__.DataFileUtilClient") as client_class:
        client_class.return_value.file_to_shock.return_value = {
            "shock_id": "node-2",
            "handle": None,
        }
        result = CliRunner().invoke(
            main,
            [
                "file-to-shock", upload,
                "--gzip",
                "--url", "http://callback.example.org",
                "--timeout", "60",
            ],
        )
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["shock_id"] == "node-2"
    client_class.return_value.file_to_shock.assert_called_once_with(
        {"file_path": upload, "make_handle": 0, "gzip": 1}, timeout=60.0
    )
