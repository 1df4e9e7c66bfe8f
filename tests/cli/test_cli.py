# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for CLI commands."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from corsgate.cli.check import EXIT_DENIED
from corsgate.cli.main import cli
from corsgate.demo.application import CONFIG_DIR_ENV_VAR, create_demo_app

WILDCARD_WITH_CREDENTIALS = """\
corsgate:
  cors:
    policies:
      - path_pattern: /api/**
        allowed_origins: ["*"]
        allow_credentials: true
"""


class TestCLI:
    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "corsgate" in result.output
        for command in ("run", "check", "policies"):
            assert command in result.output


class TestPoliciesCommand:
    def test_default_policy_is_valid(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["policies", "--config-dir", str(tmp_path)])
        assert result.exit_code == 0, result.output
        assert "/api/**" in result.output
        assert "Configuration is valid." in result.output

    def test_invalid_configuration_exits_1(self, tmp_path: Path):
        (tmp_path / "corsgate.yaml").write_text(WILDCARD_WITH_CREDENTIALS)
        runner = CliRunner()
        result = runner.invoke(cli, ["policies", "--config-dir", str(tmp_path)])
        assert result.exit_code == 1
        assert "CORS_CONFIG_WILDCARD_CREDENTIALS" in result.output

    def test_disabled_cors_warns(self, tmp_path: Path):
        (tmp_path / "corsgate.yaml").write_text("corsgate:\n  cors:\n    enabled: false\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["policies", "--config-dir", str(tmp_path)])
        assert result.exit_code == 0
        assert "No CORS policies configured" in result.output


class TestCheckCommand:
    def test_allowed_simple_request(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["check", "--origin", "http://localhost:3000", "--path", "/api/banking/balance",
             "--config-dir", str(tmp_path)],
        )
        assert result.exit_code == 0, result.output
        assert "allowed" in result.output.lower()
        assert "Access-Control-Allow-Origin" in result.output

    def test_allowed_preflight(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["check", "--origin", "http://localhost:3001", "--method", "OPTIONS",
             "--path", "/api/banking/transfer", "--request-method", "POST",
             "--request-headers", "Content-Type", "--config-dir", str(tmp_path)],
        )
        assert result.exit_code == 0, result.output
        assert "Access-Control-Max-Age" in result.output

    def test_denied_origin_exits_2(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["check", "--origin", "http://malicious-site.com", "--path", "/api/banking/balance",
             "--config-dir", str(tmp_path)],
        )
        assert result.exit_code == EXIT_DENIED
        assert "No CORS headers." in result.output

    def test_same_origin_is_not_applicable(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["check", "--path", "/api/data", "--config-dir", str(tmp_path)])
        assert result.exit_code == 0
        assert "No CORS headers." in result.output

    def test_invalid_configuration_exits_1(self, tmp_path: Path):
        (tmp_path / "corsgate.yaml").write_text(WILDCARD_WITH_CREDENTIALS)
        runner = CliRunner()
        result = runner.invoke(cli, ["check", "--origin", "http://a.com", "--config-dir", str(tmp_path)])
        assert result.exit_code == 1


class TestRunCommand:
    def test_run_serves_built_app(self, tmp_path: Path):
        runner = CliRunner()
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(cli, ["run", "--port", "9000", "--config-dir", str(tmp_path)])
        assert result.exit_code == 0, result.output
        _, kwargs = mock_run.call_args
        assert kwargs["port"] == 9000
        assert kwargs["host"] == "0.0.0.0"

    def test_run_with_reload_uses_factory(self, tmp_path: Path, monkeypatch):
        (tmp_path / "corsgate.yaml").write_text("corsgate:\n  cors:\n    enabled: false\n")
        monkeypatch.setenv(CONFIG_DIR_ENV_VAR, "unset")
        runner = CliRunner()
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(cli, ["run", "--reload", "--config-dir", str(tmp_path)])
        assert result.exit_code == 0, result.output
        args, kwargs = mock_run.call_args
        assert args[0] == "corsgate.demo.application:create_demo_app"
        assert kwargs["factory"] is True

        # the reloaded worker builds its app from the same directory
        assert os.environ[CONFIG_DIR_ENV_VAR] == str(tmp_path.resolve())
        assert len(create_demo_app().state.corsgate_policies) == 0

    def test_run_refuses_invalid_configuration(self, tmp_path: Path):
        (tmp_path / "corsgate.yaml").write_text(WILDCARD_WITH_CREDENTIALS)
        runner = CliRunner()
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(cli, ["run", "--config-dir", str(tmp_path)])
        assert result.exit_code == 1
        mock_run.assert_not_called()
