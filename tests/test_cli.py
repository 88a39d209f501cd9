"""
Tests for the create-chico-app command line.
"""

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from chico.main import cli


@pytest.fixture(autouse=True)
def workspace(tmp_path: Path, monkeypatch) -> Path:
    """Run each command in an empty directory with no user config."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for var in ("CHICO_CONFIG", "CHICO_TEMPLATE", "CHICO_BRANCH", "CHICO_PROBE_TIMEOUT",
                "CHICO_LOG_LEVEL", "CHICO_LOG_FILE", "CHICO_LOG_FILE_LEVEL"):
        monkeypatch.delenv(var, raising=False)

    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield work
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def invoke(registry):
    """Invoke the CLI against the mock registry."""

    def _invoke(args, input=None):
        with patch("chico.main.default_registry", return_value=registry):
            return CliRunner().invoke(cli, args, input=input)

    return _invoke


class TestCLIGlobal:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Next.js" in result.output
        assert "--use-pnpm" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output


class TestNonInteractive:
    def test_yes_creates_and_installs(self, invoke, host, shell_mock, workspace):
        host({"pnpm", "npm"})
        result = invoke(["my-app", "--yes"])
        assert result.exit_code == 0, result.output
        assert "Welcome to Create Chico App" in result.output
        assert "Project created successfully" in result.output
        assert "To get started:" in result.output
        assert "cd my-app" in result.output
        assert "pnpm dev" in result.output

        manifest = json.loads((workspace / "my-app" / "package.json").read_text())
        assert manifest["name"] == "my-app"
        install = shell_mock.call_log[-1]
        assert install.action.params["command"] == "pnpm install"
        assert install.working_dir == str(workspace / "my-app")

    def test_skip_install_prints_every_step(self, invoke, host, shell_mock):
        host({"yarn"})
        result = invoke(["my-app", "--yes", "--skip-install"])
        assert result.exit_code == 0, result.output
        assert "install" not in shell_mock.called_ids()
        lines = [line.strip() for line in result.output.splitlines()]
        assert lines[-3:] == ["cd my-app", "yarn", "yarn dev"]

    def test_quiet(self, invoke):
        result = invoke(["my-app", "--yes", "--quiet"])
        assert result.exit_code == 0, result.output
        assert "Welcome" not in result.output

    def test_name_required(self, invoke, template_adapter):
        result = invoke(["--yes"])
        assert result.exit_code == 1
        assert "A project name is required" in result.output
        assert template_adapter.calls == []

    def test_invalid_name(self, invoke, template_adapter):
        result = invoke(["../evil", "--yes"])
        assert result.exit_code == 1
        assert "Invalid project name" in result.output
        assert template_adapter.calls == []

    def test_branch_and_template_options(self, invoke, template_adapter):
        result = invoke(["my-app", "-y", "--skip-install", "-b", "master", "-t", "acme/starter"])
        assert result.exit_code == 0, result.output
        params = template_adapter.calls[0].action.params
        assert params["slug"] == "acme/starter"
        assert params["ref"] == "master"

    def test_config_file(self, invoke, template_adapter, tmp_path: Path):
        config = tmp_path / "chico.yml"
        config.write_text("branch: with-auth\n")
        result = invoke(["my-app", "-y", "--skip-install", "--config", str(config)])
        assert result.exit_code == 0, result.output
        assert template_adapter.calls[0].action.params["ref"] == "with-auth"

    def test_bad_config_file(self, invoke, template_adapter, tmp_path: Path):
        config = tmp_path / "chico.yml"
        config.write_text("unknown_key: 1\n")
        result = invoke(["my-app", "-y", "--config", str(config)])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
        assert template_adapter.calls == []

    def test_fetch_failure(self, invoke, template_adapter):
        template_adapter.error = "Download failed: HTTP 404"
        result = invoke(["my-app", "--yes"])
        assert result.exit_code == 1
        assert "Could not fetch template" in result.output


class TestExplicitFlag:
    def test_unavailable_flag(self, invoke, host, shell_mock, template_adapter):
        host({"npm", "yarn"})
        result = invoke(["my-app", "--use-bun"])
        assert result.exit_code == 1
        assert "bun is not installed. To install it:" in result.output
        assert "curl -fsSL https://bun.sh/install | bash" in result.output
        assert "What is your project name?" not in result.output
        assert template_adapter.calls == []
        assert shell_mock.called_ids() == ["probe:bun"]

    def test_available_flag(self, invoke, host, shell_mock):
        host({"npm", "yarn"})
        result = invoke(["my-app", "--use-yarn", "--yes"])
        assert result.exit_code == 0, result.output
        assert shell_mock.call_log[-1].action.params["command"] == "yarn"


class TestInteractive:
    def test_prompts(self, invoke, host, shell_mock, template_adapter, workspace):
        host({"pnpm", "npm"})
        # name, branch (default), manager (default), install (default yes)
        result = invoke([], input="my-app\n\n\n\n")
        assert result.exit_code == 0, result.output
        assert "What is your project name?" in result.output
        assert "bun (recommended) (not installed)" in result.output
        assert template_adapter.calls[0].action.params["ref"] == "blank"
        assert shell_mock.call_log[-1].action.params["command"] == "pnpm install"
        assert (workspace / "my-app" / "package.json").is_file()

    def test_pick_by_number(self, invoke, host, shell_mock):
        host({"bun", "yarn", "npm"})
        result = invoke(["my-app"], input="master\n3\ny\n")
        assert result.exit_code == 0, result.output
        assert shell_mock.call_log[-1].action.params["command"] == "yarn"

    def test_pick_disabled_manager(self, invoke, host, template_adapter):
        host({"npm"})
        result = invoke(["my-app"], input="\npnpm\n")
        assert result.exit_code == 1
        assert "pnpm is not installed. To install it:" in result.output
        assert "npm install -g pnpm" in result.output
        assert template_adapter.calls == []

    def test_reprompts_invalid_name(self, invoke):
        result = invoke([], input="bad name\nmy-app\n\n\nn\n")
        assert result.exit_code == 0, result.output
        assert "Invalid project name" in result.output
        assert "cd my-app" in result.output

    def test_decline_install(self, invoke, shell_mock):
        result = invoke(["my-app"], input="\n\nn\n")
        assert result.exit_code == 0, result.output
        assert "install" not in shell_mock.called_ids()
        assert "bun install" in result.output


class TestInstallAndDev:
    def test_install_failure_prints_manual_steps(self, invoke, host, shell_mock, workspace):
        host({"npm"})
        shell_mock.set_failure("install", error="", return_code=1)
        result = invoke(["my-app", "--yes"])
        assert result.exit_code == 1
        assert "Project created successfully" in result.output
        assert "Dependency installation failed" in result.output
        assert "Finish the setup by hand:" in result.output
        lines = [line.strip() for line in result.output.splitlines()]
        assert lines[-3:] == ["cd my-app", "npm install", "npm run dev"]
        assert (workspace / "my-app" / "package.json").is_file()

    def test_dev_server(self, invoke, shell_mock):
        result = invoke(["my-app", "--yes", "--dev"])
        assert result.exit_code == 0, result.output
        assert shell_mock.called_ids()[-2:] == ["install", "dev"]
        assert "To get started:" not in result.output

    def test_failing_dev_server(self, invoke, host, shell_mock):
        host({"npm"})
        shell_mock.set_failure("dev", error="", return_code=127)
        result = invoke(["my-app", "--yes", "--dev"])
        assert result.exit_code == 1
        assert "Project created successfully" in result.output
        assert "Development server failed" in result.output
        lines = [line.strip() for line in result.output.splitlines()]
        assert lines[-2:] == ["cd my-app", "npm run dev"]
