"""
Tests for the upload command and UploadService
"""

from unittest.mock import Mock, patch

import pytest
from typer.testing import CliRunner

from fossy_upload.cli.app import app
from fossy_upload.core.uploader import UploadService
from fossy_upload.upload.models import FileTarget, VcsTarget, WorkflowResult

runner = CliRunner()


@pytest.fixture
def artifact(tmp_path):
    path = tmp_path / "foobar-3.zip"
    path.write_bytes(b"PK\x03\x04 fake archive")
    return path


class TestUploadService:
    """Argument validation and exit codes"""

    def setup_method(self):
        self.service = UploadService()

    @pytest.mark.parametrize("site_url,file,git_url,expected", [
        (None, "a.zip", None, "Missing service URL"),
        ("https://fossy.test", None, None, "Missing upload source"),
        ("https://fossy.test", "a.zip", "https://git.example.com/r.git", "only one"),
    ])
    def test_validate_arguments_errors(self, site_url, file, git_url, expected):
        assert expected in self.service.validate_arguments(site_url, file, git_url)

    def test_validate_arguments_ok(self):
        assert self.service.validate_arguments("https://fossy.test", "a.zip", None) is None

    def test_usage_error_returns_one(self):
        assert self.service.execute_upload(site_url="https://fossy.test") == 1

    @patch("fossy_upload.core.uploader.UploadOrchestrator")
    def test_successful_workflow_returns_zero(self, mock_orchestrator_cls, artifact):
        mock_orchestrator = Mock()
        mock_orchestrator.execute_upload_workflow.return_value = WorkflowResult(success=True)
        mock_orchestrator_cls.return_value = mock_orchestrator

        exit_code = self.service.execute_upload(
            site_url="https://fossy.test/repo",
            token="ready-token",
            file=str(artifact),
            folder="Sandbox/001",
            group_id=3,
        )

        assert exit_code == 0
        fossy_config = mock_orchestrator_cls.call_args.args[0]
        assert fossy_config.rest_url == "https://fossy.test/repo/api/v1"

        request = mock_orchestrator.execute_upload_workflow.call_args.args[0]
        assert request.credentials.token == "ready-token"
        assert request.target == FileTarget(path=str(artifact))
        assert request.folder_path == "Sandbox/001"
        assert request.group_id == 3
        assert request.reuse is False

    @patch("fossy_upload.core.uploader.UploadOrchestrator")
    def test_failed_workflow_returns_one(self, mock_orchestrator_cls, artifact):
        mock_orchestrator_cls.return_value.execute_upload_workflow.return_value = WorkflowResult(
            success=False, failed_step="Folder", error="boom"
        )

        exit_code = self.service.execute_upload(
            site_url="https://fossy.test/repo", token="t", file=str(artifact)
        )

        assert exit_code == 1

    @patch("fossy_upload.core.uploader.UploadOrchestrator")
    def test_default_folder_comes_from_config(self, mock_orchestrator_cls, artifact):
        mock_orchestrator_cls.return_value.execute_upload_workflow.return_value = WorkflowResult(success=True)

        self.service.execute_upload(site_url="https://fossy.test", token="t", file=str(artifact))

        request = mock_orchestrator_cls.return_value.execute_upload_workflow.call_args.args[0]
        assert request.folder_path == "Software Repository"

    @patch("fossy_upload.core.uploader.UploadOrchestrator")
    def test_git_url_uses_environment_credentials(self, mock_orchestrator_cls, monkeypatch):
        monkeypatch.setenv("GIT_USERNAME", "bot")
        monkeypatch.setenv("GIT_PASSWORD", "pw")
        mock_orchestrator_cls.return_value.execute_upload_workflow.return_value = WorkflowResult(success=True)

        self.service.execute_upload(
            site_url="https://fossy.test", token="t", git_url="https://git.example.com/team/project.git"
        )

        request = mock_orchestrator_cls.return_value.execute_upload_workflow.call_args.args[0]
        assert request.target == VcsTarget(
            url="https://git.example.com/team/project.git", username="bot", password="pw"
        )

    def test_missing_config_file_returns_one(self, artifact, tmp_path):
        exit_code = self.service.execute_upload(
            site_url="https://fossy.test",
            token="t",
            file=str(artifact),
            config_path=str(tmp_path / "missing.yaml"),
        )

        assert exit_code == 1


class TestUploadCommand:
    """Typer command wiring"""

    @patch("fossy_upload.cli.commands.upload.UploadService")
    def test_options_are_forwarded(self, mock_service_cls):
        mock_service_cls.return_value.execute_upload.return_value = 0

        result = runner.invoke(app, [
            "upload",
            "-s", "https://fossy.test/repo",
            "-n", "fossy",
            "-p", "secret",
            "-i", "foobar-3.zip",
            "-f", "Sandbox/001",
            "-g", "3",
            "-r",
            "-d",
        ])

        assert result.exit_code == 0
        kwargs = mock_service_cls.return_value.execute_upload.call_args.kwargs
        assert kwargs["site_url"] == "https://fossy.test/repo"
        assert kwargs["username"] == "fossy"
        assert kwargs["password"] == "secret"
        assert kwargs["file"] == "foobar-3.zip"
        assert kwargs["folder"] == "Sandbox/001"
        assert kwargs["group_id"] == 3
        assert kwargs["reuse"] is True
        assert kwargs["debug"] is True
        assert kwargs["extra_debug"] is False

    @patch("fossy_upload.cli.commands.upload.UploadService")
    def test_non_zero_exit_code_is_propagated(self, mock_service_cls):
        mock_service_cls.return_value.execute_upload.return_value = 1

        result = runner.invoke(app, ["upload", "-s", "https://fossy.test", "-t", "tok", "-u", "https://git.example.com/r"])

        assert result.exit_code == 1

    def test_missing_source_exits_non_zero(self):
        result = runner.invoke(app, ["upload", "-s", "https://fossy.test", "-t", "tok"])

        assert result.exit_code == 1
        assert "Missing upload source" in result.output

    def test_help_lists_upload_options(self):
        result = runner.invoke(app, ["upload", "--help"])

        assert result.exit_code == 0
        assert "--git-url" in result.output
