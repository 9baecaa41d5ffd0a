"""
Upload service for fossy-upload.

Validates CLI input, loads configuration and runs the upload workflow,
translating its result into a process exit code.
"""
import logging
from typing import Optional

from fossy_upload.core.config_manager import ConfigManager
from fossy_upload.rich_utils.ui_helpers import get_console
from fossy_upload.upload.environment_detector import EnvironmentDetector
from fossy_upload.upload.models import Credentials, FileTarget, UploadRequest
from fossy_upload.upload.upload_orchestrator import UploadOrchestrator

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def configure_logging(debug: bool = False, extra_debug: bool = False) -> None:
    """Root logger at WARNING, or DEBUG when any debug flag is set."""
    level = logging.DEBUG if (debug or extra_debug) else logging.WARNING
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()],
        force=True,
    )


class UploadService:
    """Service for uploading an artifact and triggering its scan."""

    def __init__(self):
        self.config_manager = ConfigManager()
        self.environment = EnvironmentDetector()
        self.console = get_console()
        self.logger = logging.getLogger(self.__class__.__name__)

    def validate_arguments(
        self,
        site_url: Optional[str],
        file: Optional[str],
        git_url: Optional[str],
    ) -> Optional[str]:
        """Return a usage error message, or None when the arguments are usable."""
        if not site_url:
            return "Missing service URL (--site-url)"
        if not file and not git_url:
            return "Missing upload source: use --file or --git-url"
        if file and git_url:
            return "Use only one of --file or --git-url"
        return None

    def execute_upload(
        self,
        site_url: Optional[str] = None,
        rest_url: Optional[str] = None,
        token: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        file: Optional[str] = None,
        git_url: Optional[str] = None,
        folder: Optional[str] = None,
        group_id: Optional[int] = None,
        reuse: bool = False,
        debug: bool = False,
        extra_debug: bool = False,
        insecure: bool = False,
        config_path: Optional[str] = None,
    ) -> int:
        """Execute upload workflow and return exit code."""
        configure_logging(debug, extra_debug)

        usage_error = self.validate_arguments(site_url, file, git_url)
        if usage_error:
            self.console.print(f"❌ {usage_error}", style="bold red")
            self.console.print("   Run 'fossy-upload upload --help' for usage", style="dim")
            return 1

        try:
            config = self.config_manager.discover_and_load_config(config_path)
            fossy_config = self.config_manager.build_fossy_config(
                config,
                site_url=site_url,
                rest_url=rest_url,
                insecure=insecure,
                extra_debug=extra_debug,
            )
            self.logger.debug("Environment: %s", self.environment.get_environment_summary())

            if file:
                target = FileTarget(path=file)
            else:
                target = self.environment.build_vcs_target(git_url)

            request = UploadRequest(
                credentials=Credentials(token=token, username=username, password=password),
                target=target,
                folder_path=folder or config.get("folders", {}).get("default_path", "Software Repository"),
                group_id=group_id,
                reuse=reuse,
            )

            orchestrator = UploadOrchestrator(fossy_config, self.console)
            result = orchestrator.execute_upload_workflow(request)

            if result.success:
                self.console.print("✅ Upload completed and scan triggered", style="bold green")
                return 0
            return 1

        except Exception as e:
            self.logger.debug("Upload failed", exc_info=True)
            self.console.print(f"❌ Fatal: {str(e)}", style="bold red", markup=False)
            return 1
