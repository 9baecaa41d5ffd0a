"""
Upload Orchestrator

Runs the workflow one step at a time: authentication, folder resolution,
upload, unpack job monitoring, optional re-use lookup and scan trigger.
Every step depends on the previous one, so the first error ends the run.
"""

import logging
import time
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from fossy_upload.utils.exceptions import RestAPIError

from .api_client import FossologyRestClient
from .exceptions import UploadError
from .folder_resolver import FolderResolver
from .job_monitor import JobMonitor
from .models import ApiSession, FossyConfig, UploadRequest, WorkflowResult
from .reuse_resolver import ReuseResolver
from .scan_trigger import ScanTrigger
from .token_provider import TokenProvider
from .upload_dispatcher import UploadDispatcher

STEP_AUTH = "Authentication"
STEP_FOLDER = "Folder"
STEP_UPLOAD = "Upload"
STEP_UNPACK = "Unpack job"
STEP_SCAN = "Trigger scan"


class UploadOrchestrator:
    """Coordinates the complete upload workflow"""

    def __init__(self, config: FossyConfig, console: Console = None):
        self.config = config
        self.console = console or Console()
        self.logger = logging.getLogger(self.__class__.__name__)

    def execute_upload_workflow(self, request: UploadRequest) -> WorkflowResult:
        """Run every step; the result tells which step failed, if any"""
        start_time = time.time()
        result = WorkflowResult(success=False)
        step: Optional[str] = None

        self._display_run_summary(request)

        api_session = ApiSession(base_url=self.config.rest_url, group_id=request.group_id)
        try:
            with FossologyRestClient(
                api_session,
                timeout=self.config.timeout,
                verify_ssl=self.config.verify_ssl,
                dump_replies=self.config.dump_replies,
            ) as client:
                step = STEP_AUTH
                self._log_part(step)
                token = TokenProvider(client, self.config.token).obtain(request.credentials)
                client.authorize(token)
                result.steps_completed.append(step)

                step = STEP_FOLDER
                self._log_part(step)
                self.console.print(f"Folder path: '{request.folder_path}'", markup=False)
                folder_id = FolderResolver(client, self.config.root_folder_id).resolve(request.folder_path)
                result.folder_id = folder_id
                self.console.print(f"Folder ID: {folder_id}")
                result.steps_completed.append(step)

                step = STEP_UPLOAD
                self._log_part(step)
                dispatcher = UploadDispatcher(client, self.config.upload)
                upload = dispatcher.upload(request.target, folder_id)
                result.upload = upload
                self.console.print(f"Upload ID : {upload.id}")
                result.steps_completed.append(step)

                step = STEP_UNPACK
                self.console.print("Unpack job: started")
                monitor = JobMonitor(client, self.config.poll_interval, on_progress=self._show_progress)
                try:
                    job = monitor.wait(upload.id)
                finally:
                    if monitor.polls > 1:
                        self.console.print()
                result.job = job
                self._display_job(job)
                result.steps_completed.append(step)

                step = STEP_SCAN
                self._log_part(step)
                reuse_baseline = None
                if request.reuse:
                    reuse_baseline = ReuseResolver(dispatcher).find_previous(upload.name, job.group_id)
                    result.reuse_baseline = reuse_baseline
                    self.console.print(f"REUSE: Previous Upload ID: {reuse_baseline.upload_id}")
                else:
                    self.console.print("REUSE: Disabled")

                result.link = self.config.build_link(upload.id, folder_id, upload.item_id)
                ScanTrigger(client, self.config.scan_options, self.config.reuse_options).trigger(
                    folder_id, upload.id, reuse_baseline
                )
                result.steps_completed.append(step)

            result.success = True
            self._display_success_message(result)

        except (RestAPIError, UploadError) as e:
            result.failed_step = getattr(e, "step", None) or step
            result.error = str(e)
            self.logger.debug("Step '%s' failed", result.failed_step, exc_info=True)
            self.console.print()
            self.console.print(f"Fatal: {result.failed_step}: {e}", style="bold red", markup=False)

        result.total_time_seconds = time.time() - start_time
        return result

    def _log_part(self, title: str):
        self.console.rule(f"[bold]{title}")

    def _show_progress(self, mark: str):
        if mark:
            self.console.print(mark, end="")

    def _display_run_summary(self, request: UploadRequest):
        credentials = request.credentials
        token = credentials.token or ""
        lines = [
            f"Host Target: {self.config.rest_url}",
            f"Username   : {credentials.username or ''}",
            f"Group ID   : {'' if request.group_id is None else request.group_id}",
            f"Pwd size   : {len(credentials.password or '')}",
            f"Token      : {token[:16]}...",
            f"Folder     : {request.folder_path}",
            f"Upload Name: {request.target.name}",
            f"Reuse      : {request.reuse}",
        ]
        self.console.print("\n".join(lines), markup=False)

    def _display_job(self, job):
        self.console.print(f"Unpack job: terminated with status '{job.status.value}'")
        self.console.print(f"- Job ID   : {job.id}")
        self.console.print(f"- Group ID : {job.group_id}")
        self.console.print(f"- Job ETA  : {job.eta}")

    def _display_success_message(self, result: WorkflowResult):
        message_text = Text()
        message_text.append("Scan triggered successfully!\n\n", style="bold green")
        message_text.append(f"Upload ID: {result.upload.id}\n", style="green")
        message_text.append(f"Folder ID: {result.folder_id}\n\n", style="green")
        message_text.append("Fossology Link: ", style="blue")
        message_text.append(result.link, style="bold blue underline")

        panel = Panel(
            message_text,
            title="Fossology Upload",
            border_style="green",
            padding=(1, 2)
        )

        self.console.print(panel)
