"""
Unpack job monitoring.

Polls the jobs endpoint at a constant interval until the job of an upload is
Completed or Failed. There is no iteration limit; only a terminal status or
a failing REST call ends the loop.
"""

import logging
from typing import Callable, Optional

import backoff

from fossy_upload.utils.exceptions import ProtocolViolation

from .api_client import FossologyRestClient
from .exceptions import JobFailed
from .models import Job, JobStatus

STEP = "Unpack job"


class JobMonitor:
    """Blocks until the unpack job of an upload reaches a terminal state"""

    def __init__(
        self,
        client: FossologyRestClient,
        poll_interval: float = 1,
        on_progress: Optional[Callable[[str], None]] = None,
    ):
        self.client = client
        self.poll_interval = poll_interval
        self.on_progress = on_progress
        self.logger = logging.getLogger(self.__class__.__name__)
        self.first_job: Optional[Job] = None
        self.polls = 0

    def wait(self, upload_id: int) -> Job:
        """Return the Completed job; raise JobFailed or ProtocolViolation otherwise"""
        self.first_job = None
        self.polls = 0

        poll = backoff.on_predicate(
            backoff.constant,
            predicate=lambda job: not job.status.is_terminal,
            interval=self.poll_interval,
            jitter=None,
            on_backoff=self._report_progress,
            logger=None,
        )(self.poll_once)

        job = poll(upload_id)
        # details are only captured once, from the first poll
        job.eta = self.first_job.eta
        job.group_id = self.first_job.group_id

        if job.status is JobStatus.FAILED:
            raise JobFailed("Upload Job Failed", step=STEP, job_id=job.id, upload_id=upload_id)

        self.logger.info("Unpack job: terminated with status '%s' after %d polls", job.status.value, self.polls)
        return job

    def poll_once(self, upload_id: int) -> Job:
        document = self.client.get(f"jobs?upload={upload_id}")
        self.polls += 1

        job = self.parse_job(document, upload_id)
        if self.first_job is None:
            self.first_job = job
            self.logger.info(
                "Upload ID: %s, Job ID: %s, Group ID: %s, Job ETA: %s",
                upload_id, job.id, job.group_id, job.eta,
            )
        return job

    @staticmethod
    def parse_job(document, upload_id: int) -> Job:
        endpoint = f"jobs?upload={upload_id}"
        if not isinstance(document, list) or not document or not isinstance(document[0], dict):
            raise ProtocolViolation("No job found for upload", endpoint=endpoint)

        entry = document[0]
        raw_status = entry.get("status")
        try:
            status = JobStatus(raw_status)
        except ValueError:
            raise ProtocolViolation(f"Unknown job status: {raw_status!r}", endpoint=endpoint)

        return Job(
            id=entry.get("id"),
            upload_id=upload_id,
            status=status,
            eta=entry.get("eta"),
            group_id=entry.get("groupId"),
        )

    def _report_progress(self, details: dict) -> None:
        job = details.get("value")
        if job is not None and self.on_progress:
            self.on_progress(job.status.progress_mark)
