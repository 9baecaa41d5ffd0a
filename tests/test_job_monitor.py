"""
Tests for JobMonitor

The polling state machine: termination, failure, unknown status and the
details captured from the first poll.
"""

import pytest

from fossy_upload.upload.exceptions import JobFailed
from fossy_upload.upload.job_monitor import JobMonitor
from fossy_upload.upload.models import JobStatus
from fossy_upload.utils.exceptions import ApplicationError, ProtocolViolation


class TestJobMonitor:
    """Polling until a terminal job status"""

    def setup_method(self):
        self.marks = []

    def make_monitor(self, client):
        return JobMonitor(client, poll_interval=0, on_progress=self.marks.append)

    def test_completes_after_exactly_four_polls(self, make_client):
        client = make_client(job_statuses=["Queued", "Processing", "Processing", "Completed"])
        monitor = self.make_monitor(client)

        job = monitor.wait(42)

        assert job.status is JobStatus.COMPLETED
        assert monitor.polls == 4
        assert len(client.calls_to("GET", "jobs")) == 4
        assert self.marks == ["Q", "P", "P"]

    def test_polls_jobs_filtered_by_upload(self, make_client):
        client = make_client(job_statuses=["Completed"])

        self.make_monitor(client).wait(42)

        assert client.calls_to("GET", "jobs")[0].path == "jobs?upload=42"

    def test_immediate_completion_shows_no_progress(self, make_client):
        client = make_client(job_statuses=["Completed"])
        monitor = self.make_monitor(client)

        monitor.wait(42)

        assert monitor.polls == 1
        assert self.marks == []

    def test_failed_job_raises_job_failed(self, make_client):
        client = make_client(job_statuses=["Queued", "Processing", "Failed"])

        with pytest.raises(JobFailed) as exc_info:
            self.make_monitor(client).wait(42)

        assert exc_info.value.step == "Unpack job"
        assert exc_info.value.job_id == 7
        assert exc_info.value.upload_id == 42

    def test_unknown_status_raises_protocol_violation(self, make_client):
        client = make_client(job_statuses=["Queued", "Unknown", "Completed"])
        monitor = self.make_monitor(client)

        with pytest.raises(ProtocolViolation, match="Unknown"):
            monitor.wait(42)
        assert monitor.polls == 2

    def test_empty_job_list_raises_protocol_violation(self, make_client):
        client = make_client()
        client.replies[("GET", "jobs")] = [[]]

        with pytest.raises(ProtocolViolation):
            self.make_monitor(client).wait(42)

    def test_rest_error_while_polling_propagates(self, make_client):
        client = make_client(job_statuses=["Queued", "Completed"])
        client.replies[("GET", "jobs")] = [{"code": 500, "message": "db down"}]

        with pytest.raises(ApplicationError):
            self.make_monitor(client).wait(42)

    def test_details_come_from_first_poll(self, make_client):
        client = make_client(job_statuses=["Queued", "Completed"])
        client.replies[("GET", "jobs")] = [
            [{"id": 7, "groupId": 3, "eta": 30, "status": "Queued"}],
        ]

        job = self.make_monitor(client).wait(42)

        assert job.eta == 30
        assert job.group_id == 3
        assert job.id == 7

    def test_waits_between_polls(self, make_client):
        client = make_client(job_statuses=["Queued", "Completed"])
        monitor = JobMonitor(client, poll_interval=0.01)

        job = monitor.wait(42)

        assert job.status is JobStatus.COMPLETED
        assert monitor.polls == 2


class TestJobStatus:

    def test_terminal_states(self):
        assert JobStatus.COMPLETED.is_terminal
        assert JobStatus.FAILED.is_terminal
        assert not JobStatus.QUEUED.is_terminal
        assert not JobStatus.PROCESSING.is_terminal

    def test_progress_marks(self):
        assert JobStatus.QUEUED.progress_mark == "Q"
        assert JobStatus.PROCESSING.progress_mark == "P"
