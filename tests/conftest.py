"""
Shared fixtures for the fossy-upload tests.

FakeFossologyClient keeps the real FossologyRestClient request pipeline
(header handling, JSON parsing, envelope classification) and only replaces
the network call with an in-memory Fossology server.
"""

import io
import json
from dataclasses import dataclass, field
from typing import Any, Dict

import pytest
from rich.console import Console

from fossy_upload.upload.api_client import FossologyRestClient
from fossy_upload.upload.models import ApiSession


class FakeResponse:
    """Minimal stand-in for requests.Response"""

    def __init__(self, document, status_code=200):
        self.status_code = status_code
        self.text = document if isinstance(document, str) else json.dumps(document)


@dataclass
class RecordedCall:
    verb: str
    path: str
    headers: Dict[str, str]
    kwargs: Dict[str, Any] = field(default_factory=dict)


class FakeFossologyClient(FossologyRestClient):
    """REST client backed by an in-memory folder tree, upload and job list"""

    def __init__(
        self,
        folders=None,
        job_statuses=None,
        search_results=None,
        upload_id=42,
        token="minted-token-0123456789",
        job_group_id=3,
    ):
        super().__init__(ApiSession(base_url="https://fossy.test/repo/api/v1"))
        if folders is None:
            folders = [{"id": 1, "name": "Software Repository", "parent": None}]
        self.folders = [dict(f) for f in folders]
        self.job_statuses = list(job_statuses or ["Completed"])
        self.search_results = [] if search_results is None else search_results
        self.upload_id = upload_id
        self.token = token
        self.job_group_id = job_group_id
        # (verb, endpoint) -> documents returned before the default handler
        self.replies = {}
        self.calls = []

    def _send(self, verb, path, url, headers=None, **kwargs):
        headers = headers or {}
        self.calls.append(RecordedCall(verb, path, dict(headers), kwargs))

        endpoint = path.split("?")[0]
        queued = self.replies.get((verb, endpoint))
        if queued:
            return FakeResponse(queued.pop(0))

        # the server sees header bytes as UTF-8 text
        headers = {
            name: value.decode("utf-8") if isinstance(value, bytes) else value
            for name, value in headers.items()
        }
        handler = getattr(self, f"_{verb.lower()}_{endpoint}")
        return FakeResponse(handler(path, headers, **kwargs))

    def calls_to(self, verb, endpoint):
        return [c for c in self.calls if c.verb == verb and c.path.split("?")[0] == endpoint]

    def _post_tokens(self, path, headers, **kwargs):
        return {"Authorization": f"Bearer {self.token}"}

    def _get_folders(self, path, headers, **kwargs):
        return [dict(f) for f in self.folders]

    def _post_folders(self, path, headers, **kwargs):
        new_id = max(f["id"] for f in self.folders) + 1
        self.folders.append({
            "id": new_id,
            "name": headers["folderName"],
            "parent": int(headers["parentFolder"]),
        })
        return {"code": 201, "message": f"Folder \"{headers['folderName']}\" created", "type": "INFO"}

    def _post_uploads(self, path, headers, **kwargs):
        return {"code": 201, "message": self.upload_id, "type": "INFO"}

    def _get_search(self, path, headers, **kwargs):
        return self.search_results

    def _get_jobs(self, path, headers, **kwargs):
        status = self.job_statuses.pop(0) if len(self.job_statuses) > 1 else self.job_statuses[0]
        return [{
            "id": 7,
            "name": "upload",
            "uploadId": self.upload_id,
            "groupId": self.job_group_id,
            "eta": 12,
            "status": status,
        }]

    def _post_jobs(self, path, headers, **kwargs):
        return {"code": 201, "message": 99, "type": "INFO"}


@pytest.fixture
def make_client():
    """Factory for FakeFossologyClient instances"""
    return FakeFossologyClient


@pytest.fixture
def console():
    """Console writing to a buffer; read it with console.file.getvalue()"""
    return Console(file=io.StringIO(), force_terminal=False, no_color=True, width=120)
