"""
Upload submission.

Sends either a local file (multipart) or a version-control URL (JSON) to the
`uploads` endpoint. The service returns the new upload id in the `message`
field of the envelope.
"""

import logging
from typing import Optional

from fossy_upload.utils.exceptions import ApplicationError, ProtocolViolation

from .api_client import FossologyRestClient
from .exceptions import ConfigurationError
from .models import FileTarget, Upload, UploadSettings, UploadTarget, VcsTarget

STEP = "Upload"


class UploadDispatcher:
    """Creates the single upload of a run"""

    def __init__(self, client: FossologyRestClient, settings: Optional[UploadSettings] = None):
        self.client = client
        self.settings = settings or UploadSettings()
        self.logger = logging.getLogger(self.__class__.__name__)

    def upload(self, target: UploadTarget, folder_id: int, group_id: Optional[int] = None) -> Upload:
        """Submit the target; the group defaults to the one of the client session"""
        if group_id is None:
            group_id = self.client.api_session.group_id
        headers = {"folderId": folder_id}
        if group_id is not None:
            headers["uploadGroupId"] = group_id

        if isinstance(target, FileTarget):
            document = self._upload_file(target, headers)
        elif isinstance(target, VcsTarget):
            document = self._upload_vcs(target, headers)
        else:
            raise ConfigurationError("Upload needs exactly one of a file or a VCS URL", step=STEP)

        upload_id = self._extract_upload_id(document)
        self.logger.info("Upload ID : %s", upload_id)

        upload = Upload(id=upload_id, name=target.name, folder_id=folder_id, group_id=group_id)
        upload.item_id = self.find_item_id(upload.name, folder_id)
        return upload

    def search(self, name: str):
        """Search uploads by file name; returns the raw result list"""
        return self.client.get("search", headers={"filename": name})

    def find_item_id(self, name: str, folder_id: int) -> Optional[int]:
        """
        Best-effort lookup of the upload tree item used in the web link.

        The search index of the service lags behind new uploads
        (fossology/fossology#1481), so a miss is expected and returns None.
        """
        try:
            results = self.search(name)
        except ApplicationError as e:
            self.logger.warning("Item lookup failed, continuing without item id: %s", e)
            return None

        if not isinstance(results, list) or not results:
            return None

        last = results[-1]
        upload_info = last.get("upload") if isinstance(last, dict) else None
        if not isinstance(upload_info, dict):
            return None

        try:
            if int(upload_info.get("folderid")) != int(folder_id):
                return None
            return int(last["uploadTreeId"])
        except (KeyError, TypeError, ValueError):
            return None

    def _upload_file(self, target: FileTarget, headers: dict):
        self.logger.info("Upload file: %s", target.path)
        headers = dict(
            headers,
            uploadDescription=self.settings.file_description,
            public=self.settings.visibility,
            ignoreScm=str(self.settings.ignore_scm).lower(),
        )
        try:
            f = open(target.path, "rb")
        except OSError as e:
            raise ConfigurationError(f"Cannot read upload file {target.path}: {e}", step=STEP)

        with f:
            files = {"fileInput": (target.name, f, "application/octet-stream")}
            return self.client.post("uploads", headers=headers, files=files)

    def _upload_vcs(self, target: VcsTarget, headers: dict):
        self.logger.info("Upload GIT URL: %s", target.url)
        headers = dict(
            headers,
            uploadDescription=self.settings.vcs_description,
            public=self.settings.visibility,
        )
        payload = {
            "vcs_url": target.url,
            "vcs_username": target.username or "",
            "vcs_password": target.password or "",
        }
        return self.client.post("uploads", headers=headers, json=payload)

    @staticmethod
    def _extract_upload_id(document) -> int:
        message = document.get("message") if isinstance(document, dict) else None
        try:
            return int(message)
        except (TypeError, ValueError):
            raise ProtocolViolation(f"Upload reply does not carry an upload id: {message!r}", endpoint="uploads")
