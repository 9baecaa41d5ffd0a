"""
Previous upload lookup for scan re-use.

The most recent search hit for an artifact name is the upload created by the
current run, so the baseline is the entry just before it. This relies on the
service returning results oldest first and on no concurrent upload of the
same name.
"""

import logging
from typing import Optional

from .exceptions import ReuseError
from .models import ReuseBaseline
from .upload_dispatcher import UploadDispatcher

STEP = "Trigger scan"


class ReuseResolver:
    """Finds the upload to reuse results from"""

    def __init__(self, dispatcher: UploadDispatcher):
        self.dispatcher = dispatcher
        self.logger = logging.getLogger(self.__class__.__name__)

    def find_previous(self, artifact_name: str, group_id: Optional[int] = None) -> ReuseBaseline:
        results = self.dispatcher.search(artifact_name)

        if not isinstance(results, list) or len(results) < 2:
            raise ReuseError(f"Failed to find ID for reuse of '{artifact_name}'", step=STEP)

        entry = results[-2]
        upload_info = entry.get("upload") if isinstance(entry, dict) else None
        upload_id = upload_info.get("id") if isinstance(upload_info, dict) else None
        if upload_id is None:
            raise ReuseError(f"Failed to find ID for reuse of '{artifact_name}'", step=STEP)

        try:
            upload_id = int(upload_id)
        except (TypeError, ValueError):
            raise ReuseError(f"Search hit for '{artifact_name}' has no numeric upload id: {upload_id!r}", step=STEP)

        self.logger.info("REUSE: Previous Upload ID: %s", upload_id)
        return ReuseBaseline(upload_id=upload_id, group_id=group_id)
