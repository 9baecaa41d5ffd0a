"""
Scan job submission.

Builds the scan options from the configured templates and posts them to the
`jobs` endpoint. The scan job itself is not followed.
"""

import copy
import logging
from typing import Any, Dict, Optional

from .api_client import FossologyRestClient
from .models import ReuseBaseline

STEP = "Trigger scan"

DEFAULT_SCAN_OPTIONS: Dict[str, Any] = {
    "analysis": {
        "bucket": True,
        "copyright_email_author": True,
        "ecc": True,
        "keyword": True,
        "mime": True,
        "monk": True,
        "nomos": True,
        "ojo": True,
        "package": True,
    },
    "decider": {
        "nomos_monk": True,
        "bulk_reused": True,
        "new_scanner": True,
        "ojo_decider": True,
    },
}

DEFAULT_REUSE_OPTIONS: Dict[str, Any] = {
    "reuse": {
        "reuse_main": True,
        "reuse_enhanced": True,
    },
}


class ScanTrigger:
    """Starts the scan job for a freshly unpacked upload"""

    def __init__(
        self,
        client: FossologyRestClient,
        scan_options: Optional[Dict[str, Any]] = None,
        reuse_options: Optional[Dict[str, Any]] = None,
    ):
        self.client = client
        self.scan_options = scan_options if scan_options is not None else DEFAULT_SCAN_OPTIONS
        self.reuse_options = reuse_options if reuse_options is not None else DEFAULT_REUSE_OPTIONS
        self.logger = logging.getLogger(self.__class__.__name__)

    def build_options(self, reuse_baseline: Optional[ReuseBaseline] = None) -> Dict[str, Any]:
        options = copy.deepcopy(self.scan_options)
        if reuse_baseline is None:
            return options

        for key, value in copy.deepcopy(self.reuse_options).items():
            if isinstance(value, dict) and isinstance(options.get(key), dict):
                options[key].update(value)
            else:
                options[key] = value

        reuse = options.setdefault("reuse", {})
        reuse["reuse_upload"] = reuse_baseline.upload_id
        reuse["reuse_group"] = reuse_baseline.group_id
        return options

    def trigger(self, folder_id: int, upload_id: int, reuse_baseline: Optional[ReuseBaseline] = None) -> Any:
        options = self.build_options(reuse_baseline)
        self.logger.debug("Scan options: %s", options)
        return self.client.post(
            "jobs",
            headers={"folderId": folder_id, "uploadId": upload_id},
            json=options,
        )
