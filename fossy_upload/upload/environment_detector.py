"""
Environment Detector

Reads the optional environment variables used by an upload run and builds a
masked summary of them for debug output.
"""

import os
from typing import Dict, Optional

from .models import VcsTarget


class EnvironmentDetector:
    """Detects VCS credentials and service settings from the environment"""

    VCS_VARS = ["GIT_USERNAME", "GIT_PASSWORD"]

    SERVICE_VARS = [
        "FOSSY_URL",
        "FOSSY_REST_URL",
        "FOSSY_TOKEN",
        "FOSSY_USERNAME",
        "FOSSY_PASSWORD",
        "FOSSY_GROUP_ID",
    ]

    SENSITIVE_MARKERS = ("PASSWORD", "TOKEN")

    def get_vcs_credentials(self) -> Dict[str, str]:
        """VCS username and password; absent values are empty strings"""
        return {
            "username": os.getenv("GIT_USERNAME", ""),
            "password": os.getenv("GIT_PASSWORD", ""),
        }

    def build_vcs_target(self, url: str) -> VcsTarget:
        credentials = self.get_vcs_credentials()
        return VcsTarget(url=url, username=credentials["username"], password=credentials["password"])

    def get_environment_summary(self) -> Dict[str, Optional[str]]:
        """Which variables are set, with secrets masked"""
        summary = {}
        for var in self.VCS_VARS + self.SERVICE_VARS:
            value = os.getenv(var)
            if value and any(marker in var for marker in self.SENSITIVE_MARKERS):
                summary[var] = f"<{len(value)} chars>"
            else:
                summary[var] = value
        return summary
