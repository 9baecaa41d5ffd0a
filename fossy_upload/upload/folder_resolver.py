"""
Folder path resolution.

Walks a slash separated path from the root folder, reusing existing folders
and creating missing ones. The service does not return the id of a created
folder, so every creation is followed by a fresh lookup.
"""

import logging
from typing import List, Optional, Sequence, Union

from .api_client import FossologyRestClient
from .exceptions import ConfigurationError, FolderError

STEP = "Folder"
ROOT_FOLDER_ID = 1


def split_folder_path(path: Union[str, Sequence[str]]) -> List[str]:
    """Turn "Sandbox/001" into ["Sandbox", "001"]; lists are copied as is"""
    if isinstance(path, str):
        return path.split("/")
    return list(path)


class FolderResolver:
    """Resolves or creates every segment of a folder path"""

    def __init__(self, client: FossologyRestClient, root_id: int = ROOT_FOLDER_ID):
        self.client = client
        self.root_id = root_id
        self.logger = logging.getLogger(self.__class__.__name__)

    def resolve(self, path: Union[str, Sequence[str]]) -> int:
        segments = split_folder_path(path)
        if not segments:
            raise ConfigurationError("Folder path has no segments", step=STEP)

        parent_id = self.root_id
        for name in segments:
            parent_id = self._resolve_segment(name, parent_id)
        return parent_id

    def find_folder_id(self, name: str, parent_id: int) -> Optional[int]:
        """Id of the folder called `name` directly under `parent_id`, if any"""
        listing = self.client.get("folders")
        if not isinstance(listing, list):
            return None

        for folder in listing:
            if not isinstance(folder, dict):
                continue
            if folder.get("name") == name and self._same_id(folder.get("parent"), parent_id):
                return int(folder["id"])
        return None

    def _resolve_segment(self, name: str, parent_id: int) -> int:
        folder_id = self.find_folder_id(name, parent_id)
        if folder_id is not None:
            self.logger.debug("Found  : %s : %s", name, folder_id)
            return folder_id

        self.client.post("folders", headers={"parentFolder": parent_id, "folderName": name})

        folder_id = self.find_folder_id(name, parent_id)
        if folder_id is None:
            raise FolderError(
                f"Failed to find created folder '{name}' under {parent_id}",
                step=STEP,
                folder_name=name,
                parent_id=parent_id,
            )
        self.logger.debug("Created: %s : %s", name, folder_id)
        return folder_id

    @staticmethod
    def _same_id(value, expected: int) -> bool:
        try:
            return value is not None and int(value) == int(expected)
        except (TypeError, ValueError):
            return False
