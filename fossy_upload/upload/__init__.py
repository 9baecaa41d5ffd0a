"""
Fossology REST Upload Module

Drives the analysis service through one upload run:

Authentication - use or mint a bearer token
Folder         - resolve or create the destination folder path
Upload         - send a file or a VCS URL
Unpack job     - wait for the service to unpack the upload
Trigger scan   - start the scan, optionally reusing a previous upload
"""

from .upload_orchestrator import UploadOrchestrator
from .exceptions import (
    UploadError,
    ConfigurationError,
    AuthError,
    FolderError,
    ReuseError,
    JobFailed
)

__all__ = [
    'UploadOrchestrator',
    'UploadError',
    'ConfigurationError',
    'AuthError',
    'FolderError',
    'ReuseError',
    'JobFailed'
]
