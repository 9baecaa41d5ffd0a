"""
Workflow exceptions for the upload run.

Each one records the workflow step that failed so the fatal message can name it.
"""


class UploadError(Exception):
    """Base workflow error."""

    def __init__(self, message, **kwargs):
        super().__init__(message)
        self.message = message
        self.step = kwargs.get('step')


class ConfigurationError(UploadError):
    """Invalid or incomplete run configuration."""
    pass


class AuthError(UploadError):
    """No usable bearer token."""
    pass


class FolderError(UploadError):
    """A folder that was just created cannot be found again."""

    def __init__(self, message, **kwargs):
        super().__init__(message, **kwargs)
        self.folder_name = kwargs.get('folder_name')
        self.parent_id = kwargs.get('parent_id')


class ReuseError(UploadError):
    """Re-use requested but no previous upload exists."""
    pass


class JobFailed(UploadError):
    """The unpack job ended in the Failed state."""

    def __init__(self, message, **kwargs):
        super().__init__(message, **kwargs)
        self.job_id = kwargs.get('job_id')
        self.upload_id = kwargs.get('upload_id')
