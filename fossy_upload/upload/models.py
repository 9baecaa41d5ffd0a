"""
Data Models for the Upload Workflow

Dataclasses and enums shared by the workflow components. Everything the
service returns is turned into one of these before it leaves a component.
"""

import os
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional, Union


class JobStatus(Enum):
    """Status of the unpack job as reported by the jobs endpoint"""
    QUEUED = "Queued"
    PROCESSING = "Processing"
    COMPLETED = "Completed"
    FAILED = "Failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)

    @property
    def progress_mark(self) -> str:
        """Single character shown while the job is still running"""
        return {JobStatus.QUEUED: "Q", JobStatus.PROCESSING: "P"}.get(self, "")


@dataclass
class Credentials:
    """Either a ready token or a username/password pair"""
    token: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    @property
    def can_mint(self) -> bool:
        return bool(self.username) and bool(self.password)


@dataclass(frozen=True)
class ApiSession:
    """Connection state shared by every REST call of a run"""
    base_url: str
    token: Optional[str] = None
    group_id: Optional[int] = None

    def with_token(self, token: str) -> 'ApiSession':
        return replace(self, token=token)

    def get_headers(self) -> Dict[str, str]:
        """Authentication headers for API requests"""
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}


@dataclass
class TokenSettings:
    """Parameters used when minting a token from credentials"""
    scope: str = "write"
    validity_days: int = 2
    name_prefix: str = "ci-cd_"


@dataclass
class FileTarget:
    """Local artifact uploaded as multipart form data"""
    path: str

    @property
    def name(self) -> str:
        return os.path.basename(self.path)


@dataclass
class VcsTarget:
    """Version-control URL cloned by the service"""
    url: str
    username: str = ""
    password: str = ""

    @property
    def name(self) -> str:
        return self.url.rstrip("/").split("/")[-1]


UploadTarget = Union[FileTarget, VcsTarget]


@dataclass
class Upload:
    """Upload created during the run"""
    id: int
    name: str
    folder_id: int
    group_id: Optional[int] = None
    item_id: Optional[int] = None


@dataclass
class Job:
    """Snapshot of a job returned by the jobs endpoint"""
    id: Optional[int]
    upload_id: int
    status: JobStatus
    eta: Optional[str] = None
    group_id: Optional[int] = None


@dataclass
class ReuseBaseline:
    """Previous upload whose results seed the new scan"""
    upload_id: int
    group_id: Optional[int] = None


@dataclass
class UploadRequest:
    """Everything a single run needs from the caller"""
    credentials: Credentials
    target: UploadTarget
    folder_path: Union[str, List[str]]
    group_id: Optional[int] = None
    reuse: bool = False


@dataclass
class WorkflowResult:
    """Overall workflow result"""
    success: bool
    folder_id: Optional[int] = None
    upload: Optional[Upload] = None
    job: Optional[Job] = None
    reuse_baseline: Optional[ReuseBaseline] = None
    link: Optional[str] = None
    error: Optional[str] = None
    failed_step: Optional[str] = None
    total_time_seconds: Optional[float] = None
    steps_completed: List[str] = field(default_factory=list)


@dataclass
class UploadSettings:
    """Fixed metadata attached to every upload"""
    file_description: str = "REST Upload - from File"
    vcs_description: str = "REST Upload - from VCS"
    visibility: str = "private"
    ignore_scm: bool = True


@dataclass
class FossyConfig:
    """Configuration for one upload run"""
    site_url: str
    rest_url: Optional[str] = None
    timeout: int = 300
    verify_ssl: bool = True
    dump_replies: bool = False
    poll_interval: float = 1
    root_folder_id: int = 1
    token: TokenSettings = field(default_factory=TokenSettings)
    upload: UploadSettings = field(default_factory=UploadSettings)
    scan_options: Optional[Dict] = None
    reuse_options: Optional[Dict] = None

    def __post_init__(self):
        if not self.rest_url:
            self.rest_url = f"{self.site_url.rstrip('/')}/api/v1"

    def build_link(self, upload_id: int, folder_id: int, item_id: Optional[int] = None) -> str:
        """Web UI link to the license view of an upload"""
        item = "" if item_id is None else item_id
        return f"{self.site_url}/?mod=license&upload={upload_id}&folder={folder_id}&item={item}"
