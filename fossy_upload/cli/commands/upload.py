"""
Upload command implementation.

Thin wrapper around UploadService that handles CLI argument parsing
and delegates business logic to the service layer.
"""
import sys
from typing import Optional

import typer

from fossy_upload.core.uploader import UploadService


def upload_command(
    site_url: Optional[str] = typer.Option(None, "-s", "--site-url", envvar="FOSSY_URL", help="Service URL"),
    rest_url: Optional[str] = typer.Option(None, "--rest-url", envvar="FOSSY_REST_URL", help="REST API URL (default: <site-url>/api/v1)"),
    token: Optional[str] = typer.Option(None, "-t", "--token", envvar="FOSSY_TOKEN", help="Bearer token"),
    username: Optional[str] = typer.Option(None, "-n", "--username", envvar="FOSSY_USERNAME", help="Username used to create a token"),
    password: Optional[str] = typer.Option(None, "-p", "--password", envvar="FOSSY_PASSWORD", help="Password used to create a token"),
    file: Optional[str] = typer.Option(None, "-i", "--file", help="File to upload"),
    git_url: Optional[str] = typer.Option(None, "-u", "--git-url", help="Git repository URL to upload"),
    folder: Optional[str] = typer.Option(None, "-f", "--folder", help="Folder in which the upload will be added"),
    group_id: Optional[int] = typer.Option(None, "-g", "--group-id", envvar="FOSSY_GROUP_ID", help="Group under which the upload will be created"),
    reuse: bool = typer.Option(False, "-r", "--reuse", help="Reuse results of the previous upload with the same name"),
    debug: bool = typer.Option(False, "-d", "--debug", help="Debug mode"),
    extra_debug: bool = typer.Option(False, "-e", "--extra-debug", help="Extra debug mode (dump JSON replies)"),
    insecure: bool = typer.Option(False, "-k", "--insecure", help="Do not verify TLS certificates"),
    config_path: Optional[str] = typer.Option(None, "-c", "--config", help="Path to config YAML"),
):
    """Upload a file or a Git repository and trigger its scan."""

    # Delegate to service layer
    upload_service = UploadService()
    exit_code = upload_service.execute_upload(
        site_url=site_url,
        rest_url=rest_url,
        token=token,
        username=username,
        password=password,
        file=file,
        git_url=git_url,
        folder=folder,
        group_id=group_id,
        reuse=reuse,
        debug=debug,
        extra_debug=extra_debug,
        insecure=insecure,
        config_path=config_path,
    )

    # Exit with appropriate code
    if exit_code != 0:
        sys.exit(exit_code)
