"""
CLI module for fossy-upload.

Provides the command-line interface on top of the service layer.
"""
from fossy_upload.cli.app import app as _app

# Export app function for pyproject.toml entry point
def app():
    """Entry point function for pyproject.toml scripts."""
    _app()

__all__ = ['app']
