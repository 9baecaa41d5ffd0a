"""fossy-upload: Fossology REST upload and scan trigger."""

__version__ = "1.0.0"
