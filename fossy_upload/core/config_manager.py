"""
Configuration management for fossy-upload.

Handles loading, merging, and discovery of configuration files, and turns
the merged configuration plus CLI arguments into a FossyConfig.
"""
import importlib.resources as importlib_resources
import os
from typing import Optional

import yaml

from fossy_upload.upload.models import FossyConfig, TokenSettings, UploadSettings

LOCAL_CONFIG_FILE = "fossy-upload.config.yaml"


class ConfigManager:
    """Manages configuration loading and merging operations."""

    def load_config(self, path: str) -> dict:
        """Load configuration from YAML file."""
        with open(path, "r") as f:
            return yaml.safe_load(f) or {}

    def deep_merge(self, default: dict, user: dict) -> dict:
        """Deep merge user config into default config."""
        result = default.copy()
        for key, value in user.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self.deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def load_package_default_config(self) -> dict:
        """Load default config from package."""
        config_files = importlib_resources.files("fossy_upload.config")
        with (config_files / "default.yaml").open("r") as f:
            return yaml.safe_load(f)

    def load_and_merge_config(self, user_config_path: str) -> dict:
        """Load user config and merge with package default."""
        default_config = self.load_package_default_config()
        user_config = self.load_config(user_config_path)
        return self.deep_merge(default_config, user_config)

    def discover_and_load_config(self, config_arg: Optional[str]) -> dict:
        """Discover config file with priority order."""

        # Priority 1: --config argument
        if config_arg:
            if os.path.exists(config_arg):
                return self.load_and_merge_config(config_arg)
            else:
                raise FileNotFoundError(f"Config file not found: {config_arg}")

        # Priority 2: fossy-upload.config.yaml in current directory
        if os.path.exists(LOCAL_CONFIG_FILE):
            return self.load_and_merge_config(LOCAL_CONFIG_FILE)

        # Priority 3: Package default config
        return self.load_package_default_config()

    def build_fossy_config(
        self,
        config: dict,
        site_url: str,
        rest_url: Optional[str] = None,
        insecure: bool = False,
        extra_debug: bool = False,
    ) -> FossyConfig:
        """Merge configuration with CLI arguments."""
        token = config.get("token", {})
        folders = config.get("folders", {})
        upload = config.get("upload", {})
        jobs = config.get("jobs", {})
        http = config.get("http", {})
        scan = config.get("scan", {})

        return FossyConfig(
            site_url=site_url,
            rest_url=rest_url,
            timeout=int(http.get("timeout", 300)),
            verify_ssl=bool(http.get("verify_ssl", True)) and not insecure,
            dump_replies=extra_debug,
            poll_interval=float(jobs.get("poll_interval", 1)),
            root_folder_id=int(folders.get("root_id", 1)),
            token=TokenSettings(**token),
            upload=UploadSettings(**upload),
            scan_options=scan.get("options"),
            reuse_options=scan.get("reuse_options"),
        )
