"""Configuration management for the vault CLI."""

import json
import os
import shutil
from pathlib import Path

from common.logging_config import get_logger
from vault.models import ServiceConfig

logger = get_logger(__name__)


class Config:
    """Manages CLI configuration stored in JSON file."""

    DEFAULT_CONFIG = {
        "service_host": os.environ.get("VAULT_SERVICE_HOST", "localhost"),
        "service_port": int(os.environ.get("VAULT_SERVICE_PORT", "8080")),
        "timeout": 30,
        "download_dir": "downloads",
    }

    def __init__(self, config_path: Path):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (typically ~/.vault/config.json)
        """
        self.config_path = config_path
        self.data = self._load()

    def _load(self) -> dict:
        """
        Load configuration from file, creating defaults if necessary.

        Returns:
            Configuration dictionary
        """
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if not self.config_path.exists():
            config = self.DEFAULT_CONFIG.copy()
            try:
                with open(self.config_path, 'w') as f:
                    json.dump(config, f, indent=2)
            except OSError as e:
                logger.warning(f"Could not write default config to {self.config_path}: {e}")
            return config

        try:
            with open(self.config_path, 'r') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            backup_path = self.config_path.with_suffix('.json.bak')
            logger.warning(f"Config file unreadable ({e}), backing up to {backup_path} and using defaults")
            try:
                shutil.copy(self.config_path, backup_path)
            except OSError as copy_error:
                logger.warning(f"Could not back up config file: {copy_error}")
            return self.DEFAULT_CONFIG.copy()

        config = self.DEFAULT_CONFIG.copy()
        config.update(data)
        return config

    def save(self) -> None:
        """Save current configuration to file."""
        try:
            with open(self.config_path, 'w') as f:
                json.dump(self.data, f, indent=2)
        except OSError as e:
            logger.warning(f"Could not save config to {self.config_path}: {e}")

    def get_base_url(self) -> str:
        """
        Get file service base URL.

        Returns:
            Base URL string (e.g., "http://localhost:8080")
        """
        host = self.data.get('service_host', 'localhost')
        port = self.data.get('service_port', 8080)
        return f"http://{host}:{port}"

    def get_timeout(self) -> float:
        return float(self.data.get('timeout', 30))

    def get_download_dir(self) -> Path:
        return Path(self.data.get('download_dir', 'downloads')).expanduser()

    def to_service_config(self) -> ServiceConfig:
        """Build the connection settings passed to the file service client."""
        return ServiceConfig(base_url=self.get_base_url(), timeout=self.get_timeout())
