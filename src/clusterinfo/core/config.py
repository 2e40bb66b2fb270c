# src/clusterinfo/core/config.py

import logging
import os
import re

from dotenv import load_dotenv

# Load environment variables from a .env file located in the project root
dotenv_path = os.path.join(os.path.dirname(__file__), "..", "..", "..", ".env")
load_dotenv(dotenv_path=dotenv_path)

INTERVAL_PATTERN = re.compile(r"^(\d+)([smh])$")


def _as_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "t", "y", "yes")


class Config:
    """
    Handles the application's configuration by loading values from environment variables.
    """

    def __init__(self):
        # --- Inventory service secrets ---
        self.INVENTORY_API_TOKEN = self._get_secret("INVENTORY_API_TOKEN")

    @staticmethod
    def _get_secret(key: str, default: str = None) -> str:
        """
        Retrieves a secret from a file (Docker secret/volume) or falls back to environment variable.

        Raises:
            PermissionError: If the secret file exists but cannot be read due to permissions.
            IOError: If the secret file exists but cannot be read due to I/O errors.
        """
        secret_file = f"/etc/clusterinfo/secrets/{key}"
        if os.path.exists(secret_file):
            try:
                with open(secret_file, "r") as f:
                    value = f.read().strip()
                    logging.getLogger(__name__).debug(f"Loaded secret '{key}' from {secret_file}")
                    return value
            except PermissionError as e:
                raise PermissionError(
                    f"Secret file '{secret_file}' exists but cannot be read due to permission denied. "
                    f"Please check file permissions or run with appropriate privileges."
                ) from e
            except (IOError, OSError) as e:
                raise IOError(
                    f"Secret file '{secret_file}' exists but cannot be read: {e}. "
                    f"Please check the file integrity and system resources."
                ) from e
        return os.getenv(key, default)

    # --- Logging variables ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # --- Database variables ---
    DB_TYPE = os.getenv("DB_TYPE", "sqlite")
    DB_PATH = os.getenv("DB_PATH", "clusterinfo_data.db")

    # --- Inventory service variables ---
    # May contain a '{zone}' placeholder, e.g. https://config.{zone}.example.com:4443
    INVENTORY_API_URL = os.getenv("INVENTORY_API_URL", "")
    INVENTORY_VERIFY_CERTS = _as_bool(os.getenv("INVENTORY_VERIFY_CERTS", "True"))
    INVENTORY_FETCH_TIMEOUT_SECONDS = float(os.getenv("INVENTORY_FETCH_TIMEOUT_SECONDS", "30"))

    # --- HTTP client defaults ---
    DEFAULT_TIMEOUT_CONNECT = float(os.getenv("DEFAULT_TIMEOUT_CONNECT", "5"))
    DEFAULT_TIMEOUT_READ = float(os.getenv("DEFAULT_TIMEOUT_READ", "20"))
    USER_AGENT = os.getenv("USER_AGENT", "clusterinfo-maintainer")

    # --- Reconciliation variables ---
    RECONCILE_INTERVAL = os.getenv("RECONCILE_INTERVAL", "10m")
    RECONCILE_MAX_CONCURRENCY = int(os.getenv("RECONCILE_MAX_CONCURRENCY", "1"))
    LOCK_TIMEOUT_SECONDS = float(os.getenv("LOCK_TIMEOUT_SECONDS", "60"))

    # --- Hardware catalog ---
    FLAVOR_CATALOG_PATH = os.getenv("FLAVOR_CATALOG_PATH", "flavors.json")

    # --- API variables ---
    API_HOST = os.getenv("API_HOST", "0.0.0.0")
    API_PORT = int(os.getenv("API_PORT", "8000"))

    def validate_instance(self):
        if self.DB_TYPE not in ["sqlite"]:
            raise ValueError("DB_TYPE must be 'sqlite'")
        if not INTERVAL_PATTERN.match(self.RECONCILE_INTERVAL.lower()):
            raise ValueError("RECONCILE_INTERVAL format is invalid. Use 's', 'm', or 'h'.")
        if self.RECONCILE_MAX_CONCURRENCY < 1:
            raise ValueError("RECONCILE_MAX_CONCURRENCY must be at least 1.")
        if self.INVENTORY_FETCH_TIMEOUT_SECONDS <= 0:
            raise ValueError("INVENTORY_FETCH_TIMEOUT_SECONDS must be positive.")
        if self.LOCK_TIMEOUT_SECONDS <= 0:
            raise ValueError("LOCK_TIMEOUT_SECONDS must be positive.")
        if not self.INVENTORY_API_URL:
            logging.warning("INVENTORY_API_URL is not set; every inventory fetch will fail.")


# Instantiate the config to be imported by other modules
config = Config()
config.validate_instance()
