# tests/core/test_config.py
"""
Tests for the Config class.
"""

import os
from unittest.mock import patch

import pytest

from clusterinfo.core.config import Config


class TestGetSecret:
    """Tests for the Config._get_secret method."""

    def test_get_secret_from_env_var(self):
        with patch.dict(os.environ, {"TEST_SECRET": "env_value"}):
            assert Config._get_secret("TEST_SECRET") == "env_value"

    def test_get_secret_with_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert Config._get_secret("NONEXISTENT_SECRET", default="default_value") == "default_value"

    def test_get_secret_from_file(self):
        with patch("clusterinfo.core.config.os.path.exists", return_value=True):
            with patch("builtins.open", create=True) as mock_open:
                mock_open.return_value.__enter__.return_value.read.return_value = "file_value\n"
                assert Config._get_secret("TEST_SECRET") == "file_value"

    def test_get_secret_permission_error(self):
        with patch("clusterinfo.core.config.os.path.exists", return_value=True):
            with patch("builtins.open", side_effect=PermissionError("denied")):
                with pytest.raises(PermissionError, match="permission denied"):
                    Config._get_secret("TEST_SECRET")


class TestValidateInstance:
    """Tests for Config.validate_instance."""

    def _config(self, **overrides):
        cfg = Config()
        for key, value in overrides.items():
            setattr(cfg, key, value)
        return cfg

    def test_defaults_are_valid(self):
        self._config(INVENTORY_API_URL="https://inventory").validate_instance()

    def test_rejects_unknown_db_type(self):
        with pytest.raises(ValueError, match="DB_TYPE"):
            self._config(DB_TYPE="oracle").validate_instance()

    @pytest.mark.parametrize("interval", ["10", "5 minutes", "1d", ""])
    def test_rejects_bad_interval(self, interval):
        with pytest.raises(ValueError, match="RECONCILE_INTERVAL"):
            self._config(RECONCILE_INTERVAL=interval).validate_instance()

    def test_rejects_zero_concurrency(self):
        with pytest.raises(ValueError, match="RECONCILE_MAX_CONCURRENCY"):
            self._config(RECONCILE_MAX_CONCURRENCY=0).validate_instance()

    def test_rejects_non_positive_fetch_timeout(self):
        with pytest.raises(ValueError, match="INVENTORY_FETCH_TIMEOUT_SECONDS"):
            self._config(INVENTORY_FETCH_TIMEOUT_SECONDS=0).validate_instance()
