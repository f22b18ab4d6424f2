"""
Unit tests for config/settings.py
"""
import warnings

from config.settings import Settings
from docstyle.formatting.profile import PageMargins


class TestSettings:
    """Test environment-driven settings."""

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("DOCSTYLE_MEASURE_BACKEND", "browser")
        monkeypatch.setenv("DOCSTYLE_IMAGE_DECODE_TIMEOUT_MS", "500")
        current = Settings(_env_file=None)
        assert current.measure_backend == "browser"
        assert current.image_decode_timeout == 0.5

    def test_declared_with_model_config(self):
        assert Settings.model_config["env_prefix"] == "DOCSTYLE_"
        assert PageMargins.model_config["populate_by_name"] is True

    def test_no_deprecation_warnings(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            Settings(_env_file=None)
            PageMargins.model_validate({"top": 10})
