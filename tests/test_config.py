"""Unit tests for configuration."""
import os

import pytest

from routebrief.config import Config
from routebrief.exceptions import ConfigurationError


class TestConfig:
    """Test cases for Config class."""

    @pytest.fixture
    def credentials(self, monkeypatch):
        monkeypatch.setattr(Config, 'NOTAM_CLIENT_ID', 'id')
        monkeypatch.setattr(Config, 'NOTAM_CLIENT_SECRET', 'secret')

    def test_validate_with_credentials(self, credentials):
        assert Config.validate() is True

    @pytest.mark.parametrize("name", ['NOTAM_CLIENT_ID', 'NOTAM_CLIENT_SECRET'])
    @pytest.mark.parametrize("value", ['', '   '])
    def test_blank_credentials_are_fatal(self, credentials, monkeypatch, name, value):
        monkeypatch.setattr(Config, name, value)

        with pytest.raises(ConfigurationError, match=name):
            Config.validate()

    def test_bundled_airports_csv_exists(self):
        assert os.path.exists(Config.AIRPORTS_CSV_PATH) or 'AIRPORTS_CSV_PATH' in os.environ

    def test_defaults(self):
        assert 1 <= Config.NOTAM_PAGE_SIZE <= 1000
        assert Config.ROUTE_INTERVAL_MILES > 0
