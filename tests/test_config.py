"""Tests for settings loaded from the environment."""
import pytest
from repo_browser.config import Settings


def test_defaults():
    """Test settings with nothing configured."""
    settings = Settings.from_env({})

    assert settings.github_api_url == "https://api.github.com"
    assert settings.request_timeout_seconds is None
    assert settings.log_level == "INFO"


def test_values_from_environment():
    """Test overriding every setting."""
    settings = Settings.from_env({
        "GITHUB_API_URL": "http://localhost:8080",
        "REQUEST_TIMEOUT_SECONDS": "12.5",
        "LOG_LEVEL": "debug",
    })

    assert settings.github_api_url == "http://localhost:8080"
    assert settings.request_timeout_seconds == 12.5
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("value", ["soon", "0", "-3"])
def test_invalid_timeout(value):
    """Test that unusable timeouts name the variable."""
    with pytest.raises(ValueError, match="REQUEST_TIMEOUT_SECONDS"):
        Settings.from_env({"REQUEST_TIMEOUT_SECONDS": value})
