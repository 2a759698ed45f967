import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from authority.core.config import Settings, get_settings


def test_settings_defaults():
    """Test that settings load with correct defaults."""
    with patch.dict(os.environ, {}, clear=True):
        settings = Settings(_env_file=None)

    assert settings.app_name == "Authority"
    assert settings.environment == "development"
    assert settings.is_development is True
    assert settings.is_production is False
    assert settings.throttle_enabled is True
    assert settings.throttle_attempt_limit == 5
    assert settings.throttle_suspension_minutes == 15
    assert settings.throttle_ban_attempt_limit == 15
    assert settings.email_provider == "console"


def test_settings_env_override():
    """Test that environment variables override defaults."""
    with patch.dict(os.environ, {
        "AUTHORITY_APP_NAME": "TestApp",
        "AUTHORITY_ENVIRONMENT": "production",
        "AUTHORITY_THROTTLE_ATTEMPT_LIMIT": "7",
        "AUTHORITY_THROTTLE_ENABLED": "false",
    }):
        settings = Settings(_env_file=None)

    assert settings.app_name == "TestApp"
    assert settings.is_production is True
    assert settings.throttle_attempt_limit == 7
    assert settings.throttle_enabled is False


@pytest.mark.parametrize(
    "field",
    [
        "throttle_attempt_limit",
        "throttle_suspension_minutes",
        "throttle_ban_attempt_limit",
        "activation_code_bytes",
    ],
)
def test_limits_must_be_positive(field):
    with pytest.raises(ValidationError, match="positive"):
        Settings(_env_file=None, **{field: 0})


def test_ban_limit_cannot_precede_suspension():
    """Test that a ban limit below the suspension limit is rejected."""
    with pytest.raises(ValidationError, match="throttle_ban_attempt_limit"):
        Settings(_env_file=None, throttle_attempt_limit=10, throttle_ban_attempt_limit=5)


def test_smtp_provider_requires_host():
    with pytest.raises(ValidationError, match="smtp_host"):
        Settings(_env_file=None, email_provider="smtp", smtp_host=None)

    settings = Settings(_env_file=None, email_provider="smtp", smtp_host="mail.example.com")
    assert settings.email_provider == "smtp"


def test_activation_url():
    settings = Settings(_env_file=None, external_url="https://auth.example.com/")

    assert settings.activation_url("user-1", "abc") == (
        "https://auth.example.com/users/user-1/activate/abc"
    )


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
