"""Unit tests for the SMTP email provider."""

import unittest.mock as mock

import aiosmtplib
import pytest

from authority.infrastructure.services.email.smtp_provider import (
    SMTPProvider,
    SMTPSettings,
)


@pytest.fixture
def smtp_settings() -> SMTPSettings:
    """Fixture for SMTP settings."""
    return SMTPSettings(
        host="smtp.example.com",
        port=587,
        username="test_user",
        password="test_password",
    )


@pytest.fixture
def smtp_provider(smtp_settings: SMTPSettings) -> SMTPProvider:
    """Fixture for SMTP provider."""
    return SMTPProvider(smtp_settings)


@pytest.fixture
def mock_smtp_class():
    """Patch aiosmtplib.SMTP with a mock whose async context yields a client."""
    with mock.patch("aiosmtplib.SMTP") as smtp_class:
        client = mock.AsyncMock()
        smtp_class.return_value.__aenter__ = mock.AsyncMock(return_value=client)
        smtp_class.return_value.__aexit__ = mock.AsyncMock(return_value=False)
        smtp_class.client = client
        yield smtp_class


async def _send(provider: SMTPProvider) -> bool:
    return await provider.send_email(
        to="recipient@example.com",
        subject="Test Subject",
        html_body="<p>HTML Body</p>",
        text_body="Text Body",
        from_email="sender@example.com",
        from_name="Sender Name",
    )


@pytest.mark.asyncio
async def test_smtp_send_email_success(smtp_provider, mock_smtp_class) -> None:
    """Test successful email sending with STARTTLS and login."""
    success = await _send(smtp_provider)

    assert success is True
    mock_smtp_class.assert_called_once_with(
        hostname="smtp.example.com",
        port=587,
        use_tls=False,
        start_tls=False,
        timeout=10,
    )
    client = mock_smtp_class.client
    client.starttls.assert_awaited_once()
    client.login.assert_awaited_once_with("test_user", "test_password")
    client.send_message.assert_awaited_once()

    sent_message = client.send_message.call_args[0][0]
    assert sent_message["Subject"] == "Test Subject"
    assert sent_message["To"] == "recipient@example.com"
    assert sent_message["From"] == "Sender Name <sender@example.com>"
    assert sent_message.is_multipart()


@pytest.mark.asyncio
async def test_smtp_send_email_ssl(smtp_settings, mock_smtp_class) -> None:
    """Test implicit TLS skips STARTTLS."""
    provider = SMTPProvider(
        smtp_settings.model_copy(update={"port": 465, "use_ssl": True, "use_tls": False})
    )

    assert await _send(provider) is True

    mock_smtp_class.assert_called_once_with(
        hostname="smtp.example.com",
        port=465,
        use_tls=True,
        start_tls=False,
        timeout=10,
    )
    mock_smtp_class.client.starttls.assert_not_called()


@pytest.mark.asyncio
async def test_smtp_send_email_without_credentials(smtp_settings, mock_smtp_class) -> None:
    provider = SMTPProvider(smtp_settings.model_copy(update={"username": None}))

    await _send(provider)

    mock_smtp_class.client.login.assert_not_called()
    mock_smtp_class.client.send_message.assert_awaited_once()


@pytest.mark.asyncio
async def test_smtp_send_email_failure_is_raised(smtp_provider, mock_smtp_class) -> None:
    """Test that transport errors reach the caller."""
    mock_smtp_class.client.send_message.side_effect = aiosmtplib.SMTPException("boom")

    with pytest.raises(aiosmtplib.SMTPException):
        await _send(smtp_provider)


def test_smtp_settings_from_application_settings(settings) -> None:
    app_settings = settings.model_copy(
        update={
            "smtp_host": "mail.example.com",
            "smtp_port": 2525,
            "smtp_username": "mailer",
            "smtp_password": "pw",
        }
    )

    smtp_settings = SMTPSettings.from_settings(app_settings)

    assert smtp_settings.host == "mail.example.com"
    assert smtp_settings.port == 2525
    assert smtp_settings.username == "mailer"
    assert smtp_settings.password == "pw"
    assert smtp_settings.use_tls is True
    assert smtp_settings.use_ssl is False
