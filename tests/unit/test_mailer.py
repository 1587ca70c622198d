"""
Unit tests for SMTP settings and report email delivery (smtplib mocked).
"""
import smtplib
from unittest.mock import patch

import pytest

from app.config import SmtpConfig
from app.services import ReportMailer
from app.utils import ConfigurationError, EmailDeliveryError


def _send(mailer: ReportMailer, subject=None) -> str:
    return mailer.send(
        "patient@example.com",
        subject,
        "Dear Jordan,",
        "<p>Dear Jordan,</p>",
        b"%PDF-1.7",
        "Hydrawav3_Report_2026-10-18.pdf",
    )


class TestSmtpConfig:
    def test_is_complete(self, smtp_config):
        assert smtp_config.is_complete is True
        assert SmtpConfig(host="h", username="u", password=None).is_complete is False

    def test_from_email_falls_back_to_username(self):
        config = SmtpConfig(host="h", username="reports@clinic.com", password="p", from_email=None)
        assert config.from_email == "reports@clinic.com"

    def test_alternative_variable_names(self, monkeypatch):
        for name in ("SMTP_HOST", "SMTP_LOGIN_EMAIL", "SMTP_SERVER_KEY", "SMTP_FROM_EMAIL"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setenv("SMTP_SERVER", "mail.clinic.com")
        monkeypatch.setenv("SMTP_USER", "bot@clinic.com")
        monkeypatch.setenv("SMTP_PASSWORD", "secret")
        monkeypatch.setenv("SMTP_PORT", "465")

        config = SmtpConfig()

        assert config.host == "mail.clinic.com"
        assert config.username == "bot@clinic.com"
        assert config.password == "secret"
        assert config.use_ssl is True
        assert config.is_complete is True


class TestBuildMessage:
    def test_structure(self, smtp_config):
        mailer = ReportMailer(smtp_config, brand="Hydrawav3")
        message = mailer.build_message(
            "patient@example.com", None, "plain body", "<p>html body</p>", b"%PDF-1.7", "report.pdf"
        )

        assert message["To"] == "patient@example.com"
        assert message["From"] == "Hydrawav3 <reports@example.com>"
        assert message["Subject"] == "Your Hydrawav3 Diagnostic Report"
        assert message["Message-ID"].endswith("@example.com>")

        attachments = list(message.iter_attachments())
        assert len(attachments) == 1
        assert attachments[0].get_filename() == "report.pdf"
        assert attachments[0].get_content_type() == "application/pdf"
        assert attachments[0].get_content() == b"%PDF-1.7"

        body = message.get_body(preferencelist=("html",))
        assert "html body" in body.get_content()

    def test_custom_subject(self, smtp_config):
        message = ReportMailer(smtp_config).build_message("a@b.c", "Your results", "t", "<p>h</p>", b"x", "r.pdf")
        assert message["Subject"] == "Your results"


class TestSend:
    @patch("app.services.mailer.smtplib.SMTP")
    def test_starttls_delivery(self, mock_smtp, smtp_config):
        server = mock_smtp.return_value
        server.has_extn.return_value = True

        message_id = _send(ReportMailer(smtp_config))

        mock_smtp.assert_called_once_with("smtp.example.com", 587, timeout=30.0)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("reports@example.com", "secret")
        sent = server.send_message.call_args.args[0]
        assert sent["Message-ID"] == message_id
        assert sent["To"] == "patient@example.com"

    @patch("app.services.mailer.smtplib.SMTP")
    def test_plain_relay_without_starttls(self, mock_smtp, smtp_config):
        server = mock_smtp.return_value
        server.has_extn.return_value = False

        _send(ReportMailer(smtp_config))

        server.starttls.assert_not_called()
        server.send_message.assert_called_once()

    @patch("app.services.mailer.smtplib.SMTP")
    @patch("app.services.mailer.smtplib.SMTP_SSL")
    def test_implicit_tls_on_465(self, mock_ssl, mock_smtp, smtp_config):
        smtp_config.port = 465
        server = mock_ssl.return_value

        _send(ReportMailer(smtp_config))

        mock_smtp.assert_not_called()
        assert mock_ssl.call_args.args == ("smtp.example.com", 465)
        server.starttls.assert_not_called()
        server.send_message.assert_called_once()

    @patch("app.services.mailer.smtplib.SMTP")
    def test_auth_failure(self, mock_smtp, smtp_config):
        server = mock_smtp.return_value
        server.login.side_effect = smtplib.SMTPAuthenticationError(535, b"bad credentials")

        with pytest.raises(EmailDeliveryError) as exc_info:
            _send(ReportMailer(smtp_config))

        assert exc_info.value.recipient == "patient@example.com"
        assert exc_info.value.status_code == 500

    @patch("app.services.mailer.smtplib.SMTP", side_effect=OSError("connection refused"))
    def test_connection_failure(self, mock_smtp, smtp_config):
        with pytest.raises(EmailDeliveryError, match="connection refused"):
            _send(ReportMailer(smtp_config))

    @patch("app.services.mailer.smtplib.SMTP")
    def test_incomplete_configuration(self, mock_smtp):
        mailer = ReportMailer(SmtpConfig(host=None, username=None, password=None))

        with pytest.raises(ConfigurationError, match="SMTP configuration missing"):
            _send(mailer)
        mock_smtp.assert_not_called()

    def test_tls_verification_is_configurable(self, smtp_config):
        assert ReportMailer(smtp_config)._tls_context().check_hostname is False

        smtp_config.verify_tls = True
        assert ReportMailer(smtp_config)._tls_context().check_hostname is True
