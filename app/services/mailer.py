"""
Report Mailer

Sends the report PDF through the configured SMTP relay as a
multipart/alternative (text + HTML) message with the PDF attached.
"""
import smtplib
import ssl
from email.message import EmailMessage
from email.utils import formataddr, make_msgid
from typing import Optional

from app.config import SmtpConfig
from app.utils import ConfigurationError, EmailDeliveryError, get_logger

logger = get_logger(__name__)


class ReportMailer:
    """SMTP delivery of report emails."""

    def __init__(self, config: Optional[SmtpConfig] = None, brand: str = "Hydrawav3"):
        self.config = config or SmtpConfig()
        self.brand = brand

    def default_subject(self) -> str:
        return f"Your {self.brand} Diagnostic Report"

    def _tls_context(self) -> ssl.SSLContext:
        context = ssl.create_default_context()
        if not self.config.verify_tls:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        return context

    def build_message(
        self,
        to: str,
        subject: Optional[str],
        text: str,
        html: str,
        attachment: bytes,
        filename: str,
    ) -> EmailMessage:
        message = EmailMessage()
        message["From"] = formataddr((self.brand, self.config.from_email))
        message["To"] = to
        message["Subject"] = subject or self.default_subject()

        domain = self.config.from_email.rsplit("@", 1)[-1] if "@" in self.config.from_email else None
        message["Message-ID"] = make_msgid(domain=domain)

        message.set_content(text)
        message.add_alternative(html, subtype="html")
        message.add_attachment(
            attachment,
            maintype="application",
            subtype="pdf",
            filename=filename,
        )
        return message

    def send(
        self,
        to: str,
        subject: Optional[str],
        text: str,
        html: str,
        attachment: bytes,
        filename: str,
    ) -> str:
        """
        Deliver one report email.

        Returns:
            The Message-ID of the sent message
        """
        if not self.config.is_complete:
            raise ConfigurationError("SMTP configuration missing", component="smtp")

        message = self.build_message(to, subject, text, html, attachment, filename)
        context = self._tls_context()

        try:
            if self.config.use_ssl:
                smtp = smtplib.SMTP_SSL(
                    self.config.host,
                    self.config.port,
                    context=context,
                    timeout=self.config.timeout_seconds,
                )
            else:
                smtp = smtplib.SMTP(
                    self.config.host,
                    self.config.port,
                    timeout=self.config.timeout_seconds,
                )

            with smtp:
                if not self.config.use_ssl:
                    smtp.ehlo()
                    if smtp.has_extn("starttls"):
                        smtp.starttls(context=context)
                        smtp.ehlo()
                smtp.login(self.config.username, self.config.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"SMTP delivery to {to} failed: {e}")
            raise EmailDeliveryError(f"Failed to send email: {e}", recipient=to) from e

        message_id = message["Message-ID"]
        logger.info(f"Report email {message_id} sent to {to}")
        return message_id
