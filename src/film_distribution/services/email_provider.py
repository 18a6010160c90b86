"""
Email Provider Service
Adapter for sending emails (dev logging vs production SMTP)
"""
import logging
import smtplib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class EmailMessage:
    """Email message structure"""
    to: str
    subject: str
    html_body: str
    text_body: Optional[str] = None
    from_address: Optional[str] = None


class EmailProvider(ABC):
    """
    Abstract email provider interface

    Implementations:
    - DevEmailProvider: Logs emails (development, tests)
    - SMTPEmailProvider: Sends via SMTP (production)
    """

    @abstractmethod
    def send(self, message: EmailMessage) -> bool:
        """
        Send an email

        Returns:
            True if sent successfully, False otherwise
        """

    @abstractmethod
    def is_available(self) -> bool:
        """True if the provider is configured and ready to send"""


class DevEmailProvider(EmailProvider):
    """Development email provider - logs emails instead of sending"""

    def send(self, message: EmailMessage) -> bool:
        logger.info("=" * 60)
        logger.info("EMAIL (DEV MODE - NOT ACTUALLY SENT)")
        logger.info(f"To: {message.to}")
        logger.info(f"From: {message.from_address or 'noreply@example.com'}")
        logger.info(f"Subject: {message.subject}")
        if message.text_body:
            logger.info("-" * 60)
            logger.info(f"Text Body:\n{message.text_body}")
        logger.info("=" * 60)
        return True

    def is_available(self) -> bool:
        return True


class SMTPEmailProvider(EmailProvider):
    """
    SMTP email provider for production

    Configured via SMTP_HOST, SMTP_PORT, SMTP_USER, SMTP_PASSWORD and
    SMTP_FROM_ADDRESS.
    """

    def __init__(
        self,
        host: str,
        port: int,
        user: str,
        password: str,
        from_address: str,
        use_tls: bool = True
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.from_address = from_address
        self.use_tls = use_tls

    def send(self, message: EmailMessage) -> bool:
        """Send email via SMTP"""
        msg = MIMEMultipart('alternative')
        msg['Subject'] = message.subject
        msg['From'] = message.from_address or self.from_address
        msg['To'] = message.to
        if message.text_body:
            msg.attach(MIMEText(message.text_body, 'plain'))
        msg.attach(MIMEText(message.html_body, 'html'))

        try:
            with smtplib.SMTP(self.host, self.port, timeout=30) as server:
                if self.use_tls:
                    server.starttls()
                server.login(self.user, self.password)
                server.send_message(msg)
            logger.info(f"Email sent to {message.to}: {message.subject}")
            return True
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {message.to}: {e}", exc_info=True)
            return False

    def is_available(self) -> bool:
        return all([self.host, self.port, self.user, self.password, self.from_address])


# Singleton instance
_email_provider: Optional[EmailProvider] = None


def get_email_provider() -> EmailProvider:
    """
    Get or create email provider singleton

    Returns SMTPEmailProvider when SMTP is configured, DevEmailProvider otherwise
    """
    global _email_provider

    if _email_provider is None:
        from ..config import config

        if config.smtp_configured:
            try:
                smtp_port = int(config.SMTP_PORT)
            except ValueError:
                logger.warning(f"Invalid SMTP_PORT value: {config.SMTP_PORT}, using default 587")
                smtp_port = 587
            logger.info(f"Email provider: SMTP ({config.SMTP_HOST}:{smtp_port})")
            _email_provider = SMTPEmailProvider(
                host=config.SMTP_HOST,
                port=smtp_port,
                user=config.SMTP_USER,
                password=config.SMTP_PASSWORD,
                from_address=config.SMTP_FROM_ADDRESS,
                use_tls=True
            )
        else:
            logger.info("Email provider: DevEmailProvider (logs only; set SMTP_HOST, SMTP_USER, SMTP_PASSWORD to send)")
            _email_provider = DevEmailProvider()

    return _email_provider
