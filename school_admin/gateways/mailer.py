# school_admin/gateways/mailer.py
"""SMTP delivery of transactional HTML email."""
from email.message import EmailMessage
from email.utils import formataddr
from typing import Optional
import logging
import re
import smtplib

logger = logging.getLogger(__name__)

_TAGS = re.compile(r"<[^>]+>")


class SmtpMailer:
    def __init__(self, host: str, port: int, user: Optional[str], password: Optional[str],
                 from_name: str, timeout: float = 30.0):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.from_name = from_name
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings) -> Optional["SmtpMailer"]:
        if not settings.smtp_host:
            return None
        return cls(
            settings.smtp_host,
            settings.smtp_port,
            settings.smtp_user,
            settings.smtp_password,
            settings.mail_from_name,
            timeout=settings.gateway_timeout_seconds,
        )

    def build_message(self, to: str, subject: str, html: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = formataddr((self.from_name, self.user or f"no-reply@{self.host}"))
        message["To"] = to
        message["Subject"] = subject
        message.set_content(_TAGS.sub("", html).strip() or subject)
        message.add_alternative(html, subtype="html")
        return message

    def send(self, to: str, subject: str, html: str) -> None:
        """Blocking send over STARTTLS; raises smtplib.SMTPException on failure"""
        message = self.build_message(to, subject, html)
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            smtp.ehlo()
            if smtp.has_extn("starttls"):
                smtp.starttls()
                smtp.ehlo()
            if self.user and self.password:
                smtp.login(self.user, self.password)
            smtp.send_message(message)
        logger.info(f"Email sent to {to}: {subject}")
