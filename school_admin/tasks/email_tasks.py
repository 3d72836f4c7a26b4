# school_admin/tasks/email_tasks.py
"""Background email delivery."""
import logging

from ..celery_worker import celery_app
from ..core.config import settings
from ..gateways.mailer import SmtpMailer

logger = logging.getLogger(__name__)


@celery_app.task(name="school_admin.send_email")
def send_email(to: str, subject: str, html: str) -> bool:
    """Deliver one message. Not retried: a lost email is an accepted outcome."""
    mailer = SmtpMailer.from_settings(settings)
    if mailer is None:
        logger.warning(f"SMTP not configured, dropping email to {to}: {subject}")
        return False
    mailer.send(to, subject, html)
    return True


def enqueue_email(to: str, subject: str, html: str) -> None:
    """Hand a message to the worker (blocking broker round-trip)"""
    send_email.delay(to, subject, html)
