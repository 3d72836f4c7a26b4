# school_admin/gateways/email_templates.py
"""HTML bodies for outgoing mail. Each builder returns (subject, html)."""
from html import escape
from typing import Tuple

from ..core.config import settings

_LAYOUT = """<!DOCTYPE html>
<html>
<head>
  <style>
    body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
    .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
    .header {{ background: {accent}; color: white; padding: 20px; text-align: center; }}
    .content {{ padding: 20px; background: #f9fafb; }}
    .footer {{ text-align: center; padding: 20px; color: #666; }}
  </style>
</head>
<body>
  <div class="container">
    <div class="header">{header}</div>
    <div class="content">{body}</div>
    <div class="footer"><p>{school}<br>Contact: {contact}</p></div>
  </div>
</body>
</html>
"""


def _render(header: str, body: str, accent: str = "#1e40af") -> str:
    return _LAYOUT.format(
        accent=accent,
        header=header,
        body=body,
        school=escape(settings.school_name),
        contact=escape(settings.school_contact),
    )


def admission_received(admission) -> Tuple[str, str]:
    school = escape(settings.school_name)
    header = f"<h1>{school}</h1>"
    if settings.school_address:
        header += f"<p>{escape(settings.school_address)}</p>"
    body = (
        "<h2>Admission Application Received</h2>"
        f"<p>Dear {escape(admission.father_name)},</p>"
        "<p>We have received your admission application for "
        f"<strong>{escape(admission.first_name)} {escape(admission.last_name)}</strong> "
        f"for class <strong>{escape(admission.class_applied.value)}</strong>.</p>"
        f"<p><strong>Application Number:</strong> {escape(admission.application_number)}</p>"
        "<p>Your application is currently under review. We will notify you once it has been processed.</p>"
        "<p>Please keep this application number for future reference.</p>"
    )
    return f"Admission Application Received - {settings.school_name}", _render(header, body)


def admission_approved(admission, student) -> Tuple[str, str]:
    body = (
        "<h2>Congratulations!</h2>"
        "<p>Your admission application has been approved.</p>"
        f"<p>Dear {escape(admission.father_name)},</p>"
        "<p>We are pleased to inform you that the admission of "
        f"<strong>{escape(student.first_name)} {escape(student.last_name)}</strong> has been approved.</p>"
        f"<p><strong>Admission Number:</strong> {escape(student.admission_number)}</p>"
        f"<p><strong>Class:</strong> {escape(student.class_name.value)} - {escape(student.section)}</p>"
        "<p>Please visit the school office to complete the remaining admission formalities.</p>"
    )
    return f"Admission Approved - {settings.school_name}", _render("<h1>Admission Approved!</h1>", body, accent="#059669")


def contact_received(contact) -> Tuple[str, str]:
    body = (
        "<h2>New Contact Form Submission</h2>"
        f"<p><strong>Name:</strong> {escape(contact.name)}</p>"
        f"<p><strong>Email:</strong> {escape(contact.email)}</p>"
        f"<p><strong>Phone:</strong> {escape(contact.phone)}</p>"
        f"<p><strong>Subject:</strong> {escape(contact.subject)}</p>"
        "<p><strong>Message:</strong></p>"
        f"<p>{escape(contact.message)}</p>"
    )
    return f"New Contact Form Submission: {contact.subject}", _render(f"<h1>{escape(settings.school_name)}</h1>", body)


def contact_reply(contact) -> Tuple[str, str]:
    body = (
        f"<h2>Reply from {escape(settings.school_name)}</h2>"
        f"<p>Dear {escape(contact.name)},</p>"
        f"<p>{escape(contact.reply_message or '')}</p>"
        "<hr>"
        "<p><strong>Original Message:</strong></p>"
        f"<p>{escape(contact.message)}</p>"
    )
    return f"Re: {contact.subject}", _render(f"<h1>{escape(settings.school_name)}</h1>", body)
