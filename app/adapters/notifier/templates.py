"""Email copy for submission notifications.

User-supplied values are HTML-escaped before being placed in HTML bodies.
"""

from __future__ import annotations

from html import escape
from typing import Any

_OPTIONAL_FIELDS = (("phone", "Phone"), ("company", "Company"))


def admin_subject(contact: dict[str, Any]) -> str:
    return f"New Contact Form Submission from {contact['name']}"


def acknowledgment_subject(company_name: str) -> str:
    return f"Thank you for contacting {company_name}"


def _optional_lines(contact: dict[str, Any]) -> list[tuple[str, str]]:
    return [(label, contact[key]) for key, label in _OPTIONAL_FIELDS if contact.get(key)]


def admin_text(contact: dict[str, Any], document_id: str) -> str:
    lines = [
        "New contact form submission",
        "",
        f"Name: {contact['name']}",
        f"Email: {contact['email']}",
    ]
    lines += [f"{label}: {value}" for label, value in _optional_lines(contact)]
    lines += ["", "Message:", contact["message"], "", f"Submission ID: {document_id}"]
    return "\n".join(lines)


def admin_html(contact: dict[str, Any], document_id: str) -> str:
    rows = [("Name", contact["name"]), ("Email", contact["email"])]
    rows += _optional_lines(contact)
    table = "".join(
        f"<tr><td><strong>{label}:</strong></td><td>{escape(value)}</td></tr>"
        for label, value in rows
    )
    message = escape(contact["message"]).replace("\n", "<br>")
    return (
        "<h2>New Contact Form Submission</h2>"
        f"<table>{table}</table>"
        f"<h3>Message:</h3><p>{message}</p>"
        f"<p><small>Submission ID: {escape(document_id)}</small></p>"
    )


def acknowledgment_text(contact: dict[str, Any], company_name: str) -> str:
    return "\n".join(
        [
            f"Hi {contact['name']},",
            "",
            f"Thank you for reaching out to {company_name}. We have received your "
            "message and will get back to you as soon as possible.",
            "",
            "Your message:",
            contact["message"],
            "",
            "Best regards,",
            f"The {company_name} Team",
        ]
    )


def acknowledgment_html(contact: dict[str, Any], company_name: str) -> str:
    company = escape(company_name)
    message = escape(contact["message"]).replace("\n", "<br>")
    return (
        f"<p>Hi {escape(contact['name'])},</p>"
        f"<p>Thank you for reaching out to {company}. We have received your message "
        "and will get back to you as soon as possible.</p>"
        f"<blockquote>{message}</blockquote>"
        f"<p>Best regards,<br>The {company} Team</p>"
    )
