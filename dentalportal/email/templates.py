"""Transactional email templates.

Bodies use ``str.format`` placeholders; every substituted value is HTML
escaped before rendering.
"""
from __future__ import annotations

import enum
import html
from typing import NamedTuple


class EmailKind(str, enum.Enum):
    EMAIL_VERIFICATION = "email_verification"
    WELCOME = "welcome"
    PASSWORD_RESET = "password_reset"


class Template(NamedTuple):
    subject: str
    html: str


class RenderedEmail(NamedTuple):
    subject: str
    html: str


_FOOTER = (
    "<p style='color:#6b7280;font-size:13px'>"
    "This is an automated message from DentistPortal. Do not reply to this email.</p>"
)

TEMPLATES: dict[EmailKind, Template] = {
    EmailKind.EMAIL_VERIFICATION: Template(
        subject="Verify Your DentistPortal Account",
        html=(
            "<p>Hi {first_name},</p>"
            "<p>Thanks for registering on {registration_date}. "
            "Please confirm your email address to activate your account:</p>"
            "<p><a href='{verification_url}'>Verify my email</a></p>"
            "<p>This link expires in 24 hours.</p>" + _FOOTER
        ),
    ),
    EmailKind.WELCOME: Template(
        subject="Welcome to DentistPortal - Account Activated!",
        html=(
            "<p>Hi {first_name},</p>"
            "<p>Your email is verified and your account is active.</p>"
            "<p><a href='{login_url}'>Log in to DentistPortal</a></p>" + _FOOTER
        ),
    ),
    EmailKind.PASSWORD_RESET: Template(
        subject="Reset Your DentistPortal Password",
        html=(
            "<p>Hi {first_name},</p>"
            "<p>We received a request to reset your password. "
            "The link below is valid for 15 minutes:</p>"
            "<p><a href='{reset_url}'>Reset my password</a></p>"
            "<p>If you did not request this, you can ignore this email.</p>" + _FOOTER
        ),
    ),
}


def render(kind: EmailKind, variables: dict[str, object]) -> RenderedEmail:
    """Fill ``kind``'s template. Raises KeyError when a placeholder is missing."""
    template = TEMPLATES[kind]
    escaped = {key: html.escape(str(value), quote=True) for key, value in variables.items()}
    return RenderedEmail(subject=template.subject, html=template.html.format_map(escaped))
