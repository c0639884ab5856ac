"""
Mailer used by the auth flows.

``send_template`` renders a template and hands it to SMTP. It never raises:
a mail outage must not break signup or password reset, so every failure is
logged and reported as ``False``. Intended for use inside FastAPI
BackgroundTasks.
"""
from __future__ import annotations

import logging
from typing import Protocol

from dentalportal.config import Settings
from dentalportal.email import smtp
from dentalportal.email.templates import EmailKind, render

logger = logging.getLogger(__name__)


class Mailer(Protocol):
    async def send_template(
        self, kind: EmailKind, recipient: str, variables: dict[str, object]
    ) -> bool: ...


class SmtpMailer:
    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    async def send_template(
        self, kind: EmailKind, recipient: str, variables: dict[str, object]
    ) -> bool:
        try:
            rendered = render(kind, variables)
        except KeyError as exc:
            logger.error("Email template %s missing variable %s", kind.value, exc)
            return False
        name = str(variables.get("first_name", ""))
        sent = await smtp.deliver(recipient, name, rendered.subject, rendered.html, self._settings)
        if sent:
            logger.info("Sent %s email to %s", kind.value, recipient)
        return sent
