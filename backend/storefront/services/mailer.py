from __future__ import annotations

import logging
from email.message import EmailMessage
from typing import Protocol

import aiosmtplib

from storefront.core.config import Settings

log = logging.getLogger(__name__)


class Mailer(Protocol):
    async def send(self, *, from_addr: str, to: str, subject: str, html: str) -> None:
        ...


def make_a_nice_email(text: str) -> str:
    return f"""
    <div class="email" style="
      border: 1px solid black;
      padding: 20px;
      font-family: sans-serif;
      line-height: 2;
      font-size: 20px;
    ">
      <h2>Hello There!</h2>
      <p>{text}</p>
    </div>
    """


class SmtpMailer:
    def __init__(self, settings: Settings):
        self.host = settings.SMTP_HOST
        self.port = settings.SMTP_PORT
        self.username = settings.SMTP_USERNAME
        self.password = settings.SMTP_PASSWORD
        self.start_tls = settings.SMTP_STARTTLS
        self.timeout = settings.SMTP_TIMEOUT_SEC

    async def send(self, *, from_addr: str, to: str, subject: str, html: str) -> None:
        msg = EmailMessage()
        msg["From"] = from_addr
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content("This message requires an HTML-capable mail client.")
        msg.add_alternative(html, subtype="html")

        await aiosmtplib.send(
            msg,
            hostname=self.host,
            port=self.port,
            username=self.username,
            password=self.password,
            start_tls=self.start_tls,
            timeout=self.timeout,
        )
        log.info("mail sent to=%s subject=%r", to, subject)
