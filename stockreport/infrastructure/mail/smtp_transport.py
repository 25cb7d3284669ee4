"""
Infrastructure adapter: SMTP server → IMailTransport.

Supports implicit TLS ("ssl"), STARTTLS ("starttls") and plain ("none")
connections. A new connection is opened per message; no shared transport
handle is kept between sends.
"""

import smtplib
import ssl
from typing import Optional

from loguru import logger

from stockreport.domain.entities.mail import OutgoingMail
from stockreport.domain.exceptions import ConfigurationError, DeliveryError
from stockreport.domain.ports.mail_transport_port import IMailTransport
from stockreport.infrastructure.mail.mime import build_mime_message

SECURITY_MODES = ("starttls", "ssl", "none")


class SmtpMailTransport(IMailTransport):
    def __init__(
        self,
        host: Optional[str],
        port: int = 587,
        user: Optional[str] = None,
        password: Optional[str] = None,
        security: str = "starttls",
        timeout: float = 30.0,
    ) -> None:
        if security not in SECURITY_MODES:
            raise ConfigurationError("SMTP_SECURITY")
        self._host = host
        self._port = port
        self._user = user
        self._password = password
        self._security = security
        self._timeout = timeout

    def send(self, mail: OutgoingMail) -> str:
        if not self._host:
            raise ConfigurationError("SMTP_HOST")

        msg = build_mime_message(mail)
        logger.debug("Sending mail to {} via {}:{} ({})", mail.to, self._host, self._port, self._security)
        try:
            if self._security == "ssl":
                with smtplib.SMTP_SSL(
                    self._host,
                    self._port,
                    timeout=self._timeout,
                    context=ssl.create_default_context(),
                ) as server:
                    self._login(server)
                    server.send_message(msg)
            else:
                with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
                    server.ehlo()
                    if self._security == "starttls":
                        server.starttls(context=ssl.create_default_context())
                        server.ehlo()
                    self._login(server)
                    server.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            raise DeliveryError(f"SMTP delivery to {mail.to} failed: {exc}") from exc

        return msg["Message-ID"]

    def _login(self, server: smtplib.SMTP) -> None:
        if self._user:
            server.login(self._user, self._password or "")
