"""
Runtime configuration read from environment variables.

Entrypoints call python-dotenv's load_dotenv() before Settings.from_env(), so a
local .env file works the same as real environment variables. Unset values stay
None: the adapter that needs one raises ConfigurationError when it is used.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional
from urllib.parse import urlparse

from stockreport.domain.exceptions import ConfigurationError


def _optional(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(name, "").strip()
    return value or None


@dataclass(frozen=True)
class Settings:
    nasdaq_api_url: Optional[str] = None
    rapid_api_url: Optional[str] = None
    rapid_api_key: Optional[str] = None
    rapid_api_host: Optional[str] = None
    mail_backend: str = "smtp"
    mail_from: Optional[str] = None
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_security: str = "starttls"
    aws_region: str = "us-east-1"
    http_timeout: float = 30.0
    log_level: str = "INFO"

    @property
    def api_host(self) -> Optional[str]:
        """X-RapidAPI-Host header: explicit setting, else the host of the endpoint URL."""
        if self.rapid_api_host:
            return self.rapid_api_host
        if self.rapid_api_url:
            return urlparse(self.rapid_api_url).hostname
        return None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        try:
            smtp_port = int(env.get("SMTP_PORT") or cls.smtp_port)
        except ValueError as exc:
            raise ConfigurationError("SMTP_PORT") from exc
        try:
            http_timeout = float(env.get("HTTP_TIMEOUT") or cls.http_timeout)
        except ValueError as exc:
            raise ConfigurationError("HTTP_TIMEOUT") from exc

        return cls(
            nasdaq_api_url=_optional(env, "NASDAQ_API"),
            rapid_api_url=_optional(env, "RAPID_API_URL"),
            rapid_api_key=_optional(env, "RAPID_API_KEY"),
            rapid_api_host=_optional(env, "RAPID_API_HOST"),
            mail_backend=(_optional(env, "MAIL_BACKEND") or cls.mail_backend).lower(),
            mail_from=_optional(env, "SMTP_FROM"),
            smtp_host=_optional(env, "SMTP_HOST"),
            smtp_port=smtp_port,
            smtp_user=_optional(env, "SMTP_USER"),
            smtp_password=_optional(env, "SMTP_PASS"),
            smtp_security=(_optional(env, "SMTP_SECURITY") or cls.smtp_security).lower(),
            aws_region=_optional(env, "AWS_DEFAULT_REGION") or cls.aws_region,
            http_timeout=http_timeout,
            log_level=(_optional(env, "LOG_LEVEL") or cls.log_level).upper(),
        )
