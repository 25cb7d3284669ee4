"""
Infrastructure adapter: Amazon SES → IMailTransport.

Sends the same MIME message as the SMTP adapter through SendRawEmail so the
CSV attachment is preserved. The boto3 client is created once per adapter;
SES itself keeps no per-send state.
"""

from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from stockreport.domain.entities.mail import OutgoingMail
from stockreport.domain.exceptions import DeliveryError
from stockreport.domain.ports.mail_transport_port import IMailTransport
from stockreport.infrastructure.mail.mime import build_mime_message


class SesMailTransport(IMailTransport):
    def __init__(self, region: str = "us-east-1", client: Optional[Any] = None) -> None:
        self._client = client or boto3.client("ses", region_name=region)

    def send(self, mail: OutgoingMail) -> str:
        msg = build_mime_message(mail)
        try:
            response = self._client.send_raw_email(
                Source=mail.sender,
                Destinations=[mail.to],
                RawMessage={"Data": msg.as_bytes()},
            )
        except (BotoCoreError, ClientError) as exc:
            raise DeliveryError(f"SES delivery to {mail.to} failed: {exc}") from exc
        return response["MessageId"]
