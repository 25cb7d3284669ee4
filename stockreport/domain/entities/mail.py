"""
Domain entities for an outgoing email, independent of the transport used to send it.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class MailAttachment:
    filename: str
    content: str
    content_type: str = "text/csv"


@dataclass(frozen=True)
class OutgoingMail:
    sender: str
    to: str
    subject: str
    text: str
    html: Optional[str] = None
    attachments: tuple[MailAttachment, ...] = field(default_factory=tuple)
