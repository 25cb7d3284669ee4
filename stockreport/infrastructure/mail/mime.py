"""
Builds the MIME message shared by every mail transport.
"""

from email.message import EmailMessage
from email.utils import formatdate, make_msgid

from stockreport.domain.entities.mail import OutgoingMail


def build_mime_message(mail: OutgoingMail) -> EmailMessage:
    """Render *mail* as a multipart message with a fresh Message-ID.

    Attachments are added even when their content is only a CSV header line.
    """
    msg = EmailMessage()
    msg["From"] = mail.sender
    msg["To"] = mail.to
    msg["Subject"] = mail.subject
    msg["Date"] = formatdate(localtime=False)
    msg["Message-ID"] = make_msgid()

    msg.set_content(mail.text)
    if mail.html:
        msg.add_alternative(mail.html, subtype="html")

    for attachment in mail.attachments:
        maintype, _, subtype = attachment.content_type.partition("/")
        msg.add_attachment(
            attachment.content.encode("utf-8"),
            maintype=maintype,
            subtype=subtype or "octet-stream",
            filename=attachment.filename,
        )
    return msg
