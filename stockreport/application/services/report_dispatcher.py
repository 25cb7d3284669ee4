"""
Application service: composes the report email and hands it to the mail transport.

The company name used as the subject comes from ISymbolDirectory.display_name,
which is fail-open: when the directory is unavailable the raw symbol is used.
Depends only on Domain ports and entities: no infrastructure imports.
"""

from datetime import date
from html import escape
from typing import Optional

from loguru import logger

from stockreport.domain.entities.mail import MailAttachment, OutgoingMail
from stockreport.domain.entities.stock_request import DeliveryResult
from stockreport.domain.exceptions import ConfigurationError, DeliveryError, StockReportError
from stockreport.domain.ports.mail_transport_port import IMailTransport
from stockreport.domain.ports.symbol_directory_port import ISymbolDirectory


def attachment_name(symbol: str) -> str:
    return f"{symbol}_stock_data.csv"


class ReportDispatcher:
    def __init__(
        self,
        directory: ISymbolDirectory,
        transport: IMailTransport,
        sender: Optional[str],
    ) -> None:
        """
        Args:
            directory: used only to resolve the display name for the subject.
            transport: IMailTransport implementation (SMTP, SES, ...).
            sender:    From address; None means it was not configured.
        """
        self._directory = directory
        self._transport = transport
        self._sender = sender

    def compose(
        self,
        email: str,
        symbol: str,
        start_date: date,
        end_date: date,
        export: str,
    ) -> OutgoingMail:
        if not self._sender:
            raise ConfigurationError("SMTP_FROM")

        company_name = self._directory.display_name(symbol)
        start, end = start_date.isoformat(), end_date.isoformat()
        html = (
            f"<p>Please find attached the historical stock data for "
            f"<strong>{escape(company_name)}</strong> ({escape(symbol)}).</p>"
            f"<p>Period: {start} to {end}</p>"
        )
        return OutgoingMail(
            sender=self._sender,
            to=email,
            subject=company_name,
            text=f"Historical stock data from {start} to {end}",
            html=html,
            attachments=(MailAttachment(filename=attachment_name(symbol), content=export),),
        )

    def dispatch(
        self,
        email: str,
        symbol: str,
        start_date: date,
        end_date: date,
        export: str,
    ) -> DeliveryResult:
        """Send the export for *symbol* to *email* as a single CSV attachment.

        Raises:
            ConfigurationError: if no sender address is configured.
            DeliveryError: wrapping any transport failure. Not retried.
        """
        mail = self.compose(email, symbol, start_date, end_date, export)
        try:
            message_id = self._transport.send(mail)
        except StockReportError:
            raise
        except Exception as exc:
            raise DeliveryError(f"Mail transport failed for {email}: {exc}") from exc

        logger.info("Report for {} sent to {} (message id {})", symbol, email, message_id)
        return DeliveryResult(delivered=True, provider_message_id=message_id)
