"""
Port (interface) for outgoing mail transports.
Infrastructure adapters (e.g. SmtpMailTransport, SesMailTransport) must implement this interface.
"""

from abc import ABC, abstractmethod

from stockreport.domain.entities.mail import OutgoingMail


class IMailTransport(ABC):
    @abstractmethod
    def send(self, mail: OutgoingMail) -> str:
        """Send *mail* once and return the provider's message identifier.

        Raises:
            DeliveryError: if the transport rejects or cannot deliver the message.
        """
        ...
