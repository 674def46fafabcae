"""Email channel port."""

from abc import ABC, abstractmethod


class EmailPort(ABC):
    @abstractmethod
    def send(self, to: str, subject: str, body: str, html_body: str | None = None, sender: str | None = None) -> dict:
        """Send one email.

        Returns a dict with ``status`` ("sent" or "failed"), ``message_id``
        and, on failure, ``error``.
        """
        ...
