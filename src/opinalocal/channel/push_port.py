"""Browser push channel port."""

from abc import ABC, abstractmethod


class PushPort(ABC):
    @abstractmethod
    def send(self, subscription: dict, title: str, body: str, data: dict | None = None) -> dict:
        """Deliver one push message to a browser subscription.

        Same result shape as ``EmailPort.send``.
        """
        ...
