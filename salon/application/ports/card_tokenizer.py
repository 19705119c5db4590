from __future__ import annotations

from abc import ABC, abstractmethod

from salon.domain.entities.payment import GatewayConfig, TokenizeResult


class CaptureWidgetPort(ABC):
    """A card/wallet capture widget attached to one surface."""

    @abstractmethod
    async def tokenize(self) -> TokenizeResult:
        """Exchange the captured instrument for a single-use token. Never raises on declines."""
        raise NotImplementedError

    @abstractmethod
    def destroy(self) -> None:
        """Release the widget. Must be safe to call more than once."""
        raise NotImplementedError


class CardTokenizerPort(ABC):
    @abstractmethod
    def attach(self, config: GatewayConfig, surface: str) -> CaptureWidgetPort:
        """Attach a capture widget to `surface`. Raises SdkUnavailable if the SDK cannot load."""
        raise NotImplementedError
