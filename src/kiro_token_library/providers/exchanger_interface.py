from abc import ABC, abstractmethod

import httpx

from ..types import ParsedCredential, TokenExchangeResult


class TokenExchanger(ABC):
    """
    An interface for turning a parsed credential into an access credential
    using one provider-specific refresh protocol.
    """

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    @abstractmethod
    async def exchange(self, parsed: ParsedCredential, region: str) -> TokenExchangeResult:
        """
        Obtains an access credential for the account.

        Args:
            parsed: The credential recognized from the pasted input.
            region: The AWS region resolved for the account.

        Returns:
            A TokenExchangeResult; ``access_token`` is None only when the
            upstream answered successfully without one.
        """
        pass
