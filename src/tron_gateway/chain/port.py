"""
Chain client port - the capabilities the gateway consumes from a TRON client
"""

from abc import ABC, abstractmethod
from typing import Any


class ChainClientPort(ABC):
    """
    Abstract base class for chain clients.

    Implementations perform network I/O, signing and ABI encoding. Every
    async method is a suspension point. Failures must surface as UpstreamError.

    Cancelling a task awaiting send_contract_method or send_trx only stops
    the wait; a transaction that was already broadcast stays broadcast.
    """

    @abstractmethod
    async def read_balance(self, address: str) -> int:
        """
        Read the native TRX balance.

        Args:
            address: Account address (41-hex)

        Returns:
            Balance in sun
        """
        pass

    @abstractmethod
    async def read_account_resources(self, address: str) -> dict[str, Any]:
        """
        Read bandwidth/energy counters of an account.

        Args:
            address: Account address (Base58Check)

        Returns:
            Resource counters keyed by the node's field names
        """
        pass

    @abstractmethod
    async def read_contract_method(
        self,
        contract_address: str,
        method: str,
        args: list[Any],
    ) -> Any:
        """
        Call a constant contract method.

        Args:
            contract_address: Contract address (41-hex)
            method: Method name
            args: Method arguments

        Returns:
            Decoded return value
        """
        pass

    @abstractmethod
    async def send_contract_method(
        self,
        contract_address: str,
        method: str,
        args: list[Any],
        *,
        fee_limit: int,
        signing_key: str,
    ) -> str:
        """
        Build, sign and broadcast a contract transaction.

        Args:
            contract_address: Contract address (41-hex)
            method: Method name
            args: Method arguments. Token amounts arrive as raw decimal
                strings (e.g. "10500000"); the implementation encodes them
                for the ABI.
            fee_limit: Maximum fee in sun
            signing_key: Hex private key

        Returns:
            Transaction id
        """
        pass

    @abstractmethod
    async def send_trx(self, to: str, amount_sun: int, signing_key: str) -> str:
        """
        Build, sign and broadcast a native TRX transfer.

        Returns:
            Transaction id
        """
        pass

    @abstractmethod
    async def fetch_transfer_history(
        self,
        address: str,
        limit: int,
        cursor: str | None = None,
    ) -> dict[str, Any]:
        """
        Fetch one page of TRC-20 transfers touching an address.

        Args:
            address: Account address (Base58Check)
            limit: Page size
            cursor: Opaque cursor from the previous page

        Returns:
            The history endpoint's page as-is
        """
        pass

    @abstractmethod
    def derive_address_from_key(self, signing_key: str) -> str:
        """Return the Base58Check address controlled by the key.

        Pure key arithmetic with no I/O, so it is not a suspension point.
        """
        pass
