"""
Address codec interface and TRON implementation
"""

from abc import ABC, abstractmethod

from tron_gateway.exceptions import InvalidAddressError
from tron_gateway.utils.address import (
    decode_base58check,
    is_base58_tron,
    is_hex41,
    payload_to_base58check,
)


class AddressCodec(ABC):
    """Abstract base class for address codecs"""

    @abstractmethod
    def is_valid(self, address: object) -> bool:
        """Return True if the address is in any accepted encoding. Never raises."""
        pass

    @abstractmethod
    def to_base58(self, address: str, field: str = "address") -> str:
        """Convert to Base58Check form (T...)"""
        pass

    @abstractmethod
    def to_hex(self, address: str, field: str = "address") -> str:
        """Convert to lowercase 41-prefixed hex form"""
        pass

    def normalize(self, address: str, field: str = "address") -> tuple[str, str]:
        """Return (base58, hex) for the address, validating it once"""
        return self.to_base58(address, field), self.to_hex(address, field)


class TronAddressCodec(AddressCodec):
    """TRON address codec.

    Both encodings carry the same 21-byte payload: byte 0 is the network
    prefix 0x41, bytes 1-20 are the account hash. Hex input is
    case-insensitive, Base58 input is not.
    """

    def is_valid(self, address: object) -> bool:
        return is_hex41(address) or is_base58_tron(address)

    def to_base58(self, address: str, field: str = "address") -> str:
        s = address.strip() if isinstance(address, str) else ""
        if is_base58_tron(s):
            return s
        if not is_hex41(s):
            raise InvalidAddressError(address, field=field)
        return payload_to_base58check(bytes.fromhex(s))

    def to_hex(self, address: str, field: str = "address") -> str:
        s = address.strip() if isinstance(address, str) else ""
        if is_hex41(s):
            return s.lower()
        payload = decode_base58check(s)
        if payload is None:
            raise InvalidAddressError(address, field=field)
        return payload.hex()
