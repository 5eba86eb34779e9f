"""
Address codec module
"""

from tron_gateway.address.converter import AddressCodec, TronAddressCodec

__all__ = [
    "AddressCodec",
    "TronAddressCodec",
]
