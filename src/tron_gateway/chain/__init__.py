"""
Chain client port and TRON implementation
"""

from tron_gateway.chain.port import ChainClientPort
from tron_gateway.chain.tron_client import TronChainClient, create_async_tron_client

__all__ = [
    "ChainClientPort",
    "TronChainClient",
    "create_async_tron_client",
]
