"""
tron_gateway - TRON address normalization and TRC-20 transfer orchestration
"""

__version__ = "0.1.0"

from tron_gateway.address import AddressCodec, TronAddressCodec
from tron_gateway.chain import ChainClientPort, TronChainClient
from tron_gateway.config import GatewaySettings, NetworkConfig
from tron_gateway.exceptions import (
    ConfigurationError,
    GatewayError,
    InvalidAddressError,
    InvalidAmountError,
    InvalidCredentialError,
    MissingCredentialError,
    UnsupportedNetworkError,
    UpstreamError,
    ValidationError,
)
from tron_gateway.services import TokenTransferService
from tron_gateway.types import (
    AccountResources,
    AddressForms,
    TokenAllowance,
    TokenBalance,
    TokenMeta,
    TransferOptions,
    TransferPage,
    TransferRequest,
    TransferResult,
    TrxBalance,
)
from tron_gateway.utils.amount import from_smallest_units, to_smallest_units

__all__ = [
    "__version__",
    # Types
    "AccountResources",
    "AddressForms",
    "TokenAllowance",
    "TokenBalance",
    "TokenMeta",
    "TransferOptions",
    "TransferPage",
    "TransferRequest",
    "TransferResult",
    "TrxBalance",
    # Exceptions
    "GatewayError",
    "ValidationError",
    "InvalidAddressError",
    "InvalidAmountError",
    "InvalidCredentialError",
    "MissingCredentialError",
    "UpstreamError",
    "ConfigurationError",
    "UnsupportedNetworkError",
    # Address codecs
    "AddressCodec",
    "TronAddressCodec",
    # Amount conversion
    "from_smallest_units",
    "to_smallest_units",
    # Chain
    "ChainClientPort",
    "TronChainClient",
    # Configuration
    "GatewaySettings",
    "NetworkConfig",
    # Services
    "TokenTransferService",
]
