"""
Pytest configuration and shared fixtures
"""

from unittest.mock import AsyncMock, MagicMock

import base58
import pytest

from tron_gateway.config import GatewaySettings

MOCK_PRIVATE_KEY = "0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"


def make_address(seed: int) -> tuple[str, str]:
    """Build a valid (base58, hex) address pair from a one-byte seed"""
    payload = bytes([0x41]) + bytes((seed + i) % 256 for i in range(20))
    return base58.b58encode_check(payload).decode(), payload.hex()


@pytest.fixture(name="make_address")
def make_address_fixture():
    return make_address


@pytest.fixture(name="contract_reader")
def contract_reader_fixture():
    return contract_reader


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def mock_private_key():
    """Mock TRON private key for tests"""
    return MOCK_PRIVATE_KEY


@pytest.fixture
def token_address():
    return make_address(1)


@pytest.fixture
def holder_address():
    return make_address(50)


@pytest.fixture
def recipient_address():
    return make_address(100)


@pytest.fixture
def spender_address():
    return make_address(150)


@pytest.fixture
def settings():
    """Settings without a default signing key"""
    return GatewaySettings(network="tron:nile", fee_limit_sun=10_000_000)


@pytest.fixture
def settings_with_key(mock_private_key):
    return GatewaySettings(
        network="tron:nile", default_signing_key=mock_private_key, fee_limit_sun=20_000_000
    )


def contract_reader(values: dict):
    """side_effect for read_contract_method: look up the method, raise stored exceptions"""

    def read(contract_address, method, args):
        value = values[method]
        if isinstance(value, Exception):
            raise value
        return value

    return read


@pytest.fixture
def mock_chain():
    chain = MagicMock()
    chain.read_balance = AsyncMock(return_value=0)
    chain.read_account_resources = AsyncMock(return_value={})
    chain.read_contract_method = AsyncMock(
        side_effect=contract_reader(
            {"name": "Tether USD", "symbol": "USDT", "decimals": 6, "balanceOf": 0, "allowance": 0}
        )
    )
    chain.send_contract_method = AsyncMock(return_value="txid_trc20")
    chain.send_trx = AsyncMock(return_value="txid_trx")
    chain.fetch_transfer_history = AsyncMock(return_value={"data": [], "meta": {}})
    chain.derive_address_from_key = MagicMock(return_value="TSenderAddress")
    return chain
