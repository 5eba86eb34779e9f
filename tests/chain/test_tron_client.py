"""
Tests for TronChainClient.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from tronpy.exceptions import AddressNotFound
from tronpy.keys import PrivateKey

from tron_gateway.abi import TRC20_ABI
from tron_gateway.chain import TronChainClient, create_async_tron_client
from tron_gateway.chain.tron_client import encode_uint_args
from tron_gateway.config import GatewaySettings
from tron_gateway.exceptions import InvalidCredentialError, UpstreamError


@pytest.fixture
def tron():
    """Stand-in for tronpy.AsyncTron"""
    client = MagicMock()
    client.close = AsyncMock()
    return client


@pytest.fixture
def contract(tron):
    contract = MagicMock()
    tron.get_contract = AsyncMock(return_value=contract)
    return contract


@pytest.fixture
def signed_txn():
    txn = MagicMock()
    txn.txid = "txid_from_builder"
    txn.sign.return_value = txn
    txn.broadcast = AsyncMock(return_value={"result": True, "txid": "txid_broadcast"})
    return txn


@pytest.fixture
def builder(signed_txn):
    builder = MagicMock()
    builder.with_owner.return_value = builder
    builder.fee_limit.return_value = builder
    builder.build = AsyncMock(return_value=signed_txn)
    return builder


@pytest.fixture
def chain_client(settings, tron):
    return TronChainClient(settings, client=tron)


def _owner(private_key: str) -> str:
    return PrivateKey(bytes.fromhex(private_key)).public_key.to_base58check_address()


class TestReads:
    @pytest.mark.anyio
    async def test_read_contract_method(self, chain_client, tron, contract, token_address):
        contract.functions.balanceOf = AsyncMock(return_value=42)

        result = await chain_client.read_contract_method(
            token_address[1], "balanceOf", ["THolder"]
        )

        assert result == 42
        tron.get_contract.assert_awaited_once_with(token_address[1])
        assert contract.abi == TRC20_ABI
        contract.functions.balanceOf.assert_awaited_once_with("THolder")

    @pytest.mark.anyio
    async def test_read_contract_method_wraps_errors(self, chain_client, tron, token_address):
        tron.get_contract = AsyncMock(side_effect=RuntimeError("contract not found"))

        with pytest.raises(UpstreamError) as exc_info:
            await chain_client.read_contract_method(token_address[1], "decimals", [])

        assert "decimals" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.anyio
    async def test_read_balance(self, chain_client, tron, holder_address):
        tron.get_account = AsyncMock(return_value={"address": holder_address[0], "balance": 7})

        assert await chain_client.read_balance(holder_address[1]) == 7

    @pytest.mark.anyio
    async def test_read_balance_of_inactive_account(self, chain_client, tron, holder_address):
        tron.get_account = AsyncMock(side_effect=AddressNotFound("account not found on-chain"))

        assert await chain_client.read_balance(holder_address[1]) == 0

    @pytest.mark.anyio
    async def test_read_balance_network_error(self, chain_client, tron, holder_address):
        tron.get_account = AsyncMock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(UpstreamError):
            await chain_client.read_balance(holder_address[1])

    @pytest.mark.anyio
    async def test_read_account_resources(self, chain_client, tron, holder_address):
        tron.get_account_resource = AsyncMock(return_value={"freeNetLimit": 600})

        assert await chain_client.read_account_resources(holder_address[0]) == {
            "freeNetLimit": 600
        }


class TestSendContractMethod:
    @pytest.mark.anyio
    async def test_builds_signs_and_broadcasts(
        self,
        chain_client,
        contract,
        builder,
        signed_txn,
        token_address,
        recipient_address,
        mock_private_key,
    ):
        contract.functions.transfer = AsyncMock(return_value=builder)

        txid = await chain_client.send_contract_method(
            token_address[1],
            "transfer",
            [recipient_address[0], "10500000"],
            fee_limit=15_000_000,
            signing_key=mock_private_key,
        )

        assert txid == "txid_broadcast"
        contract.functions.transfer.assert_awaited_once_with(recipient_address[0], 10_500_000)
        builder.with_owner.assert_called_once_with(_owner(mock_private_key))
        builder.fee_limit.assert_called_once_with(15_000_000)
        signed_txn.sign.assert_called_once()
        signed_txn.broadcast.assert_awaited_once()

    @pytest.mark.anyio
    async def test_transfer_from_amount_is_encoded_as_int(
        self, chain_client, contract, builder, token_address, mock_private_key
    ):
        contract.functions.transferFrom = AsyncMock(return_value=builder)

        await chain_client.send_contract_method(
            token_address[1],
            "transferFrom",
            ["TFrom", "TTo", str(10**30)],
            fee_limit=1,
            signing_key=mock_private_key,
        )

        contract.functions.transferFrom.assert_awaited_once_with("TFrom", "TTo", 10**30)

    @pytest.mark.anyio
    async def test_accepts_0x_key(
        self, chain_client, contract, builder, token_address, mock_private_key
    ):
        contract.functions.approve = AsyncMock(return_value=builder)

        await chain_client.send_contract_method(
            token_address[1],
            "approve",
            ["TSpender", 1],
            fee_limit=1,
            signing_key="0x" + mock_private_key,
        )

        builder.with_owner.assert_called_once_with(_owner(mock_private_key))

    @pytest.mark.anyio
    async def test_falls_back_to_builder_txid(
        self, chain_client, contract, builder, signed_txn, token_address, mock_private_key
    ):
        signed_txn.broadcast = AsyncMock(return_value={"result": True})
        contract.functions.transfer = AsyncMock(return_value=builder)

        txid = await chain_client.send_contract_method(
            token_address[1], "transfer", ["TTo", 1], fee_limit=1, signing_key=mock_private_key
        )

        assert txid == "txid_from_builder"

    @pytest.mark.anyio
    async def test_broadcast_failure(
        self, chain_client, contract, builder, signed_txn, token_address, mock_private_key
    ):
        signed_txn.broadcast = AsyncMock(side_effect=RuntimeError("BANDWITH_ERROR"))
        contract.functions.transfer = AsyncMock(return_value=builder)

        with pytest.raises(UpstreamError) as exc_info:
            await chain_client.send_contract_method(
                token_address[1], "transfer", ["TTo", 1], fee_limit=1, signing_key=mock_private_key
            )

        assert "BANDWITH_ERROR" in str(exc_info.value)
        signed_txn.broadcast.assert_awaited_once()

    @pytest.mark.anyio
    @pytest.mark.parametrize("bad_key", ["zz" * 32, "abcd", ""])
    async def test_malformed_key(self, chain_client, tron, token_address, bad_key):
        tron.get_contract = AsyncMock()

        with pytest.raises(InvalidCredentialError):
            await chain_client.send_contract_method(
                token_address[1], "transfer", ["TTo", 1], fee_limit=1, signing_key=bad_key
            )

        tron.get_contract.assert_not_awaited()


class TestSendTrx:
    @pytest.mark.anyio
    async def test_send_trx(self, chain_client, tron, builder, recipient_address, mock_private_key):
        tron.trx.transfer.return_value = builder

        txid = await chain_client.send_trx(recipient_address[0], 1_000_000, mock_private_key)

        assert txid == "txid_broadcast"
        tron.trx.transfer.assert_called_once_with(
            _owner(mock_private_key), recipient_address[0], 1_000_000
        )

    @pytest.mark.anyio
    async def test_send_trx_failure(self, chain_client, tron, recipient_address, mock_private_key):
        tron.trx.transfer.side_effect = RuntimeError("balance is not sufficient")

        with pytest.raises(UpstreamError):
            await chain_client.send_trx(recipient_address[0], 1_000_000, mock_private_key)


class TestTransferHistory:
    @pytest.mark.anyio
    async def test_fetch_page(self, tron, holder_address):
        settings = GatewaySettings(network="tron:nile", api_key="grid-key")
        chain_client = TronChainClient(settings, client=tron)
        page = {"data": [{"transaction_id": "t1"}], "meta": {"fingerprint": "fp2"}}

        with patch("httpx.AsyncClient.get") as mock_get:
            mock_get.return_value = MagicMock(is_success=True, status_code=200, json=lambda: page)
            result = await chain_client.fetch_transfer_history(holder_address[0], 50, "fp1")

        assert result == page
        call = mock_get.call_args
        assert call.args[0] == (
            f"https://nile.trongrid.io/v1/accounts/{holder_address[0]}/transactions/trc20"
        )
        assert call.kwargs["params"] == {"limit": 50, "fingerprint": "fp1"}
        assert call.kwargs["headers"]["TRON-PRO-API-KEY"] == "grid-key"

    @pytest.mark.anyio
    async def test_no_cursor_no_key(self, chain_client, holder_address):
        with patch("httpx.AsyncClient.get") as mock_get:
            mock_get.return_value = MagicMock(is_success=True, status_code=200, json=lambda: {})
            await chain_client.fetch_transfer_history(holder_address[0], 20)

        call = mock_get.call_args
        assert call.kwargs["params"] == {"limit": 20}
        assert "TRON-PRO-API-KEY" not in call.kwargs["headers"]

    @pytest.mark.anyio
    async def test_non_2xx_raises(self, chain_client, holder_address):
        with patch("httpx.AsyncClient.get") as mock_get:
            mock_get.return_value = MagicMock(
                is_success=False, status_code=429, text="rate limited"
            )
            with pytest.raises(UpstreamError) as exc_info:
                await chain_client.fetch_transfer_history(holder_address[0], 20)

        assert exc_info.value.status_code == 429

    @pytest.mark.anyio
    async def test_transport_error_raises(self, chain_client, holder_address):
        with patch("httpx.AsyncClient.get", side_effect=httpx.ConnectError("refused")):
            with pytest.raises(UpstreamError):
                await chain_client.fetch_transfer_history(holder_address[0], 20)


def test_derive_address_from_key(chain_client, mock_private_key):
    address = chain_client.derive_address_from_key(mock_private_key)

    assert address.startswith("T")
    assert address == chain_client.derive_address_from_key("0x" + mock_private_key)


@pytest.mark.anyio
async def test_close_closes_tron_client(chain_client, tron):
    async with chain_client:
        pass

    tron.close.assert_awaited_once()


class TestCreateAsyncTronClient:
    def test_without_api_key(self):
        with patch("tron_gateway.chain.tron_client.AsyncTron") as async_tron:
            create_async_tron_client(GatewaySettings(network="nile"))

        async_tron.assert_called_once_with(network="nile")

    def test_with_api_key(self):
        settings = GatewaySettings(network="tron:shasta", api_key="k", request_timeout=5.0)
        with patch("tron_gateway.chain.tron_client.AsyncTron") as async_tron, patch(
            "tron_gateway.chain.tron_client.AsyncHTTPProvider"
        ) as provider:
            create_async_tron_client(settings)

        provider.assert_called_once()
        assert provider.call_args.kwargs["api_key"] == "k"
        assert provider.call_args.kwargs["timeout"] == 5.0
        assert async_tron.call_args.kwargs["network"] == "shasta"


class TestEncodeUintArgs:
    def test_only_uint_inputs_are_converted(self):
        assert encode_uint_args("approve", ["TSpender", "500"]) == ["TSpender", 500]

    def test_ints_pass_through(self):
        assert encode_uint_args("transfer", ["TTo", 7]) == ["TTo", 7]

    def test_unknown_method_is_untouched(self):
        assert encode_uint_args("mint", ["1"]) == ["1"]

    def test_argument_count_mismatch_is_untouched(self):
        assert encode_uint_args("transfer", ["1"]) == ["1"]
