"""
TronChainClient - ChainClientPort backed by tronpy AsyncTron and TronGrid
"""

import logging
from typing import Any

import httpx
from tronpy import AsyncTron
from tronpy.defaults import conf_for_name
from tronpy.exceptions import AddressNotFound, BadKey
from tronpy.keys import PrivateKey
from tronpy.providers.async_http import AsyncHTTPProvider

from tron_gateway.abi import TRC20_ABI
from tron_gateway.chain.port import ChainClientPort
from tron_gateway.config import GatewaySettings, NetworkConfig
from tron_gateway.exceptions import InvalidCredentialError, UpstreamError
from tron_gateway.utils.keys import validate_signing_key

logger = logging.getLogger(__name__)


def create_async_tron_client(settings: GatewaySettings) -> AsyncTron:
    """Create an AsyncTron client for the configured network.

    Uses the TronGrid API key from settings when present.

    Args:
        settings: Gateway settings

    Returns:
        tronpy.AsyncTron instance
    """
    network = NetworkConfig.get_tronpy_name(settings.network)

    if not settings.api_key:
        logger.warning(
            "TRON_GRID_API_KEY is not set. Mainnet requests may be rate-limited or fail; "
            "set TRON_GRID_API_KEY in your environment/.env to use TronGrid reliably."
        )
        logger.info("Creating AsyncTron client for network=%s", network)
        return AsyncTron(network=network)

    conf = conf_for_name(network)
    if not conf:
        raise ValueError(
            f"Unknown TRON network '{network}'. Expected one of: mainnet, nile, shasta."
        )

    endpoint_uri = conf["fullnode"]
    provider = AsyncHTTPProvider(
        endpoint_uri=endpoint_uri, timeout=settings.request_timeout, api_key=settings.api_key
    )
    logger.info(
        "Creating AsyncTron client with TronGrid API key for network=%s (%s)",
        network,
        endpoint_uri,
    )
    return AsyncTron(provider=provider, network=network)


def load_private_key(signing_key: str) -> PrivateKey:
    """Parse a hex private key, with or without 0x prefix"""
    clean_key = validate_signing_key(signing_key)
    try:
        return PrivateKey(bytes.fromhex(clean_key))
    except (BadKey, ValueError) as e:
        raise InvalidCredentialError() from e


def encode_uint_args(method: str, args: list[Any]) -> list[Any]:
    """Turn decimal-string arguments into ints where the TRC-20 ABI expects uint"""
    entry = next(
        (item for item in TRC20_ABI if item.get("type") == "function" and item["name"] == method),
        None,
    )
    if entry is None or len(entry["inputs"]) != len(args):
        return list(args)
    return [
        int(arg) if param["type"].startswith("uint") and isinstance(arg, str) else arg
        for param, arg in zip(entry["inputs"], args)
    ]


class TronChainClient(ChainClientPort):
    """ChainClientPort over tronpy.

    One AsyncTron instance is shared by all in-flight calls. History pages
    come from TronGrid's REST API through httpx.
    """

    def __init__(self, settings: GatewaySettings, client: Any = None) -> None:
        self._settings = settings
        self._client = client if client is not None else create_async_tron_client(settings)

    async def close(self) -> None:
        await self._client.close()

    async def __aenter__(self) -> "TronChainClient":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    def _grid_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._settings.api_key:
            headers["TRON-PRO-API-KEY"] = self._settings.api_key
        return headers

    async def _get_trc20(self, contract_address: str) -> Any:
        contract = await self._client.get_contract(contract_address)
        contract.abi = TRC20_ABI
        return contract

    async def read_balance(self, address: str) -> int:
        try:
            account = await self._client.get_account(address)
        except AddressNotFound:
            # Not yet activated on chain
            return 0
        except Exception as e:
            logger.error(f"Failed to read balance of {address}: [{type(e).__name__}] {e}")
            raise UpstreamError(f"Balance read failed for {address}: {e}") from e
        return int(account.get("balance", 0))

    async def read_account_resources(self, address: str) -> dict[str, Any]:
        try:
            return dict(await self._client.get_account_resource(address))
        except Exception as e:
            logger.error(f"Failed to read resources of {address}: [{type(e).__name__}] {e}")
            raise UpstreamError(f"Resource read failed for {address}: {e}") from e

    async def read_contract_method(
        self,
        contract_address: str,
        method: str,
        args: list[Any],
    ) -> Any:
        try:
            contract = await self._get_trc20(contract_address)
            func = getattr(contract.functions, method)
            return await func(*args)
        except Exception as e:
            logger.warning(
                f"Contract read {method} on {contract_address} failed: [{type(e).__name__}] {e}"
            )
            raise UpstreamError(f"{method} call on {contract_address} failed: {e}") from e

    async def send_contract_method(
        self,
        contract_address: str,
        method: str,
        args: list[Any],
        *,
        fee_limit: int,
        signing_key: str,
    ) -> str:
        private_key = load_private_key(signing_key)
        owner = private_key.public_key.to_base58check_address()

        try:
            contract = await self._get_trc20(contract_address)
            func = getattr(contract.functions, method)
            logger.info(
                "Building %s on %s from %s with fee_limit=%d SUN",
                method,
                contract_address,
                owner,
                fee_limit,
            )
            # AsyncTron: func(*args) returns a coroutine resolving to the builder
            txn_builder = await func(*encode_uint_args(method, args))
            txn_builder = txn_builder.with_owner(owner).fee_limit(fee_limit)
            txn = await txn_builder.build()
            txn = txn.sign(private_key)

            logger.info("Broadcasting %s transaction %s", method, txn.txid)
            result = await txn.broadcast()
        except Exception as e:
            logger.error(f"Contract call {method} failed: [{type(e).__name__}] {e}")
            raise UpstreamError(f"{method} on {contract_address} failed: {e}") from e

        txid = result.get("txid") or txn.txid
        logger.info("%s broadcast accepted: txid=%s", method, txid)
        return txid

    async def send_trx(self, to: str, amount_sun: int, signing_key: str) -> str:
        private_key = load_private_key(signing_key)
        owner = private_key.public_key.to_base58check_address()

        try:
            txn = await self._client.trx.transfer(owner, to, amount_sun).build()
            txn = txn.sign(private_key)
            result = await txn.broadcast()
        except Exception as e:
            logger.error(f"TRX transfer to {to} failed: [{type(e).__name__}] {e}")
            raise UpstreamError(f"TRX transfer to {to} failed: {e}") from e

        txid = result.get("txid") or txn.txid
        logger.info(
            "TRX transfer broadcast accepted: to=%s amount=%d txid=%s", to, amount_sun, txid
        )
        return txid

    async def fetch_transfer_history(
        self,
        address: str,
        limit: int,
        cursor: str | None = None,
    ) -> dict[str, Any]:
        path = f"/v1/accounts/{address}/transactions/trc20"
        params: dict[str, Any] = {"limit": limit}
        if cursor:
            params["fingerprint"] = cursor

        url = f"{self._settings.resolved_grid_host}{path}"
        async with httpx.AsyncClient(timeout=self._settings.request_timeout) as client:
            try:
                response = await client.get(url, params=params, headers=self._grid_headers())
            except httpx.HTTPError as e:
                logger.error(f"TronGrid request to {url} failed: {e}")
                raise UpstreamError(f"TronGrid request failed: {e}") from e

        if not response.is_success:
            logger.error(f"TronGrid error {response.status_code}: {response.text}")
            raise UpstreamError(
                f"TronGrid returned {response.status_code} for {path}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"TronGrid returned a non-JSON body for {path}") from e

    def derive_address_from_key(self, signing_key: str) -> str:
        return load_private_key(signing_key).public_key.to_base58check_address()
