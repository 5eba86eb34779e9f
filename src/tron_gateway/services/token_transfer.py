"""
TokenTransferService - TRC-20 balance, allowance and transfer orchestration
"""

import asyncio
import logging
from typing import Any, Optional

from tron_gateway.address import AddressCodec, TronAddressCodec
from tron_gateway.chain.port import ChainClientPort
from tron_gateway.config import GatewaySettings
from tron_gateway.exceptions import InvalidAmountError, MissingCredentialError, UpstreamError
from tron_gateway.types import (
    DEFAULT_ACTIVATION_AMOUNT_SUN,
    DEFAULT_TOKEN_DECIMALS,
    TRX_DECIMALS,
    UNKNOWN_TOKEN_NAME,
    UNKNOWN_TOKEN_SYMBOL,
    AccountResources,
    AddressForms,
    HumanAmount,
    TokenAllowance,
    TokenBalance,
    TokenMeta,
    TransferOptions,
    TransferPage,
    TransferRequest,
    TransferResult,
    TrxBalance,
)
from tron_gateway.utils.amount import (
    from_smallest_units,
    parse_human_amount,
    to_smallest_units,
)
from tron_gateway.utils.keys import validate_signing_key

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 200
# decimals() is a uint8
MAX_TOKEN_DECIMALS = 255


def _decode_text(value: Any, fallback: str) -> str:
    if value is None:
        return fallback
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    text = str(value).strip()
    return text or fallback


def _decode_decimals(value: Any) -> int:
    try:
        decimals = int(value)
    except (TypeError, ValueError):
        return DEFAULT_TOKEN_DECIMALS
    if 0 <= decimals <= MAX_TOKEN_DECIMALS:
        return decimals
    return DEFAULT_TOKEN_DECIMALS


def _decode_uint(value: Any, what: str) -> int:
    try:
        raw = int(value)
    except (TypeError, ValueError) as e:
        raise UpstreamError(f"Unexpected {what} value from chain: {value!r}") from e
    if raw < 0:
        raise UpstreamError(f"Negative {what} value from chain: {raw}")
    return raw


class TokenTransferService:
    """
    TRC-20 operations on top of a ChainClientPort.

    Every address is validated and normalized before the first chain call,
    so malformed input never costs a network round trip. State-changing
    calls are never retried here: re-submitting would send the tokens twice.
    """

    def __init__(
        self,
        chain: ChainClientPort,
        settings: Optional[GatewaySettings] = None,
        codec: Optional[AddressCodec] = None,
    ) -> None:
        self._chain = chain
        self._settings = settings or GatewaySettings()
        self._codec = codec or TronAddressCodec()

    # ------------------------------------------------------------------
    # Address helpers
    # ------------------------------------------------------------------

    def is_address(self, address: object) -> bool:
        return self._codec.is_valid(address)

    def describe_address(self, address: str) -> AddressForms:
        base58, hex_ = self._codec.normalize(address)
        return AddressForms(base58=base58, hex=hex_)

    def _hex(self, address: str, field: str) -> str:
        return self._codec.to_hex(address, field=field)

    def _base58(self, address: str, field: str) -> str:
        return self._codec.to_base58(address, field=field)

    # ------------------------------------------------------------------
    # Credentials and options
    # ------------------------------------------------------------------

    def _select_key(self, operation: str, signing_key: Optional[str]) -> str:
        key = signing_key or self._settings.default_signing_key
        if not key:
            raise MissingCredentialError(operation)
        validate_signing_key(key)
        return key

    def _select_fee_limit(self, fee_limit: Optional[int]) -> int:
        if fee_limit is None:
            return self._settings.fee_limit_sun
        if isinstance(fee_limit, bool) or not isinstance(fee_limit, int) or fee_limit <= 0:
            raise InvalidAmountError(
                fee_limit, field="fee_limit", reason="must be a positive integer"
            )
        return fee_limit

    def sender_address(self, signing_key: Optional[str] = None) -> str:
        """Address the selected key signs as"""
        key = self._select_key("sender_address", signing_key)
        return self._chain.derive_address_from_key(key)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def _read_name(self, token_hex: str) -> str:
        try:
            return _decode_text(
                await self._chain.read_contract_method(token_hex, "name", []), UNKNOWN_TOKEN_NAME
            )
        except UpstreamError as e:
            logger.debug("name() unavailable on %s: %s", token_hex, e)
            return UNKNOWN_TOKEN_NAME

    async def _read_symbol(self, token_hex: str) -> str:
        try:
            return _decode_text(
                await self._chain.read_contract_method(token_hex, "symbol", []),
                UNKNOWN_TOKEN_SYMBOL,
            )
        except UpstreamError as e:
            logger.debug("symbol() unavailable on %s: %s", token_hex, e)
            return UNKNOWN_TOKEN_SYMBOL

    async def _read_decimals(self, token_hex: str) -> int:
        try:
            return _decode_decimals(
                await self._chain.read_contract_method(token_hex, "decimals", [])
            )
        except UpstreamError as e:
            logger.warning(
                "decimals() unavailable on %s, assuming %d: %s",
                token_hex,
                DEFAULT_TOKEN_DECIMALS,
                e,
            )
            return DEFAULT_TOKEN_DECIMALS

    async def get_meta(self, token: str) -> TokenMeta:
        """Read name/symbol/decimals. Fields the contract does not answer get sentinels."""
        token_hex = self._hex(token, "token")
        name, symbol, decimals = await asyncio.gather(
            self._read_name(token_hex),
            self._read_symbol(token_hex),
            self._read_decimals(token_hex),
        )
        return TokenMeta(name=name, symbol=symbol, decimals=decimals)

    async def get_balance(self, token: str, holder: str) -> TokenBalance:
        token_hex = self._hex(token, "token")
        holder_base58 = self._base58(holder, "holder")

        raw = _decode_uint(
            await self._chain.read_contract_method(token_hex, "balanceOf", [holder_base58]),
            "balanceOf",
        )
        decimals = await self._read_decimals(token_hex)
        return TokenBalance(
            token=token_hex,
            holder=holder_base58,
            raw=str(raw),
            decimals=decimals,
            balance=from_smallest_units(raw, decimals),
        )

    async def allowance(self, token: str, owner: str, spender: str) -> TokenAllowance:
        token_hex = self._hex(token, "token")
        owner_base58 = self._base58(owner, "owner")
        spender_base58 = self._base58(spender, "spender")

        raw = _decode_uint(
            await self._chain.read_contract_method(
                token_hex, "allowance", [owner_base58, spender_base58]
            ),
            "allowance",
        )
        decimals = await self._read_decimals(token_hex)
        return TokenAllowance(
            token=token_hex,
            owner=owner_base58,
            spender=spender_base58,
            raw=str(raw),
            decimals=decimals,
            allowance=from_smallest_units(raw, decimals),
        )

    async def get_trx_balance(self, address: str) -> TrxBalance:
        address_base58, address_hex = self._codec.normalize(address)
        balance_sun = _decode_uint(await self._chain.read_balance(address_hex), "balance")
        return TrxBalance(
            address=address_base58,
            balance_sun=balance_sun,
            balance_trx=from_smallest_units(balance_sun, TRX_DECIMALS),
        )

    async def get_account_resources(self, address: str) -> AccountResources:
        address_base58 = self._base58(address, "address")
        resources = await self._chain.read_account_resources(address_base58)
        return AccountResources(
            address=address_base58,
            **{
                key: int(resources.get(key, 0) or 0)
                for key in (
                    "freeNetLimit",
                    "freeNetUsed",
                    "NetLimit",
                    "NetUsed",
                    "EnergyLimit",
                    "EnergyUsed",
                )
            },
        )

    async def list_transfers(
        self,
        holder: str,
        limit: int = DEFAULT_PAGE_SIZE,
        cursor: Optional[str] = None,
    ) -> TransferPage:
        """One page of TRC-20 history. ``limit`` is clamped into 1..200."""
        holder_base58 = self._base58(holder, "holder")
        try:
            limit = max(1, min(MAX_PAGE_SIZE, int(limit)))
        except (TypeError, ValueError):
            limit = DEFAULT_PAGE_SIZE

        page = await self._chain.fetch_transfer_history(holder_base58, limit, cursor or None)
        meta = page.get("meta") or {}
        return TransferPage(
            address=holder_base58,
            data=page.get("data") or [],
            next_cursor=meta.get("fingerprint"),
            meta=meta,
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def _send(
        self,
        operation: str,
        token_hex: str,
        method: str,
        addresses: list[str],
        amount_human: HumanAmount,
        options: Optional[TransferOptions],
    ) -> TransferResult:
        """Shared flow for transfer/approve/transfer_from.

        Everything that can be checked without I/O is checked first. Once
        send_contract_method has been awaited the transaction may be on the
        wire, cancelling the caller's task does not recall it.
        """
        options = options or TransferOptions()
        key = self._select_key(operation, options.signing_key)
        fee_limit = self._select_fee_limit(options.fee_limit)
        parse_human_amount(amount_human, "amount")

        decimals = await self._read_decimals(token_hex)
        raw = to_smallest_units(amount_human, decimals)

        txid = await self._chain.send_contract_method(
            token_hex,
            method,
            [*addresses, raw],
            fee_limit=fee_limit,
            signing_key=key,
        )
        logger.info("TRC20 %s broadcast: token=%s raw=%s txid=%s", method, token_hex, raw, txid)
        return TransferResult(transaction_id=txid)

    async def transfer(
        self,
        token: str,
        to: str,
        amount_human: HumanAmount,
        options: Optional[TransferOptions] = None,
    ) -> TransferResult:
        token_hex = self._hex(token, "token")
        to_base58 = self._base58(to, "to")
        return await self._send(
            "transfer", token_hex, "transfer", [to_base58], amount_human, options
        )

    async def approve(
        self,
        token: str,
        spender: str,
        amount_human: HumanAmount,
        options: Optional[TransferOptions] = None,
    ) -> TransferResult:
        token_hex = self._hex(token, "token")
        spender_base58 = self._base58(spender, "spender")
        return await self._send(
            "approve", token_hex, "approve", [spender_base58], amount_human, options
        )

    async def transfer_from(
        self,
        token: str,
        from_: str,
        to: str,
        amount_human: HumanAmount,
        options: Optional[TransferOptions] = None,
    ) -> TransferResult:
        token_hex = self._hex(token, "token")
        from_base58 = self._base58(from_, "from")
        to_base58 = self._base58(to, "to")
        return await self._send(
            "transfer_from",
            token_hex,
            "transferFrom",
            [from_base58, to_base58],
            amount_human,
            options,
        )

    async def submit(self, request: TransferRequest) -> TransferResult:
        """Run a TransferRequest through transfer()"""
        return await self.transfer(
            request.token_address, request.to, request.amount_human, request.options()
        )

    async def activate_address(
        self,
        to: str,
        amount_sun: int = DEFAULT_ACTIVATION_AMOUNT_SUN,
        signing_key: Optional[str] = None,
    ) -> TransferResult:
        """Create an account on chain by sending it a small TRX amount (default 1 TRX)"""
        to_base58 = self._base58(to, "to")
        if isinstance(amount_sun, bool) or not isinstance(amount_sun, int) or amount_sun <= 0:
            raise InvalidAmountError(
                amount_sun, field="amount_sun", reason="must be a positive integer"
            )
        key = self._select_key("activate_address", signing_key)

        txid = await self._chain.send_trx(to_base58, amount_sun, key)
        logger.info(
            "Activation transfer broadcast: to=%s amount_sun=%d txid=%s",
            to_base58,
            amount_sun,
            txid,
        )
        return TransferResult(transaction_id=txid)
