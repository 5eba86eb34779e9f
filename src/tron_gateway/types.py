"""
Value types returned by the gateway service
"""

from decimal import Decimal
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

# Sentinels used when a token contract does not answer a metadata call
UNKNOWN_TOKEN_NAME = "Unknown"
UNKNOWN_TOKEN_SYMBOL = "UNK"
DEFAULT_TOKEN_DECIMALS = 6

TRX_DECIMALS = 6
DEFAULT_ACTIVATION_AMOUNT_SUN = 1_000_000

HumanAmount = Union[str, int, float, Decimal]


class AddressForms(BaseModel):
    """Both encodings of one address"""

    base58: str
    hex: str


class TokenMeta(BaseModel):
    """TRC-20 token metadata"""

    name: str = UNKNOWN_TOKEN_NAME
    symbol: str = UNKNOWN_TOKEN_SYMBOL
    decimals: int = DEFAULT_TOKEN_DECIMALS


class TokenBalance(BaseModel):
    """TRC-20 balance of one holder"""

    token: str
    holder: str
    raw: str
    decimals: int
    balance: Decimal


class TokenAllowance(BaseModel):
    """Allowance granted by owner to spender"""

    token: str
    owner: str
    spender: str
    raw: str
    decimals: int
    allowance: Decimal


class TrxBalance(BaseModel):
    """Native TRX balance"""

    address: str
    balance_sun: int = Field(alias="balanceSun")
    balance_trx: Decimal = Field(alias="balanceTrx")

    class Config:
        populate_by_name = True


class AccountResources(BaseModel):
    """Bandwidth and energy counters of an account"""

    address: str
    free_net_limit: int = Field(0, alias="freeNetLimit")
    free_net_used: int = Field(0, alias="freeNetUsed")
    net_limit: int = Field(0, alias="NetLimit")
    net_used: int = Field(0, alias="NetUsed")
    energy_limit: int = Field(0, alias="EnergyLimit")
    energy_used: int = Field(0, alias="EnergyUsed")

    class Config:
        populate_by_name = True


class TransferOptions(BaseModel):
    """Per-call overrides for state-changing operations"""

    signing_key: Optional[str] = Field(None, alias="signingKey", repr=False)
    fee_limit: Optional[int] = Field(None, alias="feeLimit")

    class Config:
        populate_by_name = True


class TransferRequest(BaseModel):
    """A TRC-20 transfer as supplied by a caller"""

    token_address: str = Field(alias="tokenAddress")
    to: str
    amount_human: HumanAmount = Field(alias="amountHuman")
    signing_key: Optional[str] = Field(None, alias="signingKey", repr=False)
    fee_limit: Optional[int] = Field(None, alias="feeLimit")

    class Config:
        populate_by_name = True

    def options(self) -> TransferOptions:
        return TransferOptions(signing_key=self.signing_key, fee_limit=self.fee_limit)


class TransferResult(BaseModel):
    """Broadcast acknowledgement. Does not imply on-chain finality."""

    transaction_id: str = Field(alias="transactionId")

    class Config:
        populate_by_name = True


class TransferPage(BaseModel):
    """One page of TRC-20 transfer history"""

    address: str
    data: list[dict[str, Any]] = Field(default_factory=list)
    next_cursor: Optional[str] = Field(None, alias="nextCursor")
    meta: dict[str, Any] = Field(default_factory=dict)

    class Config:
        populate_by_name = True
