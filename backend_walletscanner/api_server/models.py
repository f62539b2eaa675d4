"""
Response models shared by the API routers.

Field names are snake_case in Python and camelCase on the wire (aliases), which
is what the mobile client reads.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class WalletResponse(_CamelModel):
    is_valid: bool = Field(..., alias="isValid", description="True if the address parses as a Solana public key")
    address: str = Field(..., description="Canonical base58 address, or the input when invalid")


class BalanceResponse(_CamelModel):
    balance: float = Field(..., ge=0, description="Balance in SOL")
    address: str


class ErrorResponse(_CamelModel):
    error: str = Field(..., description="Stable error code, e.g. HISTORICAL_BALANCE_ERROR")
    message: str


class DataPoint(_CamelModel):
    timestamp: int = Field(..., description="Unix epoch milliseconds")
    balance: float = Field(..., ge=0, description="Balance in SOL")


class HistoricalBalanceResponse(_CamelModel):
    address: str
    data_points: list[DataPoint] = Field(..., alias="dataPoints")


class SignaturesResponse(_CamelModel):
    transactions: list[dict[str, Any]]
    address: str
    has_more: bool = Field(..., alias="hasMore")
    next_before: str | None = Field(None, alias="nextBefore")


class TransactionResponse(SignaturesResponse):
    count: int


class TransactionTypeCount(_CamelModel):
    type: str
    count: int


class TransactionsByTypeResponse(_CamelModel):
    address: str
    transactions_by_type: dict[str, list[dict[str, Any]]] = Field(..., alias="transactionsByType")
    types: list[TransactionTypeCount]
    total_transactions: int = Field(..., alias="totalTransactions")


class TokenInfoModel(_CamelModel):
    mint: str
    name: str | None = None
    symbol: str | None = None
    logo: str | None = None
    decimals: int
    amount: int
    ui_amount: float = Field(..., alias="uiAmount")
    price_per_token: float | None = Field(None, alias="pricePerToken")
    total_price: float | None = Field(None, alias="totalPrice")
    supply: str | None = None


class TokenBalancesResponse(_CamelModel):
    address: str
    native_balance: float = Field(..., alias="nativeBalance")
    tokens: list[TokenInfoModel]
    total_tokens: int = Field(..., alias="totalTokens")
