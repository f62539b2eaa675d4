"""
Data models for Helius enhanced-transaction payloads.

Responsibilities:
- Parse the fields of GET /v0/addresses/{address}/transactions items that the
  backend reasons about (timestamp, fee, fee payer, native/token transfers).
- Keep the provider JSON in `raw` so API responses pass transactions through
  unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class NativeTransfer:
    """One movement of lamports inside a transaction."""

    from_user_account: str
    to_user_account: str
    amount: int  # lamports, non-negative

    @classmethod
    def from_api_item(cls, item: dict[str, Any]) -> "NativeTransfer":
        return cls(
            from_user_account=item.get("fromUserAccount") or "",
            to_user_account=item.get("toUserAccount") or "",
            amount=int(item.get("amount") or 0),
        )

    def delta_for(self, address: str) -> int:
        """Signed lamport change this transfer causes for address; a self-transfer counts as outgoing."""
        delta = 0
        if self.from_user_account == address:
            delta -= self.amount
        elif self.to_user_account == address:
            delta += self.amount
        return delta


@dataclass(frozen=True)
class TokenTransfer:
    from_user_account: str
    to_user_account: str
    from_token_account: str
    to_token_account: str
    token_amount: float
    mint: str
    token_standard: str

    @classmethod
    def from_api_item(cls, item: dict[str, Any]) -> "TokenTransfer":
        return cls(
            from_user_account=item.get("fromUserAccount") or "",
            to_user_account=item.get("toUserAccount") or "",
            from_token_account=item.get("fromTokenAccount") or "",
            to_token_account=item.get("toTokenAccount") or "",
            token_amount=float(item.get("tokenAmount") or 0),
            mint=item.get("mint") or "",
            token_standard=item.get("tokenStandard") or "",
        )


@dataclass(frozen=True)
class HeliusTransaction:
    """
    Normalized Helius enhanced transaction.

    All native transfers share the transaction-level timestamp (Unix seconds).
    """

    signature: str
    timestamp: int
    fee: int
    fee_payer: str
    type: str
    source: str
    description: str
    slot: int | None
    native_transfers: tuple[NativeTransfer, ...] = ()
    token_transfers: tuple[TokenTransfer, ...] = ()
    transaction_error: Any = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_api_item(cls, item: dict[str, Any]) -> "HeliusTransaction":
        """Build from one item of the enhanced-transactions response; raises on missing signature/timestamp."""
        slot = item.get("slot")
        return cls(
            signature=item["signature"],
            timestamp=int(item["timestamp"]),
            fee=int(item.get("fee") or 0),
            fee_payer=item.get("feePayer") or "",
            type=item.get("type") or "",
            source=item.get("source") or "",
            description=item.get("description") or "",
            slot=int(slot) if slot is not None else None,
            native_transfers=tuple(
                NativeTransfer.from_api_item(t) for t in item.get("nativeTransfers") or []
            ),
            token_transfers=tuple(
                TokenTransfer.from_api_item(t) for t in item.get("tokenTransfers") or []
            ),
            transaction_error=item.get("transactionError"),
            raw=dict(item),
        )

    @property
    def timestamp_ms(self) -> int:
        return self.timestamp * 1000

    def net_lamport_change(self, address: str) -> int:
        """
        Native balance change for address: incoming minus outgoing transfers,
        minus the fee when address paid it. Non-transfer changes are not seen.
        """
        delta = sum(t.delta_for(address) for t in self.native_transfers)
        if self.fee_payer == address:
            delta -= self.fee
        return delta

    def to_dict(self) -> dict[str, Any]:
        return self.raw


@dataclass(frozen=True)
class TransactionPage:
    """One page from the transaction feed, newest first."""

    transactions: list[HeliusTransaction]
    has_more: bool
    next_before: str | None

    @classmethod
    def from_batch(cls, batch: list[HeliusTransaction], limit: int) -> "TransactionPage":
        """Short page means exhaustion; the cursor is the oldest signature in the batch."""
        return cls(
            transactions=batch,
            has_more=len(batch) >= limit,
            next_before=batch[-1].signature if batch else None,
        )


FUNGIBLE_INTERFACES = frozenset({"FungibleToken", "FungibleAsset"})


@dataclass(frozen=True)
class TokenInfo:
    """A fungible token holding from Helius DAS getAssetsByOwner."""

    mint: str
    name: str | None
    symbol: str | None
    logo: str | None
    decimals: int
    amount: int  # raw units
    ui_amount: float
    price_per_token: float | None
    total_price: float | None
    supply: str | None

    @classmethod
    def from_das_asset(cls, asset: dict[str, Any]) -> "TokenInfo | None":
        """Build from a DAS asset; None for non-fungible assets or assets without token_info."""
        if asset.get("interface") not in FUNGIBLE_INTERFACES:
            return None
        token_info = asset.get("token_info") or {}
        if not token_info:
            return None
        content = asset.get("content") or {}
        metadata = content.get("metadata") or {}
        links = content.get("links") or {}
        price_info = token_info.get("price_info") or {}
        decimals = int(token_info.get("decimals") or 0)
        amount = int(token_info.get("balance") or 0)
        supply = token_info.get("supply")
        return cls(
            mint=asset.get("id") or "",
            name=metadata.get("name") or None,
            symbol=token_info.get("symbol") or metadata.get("symbol") or None,
            logo=links.get("image") or None,
            decimals=decimals,
            amount=amount,
            ui_amount=amount / (10 ** decimals),
            price_per_token=price_info.get("price_per_token"),
            total_price=price_info.get("total_price"),
            supply=str(supply) if supply is not None else None,
        )

    @property
    def value(self) -> float:
        """USD value used for ordering; 0 when unpriced."""
        if self.total_price:
            return float(self.total_price)
        return self.ui_amount * float(self.price_per_token or 0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "mint": self.mint,
            "name": self.name,
            "symbol": self.symbol,
            "logo": self.logo,
            "decimals": self.decimals,
            "amount": self.amount,
            "uiAmount": self.ui_amount,
            "pricePerToken": self.price_per_token,
            "totalPrice": self.total_price,
            "supply": self.supply,
        }
