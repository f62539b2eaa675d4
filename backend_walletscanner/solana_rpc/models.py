"""
Data models for Solana RPC output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def _confirmation_status_str(status: Any) -> str | None:
    """solders returns an enum (TransactionConfirmationStatus.Finalized); the RPC JSON a string."""
    if status is None:
        return None
    if isinstance(status, str):
        return status.lower()
    return str(status).rsplit(".", 1)[-1].lower()


@dataclass(frozen=True)
class SignatureInfo:
    """
    Transaction signature info from getSignaturesForAddress.

    Mirrors Solana RPC response fields.
    """

    signature: str
    slot: int
    err: Any  # None if success; dict/object from RPC if failed
    block_time: int | None  # Unix timestamp; None if not available
    memo: str | None
    confirmation_status: str | None  # processed | confirmed | finalized

    @classmethod
    def from_rpc_item(cls, item: dict[str, Any]) -> "SignatureInfo":
        """Build from a single getSignaturesForAddress JSON result item."""
        return cls(
            signature=item["signature"],
            slot=int(item["slot"]),
            err=item.get("err"),
            block_time=item.get("blockTime"),
            memo=item.get("memo"),
            confirmation_status=_confirmation_status_str(item.get("confirmationStatus")),
        )

    @classmethod
    def from_rpc_status(cls, status: Any) -> "SignatureInfo":
        """Build from a solders RpcConfirmedTransactionStatusWithSignature."""
        err = getattr(status, "err", None)
        return cls(
            signature=str(status.signature),
            slot=int(status.slot),
            err=str(err) if err is not None else None,
            block_time=getattr(status, "block_time", None),
            memo=getattr(status, "memo", None),
            confirmation_status=_confirmation_status_str(getattr(status, "confirmation_status", None)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "signature": self.signature,
            "slot": self.slot,
            "err": self.err,
            "blockTime": self.block_time,
            "memo": self.memo,
            "confirmationStatus": self.confirmation_status,
        }
