"""Account fetcher protocol — blockchain RPC abstraction."""
from typing import Protocol

from solders.pubkey import Pubkey

from ..models import RawAccount


class AccountFetcher(Protocol):
    """Read-only access to the latest state of ledger accounts."""

    async def fetch(self, address: Pubkey, kind: str = "account") -> RawAccount: ...

    async def fetch_optional(self, address: Pubkey) -> RawAccount | None: ...
