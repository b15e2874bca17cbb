"""Native + wrapped balance aggregation."""
from __future__ import annotations

from solders.pubkey import Pubkey

from ..errors import MalformedAccount
from ..models import BalanceSummary, RawAccount, TokenAccountRecord


def aggregate_balances(
    wallet_account: RawAccount | None,
    wrapped_account: TokenAccountRecord | None,
    wallet: Pubkey,
    native_mint: Pubkey,
    decimals: int = 9,
) -> BalanceSummary:
    """Combine the wallet's lamports with its wrapped-native token balance.

    A wallet with no system account has 0 lamports; a wallet with no wrapped
    token account has 0 wrapped.
    """
    native = wallet_account.lamports if wallet_account is not None else 0

    wrapped = 0
    if wrapped_account is not None:
        if wrapped_account.mint != native_mint:
            raise MalformedAccount(
                wrapped_account.address,
                "wrapped token",
                f"holds mint {wrapped_account.mint}, expected {native_mint}",
            )
        if wrapped_account.owner != wallet:
            raise MalformedAccount(
                wrapped_account.address,
                "wrapped token",
                f"owned by wallet {wrapped_account.owner}, expected {wallet}",
            )
        wrapped = wrapped_account.amount

    return BalanceSummary(native=native, wrapped=wrapped, decimals=decimals)
