"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction

from solders.pubkey import Pubkey


@dataclass(frozen=True)
class RawAccount:
    """Account snapshot as returned by the RPC node."""

    address: Pubkey
    owner: Pubkey
    lamports: int
    data: bytes


@dataclass(frozen=True)
class TokenAccountRecord:
    """Decoded SPL token account."""

    address: Pubkey
    mint: Pubkey
    owner: Pubkey
    amount: int
    state: int = 1
    is_native: bool = False


@dataclass(frozen=True)
class MintRecord:
    """Decoded SPL mint."""

    address: Pubkey
    supply: int
    decimals: int
    is_initialized: bool = True


@dataclass(frozen=True)
class PoolStateRecord:
    """Decoded CPMM pool state. Reserves live in the vaults, not here."""

    address: Pubkey
    token_0_vault: Pubkey
    token_1_vault: Pubkey
    lp_mint: Pubkey
    token_0_mint: Pubkey
    token_1_mint: Pubkey
    mint_0_decimals: int
    mint_1_decimals: int
    lp_mint_decimals: int = 9
    status: int = 0
    lp_supply: int = 0


@dataclass(frozen=True)
class ReserveShare:
    """One side of the pool and the wallet's claim on it (raw units)."""

    mint: Pubkey
    decimals: int
    reserve: int
    claimed: Fraction


@dataclass(frozen=True)
class Position:
    """Wallet's proportional share of the pool, valued in native raw units."""

    lp_mint: Pubkey
    wallet_lp: int
    lp_supply: int
    native: ReserveShare
    other: ReserveShare
    native_value: Fraction
    rate_defined: bool = True

    @property
    def share(self) -> Fraction:
        if self.lp_supply == 0:
            return Fraction(0)
        return Fraction(self.wallet_lp, self.lp_supply)

    @property
    def rate(self) -> Fraction | None:
        """Native per other-asset, in human units; None when a reserve is empty."""
        if not self.rate_defined:
            return None
        return Fraction(
            self.native.reserve * 10**self.other.decimals,
            self.other.reserve * 10**self.native.decimals,
        )


@dataclass(frozen=True)
class BalanceSummary:
    """Native and wrapped balances of a wallet, in lamports."""

    native: int
    wrapped: int = 0
    decimals: int = 9

    @property
    def unified(self) -> int:
        return self.native + self.wrapped


@dataclass(frozen=True)
class PositionReport:
    """Everything a single query produces."""

    wallet: Pubkey
    balances: BalanceSummary
    position: Position
    pool_label: str = ""
