"""Pure LP position valuation — no I/O.

All arithmetic stays in raw integer units or exact ``Fraction`` values.
Scaling by ``10**decimals`` happens only when a value is formatted.

The position is valued at the pool's instantaneous spot price: the
non-native side is converted with ``reserve_native / reserve_other``. This is
sensitive to the pool's current state and is not an oracle or time-weighted
price.
"""
from __future__ import annotations

from fractions import Fraction

from solders.pubkey import Pubkey

from ..errors import MalformedAccount
from ..models import (
    MintRecord,
    PoolStateRecord,
    Position,
    ReserveShare,
    TokenAccountRecord,
)


def claimed_amount(reserve: int, wallet_lp: int, lp_supply: int) -> Fraction:
    """Raw amount of ``reserve`` owned by ``wallet_lp`` out of ``lp_supply``.

    Multiplies before dividing. A zero supply is an empty pool and yields 0.
    """
    if lp_supply == 0:
        return Fraction(0)
    return Fraction(reserve * wallet_lp, lp_supply)


def native_equivalent(
    claimed_native: Fraction,
    claimed_other: Fraction,
    reserve_native: int,
    reserve_other: int,
) -> tuple[Fraction, bool]:
    """Value both claims in native raw units at the pool's spot rate.

    Both reserves are raw, so the decimal scales cancel: converting
    ``claimed_other`` raw units at ``reserve_native / reserve_other`` gives
    native raw units directly.

    Returns:
        ``(value, rate_defined)``. When either reserve is zero the rate is
        undefined and the other side contributes nothing.
    """
    if reserve_native == 0 or reserve_other == 0:
        return claimed_native, False
    return claimed_native + claimed_other * Fraction(reserve_native, reserve_other), True


def _check_vault(vault: TokenAccountRecord, expected_mint: Pubkey) -> None:
    if vault.mint != expected_mint:
        raise MalformedAccount(
            vault.address, "vault", f"holds mint {vault.mint}, pool expects {expected_mint}"
        )


def value_position(
    pool: PoolStateRecord,
    vault_0: TokenAccountRecord,
    vault_1: TokenAccountRecord,
    lp_mint: MintRecord,
    wallet_lp_account: TokenAccountRecord | None,
    native_mint: Pubkey,
) -> Position:
    """Value the wallet's LP holding in native raw units.

    Args:
        pool: Decoded pool state naming the vaults and mints.
        vault_0: Token account at ``pool.token_0_vault``.
        vault_1: Token account at ``pool.token_1_vault``.
        lp_mint: Mint at ``pool.lp_mint``; its supply is the ownership
            denominator.
        wallet_lp_account: The wallet's LP token account, or None when the
            wallet holds none (zero position).
        native_mint: Wrapped native mint identifying the native side.
    """
    _check_vault(vault_0, pool.token_0_mint)
    _check_vault(vault_1, pool.token_1_mint)

    if lp_mint.address != pool.lp_mint:
        raise MalformedAccount(
            lp_mint.address, "LP mint", f"pool names LP mint {pool.lp_mint}"
        )

    wallet_lp = 0
    if wallet_lp_account is not None:
        if wallet_lp_account.mint != pool.lp_mint:
            raise MalformedAccount(
                wallet_lp_account.address,
                "LP token",
                f"holds mint {wallet_lp_account.mint}, expected {pool.lp_mint}",
            )
        wallet_lp = wallet_lp_account.amount

    sides = [
        (pool.token_0_mint, pool.mint_0_decimals, vault_0.amount),
        (pool.token_1_mint, pool.mint_1_decimals, vault_1.amount),
    ]
    if pool.token_0_mint == native_mint:
        native_side, other_side = sides
    elif pool.token_1_mint == native_mint:
        other_side, native_side = sides
    else:
        raise MalformedAccount(
            pool.address, "pool state", f"pool does not contain native mint {native_mint}"
        )

    lp_supply = lp_mint.supply
    native = ReserveShare(
        mint=native_side[0],
        decimals=native_side[1],
        reserve=native_side[2],
        claimed=claimed_amount(native_side[2], wallet_lp, lp_supply),
    )
    other = ReserveShare(
        mint=other_side[0],
        decimals=other_side[1],
        reserve=other_side[2],
        claimed=claimed_amount(other_side[2], wallet_lp, lp_supply),
    )
    value, rate_defined = native_equivalent(
        native.claimed, other.claimed, native.reserve, other.reserve
    )

    return Position(
        lp_mint=pool.lp_mint,
        wallet_lp=wallet_lp,
        lp_supply=lp_supply,
        native=native,
        other=other,
        native_value=value,
        rate_defined=rate_defined,
    )
