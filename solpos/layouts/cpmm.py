"""Raydium constant-product AMM (CPMM) pool state layout.

The pool state only names the vaults and mints; reserve balances are read
from the vault token accounts. Offsets include the 8-byte Anchor
discriminator::

    0   discriminator      [u8; 8]
    8   amm_config         Pubkey  (not modeled)
    40  pool_creator       Pubkey  (not modeled)
    72  token_0_vault      Pubkey
    104 token_1_vault      Pubkey
    136 lp_mint            Pubkey
    168 token_0_mint       Pubkey
    200 token_1_mint       Pubkey
    232 token_0_program, token_1_program, observation_key (not modeled)
    328 auth_bump          u8      (not modeled)
    329 status             u8
    330 lp_mint_decimals   u8
    331 mint_0_decimals    u8
    332 mint_1_decimals    u8
    333 lp_supply          u64
    341 fees, open_time, recent_epoch, padding (not modeled)
"""
from __future__ import annotations

import hashlib

from construct import Bytes, Int8ul, Int64ul, Padding, Struct
from solders.pubkey import Pubkey

from ..errors import MalformedAccount
from ..models import PoolStateRecord, RawAccount
from .base import PUBKEY_LAYOUT, check_account

POOL_STATE_DISCRIMINATOR = hashlib.sha256(b"account:PoolState").digest()[:8]

PoolStateLayout = Struct(
    "discriminator" / Bytes(8),
    Padding(64),
    "token_0_vault" / PUBKEY_LAYOUT,
    "token_1_vault" / PUBKEY_LAYOUT,
    "lp_mint" / PUBKEY_LAYOUT,
    "token_0_mint" / PUBKEY_LAYOUT,
    "token_1_mint" / PUBKEY_LAYOUT,
    Padding(96),
    Padding(1),
    "status" / Int8ul,
    "lp_mint_decimals" / Int8ul,
    "mint_0_decimals" / Int8ul,
    "mint_1_decimals" / Int8ul,
    "lp_supply" / Int64ul,
    Padding(48),
    Padding(31 * 8),
)

POOL_STATE_SIZE = PoolStateLayout.sizeof()


def decode_pool_state(
    raw: RawAccount, pool_program: Pubkey, kind: str = "pool state"
) -> PoolStateRecord:
    """Decode a CPMM pool state, validating size, owner and discriminator."""
    check_account(raw, kind, POOL_STATE_SIZE, pool_program)
    parsed = PoolStateLayout.parse(raw.data)
    if parsed.discriminator != POOL_STATE_DISCRIMINATOR:
        raise MalformedAccount(
            raw.address, kind, f"unexpected discriminator {parsed.discriminator.hex()}"
        )
    return PoolStateRecord(
        address=raw.address,
        token_0_vault=Pubkey.from_bytes(parsed.token_0_vault),
        token_1_vault=Pubkey.from_bytes(parsed.token_1_vault),
        lp_mint=Pubkey.from_bytes(parsed.lp_mint),
        token_0_mint=Pubkey.from_bytes(parsed.token_0_mint),
        token_1_mint=Pubkey.from_bytes(parsed.token_1_mint),
        mint_0_decimals=parsed.mint_0_decimals,
        mint_1_decimals=parsed.mint_1_decimals,
        lp_mint_decimals=parsed.lp_mint_decimals,
        status=parsed.status,
        lp_supply=parsed.lp_supply,
    )


def encode_pool_state(record: PoolStateRecord) -> bytes:
    return PoolStateLayout.build(
        {
            "discriminator": POOL_STATE_DISCRIMINATOR,
            "token_0_vault": bytes(record.token_0_vault),
            "token_1_vault": bytes(record.token_1_vault),
            "lp_mint": bytes(record.lp_mint),
            "token_0_mint": bytes(record.token_0_mint),
            "token_1_mint": bytes(record.token_1_mint),
            "status": record.status,
            "lp_mint_decimals": record.lp_mint_decimals,
            "mint_0_decimals": record.mint_0_decimals,
            "mint_1_decimals": record.mint_1_decimals,
            "lp_supply": record.lp_supply,
        }
    )
