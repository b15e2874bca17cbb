"""SPL Token program layouts: token accounts and mints.

Token account (165 bytes)::

    0   mint              Pubkey
    32  owner             Pubkey
    64  amount            u64
    72  delegate          COption<Pubkey>   (not modeled)
    108 state             u8
    109 is_native         COption<u64>      (tag modeled, reserve skipped)
    121 delegated_amount  u64               (not modeled)
    129 close_authority   COption<Pubkey>   (not modeled)

Mint (82 bytes)::

    0   mint_authority    COption<Pubkey>   (not modeled)
    36  supply            u64
    44  decimals          u8
    45  is_initialized    bool
    46  freeze_authority  COption<Pubkey>   (not modeled)
"""
from __future__ import annotations

from construct import Int8ul, Int32ul, Int64ul, Padding, Struct
from solders.pubkey import Pubkey

from ..errors import MalformedAccount
from ..models import MintRecord, RawAccount, TokenAccountRecord
from .base import PUBKEY_LAYOUT, check_account

TokenAccountLayout = Struct(
    "mint" / PUBKEY_LAYOUT,
    "owner" / PUBKEY_LAYOUT,
    "amount" / Int64ul,
    Padding(36),
    "state" / Int8ul,
    "is_native_option" / Int32ul,
    Padding(8),
    Padding(8),
    Padding(36),
)

MintLayout = Struct(
    Padding(36),
    "supply" / Int64ul,
    "decimals" / Int8ul,
    "is_initialized" / Int8ul,
    Padding(36),
)

TOKEN_ACCOUNT_SIZE = TokenAccountLayout.sizeof()
MINT_SIZE = MintLayout.sizeof()

ACCOUNT_STATE_UNINITIALIZED = 0


def decode_token_account(
    raw: RawAccount, token_program: Pubkey, kind: str = "token"
) -> TokenAccountRecord:
    """Decode an SPL token account, validating size and owning program."""
    check_account(raw, kind, TOKEN_ACCOUNT_SIZE, token_program)
    parsed = TokenAccountLayout.parse(raw.data)
    if parsed.state == ACCOUNT_STATE_UNINITIALIZED:
        raise MalformedAccount(raw.address, kind, "token account is uninitialized")
    return TokenAccountRecord(
        address=raw.address,
        mint=Pubkey.from_bytes(parsed.mint),
        owner=Pubkey.from_bytes(parsed.owner),
        amount=parsed.amount,
        state=parsed.state,
        is_native=parsed.is_native_option == 1,
    )


def encode_token_account(record: TokenAccountRecord) -> bytes:
    return TokenAccountLayout.build(
        {
            "mint": bytes(record.mint),
            "owner": bytes(record.owner),
            "amount": record.amount,
            "state": record.state,
            "is_native_option": 1 if record.is_native else 0,
        }
    )


def decode_mint(raw: RawAccount, token_program: Pubkey, kind: str = "mint") -> MintRecord:
    """Decode an SPL mint, validating size and owning program."""
    check_account(raw, kind, MINT_SIZE, token_program)
    parsed = MintLayout.parse(raw.data)
    if not parsed.is_initialized:
        raise MalformedAccount(raw.address, kind, "mint is uninitialized")
    return MintRecord(
        address=raw.address,
        supply=parsed.supply,
        decimals=parsed.decimals,
        is_initialized=bool(parsed.is_initialized),
    )


def encode_mint(record: MintRecord) -> bytes:
    return MintLayout.build(
        {
            "supply": record.supply,
            "decimals": record.decimals,
            "is_initialized": 1 if record.is_initialized else 0,
        }
    )
