"""Fixed-size account layouts and their decoders."""
from .base import check_account
from .cpmm import POOL_STATE_DISCRIMINATOR, POOL_STATE_SIZE, decode_pool_state, encode_pool_state
from .spl_token import (
    MINT_SIZE,
    TOKEN_ACCOUNT_SIZE,
    decode_mint,
    decode_token_account,
    encode_mint,
    encode_token_account,
)

__all__ = [
    "MINT_SIZE",
    "POOL_STATE_DISCRIMINATOR",
    "POOL_STATE_SIZE",
    "TOKEN_ACCOUNT_SIZE",
    "check_account",
    "decode_mint",
    "decode_pool_state",
    "decode_token_account",
    "encode_mint",
    "encode_pool_state",
    "encode_token_account",
]
