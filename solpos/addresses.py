"""Address parsing and associated token account derivation."""
from __future__ import annotations

from solders.pubkey import Pubkey


def parse_pubkey(value: str | Pubkey) -> Pubkey:
    """Parse a base58 address into a Pubkey.

    Raises:
        ValueError: if the string is not a valid 32-byte base58 key.
    """
    if isinstance(value, Pubkey):
        return value
    try:
        return Pubkey.from_string(value.strip())
    except Exception as e:
        raise ValueError(f"Invalid address: {value!r}") from e


def is_valid_address(value: str) -> bool:
    try:
        parse_pubkey(value)
    except ValueError:
        return False
    return True


def get_associated_token_address(
    wallet: Pubkey,
    mint: Pubkey,
    token_program: Pubkey,
    associated_token_program: Pubkey,
) -> Pubkey:
    """Derive the canonical token account of ``wallet`` for ``mint``.

    Seeds are ``[wallet, token_program, mint]`` under the associated token
    account program.
    """
    address, _bump = Pubkey.find_program_address(
        [bytes(wallet), bytes(token_program), bytes(mint)],
        associated_token_program,
    )
    return address
