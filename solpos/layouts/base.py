"""Shared checks applied before any field is read."""
from __future__ import annotations

from construct import Bytes
from solders.pubkey import Pubkey

from ..errors import MalformedAccount
from ..models import RawAccount

PUBKEY_LAYOUT = Bytes(32)


def check_account(raw: RawAccount, kind: str, size: int, program_id: Pubkey) -> None:
    """Reject payloads of the wrong length or owned by the wrong program."""
    if len(raw.data) != size:
        raise MalformedAccount(
            raw.address, kind, f"expected {size} bytes, got {len(raw.data)}"
        )
    if raw.owner != program_id:
        raise MalformedAccount(
            raw.address, kind, f"owned by {raw.owner}, expected {program_id}"
        )
