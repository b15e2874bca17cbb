"""Error taxonomy for a single position query."""
from __future__ import annotations


class PositionQueryError(Exception):
    """Base class for errors that abort a position query."""


class AccountNotFound(PositionQueryError):
    """A mandatory account does not exist on chain."""

    def __init__(self, address: object, kind: str = "account") -> None:
        self.address = str(address)
        self.kind = kind
        super().__init__(f"{kind} account {self.address} not found")


class MalformedAccount(PositionQueryError):
    """Account data does not match the expected layout or owning program."""

    def __init__(self, address: object, kind: str, reason: str) -> None:
        self.address = str(address)
        self.kind = kind
        self.reason = reason
        super().__init__(f"malformed {kind} account {self.address}: {reason}")


class NetworkFailure(PositionQueryError):
    """The RPC endpoints could not be reached or returned an error."""
