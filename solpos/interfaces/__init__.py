"""Protocol interfaces for the position probe."""
from .chain import AccountFetcher

__all__ = ["AccountFetcher"]
