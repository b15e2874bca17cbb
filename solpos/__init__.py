"""SOL / WSOL balance and LP position probe for a single Solana wallet."""

__version__ = "0.1.0"
