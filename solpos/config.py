"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .addresses import is_valid_address

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Mainnet binding
# ---------------------------------------------------------------------------

MAINNET_RPC_URL = "https://api.mainnet-beta.solana.com"
TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
ASSOCIATED_TOKEN_PROGRAM_ID = "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"
WSOL_MINT = "So11111111111111111111111111111111111111112"
CPMM_PROGRAM_ID = "CPMMoo8L3F4NbTegBCKVNunggL7H1ZpdTHKxQB5qKP2C"
SOL_USDC_POOL_STATE = "7JuwJuNU88gurFnyWeiyGKbFmExMWcmRZntn9imEzdny"
SOL_DECIMALS = 9

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChainConfig:
    rpc_endpoints: tuple[str, ...] = (MAINNET_RPC_URL,)
    rpc_timeout: int = 30
    commitment: str = "confirmed"


@dataclass(frozen=True)
class PoolConfig:
    """Everything that binds the probe to one pool deployment."""

    label: str = "SOL-USDC"
    program_id: str = CPMM_PROGRAM_ID
    pool_state: str = SOL_USDC_POOL_STATE
    native_mint: str = WSOL_MINT
    native_decimals: int = SOL_DECIMALS
    token_program_id: str = TOKEN_PROGRAM_ID
    associated_token_program_id: str = ASSOCIATED_TOKEN_PROGRAM_ID


@dataclass(frozen=True)
class AppConfig:
    chain: ChainConfig = field(default_factory=ChainConfig)
    pool: PoolConfig = field(default_factory=PoolConfig)


_COMMITMENTS = ("processed", "confirmed", "finalized")

# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_chain(raw: dict[str, Any]) -> ChainConfig:
    endpoints = raw.get("rpc_endpoints")
    if endpoints is None:
        endpoints = list(ChainConfig.rpc_endpoints)
    elif isinstance(endpoints, str):
        endpoints = [endpoints]
    return ChainConfig(
        rpc_endpoints=tuple(e for e in endpoints if e),
        rpc_timeout=int(raw.get("rpc_timeout", 30)),
        commitment=raw.get("commitment", "confirmed"),
    )


def _build_pool(raw: dict[str, Any]) -> PoolConfig:
    return PoolConfig(
        label=raw.get("label", PoolConfig.label),
        program_id=raw.get("program_id", CPMM_PROGRAM_ID),
        pool_state=raw.get("pool_state", SOL_USDC_POOL_STATE),
        native_mint=raw.get("native_mint", WSOL_MINT),
        native_decimals=int(raw.get("native_decimals", SOL_DECIMALS)),
        token_program_id=raw.get("token_program_id", TOKEN_PROGRAM_ID),
        associated_token_program_id=raw.get(
            "associated_token_program_id", ASSOCIATED_TOKEN_PROGRAM_ID
        ),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root; when that file is absent the built-in mainnet
            binding is used.
    """
    load_dotenv()

    if config_path is None:
        default_path = Path(__file__).resolve().parent.parent / "config.yaml"
        if not default_path.exists():
            cfg = AppConfig()
            _validate(cfg)
            logger.debug("No config.yaml found, using built-in defaults")
            return cfg
        config_path = default_path
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        chain=_build_chain(raw.get("chain") or {}),
        pool=_build_pool(raw.get("pool") or {}),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.chain.rpc_endpoints:
        raise ValueError("At least one RPC endpoint must be configured")
    if cfg.chain.rpc_timeout <= 0:
        raise ValueError("rpc_timeout must be positive")
    if cfg.chain.commitment not in _COMMITMENTS:
        raise ValueError(f"Unknown commitment '{cfg.chain.commitment}'")

    for name in (
        "program_id",
        "pool_state",
        "native_mint",
        "token_program_id",
        "associated_token_program_id",
    ):
        value = getattr(cfg.pool, name)
        if not is_valid_address(value):
            raise ValueError(f"Pool '{cfg.pool.label}' has invalid {name}: {value!r}")

    if cfg.pool.native_decimals < 0:
        raise ValueError("native_decimals must not be negative")
