"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable
from unittest.mock import AsyncMock

import pytest
from solders.pubkey import Pubkey

from solpos.addresses import get_associated_token_address
from solpos.config import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    CPMM_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
    WSOL_MINT,
    AppConfig,
    ChainConfig,
    PoolConfig,
)
from solpos.errors import AccountNotFound
from solpos.layouts import encode_mint, encode_pool_state, encode_token_account
from solpos.models import MintRecord, PoolStateRecord, RawAccount, TokenAccountRecord

TOKEN_PROGRAM = Pubkey.from_string(TOKEN_PROGRAM_ID)
ATA_PROGRAM = Pubkey.from_string(ASSOCIATED_TOKEN_PROGRAM_ID)
CPMM_PROGRAM = Pubkey.from_string(CPMM_PROGRAM_ID)
WSOL = Pubkey.from_string(WSOL_MINT)
SYSTEM_PROGRAM = Pubkey.from_string("11111111111111111111111111111111")

RENT_EXEMPT_TOKEN_LAMPORTS = 2_039_280


# ---------------------------------------------------------------------------
# Addresses
# ---------------------------------------------------------------------------


@pytest.fixture()
def wallet() -> Pubkey:
    return Pubkey.new_unique()


@pytest.fixture()
def usdc_mint() -> Pubkey:
    return Pubkey.new_unique()


@pytest.fixture()
def pool_address() -> Pubkey:
    return Pubkey.new_unique()


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_chain_config() -> ChainConfig:
    return ChainConfig(
        rpc_endpoints=("https://rpc1.example.com", "https://rpc2.example.com"),
        rpc_timeout=10,
    )


@pytest.fixture()
def sample_pool_config(pool_address: Pubkey) -> PoolConfig:
    return PoolConfig(label="SOL-USDC", pool_state=str(pool_address))


@pytest.fixture()
def sample_app_config(
    sample_chain_config: ChainConfig, sample_pool_config: PoolConfig
) -> AppConfig:
    return AppConfig(chain=sample_chain_config, pool=sample_pool_config)


SAMPLE_YAML = textwrap.dedent("""\
    chain:
      rpc_endpoints: ["https://rpc.example.com", "https://rpc2.example.com"]
      rpc_timeout: 10
      commitment: finalized
    pool:
      label: SOL-USDC
      program_id: "CPMMoo8L3F4NbTegBCKVNunggL7H1ZpdTHKxQB5qKP2C"
      pool_state: "7JuwJuNU88gurFnyWeiyGKbFmExMWcmRZntn9imEzdny"
      native_mint: "So11111111111111111111111111111111111111112"
      native_decimals: 9
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


# ---------------------------------------------------------------------------
# Raw account factories
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_token_account() -> Callable[..., RawAccount]:
    def _make(
        address: Pubkey,
        mint: Pubkey,
        owner: Pubkey,
        amount: int,
        is_native: bool = False,
    ) -> RawAccount:
        record = TokenAccountRecord(
            address=address, mint=mint, owner=owner, amount=amount, is_native=is_native
        )
        return RawAccount(
            address=address,
            owner=TOKEN_PROGRAM,
            lamports=RENT_EXEMPT_TOKEN_LAMPORTS,
            data=encode_token_account(record),
        )

    return _make


@pytest.fixture()
def make_mint() -> Callable[..., RawAccount]:
    def _make(address: Pubkey, supply: int, decimals: int) -> RawAccount:
        record = MintRecord(address=address, supply=supply, decimals=decimals)
        return RawAccount(
            address=address, owner=TOKEN_PROGRAM, lamports=1_461_600, data=encode_mint(record)
        )

    return _make


@pytest.fixture()
def sample_pool_record(pool_address: Pubkey, usdc_mint: Pubkey) -> PoolStateRecord:
    return PoolStateRecord(
        address=pool_address,
        token_0_vault=Pubkey.new_unique(),
        token_1_vault=Pubkey.new_unique(),
        lp_mint=Pubkey.new_unique(),
        token_0_mint=WSOL,
        token_1_mint=usdc_mint,
        mint_0_decimals=9,
        mint_1_decimals=6,
        lp_mint_decimals=9,
        lp_supply=1_000_000,
    )


@pytest.fixture()
def sample_pool_raw(sample_pool_record: PoolStateRecord) -> RawAccount:
    return RawAccount(
        address=sample_pool_record.address,
        owner=CPMM_PROGRAM,
        lamports=6_000_000,
        data=encode_pool_state(sample_pool_record),
    )


def ata(wallet: Pubkey, mint: Pubkey) -> Pubkey:
    return get_associated_token_address(wallet, mint, TOKEN_PROGRAM, ATA_PROGRAM)


@pytest.fixture()
def chain_state(
    wallet: Pubkey,
    sample_pool_record: PoolStateRecord,
    sample_pool_raw: RawAccount,
    make_token_account: Callable[..., RawAccount],
    make_mint: Callable[..., RawAccount],
) -> dict[Pubkey, RawAccount]:
    """Ledger snapshot for the 1% LP scenario.

    Reserves: 1,000 SOL and 50,000 USDC. LP supply 1,000,000 with the
    wallet holding 10,000 LP and 13,955,593 lamports, no WSOL account.
    """
    pool = sample_pool_record
    lp_account = ata(wallet, pool.lp_mint)
    return {
        wallet: RawAccount(
            address=wallet, owner=SYSTEM_PROGRAM, lamports=13_955_593, data=b""
        ),
        pool.address: sample_pool_raw,
        pool.token_0_vault: make_token_account(
            pool.token_0_vault, pool.token_0_mint, pool.address, 1_000_000_000_000
        ),
        pool.token_1_vault: make_token_account(
            pool.token_1_vault, pool.token_1_mint, pool.address, 50_000_000_000
        ),
        pool.lp_mint: make_mint(pool.lp_mint, 1_000_000, 9),
        lp_account: make_token_account(lp_account, pool.lp_mint, wallet, 10_000),
    }


@pytest.fixture()
def mock_fetcher(chain_state: dict[Pubkey, RawAccount]) -> AsyncMock:
    """Account fetcher backed by ``chain_state``; missing keys do not exist."""

    def _fetch(address: Pubkey, kind: str = "account") -> RawAccount:
        if address not in chain_state:
            raise AccountNotFound(address, kind)
        return chain_state[address]

    fetcher = AsyncMock()
    fetcher.fetch.side_effect = _fetch
    fetcher.fetch_optional.side_effect = lambda address: chain_state.get(address)
    return fetcher
