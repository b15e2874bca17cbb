"""One stateless query: fetch, decode, aggregate and value."""
from __future__ import annotations

import asyncio
import logging

from solders.pubkey import Pubkey

from ..addresses import get_associated_token_address, parse_pubkey
from ..config import PoolConfig
from ..interfaces.chain import AccountFetcher
from ..layouts import decode_mint, decode_pool_state, decode_token_account
from ..models import PositionReport
from . import balances, valuation

logger = logging.getLogger(__name__)


class PositionService:
    """Build a ``PositionReport`` for a wallet against one configured pool."""

    def __init__(self, fetcher: AccountFetcher, config: PoolConfig) -> None:
        self._fetcher = fetcher
        self._config = config
        self._pool_program = parse_pubkey(config.program_id)
        self._pool_state = parse_pubkey(config.pool_state)
        self._native_mint = parse_pubkey(config.native_mint)
        self._token_program = parse_pubkey(config.token_program_id)
        self._ata_program = parse_pubkey(config.associated_token_program_id)

    def token_account_address(self, wallet: Pubkey, mint: Pubkey) -> Pubkey:
        return get_associated_token_address(
            wallet, mint, self._token_program, self._ata_program
        )

    async def fetch_report(self, wallet: Pubkey) -> PositionReport:
        """Run both fetch phases and compute the summary for ``wallet``."""
        logger.info("Querying balances and %s position for %s", self._config.label, wallet)
        wrapped_address = self.token_account_address(wallet, self._native_mint)

        # Phase 1: independent reads, including the pool state that names
        # everything fetched in phase 2.
        wallet_raw, wrapped_raw, pool_raw = await asyncio.gather(
            self._fetcher.fetch_optional(wallet),
            self._fetcher.fetch_optional(wrapped_address),
            self._fetcher.fetch(self._pool_state, "pool state"),
        )
        pool = decode_pool_state(pool_raw, self._pool_program)
        logger.debug(
            "Pool %s: vaults %s / %s, LP mint %s",
            pool.address, pool.token_0_vault, pool.token_1_vault, pool.lp_mint,
        )

        wrapped = None
        if wrapped_raw is not None:
            wrapped = decode_token_account(wrapped_raw, self._token_program, "wrapped token")
        balance_summary = balances.aggregate_balances(
            wallet_raw, wrapped, wallet, self._native_mint, self._config.native_decimals
        )

        # Phase 2: accounts discovered from the pool state.
        lp_address = self.token_account_address(wallet, pool.lp_mint)
        vault_0_raw, vault_1_raw, lp_mint_raw, wallet_lp_raw = await asyncio.gather(
            self._fetcher.fetch(pool.token_0_vault, "vault"),
            self._fetcher.fetch(pool.token_1_vault, "vault"),
            self._fetcher.fetch(pool.lp_mint, "LP mint"),
            self._fetcher.fetch_optional(lp_address),
        )
        vault_0 = decode_token_account(vault_0_raw, self._token_program, "vault")
        vault_1 = decode_token_account(vault_1_raw, self._token_program, "vault")
        lp_mint = decode_mint(lp_mint_raw, self._token_program, "LP mint")
        wallet_lp = None
        if wallet_lp_raw is not None:
            wallet_lp = decode_token_account(wallet_lp_raw, self._token_program, "LP token")
        else:
            logger.info("Wallet %s holds no LP token account", wallet)

        position = valuation.value_position(
            pool, vault_0, vault_1, lp_mint, wallet_lp, self._native_mint
        )
        logger.info(
            "LP share %s/%s, native value %s raw units (rate defined: %s)",
            position.wallet_lp, position.lp_supply,
            position.native_value, position.rate_defined,
        )

        return PositionReport(
            wallet=wallet,
            balances=balance_summary,
            position=position,
            pool_label=self._config.label,
        )
