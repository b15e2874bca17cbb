"""Solana JSON-RPC client with endpoint fallback."""
import base64
import binascii
import logging
import ssl
from typing import Any

import aiohttp
import certifi
from solders.pubkey import Pubkey

from ...config import ChainConfig
from ...errors import AccountNotFound, NetworkFailure
from ...models import RawAccount

logger = logging.getLogger(__name__)


class SolanaClient:
    """Solana RPC client with automatic endpoint fallback."""

    def __init__(self, config: ChainConfig) -> None:
        self.endpoints = list(config.rpc_endpoints)
        self.timeout = config.rpc_timeout
        self.commitment = config.commitment
        self.current_rpc_index = 0

    async def rpc_call(self, method: str, params: list[Any]) -> Any:
        """Make RPC call with fallback to alternative endpoints."""
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}

        ssl_context = ssl.create_default_context(cafile=certifi.where())

        last_error: Exception | None = None
        for attempt in range(len(self.endpoints)):
            rpc_index = (self.current_rpc_index + attempt) % len(self.endpoints)
            rpc_url = self.endpoints[rpc_index]

            try:
                connector = aiohttp.TCPConnector(ssl=ssl_context)
                async with aiohttp.ClientSession(connector=connector) as session:
                    async with session.post(
                        rpc_url,
                        json=payload,
                        timeout=aiohttp.ClientTimeout(total=self.timeout),
                    ) as response:
                        result = await response.json()
                        if "error" in result:
                            raise RuntimeError(f"RPC Error: {result['error']}")
                        if "result" not in result:
                            raise RuntimeError(f"Malformed RPC reply: {result}")

                        if rpc_index != self.current_rpc_index:
                            logger.info("Switched to RPC endpoint: %s", rpc_url)
                            self.current_rpc_index = rpc_index

                        return result["result"]
            except Exception as e:
                last_error = e
                logger.warning("RPC endpoint %s failed: %s", rpc_url, e)
                if attempt < len(self.endpoints) - 1:
                    logger.info("Trying next endpoint...")
                continue

        raise NetworkFailure(f"All RPC endpoints failed. Last error: {last_error}")

    async def fetch_optional(self, address: Pubkey) -> RawAccount | None:
        """Fetch the latest raw state of an account; None if it does not exist."""
        result = await self.rpc_call(
            "getAccountInfo",
            [str(address), {"encoding": "base64", "commitment": self.commitment}],
        )
        if not isinstance(result, dict) or "value" not in result:
            raise NetworkFailure(f"Unexpected getAccountInfo reply for {address}: {result!r}")
        value = result["value"]
        if value is None:
            logger.debug("Account %s does not exist", address)
            return None
        return _to_raw_account(address, value)

    async def fetch(self, address: Pubkey, kind: str = "account") -> RawAccount:
        """Fetch an account that must exist.

        Raises:
            AccountNotFound: if the ledger has no account at ``address``.
        """
        raw = await self.fetch_optional(address)
        if raw is None:
            raise AccountNotFound(address, kind)
        return raw


def _to_raw_account(address: Pubkey, value: dict[str, Any]) -> RawAccount:
    data_field = value.get("data")
    if not isinstance(data_field, list) or len(data_field) != 2 or data_field[1] != "base64":
        raise NetworkFailure(f"Unexpected data encoding for account {address}: {data_field!r}")
    try:
        data = base64.b64decode(data_field[0], validate=True)
    except (binascii.Error, ValueError) as e:
        raise NetworkFailure(f"Invalid base64 payload for account {address}") from e
    return RawAccount(
        address=address,
        owner=Pubkey.from_string(value["owner"]),
        lamports=int(value.get("lamports", 0)),
        data=data,
    )
