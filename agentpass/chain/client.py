"""
Solana chain client for AgentPass.

This module talks to a Solana JSON-RPC node and a public price API. It backs
the built-in skills and formats its results as text for the chat layer.
"""

import httpx
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..config import config
from ..exceptions import ChainError


LAMPORTS_PER_SOL = 1_000_000_000
TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
COINGECKO_URL = "https://api.coingecko.com/api/v3/simple/price"

# CoinGecko id -> symbol for the popular token listing
POPULAR_TOKENS = {
    "solana": "SOL",
    "usd-coin": "USDC",
    "tether": "USDT",
    "bonk": "BONK",
    "jupiter-exchange-solana": "JUP",
}


class TokenBalance(BaseModel):
    """SPL token holding of a wallet."""

    mint: str
    amount: str
    decimals: int
    ui_amount: float


class WalletInfo(BaseModel):
    """SOL balance and token holdings of a wallet."""

    address: str
    balance: float = Field(..., description="Balance in SOL")
    tokens: List[TokenBalance] = Field(default_factory=list)


class TokenPrice(BaseModel):
    """Spot price of a token."""

    symbol: str
    price: float
    price_change_24h: Optional[float] = None


class TransactionInfo(BaseModel):
    """One signature from a wallet's history."""

    signature: str
    slot: int
    timestamp: Optional[str] = None
    status: str


class NetworkStatus(BaseModel):
    """Current slot and its block time."""

    slot: int
    block_time: int = Field(0, description="Unix timestamp, 0 if unknown")


class SolanaClient:
    """
    Minimal async Solana client over JSON-RPC.
    """

    def __init__(self, rpc_url: Optional[str] = None, client: Optional[httpx.AsyncClient] = None,
                 price_url: str = COINGECKO_URL):
        """
        Initialize the chain client.

        Args:
            rpc_url: JSON-RPC endpoint (defaults to config value)
            client: Optional shared httpx client
            price_url: CoinGecko simple price endpoint
        """
        self.rpc_url = rpc_url or config.solana_rpc_url
        self.price_url = price_url
        self.client = client or httpx.AsyncClient(timeout=config.solana_timeout)
        self._request_id = 0

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def _rpc(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """
        Make a JSON-RPC call.

        Args:
            method: RPC method name
            params: Positional parameters

        Returns:
            The "result" member of the response

        Raises:
            ChainError: On transport, HTTP or RPC errors
        """
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params or []
        }

        try:
            response = await self.client.post(self.rpc_url, json=payload)
            response.raise_for_status()
            body = response.json()
        except httpx.RequestError as e:
            raise ChainError(f"Failed to connect to Solana RPC: {e}")
        except httpx.HTTPStatusError as e:
            raise ChainError(f"Solana RPC request failed: {e}")
        except ValueError as e:
            raise ChainError(f"Invalid Solana RPC response: {e}")

        if body.get("error"):
            raise ChainError(f"{method} failed: {body['error'].get('message', body['error'])}")

        return body.get("result")

    async def get_balance(self, address: str) -> float:
        """SOL balance of a wallet."""
        result = await self._rpc("getBalance", [address])
        return result["value"] / LAMPORTS_PER_SOL

    async def get_token_balances(self, address: str) -> List[TokenBalance]:
        """Non-empty SPL token balances of a wallet."""
        result = await self._rpc("getTokenAccountsByOwner", [
            address,
            {"programId": TOKEN_PROGRAM_ID},
            {"encoding": "jsonParsed"}
        ])

        balances = []
        for account in result.get("value", []):
            info = account["account"]["data"]["parsed"]["info"]
            amount = info["tokenAmount"]
            ui_amount = amount.get("uiAmount") or 0
            if ui_amount > 0:
                balances.append(TokenBalance(
                    mint=info["mint"],
                    amount=amount["amount"],
                    decimals=amount["decimals"],
                    ui_amount=ui_amount
                ))
        return balances

    async def get_wallet_info(self, address: str) -> WalletInfo:
        """Balance and token holdings of a wallet."""
        balance = await self.get_balance(address)
        tokens = await self.get_token_balances(address)
        return WalletInfo(address=address, balance=balance, tokens=tokens)

    async def get_recent_transactions(self, address: str, limit: int = 10) -> List[TransactionInfo]:
        """Most recent signatures for a wallet."""
        result = await self._rpc("getSignaturesForAddress", [address, {"limit": limit}])

        transactions = []
        for sig in result or []:
            block_time = sig.get("blockTime")
            transactions.append(TransactionInfo(
                signature=sig["signature"],
                slot=sig["slot"],
                timestamp=datetime.fromtimestamp(block_time, tz=timezone.utc).isoformat() if block_time else None,
                status="failed" if sig.get("err") else "success"
            ))
        return transactions

    async def get_network_status(self) -> NetworkStatus:
        """Current slot and block time."""
        slot = await self._rpc("getSlot")
        block_time = await self._rpc("getBlockTime", [slot])
        return NetworkStatus(slot=slot, block_time=block_time or 0)

    async def get_popular_tokens(self) -> List[TokenPrice]:
        """
        Prices of popular Solana tokens.

        Falls back to zero prices when the price API is unavailable.
        """
        try:
            response = await self.client.get(self.price_url, params={
                "ids": ",".join(POPULAR_TOKENS),
                "vs_currencies": "usd",
                "include_24hr_change": "true"
            })
            response.raise_for_status()
            data: Dict[str, Any] = response.json()

            prices = [
                TokenPrice(
                    symbol=symbol,
                    price=data[cg_id].get("usd") or 0,
                    price_change_24h=data[cg_id].get("usd_24h_change") or 0
                )
                for cg_id, symbol in POPULAR_TOKENS.items()
                if cg_id in data
            ]
            if prices:
                return prices
        except (httpx.HTTPError, ValueError) as e:
            logging.warning(f"Price API unavailable: {e}")

        return [TokenPrice(symbol=symbol, price=0, price_change_24h=0) for symbol in POPULAR_TOKENS.values()]


def format_wallet_info(wallet: WalletInfo) -> str:
    """Format wallet info for the chat layer."""
    text = f"**Wallet:** `{wallet.address}`\n\n"
    text += f"**SOL balance:** {wallet.balance:.4f} SOL\n\n"

    if wallet.tokens:
        text += f"**Tokens ({len(wallet.tokens)}):**\n"
        for token in wallet.tokens[:10]:
            text += f"- {token.ui_amount:.4f} (Mint: {token.mint[:8]}...)\n"
        if len(wallet.tokens) > 10:
            text += f"\n_...and {len(wallet.tokens) - 10} more tokens_\n"
    else:
        text += "**No tokens found**\n"

    return text


def format_transactions(transactions: List[TransactionInfo]) -> str:
    """Format a transaction list for the chat layer."""
    if not transactions:
        return "No transactions found."

    text = f"**Last {len(transactions)} transactions:**\n\n"
    for index, tx in enumerate(transactions, 1):
        marker = "[ok]" if tx.status == "success" else "[fail]"
        text += f"{index}. {marker} [{tx.signature[:8]}...](https://solscan.io/tx/{tx.signature})"
        if tx.timestamp:
            text += f" - {tx.timestamp}"
        text += "\n"
    return text


def format_prices(prices: List[TokenPrice]) -> str:
    """One line per token: symbol, price and 24h change."""
    lines = []
    for p in prices:
        change = f" ({p.price_change_24h:+.2f}%)" if p.price_change_24h is not None else ""
        lines.append(f"{p.symbol}: ${p.price:.4f}{change}")
    return "\n".join(lines)


def format_network_status(status: NetworkStatus) -> str:
    """Format network status for the chat layer."""
    block_time = datetime.fromtimestamp(status.block_time, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
    return f"Solana Network:\n- Current Slot: {status.slot}\n- Block Time: {block_time}"
