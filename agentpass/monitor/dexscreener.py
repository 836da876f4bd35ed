"""
DexScreener API monitor.

Token activity is tracked as a proxy for how busy an agent's ecosystem is.
The API is free and needs no key.
"""

import httpx
from typing import Any, Dict, Optional

from pydantic import BaseModel

from ..config import config
from ..exceptions import ExternalFetchError
from ..registry.reputation import clamp


SOURCE_NAME = "market-data"

# Token mints tied to the ecosystems of seeded agents
AGENT_TOKEN_MAP: Dict[str, str] = {
    # BONK
    "BonkBot": "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263",
    # DRIFT
    "Drift Keeper Bot": "DriFtupJYLTosbwoN8koMbEYSx54aFAVLddWsbksjwg7",
    # JTO
    "Jito MEV Bot": "jtojtomepa8beP8AuQc6eXt5FriJwfFMwjx2ZEPnxR9",
    # ai16z
    "Eliza (ai16z)": "HeLp6NuQkmYB4pYWo2zYs22mESHXPQYzXbB8n4V98jwC",
    # no native token, JUP as proxy for the Jupiter integration
    "Solana Agent Kit": "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN",
}


class DexTokenData(BaseModel):
    """
    Market data of the most liquid Solana pair for a token.
    """

    symbol: str
    price_usd: float
    change_24h: float = 0.0
    volume_24h: float = 0.0
    liquidity: Optional[float] = None
    pair_address: Optional[str] = None
    dex: Optional[str] = None


def compute_dex_score(token: DexTokenData) -> int:
    """
    Live score delta from token activity, -2 to +2.

    High volume counts as an active ecosystem, steep price drops as a bad sign.
    """
    score = 0

    if token.volume_24h >= 10_000_000:
        score += 2
    elif token.volume_24h >= 1_000_000:
        score += 1
    elif token.volume_24h < 10_000:
        score -= 1

    if token.change_24h <= -30:
        score -= 2
    elif token.change_24h <= -15:
        score -= 1
    elif token.change_24h >= 20:
        score += 1

    return int(clamp(score, -2, 2))


class DexScreenerMonitor:
    """
    Fetches token market data from DexScreener.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, base_url: Optional[str] = None,
                 user_agent: Optional[str] = None, token_map: Optional[Dict[str, str]] = None):
        """
        Initialize the monitor.

        Args:
            client: Optional shared httpx client
            base_url: API base URL (defaults to config value)
            user_agent: User-Agent header (defaults to config value)
            token_map: Agent name to token mint, defaults to AGENT_TOKEN_MAP
        """
        self.base_url = (base_url or config.dexscreener_api).rstrip("/")
        self.user_agent = user_agent or config.monitor_user_agent
        self.token_map = AGENT_TOKEN_MAP if token_map is None else token_map
        self.client = client or httpx.AsyncClient(timeout=config.monitor_timeout)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def fetch_token_data(self, mint_address: str) -> Optional[DexTokenData]:
        """
        Market data for a token mint.

        Args:
            mint_address: Token mint

        Returns:
            Data of the Solana pair with the highest USD liquidity, or None
            when the token has no Solana pairs

        Raises:
            ExternalFetchError: On transport, HTTP or parse errors
        """
        try:
            response = await self.client.get(
                f"{self.base_url}/latest/dex/tokens/{mint_address}",
                headers={"User-Agent": self.user_agent}
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise ExternalFetchError(SOURCE_NAME, f"{mint_address}: {e}")
        except ValueError as e:
            raise ExternalFetchError(SOURCE_NAME, f"{mint_address}: invalid response: {e}")

        if not isinstance(data, dict):
            raise ExternalFetchError(SOURCE_NAME, f"{mint_address}: unexpected payload")

        pairs = [
            p for p in (data.get("pairs") or [])
            if isinstance(p, dict) and p.get("chainId") == "solana"
        ]
        if not pairs:
            return None

        best = max(pairs, key=_pair_liquidity)
        return DexTokenData(
            symbol=(best.get("baseToken") or {}).get("symbol") or "UNKNOWN",
            price_usd=float(best.get("priceUsd") or 0),
            change_24h=(best.get("priceChange") or {}).get("h24") or 0,
            volume_24h=(best.get("volume") or {}).get("h24") or 0,
            liquidity=(best.get("liquidity") or {}).get("usd"),
            pair_address=best.get("pairAddress"),
            dex=best.get("dexId")
        )

    async def fetch_agent_token_data(self, agent_name: str) -> Optional[DexTokenData]:
        """Market data for an agent, None if its name has no mapped token."""
        mint = self.token_map.get(agent_name)
        if not mint:
            return None
        return await self.fetch_token_data(mint)


def _pair_liquidity(pair: Dict[str, Any]) -> float:
    return (pair.get("liquidity") or {}).get("usd") or 0
