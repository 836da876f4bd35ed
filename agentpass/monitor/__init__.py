"""External signal monitors and the registry crawler."""

from .github import GitHubMonitor, GitHubStats, compute_github_score, parse_github_repo
from .dexscreener import AGENT_TOKEN_MAP, DexScreenerMonitor, DexTokenData, compute_dex_score
from .scheduler import RepeatingTask
from .crawler import AgentCrawler, CrawlResult, CrawlerStatus

__all__ = [
    "GitHubMonitor",
    "GitHubStats",
    "compute_github_score",
    "parse_github_repo",
    "AGENT_TOKEN_MAP",
    "DexScreenerMonitor",
    "DexTokenData",
    "compute_dex_score",
    "RepeatingTask",
    "AgentCrawler",
    "CrawlResult",
    "CrawlerStatus"
]
