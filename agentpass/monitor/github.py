"""
GitHub API monitor for open-source Solana agents.

Unauthenticated clients get 60 requests per hour, token holders 5000.
"""

import asyncio
import httpx
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from ..config import config
from ..exceptions import ExternalFetchError


SOURCE_NAME = "source-control"
COMMITS_PAGE_SIZE = 100


class GitHubStats(BaseModel):
    """
    Normalized statistics of one repository.
    """

    repo: str = Field(..., description="owner/name")
    stars: int = 0
    forks: int = 0
    open_issues: int = 0
    last_push: str = Field(..., description="ISO-8601 timestamp of the last push")
    latest_release: Optional[str] = None
    commits_30d: int = Field(
        0,
        description="Commits in the trailing 30 days, capped at one page"
    )


def parse_github_repo(github_url: str) -> Optional[str]:
    """
    Extract owner/name from a GitHub URL or an owner/name shorthand.

    Args:
        github_url: e.g. "https://github.com/sendaifun/solana-agent-kit"

    Returns:
        "owner/name", or None if the reference has fewer than two parts
    """
    cleaned = github_url.strip()
    for prefix in ("https://github.com/", "http://github.com/", "github.com/"):
        if cleaned.startswith(prefix):
            cleaned = cleaned[len(prefix):]
            break
    cleaned = cleaned.rstrip("/")

    parts = [p for p in cleaned.split("/") if p]
    if len(parts) < 2:
        return None
    return f"{parts[0]}/{parts[1]}"


def _parse_timestamp(value: str) -> Optional[datetime]:
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def compute_github_score(stats: GitHubStats, now: Optional[datetime] = None) -> int:
    """
    Reputation bonus from repository activity, 0 to +8.

    Args:
        stats: Repository statistics
        now: Reference time for push recency (defaults to the current time)

    Returns:
        Score from stars, recent commits and push recency
    """
    score = 0

    # Stars
    if stats.stars >= 10000:
        score += 6
    elif stats.stars >= 5000:
        score += 5
    elif stats.stars >= 2000:
        score += 4
    elif stats.stars >= 500:
        score += 2
    elif stats.stars >= 100:
        score += 1

    # Commits in the last 30 days
    if stats.commits_30d >= 20:
        score += 2
    elif stats.commits_30d >= 5:
        score += 1

    # Push recency
    pushed = _parse_timestamp(stats.last_push)
    if pushed:
        days_since_push = ((now or datetime.now(timezone.utc)) - pushed).total_seconds() / 86400
        if days_since_push <= 7:
            score += 2
        elif days_since_push <= 30:
            score += 1

    return min(score, 8)


class GitHubMonitor:
    """
    Fetches repository statistics from the GitHub REST API.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, base_url: Optional[str] = None,
                 token: Optional[str] = None, user_agent: Optional[str] = None):
        """
        Initialize the monitor.

        Args:
            client: Optional shared httpx client
            base_url: API base URL (defaults to config value)
            token: API token (defaults to GITHUB_TOKEN)
            user_agent: User-Agent header (defaults to config value)
        """
        self.base_url = (base_url or config.github_api).rstrip("/")
        self.token = token if token is not None else config.github_token
        self.user_agent = user_agent or config.monitor_user_agent
        self.client = client or httpx.AsyncClient(timeout=config.monitor_timeout)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": self.user_agent,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        response = await self.client.get(f"{self.base_url}{path}", headers=self._headers(), params=params)
        response.raise_for_status()
        return response.json()

    async def fetch_repo_info(self, repo: str) -> Dict[str, Any]:
        """Stars, forks, open issues and last push of a repository."""
        data = await self._get_json(f"/repos/{repo}")
        if not isinstance(data, dict):
            raise ExternalFetchError(SOURCE_NAME, f"{repo}: unexpected repository payload")
        return {
            "stars": data.get("stargazers_count") or 0,
            "forks": data.get("forks_count") or 0,
            "open_issues": data.get("open_issues_count") or 0,
            "last_push": data.get("pushed_at") or datetime.now(timezone.utc).isoformat(),
        }

    async def fetch_latest_release(self, repo: str) -> Optional[str]:
        """Latest release tag, or None when there is none."""
        try:
            data = await self._get_json(f"/repos/{repo}/releases/latest")
            return data.get("tag_name") if isinstance(data, dict) else None
        except (httpx.HTTPError, ValueError):
            return None

    async def fetch_commits_30d(self, repo: str) -> int:
        """Number of commits in the last 30 days, up to one page."""
        since = (datetime.now(timezone.utc) - timedelta(days=30)).isoformat()
        try:
            data = await self._get_json(
                f"/repos/{repo}/commits",
                params={"since": since, "per_page": COMMITS_PAGE_SIZE}
            )
        except (httpx.HTTPError, ValueError):
            return 0
        return len(data) if isinstance(data, list) else 0

    async def fetch_stats(self, github_url: str) -> Optional[GitHubStats]:
        """
        Full statistics for one repository.

        Args:
            github_url: Repository URL or owner/name shorthand

        Returns:
            GitHubStats, or None if the reference cannot be parsed

        Raises:
            ExternalFetchError: If the repository itself cannot be fetched
        """
        repo = parse_github_repo(github_url)
        if not repo:
            return None

        try:
            info, release, commits_30d = await asyncio.gather(
                self.fetch_repo_info(repo),
                self.fetch_latest_release(repo),
                self.fetch_commits_30d(repo),
            )
        except httpx.HTTPError as e:
            raise ExternalFetchError(SOURCE_NAME, f"{repo}: {e}")
        except ValueError as e:
            raise ExternalFetchError(SOURCE_NAME, f"{repo}: invalid response: {e}")

        return GitHubStats(
            repo=repo,
            latest_release=release,
            commits_30d=commits_30d,
            **info
        )
