"""
Agent registry crawler.

Polls GitHub and DexScreener for every registered agent on a fixed interval
and stores the resulting live-data snapshot on the profile.
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import httpx
from pydantic import Field

from ..config import config
from ..exceptions import ExternalFetchError
from ..models import AgentLiveData, AgentProfile, RegistryModel
from ..registry.reputation import clamp_live_score
from ..registry.store import EntityStore
from . import dexscreener, github
from .dexscreener import DexScreenerMonitor, compute_dex_score
from .github import GitHubMonitor, compute_github_score
from .scheduler import RepeatingTask


# Errors a single fetch may raise without affecting the rest of the cycle
FETCH_ERRORS = (
    ExternalFetchError, httpx.HTTPError, asyncio.TimeoutError,
    ValueError, AttributeError, TypeError, KeyError
)


class CrawlResult(RegistryModel):
    """
    Outcome of one agent in one crawl cycle.
    """

    agent_id: str
    agent_name: str
    sources: List[str] = Field(default_factory=list)
    live_score: int = 0
    updated_at: str
    error: Optional[str] = None


class CrawlerStatus(RegistryModel):
    """
    Crawler state for status queries.
    """

    running: bool = False
    last_run: Optional[str] = None
    next_run: Optional[str] = None
    total_crawled: int = Field(
        0,
        description="Agent updates across all cycles"
    )
    last_results: List[CrawlResult] = Field(
        default_factory=list,
        description="Per-agent results of the most recent cycle"
    )


class AgentCrawler:
    """
    Refreshes live data of every registered agent.
    """

    def __init__(self, store: EntityStore, github_monitor: Optional[GitHubMonitor] = None,
                 dex_monitor: Optional[DexScreenerMonitor] = None,
                 interval: Optional[float] = None, github_delay: Optional[float] = None):
        """
        Initialize the crawler.

        Args:
            store: Entity store whose agents are crawled
            github_monitor: Source-control fetcher
            dex_monitor: Market-data fetcher
            interval: Seconds between cycles (defaults to config value)
            github_delay: Pause after each GitHub fetch (defaults to config value)
        """
        self.store = store
        self.github = github_monitor or GitHubMonitor()
        self.dexscreener = dex_monitor or DexScreenerMonitor()
        self.interval = interval if interval is not None else config.crawl_interval
        self.github_delay = github_delay if github_delay is not None else config.github_delay

        self._task = RepeatingTask(self.run_cycle, self.interval, name="Agent crawler")
        self._last_run: Optional[str] = None
        self._total_crawled = 0
        self._last_results: List[CrawlResult] = []

    @property
    def running(self) -> bool:
        return self._task.is_running

    def start(self) -> None:
        """Run one cycle now and then one per interval. No-op if running."""
        if self._task.start():
            logging.info(f"Agent crawler started (interval: {self.interval / 60:.0f} min)")

    def stop(self) -> None:
        """Stop scheduling cycles. An in-flight cycle runs to completion."""
        self._task.stop()
        logging.info("Agent crawler stopped")

    def trigger(self) -> bool:
        """
        Start one cycle in the background, outside the schedule.

        Returns:
            False if a cycle is already in flight
        """
        return self._task.fire()

    async def wait(self) -> None:
        """Wait for the in-flight cycle, if any."""
        await self._task.wait()

    async def close(self) -> None:
        """Close the HTTP clients of both monitors."""
        await self.github.close()
        await self.dexscreener.close()

    def get_status(self) -> CrawlerStatus:
        """Current crawler state."""
        next_run = None
        if self._last_run:
            last = datetime.fromisoformat(self._last_run)
            next_run = (last + timedelta(seconds=self.interval)).isoformat()

        return CrawlerStatus(
            running=self.running,
            last_run=self._last_run,
            next_run=next_run,
            total_crawled=self._total_crawled,
            last_results=list(self._last_results)
        )

    async def crawl_agent(self, agent: AgentProfile, now: str) -> CrawlResult:
        """
        Fetch both sources for one agent and store the snapshot.

        Live data is only replaced when at least one source contributed.

        Args:
            agent: Agent to crawl
            now: ISO timestamp of the cycle

        Returns:
            The per-agent result
        """
        result = CrawlResult(agent_id=agent.id, agent_name=agent.name, updated_at=now)
        live_data = AgentLiveData(last_crawled_at=now)
        errors = []
        score = 0

        if agent.github:
            try:
                stats = await self.github.fetch_stats(agent.github)
                if stats:
                    live_data.github_stars = stats.stars
                    live_data.github_forks = stats.forks
                    live_data.github_commits_30d = stats.commits_30d
                    live_data.github_last_push = stats.last_push
                    live_data.github_release = stats.latest_release
                    result.sources.append(github.SOURCE_NAME)
                    score += compute_github_score(stats)

                    logging.info(f"  {agent.name}: GitHub {stats.stars} stars, {stats.commits_30d} commits/30d")
            except FETCH_ERRORS as e:
                errors.append(str(e))
                logging.warning(f"  {agent.name} GitHub error: {e}")

            await asyncio.sleep(self.github_delay)

        try:
            token = await self.dexscreener.fetch_agent_token_data(agent.name)
            if token:
                live_data.token_symbol = token.symbol
                live_data.token_price = token.price_usd
                live_data.token_change_24h = token.change_24h
                live_data.token_volume_24h = token.volume_24h
                result.sources.append(dexscreener.SOURCE_NAME)
                score += compute_dex_score(token)

                logging.info(f"  {agent.name}: token ${token.price_usd:.6f}, vol ${token.volume_24h / 1e6:.2f}M")
        except FETCH_ERRORS as e:
            errors.append(str(e))
            logging.warning(f"  {agent.name} DexScreener error: {e}")

        result.live_score = clamp_live_score(score)
        if errors:
            result.error = "; ".join(errors)

        if result.sources:
            live_data.crawl_source = list(result.sources)
            live_data.live_score = result.live_score
            self.store.set_live_data(agent.id, live_data)

        return result

    async def run_cycle(self) -> List[CrawlResult]:
        """
        One full pass over all registered agents.

        Returns:
            Per-agent results of this cycle
        """
        agents = self.store.list_agents()
        now = datetime.now(timezone.utc).isoformat()

        logging.info(f"Crawler cycle started: {len(agents)} agents")

        results = []
        for agent in agents:
            results.append(await self.crawl_agent(agent, now))

        updated = sum(1 for r in results if r.sources)
        self._last_run = now
        self._total_crawled += updated
        self._last_results = results

        logging.info(f"Crawler cycle done: {updated} agents updated")
        return results
