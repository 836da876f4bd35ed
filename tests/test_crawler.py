"""
Tests for the registry crawler and its scheduler.
"""

import asyncio
import unittest
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock, patch

import httpx

from agentpass.exceptions import ExternalFetchError
from agentpass.models import AgentLiveData
from agentpass.monitor.crawler import AgentCrawler
from agentpass.monitor.dexscreener import DexScreenerMonitor, DexTokenData
from agentpass.monitor.github import GitHubMonitor, GitHubStats
from agentpass.monitor.scheduler import RepeatingTask
from agentpass.registry.store import EntityStore


def old_repo(repo, stars=150):
    # 150 stars and an old push score 1
    return GitHubStats(repo=repo, stars=stars, commits_30d=0, last_push="2020-01-01T00:00:00Z")


def busy_token(symbol):
    # 2M volume and a flat price score 1
    return DexTokenData(symbol=symbol, price_usd=0.5, change_24h=0.0, volume_24h=2_000_000)


class TestAgentCrawler(unittest.IsolatedAsyncioTestCase):
    """Test one crawl cycle over a small registry."""

    def setUp(self):
        self.store = EntityStore()
        self.alpha = self.store.register_agent("Alpha", "First agent", github="https://github.com/example/alpha")
        self.beta = self.store.register_agent("Beta", "Second agent", github="https://github.com/example/beta")
        self.gamma = self.store.register_agent("Gamma", "No signals at all")

        self.github = MagicMock()
        self.github.fetch_stats = AsyncMock(side_effect=lambda ref: old_repo(ref.split("github.com/")[1]))
        self.github.close = AsyncMock()

        self.dex = MagicMock()
        self.tokens = {"Alpha": busy_token("ALP"), "Beta": busy_token("BET")}
        self.dex.fetch_agent_token_data = AsyncMock(side_effect=lambda name: self.tokens.get(name))
        self.dex.close = AsyncMock()

        self.crawler = AgentCrawler(self.store, github_monitor=self.github, dex_monitor=self.dex,
                                    interval=60, github_delay=0)

    def result_for(self, results, agent_id):
        return next(r for r in results if r.agent_id == agent_id)

    async def test_cycle_updates_agents_with_signals(self):
        results = await self.crawler.run_cycle()

        self.assertEqual(len(results), 3)

        alpha = self.result_for(results, self.alpha)
        self.assertEqual(alpha.sources, ["source-control", "market-data"])
        self.assertEqual(alpha.live_score, 2)
        self.assertIsNone(alpha.error)

        live = self.store.get_agent(self.alpha).live_data
        self.assertEqual(live.github_stars, 150)
        self.assertEqual(live.token_symbol, "ALP")
        self.assertEqual(live.token_volume_24h, 2_000_000)
        self.assertEqual(live.crawl_source, ["source-control", "market-data"])
        self.assertEqual(live.live_score, 2)
        self.assertEqual(live.last_crawled_at, alpha.updated_at)

    async def test_source_failure_is_isolated(self):
        """Test that one failing fetch does not block the others."""
        async def fetch_stats(ref):
            if "alpha" in ref:
                raise ExternalFetchError("source-control", "example/alpha: 500")
            return old_repo("example/beta")

        self.github.fetch_stats = AsyncMock(side_effect=fetch_stats)

        results = await self.crawler.run_cycle()

        alpha = self.result_for(results, self.alpha)
        self.assertEqual(alpha.sources, ["market-data"])
        self.assertIn("example/alpha", alpha.error)
        self.assertEqual(alpha.live_score, 1)
        self.assertEqual(self.store.get_agent(self.alpha).live_data.token_symbol, "ALP")
        self.assertIsNone(self.store.get_agent(self.alpha).live_data.github_stars)

        beta = self.result_for(results, self.beta)
        self.assertEqual(beta.sources, ["source-control", "market-data"])
        self.assertIsNone(beta.error)

    async def test_transport_errors_are_isolated(self):
        self.dex.fetch_agent_token_data = AsyncMock(side_effect=httpx.ConnectError("connection refused"))

        results = await self.crawler.run_cycle()

        alpha = self.result_for(results, self.alpha)
        self.assertEqual(alpha.sources, ["source-control"])
        self.assertIn("connection refused", alpha.error)

    async def test_agent_without_sources_keeps_live_data(self):
        previous = AgentLiveData(last_crawled_at="2026-01-01T00:00:00+00:00", crawl_source=["market-data"], live_score=1)
        self.store.set_live_data(self.gamma, previous)

        results = await self.crawler.run_cycle()

        gamma = self.result_for(results, self.gamma)
        self.assertEqual(gamma.sources, [])
        self.assertEqual(gamma.live_score, 0)
        self.assertIs(self.store.get_agent(self.gamma).live_data, previous)
        self.assertEqual(self.github.fetch_stats.await_count, 2)
        self.assertEqual(self.crawler.get_status().total_crawled, 2)

    async def test_live_score_is_clamped(self):
        self.tokens["Alpha"] = DexTokenData(symbol="ALP", price_usd=1.0, change_24h=30.0, volume_24h=50_000_000)

        with patch("agentpass.monitor.crawler.compute_github_score", return_value=9):
            results = await self.crawler.run_cycle()

        self.assertEqual(self.result_for(results, self.alpha).live_score, 10)
        self.assertEqual(self.store.get_agent(self.alpha).live_data.live_score, 10)

    async def test_status(self):
        status = self.crawler.get_status()
        self.assertFalse(status.running)
        self.assertIsNone(status.last_run)
        self.assertIsNone(status.next_run)

        await self.crawler.run_cycle()
        await self.crawler.run_cycle()
        status = self.crawler.get_status()

        self.assertEqual(status.total_crawled, 4)
        self.assertEqual(len(status.last_results), 3)
        last_run = datetime.fromisoformat(status.last_run)
        self.assertEqual(datetime.fromisoformat(status.next_run) - last_run, timedelta(seconds=60))

    async def test_start_runs_immediately_and_once(self):
        self.crawler.start()
        self.crawler.start()
        self.assertTrue(self.crawler.running)

        await asyncio.sleep(0)
        await self.crawler.wait()
        self.crawler.stop()

        self.assertFalse(self.crawler.running)
        self.assertEqual(self.crawler._task.runs, 1)
        self.assertIsNotNone(self.crawler.get_status().last_run)

    async def test_trigger_skips_when_in_flight(self):
        self.assertTrue(self.crawler.trigger())
        self.assertFalse(self.crawler.trigger())

        await self.crawler.wait()
        self.assertEqual(self.crawler.get_status().total_crawled, 2)

    async def test_close(self):
        await self.crawler.close()

        self.github.close.assert_awaited_once()
        self.dex.close.assert_awaited_once()


class TestCrawlerOverHttp(unittest.IsolatedAsyncioTestCase):
    """Test a cycle against real monitors on a mock transport."""

    def github_handler(self, request):
        path = request.url.path
        if path == "/repos/example/other":
            return httpx.Response(200, json={"stargazers_count": 150, "pushed_at": "2020-01-01T00:00:00Z"})
        if path == "/repos/example/other/commits":
            return httpx.Response(200, json=[])
        return httpx.Response(404)

    async def test_non_object_market_body_does_not_abort_cycle(self):
        store = EntityStore()
        bonk = store.register_agent("BonkBot", "Trading bot with a mapped token")
        other = store.register_agent("Other", "Open-source agent", github="https://github.com/example/other")

        github = GitHubMonitor(
            client=httpx.AsyncClient(transport=httpx.MockTransport(self.github_handler)),
            base_url="https://api.github.test",
            token=""
        )
        dex = DexScreenerMonitor(
            client=httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200, content=b"[]"))),
            base_url="https://dex.test"
        )
        crawler = AgentCrawler(store, github_monitor=github, dex_monitor=dex, interval=60, github_delay=0)

        results = await crawler.run_cycle()
        await crawler.close()

        bonk_result = next(r for r in results if r.agent_id == bonk)
        self.assertEqual(bonk_result.sources, [])
        self.assertIn("market-data", bonk_result.error)
        self.assertIsNone(store.get_agent(bonk).live_data)

        live = store.get_agent(other).live_data
        self.assertEqual(live.github_stars, 150)
        self.assertEqual(live.crawl_source, ["source-control"])

        status = crawler.get_status()
        self.assertIsNotNone(status.last_run)
        self.assertEqual(status.total_crawled, 1)

    async def test_unexpected_fetch_errors_are_isolated(self):
        store = EntityStore()
        first = store.register_agent("First", "First agent", github="https://github.com/example/first")
        second = store.register_agent("Second", "Second agent", github="https://github.com/example/second")

        github = MagicMock()
        github.fetch_stats = AsyncMock(side_effect=[TypeError("bad payload"), old_repo("example/second")])
        dex = MagicMock()
        dex.fetch_agent_token_data = AsyncMock(return_value=None)
        crawler = AgentCrawler(store, github_monitor=github, dex_monitor=dex, interval=60, github_delay=0)

        results = await crawler.run_cycle()

        self.assertIn("bad payload", results[0].error)
        self.assertIsNone(store.get_agent(first).live_data)
        self.assertEqual(store.get_agent(second).live_data.crawl_source, ["source-control"])


class TestRepeatingTask(unittest.IsolatedAsyncioTestCase):
    """Test the fixed-cadence scheduler."""

    def test_interval_must_be_positive(self):
        with self.assertRaises(ValueError):
            RepeatingTask(AsyncMock(), 0)

    async def test_fire_skips_while_in_flight(self):
        release = asyncio.Event()

        async def slow():
            await release.wait()

        task = RepeatingTask(slow, 60, name="slow")

        self.assertTrue(task.fire())
        with self.assertLogs(level="WARNING"):
            self.assertFalse(task.fire())
        self.assertEqual(task.skipped, 1)

        release.set()
        await task.wait()
        self.assertFalse(task.in_flight)
        self.assertEqual(task.runs, 1)
        self.assertTrue(task.fire())
        await task.wait()

    async def test_errors_are_logged(self):
        async def broken():
            raise RuntimeError("boom")

        task = RepeatingTask(broken, 60, name="broken")

        with self.assertLogs(level="ERROR") as logs:
            task.fire()
            await task.wait()
        self.assertIn("boom", logs.output[0])

    async def test_ticks_repeat(self):
        calls = []

        async def record():
            calls.append(1)

        task = RepeatingTask(record, 0.01)
        self.assertTrue(task.start())
        self.assertFalse(task.start())

        await asyncio.sleep(0.055)
        task.stop()

        self.assertGreaterEqual(len(calls), 3)
        self.assertFalse(task.is_running)

    async def test_stop_leaves_in_flight_run(self):
        release = asyncio.Event()
        finished = []

        async def slow():
            await release.wait()
            finished.append(True)

        task = RepeatingTask(slow, 60)
        task.start()
        await asyncio.sleep(0)

        task.stop()
        self.assertTrue(task.in_flight)

        release.set()
        await task.wait()
        self.assertEqual(finished, [True])


if __name__ == "__main__":
    unittest.main()
