"""
Unit tests for the registry entity store and reputation arithmetic.
"""

import json
import unittest

from agentpass.models import AgentCapability, AgentLiveData
from agentpass.registry.reputation import (
    apply_task_outcome,
    clamp_live_score,
    compute_success_rate,
)
from agentpass.registry.store import EntityStore


class TestReputation(unittest.TestCase):
    """Test reputation arithmetic."""

    def test_task_outcome_deltas(self):
        self.assertEqual(apply_task_outcome(50, True), 51)
        self.assertEqual(apply_task_outcome(50, False), 48)

    def test_task_outcome_is_clamped(self):
        self.assertEqual(apply_task_outcome(100, True), 100)
        self.assertEqual(apply_task_outcome(1, False), 0)
        self.assertEqual(apply_task_outcome(0, False), 0)

    def test_success_rate(self):
        self.assertEqual(compute_success_rate(0, 0), 100.0)
        self.assertEqual(compute_success_rate(5, 10), 50.0)
        self.assertEqual(compute_success_rate(0, 3), 0.0)

        # reputation above the task count would exceed 100%
        self.assertEqual(compute_success_rate(90, 10), 100.0)

    def test_live_score_clamp(self):
        self.assertEqual(clamp_live_score(4), 4)
        self.assertEqual(clamp_live_score(15), 10)
        self.assertEqual(clamp_live_score(-12), -10)


class TestEntityStore(unittest.TestCase):
    """Test agent, skill and task bookkeeping."""

    def setUp(self):
        """Set up a store with one agent and one skill."""
        self.store = EntityStore()
        self.agent_id = self.store.register_agent(
            "Test Agent",
            "Agent used in tests",
            capabilities=[
                AgentCapability(name="Token Swaps", description="Swaps", version="1.0.0"),
                AgentCapability(name="Staking", description="Stakes", version="1.0.0", enabled=False),
            ]
        )
        self.skill_id = self.store.register_skill("Echo", "Echoes its input", "utility", "echo")

    def test_register_agent_defaults(self):
        """Test that a new agent starts with neutral stats."""
        agent = self.store.get_agent(self.agent_id)

        self.assertEqual(agent.name, "Test Agent")
        self.assertEqual(agent.version, "1.0.0")
        self.assertEqual(agent.reputation, 0)
        self.assertEqual(agent.tasks_completed, 0)
        self.assertEqual(agent.success_rate, 100.0)
        self.assertIsNone(agent.live_data)
        self.assertFalse(agent.is_external)

    def test_register_agent_generates_id(self):
        """Test that a caller-supplied id is ignored."""
        agent_id = self.store.register_agent("Other", "Other agent", id="chosen")

        self.assertNotEqual(agent_id, "chosen")
        self.assertNotEqual(agent_id, self.agent_id)
        self.assertIsNone(self.store.get_agent("chosen"))

    def test_register_skill_resets_counters(self):
        """Test that usage and rating always start at zero."""
        skill_id = self.store.register_skill("Other", "Other skill", "defi", "other",
                                             usage_count=40, rating=4.5)
        skill = self.store.get_skill(skill_id)

        self.assertEqual(skill.usage_count, 0)
        self.assertEqual(skill.rating, 0)

    def test_unknown_ids_are_ignored(self):
        """Test that lookups and mutators tolerate unknown ids."""
        self.assertIsNone(self.store.get_agent("missing"))
        self.assertIsNone(self.store.get_skill("missing"))
        self.assertIsNone(self.store.get_task("missing"))

        self.store.update_reputation("missing", True)
        self.store.increment_skill_usage("missing")
        self.assertFalse(self.store.update_task_status("missing", "completed"))
        self.assertFalse(self.store.set_live_data("missing", AgentLiveData(last_crawled_at="now")))

    def test_completed_task_updates_agent_and_skill(self):
        """Test that completing a task counts once towards agent and skill."""
        task_id = self.store.create_task(self.agent_id, self.skill_id, "echo hello", {"text": "hello"})
        task = self.store.get_task(task_id)
        self.assertEqual(task.status, "pending")

        self.assertTrue(self.store.update_task_status(task_id, "completed", result="hello"))

        agent = self.store.get_agent(self.agent_id)
        self.assertEqual(agent.reputation, 1)
        self.assertEqual(agent.tasks_completed, 1)
        self.assertEqual(agent.success_rate, 100.0)
        self.assertEqual(self.store.get_skill(self.skill_id).usage_count, 1)

        self.assertEqual(task.result, "hello")
        self.assertIsNotNone(task.completed_at)

    def test_failed_task_updates_agent_and_skill(self):
        """Test that a failed task counts but lowers reputation."""
        task_id = self.store.create_task(self.agent_id, self.skill_id, "echo")
        self.store.update_task_status(task_id, "failed", error="boom")

        agent = self.store.get_agent(self.agent_id)
        self.assertEqual(agent.reputation, 0)
        self.assertEqual(agent.tasks_completed, 1)
        self.assertEqual(agent.success_rate, 0.0)
        self.assertEqual(self.store.get_skill(self.skill_id).usage_count, 1)
        self.assertEqual(self.store.get_task(task_id).error, "boom")

    def test_terminal_task_is_not_updated_again(self):
        """Test that side effects happen once per task."""
        task_id = self.store.create_task(self.agent_id, self.skill_id, "echo")
        self.store.update_task_status(task_id, "completed")

        self.assertFalse(self.store.update_task_status(task_id, "completed"))
        self.assertFalse(self.store.update_task_status(task_id, "failed"))
        self.assertFalse(self.store.update_task_status(task_id, "pending"))

        agent = self.store.get_agent(self.agent_id)
        self.assertEqual(self.store.get_task(task_id).status, "completed")
        self.assertEqual(agent.tasks_completed, 1)
        self.assertEqual(agent.reputation, 1)
        self.assertEqual(self.store.get_skill(self.skill_id).usage_count, 1)

    def test_running_transition(self):
        """Test that running records the start and cannot go back to pending."""
        task_id = self.store.create_task(self.agent_id, self.skill_id, "echo")

        self.assertTrue(self.store.update_task_status(task_id, "running"))
        task = self.store.get_task(task_id)
        self.assertIsNotNone(task.started_at)
        self.assertEqual(self.store.get_agent(self.agent_id).tasks_completed, 0)

        self.assertFalse(self.store.update_task_status(task_id, "pending"))
        self.assertEqual(task.status, "running")

    def test_unknown_status_is_rejected(self):
        """Test that only the four task statuses are accepted."""
        task_id = self.store.create_task(self.agent_id, self.skill_id, "echo")

        with self.assertLogs(level="WARNING"):
            self.assertFalse(self.store.update_task_status(task_id, "done"))

        self.assertEqual(self.store.get_task(task_id).status, "pending")
        self.assertEqual(self.store.get_agent(self.agent_id).tasks_completed, 0)

        restored = EntityStore()
        self.assertTrue(restored.import_data(self.store.export_data()))
        self.assertEqual(restored.get_task(task_id).status, "pending")

    def test_reputation_stays_within_bounds(self):
        """Test reputation clamping through repeated outcomes."""
        top_id = self.store.register_agent("Top", "Top agent", reputation=100, tasks_completed=10)

        self.store.update_reputation(top_id, True)
        self.assertEqual(self.store.get_agent(top_id).reputation, 100)

        for _ in range(60):
            self.store.update_reputation(top_id, False)
        agent = self.store.get_agent(top_id)
        self.assertEqual(agent.reputation, 0)
        self.assertEqual(agent.tasks_completed, 71)
        self.assertGreaterEqual(agent.success_rate, 0)
        self.assertLessEqual(agent.success_rate, 100)

    def test_find_agents_by_capability(self):
        """Test case-insensitive capability search over enabled capabilities."""
        self.assertEqual([a.id for a in self.store.find_agents_by_capability("swap")], [self.agent_id])
        self.assertEqual(self.store.find_agents_by_capability("staking"), [])

    def test_find_skills_by_category(self):
        self.store.register_skill("Swap", "Swaps tokens", "defi", "swap")

        self.assertEqual([s.name for s in self.store.find_skills_by_category("defi")], ["Swap"])
        self.assertEqual(self.store.find_skills_by_category("nft"), [])

    def test_list_tasks_by_agent(self):
        other_id = self.store.register_agent("Other", "Other agent")
        first = self.store.create_task(self.agent_id, self.skill_id, "one")
        second = self.store.create_task(self.agent_id, self.skill_id, "two")
        self.store.create_task(other_id, self.skill_id, "three")

        ids = {t.id for t in self.store.list_tasks_by_agent(self.agent_id)}
        self.assertEqual(ids, {first, second})

    def test_set_live_data(self):
        live = AgentLiveData(last_crawled_at="2026-01-01T00:00:00+00:00", crawl_source=["market-data"], live_score=2)

        self.assertTrue(self.store.set_live_data(self.agent_id, live))
        self.assertEqual(self.store.get_agent(self.agent_id).live_data.live_score, 2)

    def test_stats_on_empty_store(self):
        """Test that an empty registry reports zeros."""
        stats = EntityStore().get_stats()

        self.assertEqual(stats.total_agents, 0)
        self.assertEqual(stats.total_tasks, 0)
        self.assertEqual(stats.average_reputation, 0.0)
        self.assertEqual(stats.top_agents, [])

    def test_stats(self):
        """Test totals, task counts and top agents."""
        for i, reputation in enumerate([10, 70, 40, 90, 20, 60]):
            self.store.register_agent(f"Agent {i}", "Ranked agent", reputation=reputation)

        running = self.store.create_task(self.agent_id, self.skill_id, "running")
        self.store.update_task_status(running, "running")
        done = self.store.create_task(self.agent_id, self.skill_id, "done")
        self.store.update_task_status(done, "completed")
        self.store.create_task(self.agent_id, self.skill_id, "pending")

        stats = self.store.get_stats()
        agents = self.store.list_agents()

        self.assertEqual(stats.total_agents, len(agents))
        self.assertEqual(stats.total_skills, 1)
        self.assertEqual(stats.total_tasks, 3)
        self.assertEqual(stats.active_tasks, 1)
        self.assertEqual(stats.completed_tasks, 1)
        self.assertAlmostEqual(stats.average_reputation, sum(a.reputation for a in agents) / len(agents))

        self.assertEqual(len(stats.top_agents), 5)
        self.assertEqual([a.reputation for a in stats.top_agents], [90, 70, 60, 40, 20])

    def test_top_agents_keep_registration_order_on_ties(self):
        store = EntityStore()
        for name, reputation in [("A", 50), ("B", 50), ("C", 50), ("D", 80), ("E", 50), ("F", 50)]:
            store.register_agent(name, "Tied agent", reputation=reputation)

        top = store.get_stats().top_agents

        self.assertEqual([a.name for a in top], ["D", "A", "B", "C", "E"])

    def test_export_import_round_trip(self):
        """Test that a snapshot restores all three maps."""
        task_id = self.store.create_task(self.agent_id, self.skill_id, "echo", {"text": "hi", "count": 2})
        self.store.update_task_status(task_id, "completed", result={"echo": "hi"})

        snapshot = self.store.export_data()
        self.assertEqual(set(json.loads(snapshot)), {"agents", "skills", "tasks"})

        restored = EntityStore()
        self.assertTrue(restored.import_data(snapshot))

        agent = restored.get_agent(self.agent_id)
        self.assertEqual(agent.name, "Test Agent")
        self.assertEqual(agent.reputation, 1)
        self.assertEqual(agent.capabilities[0].name, "Token Swaps")
        self.assertEqual(restored.get_skill(self.skill_id).usage_count, 1)

        task = restored.get_task(task_id)
        self.assertEqual(task.status, "completed")
        self.assertEqual(task.parameters, {"text": "hi", "count": 2})
        self.assertEqual(task.result, {"echo": "hi"})

    def test_malformed_import_keeps_state(self):
        """Test that a bad snapshot is rejected without touching the store."""
        for bad in ("not json", "[]", '{"agents": {}}', '{"agents": {"x": {"name": 1}}, "skills": {}, "tasks": {}}'):
            with self.subTest(snapshot=bad):
                self.assertFalse(self.store.import_data(bad))
                self.assertIsNotNone(self.store.get_agent(self.agent_id))
                self.assertEqual(len(self.store.list_skills()), 1)


if __name__ == "__main__":
    unittest.main()
