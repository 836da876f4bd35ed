"""
Entity store for the AgentPass registry.

This module holds the authoritative in-memory maps of agent profiles, skills
and tasks. Lookups on unknown ids return None or do nothing; they never raise,
because bookkeeping must not abort the user-facing request that triggered it.
"""

import json
import logging
import uuid
from typing import Any, Dict, List, Optional

from ..models import (
    AgentLiveData,
    AgentProfile,
    AgentSkill,
    AgentSummary,
    AgentTask,
    RegistryStats,
)
from ..models.agents import utc_now
from ..models.skills import Parameters, TASK_STATUSES, TERMINAL_STATUSES
from .reputation import apply_task_outcome, compute_success_rate


def generate_id() -> str:
    """Generate a unique registry identifier."""
    return uuid.uuid4().hex


class EntityStore:
    """
    Process-lifetime registry of agents, skills and tasks.

    Every mutator completes without suspending, so callers on a single event
    loop always observe whole updates.
    """

    def __init__(self):
        """Initialize empty entity maps."""
        self._agents: Dict[str, AgentProfile] = {}
        self._skills: Dict[str, AgentSkill] = {}
        self._tasks: Dict[str, AgentTask] = {}

    # Agents

    def register_agent(self, name: str, description: str, version: str = "1.0.0",
                       **attributes: Any) -> str:
        """
        Register a new agent profile.

        Reputation, tasks_completed and success_rate default to 0, 0 and 100
        unless supplied, so seeded agents keep their stats.

        Args:
            name: Agent name
            description: Agent description
            version: Semantic version string
            **attributes: Any other AgentProfile field

        Returns:
            The new agent id
        """
        attributes.pop("id", None)
        now = utc_now()
        attributes.setdefault("created_at", now)
        attributes.setdefault("last_active", now)

        agent_id = generate_id()
        profile = AgentProfile(
            id=agent_id,
            name=name,
            description=description,
            version=version,
            **attributes
        )
        self._agents[agent_id] = profile

        capability_names = ", ".join(c.name for c in profile.capabilities)
        logging.info(f"Agent registered: {profile.name} ({agent_id}) capabilities: {capability_names}")
        return agent_id

    def get_agent(self, agent_id: str) -> Optional[AgentProfile]:
        """Get an agent profile by id, or None if unknown."""
        return self._agents.get(agent_id)

    def list_agents(self) -> List[AgentProfile]:
        """Snapshot of all registered agents."""
        return list(self._agents.values())

    def find_agents_by_capability(self, capability_name: str) -> List[AgentProfile]:
        """
        Find agents with an enabled capability whose name contains the query.

        Args:
            capability_name: Case-insensitive substring to look for

        Returns:
            Matching agent profiles
        """
        query = capability_name.lower()
        return [
            agent for agent in self._agents.values()
            if any(cap.enabled and query in cap.name.lower() for cap in agent.capabilities)
        ]

    def update_reputation(self, agent_id: str, success: bool) -> None:
        """
        Apply one task outcome to an agent's reputation.

        Args:
            agent_id: Agent to update; unknown ids are ignored
            success: Whether the task succeeded
        """
        agent = self._agents.get(agent_id)
        if not agent:
            return

        agent.tasks_completed += 1
        agent.reputation = apply_task_outcome(agent.reputation, success)
        agent.success_rate = compute_success_rate(agent.reputation, agent.tasks_completed)
        agent.last_active = utc_now()

    def set_live_data(self, agent_id: str, live_data: AgentLiveData) -> bool:
        """Replace an agent's live-data snapshot. Returns False for unknown ids."""
        agent = self._agents.get(agent_id)
        if not agent:
            return False
        agent.live_data = live_data
        return True

    # Skills

    def register_skill(self, name: str, description: str, category: str, handler: str,
                       **attributes: Any) -> str:
        """
        Register skill metadata.

        Args:
            name: Skill name
            description: Skill description
            category: One of defi, nft, analytics, trading, utility
            handler: Name of the handler bound to the skill
            **attributes: Other AgentSkill fields (parameters, price, royalty...)

        Returns:
            The new skill id
        """
        for key in ("id", "usage_count", "rating"):
            attributes.pop(key, None)

        skill_id = generate_id()
        skill = AgentSkill(
            id=skill_id,
            name=name,
            description=description,
            category=category,
            handler=handler,
            **attributes
        )
        self._skills[skill_id] = skill

        logging.info(f"Skill registered: {skill.name} ({skill_id}) category: {skill.category}")
        return skill_id

    def get_skill(self, skill_id: str) -> Optional[AgentSkill]:
        """Get a skill by id, or None if unknown."""
        return self._skills.get(skill_id)

    def list_skills(self) -> List[AgentSkill]:
        """Snapshot of all registered skills."""
        return list(self._skills.values())

    def find_skills_by_category(self, category: str) -> List[AgentSkill]:
        """Skills whose category equals the given one."""
        return [skill for skill in self._skills.values() if skill.category == category]

    def increment_skill_usage(self, skill_id: str) -> None:
        """Count one use of a skill; unknown ids are ignored."""
        skill = self._skills.get(skill_id)
        if skill:
            skill.usage_count += 1

    # Tasks

    def create_task(self, agent_id: str, skill_id: str, description: str,
                    parameters: Optional[Parameters] = None) -> str:
        """
        Create a pending task.

        Args:
            agent_id: Owning agent
            skill_id: Skill the task exercises
            description: Free-text description
            parameters: Parameter bag

        Returns:
            The new task id
        """
        task_id = generate_id()
        self._tasks[task_id] = AgentTask(
            id=task_id,
            agent_id=agent_id,
            skill_id=skill_id,
            description=description,
            parameters=parameters or {},
            status='pending',
            created_at=utc_now()
        )

        logging.info(f"Task created: {task_id} agent: {agent_id} skill: {skill_id}")
        return task_id

    def update_task_status(self, task_id: str, status: str, result: Any = None,
                           error: Optional[str] = None) -> bool:
        """
        Move a task to a new status.

        Entering completed or failed records the outcome, updates the owning
        agent's reputation and counts one use of the skill. Terminal tasks are
        never changed again, so those side effects happen once per task.

        Args:
            task_id: Task to update; unknown ids are ignored
            status: pending, running, completed or failed
            result: Result payload stored on terminal transitions
            error: Error message stored on terminal transitions

        Returns:
            True if the transition was applied
        """
        task = self._tasks.get(task_id)
        if not task:
            return False

        if status not in TASK_STATUSES:
            logging.warning(f"Task {task_id}: unknown status '{status}' ignored")
            return False

        if task.is_terminal:
            logging.warning(f"Task {task_id} is already {task.status}, ignoring transition to {status}")
            return False

        if status == 'pending' and task.status == 'running':
            logging.warning(f"Task {task_id} cannot move from running back to pending")
            return False

        task.status = status

        if status == 'running' and not task.started_at:
            task.started_at = utc_now()

        if status in TERMINAL_STATUSES:
            task.completed_at = utc_now()
            task.result = result
            task.error = error

            self.update_reputation(task.agent_id, status == 'completed')
            self.increment_skill_usage(task.skill_id)

        return True

    def get_task(self, task_id: str) -> Optional[AgentTask]:
        """Get a task by id, or None if unknown."""
        return self._tasks.get(task_id)

    def list_tasks_by_agent(self, agent_id: str) -> List[AgentTask]:
        """All tasks owned by an agent, in any status."""
        return [task for task in self._tasks.values() if task.agent_id == agent_id]

    # Aggregates

    def get_stats(self) -> RegistryStats:
        """
        Compute registry-wide statistics.

        Returns:
            RegistryStats with totals, average reputation and the top five agents
        """
        agents = self.list_agents()
        tasks = list(self._tasks.values())

        average = sum(a.reputation for a in agents) / len(agents) if agents else 0.0
        ranked = sorted(agents, key=lambda a: a.reputation, reverse=True)

        return RegistryStats(
            total_agents=len(agents),
            total_skills=len(self._skills),
            total_tasks=len(tasks),
            active_tasks=sum(1 for t in tasks if t.status == 'running'),
            completed_tasks=sum(1 for t in tasks if t.status == 'completed'),
            average_reputation=average,
            top_agents=[
                AgentSummary(id=a.id, name=a.name, reputation=a.reputation)
                for a in ranked[:5]
            ]
        )

    # Snapshots

    def export_data(self) -> str:
        """
        Serialize all three maps to a JSON snapshot keyed by id.

        Returns:
            JSON string
        """
        return json.dumps({
            "agents": {k: v.model_dump(mode="json") for k, v in self._agents.items()},
            "skills": {k: v.model_dump(mode="json") for k, v in self._skills.items()},
            "tasks": {k: v.model_dump(mode="json") for k, v in self._tasks.items()},
        })

    def import_data(self, data: str) -> bool:
        """
        Replace the registry contents with a snapshot from export_data().

        A malformed snapshot is logged and the current contents are kept.

        Args:
            data: JSON snapshot

        Returns:
            True if the snapshot was imported
        """
        try:
            parsed = json.loads(data)
            agents = {k: AgentProfile.model_validate(v) for k, v in parsed["agents"].items()}
            skills = {k: AgentSkill.model_validate(v) for k, v in parsed["skills"].items()}
            tasks = {k: AgentTask.model_validate(v) for k, v in parsed["tasks"].items()}
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            logging.error(f"Failed to import registry data: {e}")
            return False

        self._agents = agents
        self._skills = skills
        self._tasks = tasks

        logging.info(f"Registry data imported: {len(agents)} agents, {len(skills)} skills, {len(tasks)} tasks")
        return True
