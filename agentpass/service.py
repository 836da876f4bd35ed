"""
Registry service for AgentPass.

This module exposes the read and write paths consumed by a transport layer
(web routes, bots). Results are plain JSON-ready dictionaries with the field
names external clients rely on.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from .config import config
from .exceptions import InvalidRequestError, NotFoundError, UnavailableError
from .models import AgentProfile
from .models.agents import AgentCategory
from .models.skills import Parameters
from .monitor import AgentCrawler
from .registry import AgentProtocol


class RegisterAgentRequest(BaseModel):
    """
    Payload of an external agent registration.
    """

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    version: Optional[str] = None
    category: Optional[AgentCategory] = None
    website: Optional[str] = None
    github: Optional[str] = None
    twitter: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    capabilities: List[str] = Field(default_factory=list)


def agent_listing(agent: AgentProfile) -> Dict[str, Any]:
    """Listing view of an agent, capabilities flattened to names."""
    return {
        "id": agent.id,
        "name": agent.name,
        "description": agent.description,
        "version": agent.version,
        "category": agent.category,
        "website": agent.website,
        "github": agent.github,
        "twitter": agent.twitter,
        "tags": list(agent.tags),
        "capabilities": [c.name for c in agent.capabilities],
        "reputation": agent.reputation,
        "tasksCompleted": agent.tasks_completed,
        "successRate": agent.success_rate,
        "isExternal": agent.is_external,
        "lastActive": agent.last_active.isoformat(),
        "liveData": agent.live_data.model_dump(mode="json", by_alias=True) if agent.live_data else None,
    }


class RegistryService:
    """
    Read and write operations over the protocol and its crawler.
    """

    def __init__(self, protocol: AgentProtocol, crawler: Optional[AgentCrawler] = None):
        self.protocol = protocol
        self.crawler = crawler

    @property
    def store(self):
        return self.protocol.registry

    # Read path

    def list_agents(self, category: Optional[str] = None, search: Optional[str] = None,
                    limit: Optional[int] = None) -> Dict[str, Any]:
        """
        List agents by reputation, optionally filtered and truncated.

        Args:
            category: Exact category to keep
            search: Case-insensitive substring of name, description or a tag
            limit: Maximum number of agents returned

        Returns:
            {"agents": [...], "total": n}
        """
        agents = self.store.list_agents()

        if category:
            agents = [a for a in agents if a.category == category]

        if search:
            q = search.lower()
            agents = [
                a for a in agents
                if q in a.name.lower()
                or q in a.description.lower()
                or any(q in tag.lower() for tag in a.tags)
            ]

        agents.sort(key=lambda a: a.reputation, reverse=True)
        if limit is not None:
            agents = agents[:max(limit, 0)]

        result = [agent_listing(a) for a in agents]
        return {"agents": result, "total": len(result)}

    def get_agent(self, agent_id: str) -> Dict[str, Any]:
        """
        Full detail of one agent.

        Raises:
            NotFoundError: If the id is unknown
        """
        agent = self.store.get_agent(agent_id)
        if not agent:
            raise NotFoundError("Agent", agent_id)

        detail = agent.model_dump(mode="json", by_alias=True)
        detail["capabilities"] = [c.name for c in agent.capabilities]
        return detail

    def registry_stats(self) -> Dict[str, Any]:
        """Totals, agents per category, average reputation and the top agent."""
        agents = self.store.list_agents()

        by_category: Dict[str, int] = {}
        for agent in agents:
            by_category[agent.category] = by_category.get(agent.category, 0) + 1

        average = sum(a.reputation for a in agents) / len(agents) if agents else 0.0
        top = max(agents, key=lambda a: a.reputation) if agents else None

        return {
            "totalAgents": len(agents),
            "byCategory": by_category,
            "averageReputation": round(average, 1),
            "topAgent": top.name if top else None,
        }

    def list_skills(self) -> List[Dict[str, Any]]:
        """Skill listing without handler references."""
        return [
            {
                "id": s.id,
                "name": s.name,
                "description": s.description,
                "category": s.category,
                "usageCount": s.usage_count,
                "rating": s.rating,
            }
            for s in self.protocol.skill_manager.list_skills()
        ]

    def agent_overview(self) -> Dict[str, Any]:
        """Local profile, registry stats and skills."""
        profile = self.protocol.profile_manager.get_profile()
        return {
            "profile": profile.model_dump(mode="json", by_alias=True) if profile else None,
            "stats": self.protocol.get_stats().model_dump(mode="json", by_alias=True),
            "skills": self.list_skills(),
        }

    def task_history(self, limit: Optional[int] = None) -> Dict[str, Any]:
        """
        Most recent tasks of the local agent.

        Args:
            limit: Maximum number of tasks (defaults to config value)

        Returns:
            {"tasks": [...]}, newest first
        """
        profile = self.protocol.profile_manager.get_profile()
        if not profile:
            return {"tasks": []}

        limit = config.task_history_limit if limit is None else limit
        tasks = sorted(
            self.store.list_tasks_by_agent(profile.id),
            key=lambda t: t.created_at,
            reverse=True
        )[:limit]
        return {"tasks": [t.model_dump(mode="json", by_alias=True) for t in tasks]}

    def crawler_status(self) -> Dict[str, Any]:
        """Crawler status, or a stub when no crawler is attached."""
        if not self.crawler:
            return {"running": False, "message": "Crawler not started"}
        return self.crawler.get_status().model_dump(mode="json", by_alias=True)

    def manifest(self) -> Dict[str, Any]:
        """OpenClaw manifest export."""
        return self.protocol.export_for_openclaw()

    # Write path

    def register_agent(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Register an external agent.

        Raises:
            InvalidRequestError: If name or description is missing or a field is invalid
        """
        if not payload.get("name") or not payload.get("description"):
            raise InvalidRequestError("name and description are required")

        try:
            request = RegisterAgentRequest.model_validate(payload)
        except ValidationError as e:
            raise InvalidRequestError(str(e))

        agent_id = self.protocol.register_external_agent(**request.model_dump())
        return {"id": agent_id, "message": "Agent registered successfully"}

    def trigger_crawl(self) -> Dict[str, Any]:
        """
        Start one crawl cycle in the background.

        Raises:
            UnavailableError: If no crawler is attached
        """
        if not self.crawler:
            raise UnavailableError("Crawler")

        if self.crawler.trigger():
            return {"message": "Crawl cycle triggered"}
        return {"message": "Crawl cycle already in progress"}

    def record_command(self, description: str, skill_name: str, success: bool) -> Optional[str]:
        """Record a finished command as a task of the local agent."""
        task_id = self.protocol.record_task(description, skill_name, success)
        if not task_id:
            logging.debug(f"Command not recorded as task: {skill_name}")
        return task_id

    async def execute_skill(self, skill_id: str, parameters: Parameters) -> Any:
        """Execute a skill by id."""
        return await self.protocol.skill_manager.execute_skill(skill_id, parameters)
