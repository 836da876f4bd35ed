"""
Solana Agent Protocol facade.

This module is the composition root of the registry: it wires the entity
store, the skill manager and the local profile together and hosts the
cross-cutting orchestration (seeding, external registration, task recording
and exports).
"""

import json
import logging
from typing import Any, Dict, List, Optional

from ..config import config
from ..models import AgentCapability, RegistryStats
from .profile import AgentProfileManager
from .seed import REAL_SOLANA_AGENTS, SeedAgent
from .skills import SkillManager
from .store import EntityStore


PROTOCOL_NAME = "Solana Agent Protocol"
PROTOCOL_VERSION = "1.0.0"
FAILED_COMMAND_ERROR = "Command failed"

OPENCLAW_TEMPLATE = """// OpenClaw Skill: {title}
// Generated by Solana Agent Protocol (SAP)

export default {{
  name: {name},
  version: {version},
  description: {description},
  author: "Solana Agent Protocol",

  capabilities: {capabilities},

  async execute(params) {{
    // Connect to SAP endpoint
    const response = await fetch({endpoint}, {{
      method: 'POST',
      headers: {{ 'Content-Type': 'application/json' }},
      body: JSON.stringify({{ message: params.message }})
    }});

    const result = await response.json();
    return result.response;
  }},

  // Available skills
  skills: {skills},

  // Protocol stats
  stats: {stats}
}};"""


def build_capabilities(names: List[str], version: str) -> List[AgentCapability]:
    """Capability tuples from a flat list of names."""
    return [
        AgentCapability(name=name, description=name, version=version, enabled=True)
        for name in names
    ]


class AgentProtocol:
    """
    Orchestrates all agent protocol functionality.
    """

    def __init__(self, chain: Any, store: Optional[EntityStore] = None):
        """
        Initialize the protocol components.

        Args:
            chain: Chain client handed to the built-in skills
            store: Entity store to use; a fresh one is created if omitted
        """
        self.registry = store or EntityStore()
        self.skill_manager = SkillManager(self.registry, chain)
        self.profile_manager = AgentProfileManager(self.registry, self.skill_manager)
        self._initialized = False

    def initialize(self, agent_name: str, agent_description: str, agent_version: str) -> None:
        """
        Register the local agent and seed the known external agents.

        A second call only logs a warning.
        """
        if self._initialized:
            logging.warning("Agent protocol already initialized")
            return

        logging.info("Initializing Solana Agent Protocol...")

        agent_id = self.profile_manager.initialize(
            name=agent_name,
            description=agent_description,
            version=agent_version
        )
        logging.info(f"Agent ID: {agent_id}, skills: {len(self.skill_manager.list_skills())}")

        self.seed_real_agents()

        self._initialized = True

    def seed_real_agents(self, seeds: Optional[List[SeedAgent]] = None) -> List[str]:
        """
        Register the known real-world agents with their stats.

        Args:
            seeds: Agents to seed, defaults to REAL_SOLANA_AGENTS

        Returns:
            Ids of the seeded agents
        """
        seeds = REAL_SOLANA_AGENTS if seeds is None else seeds
        ids = []
        for seed in seeds:
            ids.append(self.registry.register_agent(
                name=seed.name,
                description=seed.description,
                version=seed.version,
                category=seed.category,
                website=seed.website,
                github=seed.github,
                twitter=seed.twitter,
                tags=list(seed.tags),
                is_external=True,
                capabilities=build_capabilities(seed.capabilities, seed.version),
                reputation=seed.reputation,
                tasks_completed=seed.tasks_completed,
                success_rate=seed.success_rate
            ))
        logging.info(f"Seeded {len(ids)} real Solana agents")
        return ids

    def register_external_agent(self, name: str, description: str, version: Optional[str] = None,
                                category: Optional[str] = None, website: Optional[str] = None,
                                github: Optional[str] = None, twitter: Optional[str] = None,
                                tags: Optional[List[str]] = None,
                                capabilities: Optional[List[str]] = None) -> str:
        """
        Register an agent through the open API.

        New external agents start at reputation 0, no tasks and 100% success.

        Returns:
            The new agent id
        """
        version = version or "1.0.0"
        return self.registry.register_agent(
            name=name,
            description=description,
            version=version,
            category=category or "other",
            website=website,
            github=github,
            twitter=twitter,
            tags=tags or [],
            is_external=True,
            capabilities=build_capabilities(capabilities or [], version),
            reputation=0,
            tasks_completed=0,
            success_rate=100
        )

    def record_task(self, description: str, skill_name: str, success: bool) -> Optional[str]:
        """
        Record a finished command as a task of the local agent.

        Does nothing before initialize() or when no skill has that name.

        Args:
            description: What the command did
            skill_name: Skill name, matched case-insensitively
            success: Outcome of the command

        Returns:
            The task id, or None if nothing was recorded
        """
        if not self._initialized:
            return None

        profile = self.profile_manager.get_profile()
        if not profile:
            return None

        skill = self.skill_manager.find_skill_by_name(skill_name)
        if not skill:
            return None

        task_id = self.registry.create_task(
            profile.id,
            skill.id,
            description,
            {"query": description}
        )

        self.registry.update_task_status(
            task_id,
            "completed" if success else "failed",
            result={"description": description} if success else None,
            error=None if success else FAILED_COMMAND_ERROR
        )
        return task_id

    def is_initialized(self) -> bool:
        """Whether initialize() has completed."""
        return self._initialized

    def get_stats(self) -> RegistryStats:
        """Registry statistics."""
        return self.registry.get_stats()

    def get_summary(self) -> str:
        """Full protocol digest as display text."""
        if not self._initialized:
            return "SAP Protocol not initialized"

        stats = self.get_stats()
        top_agents = "\n".join(
            f"  {i}. {a.name} ({a.reputation}/100)" for i, a in enumerate(stats.top_agents, 1)
        )
        rule = "=" * 34

        return (
            f"{rule}\n"
            f"SOLANA AGENT PROTOCOL (SAP)\n"
            f"{rule}\n\n"
            f"{self.profile_manager.get_summary()}\n\n"
            f"{self.skill_manager.get_summary()}\n\n"
            f"**Protocol Statistics:**\n"
            f"  Total Agents: {stats.total_agents}\n"
            f"  Total Skills: {stats.total_skills}\n"
            f"  Total Tasks: {stats.total_tasks}\n"
            f"  Active Tasks: {stats.active_tasks}\n"
            f"  Completed Tasks: {stats.completed_tasks}\n"
            f"  Average Reputation: {stats.average_reputation:.1f}/100\n\n"
            f"**Top Agents:**\n{top_agents}\n\n"
            f"{rule}\n"
            f"OpenClaw Integration Ready\n"
            f"{rule}"
        )

    def export_for_openclaw(self) -> Dict[str, Any]:
        """
        Machine-readable protocol digest.

        Field names are the external contract of the manifest.
        """
        stats = self.get_stats()
        return {
            "protocol": PROTOCOL_NAME,
            "version": PROTOCOL_VERSION,
            "agent": self.profile_manager.export_for_openclaw(),
            "skills": self.skill_manager.export_for_openclaw(),
            "stats": {
                "totalSkills": stats.total_skills,
                "totalTasks": stats.total_tasks,
                "reputation": stats.average_reputation
            }
        }

    def create_openclaw_manifest(self) -> str:
        """Render the export as an OpenClaw skill module."""
        manifest = self.export_for_openclaw()
        agent = manifest["agent"] or {}

        return OPENCLAW_TEMPLATE.format(
            title=agent.get("name", "Solana Agent"),
            name=json.dumps(agent.get("name", "solana-agent")),
            version=json.dumps(manifest["version"]),
            description=json.dumps(agent.get("description", "Solana blockchain AI agent")),
            capabilities=json.dumps(agent.get("capabilities", []), indent=2),
            endpoint=json.dumps(config.openclaw_endpoint),
            skills=json.dumps(manifest["skills"], indent=2),
            stats=json.dumps(manifest["stats"], indent=2)
        )
