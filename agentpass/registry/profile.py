"""
Local agent profile for AgentPass.

The profile manager registers the agent this process runs as and renders it
for summaries and exports.
"""

import logging
from typing import Any, Dict, Optional

from ..models import AgentCapability, AgentProfile
from .skills import SkillManager
from .store import EntityStore


class AgentProfileManager:
    """
    Owns the id of the local agent profile.
    """

    def __init__(self, store: EntityStore, skill_manager: SkillManager):
        self.store = store
        self.skill_manager = skill_manager
        self.agent_id: Optional[str] = None

    def initialize(self, name: str, description: str, version: str) -> str:
        """
        Register the local agent with one capability per registered skill.

        Returns:
            The local agent id
        """
        capabilities = [
            AgentCapability(
                name=skill.name,
                description=skill.description,
                version=version,
                enabled=True
            )
            for skill in self.skill_manager.list_skills()
        ]

        self.agent_id = self.store.register_agent(
            name=name,
            description=description,
            version=version,
            capabilities=capabilities,
            category="utility",
            tags=["solana", "ai-agent"],
            is_external=False
        )
        logging.info(f"Local agent profile initialized: {self.agent_id}")
        return self.agent_id

    def get_profile(self) -> Optional[AgentProfile]:
        """The local agent profile, or None before initialize()."""
        if not self.agent_id:
            return None
        return self.store.get_agent(self.agent_id)

    def get_summary(self) -> str:
        """Profile digest as display text."""
        profile = self.get_profile()
        if not profile:
            return "Agent profile not initialized"

        capabilities = "\n".join(f"  - {c.name}" for c in profile.capabilities if c.enabled)
        return (
            f"**Agent:** {profile.name} v{profile.version}\n"
            f"**ID:** {profile.id}\n"
            f"{profile.description}\n\n"
            f"**Reputation:** {profile.reputation}/100\n"
            f"**Tasks Completed:** {profile.tasks_completed}\n"
            f"**Success Rate:** {profile.success_rate:.1f}%\n\n"
            f"**Capabilities:**\n{capabilities}"
        )

    def export_for_openclaw(self) -> Optional[Dict[str, Any]]:
        """Profile subset used in the OpenClaw manifest."""
        profile = self.get_profile()
        if not profile:
            return None

        return {
            "id": profile.id,
            "name": profile.name,
            "description": profile.description,
            "version": profile.version,
            "capabilities": [c.name for c in profile.capabilities if c.enabled],
            "reputation": profile.reputation,
            "tasksCompleted": profile.tasks_completed,
            "successRate": profile.success_rate
        }
