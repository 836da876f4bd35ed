"""
Aggregate statistics models for AgentPass.
"""

from typing import List
from pydantic import Field

from .base import RegistryModel


class AgentSummary(RegistryModel):
    """Short agent reference used in rankings."""

    id: str
    name: str
    reputation: int


class RegistryStats(RegistryModel):
    """
    Registry-wide counters returned by EntityStore.get_stats().
    """

    total_agents: int = 0
    total_skills: int = 0
    total_tasks: int = 0
    active_tasks: int = Field(
        0,
        description="Tasks currently running"
    )
    completed_tasks: int = 0
    average_reputation: float = Field(
        0.0,
        description="Mean reputation over all agents, 0 for an empty registry"
    )
    top_agents: List[AgentSummary] = Field(
        default_factory=list,
        description="Top five agents by reputation"
    )
