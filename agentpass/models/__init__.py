"""Data models for AgentPass."""

from .base import RegistryModel
from .agents import AgentCapability, AgentLiveData, AgentPricing, AgentProfile
from .skills import AgentSkill, AgentTask, SkillParameter, TaskPayment
from .stats import AgentSummary, RegistryStats

__all__ = [
    "RegistryModel",
    "AgentCapability",
    "AgentLiveData",
    "AgentPricing",
    "AgentProfile",
    "AgentSkill",
    "AgentTask",
    "SkillParameter",
    "TaskPayment",
    "AgentSummary",
    "RegistryStats"
]
