"""Agent registry: entity store, skills, profiles and the protocol facade."""

from .store import EntityStore
from .skills import SkillManager, SkillHandler, CallableSkillHandler
from .profile import AgentProfileManager
from .protocol import AgentProtocol
from .seed import REAL_SOLANA_AGENTS, SeedAgent

__all__ = [
    "EntityStore",
    "SkillManager",
    "SkillHandler",
    "CallableSkillHandler",
    "AgentProfileManager",
    "AgentProtocol",
    "REAL_SOLANA_AGENTS",
    "SeedAgent"
]
