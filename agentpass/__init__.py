"""
AgentPass: a Solana AI agent with an in-memory agent registry.

Tracks agent profiles, skills and tasks, and keeps their live reputation
signals fresh from GitHub and DexScreener.
"""

__version__ = "0.1.0"
__author__ = "AgentPass Project"

# Import main components
from .registry import EntityStore, SkillManager, AgentProtocol
from .monitor import AgentCrawler, GitHubMonitor, DexScreenerMonitor
from .chain import SolanaClient
from .service import RegistryService

__all__ = [
    "EntityStore",
    "SkillManager",
    "AgentProtocol",
    "AgentCrawler",
    "GitHubMonitor",
    "DexScreenerMonitor",
    "SolanaClient",
    "RegistryService"
]
