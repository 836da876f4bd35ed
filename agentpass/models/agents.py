"""
Agent profile models for AgentPass.

This module defines the identity and reputation records held by the registry,
together with the live-data snapshot attached to them by the crawler.
"""

from typing import List, Literal, Optional
from datetime import datetime, timezone
from pydantic import Field

from .base import RegistryModel


AgentCategory = Literal['framework', 'trading', 'defi', 'nft', 'analytics', 'utility', 'other']
Currency = Literal['SOL', 'USDC']


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class AgentCapability(RegistryModel):
    """
    A single capability advertised by an agent.
    """

    name: str = Field(
        ...,
        description="Capability name, matched by capability search"
    )

    description: str = Field(
        "",
        description="Human-readable description of the capability"
    )

    version: str = Field(
        "1.0.0",
        description="Version of the capability"
    )

    enabled: bool = Field(
        True,
        description="Disabled capabilities are ignored by capability search"
    )


class AgentPricing(RegistryModel):
    """Marketplace pricing for an agent."""

    price_per_task: Optional[int] = Field(
        None,
        description="Price per task in lamports"
    )

    currency: Currency = Field(
        'SOL',
        description="Settlement currency"
    )


class AgentLiveData(RegistryModel):
    """
    Most recent external-signal snapshot for an agent.

    Replaced wholesale by every crawl cycle that gets at least one source.
    """

    github_stars: Optional[int] = None
    github_forks: Optional[int] = None
    github_commits_30d: Optional[int] = None
    github_last_push: Optional[str] = Field(
        None,
        description="ISO-8601 timestamp of the last push"
    )
    github_release: Optional[str] = Field(
        None,
        description="Latest release tag"
    )

    token_symbol: Optional[str] = None
    token_price: Optional[float] = None
    token_change_24h: Optional[float] = Field(
        None,
        description="24h price change in percent"
    )
    token_volume_24h: Optional[float] = Field(
        None,
        description="24h volume in USD"
    )

    last_crawled_at: str = Field(
        ...,
        description="ISO-8601 timestamp of the crawl that produced this snapshot"
    )

    crawl_source: List[str] = Field(
        default_factory=list,
        description="Sources that contributed to this snapshot"
    )

    live_score: int = Field(
        0,
        ge=-10,
        le=10,
        description="Live reputation delta computed from the sources"
    )


class AgentProfile(RegistryModel):
    """
    Identity and reputation record of one (possibly external) agent.
    """

    id: str = Field(
        ...,
        description="Unique identifier within the registry"
    )

    name: str
    description: str
    version: str = "1.0.0"

    public_key: Optional[str] = Field(
        None,
        description="Solana public key of the agent"
    )

    website: Optional[str] = None
    github: Optional[str] = Field(
        None,
        description="Source repository, URL or owner/name shorthand"
    )
    twitter: Optional[str] = None

    category: AgentCategory = 'other'

    tags: List[str] = Field(default_factory=list)

    is_external: bool = Field(
        False,
        description="True for agents registered from outside (not the local agent)"
    )

    capabilities: List[AgentCapability] = Field(default_factory=list)

    reputation: int = Field(
        0,
        ge=0,
        le=100,
        description="Reputation score"
    )

    tasks_completed: int = Field(
        0,
        ge=0,
        description="Cumulative number of finished tasks"
    )

    success_rate: float = Field(
        100.0,
        ge=0,
        le=100,
        description="Success rate in percent"
    )

    created_at: datetime = Field(default_factory=utc_now)
    last_active: datetime = Field(default_factory=utc_now)

    pricing: Optional[AgentPricing] = None

    live_data: Optional[AgentLiveData] = Field(
        None,
        description="Absent until the first successful crawl"
    )
