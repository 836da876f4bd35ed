"""
Skill and task models for AgentPass.

Skills are named, parameterized operations an agent can perform. Tasks record
one attempt at exercising a skill on behalf of an agent.
"""

from typing import Any, Dict, List, Literal, Optional, Union
from datetime import datetime
from pydantic import Field

from .base import RegistryModel

from .agents import Currency, utc_now


SkillCategory = Literal['defi', 'nft', 'analytics', 'trading', 'utility']
ParameterType = Literal['string', 'number', 'boolean', 'address']
TaskStatus = Literal['pending', 'running', 'completed', 'failed']

# Values accepted in skill and task parameter bags. Addresses travel as strings.
ParameterValue = Union[bool, int, float, str]
Parameters = Dict[str, ParameterValue]

TASK_STATUSES = ('pending', 'running', 'completed', 'failed')
TERMINAL_STATUSES = ('completed', 'failed')


class SkillParameter(RegistryModel):
    """
    One declared input of a skill.
    """

    name: str
    type: ParameterType = 'string'
    description: str = ""
    required: bool = False
    default: Optional[ParameterValue] = None


class AgentSkill(RegistryModel):
    """
    A named, invokable capability.
    """

    id: str = Field(
        ...,
        description="Unique identifier within the registry"
    )

    name: str
    description: str
    category: SkillCategory

    nft_mint: Optional[str] = Field(
        None,
        description="Mint address if the skill is tokenized"
    )

    owner: Optional[str] = Field(
        None,
        description="Owner of the skill NFT"
    )

    handler: str = Field(
        ...,
        description="Name of the handler bound to this skill"
    )

    parameters: List[SkillParameter] = Field(
        default_factory=list,
        description="Full accepted input shape of the skill"
    )

    price: Optional[int] = Field(
        None,
        description="Price in lamports"
    )

    royalty: Optional[float] = Field(
        None,
        description="Creator royalty in percent"
    )

    usage_count: int = 0

    rating: float = Field(
        0,
        ge=0,
        le=5
    )


class TaskPayment(RegistryModel):
    """Payment attached to a task."""

    amount: float
    currency: Currency = 'SOL'
    payer: str
    signature: Optional[str] = None


class AgentTask(RegistryModel):
    """
    One unit of requested work and its outcome.
    """

    id: str
    agent_id: str
    skill_id: str

    description: str
    parameters: Parameters = Field(default_factory=dict)

    status: TaskStatus = 'pending'
    result: Optional[Any] = None
    error: Optional[str] = None

    payment: Optional[TaskPayment] = None

    created_at: datetime = Field(default_factory=utc_now)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def is_terminal(self) -> bool:
        """Whether the task reached completed or failed."""
        return self.status in TERMINAL_STATUSES
