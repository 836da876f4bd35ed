"""
Skill Manager for AgentPass.

This module binds skill metadata stored in the EntityStore to executable
handlers and enforces parameter contracts before a handler is invoked.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from ..chain import format_network_status, format_prices, format_transactions, format_wallet_info
from ..exceptions import NotFoundError, MissingParameterError
from ..models import AgentSkill, SkillParameter
from ..models.skills import Parameters
from .store import EntityStore


class SkillHandler(ABC):
    """
    Executable side of a skill.

    Handlers are resolved once at registration and looked up by skill id.
    """

    name: str = "custom"

    @abstractmethod
    async def execute(self, parameters: Parameters) -> Any:
        """
        Run the skill.

        Args:
            parameters: Parameter bag, already checked for required entries

        Returns:
            Opaque success payload, usually formatted text
        """
        pass


class CallableSkillHandler(SkillHandler):
    """Wraps a coroutine function as a handler."""

    def __init__(self, func: Callable[[Parameters], Awaitable[Any]], name: str = "custom"):
        self.func = func
        self.name = name

    async def execute(self, parameters: Parameters) -> Any:
        return await self.func(parameters)


class ChainSkillHandler(SkillHandler):
    """Base for the built-in handlers backed by a chain client."""

    def __init__(self, chain: Any):
        self.chain = chain


class BalanceCheckerHandler(ChainSkillHandler):
    name = "check_balance"

    async def execute(self, parameters: Parameters) -> str:
        wallet = await self.chain.get_wallet_info(parameters["address"])
        return format_wallet_info(wallet)


class PriceMonitorHandler(ChainSkillHandler):
    name = "get_prices"

    async def execute(self, parameters: Parameters) -> str:
        prices = await self.chain.get_popular_tokens()
        return format_prices(prices)


class TransactionAnalyzerHandler(ChainSkillHandler):
    name = "analyze_transactions"

    async def execute(self, parameters: Parameters) -> str:
        limit = int(parameters.get("limit") or 10)
        transactions = await self.chain.get_recent_transactions(parameters["address"], limit)
        return format_transactions(transactions)


class NetworkStatusHandler(ChainSkillHandler):
    name = "network_status"

    async def execute(self, parameters: Parameters) -> str:
        status = await self.chain.get_network_status()
        return format_network_status(status)


def slugify(name: str) -> str:
    """Lowercase a skill name and join words with dashes."""
    return re.sub(r"\s+", "-", name.strip().lower())


class SkillManager:
    """
    Manages agent skills and their execution.
    """

    def __init__(self, store: EntityStore, chain: Any):
        """
        Initialize the skill manager and register the built-in skills.

        Args:
            store: Entity store holding skill metadata
            chain: Chain client used by the built-in handlers
        """
        self.store = store
        self.chain = chain
        self._handlers: Dict[str, SkillHandler] = {}
        self._register_builtin_skills()

    def _register_builtin_skills(self):
        """Register the four built-in chain skills."""

        self._register(
            name="Balance Checker",
            description="Check SOL and SPL token balances for any wallet",
            category="analytics",
            parameters=[
                SkillParameter(name="address", type="address",
                               description="Solana wallet address", required=True)
            ],
            handler=BalanceCheckerHandler(self.chain)
        )

        self._register(
            name="Price Monitor",
            description="Get real-time prices for popular Solana tokens",
            category="analytics",
            parameters=[],
            handler=PriceMonitorHandler(self.chain)
        )

        self._register(
            name="Transaction Analyzer",
            description="Analyze recent transactions for a wallet",
            category="analytics",
            parameters=[
                SkillParameter(name="address", type="address",
                               description="Solana wallet address", required=True),
                SkillParameter(name="limit", type="number",
                               description="Number of transactions to analyze",
                               required=False, default=10)
            ],
            handler=TransactionAnalyzerHandler(self.chain)
        )

        self._register(
            name="Network Status",
            description="Check Solana network health and status",
            category="utility",
            parameters=[],
            handler=NetworkStatusHandler(self.chain)
        )

        logging.info(f"Initialized {len(self._handlers)} built-in skills")

    def _register(self, name: str, description: str, category: str,
                  parameters: List[SkillParameter], handler: SkillHandler,
                  price: Optional[int] = None) -> str:
        """Store metadata and handler together."""
        if not isinstance(handler, SkillHandler):
            raise TypeError(f"Handler for skill '{name}' must be a SkillHandler")

        skill_id = self.store.register_skill(
            name=name,
            description=description,
            category=category,
            handler=handler.name,
            parameters=parameters,
            price=price
        )
        self._handlers[skill_id] = handler
        return skill_id

    def register_skill(self, name: str, description: str, category: str,
                       parameters: List[SkillParameter],
                       handler: Union[SkillHandler, Callable[[Parameters], Awaitable[Any]]],
                       price: Optional[int] = None) -> str:
        """
        Register a custom skill.

        Args:
            name: Skill name
            description: Skill description
            category: Skill category
            parameters: Declared parameters
            handler: SkillHandler or coroutine function taking the parameter bag
            price: Optional price in lamports

        Returns:
            The new skill id
        """
        if not isinstance(handler, SkillHandler):
            if not callable(handler):
                raise TypeError(f"Handler for skill '{name}' is not callable")
            handler = CallableSkillHandler(handler)

        skill_id = self._register(name, description, category, parameters, handler, price)
        logging.info(f"Custom skill registered: {name}")
        return skill_id

    async def execute_skill(self, skill_id: str, parameters: Parameters) -> Any:
        """
        Execute a skill after checking its required parameters.

        Args:
            skill_id: Skill to execute
            parameters: Parameter bag

        Returns:
            The handler's result, unmodified

        Raises:
            NotFoundError: If the skill or its handler is unknown
            MissingParameterError: If a required parameter is absent
        """
        skill = self.store.get_skill(skill_id)
        if not skill:
            raise NotFoundError("Skill", skill_id)

        handler = self._handlers.get(skill_id)
        if not handler:
            raise NotFoundError("Skill handler", skill.name)

        for param in skill.parameters:
            if param.required and param.name not in parameters:
                raise MissingParameterError(param.name)

        logging.info(f"Executing skill: {skill.name}")
        result = await handler.execute(parameters)

        self.store.increment_skill_usage(skill_id)
        return result

    def list_skills(self) -> List[AgentSkill]:
        """List all skills."""
        return self.store.list_skills()

    def get_skill(self, skill_id: str) -> Optional[AgentSkill]:
        """Get a skill by id."""
        return self.store.get_skill(skill_id)

    def find_skill_by_name(self, name: str) -> Optional[AgentSkill]:
        """Case-insensitive exact name lookup."""
        wanted = name.lower()
        for skill in self.list_skills():
            if skill.name.lower() == wanted:
                return skill
        return None

    def search_skills(self, query: str) -> List[AgentSkill]:
        """
        Search skills by name, description or category.

        Args:
            query: Case-insensitive substring

        Returns:
            Matching skills
        """
        q = query.lower()
        return [
            skill for skill in self.list_skills()
            if q in skill.name.lower()
            or q in skill.description.lower()
            or q in skill.category.lower()
        ]

    def get_summary(self) -> str:
        """Skills grouped by category, as display text."""
        skills = self.list_skills()
        categories = list(dict.fromkeys(s.category for s in skills))

        summary = f"\n**Available Skills ({len(skills)})**\n"
        summary += "-" * 34 + "\n\n"

        for category in categories:
            category_skills = [s for s in skills if s.category == category]
            summary += f"**{category.upper()}** ({len(category_skills)})\n"

            for skill in category_skills:
                summary += f"  - {skill.name}\n"
                summary += f"     {skill.description}\n"
                summary += f"     Used {skill.usage_count} times"
                if skill.price:
                    summary += f" | Price: {skill.price} lamports"
                summary += "\n\n"

        summary += "-" * 34
        return summary

    def export_for_openclaw(self) -> List[Dict[str, Any]]:
        """
        External representation of all skills.

        Field names are part of the OpenClaw manifest contract.
        """
        return [
            {
                "name": slugify(skill.name),
                "description": skill.description,
                "category": skill.category,
                "parameters": [
                    {
                        "name": p.name,
                        "type": p.type,
                        "description": p.description,
                        "required": p.required
                    }
                    for p in skill.parameters
                ],
                "handler": skill.id
            }
            for skill in self.list_skills()
        ]
