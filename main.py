#!/usr/bin/env python3
"""
AgentPass - Solana AI Agent Registry

Main entry point for AgentPass. Builds the protocol, seeds the registry and
runs registry commands, the skill runner or the crawler from the command line.
"""

import asyncio
import json
import logging
import sys
import argparse
from typing import Dict

from agentpass.chain import SolanaClient
from agentpass.config import config
from agentpass.exceptions import AgentPassError
from agentpass.monitor import AgentCrawler
from agentpass.models.skills import Parameters
from agentpass.registry import AgentProtocol
from agentpass.service import RegistryService


def setup_logging():
    """Configure logging for the application."""
    level = getattr(logging, config.get("logging.level", "INFO").upper())
    format_str = config.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    log_file = config.log_filename

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_file)
        ]
    )


def build_protocol(chain: SolanaClient) -> AgentProtocol:
    """Create and initialize the protocol from configuration."""
    protocol = AgentProtocol(chain)
    protocol.initialize(
        agent_name=config.agent_name,
        agent_description=config.agent_description,
        agent_version=config.agent_version
    )
    return protocol


def parse_parameters(pairs) -> Parameters:
    """
    Turn key=value strings into a parameter bag.

    Numbers and true/false are converted, everything else stays a string.
    """
    parameters: Dict[str, object] = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise ValueError(f"Expected key=value, got '{pair}'")
        key, value = pair.split("=", 1)
        if value.lower() in ("true", "false"):
            parameters[key] = value.lower() == "true"
        else:
            try:
                parameters[key] = int(value)
            except ValueError:
                try:
                    parameters[key] = float(value)
                except ValueError:
                    parameters[key] = value
    return parameters


def print_json(data):
    print(json.dumps(data, indent=2, default=str))


async def run_command(args) -> None:
    """Run one sub-command."""
    async with SolanaClient() as chain:
        protocol = build_protocol(chain)
        crawler = AgentCrawler(protocol.registry) if args.command in ("crawl", "monitor") else None
        service = RegistryService(protocol, crawler)

        try:
            await dispatch(args, protocol, crawler, service)
        finally:
            if crawler:
                await crawler.close()


async def dispatch(args, protocol: AgentProtocol, crawler, service: RegistryService) -> None:
    """Execute the selected sub-command."""
    if args.command == "summary":
        print(protocol.get_summary())

    elif args.command == "agents":
        print_json(service.list_agents(args.category, args.search, args.limit))

    elif args.command == "skills":
        print_json(service.list_skills())

    elif args.command == "run-skill":
        skill = protocol.skill_manager.find_skill_by_name(args.skill)
        if not skill:
            raise ValueError(f"Unknown skill: {args.skill}")
        try:
            result = await service.execute_skill(skill.id, parse_parameters(args.param))
        except AgentPassError:
            service.record_command(f"CLI run-skill {skill.name}", skill.name, False)
            raise
        service.record_command(f"CLI run-skill {skill.name}", skill.name, True)
        print(result)

    elif args.command == "crawl":
        await crawler.run_cycle()
        print_json(service.crawler_status())

    elif args.command == "monitor":
        crawler.start()
        try:
            while True:
                await asyncio.sleep(3600)
        finally:
            crawler.stop()
            await crawler.wait()

    elif args.command == "manifest":
        if args.format == "json":
            print_json(service.manifest())
        else:
            print(protocol.create_openclaw_manifest())


def parse_arguments():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="AgentPass - Solana AI Agent Registry",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py summary                          # Protocol summary
  python main.py agents --category trading        # Trading agents by reputation
  python main.py run-skill "Balance Checker" --param address=<wallet>
  python main.py crawl                            # One crawl cycle
  python main.py monitor                          # Crawl every 30 minutes
  python main.py manifest --format js             # OpenClaw skill module
        """
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("summary", help="Print the protocol summary")

    agents_parser = subparsers.add_parser("agents", help="List registered agents")
    agents_parser.add_argument("--category", type=str, help="Only agents of this category")
    agents_parser.add_argument("--search", type=str, help="Substring of name, description or tag")
    agents_parser.add_argument("--limit", type=int, help="Maximum number of agents")

    subparsers.add_parser("skills", help="List available skills")

    skill_parser = subparsers.add_parser("run-skill", help="Execute a skill by name")
    skill_parser.add_argument("skill", type=str, help="Skill name")
    skill_parser.add_argument(
        "--param",
        action="append",
        metavar="KEY=VALUE",
        help="Skill parameter (repeatable)"
    )

    subparsers.add_parser("crawl", help="Run one crawl cycle and print the results")
    subparsers.add_parser("monitor", help="Run the crawler until interrupted")

    manifest_parser = subparsers.add_parser("manifest", help="Print the OpenClaw manifest")
    manifest_parser.add_argument(
        "--format",
        choices=["json", "js"],
        default="json",
        help="Manifest format (default: json)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="AgentPass 0.1.0"
    )

    return parser.parse_args()


def main():
    """Main entry point."""
    args = parse_arguments()
    setup_logging()

    try:
        asyncio.run(run_command(args))

    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        print("\nInterrupted.")

    except (AgentPassError, ValueError) as e:
        logging.error(f"Command failed: {e}")
        print(f"\nCommand failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
