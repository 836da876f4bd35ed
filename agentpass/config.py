"""
Configuration management for AgentPass.

Settings for the local agent, the Solana RPC endpoint, the crawler and the
OpenClaw export are read from config.yaml. Secrets (GITHUB_TOKEN,
SOLANA_RPC_URL) may come from the environment instead.
"""

import yaml
import os
from pathlib import Path
from typing import Any, Dict, Optional
import logging


class ConfigManager:
    """
    Manages configuration loading and access for AgentPass.
    """

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        try:
            if not self.config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

            with open(self.config_path, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}

            logging.info(f"Configuration loaded from {self.config_path}")

        except Exception as e:
            logging.error(f"Failed to load configuration: {e}")
            # Fall back to default configuration
            self._config = self._get_default_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return {
            "agent": {
                "name": "Solana AI Agent",
                "description": "Advanced AI agent for Solana blockchain interactions",
                "version": "1.0.0"
            },
            "solana": {
                "rpc_url": "https://api.mainnet-beta.solana.com",
                "network": "mainnet",
                "timeout": 10.0
            },
            "monitor": {
                "crawl_interval_minutes": 30,
                "github_delay": 0.3,
                "github_api": "https://api.github.com",
                "dexscreener_api": "https://api.dexscreener.com",
                "user_agent": "AgentPass-Monitor/1.0",
                "timeout": 15.0
            },
            "openclaw": {
                "endpoint": "http://localhost:3000/api/chat"
            },
            "registry": {
                "task_history_limit": 20
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "log_file": "agentpass.log"
            }
        }

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "agent.name")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("agent.name")  # Returns "Solana AI Agent"
            config.get("monitor.crawl_interval_minutes")  # Returns 30
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get an entire configuration section.

        Args:
            section: Name of the configuration section

        Returns:
            Dictionary containing the section configuration
        """
        return self._config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    # Convenience properties for commonly used values

    @property
    def agent_name(self) -> str:
        """Get the local agent name."""
        return self.get("agent.name", "Solana AI Agent")

    @property
    def agent_description(self) -> str:
        """Get the local agent description."""
        return self.get("agent.description", "Advanced AI agent for Solana blockchain interactions")

    @property
    def agent_version(self) -> str:
        """Get the local agent version."""
        return self.get("agent.version", "1.0.0")

    @property
    def solana_rpc_url(self) -> str:
        """Get the Solana RPC URL. SOLANA_RPC_URL overrides the file."""
        return os.environ.get("SOLANA_RPC_URL") or self.get(
            "solana.rpc_url", "https://api.mainnet-beta.solana.com"
        )

    @property
    def solana_timeout(self) -> float:
        """Get the Solana RPC timeout."""
        return self.get("solana.timeout", 10.0)

    @property
    def crawl_interval(self) -> float:
        """Get the crawler interval in seconds."""
        return self.get("monitor.crawl_interval_minutes", 30) * 60.0

    @property
    def github_delay(self) -> float:
        """Get the pause between consecutive GitHub fetches, in seconds."""
        return self.get("monitor.github_delay", 0.3)

    @property
    def github_api(self) -> str:
        """Get the GitHub API base URL."""
        return self.get("monitor.github_api", "https://api.github.com")

    @property
    def github_token(self) -> Optional[str]:
        """Get the GitHub token from the environment or the file."""
        return os.environ.get("GITHUB_TOKEN") or self.get("monitor.github_token")

    @property
    def dexscreener_api(self) -> str:
        """Get the DexScreener API base URL."""
        return self.get("monitor.dexscreener_api", "https://api.dexscreener.com")

    @property
    def monitor_user_agent(self) -> str:
        """Get the User-Agent sent by the monitors."""
        return self.get("monitor.user_agent", "AgentPass-Monitor/1.0")

    @property
    def monitor_timeout(self) -> float:
        """Get the HTTP timeout used by the monitors."""
        return self.get("monitor.timeout", 15.0)

    @property
    def openclaw_endpoint(self) -> str:
        """Get the chat endpoint embedded in OpenClaw manifests."""
        return self.get("openclaw.endpoint", "http://localhost:3000/api/chat")

    @property
    def task_history_limit(self) -> int:
        """Get the default number of tasks returned by task history."""
        return self.get("registry.task_history_limit", 20)

    @property
    def log_filename(self) -> str:
        """Get log file name."""
        return self.get("logging.log_file", "agentpass.log")


# Global configuration instance
config = ConfigManager()


def get_config() -> ConfigManager:
    """
    Get the global configuration instance.

    Returns:
        The global ConfigManager instance
    """
    return config
