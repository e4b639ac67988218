"""
CLI Configuration Manager for Library CLI
Manages user preferences stored as JSON next to the user's home directory
"""

import copy
import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Union
from rich.console import Console
from rich.tree import Tree

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "preferences": {
        "default_output": "plain",
        "seed_sample_data": True,
    },
    "ui_settings": {
        "confirm_deletions": True,
    },
}


class CLIConfig:
    """Manages CLI configuration and user preferences."""

    def __init__(self, config_dir: Union[str, Path], console: Optional[Console] = None):
        self.config_dir = Path(config_dir)
        self.config_file = self.config_dir / "config.json"
        self.console = console or Console()
        self.config: Dict[str, Any] = {}
        self.load_config()

    def load_config(self) -> None:
        """Load configuration from file or fall back to defaults."""
        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    self.config = json.load(f)
                logger.debug(f"Config loaded from {self.config_file}")
                return
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Could not load config {self.config_file}: {e}")
        self.config = copy.deepcopy(DEFAULT_CONFIG)

    def save_config(self) -> None:
        """Save current configuration to file."""
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, 'w', encoding='utf-8') as f:
                json.dump(self.config, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Could not save config {self.config_file}: {e}")
            self.console.print(f"[red]Could not save config: {e}[/]")

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation (e.g., 'ui_settings.confirm_deletions')."""
        value = self.config

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value using dot notation and persist it."""
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if not isinstance(config.get(k), dict):
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value
        self.save_config()

    def reset_to_default(self) -> None:
        """Reset configuration to default values."""
        self.config = copy.deepcopy(DEFAULT_CONFIG)
        self.save_config()

    def show_config(self) -> None:
        """Display current configuration."""
        tree = Tree("Library CLI Configuration", style="bold blue")

        for section, values in self.config.items():
            section_tree = tree.add(f"[bold cyan]{section}[/]")
            if isinstance(values, dict):
                for key, value in values.items():
                    section_tree.add(f"[yellow]{key}[/]: [white]{value}[/]")
            else:
                section_tree.add(f"[white]{values}[/]")

        self.console.print(tree)
        self.console.print(f"\n[dim]Config file: {self.config_file}[/]")


def parse_value(value: str) -> Any:
    """Convert a command-line string to bool/int/float where it looks like one."""
    if value.lower() in ('true', 'false'):
        return value.lower() == 'true'
    if value.isdigit():
        return int(value)
    if value.replace('.', '', 1).isdigit():
        return float(value)
    return value
