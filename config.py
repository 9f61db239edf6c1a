"""
ConsBOL Configuration Module

Centralized configuration for the ConsBOL reasoner.
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, Any, Optional
import json
import logging


@dataclass
class ReasoningConfig:
    """Reasoning engine configuration."""
    # Abort runs of a vocabulary that never reaches a fixed point
    max_steps: int = 100000

    # Disjunction branches
    parallel_branches: bool = False
    max_branch_workers: int = 4

    # Observer hooks
    notify_observers: bool = True

    def __post_init__(self):
        if self.max_steps < 1:
            raise ValueError("max_steps must be positive")
        if self.max_branch_workers < 1:
            raise ValueError("max_branch_workers must be positive")


@dataclass
class ConsBOLGlobalConfig:
    """Global ConsBOL configuration."""
    reasoning: ReasoningConfig = field(default_factory=ReasoningConfig)

    # Logging
    log_level: str = "INFO"
    verbose: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            'reasoning': asdict(self.reasoning),
            'log_level': self.log_level,
            'verbose': self.verbose,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ConsBOLGlobalConfig':
        """Build a config from a dictionary; missing keys keep their defaults."""
        return cls(
            reasoning=ReasoningConfig(**data.get('reasoning', {})),
            log_level=data.get('log_level', "INFO"),
            verbose=data.get('verbose', False),
        )

    def save(self, filepath: str):
        """Save configuration to JSON file."""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, filepath: str) -> 'ConsBOLGlobalConfig':
        """Load configuration from JSON file."""
        with open(filepath, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)


# Default global configuration instance
DEFAULT_CONFIG = ConsBOLGlobalConfig()


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(config: Optional[ConsBOLGlobalConfig] = None) -> None:
    """
    Set up the root logger from a configuration.

    `verbose` forces DEBUG regardless of `log_level`.
    """
    config = config or DEFAULT_CONFIG
    level = logging.DEBUG if config.verbose else getattr(logging, config.log_level.upper(), None)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {config.log_level!r}")
    logging.basicConfig(level=level, format=LOG_FORMAT)
