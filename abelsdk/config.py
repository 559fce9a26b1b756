"""
Abelian SDK Configuration
"""

from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass, field, asdict
from typing import List, Mapping, Optional

from abelsdk.constants import (
    ABEL_ADDRESS_MAX_CHAIN_ID,
    DEBUG_TRUTHY_VALUES,
    DEFAULT_CHAIN_ID,
    ENV_CHAIN_ID,
    ENV_DEBUG,
    ENV_RPC_ENDPOINT,
    ENV_RPC_PASSWORD,
    ENV_RPC_USERNAME,
    LOGGER_NAMESPACE,
    RPC_DEFAULT_ENDPOINT,
    RPC_DEFAULT_TIMEOUT_SEC,
)
from abelsdk.errors import ConfigError

logger = logging.getLogger(__name__)


def debug_enabled(environ: Optional[Mapping[str, str]] = None) -> bool:
    """True when ABELSDK_DEBUG is set to true, 1, on or yes (any case)."""
    env = os.environ if environ is None else environ
    return env.get(ENV_DEBUG, "").strip().lower() in DEBUG_TRUTHY_VALUES


@dataclass
class RPCConfig:
    """Abec node connection."""
    endpoint: str = RPC_DEFAULT_ENDPOINT
    username: str = ""
    password: str = ""
    timeout_sec: float = RPC_DEFAULT_TIMEOUT_SEC
    verify: bool = True

    def __repr__(self) -> str:
        return (
            f"RPCConfig(endpoint={self.endpoint!r}, username={self.username!r}, "
            f"password=<redacted>, timeout_sec={self.timeout_sec}, verify={self.verify})"
        )


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "INFO"
    file: Optional[str] = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    max_size_mb: int = 100
    backup_count: int = 5
    debug: bool = False


@dataclass
class SDKConfig:
    """
    Complete SDK configuration.

    The core address and transaction functions never read this; it is
    for applications wiring up the RPC client and logging.
    """
    name: str = "abelsdk"
    chain_id: int = DEFAULT_CHAIN_ID

    rpc: RPCConfig = field(default_factory=RPCConfig)
    log: LogConfig = field(default_factory=LogConfig)

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not 0 <= self.chain_id <= ABEL_ADDRESS_MAX_CHAIN_ID:
            errors.append(f"chain_id must be in 0..{ABEL_ADDRESS_MAX_CHAIN_ID}: {self.chain_id}")

        if not self.rpc.endpoint.startswith(("http://", "https://")):
            errors.append(f"Invalid RPC endpoint: {self.rpc.endpoint!r}")

        if self.rpc.timeout_sec <= 0:
            errors.append("timeout_sec must be positive")

        if getattr(logging, self.log.level.upper(), None) is None:
            errors.append(f"Unknown log level: {self.log.level}")

        if self.log.max_size_mb < 1:
            errors.append("max_size_mb must be at least 1")

        return errors

    def raise_for_errors(self) -> None:
        """Raise ConfigError if validate() reports any problems."""
        errors = self.validate()
        if errors:
            raise ConfigError(errors)

    def save(self, path: str) -> None:
        """Save configuration to file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info(f"Configuration saved to {path}")

    @classmethod
    def load(cls, path: str) -> "SDKConfig":
        """Load configuration from file."""
        with open(path, 'r') as f:
            data = json.load(f)

        try:
            config = cls(
                name=data.get("name", "abelsdk"),
                chain_id=int(data.get("chain_id", DEFAULT_CHAIN_ID)),
            )

            if "rpc" in data:
                config.rpc = RPCConfig(**data["rpc"])

            if "log" in data:
                config.log = LogConfig(**data["log"])
        except (TypeError, ValueError) as e:
            raise ConfigError([f"{path}: {e}"]) from e

        logger.info(f"Configuration loaded from {path}")
        return config

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SDKConfig":
        """
        Build configuration from ABELSDK_* environment variables.

        Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        config = cls()

        if ENV_CHAIN_ID in env:
            try:
                config.chain_id = int(env[ENV_CHAIN_ID])
            except ValueError as e:
                raise ConfigError([f"{ENV_CHAIN_ID} is not an integer: {env[ENV_CHAIN_ID]!r}"]) from e

        config.rpc.endpoint = env.get(ENV_RPC_ENDPOINT, config.rpc.endpoint)
        config.rpc.username = env.get(ENV_RPC_USERNAME, config.rpc.username)
        config.rpc.password = env.get(ENV_RPC_PASSWORD, config.rpc.password)
        config.log.debug = debug_enabled(env)

        return config

    def to_dict(self) -> dict:
        """Export configuration as dictionary."""
        return {
            "name": self.name,
            "chain_id": self.chain_id,
            "rpc": asdict(self.rpc),
            "log": asdict(self.log),
        }


def setup_logging(config: LogConfig) -> None:
    """Configure logging based on config."""
    level = getattr(logging, config.level.upper(), logging.INFO)

    handlers = [logging.StreamHandler()]

    if config.file:
        from logging.handlers import RotatingFileHandler
        file_handler = RotatingFileHandler(
            config.file,
            maxBytes=config.max_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format=config.format,
        handlers=handlers,
    )

    if config.debug:
        logging.getLogger(LOGGER_NAMESPACE).setLevel(logging.DEBUG)
