"""Configuration Management with Pydantic.

This module implements configuration models using Pydantic for parsing and
validation of YAML/JSON configuration files with environment variable overrides.
Every setting has a default, so the demos run without any configuration file.
"""

import os
import threading
from pathlib import Path

import structlog
import yaml
from pydantic import BaseModel, Field, field_validator

from discrete_lab.crypto.key_exchange import DEMO_PRIMES
from discrete_lab.crypto.modular import is_prime

logger = structlog.get_logger(__name__)

# Constants
LARGE_ENUMERATION_THRESHOLD = 8
DEFAULT_CONFIG_NAMES = ("discrete_lab.yaml", "discrete_lab.yml", "discrete_lab.json")
ENV_PREFIX = "DISCRETE_LAB_"


class OrderingConfig(BaseModel):
    """Dependency-ordering demo settings.

    Attributes:
        max_enumeration_nodes: Largest instruction set the enumerator accepts
        max_orders: Optional cap on the number of orders returned
        vertical_spacing: Distance between Hasse diagram levels
        horizontal_spacing: Distance between nodes sharing a level
    """

    max_enumeration_nodes: int = Field(
        default=10,
        ge=0,
        le=12,
        description="Largest instruction set accepted by the enumerator",
    )
    max_orders: int | None = Field(
        default=None,
        ge=1,
        description="Maximum number of topological orders to return",
    )
    vertical_spacing: float = Field(
        default=4.0,
        gt=0,
        description="Vertical distance between levels",
    )
    horizontal_spacing: float = Field(
        default=3.5,
        gt=0,
        description="Horizontal distance between nodes on one level",
    )


class CryptoConfig(BaseModel):
    """Key-exchange demo settings.

    Attributes:
        primes: Moduli the random parameter generator picks from
    """

    primes: list[int] = Field(
        default_factory=lambda: list(DEMO_PRIMES),
        min_length=1,
        description="Candidate primes for random key-exchange parameters",
    )

    @field_validator("primes")
    @classmethod
    def validate_primes(cls, v: list[int]) -> list[int]:
        """Validate that every candidate modulus is a prime above 3.

        Args:
            v: The candidate primes

        Returns:
            The validated primes

        Raises:
            ValueError: If a value is not a prime greater than 3
        """
        bad = [p for p in v if p <= 3 or not is_prime(p)]  # noqa: PLR2004
        if bad:
            msg = f"Key-exchange moduli must be primes greater than 3: {bad}"
            raise ValueError(msg)
        return v


class LabConfig(BaseModel):
    """Main configuration combining all demo settings.

    Attributes:
        ordering: Dependency-ordering settings
        crypto: Key-exchange settings
        logging_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Render logs as JSON instead of console output
    """

    ordering: OrderingConfig = Field(default_factory=OrderingConfig)
    crypto: CryptoConfig = Field(default_factory=CryptoConfig)
    logging_level: str = Field(
        default="INFO",
        description="Logging level",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    json_logs: bool = Field(default=False, description="Render logs as JSON")

    @classmethod
    def from_yaml(cls, path: str | Path) -> "LabConfig":
        """Load configuration from a YAML (or JSON) file.

        Args:
            path: Path to the configuration file

        Returns:
            Parsed and validated LabConfig instance

        Raises:
            FileNotFoundError: If configuration file doesn't exist
            ValueError: If configuration is invalid
        """
        config_path = Path(path)

        if not config_path.exists():
            msg = f"Configuration file not found: {config_path}"
            raise FileNotFoundError(msg)

        logger.info("loading_configuration", path=str(config_path))

        try:
            with config_path.open() as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.exception("yaml_parse_error", error=str(e), path=str(config_path))
            msg = f"Invalid YAML in configuration file: {e}"
            raise ValueError(msg) from e

        if config_data is None:
            config_data = {}
        if not isinstance(config_data, dict):
            msg = "Configuration file must contain a mapping"
            raise ValueError(msg)

        config = cls(**cls._apply_env_overrides(config_data))

        logger.info(
            "configuration_loaded",
            logging_level=config.logging_level,
            max_enumeration_nodes=config.ordering.max_enumeration_nodes,
        )
        return config

    @classmethod
    def from_env(cls) -> "LabConfig":
        """Build configuration from defaults plus environment overrides."""
        return cls(**cls._apply_env_overrides({}))

    @classmethod
    def _apply_env_overrides(cls, config_data: dict) -> dict:
        """Apply environment variable overrides to configuration.

        Environment variables follow the pattern: DISCRETE_LAB_<SECTION>_<KEY>
        Example: DISCRETE_LAB_ORDERING_MAX_NODES, DISCRETE_LAB_CRYPTO_PRIMES

        Args:
            config_data: Base configuration dictionary from file

        Returns:
            Configuration dictionary with environment overrides applied
        """
        env_overrides = {
            ("ordering", "max_enumeration_nodes"): f"{ENV_PREFIX}ORDERING_MAX_NODES",
            ("ordering", "max_orders"): f"{ENV_PREFIX}ORDERING_MAX_ORDERS",
            ("ordering", "vertical_spacing"): f"{ENV_PREFIX}ORDERING_VERTICAL_SPACING",
            ("ordering", "horizontal_spacing"): f"{ENV_PREFIX}ORDERING_HORIZONTAL_SPACING",
            ("crypto", "primes"): f"{ENV_PREFIX}CRYPTO_PRIMES",
            ("logging_level",): f"{ENV_PREFIX}LOGGING_LEVEL",
            ("json_logs",): f"{ENV_PREFIX}JSON_LOGS",
        }

        for path, env_var in env_overrides.items():
            value = os.environ.get(env_var)
            if value is None:
                continue

            current = config_data
            for key in path[:-1]:
                if not isinstance(current.get(key), dict):
                    current[key] = {}
                current = current[key]

            # Convert string values to appropriate types
            if env_var.endswith(("_NODES", "_ORDERS")):
                value = int(value)
            elif env_var.endswith("_SPACING"):
                value = float(value)
            elif env_var.endswith("_PRIMES"):
                value = [int(part) for part in value.split(",") if part.strip()]
            elif env_var.endswith("_JSON_LOGS"):
                value = value.lower() in ("true", "1", "yes")
            else:
                value = value.upper()

            current[path[-1]] = value
            logger.debug(
                "env_override_applied",
                env_var=env_var,
                config_path=".".join(path),
            )

        return config_data

    def validate_config(self) -> list[str]:
        """Validate configuration and return list of warnings.

        Returns:
            List of validation warning messages (empty if no warnings)
        """
        warnings = []

        if self.ordering.max_enumeration_nodes > LARGE_ENUMERATION_THRESHOLD:
            warnings.append(
                f"Enumerating orders of up to {self.ordering.max_enumeration_nodes} "
                "independent instructions can produce millions of sequences",
            )

        if self.ordering.max_orders is None and self.ordering.max_enumeration_nodes > 0:
            warnings.append("No cap on the number of topological orders returned")

        if max(self.crypto.primes) < 11:  # noqa: PLR2004
            warnings.append("All key-exchange moduli are tiny - shared keys repeat often")

        return warnings


class ConfigManager:
    """Configuration manager using singleton pattern."""

    _instance: LabConfig | None = None
    _init_lock: threading.Lock = threading.Lock()

    @classmethod
    def load_config(cls, config_path: str | Path | None = None) -> LabConfig:
        """Load configuration from file.

        Args:
            config_path: Path to configuration file. If None, looks for
                discrete_lab.yaml/.yml/.json in the current directory and falls
                back to defaults when none exists.

        Returns:
            Loaded LabConfig instance

        Raises:
            FileNotFoundError: If an explicit config file is missing
            ValueError: If config file is invalid
        """
        if config_path is None:
            for default_name in DEFAULT_CONFIG_NAMES:
                default_path = Path(default_name)
                if default_path.exists():
                    config_path = default_path
                    break
            else:
                logger.debug("no_configuration_file_using_defaults")
                return LabConfig.from_env()

        return LabConfig.from_yaml(config_path)

    @classmethod
    def get_config(
        cls,
        config_path: str | Path | None = None,
        reload: bool = False,
    ) -> LabConfig:
        """Get configuration instance (singleton pattern).

        Args:
            config_path: Path to configuration file. Only used on first call or when reload=True.
            reload: If True, force reload configuration from file.

        Returns:
            LabConfig instance
        """
        if cls._instance is not None and not reload:
            return cls._instance

        with cls._init_lock:
            if cls._instance is None or reload:
                cls._instance = cls.load_config(config_path)

            return cls._instance

    @classmethod
    def reset_config(cls) -> None:
        """Reset the configuration instance."""
        cls._instance = None


def load_config(config_path: str | Path | None = None) -> LabConfig:
    """Load configuration from file."""
    return ConfigManager.load_config(config_path)


def get_config(config_path: str | Path | None = None, reload: bool = False) -> LabConfig:
    """Get configuration instance (singleton pattern)."""
    return ConfigManager.get_config(config_path, reload)


def reset_config() -> None:
    """Reset the configuration instance."""
    ConfigManager.reset_config()


__all__ = [
    "DEMO_PRIMES",
    "CryptoConfig",
    "LabConfig",
    "OrderingConfig",
    "get_config",
    "load_config",
    "reset_config",
]
