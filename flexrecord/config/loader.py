"""Configuration loader: defaults, then the YAML file, then explicit overrides."""

import importlib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..core.registry import TypeRegistry
from ..errors import ConfigurationError
from ..logging.config import configure_logging, get_logger
from .defaults import DefaultConfig, get_default_config

logger = get_logger(__name__)

CONFIG_FILENAME = "flexrecord.yaml"


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_path: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_path is None:
            config_path = Path(__file__).parent / CONFIG_FILENAME

        return cls(
            config_path=Path(config_path),
            defaults=get_default_config(),
        )

    def load_file(self) -> dict[str, Any]:
        """Load the YAML configuration file; a missing file is an empty config."""
        if not self.config_path.exists():
            return {}

        try:
            with open(self.config_path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in {self.config_path}: {e}",
                context={"path": str(self.config_path)},
            ) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"{self.config_path} must contain a mapping at the top level",
                context={"path": str(self.config_path)},
            )
        return data

    def merge_config(
        self,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides (highest priority)
        2. Configuration file
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)
        config = self._deep_merge(config, self.load_file())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def build_type_registry(
        self,
        config: Optional[dict[str, Any]] = None
    ) -> Optional[TypeRegistry]:
        """
        Build a TypeRegistry from the "types" section.

        Each entry maps a wire name to "package.module:ContractName". Returns
        None when no types are configured.
        """
        if config is None:
            config = self.merge_config()

        types = config.get("types") or {}
        if not types:
            return None

        builder = TypeRegistry.builder()
        for name, reference in types.items():
            builder.register(name, self._import_contract(name, reference))
        return builder.build()

    def apply_logging(self, config: Optional[dict[str, Any]] = None) -> None:
        """Configure structlog from the "logging" section."""
        if config is None:
            config = self.merge_config()
        configure_logging(**config.get("logging", {}))

    def _import_contract(self, name: str, reference: Any) -> type:
        if not isinstance(reference, str) or reference.count(":") != 1:
            raise ConfigurationError(
                f"Type '{name}' must be given as 'module:ContractName'",
                context={"name": name, "reference": reference},
            )

        module_name, _, attribute = reference.partition(":")
        try:
            module = importlib.import_module(module_name)
            contract = getattr(module, attribute)
        except (ImportError, AttributeError) as e:
            raise ConfigurationError(
                f"Cannot import contract {reference} for type '{name}': {e}",
                context={"name": name, "reference": reference},
            ) from e

        logger.debug("Contract imported from configuration", name=name, reference=reference)
        return contract  # type: ignore[no-any-return]

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                elif isinstance(value, dict):
                    result[field_name] = dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
