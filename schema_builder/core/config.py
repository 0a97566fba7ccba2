"""
Schema Builder Configuration
============================

Configuration management for the schema builder.

Looked up, in order, in:
- .schema-builder.yaml
- .schema-builder.yml
- pyproject.toml ([tool.schema-builder] section)
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = (".schema-builder.yaml", ".schema-builder.yml")
PYPROJECT_SECTION = "schema-builder"


class DuplicateGuardPolicy(str, Enum):
    """What to do when two guards register under the same id."""

    OVERWRITE = "overwrite"  # Last write wins, logged as a warning
    ERROR = "error"  # Raise DuplicateGuardError


@dataclass
class BuilderConfig:
    """Main schema builder configuration."""
    project_name: str = "schema-builder"
    duplicate_guards: DuplicateGuardPolicy = DuplicateGuardPolicy.OVERWRITE
    indent: str = "  "
    verbose: bool = False
    debug: bool = False
    project_root: Path = field(default_factory=lambda: Path.cwd())

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "BuilderConfig":
        """Load configuration from file."""
        if config_path is None:
            # Look for config in standard locations
            candidates = [Path.cwd() / name for name in CONFIG_FILENAMES]
            candidates.append(Path.cwd() / "pyproject.toml")
            for candidate in candidates:
                if candidate.exists():
                    config_path = candidate
                    break

        if config_path is None or not config_path.exists():
            return cls()

        if config_path.suffix in (".yaml", ".yml"):
            return cls._load_yaml(config_path)
        elif config_path.name == "pyproject.toml":
            return cls._load_pyproject(config_path)

        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any], project_root: Optional[Path] = None) -> "BuilderConfig":
        """Build a config from a parsed mapping."""
        return cls(
            project_name=data.get("project_name", "schema-builder"),
            duplicate_guards=DuplicateGuardPolicy(
                data.get("duplicate_guards", DuplicateGuardPolicy.OVERWRITE.value)
            ),
            indent=" " * int(data.get("indent", 2)),
            verbose=data.get("verbose", False),
            debug=data.get("debug", False),
            project_root=project_root or Path.cwd(),
        )

    @classmethod
    def _load_yaml(cls, path: Path) -> "BuilderConfig":
        """Load from YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
            return cls.from_dict(data, project_root=path.parent)
        except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
            logger.warning("Could not load config from %s: %s", path, e)
            return cls()

    @classmethod
    def _load_pyproject(cls, path: Path) -> "BuilderConfig":
        """Load from pyproject.toml [tool.schema-builder] section."""
        import toml

        try:
            data = toml.load(path)
            section = data.get("tool", {}).get(PYPROJECT_SECTION, {})
            if not section:
                return cls()
            return cls.from_dict(section, project_root=path.parent)
        except (OSError, toml.TomlDecodeError, ValueError, TypeError) as e:
            logger.warning("Could not load config from %s: %s", path, e)
            return cls()

    def save(self, path: Optional[Path] = None) -> Path:
        """Save configuration to file."""
        path = path or (self.project_root / CONFIG_FILENAMES[0])

        data = {
            "project_name": self.project_name,
            "duplicate_guards": self.duplicate_guards.value,
            "indent": len(self.indent),
            "verbose": self.verbose,
            "debug": self.debug,
        }

        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False)
        return path


# Global config instance
_config: Optional[BuilderConfig] = None


def get_config() -> BuilderConfig:
    """Get or load global configuration."""
    global _config
    if _config is None:
        _config = BuilderConfig.load()
    return _config


def set_config(config: Optional[BuilderConfig]) -> None:
    """Set global configuration. Passing None forces a reload on next access."""
    global _config
    _config = config
